"""
cudakit CLI module.

This module provides the command-line interface for cudakit.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
