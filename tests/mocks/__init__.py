"""
Mock implementations for testing cudakit components.

This package provides mock implementations of the filesystem and process
collaborators so discovery can be tested without a real CUDA installation.
"""

from .filesystem import MockFilesystem
from .process import ScriptedRunner

__all__ = [
    "MockFilesystem",
    "ScriptedRunner",
]
