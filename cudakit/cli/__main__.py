"""
Entry point for running cudakit CLI as a module.

Usage: python -m cudakit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
