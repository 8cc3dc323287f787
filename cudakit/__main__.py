"""
Entry point for running cudakit CLI as a module.

Usage: python -m cudakit [command] [options]
"""

from cudakit.cli.parser import main

if __name__ == "__main__":
    main()
