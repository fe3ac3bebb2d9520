"""
Convenience entry point for running weekslots directly.

Usage: python -m weekslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
