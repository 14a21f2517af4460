"""
Entry point for running arsenal as a module.

Usage:
    python -m arsenal sync
    python -m arsenal --help
"""
from .cli.main import run

if __name__ == "__main__":
    run()
