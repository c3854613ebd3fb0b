"""
Main entry point for the bnfmatch CLI when run as a module.

    python -m bnfmatch.cli
"""

from . import run

if __name__ == '__main__':
    run()
