"""
Main entry point for the invariant-text CLI.

This module is executed when running `python -m invariant_text` or via the
`invariant-text` executable.
"""

from .cli import app


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
