"""Main entry point when executing shopgen as a package.

This allows running the package using python -m shopgen.
"""

from shopgen.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
