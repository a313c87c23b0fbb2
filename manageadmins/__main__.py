"""Main entry point when executing manageadmins as a package.

This allows running the package using python -m manageadmins.
"""

from manageadmins.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
