# lang_mustache/main.py
"""Main entry point for the lang-mustache CLI application."""

from lang_mustache.cli.interface import main_cli_group


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli_group(prog_name="lang-mustache")

if __name__ == '__main__':
    entrypoint()
