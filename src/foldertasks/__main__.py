"""Main entry point for foldertasks CLI.

Supports both direct invocation (`python -m foldertasks`) and package entry point.
"""

from foldertasks.cli import cli

if __name__ == "__main__":
    cli()
