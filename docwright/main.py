"""Entry point for docwright.

Delegates to the Click command group, which loads configuration and
sets up logging before running a subcommand.
"""

from docwright.cli.commands import docwright


def main() -> None:
    """Run the docwright CLI."""
    docwright(prog_name="docwright")


if __name__ == "__main__":
    main()
