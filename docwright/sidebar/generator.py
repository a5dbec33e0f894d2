"""Sidebar generation pipeline and its command-line reporting boundary.

Scans the docs root, groups and orders the markdown files, and writes
the VitePress sidebar module. Run directly with
``python -m docwright.sidebar.generator`` to use the default settings.
"""

import locale
import logging
import sys
from typing import Optional

import click

from docwright.errors import ErrorKind, SidebarError
from docwright.sidebar.builder import build_sidebar_structure
from docwright.sidebar.models import SidebarConfig, SidebarStructure
from docwright.sidebar.writer import count_items, write_sidebar_file
from docwright.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def generate_sidebar(config: Optional[SidebarConfig] = None) -> SidebarStructure:
    """Build the sidebar structure and write it to the configured path.

    Args:
        config: Settings for this run. Uses defaults if not provided.

    Returns:
        The sidebar structure that was written.

    Raises:
        ConfigurationError: If the docs root is missing or not a directory.
        SidebarIOError: If the output file cannot be written.
    """
    config = config or SidebarConfig()

    logger.info("Scanning for markdown files in %s", config.docs_root)
    sidebar = build_sidebar_structure(config)

    logger.info("Writing sidebar configuration...")
    write_sidebar_file(sidebar, config.output_path)

    logger.info("Sidebar generation completed successfully")
    return sidebar


def use_locale_collation() -> None:
    """Sort titles using the collation rules of the user's locale."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.debug("Falling back to default collation: %s", e)


def _describe(error: SidebarError) -> str:
    if error.kind is ErrorKind.CONFIGURATION:
        return "Invalid sidebar configuration"
    if error.kind is ErrorKind.IO:
        return "Could not write sidebar file"
    raise AssertionError(f"Unhandled error kind: {error.kind}")


def run_sidebar(config: Optional[SidebarConfig] = None) -> int:
    """Run sidebar generation and translate failures into an exit status.

    Args:
        config: Settings for this run. Uses defaults if not provided.

    Returns:
        0 on success, 1 if generation failed.
    """
    try:
        sidebar = generate_sidebar(config)
    except SidebarError as e:
        click.echo(f"Error generating sidebar: {_describe(e)}", err=True)
        click.echo(f"   {e.message}", err=True)
        if e.cause is not None:
            click.echo(f"   Caused by: {e.cause!r}", err=True)
        logger.debug("Sidebar generation failed", exc_info=True)
        return 1

    click.echo(f"Sidebar written: {len(sidebar)} groups, {count_items(sidebar)} items")
    return 0


def main() -> int:
    """Generate the sidebar with default settings, as a standalone script."""
    setup_logging()
    use_locale_collation()
    return run_sidebar()


if __name__ == "__main__":
    sys.exit(main())
