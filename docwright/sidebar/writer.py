"""Serialization of the sidebar structure to a VitePress TypeScript module."""

import json
import logging
import os
import tempfile
from pathlib import Path

from docwright.errors import SidebarIOError
from docwright.sidebar.models import SidebarStructure

logger = logging.getLogger(__name__)

_HEADER = """\
// This file is auto-generated by docwright
// DO NOT EDIT MANUALLY - your changes will be overwritten!

import type { DefaultTheme } from 'vitepress';

"""


def render_sidebar(sidebar: SidebarStructure) -> str:
    """Render the sidebar as the contents of a TypeScript module.

    Args:
        sidebar: The ordered sidebar groups.

    Returns:
        Source text exporting ``autoSidebar``.
    """
    payload = json.dumps(
        [group.to_dict() for group in sidebar], indent=2, ensure_ascii=False
    )
    return f"{_HEADER}export const autoSidebar: DefaultTheme.Sidebar = {payload};\n"


def count_items(sidebar: SidebarStructure) -> int:
    return sum(len(group.items) for group in sidebar)


def write_sidebar_file(sidebar: SidebarStructure, output_path: Path) -> None:
    """Write the rendered sidebar to disk, replacing any previous file.

    Missing parent directories are created. The content goes to a
    temporary file in the target directory first and is then moved into
    place, so a failed run never leaves a partial file behind.

    Args:
        sidebar: The ordered sidebar groups.
        output_path: Destination file path.

    Raises:
        SidebarIOError: If the directory or file cannot be written.
    """
    content = render_sidebar(sidebar)
    output_path = Path(output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise SidebarIOError(
            f"Failed to write sidebar file {output_path}: {e.strerror or e}", cause=e
        ) from e

    logger.info("Sidebar configuration generated: %s", output_path)
    logger.info("Total groups: %d", len(sidebar))
    logger.info("Total items: %d", count_items(sidebar))
