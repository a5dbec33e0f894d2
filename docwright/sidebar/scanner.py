"""Directory scanning for markdown documentation sources."""

import fnmatch
import logging
from pathlib import Path, PurePosixPath
from typing import Iterable

from docwright.errors import ConfigurationError
from docwright.sidebar.models import SidebarConfig
from docwright.sidebar.titles import DOC_EXTENSION

logger = logging.getLogger(__name__)


def validate_directory(dir_path: Path) -> None:
    """Check that a directory exists and is a directory.

    Args:
        dir_path: The directory to validate.

    Raises:
        ConfigurationError: If the path is missing or not a directory.
    """
    if not dir_path.exists():
        raise ConfigurationError(f"Directory does not exist: {dir_path}")
    if not dir_path.is_dir():
        raise ConfigurationError(f"Path is not a directory: {dir_path}")


def _matches(rel_path: str, pattern: str) -> bool:
    path = PurePosixPath(rel_path)

    if pattern.startswith("**/"):
        tail = pattern[3:]
        return _matches(rel_path, tail) or fnmatch.fnmatchcase(rel_path, pattern)

    if pattern.endswith("/**"):
        dir_pattern = pattern[:-3]
        parents = path.parts[:-1]
        return any(
            fnmatch.fnmatchcase("/".join(parents[: i + 1]), dir_pattern)
            for i in range(len(parents))
        )

    return fnmatch.fnmatchcase(rel_path, pattern)


def is_ignored(rel_path: str, patterns: Iterable[str]) -> bool:
    """Return True if a relative POSIX path matches any ignore pattern.

    Patterns match the whole path from the docs root, so ``index.md``
    only excludes the root page. ``dir/**`` excludes everything below a
    matching directory and a leading ``**/`` matches at any depth.
    """
    return any(_matches(rel_path, pattern) for pattern in patterns)


def _is_hidden(rel_path: PurePosixPath) -> bool:
    return any(part.startswith(".") for part in rel_path.parts)


def scan_docs(config: SidebarConfig) -> list[str]:
    """Collect markdown files below the docs root.

    Args:
        config: Sidebar settings providing the root and ignore patterns.

    Returns:
        Relative POSIX paths of the matching files. Empty when nothing
        matched, in which case a warning is logged.

    Raises:
        ConfigurationError: If the docs root is not a usable directory.
    """
    root = config.docs_root
    validate_directory(root)

    files = []
    for path in sorted(root.rglob(f"*{DOC_EXTENSION}")):
        if not path.is_file():
            continue
        relative = PurePosixPath(path.relative_to(root).as_posix())
        if _is_hidden(relative):
            continue
        if is_ignored(str(relative), config.ignore_patterns):
            logger.debug("Ignoring %s", relative)
            continue
        files.append(str(relative))

    if not files:
        logger.warning("No markdown files found in %s", root)
    else:
        logger.debug("Found %d markdown files in %s", len(files), root)
    return files
