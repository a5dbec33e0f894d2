"""Grouping and ordering of scanned documents into a sidebar structure."""

import locale
import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable

from docwright.sidebar.models import (
    SidebarConfig,
    SidebarGroup,
    SidebarItem,
    SidebarStructure,
)
from docwright.sidebar.scanner import scan_docs
from docwright.sidebar.titles import (
    dir_to_group_title,
    extract_numeric_prefix,
    file_to_title,
    strip_extension,
)

logger = logging.getLogger(__name__)

UNGROUPED = ""


@dataclass(frozen=True)
class FileEntry:
    """A scanned file with the data needed to place it in the sidebar.

    Attributes:
        relative_path: POSIX path relative to the docs root.
        group_key: First path segment, or ``""`` for root-level files.
        file_name: The file's base name including its extension.
        link: Site-relative link, e.g. ``"/guide/install"``.
    """

    relative_path: str
    group_key: str
    file_name: str
    link: str

    @classmethod
    def from_path(cls, relative_path: str) -> "FileEntry":
        parts = PurePosixPath(relative_path).parts
        group_key = parts[0] if len(parts) > 1 else UNGROUPED
        posix = "/".join(parts)
        return cls(
            relative_path=posix,
            group_key=group_key,
            file_name=parts[-1],
            link="/" + strip_extension(posix),
        )

    def to_item(self) -> SidebarItem:
        return SidebarItem(text=file_to_title(self.file_name), link=self.link)


def group_files(paths: Iterable[str]) -> dict[str, list[FileEntry]]:
    """Group relative file paths by their top-level directory.

    Args:
        paths: Relative POSIX paths as returned by the scanner.

    Returns:
        Mapping of group key to entries, in first-seen order.
    """
    groups: dict[str, list[FileEntry]] = {}
    for path in paths:
        entry = FileEntry.from_path(path)
        groups.setdefault(entry.group_key, []).append(entry)
    return groups


def sort_items(entries: list[FileEntry], sort_by_prefix: bool) -> list[SidebarItem]:
    """Build the items of one group, ordered by numeric prefix then title.

    Items whose file name starts with ``<digits>.`` come first in
    ascending numeric order; the rest follow in collation order of their
    title. When ``sort_by_prefix`` is False the scan order is kept.
    """
    if not sort_by_prefix:
        return [entry.to_item() for entry in entries]

    keyed = []
    for entry in entries:
        item = entry.to_item()
        key = (extract_numeric_prefix(entry.file_name), locale.strxfrm(item.text))
        keyed.append((key, item))
    keyed.sort(key=lambda pair: pair[0])
    return [item for _, item in keyed]


def sort_groups(groups: dict[str, SidebarGroup]) -> SidebarStructure:
    """Order groups with "General" pinned first, the rest by title."""
    ordered = sorted(
        groups.items(),
        key=lambda kv: (kv[0] != UNGROUPED, locale.strxfrm(kv[1].text)),
    )
    return [group for _, group in ordered]


def build_sidebar_structure(config: SidebarConfig) -> SidebarStructure:
    """Scan the docs root and build the complete sidebar structure.

    Args:
        config: Settings for this run.

    Returns:
        The ordered list of sidebar groups; empty when no files matched.

    Raises:
        ConfigurationError: If the docs root is not a usable directory.
    """
    files = scan_docs(config)

    groups: dict[str, SidebarGroup] = {}
    for key, entries in group_files(files).items():
        groups[key] = SidebarGroup(
            text=dir_to_group_title(key),
            items=sort_items(entries, config.sort_by_prefix),
            collapsed=False,
        )

    sidebar = sort_groups(groups)
    logger.debug("Built %d sidebar groups from %d files", len(sidebar), len(files))
    return sidebar
