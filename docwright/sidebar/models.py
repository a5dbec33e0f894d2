"""Data structures for the generated documentation sidebar.

These models mirror the shape VitePress expects for
``DefaultTheme.Sidebar``: an array of groups, each holding items with
``text`` and ``link`` keys.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "index.md",
    "README.md",
    "node_modules/**",
    ".vitepress/**",
    "scripts/**",
)


@dataclass(frozen=True)
class SidebarConfig:
    """Settings for one sidebar generation run.

    Attributes:
        docs_root: Directory holding the markdown sources.
        output_path: Path of the generated TypeScript file.
        ignore_patterns: Glob patterns excluded from the scan.
        sort_by_prefix: Order items by their numeric file-name prefix.
    """

    docs_root: Path = Path("docs")
    output_path: Path = Path("docs/.vitepress/sidebar-auto.ts")
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    sort_by_prefix: bool = True

    def with_overrides(self, **overrides: Any) -> "SidebarConfig":
        """Return a copy with the given fields replaced.

        ``None`` values are skipped so optional CLI flags can be passed
        straight through.

        Raises:
            TypeError: If an override names an unknown field.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        if "docs_root" in values:
            values["docs_root"] = Path(values["docs_root"])
        if "output_path" in values:
            values["output_path"] = Path(values["output_path"])
        if "ignore_patterns" in values:
            values["ignore_patterns"] = tuple(values["ignore_patterns"])
        return replace(self, **values)


@dataclass
class SidebarItem:
    """One navigable document."""

    text: str
    link: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "link": self.link}


@dataclass
class SidebarGroup:
    """A navigation section built from one top-level directory."""

    text: str
    items: list[SidebarItem] = field(default_factory=list)
    collapsed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "items": [item.to_dict() for item in self.items],
            "collapsed": self.collapsed,
        }


SidebarStructure = list[SidebarGroup]
