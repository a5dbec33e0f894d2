"""Tests for sidebar serialization and file writing."""

import json
import os
from pathlib import Path

import pytest

from docwright.errors import ErrorKind, SidebarIOError
from docwright.sidebar.models import SidebarGroup, SidebarItem
from docwright.sidebar.writer import count_items, render_sidebar, write_sidebar_file


@pytest.fixture
def sidebar() -> list[SidebarGroup]:
    return [
        SidebarGroup(text="General", items=[SidebarItem(text="intro", link="/intro")]),
        SidebarGroup(
            text="Guide",
            items=[
                SidebarItem(text="setup", link="/guide/01. setup"),
                SidebarItem(text="Überblick", link="/guide/Überblick"),
            ],
        ),
    ]


def _payload(content: str) -> list:
    start = content.index("= ") + 2
    return json.loads(content[start:].rstrip().rstrip(";"))


class TestRenderSidebar:
    """Tests for render_sidebar."""

    def test_header(self, sidebar: list[SidebarGroup]) -> None:
        content = render_sidebar(sidebar)
        lines = content.splitlines()
        assert lines[0].startswith("// This file is auto-generated")
        assert "DO NOT EDIT MANUALLY" in lines[1]
        assert "import type { DefaultTheme } from 'vitepress';" in content
        assert "export const autoSidebar: DefaultTheme.Sidebar = [" in content
        assert content.endswith("];\n")

    def test_payload_shape(self, sidebar: list[SidebarGroup]) -> None:
        data = _payload(render_sidebar(sidebar))
        assert data[1] == {
            "text": "Guide",
            "items": [
                {"text": "setup", "link": "/guide/01. setup"},
                {"text": "Überblick", "link": "/guide/Überblick"},
            ],
            "collapsed": False,
        }

    def test_key_order_and_indent(self, sidebar: list[SidebarGroup]) -> None:
        content = render_sidebar(sidebar)
        assert '[\n  {\n    "text": "General",\n    "items": [\n' in content
        assert content.index('"items"') < content.index('"collapsed"')

    def test_non_ascii_kept(self, sidebar: list[SidebarGroup]) -> None:
        assert "Überblick" in render_sidebar(sidebar)

    def test_empty_structure(self) -> None:
        content = render_sidebar([])
        assert content.endswith("export const autoSidebar: DefaultTheme.Sidebar = [];\n")


class TestWriteSidebarFile:
    """Tests for write_sidebar_file."""

    def test_creates_parent_directories(
        self, tmp_path: Path, sidebar: list[SidebarGroup]
    ) -> None:
        out = tmp_path / "docs" / ".vitepress" / "sidebar-auto.ts"
        write_sidebar_file(sidebar, out)
        assert out.read_text(encoding="utf-8") == render_sidebar(sidebar)

    def test_overwrites_existing(
        self, tmp_path: Path, sidebar: list[SidebarGroup]
    ) -> None:
        out = tmp_path / "sidebar.ts"
        out.write_text("old content")
        write_sidebar_file(sidebar, out)
        assert "old content" not in out.read_text(encoding="utf-8")

    def test_no_temp_files_left(
        self, tmp_path: Path, sidebar: list[SidebarGroup]
    ) -> None:
        write_sidebar_file(sidebar, tmp_path / "sidebar.ts")
        assert [p.name for p in tmp_path.iterdir()] == ["sidebar.ts"]

    def test_parent_is_file(self, tmp_path: Path, sidebar: list[SidebarGroup]) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(SidebarIOError) as exc:
            write_sidebar_file(sidebar, blocker / "sidebar.ts")
        assert exc.value.kind is ErrorKind.IO
        assert isinstance(exc.value.cause, OSError)

    def test_error_is_an_os_error(
        self, tmp_path: Path, sidebar: list[SidebarGroup]
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(IOError) as exc:
            write_sidebar_file(sidebar, blocker / "sidebar.ts")
        assert isinstance(exc.value, SidebarIOError)
        assert str(exc.value) == exc.value.message

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unwritable_directory_keeps_old_file(
        self, tmp_path: Path, sidebar: list[SidebarGroup]
    ) -> None:
        out_dir = tmp_path / "locked"
        out_dir.mkdir()
        out = out_dir / "sidebar.ts"
        out.write_text("previous")
        out_dir.chmod(0o500)
        try:
            with pytest.raises(SidebarIOError):
                write_sidebar_file(sidebar, out)
            assert out.read_text() == "previous"
        finally:
            out_dir.chmod(0o700)

    def test_count_items(self, sidebar: list[SidebarGroup]) -> None:
        assert count_items(sidebar) == 3
