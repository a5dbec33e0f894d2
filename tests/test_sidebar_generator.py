"""End-to-end tests for sidebar generation and its exit status."""

from pathlib import Path

import pytest

from docwright.errors import ConfigurationError
from docwright.sidebar.generator import generate_sidebar, main, run_sidebar
from docwright.sidebar.models import DEFAULT_IGNORE_PATTERNS, SidebarConfig


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    for rel in ["index.md", "intro.md", "guide/01. setup.md", "guide/faq.md", "api-reference/users.md"]:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("# page\n")
    return root


def _config(docs: Path) -> SidebarConfig:
    return SidebarConfig(
        docs_root=docs, output_path=docs / ".vitepress" / "sidebar-auto.ts"
    )


class TestSidebarConfig:
    """Tests for SidebarConfig defaults and overrides."""

    def test_defaults(self) -> None:
        config = SidebarConfig()
        assert config.docs_root == Path("docs")
        assert config.output_path == Path("docs/.vitepress/sidebar-auto.ts")
        assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS
        assert config.sort_by_prefix is True

    def test_overrides_subset(self) -> None:
        config = SidebarConfig().with_overrides(docs_root="site", sort_by_prefix=False)
        assert config.docs_root == Path("site")
        assert config.sort_by_prefix is False
        assert config.output_path == Path("docs/.vitepress/sidebar-auto.ts")

    def test_none_overrides_skipped(self) -> None:
        assert SidebarConfig().with_overrides(docs_root=None) == SidebarConfig()

    def test_unknown_override(self) -> None:
        with pytest.raises(TypeError):
            SidebarConfig().with_overrides(colour="red")

    def test_immutable(self) -> None:
        config = SidebarConfig()
        with pytest.raises(AttributeError):
            config.sort_by_prefix = False  # type: ignore[misc]


class TestGenerateSidebar:
    """Tests for generate_sidebar."""

    def test_writes_file(self, docs: Path) -> None:
        config = _config(docs)
        sidebar = generate_sidebar(config)

        assert [g.text for g in sidebar] == ["General", "Api Reference", "Guide"]
        content = config.output_path.read_text(encoding="utf-8")
        assert '"link": "/guide/01. setup"' in content
        assert '"link": "/index"' not in content

    def test_idempotent(self, docs: Path) -> None:
        config = _config(docs)
        generate_sidebar(config)
        first = config.output_path.read_bytes()
        generate_sidebar(config)
        assert config.output_path.read_bytes() == first

    def test_rebuilds_after_removal(self, docs: Path) -> None:
        config = _config(docs)
        generate_sidebar(config)
        (docs / "guide" / "faq.md").unlink()
        generate_sidebar(config)
        assert "faq" not in config.output_path.read_text(encoding="utf-8")

    def test_empty_docs_root(self, tmp_path: Path) -> None:
        config = SidebarConfig(docs_root=tmp_path, output_path=tmp_path / "out" / "s.ts")
        assert generate_sidebar(config) == []
        assert config.output_path.read_text().endswith("= [];\n")

    def test_missing_root_writes_nothing(self, tmp_path: Path) -> None:
        out = tmp_path / "out.ts"
        config = SidebarConfig(docs_root=tmp_path / "missing", output_path=out)
        with pytest.raises(ConfigurationError):
            generate_sidebar(config)
        assert not out.exists()


class TestRunSidebar:
    """Tests for the exit-status boundary."""

    def test_success(self, docs: Path, capsys: pytest.CaptureFixture) -> None:
        assert run_sidebar(_config(docs)) == 0
        assert "3 groups, 4 items" in capsys.readouterr().out

    def test_configuration_failure(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        config = SidebarConfig(docs_root=tmp_path / "missing", output_path=tmp_path / "o.ts")
        assert run_sidebar(config) == 1
        err = capsys.readouterr().err
        assert "Invalid sidebar configuration" in err
        assert "does not exist" in err

    def test_io_failure(self, docs: Path, capsys: pytest.CaptureFixture) -> None:
        blocker = docs.parent / "blocker"
        blocker.write_text("x")
        config = SidebarConfig(docs_root=docs, output_path=blocker / "sidebar.ts")
        assert run_sidebar(config) == 1
        err = capsys.readouterr().err
        assert "Could not write sidebar file" in err
        assert "Caused by" in err


class TestMain:
    """Tests for the standalone script entry point."""

    def test_default_settings_with_progress_logging(
        self,
        docs: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
    ) -> None:
        monkeypatch.chdir(docs.parent)
        assert main() == 0

        captured = capsys.readouterr()
        assert "3 groups, 4 items" in captured.out
        assert "Scanning" in captured.err
        assert "Sidebar generation completed successfully" in captured.err
        assert (docs / ".vitepress" / "sidebar-auto.ts").exists()

    def test_missing_docs_root(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert main() == 1
