"""README generation for projects using AI analysis.

Gathers project metadata (manifests, entry points, directory tree and
existing documentation pages) and generates a README.md via the AI
client.
"""

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from docwright.generators.ai_client import AIClient
from docwright.generators.template_manager import TemplateManager
from docwright.sidebar.models import SidebarConfig
from docwright.sidebar.scanner import scan_docs

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a technical writer creating a README.md for an open-source project. "
    "Write clear, professional documentation in Markdown format. "
    "Include realistic code examples and a well-organized structure. "
    "Return only the Markdown content without any wrapper."
)

_ENTRY_POINT_NAMES = {
    "main.py",
    "app.py",
    "cli.py",
    "__main__.py",
    "index.js",
    "index.ts",
    "main.ts",
}

_TREE_EXCLUDE = {"__pycache__", "node_modules", "venv", "dist", "build"}


@dataclass
class ProjectInfo:
    """Aggregated metadata about a project for README generation.

    Attributes:
        name: Project name.
        description: Short project description.
        root_path: Root directory of the project.
        entry_points: Main entry point files.
        dependencies: List of project dependencies.
        structure: Directory tree string.
        docs_pages: Links of existing markdown pages under docs/.
    """

    name: str
    description: str = ""
    root_path: str = ""
    entry_points: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    structure: str = ""
    docs_pages: list[str] = field(default_factory=list)


class ReadmeGenerator:
    """Generates README.md files from project analysis."""

    def __init__(
        self,
        client: AIClient,
        template_manager: Optional[TemplateManager] = None,
        docs_dir: str = "docs",
    ) -> None:
        """Initialize the README generator.

        Args:
            client: The AI client for API calls.
            template_manager: Template manager for prompts.
            docs_dir: Documentation directory, relative to the project.
        """
        self.client = client
        self.templates = template_manager or TemplateManager()
        self.docs_dir = docs_dir

    def analyze_project(self, project_path: str) -> ProjectInfo:
        """Analyze a project directory and gather metadata.

        Args:
            project_path: Path to the project root directory.

        Returns:
            A ProjectInfo with all gathered metadata.

        Raises:
            FileNotFoundError: If the project path does not exist.
        """
        root = Path(project_path)
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {project_path}")

        logger.info("Analyzing project at %s", root)
        name, description = self._read_identity(root)

        return ProjectInfo(
            name=name,
            description=description,
            root_path=str(root),
            entry_points=self._find_entry_points(root),
            dependencies=self._read_dependencies(root),
            structure=self._build_tree(root),
            docs_pages=self._list_docs_pages(root),
        )

    def generate_readme(self, project_info: ProjectInfo) -> str:
        """Generate README content from project information."""
        prompt = self.templates.render_readme_prompt(
            project_name=project_info.name,
            description=project_info.description,
            entry_points=project_info.entry_points,
            dependencies=project_info.dependencies,
            structure=project_info.structure,
            docs_pages=project_info.docs_pages,
        )

        completion = self.client.complete(prompt, system=_SYSTEM_PROMPT)
        logger.info(
            "Generated README for %s (%d tokens)",
            project_info.name,
            completion.usage.total_tokens,
        )
        return completion.text

    def _read_identity(self, root: Path) -> tuple[str, str]:
        package_json = self._load_package_json(root)
        if package_json.get("name"):
            return package_json["name"], package_json.get("description", "")

        project = self._load_pyproject(root).get("project", {})
        if project.get("name"):
            return project["name"], project.get("description", "")

        return root.resolve().name, ""

    def _read_dependencies(self, root: Path) -> list[str]:
        """Read dependencies from requirements.txt, package.json and pyproject.toml."""
        deps: list[str] = []

        req_file = root / "requirements.txt"
        if req_file.exists():
            for line in req_file.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and not line.startswith(("#", "-")):
                    deps.append(line)

        package_json = self._load_package_json(root)
        for name, version in package_json.get("dependencies", {}).items():
            deps.append(f"{name}@{version}")

        deps.extend(self._load_pyproject(root).get("project", {}).get("dependencies", []))
        return deps

    def _find_entry_points(self, root: Path) -> list[str]:
        entry_points = []
        for path in sorted(root.rglob("*")):
            if path.name not in _ENTRY_POINT_NAMES or not path.is_file():
                continue
            relative = path.relative_to(root)
            if any(part in _TREE_EXCLUDE or part.startswith(".") for part in relative.parts):
                continue
            entry_points.append(relative.as_posix())
        return entry_points

    def _list_docs_pages(self, root: Path) -> list[str]:
        docs_root = root / self.docs_dir
        if not docs_root.is_dir():
            return []
        return scan_docs(SidebarConfig(docs_root=docs_root))

    @staticmethod
    def _load_package_json(root: Path) -> dict:
        path = root / "package.json"
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Could not parse %s: %s", path, e)
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _load_pyproject(root: Path) -> dict:
        path = root / "pyproject.toml"
        if not path.exists():
            return {}
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning("Could not parse %s: %s", path, e)
            return {}

    def _build_tree(self, root: Path, max_depth: int = 3) -> str:
        """Build a directory tree string representation."""
        lines = [f"{root.resolve().name}/"]
        self._tree_walk(root, "", lines, 0, max_depth)
        return "\n".join(lines)

    def _tree_walk(
        self,
        directory: Path,
        prefix: str,
        lines: list[str],
        depth: int,
        max_depth: int,
    ) -> None:
        if depth >= max_depth:
            return

        entries = sorted(
            [
                e
                for e in directory.iterdir()
                if e.name not in _TREE_EXCLUDE and not e.name.startswith(".")
            ],
            key=lambda e: (e.is_file(), e.name),
        )

        for i, entry in enumerate(entries):
            is_last = i == len(entries) - 1
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{entry.name}")

            if entry.is_dir():
                extension = "    " if is_last else "│   "
                self._tree_walk(entry, prefix + extension, lines, depth + 1, max_depth)
