"""Template manager for loading and rendering Jinja2 prompt templates.

Provides a centralized interface for rendering the prompts sent by the
check, changeset, readme and documentation commands.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent.parent / "templates"

# Diffs larger than this are truncated before being sent to the model.
MAX_DIFF_CHARS = 60_000


def truncate(text: str, limit: int = MAX_DIFF_CHARS) -> str:
    """Cut text to ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + f"\n... [truncated {len(text) - limit} characters]\n"


class TemplateManager:
    """Loads and renders Jinja2 prompt templates.

    Templates are loaded from a configurable directory and rendered
    with data gathered by the generators.
    """

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the template manager.

        Args:
            templates_dir: Path to the templates directory. Uses the
                default templates/ directory if not specified.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self._templates_path.exists():
            logger.warning("Templates directory not found: %s", self._templates_path)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_path)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["truncate_diff"] = truncate

    def render_check_prompt(self, diff: str, files: Optional[list[str]] = None) -> str:
        """Render the code review prompt for a staged diff."""
        return self._render("check.j2", diff=diff, files=files or [])

    def render_changeset_prompt(
        self,
        diff: str,
        package_name: str,
        bump: Optional[str] = None,
    ) -> str:
        """Render the changeset summary prompt.

        Args:
            diff: The diff to summarise.
            package_name: Name of the package being released.
            bump: A bump level chosen by the user, if any.
        """
        return self._render(
            "changeset.j2", diff=diff, package_name=package_name, bump=bump
        )

    def render_readme_prompt(
        self,
        project_name: str,
        description: Optional[str] = None,
        entry_points: Optional[list[str]] = None,
        dependencies: Optional[list[str]] = None,
        structure: Optional[str] = None,
        docs_pages: Optional[list[str]] = None,
    ) -> str:
        """Render a README generation prompt.

        Args:
            project_name: Name of the project.
            description: Optional project description.
            entry_points: Optional list of entry point files.
            dependencies: Optional list of project dependencies.
            structure: Optional project directory structure string.
            docs_pages: Optional list of existing documentation pages.

        Returns:
            Rendered prompt string ready for submission.
        """
        return self._render(
            "readme.j2",
            project_name=project_name,
            description=description,
            entry_points=entry_points or [],
            dependencies=dependencies or [],
            structure=structure,
            docs_pages=docs_pages or [],
        )

    def render_documentation_prompt(
        self, file_path: str, source: str, language: str
    ) -> str:
        """Render the prompt asking for a documentation page of one file."""
        return self._render(
            "documentation.j2", file_path=file_path, source=source, language=language
        )

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render a template with the given context variables.

        Raises:
            TemplateNotFound: If the template file does not exist.
        """
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered

    def list_templates(self) -> list[str]:
        """List all available template files."""
        return self._env.list_templates()
