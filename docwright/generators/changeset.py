"""Changeset generation for the ``changeset`` command.

Summarises a diff with the model and writes a file in the format read
by the ``@changesets/cli`` release tooling::

    ---
    "package-name": minor
    ---

    Summary of the change.
"""

import json
import logging
import re
import secrets
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from docwright.generators.ai_client import AIClient
from docwright.generators.template_manager import TemplateManager

logger = logging.getLogger(__name__)

BUMP_LEVELS = ("major", "minor", "patch")

_SYSTEM_PROMPT = (
    "You write release notes. Describe user-visible effects, not implementation "
    "details, and follow the requested reply format exactly."
)

_BUMP_LINE = re.compile(r"^\s*BUMP:\s*(\w+)\s*$", re.IGNORECASE | re.MULTILINE)


@dataclass
class Changeset:
    """A single changeset entry."""

    package: str
    bump: str
    summary: str

    def render(self) -> str:
        return f'---\n"{self.package}": {self.bump}\n---\n\n{self.summary}\n'


def parse_changeset_reply(reply: str, default_bump: str = "patch") -> tuple[str, str]:
    """Extract the bump level and summary from a model reply.

    Returns:
        ``(bump, summary)``. Unknown or missing levels fall back to
        ``default_bump``.
    """
    match = _BUMP_LINE.search(reply)
    bump = default_bump
    if match and match.group(1).lower() in BUMP_LEVELS:
        bump = match.group(1).lower()
    elif match:
        logger.warning("Ignoring unknown bump level %r", match.group(1))
    summary = _BUMP_LINE.sub("", reply).strip()
    return bump, summary


def detect_package_name(repo_path: Path) -> str:
    """Find the package name for a repository.

    Looks at package.json, then pyproject.toml, then falls back to the
    directory name.
    """
    package_json = repo_path / "package.json"
    if package_json.exists():
        try:
            name = json.loads(package_json.read_text(encoding="utf-8")).get("name")
        except (json.JSONDecodeError, AttributeError) as e:
            logger.warning("Could not read %s: %s", package_json, e)
        else:
            if name:
                return name

    pyproject = repo_path / "pyproject.toml"
    if pyproject.exists():
        try:
            with open(pyproject, "rb") as f:
                name = tomllib.load(f).get("project", {}).get("name")
        except tomllib.TOMLDecodeError as e:
            logger.warning("Could not read %s: %s", pyproject, e)
        else:
            if name:
                return name

    return repo_path.resolve().name


def slugify(text: str, max_words: int = 4) -> str:
    """Make a short file-name slug from the start of a summary."""
    words = re.findall(r"[a-z0-9]+", text.lower())[:max_words]
    return "-".join(words)


class ChangesetGenerator:
    """Builds changesets from diffs and writes them to disk."""

    def __init__(
        self,
        client: AIClient,
        template_manager: Optional[TemplateManager] = None,
        directory: str = ".changeset",
    ) -> None:
        self.client = client
        self.templates = template_manager or TemplateManager()
        self.directory = directory

    def generate(
        self, diff: str, package_name: str, bump: Optional[str] = None
    ) -> Changeset:
        """Ask the model for a changeset describing ``diff``.

        Args:
            diff: The diff to describe.
            package_name: Package the changeset applies to.
            bump: A bump level that overrides the model's choice.
        """
        if bump is not None and bump not in BUMP_LEVELS:
            raise ValueError(f"Invalid bump level: {bump}")

        prompt = self.templates.render_changeset_prompt(diff, package_name, bump)
        completion = self.client.complete(prompt, system=_SYSTEM_PROMPT)
        suggested, summary = parse_changeset_reply(completion.text)
        return Changeset(package=package_name, bump=bump or suggested, summary=summary)

    def write(self, changeset: Changeset, repo_path: Path) -> Path:
        """Write a changeset file and return its path.

        The file name is derived from the summary, with a random suffix
        so concurrent branches do not collide.
        """
        target_dir = repo_path / self.directory
        target_dir.mkdir(parents=True, exist_ok=True)

        slug = slugify(changeset.summary) or "change"
        path = target_dir / f"{slug}-{secrets.token_hex(3)}.md"
        path.write_text(changeset.render(), encoding="utf-8")
        logger.info("Wrote changeset %s (%s)", path, changeset.bump)
        return path
