"""Per-file documentation pages for the ``documentation`` command."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from docwright.generators.ai_client import AIClient
from docwright.generators.template_manager import TemplateManager

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a technical writer producing reference documentation for a "
    "VitePress site. Return only Markdown without a surrounding code fence."
)

LANGUAGES = {
    ".py": "Python",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
}


@dataclass
class DocumentationRun:
    """Pages written and files skipped during one run."""

    written: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _strip_fence(text: str) -> str:
    lines = text.strip().splitlines()
    if len(lines) >= 2 and lines[0].startswith("```") and lines[-1].strip() == "```":
        lines = lines[1:-1]
    return "\n".join(lines).strip()


class DocumentationGenerator:
    """Writes one markdown page per source file into a docs section.

    Pages land in ``<docs_root>/<section>/``, so the sidebar shows them
    as one group named after the section.
    """

    def __init__(
        self,
        client: AIClient,
        docs_root: Path,
        section: str = "reference",
        template_manager: Optional[TemplateManager] = None,
        extensions: Optional[Iterable[str]] = None,
    ) -> None:
        self.client = client
        self.docs_root = Path(docs_root)
        self.section = section
        self.templates = template_manager or TemplateManager()
        self.extensions = set(extensions or LANGUAGES)

    @property
    def section_dir(self) -> Path:
        return self.docs_root / self.section

    def page_path(self, source_path: Path, taken: set[Path]) -> Path:
        """Choose the page path for a source file.

        Uses the file stem, falling back to ``<parent>-<stem>`` when an
        earlier file in the same run already claimed the name.
        """
        page = self.section_dir / f"{source_path.stem}.md"
        if page in taken and source_path.parent.name:
            page = self.section_dir / f"{source_path.parent.name}-{source_path.stem}.md"
        return page

    def document_file(self, source_path: Path, page: Path) -> Path:
        """Generate and write the page for one source file.

        Raises:
            UnicodeDecodeError: If the file is not UTF-8 text.
        """
        source = source_path.read_text(encoding="utf-8")
        language = LANGUAGES.get(source_path.suffix, "text")
        prompt = self.templates.render_documentation_prompt(
            file_path=source_path.as_posix(), source=source, language=language
        )
        completion = self.client.complete(prompt, system=_SYSTEM_PROMPT)

        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(_strip_fence(completion.text) + "\n", encoding="utf-8")
        logger.info("Wrote %s", page)
        return page

    def document_files(self, paths: Iterable[str]) -> DocumentationRun:
        """Document every supported file in ``paths``.

        Directories are expanded recursively. Unsupported, missing and
        non-UTF-8 files are skipped and reported in the result.
        """
        run = DocumentationRun()
        taken: set[Path] = set()

        for source_path in self._expand(paths):
            if source_path.suffix not in self.extensions or not source_path.is_file():
                run.skipped.append(str(source_path))
                continue
            page = self.page_path(source_path, taken)
            try:
                self.document_file(source_path, page)
            except UnicodeDecodeError as e:
                logger.warning("Skipping %s: %s", source_path, e)
                run.skipped.append(str(source_path))
                continue
            taken.add(page)
            run.written.append(page)

        return run

    def _expand(self, paths: Iterable[str]) -> list[Path]:
        files = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                files.extend(
                    sorted(
                        p
                        for p in path.rglob("*")
                        if p.suffix in self.extensions
                        and not any(
                            part.startswith(".") or part == "node_modules"
                            for part in p.relative_to(path).parts
                        )
                    )
                )
            else:
                files.append(path)
        return files
