"""AI review of staged changes for the ``check`` command."""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from docwright.generators.ai_client import AIClient
from docwright.generators.template_manager import TemplateManager

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a senior engineer reviewing a colleague's change before commit. "
    "Focus on correctness and maintainability. Be direct and brief."
)

_VERDICT = re.compile(r"^\s*VERDICT:\s*(PASS|FAIL)\s*$", re.IGNORECASE | re.MULTILINE)


@dataclass
class ReviewResult:
    """Outcome of a review.

    Attributes:
        passed: False when the reviewer asked to block the commit.
        feedback: Review text without the verdict line.
        verdict_found: Whether the reply contained a verdict line.
        files: Files included in the review.
    """

    passed: bool
    feedback: str
    verdict_found: bool = True
    files: list[str] = field(default_factory=list)


def parse_review(reply: str) -> ReviewResult:
    """Split a model reply into feedback and verdict.

    The last ``VERDICT:`` line wins. A reply without one is treated as
    passing.
    """
    matches = list(_VERDICT.finditer(reply))
    if not matches:
        logger.warning("Review reply had no verdict line, treating as PASS")
        return ReviewResult(passed=True, feedback=reply.strip(), verdict_found=False)

    last = matches[-1]
    feedback = _VERDICT.sub("", reply).strip()
    return ReviewResult(passed=last.group(1).upper() == "PASS", feedback=feedback)


class CodeReviewer:
    """Asks the model to review a diff and reports a pass/fail verdict."""

    def __init__(
        self, client: AIClient, template_manager: Optional[TemplateManager] = None
    ) -> None:
        self.client = client
        self.templates = template_manager or TemplateManager()

    def review(self, diff: str, files: Optional[list[str]] = None) -> ReviewResult:
        """Review a unified diff.

        Args:
            diff: The staged diff text.
            files: Names of the staged files, for context.

        Returns:
            The parsed review.
        """
        prompt = self.templates.render_check_prompt(diff, files)
        completion = self.client.complete(prompt, system=_SYSTEM_PROMPT)
        result = parse_review(completion.text)
        result.files = list(files or [])
        logger.info(
            "Review of %d files: %s", len(result.files), "PASS" if result.passed else "FAIL"
        )
        return result
