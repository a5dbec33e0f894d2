"""Git helpers for the AI-assisted commands.

Thin wrappers around ``git`` subprocess calls. Failures are logged and
turned into empty results so callers can report "nothing to do"
instead of crashing on a repository without history.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def _run_git(args: list[str], repo_path: str) -> Optional[str]:
    """Run a git command and return its stdout, or None on failure.

    Args:
        args: Arguments following ``git``.
        repo_path: Working directory for the command.

    Returns:
        Command output, or None if git failed or is not installed.
    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=repo_path,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        logger.warning("git %s failed: %s", " ".join(args), stderr)
        return None
    except FileNotFoundError:
        logger.warning("Git not found in PATH")
        return None
    return result.stdout


def _split_lines(output: Optional[str]) -> list[str]:
    if not output:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def get_repo_root(path: str = ".") -> Optional[Path]:
    """Return the top-level directory of the repository containing ``path``."""
    output = _run_git(["rev-parse", "--show-toplevel"], path)
    if not output or not output.strip():
        return None
    return Path(output.strip())


def get_staged_diff(repo_path: str) -> str:
    """Return the diff of changes staged for commit.

    Args:
        repo_path: Path to the git repository.

    Returns:
        The unified diff text; empty when nothing is staged.
    """
    diff = _run_git(["diff", "--cached", "--no-color"], repo_path) or ""
    logger.debug("Staged diff is %d characters", len(diff))
    return diff


def get_staged_files(repo_path: str) -> list[str]:
    """Return paths of files staged for commit."""
    return _split_lines(
        _run_git(["diff", "--cached", "--name-only", "--diff-filter=ACMR"], repo_path)
    )


def get_branch_diff(repo_path: str, base_ref: str) -> str:
    """Return the diff between ``base_ref`` and HEAD.

    Uses the merge base, so only changes made on the current branch are
    included.
    """
    return _run_git(["diff", "--no-color", f"{base_ref}...HEAD"], repo_path) or ""


def get_changed_files_git(repo_path: str, since_ref: Optional[str] = None) -> list[str]:
    """Get files changed in git since a given reference.

    Uses git diff to find modified, added, or renamed files.
    If no reference is given, returns files changed since HEAD~1.

    Args:
        repo_path: Path to the git repository root.
        since_ref: Git reference to diff against (e.g., 'HEAD~1', commit hash).

    Returns:
        List of changed file paths relative to the repo root.
    """
    ref = since_ref or "HEAD~1"
    files = _split_lines(
        _run_git(["diff", "--name-only", "--diff-filter=ACMR", ref], repo_path)
    )
    logger.info("Git diff found %d changed files since %s", len(files), ref)
    return files
