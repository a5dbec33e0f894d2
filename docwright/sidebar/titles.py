"""Display titles and sort prefixes derived from file and directory names."""

import math
import re
from typing import Union

DOC_EXTENSION = ".md"
GENERAL_GROUP_TITLE = "General"

# Shared by title stripping and sort-key extraction so the two agree.
NUMERIC_PREFIX = re.compile(r"^(\d+)\.\s*")

_GROUP_DELIMITERS = re.compile(r"[-_]")


def strip_extension(file_name: str) -> str:
    """Remove a trailing ``.md`` extension, if present."""
    if file_name.endswith(DOC_EXTENSION):
        return file_name[: -len(DOC_EXTENSION)]
    return file_name


def extract_numeric_prefix(file_name: str) -> Union[int, float]:
    """Extract the numeric ordering prefix from a file name.

    Args:
        file_name: The original file name, e.g. ``"01. Introduction.md"``.

    Returns:
        The prefix as an integer, or ``math.inf`` when there is none.
    """
    match = NUMERIC_PREFIX.match(file_name)
    return int(match.group(1)) if match else math.inf


def file_to_title(file_name: str) -> str:
    """Convert a markdown file name into a display title.

    The extension and any numeric prefix are removed; the rest is kept
    as written. ``"03. Getting-Started.md"`` becomes ``"Getting-Started"``.
    """
    stem = strip_extension(file_name)
    title = NUMERIC_PREFIX.sub("", stem, count=1)
    return title or stem


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def dir_to_group_title(dir_name: str) -> str:
    """Convert a directory name into a group title.

    ``"api-reference"`` becomes ``"Api Reference"``; the empty name used
    for root-level files becomes ``"General"``.
    """
    if not dir_name:
        return GENERAL_GROUP_TITLE

    words = [w for w in _GROUP_DELIMITERS.split(dir_name) if w]
    if not words:
        return dir_name
    return " ".join(_capitalize(w) for w in words)
