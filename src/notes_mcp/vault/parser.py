"""Parser turning a markdown file into a searchable Note."""

import logging
import re
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any

import yaml

from notes_mcp.search.models import Note

logger = logging.getLogger(__name__)

# Frontmatter keys mapped onto Note fields; the rest stay in Note.frontmatter
RESERVED_KEYS = {"title", "tags", "aliases", "type"}

TITLE_PATTERN = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)

# Inline #tag, not part of a word, URL fragment or heading marker
INLINE_TAG_PATTERN = re.compile(r"(?<![\w#&/])#([A-Za-z][\w/-]*)")


def split_frontmatter(content: str, file_path: str) -> tuple[dict[str, Any], str]:
    """
    Split YAML frontmatter from markdown content.

    Args:
        content: The full markdown content
        file_path: Path used in log messages

    Returns:
        Tuple of (frontmatter mapping, body). The mapping is empty when the
        file has no frontmatter or it is not a valid YAML mapping.
    """
    if not content.startswith("---"):
        return {}, content

    parts = content.split("---", 2)
    if len(parts) < 3:
        return {}, content

    try:
        raw = yaml.safe_load(parts[1])
    except yaml.YAMLError as e:
        logger.debug("Invalid YAML frontmatter in %s: %s", file_path, e)
        return {}, content

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        logger.debug("Frontmatter in %s is not a mapping, ignoring it", file_path)
        return {}, content

    return {str(k): v for k, v in raw.items()}, parts[2].lstrip("\n")


def _string_list(value: Any) -> list[str]:
    """Normalize a scalar or list frontmatter value to a list of strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def extract_tags(frontmatter: dict[str, Any], body: str) -> list[str]:
    """Frontmatter tags followed by inline #tags, deduplicated in order."""
    tags: list[str] = []
    for value in _string_list(frontmatter.get("tags")):
        # "tags: a, b" and "tags: a b" are both common in the wild
        tags.extend(t.lstrip("#") for t in re.split(r"[,\s]+", value) if t.lstrip("#"))
    tags.extend(INLINE_TAG_PATTERN.findall(body))
    return list(dict.fromkeys(tags))


def extract_title(frontmatter: dict[str, Any], body: str, file_path: str) -> str:
    """Title from frontmatter, else the first level-1 heading, else the file stem."""
    title = frontmatter.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()

    match = TITLE_PATTERN.search(body)
    if match:
        return match.group(1).strip()

    return PurePosixPath(file_path).stem


def parse_note(content: str, file_path: str, mtime: float) -> Note:
    """
    Parse a markdown note.

    Args:
        content: The full markdown content
        file_path: Path relative to the vault root, used as the note id
        mtime: File modification time (seconds since the epoch)

    Returns:
        Note ready for indexing.
    """
    frontmatter, body = split_frontmatter(content, file_path)

    note_type = frontmatter.get("type")

    return Note(
        id=file_path,
        title=extract_title(frontmatter, body, file_path),
        path=file_path,
        body=body,
        tags=extract_tags(frontmatter, body),
        aliases=_string_list(frontmatter.get("aliases")),
        type=note_type if isinstance(note_type, str) else "",
        frontmatter={k: v for k, v in frontmatter.items() if k not in RESERVED_KEYS},
        modified_at=datetime.fromtimestamp(mtime, tz=timezone.utc),
    )
