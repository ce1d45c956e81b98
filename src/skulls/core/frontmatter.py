"""Frontmatter parsing for skill manifests."""

import logging
from pathlib import Path
from typing import Any

import yaml

from skulls.core.models import FrontmatterRecord

logger = logging.getLogger(__name__)

DELIMITER = "---"


def split_frontmatter(content: str) -> tuple[str, str] | None:
    """
    Split manifest content into its frontmatter block and body.

    The first line must be the delimiter (surrounding whitespace ignored) and a
    later line must close the block. Line endings may be ``\\n`` or ``\\r\\n``.

    Args:
        content: Raw file content

    Returns:
        (frontmatter_text, body), or None when there is no delimited block
    """
    lines = content.replace("\r\n", "\n").split("\n")
    if lines[0].strip() != DELIMITER:
        return None

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            return "\n".join(lines[1:end]), "\n".join(lines[end + 1 :])

    return None


def _string_field(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_frontmatter(content: str, strict: bool = True) -> FrontmatterRecord | None:
    """
    Parse a manifest's frontmatter into a record.

    Anything that isn't a well-formed manifest yields None rather than an
    error, so callers walking a repository can skip it.

    Args:
        content: Raw manifest content
        strict: Require a non-empty ``description`` as well as ``name``

    Returns:
        FrontmatterRecord with trimmed values, or None if not a skill
    """
    parts = split_frontmatter(content)
    if parts is None:
        return None

    try:
        data = yaml.safe_load(parts[0])
    except yaml.YAMLError:
        return None

    if not isinstance(data, dict):
        return None

    name = _string_field(data, "name")
    if name is None:
        return None

    description = _string_field(data, "description")
    if description is None:
        if strict:
            return None
        description = ""

    return FrontmatterRecord(name=name, description=description)


def read_manifest(path: Path, strict: bool = True) -> FrontmatterRecord | None:
    """Read and parse a manifest file, treating unreadable files as not a skill."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read manifest {path}: {e}")
        return None
    return parse_frontmatter(content, strict=strict)
