"""Source normalization: turn user input into a clonable locator."""

import os
from pathlib import Path

from skulls.core.exceptions import UnsupportedSourceError
from skulls.core.models import SourceLocator

GITHUB_URL_TEMPLATE = "https://github.com/{owner}/{repo}.git"


def looks_like_path(source: str) -> bool:
    return source.startswith(("./", "../", "/")) or source in (".", "..")


def is_remote_url(source: str) -> bool:
    return "://" in source or source.startswith("git@")


def split_github_shorthand(source: str) -> tuple[str, str] | None:
    """Split ``owner/repo`` into its parts, or return None if it isn't one."""
    parts = source.split("/")
    if len(parts) == 2 and parts[0] and parts[1]:
        return parts[0], parts[1]
    return None


def normalize_source(source: str) -> SourceLocator:
    """
    Normalize a source string into a clonable locator.

    Accepted forms, checked in order:
    - any URL-like git remote (``https://...``, ``git@...``, ``file:///...``)
    - a local path starting with ``./``, ``../``, ``/`` (or ``.``/``..``)
      that exists on disk
    - GitHub shorthand ``owner/repo``

    Args:
        source: User-supplied source string

    Returns:
        SourceLocator pointing at a remote URL or an absolute local path

    Raises:
        UnsupportedSourceError: If the source matches none of the forms
    """
    source = source.strip()
    if not source:
        raise UnsupportedSourceError(source)

    if is_remote_url(source):
        return SourceLocator(location=source)

    if looks_like_path(source):
        path = Path(os.path.abspath(source))
        if path.exists():
            return SourceLocator(location=str(path), local=True)

    shorthand = split_github_shorthand(source)
    if shorthand:
        owner, repo = shorthand
        return SourceLocator(location=GITHUB_URL_TEMPLATE.format(owner=owner, repo=repo))

    raise UnsupportedSourceError(source)
