"""Helpers for locating a skill's SKILL.md in a GitHub repository."""

import re
from posixpath import basename
from urllib.parse import urlparse

from skulls.core.layout import MANIFEST_FILENAME, is_manifest_name, is_priority_skill_path

MAX_PREVIEW_CANDIDATES = 250

_SHORTHAND_REPO = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


def parse_github_repo(source: str) -> tuple[str, str] | None:
    """
    Extract (owner, repo) from a GitHub source.

    Accepts ``owner/repo``, ``git@github.com:owner/repo(.git)``,
    ``github.com/owner/repo`` and ``https://github.com/owner/repo(.git)``.

    Returns:
        (owner, repo), or None if the source isn't a GitHub repository
    """
    s = source.strip()
    if not s:
        return None

    if _SHORTHAND_REPO.match(s):
        owner, repo = s.split("/", 1)
        return owner, repo

    if s.startswith("git@github.com:"):
        path = s.removeprefix("git@github.com:").removesuffix(".git").strip("/")
        parts = path.split("/")
        if len(parts) >= 2 and parts[0] and parts[1]:
            return parts[0], parts[1]
        return None

    if s.startswith("github.com/"):
        s = "https://" + s

    parsed = urlparse(s)
    if (parsed.hostname or "").lower() not in ("github.com", "www.github.com"):
        return None

    parts = parsed.path.strip("/").split("/")
    if len(parts) < 2:
        return None
    owner, repo = parts[0], parts[1].removesuffix(".git")
    if not owner or not repo:
        return None
    return owner, repo


def rank_manifest_paths(paths: list[str], skill_id: str) -> list[str]:
    """
    Order repository manifest paths by how likely they hold skill_id.

    Folder-name matches come first, then paths in priority directories, then
    everything else. Each group is sorted; at most MAX_PREVIEW_CANDIDATES
    are returned.
    """
    skill_id = skill_id.strip()
    exact: list[str] = []
    priority: list[str] = []
    others: list[str] = []

    for path in paths:
        if not is_manifest_name(basename(path)):
            continue
        if skill_id and (
            path == f"{skill_id}/{MANIFEST_FILENAME}"
            or path.endswith(f"/{skill_id}/{MANIFEST_FILENAME}")
        ):
            exact.append(path)
        elif is_priority_skill_path(path):
            priority.append(path)
        else:
            others.append(path)

    ranked = sorted(exact) + sorted(priority) + sorted(others)
    return ranked[:MAX_PREVIEW_CANDIDATES]
