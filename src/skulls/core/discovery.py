"""Skill discovery: find every skill directory in a repository checkout.

Search order
------------
1. Manifest at the repository root. Unless ``full_depth`` is set, a valid root
   manifest ends the search: single-skill repositories expose only that skill.
2. Immediate subdirectories of each priority directory (see
   :data:`skulls.core.layout.PRIORITY_SEARCH_DIRS`), in list order.
3. A recursive walk up to :data:`~skulls.core.layout.MAX_RECURSIVE_DEPTH`
   levels, only when steps 1-2 found nothing or ``full_depth`` is set.

Duplicate names keep the first occurrence in that order, unless the caller
asks for ``strict_duplicates``, in which case a duplicate is an error. The
result is sorted by name.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from skulls.core.exceptions import DuplicateSkillNameError, NoSkillsFoundError
from skulls.core.fetcher import fetch_repository
from skulls.core.frontmatter import read_manifest
from skulls.core.layout import (
    MAX_RECURSIVE_DEPTH,
    PRIORITY_SEARCH_DIRS,
    find_manifest,
    should_skip_dir,
)
from skulls.core.models import SkillDescriptor
from skulls.core.source import normalize_source

logger = logging.getLogger(__name__)


def _subdirectories(directory: Path, follow_symlinks: bool = False) -> list[Path]:
    """Sorted child directories of a directory."""
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")
        return []
    return sorted(
        e for e in entries if e.is_dir() and (follow_symlinks or not e.is_symlink())
    )


class _Collector:
    """Accumulates descriptors for one pass, skipping manifests already seen."""

    def __init__(self) -> None:
        self.found: list[SkillDescriptor] = []
        self._seen_manifests: set[Path] = set()

    def visit(self, directory: Path) -> None:
        manifest = find_manifest(directory)
        if manifest is None:
            return

        if manifest in self._seen_manifests:
            return
        self._seen_manifests.add(manifest)

        record = read_manifest(manifest)
        if record is None:
            logger.debug(f"Skipping {manifest}: not a valid skill manifest")
            return

        self.found.append(
            SkillDescriptor(
                name=record.name,
                description=record.description,
                directory_path=manifest.parent,
                manifest_path=manifest,
            )
        )

    def walk(self, directory: Path, depth: int) -> None:
        if depth > MAX_RECURSIVE_DEPTH:
            return
        self.visit(directory)
        for child in _subdirectories(directory):
            if should_skip_dir(child.name):
                continue
            self.walk(child, depth + 1)


def collect_candidates(repo_root: Path, full_depth: bool = False) -> list[SkillDescriptor]:
    """
    Collect every valid manifest in discovery scope, in priority order.

    Names are not deduplicated here; each manifest file appears at most once.

    Args:
        repo_root: Root of the repository checkout
        full_depth: Keep searching past a root manifest and always walk the tree

    Returns:
        Descriptors in the order they were encountered
    """
    repo_root = repo_root.resolve()
    collector = _Collector()

    collector.visit(repo_root)
    if collector.found and not full_depth:
        return collector.found

    for rel in PRIORITY_SEARCH_DIRS:
        priority_dir = repo_root / rel
        if not priority_dir.is_dir():
            continue
        for child in _subdirectories(priority_dir, follow_symlinks=True):
            collector.visit(child)

    if not collector.found or full_depth:
        collector.walk(repo_root, 0)

    return collector.found


def discover_all(
    repo_root: Path,
    full_depth: bool = False,
    strict_duplicates: bool = False,
) -> list[SkillDescriptor]:
    """
    Discover all skills in a repository checkout.

    Args:
        repo_root: Root of the repository checkout
        full_depth: Search every layout even when a root manifest exists
        strict_duplicates: Raise on a repeated name instead of keeping the first

    Returns:
        Descriptors with unique names, sorted by name

    Raises:
        NoSkillsFoundError: If no valid manifest was found
        DuplicateSkillNameError: On a repeated name with ``strict_duplicates``
    """
    unique: dict[str, SkillDescriptor] = {}
    for descriptor in collect_candidates(repo_root, full_depth=full_depth):
        previous = unique.get(descriptor.name)
        if previous is None:
            unique[descriptor.name] = descriptor
            continue
        if strict_duplicates:
            raise DuplicateSkillNameError(
                descriptor.name, previous.manifest_path, descriptor.manifest_path
            )
        logger.debug(
            f"Ignoring duplicate skill '{descriptor.name}' at "
            f"{descriptor.manifest_path} (already found at {previous.manifest_path})"
        )

    if not unique:
        raise NoSkillsFoundError(repo_root)

    skills = sorted(unique.values(), key=lambda d: d.name)
    logger.info(f"Discovered {len(skills)} skill(s) in {repo_root}")
    return skills


@contextmanager
def discover_source(
    source: str,
    full_depth: bool = False,
) -> Iterator[list[SkillDescriptor]]:
    """
    Discover skills straight from a source string.

    The working copy stays on disk for the duration of the ``with`` block so
    callers can read manifests; a temporary clone is removed afterwards.

    Args:
        source: Shorthand, git URL or local path
        full_depth: Passed through to discover_all

    Yields:
        Sorted descriptors for the source's skills
    """
    locator = normalize_source(source)
    with fetch_repository(locator) as repo:
        yield discover_all(repo.path, full_depth=full_depth)
