"""Resolve a skill identifier to its directory inside a repository checkout."""

import logging
from pathlib import Path

from skulls.core.discovery import discover_all
from skulls.core.exceptions import NoSkillsFoundError, SkillNotFoundError
from skulls.core.frontmatter import read_manifest
from skulls.core.layout import find_manifest

logger = logging.getLogger(__name__)


def _is_single_segment(skill_id: str) -> bool:
    return "/" not in skill_id and "\\" not in skill_id and skill_id not in (".", "..")


def resolve_skill_dir(repo_root: Path, skill_id: str) -> Path:
    """
    Find the directory of the skill whose frontmatter ``name`` is skill_id.

    Fast path: ``skills/<skill_id>/SKILL.md`` with a matching name. Otherwise
    fall back to discovery (default depth, first occurrence of a name wins)
    and match by name, never by folder. Any skill listed by discover_all
    therefore resolves to the directory it was listed with.

    Args:
        repo_root: Root of the repository checkout
        skill_id: Frontmatter name of the wanted skill (compared exactly)

    Returns:
        Directory containing the skill

    Raises:
        SkillNotFoundError: If no skill carries that name
    """
    skill_id = skill_id.strip()
    if not skill_id:
        raise SkillNotFoundError(skill_id)

    expected = repo_root / "skills" / skill_id
    if _is_single_segment(skill_id) and expected.is_dir():
        manifest = find_manifest(expected)
        if manifest is not None:
            record = read_manifest(manifest)
            if record is not None and record.name == skill_id:
                logger.debug(f"Resolved '{skill_id}' via fast path: {expected}")
                return expected.resolve()

    try:
        skills = discover_all(repo_root)
    except NoSkillsFoundError:
        raise SkillNotFoundError(skill_id)

    for skill in skills:
        if skill.name == skill_id:
            logger.debug(f"Resolved '{skill_id}' via discovery: {skill.directory_path}")
            return skill.directory_path

    raise SkillNotFoundError(skill_id)
