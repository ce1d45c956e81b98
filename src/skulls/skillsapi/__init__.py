"""Client for the remote skills directory."""

from skulls.skillsapi.base import PopularParseError, PreviewUnavailableError, RemoteSkill
from skulls.skillsapi.client import SkillsApiClient, parse_initial_skills
from skulls.skillsapi.preview import parse_github_repo, rank_manifest_paths

__all__ = [
    "PopularParseError",
    "PreviewUnavailableError",
    "RemoteSkill",
    "SkillsApiClient",
    "parse_github_repo",
    "parse_initial_skills",
    "rank_manifest_paths",
]
