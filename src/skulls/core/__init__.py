"""Core skill discovery, resolution and installation."""

from .discovery import collect_candidates, discover_all, discover_source
from .exceptions import (
    CloneFailedError,
    DuplicateSkillNameError,
    NoSkillsFoundError,
    SkillNotFoundError,
    SkullsError,
    TargetExistsError,
    UnsupportedSourceError,
)
from .fetcher import FetchedRepository, fetch_repository
from .frontmatter import parse_frontmatter, read_manifest
from .installer import install_skill, sanitize_name
from .models import (
    FrontmatterRecord,
    InstallEvent,
    InstallRequest,
    InstallStage,
    ProgressSink,
    QueueSink,
    SkillDescriptor,
    SourceLocator,
)
from .resolver import resolve_skill_dir
from .source import normalize_source

__all__ = [
    "CloneFailedError",
    "DuplicateSkillNameError",
    "FetchedRepository",
    "FrontmatterRecord",
    "InstallEvent",
    "InstallRequest",
    "InstallStage",
    "NoSkillsFoundError",
    "ProgressSink",
    "QueueSink",
    "SkillDescriptor",
    "SkillNotFoundError",
    "SkullsError",
    "SourceLocator",
    "TargetExistsError",
    "UnsupportedSourceError",
    "collect_candidates",
    "discover_all",
    "discover_source",
    "fetch_repository",
    "install_skill",
    "normalize_source",
    "parse_frontmatter",
    "read_manifest",
    "resolve_skill_dir",
    "sanitize_name",
]
