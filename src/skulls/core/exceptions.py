"""Custom exceptions for skulls."""

from pathlib import Path


class SkullsError(Exception):
    """Base class for all skulls errors."""


class UnsupportedSourceError(SkullsError):
    """Source string can't be turned into a clonable locator."""

    def __init__(self, source: str):
        if source.strip():
            message = f"unsupported source format: {source!r}"
        else:
            message = "source is required"
        super().__init__(message)
        self.source = source


class CloneFailedError(SkullsError):
    """Shallow clone of a repository failed."""

    def __init__(self, url: str, stderr: str = ""):
        detail = stderr.strip()
        message = f"git clone failed for {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.url = url
        self.stderr = stderr


class NoSkillsFoundError(SkullsError):
    """Discovery found no valid manifests in a repository."""

    def __init__(self, repo_root: Path):
        super().__init__(f"no skills found in {repo_root}")
        self.repo_root = repo_root


class SkillNotFoundError(SkullsError):
    """Requested skill isn't present in the repository."""

    def __init__(self, skill_id: str):
        if skill_id:
            message = f"skill not found in repo: {skill_id}"
        else:
            message = "skill-id is required"
        super().__init__(message)
        self.skill_id = skill_id


class DuplicateSkillNameError(SkullsError):
    """Two manifests declare the same skill name."""

    def __init__(self, name: str, first: Path, second: Path):
        super().__init__(f"duplicate skill name {name!r} in {first} and {second}")
        self.name = name
        self.first = first
        self.second = second


class TargetExistsError(SkullsError):
    """Install target already exists and overwriting wasn't requested."""

    def __init__(self, path: Path):
        super().__init__(f"target already exists: {path} (use --force to overwrite)")
        self.path = path
