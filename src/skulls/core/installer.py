"""Install pipeline: normalize, fetch, verify, (remove), copy."""

import logging
import os
import re
import shutil
import sys
import tempfile
from pathlib import Path
from typing import TextIO

from skulls.core.exceptions import TargetExistsError
from skulls.core.fetcher import fetch_repository
from skulls.core.models import (
    InstallEvent,
    InstallRequest,
    InstallStage,
    ProgressSink,
)
from skulls.core.resolver import resolve_skill_dir
from skulls.core.source import normalize_source
from skulls.utils.fs import copy_dir, expand_home

logger = logging.getLogger(__name__)

FALLBACK_DIR_NAME = "unnamed-skill"
MAX_DIR_NAME_LENGTH = 255

# Fixed and short so the staging name fits next to a max-length target name.
STAGING_PREFIX = ".skulls-staging-"

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9._-]+")


def sanitize_name(name: str) -> str:
    """
    Turn a skill identifier into a safe single path segment.

    Lowercases, maps path separators to ``-``, replaces each run of characters
    outside ``[a-z0-9._-]`` with one ``-`` and trims leading/trailing ``.``
    and ``-``.

    Args:
        name: Skill identifier

    Returns:
        Folder name of at most 255 characters, never empty
    """
    s = name.strip().lower()
    s = s.replace("/", "-").replace("\\", "-")
    s = _INVALID_NAME_CHARS.sub("-", s)
    s = s.strip(".-")
    if not s:
        s = FALLBACK_DIR_NAME
    return s[:MAX_DIR_NAME_LENGTH]


class _Stage:
    """Emits the started/done pair around one pipeline stage."""

    def __init__(self, progress: ProgressSink | None, stage: InstallStage, message: str):
        self.progress = progress
        self.stage = stage
        self.message = message

    def __enter__(self) -> "_Stage":
        logger.debug(f"[{self.stage}] {self.message}")
        self._emit(done=False)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self._emit(done=True)

    def _emit(self, done: bool) -> None:
        if self.progress is not None:
            self.progress(InstallEvent(stage=self.stage, message=self.message, done=done))


def install_skill(
    request: InstallRequest,
    progress: ProgressSink | None = None,
    git_stdout: TextIO | None = None,
    git_stderr: TextIO | None = None,
) -> Path:
    """
    Install one skill from a source into the target directory.

    Each stage reports a started and a done event to ``progress``. The remove
    stage only runs when the target exists and ``request.force`` is set.
    Any failure propagates unchanged; a temporary clone is always removed and
    the target is never left half-copied.

    Args:
        request: What to install and where
        progress: Optional callback receiving InstallEvent notifications
        git_stdout: Sink for git's stdout (defaults to sys.stdout)
        git_stderr: Sink for git's stderr (defaults to sys.stderr)

    Returns:
        Absolute path of the installed skill directory

    Raises:
        UnsupportedSourceError, CloneFailedError, SkillNotFoundError,
        TargetExistsError, OSError
    """
    target_base = Path(os.path.abspath(expand_home(request.target_directory)))
    target_base.mkdir(parents=True, exist_ok=True)

    with _Stage(progress, InstallStage.NORMALIZE, "Normalizing source…"):
        locator = normalize_source(request.source)

    clone_message = "Reading local repository…" if locator.local else "Downloading repository…"
    with _Stage(progress, InstallStage.CLONE, clone_message):
        repo = fetch_repository(
            locator,
            stdout=git_stdout if git_stdout is not None else sys.stdout,
            stderr=git_stderr if git_stderr is not None else sys.stderr,
        )

    with repo:
        with _Stage(progress, InstallStage.VERIFY, "Verifying skill layout…"):
            skill_dir = resolve_skill_dir(repo.path, request.skill_id)

        install_path = target_base / sanitize_name(request.skill_id)

        if install_path.exists() or install_path.is_symlink():
            if not request.force:
                raise TargetExistsError(install_path)
            with _Stage(progress, InstallStage.REMOVE, "Removing existing installation…"):
                _remove_path(install_path)

        with _Stage(progress, InstallStage.COPY, "Installing skill files…"):
            _copy_into_place(skill_dir, install_path)

    logger.info(f"Installed '{request.skill_id}' from {request.source} to {install_path}")
    return install_path


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _copy_into_place(skill_dir: Path, install_path: Path) -> None:
    """Copy into a staging directory next to the target, then rename it in."""
    staging = Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=install_path.parent))
    try:
        staged = staging / "skill"
        copy_dir(skill_dir, staged)
        os.replace(staged, install_path)
    finally:
        shutil.rmtree(staging, ignore_errors=True)
