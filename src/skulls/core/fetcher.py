"""Repository fetching: local working copies or disposable shallow clones."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import TextIO

from skulls.core.models import SourceLocator
from skulls.utils import git

logger = logging.getLogger(__name__)


class FetchedRepository:
    """
    A working copy of a source repository.

    For local sources ``path`` is the original directory and cleanup does
    nothing. For clones it lives in a temporary directory that ``cleanup``
    removes. Cleanup is idempotent; the object is also a context manager.
    """

    def __init__(self, path: Path, temp_dir: Path | None = None):
        self.path = path
        self.temp_dir = temp_dir

    def cleanup(self) -> None:
        if self.temp_dir is None:
            return
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        logger.debug(f"Removed temporary clone {self.temp_dir}")
        self.temp_dir = None

    def __enter__(self) -> "FetchedRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()


def fetch_repository(
    locator: SourceLocator,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> FetchedRepository:
    """
    Obtain a working copy for a locator.

    Args:
        locator: Normalized source locator
        stdout: Sink for git's stdout while cloning
        stderr: Sink for git's stderr while cloning

    Returns:
        FetchedRepository; the caller must call cleanup() (or use ``with``)

    Raises:
        CloneFailedError: If the shallow clone fails
    """
    local_path = Path(locator.location)
    if locator.local and local_path.is_dir():
        logger.debug(f"Using local repository {local_path}")
        return FetchedRepository(local_path)

    temp_dir = Path(tempfile.mkdtemp(prefix="skulls-"))
    repo_dir = temp_dir / "repo"
    try:
        git.clone_shallow(locator.location, repo_dir, stdout=stdout, stderr=stderr)
    except BaseException:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise

    return FetchedRepository(repo_dir, temp_dir=temp_dir)
