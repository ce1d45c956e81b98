"""Thin wrapper around the git command line."""

import logging
import subprocess
from pathlib import Path
from typing import TextIO

from skulls.core.exceptions import CloneFailedError

logger = logging.getLogger(__name__)


def clone_shallow(
    url: str,
    dest: Path,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """
    Clone a repository with ``git clone --depth 1``.

    Output of the git process is forwarded to the given sinks once it exits.

    Args:
        url: Remote URL or local path to clone
        dest: Destination directory (must not exist yet)
        stdout: Sink for git's stdout (None discards it)
        stderr: Sink for git's stderr (None discards it)

    Raises:
        CloneFailedError: If git is missing or exits non-zero
    """
    logger.debug(f"Cloning {url} into {dest}")
    try:
        proc = subprocess.run(
            ["git", "clone", "--depth", "1", url, str(dest)],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise CloneFailedError(url, "git executable not found in PATH")

    if stdout is not None and proc.stdout:
        stdout.write(proc.stdout)
    if stderr is not None and proc.stderr:
        stderr.write(proc.stderr)

    if proc.returncode != 0:
        logger.warning(f"git clone of {url} exited with {proc.returncode}")
        raise CloneFailedError(url, proc.stderr)
