"""Filesystem helpers."""

import os
import shutil
from pathlib import Path


def expand_home(path: str) -> str:
    """Expand a leading ``~`` (``~``, ``~/x`` or ``~\\x``) to the home directory."""
    if path == "~":
        return str(Path.home())
    if path.startswith(("~/", "~\\")):
        return os.path.join(Path.home(), path[2:])
    return path


def copy_dir(src: Path, dst: Path) -> None:
    """
    Recursively copy a directory's contents into dst.

    Permission bits are preserved. Symbolic links are dereferenced: the copy
    holds regular files and directories only.

    Args:
        src: Directory to copy
        dst: Destination directory (must not exist yet)

    Raises:
        NotADirectoryError: If src is not a directory
        shutil.Error / OSError: If any entry can't be copied
    """
    if not src.is_dir():
        raise NotADirectoryError(f"source is not a directory: {src}")
    shutil.copytree(src, dst, symlinks=False, copy_function=shutil.copy)
