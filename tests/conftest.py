"""Shared test fixtures for skulls test suite."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable

import pytest

from skulls.utils.config import ConfigStore

WriteFile = Callable[[str, str], Path]


def skill_md(name: str, description: str | None = "test") -> str:
    """Manifest content with the given frontmatter fields."""
    lines = ["---", f"name: {name}"]
    if description is not None:
        lines.append(f"description: {description}")
    lines += ["---", "", f"# {name}", ""]
    return "\n".join(lines)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Empty repository directory."""
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    return repo_dir


@pytest.fixture
def write_file(repo: Path) -> WriteFile:
    """Write a file at a repo-relative path, creating parent directories."""

    def _write(rel: str, body: str) -> Path:
        path = repo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)
        return path

    return _write


@pytest.fixture
def config_store(tmp_path: Path) -> ConfigStore:
    """ConfigStore writing to a temporary location."""
    return ConfigStore(lambda: tmp_path / "config" / "config.json")


@pytest.fixture
def git_repo(repo: Path, write_file: WriteFile) -> Path:
    """Committed git repository holding skills/hello-skill."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    write_file("skills/hello-skill/SKILL.md", skill_md("hello-skill"))
    write_file("skills/hello-skill/scripts/run.sh", "#!/bin/sh\necho hello\n")

    env = {
        "GIT_AUTHOR_NAME": "test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
        "HOME": str(repo.parent),
        "PATH": os.environ.get("PATH", ""),
    }
    for args in (["git", "init", "-q"], ["git", "add", "."], ["git", "commit", "-q", "-m", "init"]):
        subprocess.run(args, cwd=repo, env=env, check=True, capture_output=True)
    return repo
