"""Tests for repository fetching."""

import io
import tempfile
from unittest.mock import patch

import pytest

from skulls.core.exceptions import CloneFailedError
from skulls.core.fetcher import FetchedRepository, fetch_repository
from skulls.core.models import SourceLocator


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    """Redirect temporary clones into a directory the test can inspect."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


class TestFetchedRepository:
    def test_cleanup_removes_temp_dir(self, tmp_path):
        temp_dir = tmp_path / "skulls-abc"
        (temp_dir / "repo").mkdir(parents=True)
        fetched = FetchedRepository(temp_dir / "repo", temp_dir=temp_dir)

        fetched.cleanup()

        assert not temp_dir.exists()

    def test_cleanup_is_idempotent(self, tmp_path):
        """Calling cleanup twice is safe."""
        temp_dir = tmp_path / "skulls-abc"
        (temp_dir / "repo").mkdir(parents=True)
        fetched = FetchedRepository(temp_dir / "repo", temp_dir=temp_dir)

        fetched.cleanup()
        fetched.cleanup()

        assert fetched.temp_dir is None
        assert not temp_dir.exists()

    def test_context_manager_cleans_up(self, tmp_path):
        temp_dir = tmp_path / "skulls-abc"
        temp_dir.mkdir()

        with FetchedRepository(temp_dir, temp_dir=temp_dir) as fetched:
            assert fetched.path.exists()

        assert not temp_dir.exists()


class TestFetchRepository:
    def test_local_source_used_in_place(self, repo, temp_root):
        """A local working copy is returned as-is and never removed."""
        (repo / "keep.txt").write_text("x")

        with fetch_repository(SourceLocator(location=str(repo), local=True)) as fetched:
            assert fetched.path == repo
            assert fetched.temp_dir is None

        fetched.cleanup()
        assert (repo / "keep.txt").read_text() == "x"
        assert list(temp_root.iterdir()) == []

    def test_clones_into_temp_dir(self, git_repo, temp_root):
        fetched = fetch_repository(SourceLocator(location=f"file://{git_repo}"))
        try:
            assert fetched.temp_dir.parent == temp_root
            assert fetched.temp_dir.name.startswith("skulls-")
            assert (fetched.path / "skills" / "hello-skill" / "SKILL.md").exists()
        finally:
            fetched.cleanup()

        assert list(temp_root.iterdir()) == []

    def test_forwards_git_output(self, git_repo, temp_root):
        err = io.StringIO()

        with fetch_repository(SourceLocator(location=f"file://{git_repo}"), stderr=err):
            pass

        assert "Cloning into" in err.getvalue()

    def test_failed_clone_removes_temp_dir(self, temp_root):
        failure = CloneFailedError("https://github.com/o/missing.git", "fatal: not found")

        with patch("skulls.core.fetcher.git.clone_shallow", side_effect=failure):
            with pytest.raises(CloneFailedError):
                fetch_repository(SourceLocator(location="https://github.com/o/missing.git"))

        assert list(temp_root.iterdir()) == []

    def test_interrupted_clone_removes_temp_dir(self, temp_root):
        with patch("skulls.core.fetcher.git.clone_shallow", side_effect=KeyboardInterrupt):
            with pytest.raises(KeyboardInterrupt):
                fetch_repository(SourceLocator(location="https://github.com/o/r.git"))

        assert list(temp_root.iterdir()) == []
