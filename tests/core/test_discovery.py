"""Tests for skill discovery."""

import os
from pathlib import Path

import pytest

from conftest import skill_md
from skulls.core.discovery import collect_candidates, discover_all, discover_source
from skulls.core.exceptions import (
    DuplicateSkillNameError,
    NoSkillsFoundError,
    UnsupportedSourceError,
)


def names(skills) -> list[str]:
    return [s.name for s in skills]


class TestRootManifest:
    def test_root_manifest_short_circuits(self, repo, write_file):
        """A valid root manifest hides every other skill by default."""
        write_file("SKILL.md", skill_md("root-skill"))
        write_file("skills/other/SKILL.md", skill_md("other"))

        skills = discover_all(repo)

        assert names(skills) == ["root-skill"]
        assert skills[0].directory_path == repo.resolve()

    def test_full_depth_keeps_searching(self, repo, write_file):
        write_file("SKILL.md", skill_md("root-skill"))
        write_file("skills/other/SKILL.md", skill_md("other"))

        skills = discover_all(repo, full_depth=True)

        assert names(skills) == ["other", "root-skill"]

    def test_invalid_root_manifest_does_not_short_circuit(self, repo, write_file):
        write_file("SKILL.md", "# no frontmatter\n")
        write_file("skills/other/SKILL.md", skill_md("other"))

        assert names(discover_all(repo)) == ["other"]


class TestPriorityDirectories:
    def test_agent_specific_directory(self, repo, write_file):
        """Skills under .claude/skills are found without a recursive walk."""
        write_file(".claude/skills/alpha/SKILL.md", skill_md("alpha"))

        skills = discover_all(repo)

        assert names(skills) == ["alpha"]
        assert skills[0].directory_path == (repo / ".claude/skills/alpha").resolve()
        assert skills[0].manifest_path == (repo / ".claude/skills/alpha/SKILL.md").resolve()

    def test_multiple_priority_directories(self, repo, write_file):
        write_file("skills/b/SKILL.md", skill_md("b"))
        write_file("skills/.curated/a/SKILL.md", skill_md("a"))
        write_file(".cursor/skills/c/SKILL.md", skill_md("c"))

        assert names(discover_all(repo)) == ["a", "b", "c"]

    def test_priority_hit_skips_recursive_walk(self, repo, write_file):
        write_file("skills/listed/SKILL.md", skill_md("listed"))
        write_file("elsewhere/deep/hidden/SKILL.md", skill_md("hidden"))

        assert names(discover_all(repo)) == ["listed"]
        assert names(discover_all(repo, full_depth=True)) == ["hidden", "listed"]

    def test_only_immediate_children_are_checked(self, repo, write_file):
        """Nested skills below a priority child need the recursive walk."""
        write_file("skills/top/SKILL.md", skill_md("top"))
        write_file("skills/group/nested/SKILL.md", skill_md("nested"))

        assert names(discover_all(repo)) == ["top"]

    def test_symlinked_skill_in_priority_directory(self, repo, write_file):
        target = write_file("shared/linked/SKILL.md", skill_md("linked")).parent
        (repo / "skills").mkdir()
        os.symlink(target, repo / "skills" / "linked")

        skills = discover_all(repo)

        assert names(skills) == ["linked"]
        assert skills[0].directory_path == repo.resolve() / "skills" / "linked"


class TestRecursiveFallback:
    def test_finds_skill_outside_conventional_directories(self, repo, write_file):
        write_file("custom/catalog/my-skill/SKILL.md", skill_md("my-skill"))

        skills = discover_all(repo)

        assert names(skills) == ["my-skill"]
        assert skills[0].directory_path == (repo / "custom/catalog/my-skill").resolve()

    def test_skips_vendor_and_build_directories(self, repo, write_file):
        for skipped in ("node_modules", ".git", "dist", "build", "__pycache__"):
            write_file(f"{skipped}/pkg/SKILL.md", skill_md(f"in-{skipped}"))
        write_file("src/real/SKILL.md", skill_md("real"))

        assert names(discover_all(repo)) == ["real"]

    def test_depth_limit(self, repo, write_file):
        """Manifests deeper than five levels below the root are ignored."""
        write_file("a/b/c/d/e/SKILL.md", skill_md("depth-five"))
        write_file("a/b/c/d/e/f/SKILL.md", skill_md("depth-six"))

        assert names(discover_all(repo)) == ["depth-five"]

    def test_case_insensitive_manifest_name(self, repo, write_file):
        write_file("misc/lower/skill.md", skill_md("lower"))

        skills = discover_all(repo)

        assert names(skills) == ["lower"]
        assert skills[0].manifest_path.name == "skill.md"


class TestValidation:
    def test_missing_description_is_not_a_skill(self, repo, write_file):
        write_file("skills/nodesc/SKILL.md", skill_md("nodesc", description=None))

        with pytest.raises(NoSkillsFoundError):
            discover_all(repo)

    def test_empty_repository(self, repo):
        with pytest.raises(NoSkillsFoundError) as exc:
            discover_all(repo)

        assert exc.value.repo_root == repo

    def test_invalid_manifests_are_skipped(self, repo, write_file):
        write_file("skills/broken/SKILL.md", "---\nname: [oops\n---\n")
        write_file("skills/good/SKILL.md", skill_md("good", description="works"))

        skills = discover_all(repo)

        assert names(skills) == ["good"]
        assert skills[0].description == "works"


class TestDuplicates:
    def test_first_occurrence_wins(self, repo, write_file):
        """The earlier priority directory keeps the name."""
        write_file("skills/dup/SKILL.md", skill_md("dup", description="from skills"))
        write_file(".claude/skills/dup/SKILL.md", skill_md("dup", description="from claude"))

        skills = discover_all(repo)

        assert len(skills) == 1
        assert skills[0].description == "from skills"

    def test_strict_duplicates_raise(self, repo, write_file):
        write_file("skills/dup/SKILL.md", skill_md("dup"))
        write_file(".claude/skills/dup/SKILL.md", skill_md("dup"))

        with pytest.raises(DuplicateSkillNameError) as exc:
            discover_all(repo, strict_duplicates=True)

        assert exc.value.name == "dup"
        assert exc.value.first == (repo / "skills/dup/SKILL.md").resolve()
        assert exc.value.second == (repo / ".claude/skills/dup/SKILL.md").resolve()

    def test_each_manifest_is_collected_once(self, repo, write_file):
        """A full-depth walk revisits priority directories without duplicating them."""
        write_file("skills/one/SKILL.md", skill_md("one"))

        candidates = collect_candidates(repo, full_depth=True)

        assert [c.name for c in candidates] == ["one"]


class TestDeterminism:
    def test_results_sorted_and_stable(self, repo, write_file):
        for name in ("zeta", "alpha", "mu"):
            write_file(f"skills/{name}/SKILL.md", skill_md(name))

        first = discover_all(repo)
        second = discover_all(repo)

        assert names(first) == ["alpha", "mu", "zeta"]
        assert first == second

    def test_paths_are_absolute(self, repo, write_file, monkeypatch):
        write_file("skills/one/SKILL.md", skill_md("one"))
        monkeypatch.chdir(repo.parent)

        skills = discover_all(Path("repo"))

        assert skills[0].directory_path.is_absolute()
        assert skills[0].manifest_path.is_absolute()


class TestDiscoverSource:
    def test_local_source(self, repo, write_file):
        write_file("skills/local-one/SKILL.md", skill_md("local-one"))

        with discover_source(str(repo)) as skills:
            assert names(skills) == ["local-one"]
            assert skills[0].manifest_path.exists()

        # local working copies are never removed
        assert (repo / "skills/local-one/SKILL.md").exists()

    def test_cloned_source_is_cleaned_up(self, git_repo):
        with discover_source(f"file://{git_repo}") as skills:
            manifest = skills[0].manifest_path
            assert manifest.exists()

        assert names(skills) == ["hello-skill"]
        assert not manifest.exists()

    def test_unsupported_source(self):
        with pytest.raises(UnsupportedSourceError):
            with discover_source("not a source"):
                pass
