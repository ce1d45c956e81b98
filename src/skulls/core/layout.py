"""Repository layout conventions for skill bundles.

This is the single source for where skills live inside a repository. Local
discovery and the remote preview ranking both read from it.
"""

from pathlib import Path

MANIFEST_FILENAME = "SKILL.md"

# Repository-relative directories holding one folder per skill, in search order.
PRIORITY_SEARCH_DIRS: tuple[str, ...] = (
    "skills",
    "skills/.curated",
    "skills/.experimental",
    "skills/.system",
    ".agent/skills",
    ".agents/skills",
    ".claude/skills",
    ".cline/skills",
    ".codebuddy/skills",
    ".codex/skills",
    ".commandcode/skills",
    ".continue/skills",
    ".cursor/skills",
    ".github/skills",
    ".goose/skills",
    ".iflow/skills",
    ".junie/skills",
    ".kilocode/skills",
    ".kiro/skills",
    ".mux/skills",
    ".neovate/skills",
    ".opencode/skills",
    ".openhands/skills",
    ".pi/skills",
    ".qoder/skills",
    ".roo/skills",
    ".trae/skills",
    ".windsurf/skills",
    ".zencoder/skills",
)

MAX_RECURSIVE_DEPTH = 5

SKIP_DIRS = frozenset({".git", "node_modules", "dist", "build", "__pycache__"})


def should_skip_dir(name: str) -> bool:
    return name in SKIP_DIRS


def is_manifest_name(filename: str) -> bool:
    return filename.lower() == MANIFEST_FILENAME.lower()


def is_priority_skill_path(rel_path: str) -> bool:
    """Check whether a repo-relative manifest path sits in a conventional spot."""
    rel = rel_path.strip().strip("/")
    if rel == MANIFEST_FILENAME:
        return True
    for root in PRIORITY_SEARCH_DIRS:
        if rel.startswith(root.strip("/") + "/"):
            return True
    return False


def find_manifest(directory: Path) -> Path | None:
    """
    Locate the manifest file directly inside a directory.

    The lookup is case-insensitive; the exact ``SKILL.md`` spelling wins when
    more than one variant is present.

    Args:
        directory: Directory to inspect

    Returns:
        Path to the manifest, or None if the directory has none
    """
    exact = directory / MANIFEST_FILENAME
    if exact.is_file():
        return exact

    try:
        candidates = sorted(
            entry
            for entry in directory.iterdir()
            if is_manifest_name(entry.name) and entry.is_file()
        )
    except (FileNotFoundError, NotADirectoryError):
        return None

    return candidates[0] if candidates else None
