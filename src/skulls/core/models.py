"""Data models shared by discovery, resolution and installation."""

import queue
from enum import StrEnum
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, field_validator


class FrontmatterRecord(BaseModel):
    """Metadata parsed from a manifest's frontmatter block."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str = ""


class SkillDescriptor(BaseModel):
    """A skill found on disk during a single discovery pass."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str = ""
    directory_path: Path
    manifest_path: Path


class SourceLocator(BaseModel):
    """Clonable location produced from a user-supplied source string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    location: str
    local: bool = False


class InstallRequest(BaseModel):
    """Parameters for a single install."""

    model_config = ConfigDict(extra="forbid")

    source: str
    skill_id: str
    target_directory: str
    force: bool = False

    @field_validator("source", "skill_id", "target_directory")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must be non-empty")
        return v


class InstallStage(StrEnum):
    NORMALIZE = "normalize"
    CLONE = "clone"
    VERIFY = "verify"
    REMOVE = "remove"
    COPY = "copy"


class InstallEvent(BaseModel):
    """Progress notification emitted by the installer."""

    model_config = ConfigDict(frozen=True)

    stage: InstallStage
    message: str
    done: bool = False


ProgressSink = Callable[[InstallEvent], None]


class QueueSink:
    """Progress sink that forwards events into a queue.

    Lets a UI thread poll for events while the install runs elsewhere.
    """

    def __init__(self, events: "queue.Queue[InstallEvent]"):
        self.events = events

    def __call__(self, event: InstallEvent) -> None:
        self.events.put(event)
