"""Models and errors for the remote skills directory."""

from pydantic import BaseModel, ConfigDict, Field


class RemoteSkill(BaseModel):
    """A skill listed by the remote directory."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = ""
    skill_id: str = Field(default="", alias="skillId")
    name: str = ""
    installs: int = 0
    source: str = ""


class PopularParseError(Exception):
    """Homepage didn't contain the embedded popular-skills payload."""


class PreviewUnavailableError(Exception):
    """A SKILL.md preview couldn't be fetched for a skill."""
