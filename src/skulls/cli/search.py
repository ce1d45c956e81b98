"""Interactive skill selection: remote search and browsing a source."""

import asyncio
import logging

import questionary
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from skulls.core import SkillDescriptor, discover_source
from skulls.skillsapi import PreviewUnavailableError, RemoteSkill, SkillsApiClient

logger = logging.getLogger(__name__)

POPULAR_LIMIT = 50
SEARCH_LIMIT = 10


def show_preview(console: Console, title: str, markdown: str) -> None:
    """Render a SKILL.md as markdown inside a panel."""
    console.print(
        Panel(Markdown(markdown), title=escape(title), title_align="left", border_style="cyan")
    )


def _remote_title(skill: RemoteSkill) -> str:
    title = skill.name or skill.skill_id
    details = [skill.source] if skill.source else []
    if skill.installs:
        details.append(f"{skill.installs:,} installs")
    if details:
        title = f"{title} ({', '.join(details)})"
    return title


def search_remote(client: SkillsApiClient, console: Console) -> RemoteSkill | None:
    """
    Prompt for a query, let the user pick a result and preview it.

    An empty query lists popular skills.

    Returns:
        The confirmed skill, or None if the user backed out

    Raises:
        httpx.HTTPError, PopularParseError: If the directory can't be queried
    """
    query = questionary.text("Search skills (empty for popular):").ask()
    if query is None:
        return None
    query = query.strip()

    with console.status("Searching…" if query else "Loading popular skills…"):
        if query:
            skills = asyncio.run(client.search(query, limit=SEARCH_LIMIT))
        else:
            skills = asyncio.run(client.popular(limit=POPULAR_LIMIT))

    skills = [s for s in skills if s.skill_id.strip() and s.source.strip()]
    if not skills:
        console.print("[yellow]No skills found.[/yellow]")
        return None

    selected = questionary.select(
        "Select a skill:",
        choices=[questionary.Choice(title=_remote_title(s), value=s) for s in skills],
    ).ask()
    if selected is None:
        return None

    try:
        with console.status("Fetching preview…"):
            markdown = asyncio.run(client.fetch_skill_markdown(selected))
        show_preview(console, selected.skill_id, markdown)
    except PreviewUnavailableError as e:
        logger.info(f"Preview unavailable for {selected.skill_id}: {e}")
        console.print("[dim]Preview unavailable.[/dim]")

    if not questionary.confirm(f"Install {selected.skill_id}?", default=True).ask():
        return None
    return selected


def select_from_source(source: str, console: Console) -> SkillDescriptor | None:
    """
    Discover the skills in a source and let the user pick one.

    Returns:
        The confirmed skill, or None if the user backed out

    Raises:
        SkullsError: If the source can't be fetched or holds no skills
    """
    console.print(f"[dim]Discovering skills in {escape(source)}…[/dim]")
    with discover_source(source) as skills:
        selected = questionary.select(
            "Select a skill to install:",
            choices=[
                questionary.Choice(
                    title=f"{s.name} - {s.description}" if s.description else s.name,
                    value=s,
                )
                for s in skills
            ],
        ).ask()
        if selected is None:
            return None
        markdown = selected.manifest_path.read_text(encoding="utf-8")

    show_preview(console, selected.name, markdown)
    if not questionary.confirm(f"Install {selected.name}?", default=True).ask():
        return None
    return selected
