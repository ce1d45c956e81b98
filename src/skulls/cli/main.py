"""CLI interface for skulls using Typer."""

from typing import Annotated

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from skulls.cli.config import config_app, get_config_store
from skulls.cli.install import (
    InstallDirContext,
    InstallDirNotConfiguredError,
    print_install_success,
    print_install_tip,
    resolve_install_dir,
    run_install,
)
from skulls.cli.search import search_remote, select_from_source
from skulls.core import InstallRequest, SkullsError
from skulls.skillsapi import PopularParseError, SkillsApiClient
from skulls.utils.logging import setup_logging

app = typer.Typer(
    name="skulls",
    help="skulls: dead simple skills. Search, pick and install agent skills.",
    add_completion=True,
)
app.add_typer(config_app, name="config")

console = Console()

TargetDirOption = Annotated[
    str | None,
    typer.Option("--dir", "-d", help="Install directory (overrides the configured default)"),
]
ForceOption = Annotated[
    bool,
    typer.Option("--force", "-f", help="Overwrite an existing installation"),
]


def _fail(message: str, code: int = 1) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    return typer.Exit(code)


def _install_dir_or_exit(ctx: typer.Context, flag_value: str | None) -> tuple[str, InstallDirContext]:
    try:
        return resolve_install_dir(get_config_store(ctx), flag_value)
    except InstallDirNotConfiguredError as e:
        raise _fail(str(e), code=2)
    except (OSError, ValidationError) as e:
        raise _fail(f"could not read config: {e}", code=2)


def split_source_skill_shorthand(source: str) -> tuple[str, str] | None:
    """
    Split ``owner/repo@skill`` into (``owner/repo``, ``skill``).

    Only GitHub shorthand qualifies; URLs and paths are left alone.
    """
    s = source.strip()
    if s.count("@") != 1:
        return None
    repo, skill = (part.strip() for part in s.split("@", 1))
    if not repo or not skill:
        return None
    if "://" in repo or repo.startswith(("git@", "/", "./", "../")):
        return None
    parts = repo.split("/")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        return None
    return repo, skill


def _install_and_report(
    source: str,
    skill_id: str,
    install_dir: str,
    force: bool,
    dir_ctx: InstallDirContext,
) -> None:
    try:
        request = InstallRequest(
            source=source,
            skill_id=skill_id,
            target_directory=install_dir,
            force=force,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise _fail(f"invalid install request: {fields} must be non-empty", code=2)

    try:
        installed = run_install(request, console)
    except (SkullsError, OSError) as e:
        raise _fail(str(e))

    print_install_success(console, request.skill_id, request.source, installed)
    print_install_tip(console, dir_ctx, request.target_directory)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    target_dir: TargetDirOption = None,
    force: ForceOption = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress details to stderr")
    ] = False,
) -> None:
    """
    Search the skills directory and install a skill.

    Run without a command for interactive search. Use `skulls add` to install
    from a specific repository.
    """
    store = get_config_store(ctx)
    setup_logging(store.path.parent / "logs", console_output=verbose)

    if ctx.invoked_subcommand is not None:
        return

    install_dir, dir_ctx = _install_dir_or_exit(ctx, target_dir)
    client: SkillsApiClient = ctx.obj.setdefault("api_client", SkillsApiClient())

    try:
        selected = search_remote(client, console)
    except (httpx.HTTPError, PopularParseError) as e:
        raise _fail(f"search failed: {e}")
    if selected is None:
        return

    _install_and_report(selected.source, selected.skill_id, install_dir, force, dir_ctx)


@app.command()
def add(
    ctx: typer.Context,
    source: Annotated[
        str,
        typer.Argument(help="owner/repo, any git URL, or a local path (./repo)"),
    ],
    skill_id: Annotated[
        str | None,
        typer.Argument(help="Skill name; omit to pick from the repository's skills"),
    ] = None,
    target_dir: TargetDirOption = None,
    force: ForceOption = False,
) -> None:
    """Install a skill from a repository.

    Examples:

        skulls add obra/superpowers using-git-worktrees --dir ~/.pi/agent/skills

        skulls add obra/superpowers@test-driven-development
    """
    source = source.strip()
    if not source:
        raise _fail("source must be non-empty", code=2)

    if skill_id is not None:
        skill_id = skill_id.strip()
        if not skill_id:
            raise _fail("skill-id must be non-empty", code=2)

    install_dir, dir_ctx = _install_dir_or_exit(ctx, target_dir)

    if skill_id is None:
        shorthand = split_source_skill_shorthand(source)
        if shorthand is not None:
            source, skill_id = shorthand
        else:
            try:
                selected = select_from_source(source, console)
            except (SkullsError, OSError) as e:
                raise _fail(str(e))
            if selected is None:
                return
            skill_id = selected.name

    _install_and_report(source, skill_id, install_dir, force, dir_ctx)


if __name__ == "__main__":
    app()
