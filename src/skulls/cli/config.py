"""Config subcommand group for the skulls CLI."""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from skulls.utils.config import ConfigStore

config_app = typer.Typer(
    help="Show or change the default install directory",
    no_args_is_help=True,
)
console = Console()

SUPPORTED_KEYS = ("dir",)


def get_config_store(ctx: typer.Context) -> ConfigStore:
    """Config store from the context, created on first use."""
    ctx.ensure_object(dict)
    return ctx.obj.setdefault("config_store", ConfigStore())


@config_app.command("get")
def get(ctx: typer.Context) -> None:
    """Print the configured default install directory."""
    store = get_config_store(ctx)
    try:
        directory = store.get_install_dir()
    except (OSError, ValidationError) as e:
        console.print(f"[red]Error reading {store.path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"dir: {directory or '<not set>'}", markup=False, soft_wrap=True)


@config_app.command("set")
def set_(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Setting to change (only 'dir')")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Save a setting, e.g. `skulls config set dir ~/.claude/skills`."""
    if key not in SUPPORTED_KEYS:
        console.print(f"[red]Unknown config key: {escape(key)}[/red]")
        console.print("Usage: skulls config set dir <path>")
        raise typer.Exit(2)

    store = get_config_store(ctx)
    try:
        saved = store.set_install_dir(value)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(2)
    except OSError as e:
        console.print(f"[red]Error writing {store.path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"Saved dir: {saved}", markup=False, soft_wrap=True)
