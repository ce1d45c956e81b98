"""Install progress display and post-install messages."""

import io
import os
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status

from skulls.core import InstallEvent, InstallRequest, install_skill
from skulls.utils.config import ConfigStore


class InstallDirNotConfiguredError(Exception):
    """Neither --dir nor a configured default install directory is available."""

    def __init__(self) -> None:
        super().__init__(
            "install dir is not configured yet\n"
            "Use --dir <target-dir> for this run, or set a default:\n"
            "  skulls config set dir <path>"
        )


@dataclass
class InstallDirContext:
    """Where the install directory came from, for the post-install tip."""

    used_flag: bool = False
    configured_dir: str | None = None


def resolve_install_dir(
    store: ConfigStore, flag_value: str | None
) -> tuple[str, InstallDirContext]:
    """
    Pick the install directory: --dir wins over the configured default.

    Raises:
        InstallDirNotConfiguredError: If neither is set
    """
    ctx = InstallDirContext(configured_dir=store.get_install_dir())

    flag_value = (flag_value or "").strip()
    if flag_value:
        ctx.used_flag = True
        return flag_value, ctx
    if ctx.configured_dir:
        return ctx.configured_dir, ctx

    raise InstallDirNotConfiguredError()


class InstallProgress:
    """Progress sink rendering install events as a checklist."""

    def __init__(self, console: Console, status: Status | None = None):
        self.console = console
        self.status = status

    def __call__(self, event: InstallEvent) -> None:
        if event.done:
            self.console.print(f"[green]✓[/green] {escape(event.message)}")
        elif self.status is not None:
            self.status.update(event.message)


def run_install(request: InstallRequest, console: Console) -> Path:
    """
    Run the installer with a progress display.

    On a terminal git output is captured so it doesn't garble the spinner;
    otherwise it streams to the process's own stdout/stderr.
    """
    if not console.is_terminal:
        return install_skill(request, progress=InstallProgress(console))

    git_output = io.StringIO()
    with console.status("Starting…", spinner="dots") as status:
        return install_skill(
            request,
            progress=InstallProgress(console, status),
            git_stdout=git_output,
            git_stderr=git_output,
        )


def compact_path(path: str | Path) -> str:
    """Absolute path with the home directory shown as ``~``."""
    p = str(path).strip()
    if not p or p == "~" or p.startswith(("~/", "~\\")):
        return p

    absolute = os.path.abspath(p)
    home = os.path.normpath(str(Path.home()))
    if absolute == home:
        return "~"
    prefix = home.rstrip(os.sep) + os.sep
    if absolute.startswith(prefix):
        return "~" + os.sep + absolute[len(prefix) :]
    return absolute


def same_path(a: str, b: str) -> bool:
    a, b = a.strip(), b.strip()
    if not a or not b:
        return a == b
    return os.path.abspath(a) == os.path.abspath(b)


def print_install_success(
    console: Console, skill_id: str, source: str, installed_path: Path
) -> None:
    console.print(f"\n[bold]💀 Installed {escape(skill_id.strip())}[/bold]")
    if source.strip():
        console.print(f"   Source: {source.strip()}", markup=False, soft_wrap=True)
    console.print(f"   Path: {compact_path(installed_path)}", markup=False, soft_wrap=True)


def print_install_tip(console: Console, ctx: InstallDirContext, target_dir: str) -> None:
    """Suggest saving --dir as the default when it differs from the config."""
    if not ctx.used_flag:
        return

    command = f'skulls config set dir "{target_dir.strip()}"'
    if ctx.configured_dir is None:
        lines = [
            f"Installed to {compact_path(target_dir)} for this run.",
            "Want to make it your default install dir?",
        ]
    elif same_path(ctx.configured_dir, target_dir):
        return
    else:
        lines = [
            f"Default dir is {compact_path(ctx.configured_dir)}.",
            f"This install used {compact_path(target_dir)}.",
            "To make this your new default:",
        ]

    body = "\n".join(
        [escape(line) for line in lines] + [f"  [bold cyan]{escape(command)}[/bold cyan]"]
    )
    console.print()
    console.print(
        Panel(body, title="☠️ Tip", title_align="left", border_style="bright_black", expand=False)
    )
