"""Typer entry point for the dflow CLI."""

import signal
from dataclasses import dataclass
from types import FrameType, SimpleNamespace
from typing import Callable

import typer

from . import __version__
from . import log as dflow_log
from .commands import config as config_cmd
from .commands import delete as delete_cmd
from .commands import init as init_cmd
from .commands import start as start_cmd
from .errors import DflowError

BANNER_TEMPLATE = """
                ██████╗ ███████╗██╗      ██████╗ ██╗    ██╗
                ██╔══██╗██╔════╝██║     ██╔═══██╗██║    ██║
                ██║  ██║█████╗  ██║     ██║   ██║██║ █╗ ██║
                ██║  ██║██╔══╝  ██║     ██║   ██║██║███╗██║
                ██████╔╝██║     ███████╗╚██████╔╝╚███╔███╔╝
                ╚═════╝ ╚═╝     ╚══════╝ ╚═════╝  ╚══╝╚══╝
                   dflow {version} - Git branching made simple
"""


@dataclass(frozen=True)
class StartupInfo:
    """Process-wide presentation settings handed to the CLI at startup."""

    version: str
    banner: str


def default_startup() -> StartupInfo:
    return StartupInfo(
        version=__version__, banner=BANNER_TEMPLATE.format(version=__version__)
    )


def _startup(ctx: typer.Context) -> StartupInfo:
    root = ctx.find_root()
    if isinstance(root.obj, StartupInfo):
        return root.obj
    startup = default_startup()
    root.obj = startup
    return startup


app = typer.Typer(
    name="dflow",
    help="Manage Git feature/release/hotfix/bugfix flows from a .dflow.yaml file.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)
config_app = typer.Typer(
    help="Manage dflow configuration for this project.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


def _run(handler: Callable[[object], None], args: SimpleNamespace) -> None:
    try:
        handler(args)
    except DflowError as exc:
        dflow_log.error(exc.message)
        if exc.recovery_hint:
            dflow_log.warning(f"hint: {exc.recovery_hint}")
        raise typer.Exit(code=1) from exc


def _validate_log_level(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in dflow_log.LEVEL_NAMES:
        raise typer.BadParameter(
            f"expected one of: {', '.join(dflow_log.LEVEL_NAMES)}"
        )
    return normalized


def _version_callback(ctx: typer.Context, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    typer.echo(f"dflow {_startup(ctx).version}")
    raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        callback=_validate_log_level,
        help="Log level: trace, debug, info, success, warning, error.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
    no_banner: bool = typer.Option(
        False, "--no-banner", help="Do not print the startup banner."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the dflow version and exit.",
    ),
) -> None:
    """dflow: Git branching made simple."""
    del version
    if log_level is not None:
        dflow_log.set_level(log_level)
    if no_color:
        dflow_log.set_no_color(True)
    if ctx.resilient_parsing or no_banner:
        return
    dflow_log.banner(_startup(ctx).banner)


@app.command("init")
def init_command(
    push: bool | None = typer.Option(
        None,
        "--push/--no-push",
        help="Publish the base branches to origin without asking.",
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Overwrite an existing .dflow.yaml without asking."
    ),
) -> None:
    """Initialize your dflow branching configuration."""
    _run(init_cmd.init_workflow, SimpleNamespace(push=push, yes=yes))


@app.command("start")
def start_command(
    branch_type: str = typer.Argument(
        ...,
        metavar="TYPE",
        help="Branch type: feat|feature, release, hot|hotfix|fix, bug|bugfix.",
    ),
    name: list[str] = typer.Argument(
        ..., help="Short branch name; words are joined with hyphens."
    ),
    push: bool | None = typer.Option(
        None,
        "--push/--no-push",
        help="Publish the new branch to origin without asking.",
    ),
) -> None:
    """Create and switch to a new feature, release, hotfix or bugfix branch."""
    _run(
        start_cmd.start_branch,
        SimpleNamespace(branch_type=branch_type, name=list(name), push=push),
    )


@app.command("delete")
def delete_command(
    branch: str = typer.Argument(
        ...,
        help="Exact name of the branch to delete.",
        autocompletion=delete_cmd.complete_local_branches,
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
) -> None:
    """Delete a branch locally and on origin (if it exists there)."""
    _run(delete_cmd.delete_branch, SimpleNamespace(branch=branch, yes=yes))


@config_app.command("set-author")
def set_author_command(
    name: str | None = typer.Argument(None, help="Author name (prompted if omitted)."),
    email: str | None = typer.Option(
        None, "--email", help="Author email (prompted if omitted)."
    ),
) -> None:
    """Set project-local author name and email for dflow."""
    _run(config_cmd.set_author, SimpleNamespace(name=name, email=email))


@config_app.command("get-author")
def get_author_command() -> None:
    """Show project-local dflow author and email."""
    _run(config_cmd.get_author, SimpleNamespace())


@config_app.command("list")
def list_config_command() -> None:
    """List all dflow configuration values for this project."""
    _run(config_cmd.list_config, SimpleNamespace())


@config_app.command("show")
def show_config_command() -> None:
    """Print the .dflow.yaml workflow configuration as JSON."""
    _run(config_cmd.show_config, SimpleNamespace())


def _handle_interrupt(signum: int, frame: FrameType | None) -> None:
    del signum, frame
    dflow_log.error("Execution cancelled by user.")
    raise SystemExit(1)


def main(startup: StartupInfo | None = None) -> None:
    """Console-script entry point."""
    signal.signal(signal.SIGINT, _handle_interrupt)
    signal.signal(signal.SIGTERM, _handle_interrupt)
    app(obj=startup or default_startup())


if __name__ == "__main__":
    main()
