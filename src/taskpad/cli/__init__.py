"""CLI package for Taskpad."""

from __future__ import annotations

import logging
import os
import sys
from importlib import metadata
from pathlib import Path

import typer

from taskpad.core.config import (
    CONFIG_FILENAME,
    ConfigContext,
    ConfigManager,
    ConfigurationError,
    default_config_dir,
)
from taskpad.core.models import VALID_FILTERS, VALID_SORT_MODES
from taskpad.session import TaskListState
from taskpad.storage import FileKeyValueStore, MemoryKeyValueStore, TaskPersistence

from .app import CLIApp
from .branding import create_task_panel, themed_console
from .commands.tasks import parse_due

app = typer.Typer(invoke_without_command=True, help="Taskpad terminal task list", no_args_is_help=False)

CLI_CONSOLE = themed_console()
setattr(CLI_CONSOLE, "_taskpad_theme_applied", True)


def styled_echo(message: str = "", *, nl: bool = True, markup: bool = False) -> None:
    """Print using the Taskpad themed console.

    Messages carry user text (task names, paths), so rich markup is off
    unless the caller opts in.
    """
    CLI_CONSOLE.print(message, end="" if not nl else "\n", markup=markup, emoji=markup, highlight=False)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"", "0", "false", "no"}


def _configure_logging(verbose: bool, log_dir: Path | None) -> None:
    root_logger = logging.getLogger()
    if verbose:
        if not root_logger.handlers:
            logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        root_logger.setLevel(logging.DEBUG)
    else:
        if root_logger.handlers:
            root_logger.setLevel(logging.WARNING)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if verbose and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / "taskpad.log", encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logging.getLogger().addHandler(handler)


def _option_value(args: list[str], index: int, flag: str, label: str) -> str:
    if index + 1 >= len(args):
        styled_echo(f"❌ Option '{flag}' requires {label}.")
        raise typer.Exit(code=2)
    return args[index + 1]


def _parse_direct_launch_args(args: list[str]) -> tuple[bool, Path | None, Path | None, bool] | str | None:
    verbose = _env_flag("TASKPAD_DEBUG", default=False)
    config_path: Path | None = None
    data_dir: Path | None = None
    ephemeral = False

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in {"--help", "-h"}:
            return None
        if arg in {"--version", "-V"}:
            return "version"
        if arg in {"--verbose", "-v"}:
            verbose = True
            i += 1
            continue
        if arg == "--ephemeral":
            ephemeral = True
            i += 1
            continue
        if arg == "--config":
            config_path = Path(_option_value(args, i, arg, "a file path")).expanduser()
            i += 2
            continue
        if arg.startswith("--config="):
            config_path = Path(arg.split("=", 1)[1]).expanduser()
            i += 1
            continue
        if arg == "--data-dir":
            data_dir = Path(_option_value(args, i, arg, "a directory")).expanduser()
            i += 2
            continue
        if arg.startswith("--data-dir="):
            data_dir = Path(arg.split("=", 1)[1]).expanduser()
            i += 1
            continue
        return None
    return verbose, config_path, data_dir, ephemeral


def _resolve_project_paths() -> tuple[Path, Path]:
    project_home = Path.cwd() / ".taskpad"
    global_home = default_config_dir()
    global_home.mkdir(parents=True, exist_ok=True)
    return project_home, global_home


def _load_config(config_file: Path | None, data_dir: Path | None) -> tuple[ConfigContext, Path]:
    project_home, global_home = _resolve_project_paths()

    config_override_path: Path | None = None
    if config_file is not None:
        config_override_path = config_file.expanduser()
        if not config_override_path.exists():
            styled_echo(f"❌ Config file '{config_override_path}' not found.")
            raise typer.Exit(code=1)
        config_override_path = config_override_path.resolve()

    project_config_path: Path | None = None
    if config_override_path is None:
        candidate = project_home / CONFIG_FILENAME
        if candidate.exists():
            project_config_path = candidate

    config_manager = ConfigManager(
        config_dir=global_home,
        echo_fn=styled_echo,
        project_config_path=project_config_path,
        override_config_path=config_override_path,
    )
    try:
        context = config_manager.ensure(data_dir=data_dir)
    except ConfigurationError as exc:
        styled_echo(f"❌ {exc}")
        raise typer.Exit(code=1) from exc
    return context, global_home


def _open_state(config_context: ConfigContext, *, ephemeral: bool = False) -> TaskListState:
    if ephemeral:
        store = MemoryKeyValueStore()
    else:
        store = FileKeyValueStore(root=config_context.data_dir)
    state = TaskListState(
        TaskPersistence(store),
        flush_on_exit=config_context.config.flush_on_exit,
    )
    state.open()
    return state


def _launch_shell(
    verbose: bool,
    config_file: Path | None,
    data_dir: Path | None = None,
    *,
    ephemeral: bool = False,
) -> None:
    config_context, global_home = _load_config(config_file, data_dir)
    _configure_logging(verbose, log_dir=global_home / "logs")
    state = _open_state(config_context, ephemeral=ephemeral)
    CLIApp(
        state,
        config_context=config_context,
        history_path=global_home / "history",
    ).run()


@app.command()
def run(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Use an alternate config file and skip project overrides"),  # noqa: B008
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Store tasks in this directory"),  # noqa: B008
    ephemeral: bool = typer.Option(False, "--ephemeral", help="Keep tasks in memory only for this run"),  # noqa: B008
) -> None:
    """Launch the interactive Taskpad shell."""
    _launch_shell(verbose or _env_flag("TASKPAD_DEBUG"), config, data_dir, ephemeral=ephemeral)


@app.command()
def add(
    text: list[str] = typer.Argument(..., help="Task text"),  # noqa: B008
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Use an alternate config file"),  # noqa: B008
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Store tasks in this directory"),  # noqa: B008
) -> None:
    """Add a task without opening the shell."""
    task_text = " ".join(text).strip()
    try:
        due_date = parse_due(due) if due is not None else None
    except ValueError as exc:
        styled_echo(f"❌ {exc}")
        raise typer.Exit(code=2) from exc
    config_context, global_home = _load_config(config, data_dir)
    _configure_logging(_env_flag("TASKPAD_DEBUG"), log_dir=global_home / "logs")
    with _open_state(config_context) as state:
        task = state.add(task_text, due_date)
        if task is None:
            styled_echo("❌ Task text cannot be empty.")
            raise typer.Exit(code=2)
        state.close(flush=True)
    suffix = f" (due {task.due_date})" if task.due_date else ""
    styled_echo(f'✅ Added "{task.text}"{suffix}')


@app.command("list")
def list_tasks(
    filter_: str | None = typer.Option(None, "--filter", help="all, active or completed"),  # noqa: B008
    sort: str | None = typer.Option(None, "--sort", help="manual, due or status"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Use an alternate config file"),  # noqa: B008
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Store tasks in this directory"),  # noqa: B008
) -> None:
    """Print the task list and exit."""
    if filter_ is not None and filter_ not in VALID_FILTERS:
        styled_echo(f"❌ Unknown filter '{filter_}'. Choose from: {', '.join(VALID_FILTERS)}.")
        raise typer.Exit(code=2)
    if sort is not None and sort not in VALID_SORT_MODES:
        styled_echo(f"❌ Unknown sort mode '{sort}'. Choose from: {', '.join(VALID_SORT_MODES)}.")
        raise typer.Exit(code=2)
    config_context, global_home = _load_config(config, data_dir)
    _configure_logging(_env_flag("TASKPAD_DEBUG"), log_dir=global_home / "logs")
    with _open_state(config_context) as state:
        view = state.view(filter_=filter_, sort_mode=sort)  # type: ignore[arg-type]
        CLI_CONSOLE.print(create_task_panel(view, show_progress=config_context.config.show_progress))


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        pkg_version = metadata.version("taskpad")
    except metadata.PackageNotFoundError:
        pkg_version = "0.0.0"
    styled_echo(f"Taskpad CLI version {pkg_version}")


def main() -> None:
    """Console script entrypoint."""
    args = sys.argv[1:]
    direct = _parse_direct_launch_args(args)
    if direct == "version":
        app(args=["version"])
        return
    if isinstance(direct, tuple):
        verbose, config_path, data_dir, ephemeral = direct
        _launch_shell(verbose, config_path, data_dir, ephemeral=ephemeral)
        return
    app(args=args or None)


__all__ = ["CLIApp", "app", "main"]
