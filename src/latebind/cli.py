"""Latebind command-line interface."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from . import __version__
from .bootstrap import BootstrapError, build_loader, run_entry
from .config import Config, ConfigError, load_config
from .logging import configure_logging
from .registry import ModuleNotFoundError

app = typer.Typer(help="Run lazily loaded module graphs from a manifest.")
LOGGER = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Stores shared CLI options."""

    config_path: Path | None


@app.callback()
def _latebind(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "-c",
            "--config",
            help="Path to the manifest (env LATEBIND_CONFIG or ./latebind.yaml).",
        ),
    ] = None,
) -> None:
    """Capture global CLI options."""

    resolved = config.expanduser() if config else None
    ctx.obj = CLIState(config_path=resolved)


@app.command()
def run(
    ctx: typer.Context,
    entry: Annotated[
        str | None,
        typer.Argument(help="Module to resolve (defaults to the manifest 'entry')."),
    ] = None,
    show_exports: Annotated[
        bool,
        typer.Option("--show-exports", help="Print the public exports of the entry module."),
    ] = False,
) -> None:
    """Resolve the entry module and everything it requires."""

    config = _load_environment(_state(ctx))
    try:
        loader, exports = run_entry(config, entry)
    except (BootstrapError, ModuleNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"Loaded: {', '.join(loader.module_names)}")
    if show_exports:
        typer.echo("Exports:")
        for name, value in _public_exports(exports):
            typer.echo(f"  {name}: {value!r}")


@app.command()
def modules(ctx: typer.Context) -> None:
    """List modules declared in the manifest."""

    config = _load_environment(_state(ctx))
    try:
        loader = build_loader(config)
    except BootstrapError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    for name in loader.registry.names:
        marker = "*" if name == config.entry else " "
        typer.echo(f"{marker} {name}: {config.modules[name]}")


@app.command()
def version() -> None:
    """Print the installed latebind version."""

    typer.echo(__version__)


def _state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise RuntimeError("CLI state missing from context.")
    return state


def _load_environment(state: CLIState) -> Config:
    try:
        config = load_config(state.config_path)
        configure_logging(config.logging)
    except ConfigError as exc:
        _config_failure(exc)
    return config


def _config_failure(exc: ConfigError) -> NoReturn:
    typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(2) from exc


def _public_exports(exports: Any) -> list[tuple[str, Any]]:
    if isinstance(exports, dict):
        items = exports.items()
    elif hasattr(exports, "__dict__"):
        items = vars(exports).items()
    else:
        return [("<value>", exports)]
    public = [(str(name), value) for name, value in items if not str(name).startswith("_")]
    return sorted(public, key=lambda item: item[0])


def main() -> None:  # pragma: no cover - delegated to Typer
    app()


__all__ = ["app", "main"]
