"""Click entry point: map a cluster's namespaces to stdout."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import click

from kubemapper import __version__
from kubemapper.app import run_mapper
from kubemapper.config import load_config
from kubemapper.errors import ConnectivityError
from kubemapper.observability.logging import get_logger, setup_logging
from kubemapper.render.tree import Line, LineStyle

_STYLE_COLORS: dict[LineStyle, str | None] = {
    LineStyle.PLAIN: None,
    LineStyle.TITLE: "green",
    LineStyle.BANNER: "red",
    LineStyle.SECTION: "blue",
    LineStyle.GROUP: "yellow",
    LineStyle.USAGE: "cyan",
    LineStyle.ERROR: "red",
}


def make_emitter(color: bool) -> Callable[[Line], None]:
    """Return an emit callback writing lines to stdout, coloured if *color*."""

    def _emit(line: Line) -> None:
        fg = _STYLE_COLORS[line.style] if color else None
        text = click.style(line.text, fg=fg, bold=line.style == LineStyle.GROUP) if fg else line.text
        click.echo(text, color=color)

    return _emit


@click.command(name="kubemapper")
@click.option(
    "--kubeconfig",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the kubeconfig file (default: $KUBECONFIG or ~/.kube/config).",
)
@click.option(
    "--namespace",
    "-n",
    "namespaces",
    multiple=True,
    help="Only map this namespace. Repeatable.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level for the JSON log on stderr (default: $KUBEMAPPER_LOG_LEVEL or warning).",
)
@click.option("--color/--no-color", default=None, help="Colourise output (default: $KUBEMAPPER_COLOR or on).")
@click.version_option(version=__version__, prog_name="kubemapper")
def cli(kubeconfig: str | None, namespaces: tuple[str, ...], log_level: str | None, color: bool | None) -> None:
    """Map relationships between Ingresses, Services, Pods and ConfigMaps."""
    try:
        config = load_config(kubeconfig=kubeconfig, log_level=log_level, color=color, namespaces=namespaces)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(config.log.level)
    try:
        asyncio.run(run_mapper(config, make_emitter(config.output.color)))
    except ConnectivityError as exc:
        get_logger("cli").critical("fatal startup error", error=str(exc))
        click.echo(f"Error initializing resource mapper: {exc}", err=True)
        raise SystemExit(1) from exc
