"""
October Bootstrapper — CLI entrypoint.

Usage:
    october-bootstrapper --help
    october-bootstrapper install
    october-bootstrapper install --force --php /usr/bin/php8.1
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from bootstrapper import __version__
from bootstrapper.core.observability.logging_config import resolve_level, setup_logging

_STYLES = {
    "info": {},
    "comment": {"fg": "yellow"},
    "error": {"fg": "red"},
}


def click_reporter(message: str, style: str = "info") -> None:
    """Render orchestrator progress on the terminal."""
    click.secho(message, **_STYLES.get(style, {}))


@click.group()
@click.version_option(version=__version__, prog_name="october-bootstrapper")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """October Bootstrapper — set up October CMS from october.yaml."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    setup_logging(level=resolve_level(verbose=verbose, quiet=quiet, debug=debug))


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Behave as if run for the first time. Existing files may get overwritten.",
)
@click.option("--php", default="php", show_default=True, help="Path to a custom PHP binary.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to october.yaml (default: <root>/october.yaml).",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory to install into (default: cwd).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the run summary as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    force: bool,
    php: str,
    config_path: Path | None,
    root: Path | None,
    as_json: bool,
) -> None:
    """Install October CMS and everything declared in october.yaml."""
    from bootstrapper.core.engine.orchestrator import Orchestrator

    root = (root or Path.cwd()).resolve()
    quiet = ctx.obj.get("quiet", False)

    def reporter(message: str, style: str = "info") -> None:
        if as_json or (quiet and style == "info"):
            return
        click_reporter(message, style)

    orchestrator = Orchestrator(
        root=root,
        config_path=config_path,
        force=force,
        php=php or "php",
        reporter=reporter,
    )
    ok = orchestrator.run()

    if as_json:
        click.echo(json.dumps(orchestrator.state.to_dict(), indent=2))

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    cli()
