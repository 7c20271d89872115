"""Build command for rendering the changelog to stdout."""

from __future__ import annotations

import click

from ..utils import emit_output
from ._core import CLIContext, changelog_errors

__all__ = ["build"]


@click.command("build")
@click.option(
    "--unreleased",
    "-u",
    is_flag=True,
    help="Only render unreleased changes.",
)
@click.option(
    "--released-only",
    "-r",
    is_flag=True,
    help="Render every release but leave out unreleased changes.",
)
@click.pass_obj
def build(ctx: CLIContext, unreleased: bool, released_only: bool) -> None:
    """Build the changelog and write it to stdout."""
    if unreleased and released_only:
        raise click.UsageError("Use only one of --unreleased or --released-only.")
    config = ctx.ensure_config()
    changelog = ctx.load_changelog()
    with changelog_errors():
        if unreleased:
            emit_output(changelog.render_unreleased(config))
        elif released_only:
            emit_output(changelog.render_released(config), newline=False)
        else:
            emit_output(changelog.render_all(config), newline=False)
