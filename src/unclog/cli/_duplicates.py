"""Find-duplicates command for spotting entries with identical text."""

from __future__ import annotations

import click
from rich.table import Table

from ..utils import console, log_success, log_warning
from ._core import CLIContext, changelog_errors

__all__ = ["find_duplicates_cmd"]


@click.command("find-duplicates")
@click.pass_context
def find_duplicates_cmd(click_ctx: click.Context) -> None:
    """List pairs of entries whose text is identical."""
    ctx: CLIContext = click_ctx.obj
    config = ctx.ensure_config()
    changelog = ctx.load_changelog()
    with changelog_errors():
        duplicates = changelog.find_duplicates()
    if not duplicates:
        log_success("no duplicate entries found.")
        return

    table = Table()
    table.add_column("#", style="dim", justify="right", no_wrap=True)
    table.add_column("Entry")
    table.add_column("Duplicate of")
    for index, (path_a, path_b) in enumerate(duplicates, start=1):
        table.add_row(
            str(index),
            path_a.as_path(config).as_posix(),
            path_b.as_path(config).as_posix(),
        )
    console.print(table)
    log_warning(f"found {len(duplicates)} pair(s) of duplicate entries.")
    click_ctx.exit(1)
