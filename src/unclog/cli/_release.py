"""Release command for moving unreleased changes into a versioned folder."""

from __future__ import annotations

from typing import Optional

import click

from ..changelog import prepare_release_dir
from ..utils import (
    abort_on_user_interrupt,
    format_bold,
    log_info,
    log_success,
    read_text,
    write_text,
)
from ._core import CLIContext, _mask_comment_block, changelog_errors

__all__ = ["RELEASE_SUMMARY_TEMPLATE", "release"]

RELEASE_SUMMARY_TEMPLATE = """\
<!--
    Add a summary for the release here.

    If you don't change this message, or if this file is empty, the release
    will not be created. -->
"""


@click.command("release")
@click.option(
    "--version",
    "version",
    required=True,
    help="Version of the new release (e.g. v0.1.0).",
)
@click.option(
    "--editor",
    "-e",
    help="Editor command used to write the release summary (defaults to $VISUAL or $EDITOR).",
)
@click.pass_obj
def release(ctx: CLIContext, version: str, editor: Optional[str]) -> None:
    """Release all unreleased changes under the given version."""
    config = ctx.ensure_config()
    summary_path = (
        ctx.changelog_dir / config.unreleased.folder / config.change_sets.summary_filename
    )
    with changelog_errors():
        if not summary_path.exists():
            write_text(summary_path, RELEASE_SUMMARY_TEMPLATE)
        log_info(f"launching editor for release summary {summary_path}.")
        try:
            click.edit(editor=editor, filename=str(summary_path))
        except (click.exceptions.Abort, KeyboardInterrupt) as exc:
            abort_on_user_interrupt(exc)
        summary = read_text(summary_path)
        if summary == RELEASE_SUMMARY_TEMPLATE or not _mask_comment_block(summary):
            log_info("no changes to release summary, not creating a new release.")
            return
        release_path = prepare_release_dir(config, ctx.changelog_dir, version)
    log_success(f"released {format_bold(version)} to {release_path}")
