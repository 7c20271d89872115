"""Add command for creating unreleased entries."""

from __future__ import annotations

from typing import Optional

import click

from ..changelog import add_unreleased_entry, add_unreleased_entry_from_template
from ..utils import abort_on_user_interrupt, log_info, log_success
from ..vcs import PlatformId
from ._core import CLIContext, _mask_comment_block, changelog_errors

__all__ = ["ADD_CHANGE_TEMPLATE", "add", "_prompt_entry_details"]

ADD_CHANGE_TEMPLATE = """\
<!--
    Add your entry's details here (in Markdown format).

    If you don't change this message, or if this file is empty, the entry will
    not be created. -->
"""


def _prompt_entry_details(editor: Optional[str] = None) -> str:
    log_info("launching editor for entry details (set EDITOR or pass --message to skip).")
    try:
        edited = click.edit(ADD_CHANGE_TEMPLATE, editor=editor, extension=".md")
    except (click.exceptions.Abort, KeyboardInterrupt) as exc:
        abort_on_user_interrupt(exc)
    if edited is None or edited == ADD_CHANGE_TEMPLATE:
        return ""
    return _mask_comment_block(edited)


def _platform_id(issue_no: Optional[int], pull_request: Optional[int]) -> Optional[PlatformId]:
    if issue_no is not None and pull_request is not None:
        raise click.UsageError("Use only one of --issue-no or --pull-request, not both.")
    if issue_no is not None:
        return PlatformId.issue(issue_no)
    if pull_request is not None:
        return PlatformId.pull_request(pull_request)
    return None


@click.command("add")
@click.option(
    "--section",
    "-s",
    required=True,
    help="ID of the section to add the entry to (e.g. breaking-changes).",
)
@click.option(
    "--id",
    "-i",
    "entry_id",
    required=True,
    help="ID of the entry, starting with its issue or PR number (e.g. 820-change-api).",
)
@click.option(
    "--component",
    help="ID of a configured component the entry belongs to.",
)
@click.option(
    "--issue-no",
    "-n",
    type=click.IntRange(min=1),
    help="Issue number the entry refers to (used with --message).",
)
@click.option(
    "--pull-request",
    "-r",
    type=click.IntRange(min=1),
    help="Pull request number the entry refers to (used with --message).",
)
@click.option(
    "--message",
    "-m",
    help="Render the entry from the change template with this message.",
)
@click.option(
    "--editor",
    "-e",
    help="Editor command used to write the entry (defaults to $VISUAL or $EDITOR).",
)
@click.pass_obj
def add(
    ctx: CLIContext,
    section: str,
    entry_id: str,
    component: Optional[str],
    issue_no: Optional[int],
    pull_request: Optional[int],
    message: Optional[str],
    editor: Optional[str],
) -> None:
    """Add a change to the unreleased set of changes."""
    config = ctx.ensure_config()
    platform_id = _platform_id(issue_no, pull_request)
    if message is not None:
        if platform_id is None:
            raise click.UsageError("--message requires either --issue-no or --pull-request.")
        with changelog_errors():
            entry_path = add_unreleased_entry_from_template(
                config,
                ctx.changelog_dir,
                section,
                component,
                entry_id,
                platform_id,
                message,
            )
        log_success(f"added entry {entry_path}")
        return

    details = _prompt_entry_details(editor)
    if not details:
        log_info("no changes to entry, not adding new entry to changelog.")
        return
    with changelog_errors():
        entry_path = add_unreleased_entry(
            config, ctx.changelog_dir, section, component, entry_id, details
        )
    log_success(f"added entry {entry_path}")
