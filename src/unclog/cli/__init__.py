"""CLI package for unclog.

This package contains the modular CLI implementation:
- _core.py: CLIContext, error translation, main entry point
- _init.py: init command
- _build.py: build command
- _add.py: add command for creating entries
- _release.py: release command
- _duplicates.py: find-duplicates command
"""

from __future__ import annotations

from ._core import (
    CLIContext,
    VERSION_FLAGS,
    changelog_errors,
    create_cli_context,
    _create_cli_group,
    _mask_comment_block,
    main,
)
from ._add import ADD_CHANGE_TEMPLATE, add
from ._build import build
from ._duplicates import find_duplicates_cmd
from ._init import init
from ._release import RELEASE_SUMMARY_TEMPLATE, release

# Create the CLI group after all commands are imported
cli = _create_cli_group()

# Register all commands with the cli group
cli.add_command(init)
cli.add_command(build)
cli.add_command(add)
cli.add_command(release)
cli.add_command(find_duplicates_cmd)


__all__ = [
    # Core
    "cli",
    "main",
    "CLIContext",
    "VERSION_FLAGS",
    "changelog_errors",
    "create_cli_context",
    "_mask_comment_block",
    # Commands
    "ADD_CHANGE_TEMPLATE",
    "RELEASE_SUMMARY_TEMPLATE",
    "add",
    "build",
    "find_duplicates_cmd",
    "init",
    "release",
]
