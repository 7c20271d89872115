"""Init command for creating a fresh changelog directory."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..changelog import generate_config, init_dir
from ..utils import log_success
from ._core import CLIContext, changelog_errors

__all__ = ["init"]


@click.command("init")
@click.option(
    "--prologue",
    "prologue_path",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="File to copy into the changelog directory as its prologue.",
)
@click.option(
    "--epilogue",
    "epilogue_path",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="File to copy into the changelog directory as its epilogue.",
)
@click.option(
    "--gen-config",
    "-g",
    is_flag=True,
    help="Also write a default configuration file.",
)
@click.option(
    "--remote",
    "-r",
    default="origin",
    show_default=True,
    help="Git remote used to infer the project URL when generating the configuration.",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite an existing configuration file.",
)
@click.pass_obj
def init(
    ctx: CLIContext,
    prologue_path: Optional[Path],
    epilogue_path: Optional[Path],
    gen_config: bool,
    remote: str,
    force: bool,
) -> None:
    """Create and initialize a fresh changelog directory."""
    config = ctx.ensure_config()
    with changelog_errors():
        init_dir(config, ctx.changelog_dir, prologue_path, epilogue_path)
        if gen_config:
            ctx.reset_config(generate_config(ctx.config_path, ctx.changelog_dir, remote, force=force))
    log_success(f"initialized changelog directory {ctx.changelog_dir}")
