"""Core CLI infrastructure: context, error translation, and the entry point."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as metadata_version
from pathlib import Path
from typing import Iterator, Optional

import click

from .. import __version__ as package_version
from ..changelog import Changelog, read_changelog
from ..config import CONFIG_FILENAME, DEFAULT_CHANGELOG_DIR, Config, load_config
from ..errors import ChangelogError
from ..utils import abort_on_user_interrupt, configure_logging, log_debug

__all__ = [
    "CLIContext",
    "VERSION_FLAGS",
    "changelog_errors",
    "create_cli_context",
    "cli",
    "_create_cli_group",
    "_mask_comment_block",
    "main",
]

VERSION_FLAGS = {"--version", "-V"}


def _resolve_cli_version() -> str:
    try:
        return metadata_version("unclog")
    except PackageNotFoundError:
        return package_version


@contextmanager
def changelog_errors() -> Iterator[None]:
    """Surface changelog and configuration failures as click errors."""
    try:
        yield
    except (ChangelogError, ValueError) as error:
        raise click.ClickException(str(error)) from error


@dataclass
class CLIContext:
    """Shared command context."""

    changelog_dir: Path
    config_path: Path
    _config: Optional[Config] = None

    def ensure_config(self) -> Config:
        if self._config is None:
            with changelog_errors():
                self._config = load_config(self.config_path)
        return self._config

    def reset_config(self, config: Config) -> None:
        self._config = config

    def load_changelog(self) -> Changelog:
        config = self.ensure_config()
        with changelog_errors():
            return read_changelog(self.changelog_dir, config)


def _mask_comment_block(text: str) -> str:
    """Strip HTML comment blocks and trailing whitespace from editor input."""
    lines = []
    in_comment = False
    for line in text.splitlines():
        stripped = line.strip()
        if in_comment:
            if "-->" in stripped:
                in_comment = False
            continue
        if stripped.startswith("<!--"):
            in_comment = "-->" not in stripped
            continue
        lines.append(line.rstrip())
    return "\n".join(lines).strip()


def create_cli_context(
    *,
    path: Path = Path(DEFAULT_CHANGELOG_DIR),
    config_file: Path = Path(CONFIG_FILENAME),
    debug: bool = False,
    quiet: bool = False,
) -> CLIContext:
    """Return a CLIContext using the same resolution logic as the CLI entry point."""

    configure_logging(debug, quiet)

    config_path = config_file if config_file.is_absolute() else path / config_file
    log_debug(f"using changelog directory: {path}")
    log_debug(f"using config path: {config_path}")
    return CLIContext(changelog_dir=path, config_path=config_path)


# Assigned in the package __init__ once all commands are defined.
cli: click.Group = None  # type: ignore[assignment]


def _create_cli_group() -> click.Group:
    """Create the main CLI group. Called after all commands are defined."""

    @click.group(context_settings={"help_option_names": ["-h", "--help"]})
    @click.option(
        "--path",
        "-p",
        type=click.Path(path_type=Path, file_okay=False),
        default=DEFAULT_CHANGELOG_DIR,
        show_default=True,
        help="Path to the changelog directory.",
    )
    @click.option(
        "--config-file",
        "-c",
        type=click.Path(path_type=Path, dir_okay=False),
        default=CONFIG_FILENAME,
        show_default=True,
        help="Configuration file, relative to the changelog directory unless absolute.",
    )
    @click.option(
        "--debug",
        "-d",
        is_flag=True,
        help="Enable debug logging.",
    )
    @click.option(
        "--quiet",
        "-q",
        is_flag=True,
        help="Only log errors (overrides --debug).",
    )
    @click.pass_context
    def _cli(
        ctx: click.Context,
        path: Path,
        config_file: Path,
        debug: bool,
        quiet: bool,
    ) -> None:
        """Build your changelog from a directory of entries."""

        ctx.obj = create_cli_context(path=path, config_file=config_file, debug=debug, quiet=quiet)

    return click.version_option(version=_resolve_cli_version())(_cli)


def main(argv: list[str] | None = None) -> int:
    """Entry point for console_scripts."""
    # Import cli here to avoid circular import at module load time
    from . import cli

    args = list(argv) if argv is not None else list(sys.argv[1:])

    if any(flag in args for flag in VERSION_FLAGS):
        click.echo(_resolve_cli_version())
        return 0

    try:
        result = cli.main(args=args, prog_name="unclog", standalone_mode=False)
    except click.ClickException as exc:
        exc.show(file=sys.stderr)
        exit_code = getattr(exc, "exit_code", 1)
        return exit_code if isinstance(exit_code, int) else 1
    except click.exceptions.Abort as exc:
        try:
            abort_on_user_interrupt(exc)
        except click.exceptions.Exit as exit_exc:
            return exit_exc.exit_code if isinstance(exit_exc.exit_code, int) else 130
    except KeyboardInterrupt as exc:
        try:
            abort_on_user_interrupt(exc)
        except click.exceptions.Exit as exit_exc:
            exit_code = getattr(exit_exc, "exit_code", 130)
            return exit_code if isinstance(exit_code, int) else 130
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    # Non-standalone click returns the exit code of ctx.exit() calls.
    return result if isinstance(result, int) else 0
