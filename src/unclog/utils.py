"""Shared utilities for logging, output, and filesystem access."""

from __future__ import annotations

import logging
import shutil
import stat
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console

from .errors import ChangelogIOError, ExpectedDirError

CHECKMARK = "\033[92;1m✔\033[0m"
CROSS = "\033[31m✘\033[0m"
INFO = "\033[94;1mi\033[0m"
WARNING = "○"
DEBUG_PREFIX = "\033[95m◆\033[0m"

CHECKMARK_PREFIX = f"{CHECKMARK} "
CROSS_PREFIX = f"{CROSS} "
INFO_PREFIX = f"{INFO} "
WARNING_PREFIX = f"{WARNING} "
DEBUG_PREFIX_WITH_SPACE = f"{DEBUG_PREFIX} "
BOLD = "\033[1m"
RESET = "\033[0m"

GITKEEP_FILENAME = ".gitkeep"

_LOGGER_NAME = "unclog"
_LOGGER = logging.getLogger(_LOGGER_NAME)

console = Console(stderr=True)


def configure_logging(debug: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the shared logger used across the CLI."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO
    _LOGGER.setLevel(level)
    while _LOGGER.handlers:
        handler = _LOGGER.handlers.pop()
        handler.close()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)
    _LOGGER.addHandler(handler)
    _LOGGER.propagate = False
    return _LOGGER


def _log(prefix: str, message: str, level: int) -> None:
    logger = logging.getLogger(_LOGGER_NAME)
    lines = message.splitlines() or [""]
    for line in lines:
        if line:
            logger.log(level, f"{prefix}{line}")
        else:
            logger.log(level, prefix.rstrip())


def log_info(message: str) -> None:
    """Log an informational message with the standardized prefix."""
    _log(INFO_PREFIX, message, logging.INFO)


def log_success(message: str) -> None:
    """Log a success message with the standardized prefix."""
    _log(CHECKMARK_PREFIX, message, logging.INFO)


def log_error(message: str) -> None:
    """Log an error message with the standardized prefix."""
    _log(CROSS_PREFIX, message, logging.ERROR)


def log_warning(message: str) -> None:
    """Log a warning message with the standardized prefix."""
    _log(WARNING_PREFIX, message, logging.WARNING)


def log_debug(message: str) -> None:
    """Log a debug message with the standardized prefix."""
    _log(DEBUG_PREFIX_WITH_SPACE, message, logging.DEBUG)


def abort_on_user_interrupt(exc: BaseException | None = None) -> NoReturn:
    """Log a standardized cancellation message and exit the command."""

    log_error("operation cancelled by user (Ctrl+C).")
    raise click.exceptions.Exit(130) from exc


def format_bold(text: str) -> str:
    """Return text wrapped in ANSI bold styling."""
    return f"{BOLD}{text}{RESET}"


def emit_output(content: str, *, newline: bool = True) -> None:
    """Emit raw command output to stdout for machine consumption."""
    click.echo(content, nl=newline, err=False)


def trim_newlines(text: str) -> str:
    """Strip trailing newline and carriage-return characters."""
    return text.rstrip("\r\n")


def read_text(path: Path) -> str:
    """Read a UTF-8 file, wrapping failures with the offending path."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ChangelogIOError(path, exc) from exc


def read_text_opt(path: Path) -> Optional[str]:
    """Read a UTF-8 file, returning None when it does not exist."""
    if not path.exists():
        return None
    return read_text(path)


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 file, wrapping failures with the offending path."""
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ChangelogIOError(path, exc) from exc


def list_dir(path: Path) -> list[Path]:
    """Return the immediate children of a directory, sorted by name."""
    try:
        return sorted(path.iterdir(), key=lambda child: child.name)
    except OSError as exc:
        raise ChangelogIOError(path, exc) from exc


def is_dir(path: Path) -> bool:
    """Return whether a path is a directory, wrapping stat failures."""
    try:
        return stat.S_ISDIR(path.stat().st_mode)
    except OSError as exc:
        raise ChangelogIOError(path, exc) from exc


def ensure_dir(path: Path) -> None:
    """Create a directory if it is missing and check that it is one."""
    if not path.exists():
        try:
            path.mkdir()
        except OSError as exc:
            raise ChangelogIOError(path, exc) from exc
        log_info(f"created directory {path}")
    if not path.is_dir():
        raise ExpectedDirError(path)


def copy_file(source: Path, destination: Path) -> None:
    """Copy a file, wrapping failures with the source path."""
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise ChangelogIOError(source, exc) from exc


def move_path(source: Path, destination: Path) -> None:
    """Rename a file or directory, wrapping failures with the source path."""
    try:
        source.rename(destination)
    except OSError as exc:
        raise ChangelogIOError(source, exc) from exc


def remove_gitkeep(directory: Path) -> None:
    """Delete a `.gitkeep` placeholder from a directory, if present."""
    gitkeep = directory / GITKEEP_FILENAME
    if not gitkeep.exists():
        return
    try:
        gitkeep.unlink()
    except OSError as exc:
        raise ChangelogIOError(gitkeep, exc) from exc
    log_debug(f"removed {gitkeep}")
