"""Entry loading and ordering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .config import SORT_ENTRIES_BY_TEXT, Config
from .errors import CannotObtainNameError, InvalidEntryIdError
from .utils import log_debug, read_text, trim_newlines


@dataclass(frozen=True)
class Entry:
    """A single change note, backed by one file."""

    filename: str
    id: int
    details: str

    def __str__(self) -> str:
        return self.details


def extract_entry_id(filename: str) -> int:
    """Return the number formed by the leading digits of a filename.

    >>> extract_entry_id("0128-another-issue.md")
    128
    """
    digits = 0
    for char in filename:
        if not ("0" <= char <= "9"):
            break
        digits += 1
    if digits == 0 or digits == len(filename):
        raise InvalidEntryIdError(filename)
    return int(filename[:digits])


def is_entry_file(path: Path, config: Config) -> bool:
    """Return whether a directory child is an entry file."""
    return path.is_file() and path.suffix == f".{config.change_sets.entry_ext}"


def read_entry(path: Path) -> Entry:
    """Load a single entry from the given file."""
    log_debug(f"loading entry from {path}")
    filename = path.name
    if not filename:
        raise CannotObtainNameError(path)
    return Entry(
        filename=filename,
        id=extract_entry_id(filename),
        details=trim_newlines(read_text(path)),
    )


def sort_entries(entries: Iterable[Entry], config: Config) -> list[Entry]:
    """Return entries in their configured order, keeping ties in input order."""
    if config.change_set_sections.sort_entries_by == SORT_ENTRIES_BY_TEXT:
        return sorted(entries, key=lambda entry: entry.details)
    return sorted(entries, key=lambda entry: entry.id)


def read_entries_sorted(paths: Iterable[Path], config: Config) -> tuple[Entry, ...]:
    """Load entries from the given files and order them."""
    return tuple(sort_entries((read_entry(path) for path in paths), config))
