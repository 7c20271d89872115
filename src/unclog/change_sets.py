"""Change sets: the unreleased bucket or the contents of one release."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .components import ComponentResolver
from .config import Config
from .errors import ExpectedDirError
from .sections import ChangeSetSection, read_section
from .utils import is_dir, list_dir, log_debug, read_text_opt, trim_newlines


@dataclass(frozen=True)
class ChangeSet:
    """An optional summary followed by titled sections of entries."""

    maybe_summary: Optional[str]
    sections: tuple[ChangeSetSection, ...]

    def is_empty(self) -> bool:
        return not self.maybe_summary and self.are_sections_empty()

    def are_sections_empty(self) -> bool:
        return all(section.is_empty() for section in self.sections)


def read_change_set(path: Path, config: Config, resolver: ComponentResolver) -> ChangeSet:
    """Load a change set from a directory of section directories."""
    log_debug(f"loading change set from {path}")
    if not is_dir(path):
        raise ExpectedDirError(path)
    summary = read_text_opt(path / config.change_sets.summary_filename)
    section_dirs = [child for child in list_dir(path) if child.is_dir()]
    sections = sorted(
        (read_section(child, config, resolver) for child in section_dirs),
        key=lambda section: section.title,
    )
    return ChangeSet(
        maybe_summary=trim_newlines(summary) if summary is not None else None,
        sections=tuple(sections),
    )


def read_change_set_opt(
    path: Path, config: Config, resolver: ComponentResolver
) -> Optional[ChangeSet]:
    """Like `read_change_set`, but return None if the directory is missing."""
    if not path.exists():
        return None
    return read_change_set(path, config, resolver)
