"""Change set sections and their per-component sub-sections."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .components import ComponentResolver
from .config import Config
from .entries import Entry, is_entry_file, read_entries_sorted
from .errors import CannotObtainNameError, ComponentNotDefinedError
from .utils import list_dir, log_debug


@dataclass(frozen=True)
class ComponentSection:
    """Entries attributed to one component within a section."""

    id: str
    name: str
    maybe_path: Optional[str]
    entries: tuple[Entry, ...]

    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class ChangeSetSection:
    """A titled category of changes, such as "FEATURES"."""

    id: str
    title: str
    entries: tuple[Entry, ...]
    component_sections: tuple[ComponentSection, ...]

    def is_empty(self) -> bool:
        return not self.entries and all(
            component_section.is_empty() for component_section in self.component_sections
        )


def section_title(section_id: str) -> str:
    """Derive a section title from its directory name.

    >>> section_title("breaking-changes")
    'BREAKING CHANGES'
    """
    return section_id.replace("-", " ").upper()


def _directory_name(path: Path) -> str:
    name = path.name
    if not name:
        raise CannotObtainNameError(path)
    return name


def read_component_section(
    path: Path, config: Config, resolver: ComponentResolver
) -> ComponentSection:
    """Load the entries of one component sub-directory."""
    log_debug(f"loading component section {path}")
    component_id = _directory_name(path)
    component = resolver.resolve(component_id)
    if component is None:
        raise ComponentNotDefinedError(component_id)
    entry_files = [child for child in list_dir(path) if is_entry_file(child, config)]
    return ComponentSection(
        id=component_id,
        name=component.name,
        maybe_path=component.path,
        entries=read_entries_sorted(entry_files, config),
    )


def read_section(path: Path, config: Config, resolver: ComponentResolver) -> ChangeSetSection:
    """Load a section directory: entry files plus component sub-directories."""
    log_debug(f"loading section {path}")
    section_id = _directory_name(path)
    entry_files: list[Path] = []
    component_dirs: list[Path] = []
    for child in list_dir(path):
        if child.is_dir():
            component_dirs.append(child)
        elif is_entry_file(child, config):
            entry_files.append(child)
    component_sections = sorted(
        (read_component_section(child, config, resolver) for child in component_dirs),
        key=lambda component_section: component_section.id,
    )
    return ChangeSetSection(
        id=section_id,
        title=section_title(section_id),
        entries=read_entries_sorted(entry_files, config),
        component_sections=tuple(component_sections),
    )
