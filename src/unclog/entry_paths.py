"""Addresses of entries within a loaded changelog, and traversal in render order.

Each path type records which branch was taken at one level of the tree
(unreleased or a specific release, general entries or a specific component
section) and refers to the objects of the changelog it was produced from. Two
paths are equal when they refer to the very same objects, so entries with
identical content at different positions remain distinct.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional

from .change_sets import ChangeSet
from .config import Config
from .entries import Entry
from .releases import Release
from .sections import ChangeSetSection, ComponentSection

if TYPE_CHECKING:
    from .changelog import Changelog


class _IdentityPath:
    """Equality and hashing by identity of the referenced tree nodes."""

    def _identity(self) -> tuple[object, ...]:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._identity() == other._identity()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._identity())


@dataclass(frozen=True, eq=False)
class ChangeSetComponentPath(_IdentityPath):
    """A general entry of a section, or an entry of one of its component sections."""

    entry: Entry
    component_section: Optional[ComponentSection] = None

    @property
    def is_general(self) -> bool:
        return self.component_section is None

    def as_path(self) -> Path:
        if self.component_section is None:
            return Path(self.entry.filename)
        return Path(self.component_section.id) / self.entry.filename

    def _identity(self) -> tuple[object, ...]:
        return (id(self.component_section), id(self.entry))


@dataclass(frozen=True, eq=False)
class ChangeSetSectionPath(_IdentityPath):
    change_set_section: ChangeSetSection
    component_path: ChangeSetComponentPath

    @property
    def entry(self) -> Entry:
        return self.component_path.entry

    def as_path(self) -> Path:
        return Path(self.change_set_section.id) / self.component_path.as_path()

    def _identity(self) -> tuple[object, ...]:
        return (id(self.change_set_section), self.component_path._identity())


@dataclass(frozen=True, eq=False)
class EntryChangeSetPath(_IdentityPath):
    change_set: ChangeSet
    section_path: ChangeSetSectionPath

    @property
    def entry(self) -> Entry:
        return self.section_path.entry

    def as_path(self) -> Path:
        return self.section_path.as_path()

    def _identity(self) -> tuple[object, ...]:
        return (id(self.change_set), self.section_path._identity())


@dataclass(frozen=True, eq=False)
class EntryReleasePath(_IdentityPath):
    """An entry in the unreleased change set (``release is None``) or in a release."""

    change_set_path: EntryChangeSetPath
    release: Optional[Release] = None

    @property
    def is_unreleased(self) -> bool:
        return self.release is None

    @property
    def entry(self) -> Entry:
        return self.change_set_path.entry

    def as_path(self, config: Config) -> Path:
        if self.release is None:
            root = Path(config.unreleased.folder)
        else:
            root = Path(self.release.id)
        return root / self.change_set_path.as_path()

    def _identity(self) -> tuple[object, ...]:
        return (id(self.release), self.change_set_path._identity())


@dataclass(frozen=True, eq=False)
class EntryPath(_IdentityPath):
    """The full route from a changelog down to one of its entries."""

    changelog: "Changelog"
    release_path: EntryReleasePath

    @property
    def entry(self) -> Entry:
        return self.release_path.entry

    def as_path(self, config: Config) -> Path:
        """Reconstruct the entry's file path relative to the changelog directory."""
        return self.release_path.as_path(config)

    def _identity(self) -> tuple[object, ...]:
        return (id(self.changelog), self.release_path._identity())


def iter_section_paths(section: ChangeSetSection) -> Iterator[ChangeSetSectionPath]:
    """Yield general entries, then each component section's entries."""
    for entry in section.entries:
        yield ChangeSetSectionPath(section, ChangeSetComponentPath(entry))
    for component_section in section.component_sections:
        for entry in component_section.entries:
            yield ChangeSetSectionPath(section, ChangeSetComponentPath(entry, component_section))


def iter_change_set_paths(change_set: ChangeSet) -> Iterator[EntryChangeSetPath]:
    for section in change_set.sections:
        for section_path in iter_section_paths(section):
            yield EntryChangeSetPath(change_set, section_path)


def iter_release_paths(changelog: "Changelog") -> Iterator[EntryReleasePath]:
    """Yield unreleased entries first, then each release's entries in order."""
    if changelog.maybe_unreleased is not None:
        for change_set_path in iter_change_set_paths(changelog.maybe_unreleased):
            yield EntryReleasePath(change_set_path)
    for release in changelog.releases:
        for change_set_path in iter_change_set_paths(release.changes):
            yield EntryReleasePath(change_set_path, release)


def iter_entry_paths(changelog: "Changelog") -> Iterator[EntryPath]:
    """Yield a path to every entry of the changelog, in render order."""
    for release_path in iter_release_paths(changelog):
        yield EntryPath(changelog, release_path)


def find_duplicates(changelog: "Changelog") -> list[tuple[EntryPath, EntryPath]]:
    """Return each unordered pair of distinct positions holding identical entry text."""
    duplicates: list[tuple[EntryPath, EntryPath]] = []
    seen: set[tuple[EntryPath, EntryPath]] = set()
    for path_a in iter_entry_paths(changelog):
        for path_b in iter_entry_paths(changelog):
            if path_a == path_b or path_a.entry.details != path_b.entry.details:
                continue
            if (path_a, path_b) in seen:
                continue
            duplicates.append((path_a, path_b))
            seen.add((path_a, path_b))
            seen.add((path_b, path_a))
    return duplicates
