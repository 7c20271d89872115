"""Releases: versioned change sets and their ordering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from functools import cmp_to_key
from pathlib import Path
from typing import Iterable, Optional, Sequence

import semver

from .change_sets import ChangeSet, read_change_set
from .components import ComponentResolver
from .config import SORT_RELEASES_BY_DATE, SORT_RELEASES_BY_VERSION, Config, SortReleasesBy
from .errors import CannotExtractVersionError, CannotObtainNameError, InvalidVersionError
from .utils import log_debug, log_warning

# Python's strptime has no shorthand for ISO dates.
_STRFTIME_ALIASES = {"%F": "%Y-%m-%d"}


@dataclass(frozen=True)
class Release:
    """The changes associated with a specific release."""

    id: str
    version: semver.Version
    maybe_date: Optional[date]
    changes: ChangeSet


def extract_release_version(name: str) -> str:
    """Return the substring of a release name starting at its first digit.

    >>> extract_release_version("v0.1.0-beta.1")
    '0.1.0-beta.1'
    """
    for index, char in enumerate(name):
        if "0" <= char <= "9":
            return name[index:]
    raise CannotExtractVersionError(name)


def parse_release_version(name: str) -> semver.Version:
    """Parse the semantic version embedded in a release directory name.

    Pre-release and build metadata follow SemVer 2.0, so ``1.0.0-alpha``
    sorts before ``1.0.0`` and ``1.0.0+build.5`` equals ``1.0.0``.
    """
    version_text = extract_release_version(name)
    try:
        return semver.Version.parse(version_text)
    except ValueError as exc:
        raise InvalidVersionError(version_text) from exc


def _expand_date_format(date_format: str) -> str:
    for alias, expansion in _STRFTIME_ALIASES.items():
        date_format = date_format.replace(alias, expansion)
    return date_format


def parse_release_date(text: str, date_formats: Iterable[str]) -> Optional[date]:
    """Parse a date using the first format that matches the whole text."""
    for date_format in date_formats:
        try:
            return datetime.strptime(text, _expand_date_format(date_format)).date()
        except ValueError:
            continue
    return None


def _summary_date(release_id: str, summary: Optional[str], config: Config) -> Optional[date]:
    if summary is None:
        return None
    first_line = summary.split("\n", 1)[0].strip()
    release_date = parse_release_date(first_line, config.release_date_formats)
    if release_date is None and SORT_RELEASES_BY_DATE in config.sort_releases_by:
        log_warning(
            f"unable to parse date from first line of {release_id}: "
            f'no formats match "{first_line}"'
        )
    return release_date


def read_release(path: Path, config: Config, resolver: ComponentResolver) -> Release:
    """Load a release from a directory named after its version."""
    log_debug(f"loading release from {path}")
    release_id = path.name
    if not release_id:
        raise CannotObtainNameError(path)
    version = parse_release_version(release_id)
    changes = read_change_set(path, config, resolver)
    return Release(
        id=release_id,
        version=version,
        maybe_date=_summary_date(release_id, changes.maybe_summary, config),
        changes=changes,
    )


def _compare_versions_desc(a: Release, b: Release) -> int:
    if a.version == b.version:
        return 0
    return -1 if a.version > b.version else 1


def compare_releases(a: Release, b: Release, criteria: Sequence[SortReleasesBy]) -> int:
    """Order two releases, newest first, by the given criteria.

    A criterion that cannot tell the releases apart (including a date
    comparison where either date is unknown) defers to the next one.
    """
    for criterion in criteria:
        if criterion == SORT_RELEASES_BY_VERSION:
            result = _compare_versions_desc(a, b)
            if result:
                return result
        elif criterion == SORT_RELEASES_BY_DATE:
            if a.maybe_date is None or b.maybe_date is None:
                continue
            if a.maybe_date != b.maybe_date:
                return -1 if a.maybe_date > b.maybe_date else 1
    return _compare_versions_desc(a, b)


def sort_releases(releases: Iterable[Release], config: Config) -> list[Release]:
    """Return releases ordered by the configured criteria."""
    criteria = config.sort_releases_by
    return sorted(releases, key=cmp_to_key(lambda a, b: compare_releases(a, b, criteria)))
