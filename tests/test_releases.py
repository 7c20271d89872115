"""Tests for release versions, dates, and ordering."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from pathlib import Path

import pytest
import semver

from conftest import write_files
from unclog.change_sets import ChangeSet
from unclog.components import ConfigComponentResolver
from unclog.config import Config
from unclog.errors import CannotExtractVersionError, InvalidVersionError
from unclog.releases import (
    Release,
    compare_releases,
    extract_release_version,
    parse_release_date,
    parse_release_version,
    read_release,
    sort_releases,
)

EMPTY_CHANGES = ChangeSet(None, ())


def _release(release_id: str, maybe_date: date | None = None) -> Release:
    return Release(
        id=release_id,
        version=parse_release_version(release_id),
        maybe_date=maybe_date,
        changes=EMPTY_CHANGES,
    )


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("v0.1.0", "0.1.0"),
        ("0.2.3", "0.2.3"),
        ("release-v1.0.0-beta.1", "1.0.0-beta.1"),
    ],
)
def test_extract_release_version(name: str, expected: str) -> None:
    assert extract_release_version(name) == expected


def test_extract_release_version_requires_digit() -> None:
    with pytest.raises(CannotExtractVersionError) as excinfo:
        extract_release_version("unreleased-stuff")
    assert excinfo.value.value == "unreleased-stuff"


def test_parse_release_version_rejects_garbage() -> None:
    with pytest.raises(InvalidVersionError) as excinfo:
        parse_release_version("v1.0.0.wat!")
    assert excinfo.value.value == "1.0.0.wat!"


def test_parse_release_version_compares_semantically() -> None:
    assert parse_release_version("v0.10.0") > parse_release_version("v0.9.1")
    assert parse_release_version("v1.0.0") == semver.Version.parse("1.0.0")


@pytest.mark.parametrize(
    ("name", "prerelease", "build"),
    [
        ("v1.0.0-alpha.beta", "alpha.beta", None),
        ("v1.0.0-rc.1", "rc.1", None),
        ("v1.0.0+build.5", None, "build.5"),
        ("v2.0.0-x.7.z.92", "x.7.z.92", None),
        ("v1.0.0-SNAPSHOT+exp.sha.5114f85", "SNAPSHOT", "exp.sha.5114f85"),
    ],
)
def test_parse_release_version_accepts_semver_names(
    name: str, prerelease: str | None, build: str | None
) -> None:
    version = parse_release_version(name)
    assert version.prerelease == prerelease
    assert version.build == build


@pytest.mark.parametrize("name", ["v1.0", "v1", "v1.0.0-", "v01.0.0"])
def test_parse_release_version_rejects_incomplete_semver(name: str) -> None:
    with pytest.raises(InvalidVersionError) as excinfo:
        parse_release_version(name)
    assert excinfo.value.value == name[1:]


def test_parse_release_version_ignores_build_metadata_for_ordering() -> None:
    assert parse_release_version("v1.0.0+build.5") == parse_release_version("v1.0.0")


def test_sort_releases_follows_prerelease_precedence() -> None:
    releases = [
        _release("v1.0.0-beta"),
        _release("v1.0.0"),
        _release("v1.0.0-alpha.1"),
        _release("v0.9.0"),
        _release("v1.0.0-alpha"),
    ]
    ordered = sort_releases(releases, Config())
    assert [release.id for release in ordered] == [
        "v1.0.0",
        "v1.0.0-beta",
        "v1.0.0-alpha.1",
        "v1.0.0-alpha",
        "v0.9.0",
    ]


def test_parse_release_date_tries_formats_in_order() -> None:
    formats = ["%F", "%d %B %Y"]
    assert parse_release_date("2023-01-15", formats) == date(2023, 1, 15)
    assert parse_release_date("15 January 2023", formats) == date(2023, 1, 15)
    assert parse_release_date("Release summary.", formats) is None


def test_read_release_takes_date_from_summary(tmp_path: Path) -> None:
    release_dir = write_files(
        tmp_path / "v0.3.0",
        {"summary.md": "2023-03-04\n\nSome summary.\n", "features/1-a.md": "- A"},
    )
    config = Config()

    release = read_release(release_dir, config, ConfigComponentResolver.from_config(config))

    assert release.id == "v0.3.0"
    assert release.version == semver.Version.parse("0.3.0")
    assert release.maybe_date == date(2023, 3, 4)
    assert release.changes.maybe_summary == "2023-03-04\n\nSome summary."


def test_read_release_trims_summary_date_line(tmp_path: Path) -> None:
    release_dir = write_files(
        tmp_path / "v0.4.0",
        {"summary.md": "  2023-03-04\t\n\nSome summary.\n", "features/1-a.md": "- A"},
    )
    config = Config()

    release = read_release(release_dir, config, ConfigComponentResolver.from_config(config))

    assert release.maybe_date == date(2023, 3, 4)


def test_read_release_rejects_unversioned_directory(tmp_path: Path) -> None:
    release_dir = write_files(tmp_path / "misc", {"features/1-a.md": "- A"})
    config = Config()

    with pytest.raises(CannotExtractVersionError):
        read_release(release_dir, config, ConfigComponentResolver.from_config(config))


def test_sort_releases_by_version_descending() -> None:
    releases = [_release("v0.1.0"), _release("v0.10.0"), _release("v0.2.0")]
    ordered = sort_releases(releases, Config())
    assert [release.id for release in ordered] == ["v0.10.0", "v0.2.0", "v0.1.0"]


def test_sort_releases_by_date_first() -> None:
    config = replace(Config(), sort_releases_by=("date", "version"))
    releases = [
        _release("v0.2.0", date(2023, 1, 1)),
        _release("v0.1.0", date(2023, 5, 1)),
    ]
    ordered = sort_releases(releases, config)
    assert [release.id for release in ordered] == ["v0.1.0", "v0.2.0"]


def test_sort_releases_missing_date_falls_through_to_version() -> None:
    config = replace(Config(), sort_releases_by=("date", "version"))
    releases = [_release("v0.1.0"), _release("v0.2.0", date(2023, 1, 1))]
    ordered = sort_releases(releases, config)
    assert [release.id for release in ordered] == ["v0.2.0", "v0.1.0"]


def test_compare_releases_equal_dates_defer_to_version() -> None:
    older = _release("v0.1.0", date(2023, 1, 1))
    newer = _release("v0.1.1", date(2023, 1, 1))
    assert compare_releases(newer, older, ("date",)) < 0
    assert compare_releases(older, newer, ("date",)) > 0
    assert compare_releases(older, older, ("date", "version")) == 0
