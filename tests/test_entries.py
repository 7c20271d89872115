"""Tests for entry loading and ordering."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from unclog.config import ChangeSetSectionsConfig, Config
from unclog.entries import (
    Entry,
    extract_entry_id,
    is_entry_file,
    read_entries_sorted,
    read_entry,
    sort_entries,
)
from unclog.errors import InvalidEntryIdError


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("1-issue.md", 1),
        ("0128-another-issue.md", 128),
        ("42.md", 42),
        ("7_underscore", 7),
    ],
)
def test_extract_entry_id_reads_leading_digits(filename: str, expected: int) -> None:
    assert extract_entry_id(filename) == expected


@pytest.mark.parametrize("filename", ["no-number.md", "", "1234"])
def test_extract_entry_id_rejects_invalid_names(filename: str) -> None:
    with pytest.raises(InvalidEntryIdError) as excinfo:
        extract_entry_id(filename)
    assert excinfo.value.value == filename


def test_read_entry_trims_trailing_newlines(tmp_path: Path) -> None:
    entry_file = tmp_path / "12-fix.md"
    entry_file.write_text("- Fix it\n  properly\n\n", encoding="utf-8")

    entry = read_entry(entry_file)

    assert entry == Entry(filename="12-fix.md", id=12, details="- Fix it\n  properly")
    assert str(entry) == "- Fix it\n  properly"


def test_is_entry_file_checks_extension(tmp_path: Path) -> None:
    config = Config()
    (tmp_path / "1-a.md").write_text("- a", encoding="utf-8")
    (tmp_path / "2-b.txt").write_text("- b", encoding="utf-8")
    (tmp_path / "3-c.md").mkdir()

    assert is_entry_file(tmp_path / "1-a.md", config)
    assert not is_entry_file(tmp_path / "2-b.txt", config)
    assert not is_entry_file(tmp_path / "3-c.md", config)


def test_sort_entries_by_id_is_numeric() -> None:
    entries = [
        Entry("10-b.md", 10, "- B"),
        Entry("2-a.md", 2, "- Z"),
        Entry("1-c.md", 1, "- C"),
    ]
    ordered = sort_entries(entries, Config())
    assert [entry.id for entry in ordered] == [1, 2, 10]


def test_sort_entries_by_text() -> None:
    config = replace(
        Config(), change_set_sections=ChangeSetSectionsConfig(sort_entries_by="entry-text")
    )
    entries = [
        Entry("1-c.md", 1, "- Charlie"),
        Entry("2-a.md", 2, "- Alpha"),
        Entry("3-b.md", 3, "- Bravo"),
    ]
    ordered = sort_entries(entries, config)
    assert [entry.details for entry in ordered] == ["- Alpha", "- Bravo", "- Charlie"]


def test_sort_entries_keeps_ties_in_input_order() -> None:
    entries = [
        Entry("5-second.md", 5, "- Second"),
        Entry("5-first.md", 5, "- First"),
    ]
    ordered = sort_entries(entries, Config())
    assert [entry.filename for entry in ordered] == ["5-second.md", "5-first.md"]


def test_read_entries_sorted_propagates_invalid_ids(tmp_path: Path) -> None:
    good = tmp_path / "1-good.md"
    bad = tmp_path / "bad.md"
    good.write_text("- Good", encoding="utf-8")
    bad.write_text("- Bad", encoding="utf-8")

    with pytest.raises(InvalidEntryIdError):
        read_entries_sorted([good, bad], Config())
