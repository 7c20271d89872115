"""Tests for rendering new entries from the change template."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from unclog.changelog import render_unreleased_entry_from_template
from unclog.config import Config
from unclog.errors import MissingProjectUrlError, TemplateRenderError
from unclog.templates import wrap_change
from unclog.vcs import PlatformId

PROJECT_CONFIG = replace(Config(), project_url="https://github.com/org/project")


def test_wrap_change_indents_continuation_lines() -> None:
    text = "- " + " ".join(["word"] * 12)
    assert wrap_change(text, 20) == (
        "- word word word\n  word word word\n  word word word\n  word word word"
    )


def test_wrap_change_does_not_break_long_words() -> None:
    url = "https://github.com/org/project/issues/123456789"
    assert wrap_change(f"- See {url}", 10) == f"- See\n  {url}"


def test_render_with_builtin_template(tmp_path: Path) -> None:
    rendered = render_unreleased_entry_from_template(
        PROJECT_CONFIG,
        tmp_path,
        "features",
        None,
        "12-thing",
        PlatformId.pull_request(12),
        "Add a thing",
    )
    assert rendered == "- Add a thing ([\\#12](https://github.com/org/project/pull/12))"


def test_render_with_custom_template(tmp_path: Path) -> None:
    (tmp_path / "change-template.md").write_text(
        "{{ bullet }} [{{ component }}] {{ message }} ({{ section }}, issue {{ issue }})\n",
        encoding="utf-8",
    )
    config = replace(PROJECT_CONFIG, bullet_style="*")

    rendered = render_unreleased_entry_from_template(
        config, tmp_path, "bug-fixes", "cli", "3-fix", PlatformId.issue(3), "Fix it"
    )

    assert rendered == "* [cli] Fix it (bug-fixes, issue 3)"


def test_render_requires_project_url(tmp_path: Path) -> None:
    with pytest.raises(MissingProjectUrlError):
        render_unreleased_entry_from_template(
            Config(), tmp_path, "features", None, "1-a", PlatformId.issue(1), "A"
        )


def test_render_reports_template_errors(tmp_path: Path) -> None:
    template_path = tmp_path / "change-template.md"
    template_path.write_text("{{ message ", encoding="utf-8")

    with pytest.raises(TemplateRenderError) as excinfo:
        render_unreleased_entry_from_template(
            PROJECT_CONFIG, tmp_path, "features", None, "1-a", PlatformId.issue(1), "A"
        )
    assert excinfo.value.path == template_path
