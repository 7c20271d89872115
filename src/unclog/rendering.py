"""Markdown rendering of a loaded changelog.

Rendering never re-sorts: it walks the model in the order the loader built
it, so the same model always produces the same document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .change_sets import ChangeSet
from .config import Config
from .entries import Entry
from .errors import NoUnreleasedEntriesError
from .releases import Release
from .sections import ChangeSetSection, ComponentSection

if TYPE_CHECKING:
    from .changelog import Changelog

BULLET_MARKERS = ("*", "-")
OVERFLOW_INDENT_EXTRA = 2


def indent_bulleted_text(text: str, indent: int, overflow_indent: int) -> list[str]:
    """Indent Markdown bullet lines by `indent` and continuations by `overflow_indent`."""
    lines = []
    for line in text.split("\n"):
        stripped = line.strip()
        width = indent if stripped.startswith(BULLET_MARKERS) else overflow_indent
        lines.append(" " * width + stripped)
    return lines


def indent_entries(entries: Iterable[Entry], indent: int, overflow_indent: int) -> list[str]:
    lines: list[str] = []
    for entry in entries:
        lines.extend(indent_bulleted_text(entry.details, indent, overflow_indent))
    return lines


def render_component_section(component_section: ComponentSection, config: Config) -> str:
    """Render a component's entries as an indented block under its name."""
    if component_section.maybe_path is not None:
        name = f"[{component_section.name}]({component_section.maybe_path})"
    else:
        name = component_section.name
    indent = config.components.entry_indent
    lines = [f"{config.bullet_style} {name}"]
    lines.extend(
        indent_entries(component_section.entries, indent, indent + OVERFLOW_INDENT_EXTRA)
    )
    return "\n".join(lines)


def render_section(section: ChangeSetSection, config: Config) -> str:
    component_sections = [cs for cs in section.component_sections if not cs.is_empty()]
    lines: list[str] = []
    if not component_sections:
        lines.extend(entry.details for entry in section.entries)
    else:
        if section.entries:
            indent = config.components.entry_indent
            lines.append(f"{config.bullet_style} {config.components.general_entries_title}")
            lines.extend(indent_entries(section.entries, indent, indent + OVERFLOW_INDENT_EXTRA))
        lines.extend(render_component_section(cs, config) for cs in component_sections)
    body = "\n".join(lines)
    return f"### {section.title}\n\n{body}"


def render_change_set(change_set: ChangeSet, config: Config) -> str:
    paragraphs: list[str] = []
    if change_set.maybe_summary:
        paragraphs.append(change_set.maybe_summary)
    paragraphs.extend(
        render_section(section, config) for section in change_set.sections if not section.is_empty()
    )
    return "\n\n".join(paragraphs)


def render_release(release: Release, config: Config) -> str:
    paragraphs = [f"## {release.id}"]
    if not release.changes.is_empty():
        paragraphs.append(render_change_set(release.changes, config))
    return "\n\n".join(paragraphs)


def _unreleased_paragraphs(changelog: "Changelog", config: Config) -> list[str]:
    unreleased = changelog.maybe_unreleased
    if unreleased is None or unreleased.is_empty():
        raise NoUnreleasedEntriesError()
    return [config.unreleased.heading, render_change_set(unreleased, config)]


def render_changelog(
    changelog: "Changelog", config: Config, *, include_unreleased: bool = True
) -> str:
    """Render the whole document, ending in exactly one newline."""
    paragraphs = [config.heading]
    if changelog.is_empty():
        paragraphs.append(config.empty_msg)
    else:
        if changelog.prologue:
            paragraphs.append(changelog.prologue)
        if include_unreleased and changelog.has_unreleased():
            paragraphs.extend(_unreleased_paragraphs(changelog, config))
        paragraphs.extend(render_release(release, config) for release in changelog.releases)
        if changelog.epilogue:
            paragraphs.append(changelog.epilogue)
    return "\n\n".join(paragraphs) + "\n"


def render_unreleased(changelog: "Changelog", config: Config) -> str:
    """Render only the unreleased heading and changes."""
    return "\n\n".join(_unreleased_paragraphs(changelog, config))
