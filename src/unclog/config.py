"""Configuration helpers for unclog."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, MutableMapping, cast

import yaml

from .components import Component, parse_components
from .utils import log_debug, log_info

BulletStyle = Literal["-", "*"]
SortReleasesBy = Literal["version", "date"]
SortEntriesBy = Literal["id", "entry-text"]

CONFIG_FILENAME = "config.yaml"
DEFAULT_CHANGELOG_DIR = ".changelog"

BULLET_STYLE_DASH: BulletStyle = "-"
BULLET_STYLE_ASTERISK: BulletStyle = "*"
BULLET_STYLE_CHOICES: tuple[BulletStyle, ...] = (BULLET_STYLE_DASH, BULLET_STYLE_ASTERISK)

SORT_RELEASES_BY_VERSION: SortReleasesBy = "version"
SORT_RELEASES_BY_DATE: SortReleasesBy = "date"
SORT_RELEASES_BY_CHOICES: tuple[SortReleasesBy, ...] = (
    SORT_RELEASES_BY_VERSION,
    SORT_RELEASES_BY_DATE,
)

SORT_ENTRIES_BY_ID: SortEntriesBy = "id"
SORT_ENTRIES_BY_TEXT: SortEntriesBy = "entry-text"
SORT_ENTRIES_BY_CHOICES: tuple[SortEntriesBy, ...] = (SORT_ENTRIES_BY_ID, SORT_ENTRIES_BY_TEXT)

DEFAULT_CHANGE_TEMPLATE_FILENAME = "change-template.md"
DEFAULT_WRAP = 80
DEFAULT_HEADING = "# CHANGELOG"
DEFAULT_EMPTY_MSG = "Nothing to see here! Add some entries to get started."
DEFAULT_PROLOGUE_FILENAME = "prologue.md"
DEFAULT_EPILOGUE_FILENAME = "epilogue.md"
DEFAULT_RELEASE_DATE_FORMATS: tuple[str, ...] = ("%F",)


def default_config_path(changelog_dir: Path) -> Path:
    """Return the default config path for a changelog directory."""
    return changelog_dir / CONFIG_FILENAME


@dataclass(frozen=True)
class UnreleasedConfig:
    """Where unreleased entries live and how they are titled."""

    folder: str = "unreleased"
    heading: str = "## Unreleased"


@dataclass(frozen=True)
class ChangeSetsConfig:
    """File naming inside change set directories."""

    summary_filename: str = "summary.md"
    entry_ext: str = "md"


@dataclass(frozen=True)
class ChangeSetSectionsConfig:
    """Ordering of entries inside sections."""

    sort_entries_by: SortEntriesBy = SORT_ENTRIES_BY_ID


@dataclass(frozen=True)
class ComponentsConfig:
    """Rendering of component sub-sections and the declared components."""

    general_entries_title: str = "General"
    entry_indent: int = 2
    all: dict[str, Component] = field(default_factory=dict)


@dataclass(frozen=True)
class Config:
    """Structured representation of the changelog config."""

    project_url: str | None = None
    change_template: str = DEFAULT_CHANGE_TEMPLATE_FILENAME
    wrap: int = DEFAULT_WRAP
    heading: str = DEFAULT_HEADING
    bullet_style: BulletStyle = BULLET_STYLE_DASH
    empty_msg: str = DEFAULT_EMPTY_MSG
    prologue_filename: str = DEFAULT_PROLOGUE_FILENAME
    epilogue_filename: str = DEFAULT_EPILOGUE_FILENAME
    sort_releases_by: tuple[SortReleasesBy, ...] = (SORT_RELEASES_BY_VERSION,)
    release_date_formats: tuple[str, ...] = DEFAULT_RELEASE_DATE_FORMATS
    unreleased: UnreleasedConfig = field(default_factory=UnreleasedConfig)
    change_sets: ChangeSetsConfig = field(default_factory=ChangeSetsConfig)
    change_set_sections: ChangeSetSectionsConfig = field(default_factory=ChangeSetSectionsConfig)
    components: ComponentsConfig = field(default_factory=ComponentsConfig)


def _string_option(raw: MutableMapping[str, Any], key: str, default: str, *, scope: str = "") -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config option '{scope}{key}' must be a string.")
    return value


def _int_option(raw: MutableMapping[str, Any], key: str, default: int, *, scope: str = "") -> int:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Config option '{scope}{key}' must be a non-negative integer.")
    return value


def _mapping_option(raw: MutableMapping[str, Any], key: str) -> MutableMapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, MutableMapping):
        raise ValueError(f"Config option '{key}' must be a mapping.")
    return value


def _string_list_option(raw: MutableMapping[str, Any], key: str) -> tuple[str, ...] | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Config option '{key}' must be a list of strings.")
    return tuple(value)


def parse_config(raw: MutableMapping[str, Any]) -> Config:
    """Build a Config from a parsed YAML mapping."""
    defaults = Config()

    project_url_raw = raw.get("project_url")
    project_url = str(project_url_raw).strip() if project_url_raw else None

    bullet_style_raw = _string_option(raw, "bullet_style", defaults.bullet_style).strip()
    if bullet_style_raw not in BULLET_STYLE_CHOICES:
        raise ValueError('Config option \'bullet_style\' must be one of: "-", "*"')
    bullet_style = cast(BulletStyle, bullet_style_raw)

    sort_releases_by = defaults.sort_releases_by
    sort_releases_raw = _string_list_option(raw, "sort_releases_by")
    if sort_releases_raw is not None:
        for criterion in sort_releases_raw:
            if criterion not in SORT_RELEASES_BY_CHOICES:
                allowed = ", ".join(SORT_RELEASES_BY_CHOICES)
                raise ValueError(f"Config option 'sort_releases_by' must only contain: {allowed}")
        sort_releases_by = cast(tuple[SortReleasesBy, ...], sort_releases_raw)

    release_date_formats = _string_list_option(raw, "release_date_formats")
    if release_date_formats is None:
        release_date_formats = defaults.release_date_formats

    unreleased_raw = _mapping_option(raw, "unreleased")
    unreleased = UnreleasedConfig(
        folder=_string_option(
            unreleased_raw, "folder", defaults.unreleased.folder, scope="unreleased."
        ),
        heading=_string_option(
            unreleased_raw, "heading", defaults.unreleased.heading, scope="unreleased."
        ),
    )

    change_sets_raw = _mapping_option(raw, "change_sets")
    change_sets = ChangeSetsConfig(
        summary_filename=_string_option(
            change_sets_raw,
            "summary_filename",
            defaults.change_sets.summary_filename,
            scope="change_sets.",
        ),
        entry_ext=_string_option(
            change_sets_raw, "entry_ext", defaults.change_sets.entry_ext, scope="change_sets."
        ).lstrip("."),
    )

    sections_raw = _mapping_option(raw, "change_set_sections")
    sort_entries_by = _string_option(
        sections_raw,
        "sort_entries_by",
        defaults.change_set_sections.sort_entries_by,
        scope="change_set_sections.",
    )
    if sort_entries_by not in SORT_ENTRIES_BY_CHOICES:
        allowed = ", ".join(SORT_ENTRIES_BY_CHOICES)
        raise ValueError(
            f"Config option 'change_set_sections.sort_entries_by' must be one of: {allowed}"
        )

    components_raw = _mapping_option(raw, "components")
    components = ComponentsConfig(
        general_entries_title=_string_option(
            components_raw,
            "general_entries_title",
            defaults.components.general_entries_title,
            scope="components.",
        ),
        entry_indent=_int_option(
            components_raw,
            "entry_indent",
            defaults.components.entry_indent,
            scope="components.",
        ),
        all=parse_components(components_raw.get("all")),
    )

    return Config(
        project_url=project_url,
        change_template=_string_option(raw, "change_template", defaults.change_template),
        wrap=_int_option(raw, "wrap", defaults.wrap),
        heading=_string_option(raw, "heading", defaults.heading),
        bullet_style=bullet_style,
        empty_msg=_string_option(raw, "empty_msg", defaults.empty_msg),
        prologue_filename=_string_option(raw, "prologue_filename", defaults.prologue_filename),
        epilogue_filename=_string_option(raw, "epilogue_filename", defaults.epilogue_filename),
        sort_releases_by=sort_releases_by,
        release_date_formats=release_date_formats,
        unreleased=unreleased,
        change_sets=change_sets,
        change_set_sections=ChangeSetSectionsConfig(
            sort_entries_by=cast(SortEntriesBy, sort_entries_by)
        ),
        components=components,
    )


def load_config(path: Path) -> Config:
    """Load the configuration from disk, using defaults if the file is missing."""
    log_info(f"loading configuration from {path}")
    if not path.exists():
        log_info("no changelog configuration file, assuming defaults.")
        return Config()
    with path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid configuration file {path}: {exc}") from exc
    if not isinstance(raw, MutableMapping):
        raise ValueError(f"Config root must be a mapping: {path}")
    return parse_config(raw)


def _dump_component(component: Component) -> dict[str, str]:
    data = {"name": component.name}
    if component.path:
        data["path"] = component.path
    return data


def dump_config(config: Config) -> dict[str, Any]:
    """Convert a Config into a plain dictionary suitable for YAML output."""
    defaults = Config()
    data: dict[str, Any] = {}
    if config.project_url:
        data["project_url"] = config.project_url
    for key in (
        "change_template",
        "wrap",
        "heading",
        "bullet_style",
        "empty_msg",
        "prologue_filename",
        "epilogue_filename",
    ):
        value = getattr(config, key)
        if value != getattr(defaults, key):
            data[key] = value
    if config.sort_releases_by != defaults.sort_releases_by:
        data["sort_releases_by"] = list(config.sort_releases_by)
    if config.release_date_formats != defaults.release_date_formats:
        data["release_date_formats"] = list(config.release_date_formats)
    if config.unreleased != defaults.unreleased:
        data["unreleased"] = {
            "folder": config.unreleased.folder,
            "heading": config.unreleased.heading,
        }
    if config.change_sets != defaults.change_sets:
        data["change_sets"] = {
            "summary_filename": config.change_sets.summary_filename,
            "entry_ext": config.change_sets.entry_ext,
        }
    if config.change_set_sections != defaults.change_set_sections:
        data["change_set_sections"] = {
            "sort_entries_by": config.change_set_sections.sort_entries_by,
        }
    components: dict[str, Any] = {}
    if config.components.general_entries_title != defaults.components.general_entries_title:
        components["general_entries_title"] = config.components.general_entries_title
    if config.components.entry_indent != defaults.components.entry_indent:
        components["entry_indent"] = config.components.entry_indent
    if config.components.all:
        components["all"] = {
            component_id: _dump_component(component)
            for component_id, component in config.components.all.items()
        }
    if components:
        data["components"] = components
    return data


def save_config(config: Config, path: Path) -> None:
    """Write the configuration to disk."""
    log_debug(f"saving configuration to {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(dump_config(config), handle, sort_keys=False)
    log_info(f"saved configuration to {path}")
