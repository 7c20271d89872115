"""The changelog model, its directory loader, and directory workflows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from .change_sets import ChangeSet, read_change_set_opt
from .components import ComponentResolver, ConfigComponentResolver
from .config import Config, save_config
from .entry_paths import EntryPath, find_duplicates, iter_entry_paths
from .errors import (
    ComponentNotDefinedError,
    ExpectedDirError,
    PathExistsError,
)
from .releases import Release, parse_release_version, read_release, sort_releases
from .rendering import render_changelog, render_unreleased
from .templates import render_entry_from_template
from .utils import (
    GITKEEP_FILENAME,
    copy_file,
    ensure_dir,
    is_dir,
    list_dir,
    log_debug,
    log_info,
    log_warning,
    move_path,
    read_text_opt,
    remove_gitkeep,
    trim_newlines,
    write_text,
)
from .vcs import PlatformId, detect_project_url


@dataclass(frozen=True)
class Changelog:
    """A log of changes for a specific project."""

    maybe_unreleased: Optional[ChangeSet]
    releases: tuple[Release, ...]
    prologue: Optional[str] = None
    epilogue: Optional[str] = None

    def has_unreleased(self) -> bool:
        return self.maybe_unreleased is not None and not self.maybe_unreleased.is_empty()

    def is_empty(self) -> bool:
        return (
            not self.has_unreleased()
            and all(release.changes.is_empty() for release in self.releases)
            and not self.prologue
            and not self.epilogue
        )

    def render_all(self, config: Config) -> str:
        """Render unreleased changes and every release."""
        return render_changelog(self, config, include_unreleased=True)

    def render_released(self, config: Config) -> str:
        """Render every release, leaving out unreleased changes."""
        return render_changelog(self, config, include_unreleased=False)

    def render_unreleased(self, config: Config) -> str:
        """Render only the unreleased changes.

        Raises `NoUnreleasedEntriesError` when there are none.
        """
        return render_unreleased(self, config)

    def entries(self) -> Iterator[EntryPath]:
        """Iterate over paths to every entry, in the order they are rendered."""
        return iter_entry_paths(self)

    def find_duplicates(self) -> list[tuple[EntryPath, EntryPath]]:
        """Return pairs of entries whose content is identical, each pair once."""
        return find_duplicates(self)


def _read_optional_text(path: Path) -> Optional[str]:
    content = read_text_opt(path)
    return trim_newlines(content) if content is not None else None


def read_changelog(
    path: Path, config: Config, resolver: ComponentResolver | None = None
) -> Changelog:
    """Load a full changelog from the given directory.

    Aborts on the first error: a partially loaded changelog is never returned.
    """
    log_info(f"loading changelog from {path}")
    if resolver is None:
        resolver = ConfigComponentResolver.from_config(config)
    if not is_dir(path):
        raise ExpectedDirError(path)
    unreleased = read_change_set_opt(path / config.unreleased.folder, config, resolver)
    log_debug(f"scanning for releases in {path}")
    release_dirs = [
        child
        for child in list_dir(path)
        if child.name != config.unreleased.folder and child.is_dir()
    ]
    releases = sort_releases(
        (read_release(child, config, resolver) for child in release_dirs), config
    )
    return Changelog(
        maybe_unreleased=unreleased,
        releases=tuple(releases),
        prologue=_read_optional_text(path / config.prologue_filename),
        epilogue=_read_optional_text(path / config.epilogue_filename),
    )


def _init_empty_unreleased_dir(config: Config, path: Path) -> None:
    unreleased_dir = path / config.unreleased.folder
    ensure_dir(unreleased_dir)
    gitkeep = unreleased_dir / GITKEEP_FILENAME
    write_text(gitkeep, "")
    log_debug(f"wrote {gitkeep}")


def _copy_if_missing(source: Optional[Path], destination: Path, label: str) -> None:
    if source is None:
        return
    if destination.exists():
        log_info(f"{label} file already exists, not copying: {destination}")
        return
    copy_file(source, destination)
    log_info(f"copied {label} from {source} to {destination}")


def init_dir(
    config: Config,
    path: Path,
    prologue_path: Optional[Path] = None,
    epilogue_path: Optional[Path] = None,
) -> None:
    """Initialize an empty changelog directory."""
    ensure_dir(path)
    _copy_if_missing(prologue_path, path / config.prologue_filename, "prologue")
    _copy_if_missing(epilogue_path, path / config.epilogue_filename, "epilogue")
    _init_empty_unreleased_dir(config, path)


def generate_config(
    config_path: Path, path: Path, remote: str = "origin", *, force: bool = False
) -> Config:
    """Write a default config, inferring the project URL from git if possible."""
    if config_path.exists():
        if not force:
            raise PathExistsError(config_path)
        log_warning(f"overwriting configuration file {config_path}")
    parent = path.resolve().parent
    project_url = None
    if (parent / ".git").is_dir():
        project_url = detect_project_url(parent, remote)
    else:
        log_warning(
            "parent folder of changelog directory is not a git repository, "
            "cannot infer the project URL."
        )
    config = Config(project_url=project_url)
    save_config(config, config_path)
    return config


def entry_filename(config: Config, entry_id: str) -> str:
    return f"{entry_id}.{config.change_sets.entry_ext}"


def get_entry_path(
    config: Config,
    path: Path,
    release: str,
    section: str,
    component: Optional[str],
    entry_id: str,
) -> Path:
    """Compute the file path of the entry with the given coordinates."""
    entry_dir = path / release / section
    if component is not None:
        entry_dir = entry_dir / component
    return entry_dir / entry_filename(config, entry_id)


def add_unreleased_entry(
    config: Config,
    path: Path,
    section: str,
    component: Optional[str],
    entry_id: str,
    content: str,
) -> Path:
    """Write a new entry into a section of the unreleased folder."""
    if component is not None and component not in config.components.all:
        raise ComponentNotDefinedError(component)
    entry_dir = path / config.unreleased.folder
    ensure_dir(entry_dir)
    entry_dir = entry_dir / section
    ensure_dir(entry_dir)
    if component is not None:
        entry_dir = entry_dir / component
        ensure_dir(entry_dir)
    entry_path = entry_dir / entry_filename(config, entry_id)
    if entry_path.exists():
        raise PathExistsError(entry_path)
    write_text(entry_path, content)
    log_info(f"wrote entry to {entry_path}")
    return entry_path


def render_unreleased_entry_from_template(
    config: Config,
    path: Path,
    section: str,
    component: Optional[str],
    entry_id: str,
    platform_id: PlatformId,
    message: str,
) -> str:
    """Render a new entry's text through the configured change template."""
    template_path = Path(config.change_template)
    if not template_path.is_absolute():
        template_path = path / template_path
    return render_entry_from_template(
        config,
        template_path,
        section=section,
        component=component,
        entry_id=entry_id,
        platform_id=platform_id,
        message=message,
    )


def add_unreleased_entry_from_template(
    config: Config,
    path: Path,
    section: str,
    component: Optional[str],
    entry_id: str,
    platform_id: PlatformId,
    message: str,
) -> Path:
    """Render an entry from the change template and write it as unreleased."""
    content = render_unreleased_entry_from_template(
        config, path, section, component, entry_id, platform_id, message
    )
    prefix = f"{platform_id.number}-"
    if not entry_id.startswith(prefix):
        entry_id = f"{prefix}{entry_id}"
        log_debug(f"prepended platform ID to change ID: {entry_id}")
    return add_unreleased_entry(config, path, section, component, entry_id, content)


def prepare_release_dir(config: Config, path: Path, version: str) -> Path:
    """Move the unreleased folder to a new folder named after the release."""
    parse_release_version(version)
    version_path = path / version
    if version_path.exists():
        raise PathExistsError(version_path)
    unreleased_path = path / config.unreleased.folder
    if not unreleased_path.is_dir():
        raise ExpectedDirError(unreleased_path)
    move_path(unreleased_path, version_path)
    log_info(f"moved {unreleased_path} to {version_path}")
    remove_gitkeep(version_path)
    _init_empty_unreleased_dir(config, path)
    return version_path
