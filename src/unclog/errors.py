"""Error hierarchy for changelog loading, rendering, and editing.

All errors inherit from ``ChangelogError`` so that callers can catch the whole
family with a single ``except`` clause.

Hierarchy::

    ChangelogError
      ├── ChangelogIOError              ── filesystem access failed
      ├── StructureError                ── unexpected directory layout
      │     ├── ExpectedDirError
      │     ├── CannotObtainNameError
      │     └── PathExistsError
      ├── ParseError                    ── malformed name or version
      │     ├── InvalidEntryIdError
      │     ├── CannotExtractVersionError
      │     └── InvalidVersionError
      └── DomainError                   ── well-formed input, invalid request
            ├── ComponentNotDefinedError
            ├── NoUnreleasedEntriesError
            ├── MissingProjectUrlError
            ├── UnsupportedProjectUrlError
            └── TemplateRenderError
"""

from __future__ import annotations

from pathlib import Path


class ChangelogError(Exception):
    """Base exception for all changelog errors."""


class ChangelogIOError(ChangelogError):
    """Raised when reading from or writing to the filesystem fails."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"I/O error at {path}: {reason}")


class StructureError(ChangelogError):
    """Base exception for paths that do not have the expected shape."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class ExpectedDirError(StructureError):
    """Raised when a path that must be a directory is not one."""

    def __init__(self, path: Path):
        super().__init__(f"expected path to be a directory: {path}", path)


class CannotObtainNameError(StructureError):
    """Raised when the last component of a path cannot be used as a name."""

    def __init__(self, path: Path):
        super().__init__(f"cannot obtain (or invalid) last component of path: {path}", path)


class PathExistsError(StructureError):
    """Raised when refusing to overwrite an existing file or directory."""

    def __init__(self, path: Path):
        super().__init__(f"path already exists: {path}", path)


class ParseError(ChangelogError):
    """Base exception for strings that cannot be parsed."""

    def __init__(self, message: str, value: str):
        self.value = value
        super().__init__(message)


class InvalidEntryIdError(ParseError):
    """Raised when an entry filename does not start with a number."""

    def __init__(self, value: str):
        super().__init__(f'expected entry ID to start with a number, but got: "{value}"', value)


class CannotExtractVersionError(ParseError):
    """Raised when a release directory name contains no version."""

    def __init__(self, value: str):
        super().__init__(f'cannot extract version from release name: "{value}"', value)


class InvalidVersionError(ParseError):
    """Raised when an extracted version string is not a valid version."""

    def __init__(self, value: str):
        super().__init__(f'invalid release version: "{value}"', value)


class DomainError(ChangelogError):
    """Base exception for requests the changelog cannot satisfy."""


class ComponentNotDefinedError(DomainError):
    """Raised when an entry references a component that was never declared."""

    def __init__(self, component_id: str):
        self.component_id = component_id
        super().__init__(f"component not defined in configuration: {component_id}")


class NoUnreleasedEntriesError(DomainError):
    """Raised when rendering unreleased changes that do not exist."""

    def __init__(self) -> None:
        super().__init__("no unreleased entries yet")


class MissingProjectUrlError(DomainError):
    """Raised when a project URL is required but not configured."""

    def __init__(self) -> None:
        super().__init__("missing project URL (set 'project_url' in the configuration file)")


class UnsupportedProjectUrlError(DomainError):
    """Raised when a project URL does not point at a supported platform."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"unsupported project URL (only GitHub and GitLab are supported): {url}")


class TemplateRenderError(DomainError):
    """Raised when the change template cannot be loaded or rendered."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        location = f" ({path})" if path is not None else ""
        super().__init__(f"failed to render change template{location}: {message}")
