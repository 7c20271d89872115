"""Core package exports for unclog."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as metadata_version
from typing import TYPE_CHECKING, Any

__all__ = ["__version__", "Changelog", "Config", "load_config"]

try:
    __version__ = metadata_version("unclog")
except PackageNotFoundError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.0.0"

if TYPE_CHECKING:  # pragma: no cover
    from .changelog import Changelog
    from .config import Config, load_config


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    if name == "Changelog":
        from .changelog import Changelog as _Changelog

        return _Changelog
    if name == "Config":
        from .config import Config as _Config

        return _Config
    if name == "load_config":
        from .config import load_config as _load_config

        return _load_config
    raise AttributeError(f"module 'unclog' has no attribute {name!r}")
