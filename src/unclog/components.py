"""Component declarations and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional, Protocol

from .utils import log_debug

if TYPE_CHECKING:
    from .config import Config


@dataclass(frozen=True)
class Component:
    """A declared component (package, sub-module) of the project."""

    name: str
    path: Optional[str] = None


class ComponentResolver(Protocol):
    """Maps a component directory name to its display name and path."""

    def resolve(self, component_id: str) -> Optional[Component]:
        """Return the component, or None when it is not known."""
        ...


class ConfigComponentResolver:
    """Resolve components declared under `components.all` in the config."""

    def __init__(self, components: Mapping[str, Component]) -> None:
        self._components = dict(components)

    @classmethod
    def from_config(cls, config: "Config") -> "ConfigComponentResolver":
        return cls(config.components.all)

    def resolve(self, component_id: str) -> Optional[Component]:
        component = self._components.get(component_id)
        if component is None:
            log_debug(f"component '{component_id}' is not declared")
        return component


def parse_components(values: object | None) -> dict[str, Component]:
    """Parse component declarations from config.

    Accepts:
      - A mapping of ids to tables: {cli: {name: "CLI", path: "crates/cli"}}
      - A mapping of ids to display names: {cli: "CLI"}
      - A list of ids: ["cli", "core"] -> display name equals the id
      - None: -> {}
    """
    if values is None:
        return {}
    if isinstance(values, Mapping):
        result: dict[str, Component] = {}
        for key, value in values.items():
            component_id = str(key).strip()
            if not component_id:
                continue
            if isinstance(value, Mapping):
                name = str(value.get("name") or component_id).strip()
                path_raw = value.get("path")
                path = str(path_raw).strip() if path_raw else None
                result[component_id] = Component(name=name, path=path or None)
            else:
                name = str(value).strip() if value else component_id
                result[component_id] = Component(name=name)
        return result
    if isinstance(values, (list, tuple)):
        ids = [str(item).strip() for item in values if str(item).strip()]
        return {component_id: Component(name=component_id) for component_id in ids}
    raise ValueError("Config option 'components.all' must be a mapping or a list.")
