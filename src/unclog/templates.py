"""Rendering of new entries through the change template."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, TemplateError

from .config import Config
from .errors import MissingProjectUrlError, TemplateRenderError
from .utils import log_debug, log_info, read_text_opt
from .vcs import PlatformId, parse_project_url

DEFAULT_CHANGE_TEMPLATE = (
    "{{ bullet }} {{ message }} ([\\#{{ change_id }}]({{ change_url }}))"
)
CONTINUATION_INDENT = "  "

_ENVIRONMENT = Environment(autoescape=False)


def wrap_change(text: str, width: int) -> str:
    """Wrap rendered text, indenting every line after the first by two spaces."""
    lines: list[str] = []
    for line in text.split("\n"):
        initial_indent = CONTINUATION_INDENT if lines else ""
        wrapped = textwrap.wrap(
            line,
            width=width,
            initial_indent=initial_indent,
            subsequent_indent=CONTINUATION_INDENT,
            break_long_words=False,
            break_on_hyphens=False,
        )
        lines.extend(wrapped or [initial_indent.rstrip()])
    return "\n".join(lines)


def render_change(
    template_text: str, params: dict[str, Any], *, template_path: Optional[Path] = None
) -> str:
    try:
        template = _ENVIRONMENT.from_string(template_text)
        return template.render(**params)
    except TemplateError as exc:
        raise TemplateRenderError(str(exc), template_path) from exc


def render_entry_from_template(
    config: Config,
    template_path: Path,
    *,
    section: str,
    component: Optional[str],
    entry_id: str,
    platform_id: PlatformId,
    message: str,
) -> str:
    """Render and wrap a new entry for the configured project.

    Falls back to the built-in template when ``template_path`` does not exist.
    """
    if not config.project_url:
        raise MissingProjectUrlError()
    project = parse_project_url(config.project_url)
    log_info(f"loading change template from {template_path}")
    template_text = read_text_opt(template_path)
    source_path: Optional[Path] = template_path
    if template_text is None:
        log_debug("change template not found, using the built-in template")
        template_text = DEFAULT_CHANGE_TEMPLATE
        source_path = None
    params: dict[str, Any] = {
        "project_url": project.url,
        "section": section,
        "component": component,
        "id": entry_id,
        platform_id.kind: platform_id.number,
        "message": message,
        "change_url": project.change_url(platform_id),
        "change_id": platform_id.number,
        "bullet": config.bullet_style,
    }
    log_debug(f"change template parameters: {params}")
    rendered = render_change(template_text, params, template_path=source_path)
    wrapped = wrap_change(rendered, config.wrap)
    log_debug(f"rendered change:\n{wrapped}")
    return wrapped
