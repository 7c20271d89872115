"""Shared fixtures for building changelog directories on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Mapping

import pytest

from unclog.components import Component
from unclog.config import ComponentsConfig, Config

SAMPLE_FILES: dict[str, str] = {
    "unreleased/breaking-changes/890-block.md": "- Block all the things\n",
    "unreleased/features/component2/1-new-feature.md": "- New feature in component 2\n",
    "v0.2.1/summary.md": "2023-02-01\n\nPatch release.\n",
    "v0.2.1/bug-fixes/22-fix.md": "- Fix a bug\n",
    "v0.2.0/summary.md": "Release summary.\n",
    "v0.2.0/breaking-changes/1-change.md": "- Breaking change\n",
    "v0.2.0/features/2-feature-a.md": "- Feature A\n",
    "v0.2.0/features/10-feature-b.md": "- Feature B\n  with overflow\n",
    "v0.2.0/features/component2/3-comp.md": "- Component feature\n",
    "epilogue.md": "## Previous changes\n\nSee the old changelog.\n",
}

SAMPLE_RENDERED = """\
# CHANGELOG

## Unreleased

### BREAKING CHANGES

- Block all the things

### FEATURES

- [component2](2nd-component)
  - New feature in component 2

## v0.2.1

2023-02-01

Patch release.

### BUG FIXES

- Fix a bug

## v0.2.0

Release summary.

### BREAKING CHANGES

- Breaking change

### FEATURES

- General
  - Feature A
  - Feature B
    with overflow
- [component2](2nd-component)
  - Component feature

## Previous changes

See the old changelog.
"""


def write_files(root: Path, files: Mapping[str, str]) -> Path:
    """Create each relative path under root with the given content."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def sample_config() -> Config:
    return Config(
        components=ComponentsConfig(
            all={"component2": Component(name="component2", path="2nd-component")}
        )
    )


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    return write_files(tmp_path / ".changelog", SAMPLE_FILES)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams captured by a previous test."""
    yield
    logger = logging.getLogger("unclog")
    while logger.handlers:
        logger.handlers.pop().close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
