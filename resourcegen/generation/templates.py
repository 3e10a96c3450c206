"""Jinja2 environment for generated sources and reports."""

from __future__ import annotations

from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader, select_autoescape

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Return an environment that looks in ``templates_dir`` before the bundled templates."""
    directories: List[str] = []
    if templates_dir:
        directories.append(str(templates_dir))
    default_dir = str(DEFAULT_TEMPLATES_DIR)
    if default_dir not in directories:
        directories.append(default_dir)
    loader = FileSystemLoader(directories)
    return Environment(
        loader=loader,
        autoescape=select_autoescape(enabled_extensions=("html", "html.j2"), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = ["DEFAULT_TEMPLATES_DIR", "create_environment"]
