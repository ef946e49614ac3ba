"""Locations of runtime data, bundled assets and rendered post pages.

Runtime files (config, secrets, editable templates, generated HTML) live in a
per-user data directory, ``~/.spacetraveling`` unless SPACETRAVELING_DATA_DIR
points elsewhere. Read-only defaults ship inside the package under ``system/``.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterable

DATA_DIR_ENV_VAR = "SPACETRAVELING_DATA_DIR"
_DEFAULT_DIRNAME = ".spacetraveling"
_SYSTEM_DIR = Path(__file__).resolve().parents[1] / "system"

# Pages are served as /post/<slug>
POST_ROUTE = "post"
PAGE_SUFFIX = ".html"


def _relative_to_data_dir(parts: Iterable[str]) -> Path:
    """Join *parts*, dropping a redundant leading ``.spacetraveling`` segment."""
    path = Path(*parts)
    if path.parts and path.parts[0] == _DEFAULT_DIRNAME:
        return Path(*path.parts[1:])
    return path


def get_data_dir() -> Path:
    """Return the runtime data directory (not created).

    A relative SPACETRAVELING_DATA_DIR is taken relative to the working
    directory; an empty one falls back to the default.
    """
    override = (os.getenv(DATA_DIR_ENV_VAR) or "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / _DEFAULT_DIRNAME).resolve()


def ensure_data_dir() -> Path:
    """Create the data directory if needed, seed its templates, and return it."""
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    _seed_templates(data_dir)
    return data_dir


def resolve_data_path(*relative: str, ensure_parent: bool = False) -> Path:
    """Return ``<data_dir>/<relative...>``."""
    full_path = ensure_data_dir() / _relative_to_data_dir(relative)
    if ensure_parent:
        full_path.parent.mkdir(parents=True, exist_ok=True)
    return full_path


def resolve_data_file(path: str, ensure_parent: bool = False) -> Path:
    """Resolve a configured file path; relative values land in the data dir."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        return resolve_data_path(*candidate.parts, ensure_parent=ensure_parent)
    if ensure_parent:
        candidate.parent.mkdir(parents=True, exist_ok=True)
    return candidate


def get_system_path(*relative: str) -> Path:
    """Return a path inside the package's bundled ``system`` directory."""
    return _SYSTEM_DIR.joinpath(*relative)


def post_page_path(output_dir: str, slug: str) -> Path:
    """Return the HTML file for the page ``/post/<slug>`` under *output_dir*.

    Raises:
        ValueError: If *slug* is empty or would escape the ``post`` directory
    """
    if not slug or slug in {".", ".."} or "/" in slug or "\\" in slug:
        raise ValueError(f"Invalid post slug: {slug!r}")
    return resolve_data_file(output_dir) / POST_ROUTE / f"{slug}{PAGE_SUFFIX}"


def _seed_templates(data_dir: Path) -> None:
    """Copy the bundled HTML templates into *data_dir* on first use."""
    source = _SYSTEM_DIR / "templates"
    target = data_dir / "templates"
    if target.exists() or not source.exists():
        return
    try:
        shutil.copytree(source, target)
    except FileExistsError:
        pass


__all__ = [
    "DATA_DIR_ENV_VAR",
    "POST_ROUTE",
    "get_data_dir",
    "ensure_data_dir",
    "resolve_data_path",
    "resolve_data_file",
    "get_system_path",
    "post_page_path",
]
