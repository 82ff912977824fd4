"""Relative links from a chapter to the preprocessor's shared assets.

A chapter at ``foo/bar/the_chapter.md`` is rendered to
``foo/bar/the_chapter.html``, so it has to reach the shared asset directory
through ``../../<namespace>/<asset>``.
"""

from __future__ import annotations

import html
import os
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from .assets import Asset
from .errors import PreprocessorError

SCRIPT_TEMPLATE = '<script type="text/javascript" src="{src}"></script>'
MODULE_TEMPLATE = '<script type="module" src="{src}"></script>'
STYLESHEET_TEMPLATE = '<link rel="stylesheet" type="text/css" href="{src}">'

LINK_TEMPLATES = {
    ".js": SCRIPT_TEMPLATE,
    ".mjs": MODULE_TEMPLATE,
    ".css": STYLESHEET_TEMPLATE,
}

# Keeps injected markup from being glued onto the preceding paragraph.
SEPARATOR = "\n\n"


def chapter_depth(chapter_dir: Path, src_dir: Path) -> int:
    """Number of directories between *src_dir* and *chapter_dir*."""

    try:
        relative = Path(os.path.normpath(chapter_dir)).relative_to(os.path.normpath(src_dir))
    except ValueError as exc:
        raise PreprocessorError(f"Chapter directory {chapter_dir} is not inside {src_dir}") from exc
    return len(relative.parts)


def asset_relative_path(depth: int, namespace: str, asset_name: str) -> PurePosixPath:
    if depth < 0:
        raise ValueError(f"Chapter depth must be non-negative, got {depth}")
    return PurePosixPath(*([".."] * depth), namespace, asset_name)


def render_asset_link(relative_path: PurePosixPath) -> Optional[str]:
    """Embed markup for *relative_path*, or ``None`` for unsupported types."""

    template = LINK_TEMPLATES.get(relative_path.suffix)
    if template is None:
        return None
    return template.format(src=html.escape(str(relative_path), quote=True))


def render_linked_assets(depth: int, namespace: str, assets: Iterable[Asset]) -> str:
    links: List[str] = []
    for asset in assets:
        link = render_asset_link(asset_relative_path(depth, namespace, asset.name))
        if link is not None:
            links.append(link)
    return SEPARATOR + "".join(links)


__all__ = [
    "asset_relative_path",
    "chapter_depth",
    "render_asset_link",
    "render_linked_assets",
]
