"""The context mdBook passes alongside the book, and the stdin payload parser."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
import re
from typing import IO, Any, Dict, Optional, Tuple, Union

from .book import Book
from .errors import InputError


# mdBook release the JSON protocol handling was written against.
MDBOOK_VERSION = "0.4.40"

_VERSION = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)")


@dataclass
class PreprocessorContext:
    """Build-wide information supplied by the host."""

    root: Path
    config: Dict[str, Any] = field(default_factory=dict)
    renderer: str = "html"
    mdbook_version: str = MDBOOK_VERSION

    @property
    def book_config(self) -> Dict[str, Any]:
        return self.config.get("book") or {}

    @property
    def src_dir(self) -> Path:
        """Directory holding the chapter sources (``root / book.src``)."""

        return self.root / self.book_config.get("src", "src")

    def preprocessor_config(self, name: str) -> Dict[str, Any]:
        return (self.config.get("preprocessor") or {}).get(name) or {}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PreprocessorContext":
        if not isinstance(data, dict) or "root" not in data:
            raise InputError("Preprocessor context must be an object with a 'root' key")
        return cls(
            root=Path(data["root"]),
            config=data.get("config") or {},
            renderer=data.get("renderer", "html"),
            mdbook_version=data.get("mdbook_version", MDBOOK_VERSION),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "config": self.config,
            "renderer": self.renderer,
            "mdbook_version": self.mdbook_version,
        }


def parse_input(source: Union[str, bytes, IO[str]]) -> Tuple[PreprocessorContext, Book]:
    """Decode the ``[context, book]`` pair mdBook writes to stdin."""

    try:
        if isinstance(source, (str, bytes)):
            payload = json.loads(source)
        else:
            payload = json.load(source)
    except json.JSONDecodeError as exc:
        raise InputError(f"Unable to parse preprocessor input: {exc}") from exc

    if not isinstance(payload, list) or len(payload) != 2:
        raise InputError("Preprocessor input must be a JSON array of [context, book]")
    ctx_data, book_data = payload
    return PreprocessorContext.from_json(ctx_data), Book.from_json(book_data)


def _parse_version(value: str) -> Optional[Tuple[int, int, int]]:
    match = _VERSION.match(value.strip())
    if not match:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def version_compatible(host_version: str, required: str = MDBOOK_VERSION) -> bool:
    """Caret-style check: same major (same minor for 0.x) and not older."""

    host = _parse_version(host_version)
    req = _parse_version(required)
    if host is None or req is None:
        return False
    if host < req or host[0] != req[0]:
        return False
    if req[0] == 0 and host[1] != req[1]:
        return False
    return True


__all__ = [
    "MDBOOK_VERSION",
    "PreprocessorContext",
    "parse_input",
    "version_compatible",
]
