"""In-memory model of the book mdBook hands to preprocessors.

The model mirrors mdBook's JSON representation closely enough to round-trip
it: unknown keys on the book and on chapters are kept in ``extra`` and
written back unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from ..errors import InputError

_CHAPTER_KEYS = {"name", "content", "number", "sub_items", "path", "source_path", "parent_names"}


@dataclass
class Chapter:
    """A node of the book tree; only chapters with a ``path`` carry a source file."""

    name: str
    content: str = ""
    path: Optional[str] = None
    number: Optional[List[int]] = None
    sub_items: List["BookItem"] = field(default_factory=list)
    source_path: Optional[str] = None
    parent_names: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_draft(self) -> bool:
        return self.path is None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Chapter":
        if "name" not in data:
            raise InputError(f"Chapter without a name: {data!r}")
        return cls(
            name=data["name"],
            content=data.get("content") or "",
            path=data.get("path"),
            number=data.get("number"),
            sub_items=[item_from_json(item) for item in data.get("sub_items") or []],
            source_path=data.get("source_path"),
            parent_names=list(data.get("parent_names") or []),
            extra={k: v for k, v in data.items() if k not in _CHAPTER_KEYS},
        )

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [item_to_json(item) for item in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": self.parent_names,
        }
        data.update(self.extra)
        return data


@dataclass
class Separator:
    """A horizontal rule between groups of chapters."""


@dataclass
class PartTitle:
    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def item_from_json(data: Any) -> BookItem:
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        (kind, value), = data.items()
        if kind == "Chapter" and isinstance(value, dict):
            return Chapter.from_json(value)
        if kind == "PartTitle" and isinstance(value, str):
            return PartTitle(title=value)
    raise InputError(f"Unrecognised book item: {data!r}")


def item_to_json(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_json()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"


@dataclass
class Book:
    sections: List[BookItem] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=lambda: {"__non_exhaustive": None})

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Book":
        if not isinstance(data, dict) or not isinstance(data.get("sections", []), list):
            raise InputError("Book payload must be an object with a 'sections' list")
        return cls(
            sections=[item_from_json(item) for item in data.get("sections", [])],
            extra={k: v for k, v in data.items() if k != "sections"},
        )

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"sections": [item_to_json(item) for item in self.sections]}
        data.update(self.extra)
        return data

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter depth-first in document order."""

        def walk(items: List[BookItem]) -> Iterator[Chapter]:
            for item in items:
                if isinstance(item, Chapter):
                    yield item
                    yield from walk(item.sub_items)

        return walk(self.sections)


__all__ = [
    "Book",
    "BookItem",
    "Chapter",
    "PartTitle",
    "Separator",
    "item_from_json",
    "item_to_json",
]
