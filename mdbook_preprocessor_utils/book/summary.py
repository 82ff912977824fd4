"""Build a :class:`Book` from a source directory's ``SUMMARY.md``."""

from __future__ import annotations

import logging
from pathlib import Path
import re
from typing import List, Optional, Tuple

from . import Book, BookItem, Chapter, PartTitle, Separator

LOGGER = logging.getLogger(__name__)

SUMMARY_FILE = "SUMMARY.md"

_LINK = re.compile(r"^\[(?P<name>[^\]]*)\]\((?P<path>[^)]*)\)$")
_ITEM = re.compile(r"^(?P<indent>\s*)[-*]\s+\[(?P<name>[^\]]*)\]\((?P<path>[^)]*)\)$")
_HEADING = re.compile(r"^#+\s+(?P<title>.+)$")
_SEPARATOR = re.compile(r"^-{3,}$")


class SummaryLoader:
    """Parse the subset of the ``SUMMARY.md`` grammar that books actually use."""

    def __init__(self, src_dir: Path | str) -> None:
        self.src_dir = Path(src_dir)

    def load(self) -> Book:
        summary = self.src_dir / SUMMARY_FILE
        lines = summary.read_text(encoding="utf-8").splitlines()

        sections: List[BookItem] = []
        stack: List[Tuple[int, Chapter]] = []
        seen_title = False
        seen_list = False
        top_level = 0

        for raw in lines:
            line = raw.rstrip()
            stripped = line.strip()
            if not stripped:
                continue

            if _SEPARATOR.match(stripped):
                sections.append(Separator())
                stack = []
                continue

            heading = _HEADING.match(stripped)
            if heading:
                if not seen_title and not sections:
                    seen_title = True
                    continue
                sections.append(PartTitle(title=heading.group("title").strip()))
                stack = []
                continue

            item = _ITEM.match(line)
            if item:
                seen_list = True
                indent = len(item.group("indent").expandtabs(4))
                while stack and stack[-1][0] >= indent:
                    stack.pop()
                if stack:
                    parent = stack[-1][1]
                    siblings = [c for c in parent.sub_items if isinstance(c, Chapter)]
                    number = list(parent.number or []) + [len(siblings) + 1]
                else:
                    top_level += 1
                    number = [top_level]
                chapter = self._chapter(
                    item.group("name"),
                    item.group("path"),
                    number=number,
                    parent_names=[c.name for _, c in stack],
                )
                if stack:
                    stack[-1][1].sub_items.append(chapter)
                else:
                    sections.append(chapter)
                stack.append((indent, chapter))
                continue

            link = _LINK.match(stripped)
            if link:
                kind = "suffix" if seen_list else "prefix"
                LOGGER.debug("Found %s chapter %s", kind, link.group("name"))
                sections.append(self._chapter(link.group("name"), link.group("path")))
                stack = []
                continue

            LOGGER.debug("Ignoring unrecognised SUMMARY.md line: %s", stripped)

        return Book(sections=sections)

    def _chapter(
        self,
        name: str,
        path: str,
        *,
        number: Optional[List[int]] = None,
        parent_names: Optional[List[str]] = None,
    ) -> Chapter:
        path = path.strip()
        if path.startswith("./"):
            path = path[2:]
        if not path:
            return Chapter(name=name, number=number, parent_names=parent_names or [])

        source = self.src_dir / path
        if not source.exists():
            raise FileNotFoundError(f"Chapter file not found: {source}")
        return Chapter(
            name=name,
            content=source.read_text(encoding="utf-8"),
            path=path,
            number=number,
            source_path=path,
            parent_names=parent_names or [],
        )


def load_book(src_dir: Path | str) -> Book:
    """Load the book rooted at *src_dir*."""

    return SummaryLoader(src_dir).load()


__all__ = ["SummaryLoader", "load_book", "SUMMARY_FILE"]
