"""Test harness for plugin authors.

``MdbookTestHarness`` lays out a throwaway book the way ``mdbook init`` does,
then runs a plugin over it through the same JSON protocol mdBook uses::

    harness = MdbookTestHarness()
    (harness.src_dir / "chapter_1.md").write_text("Hello @@world@@")
    book = harness.compile(MyPreprocessor, {"option": True})
"""

from __future__ import annotations

import json
from pathlib import Path
import tempfile
import textwrap
from typing import Any, Dict, Optional, Type

from .book import Book
from .book.summary import SUMMARY_FILE, load_book
from .context import MDBOOK_VERSION, parse_input
from .processor import DriverOptions, PreprocessorDriver, SimplePreprocessor

BOOK_TOML = textwrap.dedent(
    """
    [book]
    authors = []
    language = "en"
    multilingual = false
    src = "src"
    """
).lstrip()

DEFAULT_SUMMARY = "# Summary\n\n- [Chapter 1](./chapter_1.md)\n"
DEFAULT_CHAPTER = "# Chapter 1\n"


class MdbookTestHarness:
    """A freshly initialised book in a temporary (or given) directory."""

    def __init__(self, directory: Optional[Path | str] = None) -> None:
        self.dir = Path(directory) if directory else Path(tempfile.mkdtemp(prefix="mdbook-"))
        self.src_dir = self.dir / "src"
        self.src_dir.mkdir(parents=True, exist_ok=True)
        (self.dir / "book.toml").write_text(BOOK_TOML, encoding="utf-8")
        (self.src_dir / SUMMARY_FILE).write_text(DEFAULT_SUMMARY, encoding="utf-8")
        (self.src_dir / "chapter_1.md").write_text(DEFAULT_CHAPTER, encoding="utf-8")

    def write_chapter(self, path: str, content: str) -> Path:
        target = self.src_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def write_summary(self, summary: str) -> None:
        (self.src_dir / SUMMARY_FILE).write_text(summary, encoding="utf-8")

    def compile(
        self,
        preprocessor_cls: Type[SimplePreprocessor],
        config: Optional[Dict[str, Any]] = None,
        *,
        options: Optional[DriverOptions] = None,
    ) -> Book:
        book = load_book(self.src_dir)
        payload = [
            {
                "root": str(self.dir),
                "config": {
                    "book": {"src": "src"},
                    "preprocessor": {preprocessor_cls.name(): config or {}},
                },
                "renderer": "html",
                "mdbook_version": MDBOOK_VERSION,
            },
            book.to_json(),
        ]
        ctx, book = parse_input(json.dumps(payload))
        driver = PreprocessorDriver(preprocessor_cls, options)
        return driver.run(ctx, book)


__all__ = ["MdbookTestHarness"]
