from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mdbook_preprocessor_utils import Asset, SimplePreprocessor  # noqa: E402
from mdbook_preprocessor_utils.testing import MdbookTestHarness  # noqa: E402

MARKER = "@@"


class ShoutPreprocessor(SimplePreprocessor):
    """Upper-cases every ``@@word@@`` span and links a script and a stylesheet."""

    finalized: List[str] = []

    @classmethod
    def name(cls) -> str:
        return "shout"

    def replacements(self, chapter_dir: Path, content: str) -> Sequence[Tuple[Tuple[int, int], str]]:
        found = []
        start = content.find(MARKER)
        while start != -1:
            end = content.find(MARKER, start + len(MARKER))
            if end == -1:
                break
            end += len(MARKER)
            word = content[start + len(MARKER) : end - len(MARKER)]
            found.append(((start, end), f"<b>{word.upper()}</b>"))
            start = content.find(MARKER, end)
        return found

    def linked_assets(self) -> List[Asset]:
        return [Asset("shout.js", b"console.log('shout');"), Asset("shout.css", b"b { color: red; }")]

    def all_assets(self) -> List[Asset]:
        return self.linked_assets() + [Asset("shout.png", b"\x89PNG")]

    def finalize(self) -> None:
        ShoutPreprocessor.finalized.append("done")


@pytest.fixture
def shout():
    ShoutPreprocessor.finalized = []
    return ShoutPreprocessor


@pytest.fixture
def harness(tmp_path):
    return MdbookTestHarness(tmp_path / "book")
