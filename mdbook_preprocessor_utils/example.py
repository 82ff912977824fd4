"""Smallest possible preprocessor built on this package."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .assets import Asset
from .cli import main as cli_main
from .processor import SimplePreprocessor
from .text.replace import Span


class ExamplePreprocessor(SimplePreprocessor):
    @classmethod
    def name(cls) -> str:
        return "example"

    def replacements(self, chapter_dir: Path, content: str) -> Sequence[Tuple[Span, str]]:
        return []

    def linked_assets(self) -> List[Asset]:
        return []

    def all_assets(self) -> List[Asset]:
        return []


def main(argv: Optional[List[str]] = None) -> int:
    return cli_main(ExamplePreprocessor, argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
