"""Plugin interface and the driver that runs a plugin over every chapter.

A run has three phases. The plugin's assets are written once into
``<src>/<plugin name>/`` (the build directory is wiped by mdBook after
preprocessing, so they go next to the sources instead). The book tree is then
flattened into a list of chapters. Finally each chapter is handed to a worker
in a bounded thread pool, which asks the plugin for replacements, splices them
in and appends links to the plugin's assets.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import time
from typing import Iterable, List, Optional, Sequence, Tuple, Type

from .assets import Asset, materialize_assets
from .book import Book, BookItem, Chapter
from .context import PreprocessorContext, version_compatible, MDBOOK_VERSION
from .errors import AssetError, ConfigurationError, PreprocessorError, TransformationError
from .links import chapter_depth, render_linked_assets
from .text.replace import Span, apply_replacements

logger = logging.getLogger(__name__)


class SimplePreprocessor(ABC):
    """Capability interface a plugin implements to be driven by this package."""

    @classmethod
    @abstractmethod
    def name(cls) -> str:
        """Plugin namespace, used for the asset directory and config table."""

    @classmethod
    def build(cls, ctx: PreprocessorContext) -> "SimplePreprocessor":
        return cls()

    @classmethod
    def supports_renderer(cls, renderer: str) -> bool:
        return True

    @abstractmethod
    def replacements(self, chapter_dir: Path, content: str) -> Sequence[Tuple[Span, str]]:
        """Spans of *content* to replace, with their replacement text."""

    @abstractmethod
    def linked_assets(self) -> Sequence[Asset]:
        """Assets every modified chapter should link to, in link order."""

    @abstractmethod
    def all_assets(self) -> Sequence[Asset]:
        """Assets written to the shared directory once per run."""

    def finalize(self) -> None:
        """Called once after every chapter was processed successfully."""


@dataclass
class DriverOptions:
    """Knobs for a driver run."""

    max_workers: Optional[int] = None
    check_version: bool = True

    def __post_init__(self) -> None:
        if self.max_workers is None:
            self.max_workers = os.cpu_count() or 1
        if self.max_workers <= 0:
            raise ValueError("max_workers must be positive")


def collect_chapters(items: Iterable[BookItem], src_dir: Path) -> List[Tuple[Path, Chapter]]:
    """Flatten *items* into ``(chapter_dir, chapter)`` pairs in document order.

    Chapters without a path are walked for their children but not collected.
    """

    collected: List[Tuple[Path, Chapter]] = []
    for item in items:
        if not isinstance(item, Chapter):
            continue
        if item.path is not None:
            chapter_dir = (src_dir / item.path).parent
            collected.append((chapter_dir, item))
        collected.extend(collect_chapters(item.sub_items, src_dir))
    return collected


class PreprocessorDriver:
    """Run a :class:`SimplePreprocessor` over a whole book."""

    def __init__(
        self,
        preprocessor_cls: Type[SimplePreprocessor],
        options: Optional[DriverOptions] = None,
    ) -> None:
        self.preprocessor_cls = preprocessor_cls
        self.options = options or DriverOptions()

    @property
    def name(self) -> str:
        return self.preprocessor_cls.name()

    def supports_renderer(self, renderer: str) -> bool:
        return self.preprocessor_cls.supports_renderer(renderer)

    # Public API -----------------------------------------------------------------
    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        start_time = time.perf_counter()
        if self.options.check_version and not version_compatible(ctx.mdbook_version):
            logger.warning(
                "The %s plugin was built against version %s of mdbook, "
                "but we're being called from version %s",
                self.name,
                MDBOOK_VERSION,
                ctx.mdbook_version,
            )

        plugin = self._build(ctx)
        src_dir = ctx.src_dir
        materialize_assets(self.name, self._all_assets(plugin), src_dir)

        chapters = collect_chapters(book.sections, src_dir)
        logger.debug("Collected %d chapters under %s", len(chapters), src_dir)

        self._process_all(plugin, src_dir, chapters)
        self._finalize(plugin)

        logger.info(
            "%s processed %d chapters in %.2fs",
            self.name,
            len(chapters),
            time.perf_counter() - start_time,
        )
        return book

    def process_chapter(
        self,
        plugin: SimplePreprocessor,
        src_dir: Path,
        chapter_dir: Path,
        chapter: Chapter,
    ) -> bool:
        """Apply *plugin* to one chapter; return whether its text changed."""

        label = chapter.path or chapter.name
        try:
            replacements = list(plugin.replacements(chapter_dir, chapter.content))
        except PreprocessorError:
            raise
        except Exception as exc:
            raise TransformationError(label, str(exc)) from exc

        if not replacements:
            return False

        content = apply_replacements(chapter.content, replacements)
        depth = chapter_depth(chapter_dir, src_dir)
        try:
            linked = list(plugin.linked_assets())
        except PreprocessorError:
            raise
        except Exception as exc:
            raise TransformationError(label, f"unable to list linked assets: {exc}") from exc
        content += render_linked_assets(depth, self.name, linked)
        chapter.content = content
        logger.debug("Applied %d replacements to %s", len(replacements), label)
        return True

    # Internals --------------------------------------------------------------------
    def _build(self, ctx: PreprocessorContext) -> SimplePreprocessor:
        try:
            return self.preprocessor_cls.build(ctx)
        except PreprocessorError:
            raise
        except Exception as exc:
            raise ConfigurationError(f"Unable to build {self.name}: {exc}") from exc

    def _all_assets(self, plugin: SimplePreprocessor) -> List[Asset]:
        try:
            return list(plugin.all_assets())
        except PreprocessorError:
            raise
        except Exception as exc:
            raise AssetError(f"Unable to list assets of {self.name}: {exc}") from exc

    def _finalize(self, plugin: SimplePreprocessor) -> None:
        try:
            plugin.finalize()
        except PreprocessorError:
            raise
        except Exception as exc:
            raise PreprocessorError(f"{self.name} failed to finalize: {exc}") from exc

    def _process_all(
        self,
        plugin: SimplePreprocessor,
        src_dir: Path,
        chapters: List[Tuple[Path, Chapter]],
    ) -> None:
        if not chapters:
            return

        executor = ThreadPoolExecutor(
            max_workers=self.options.max_workers,
            thread_name_prefix=f"{self.name}-chapter",
        )
        try:
            futures = [
                executor.submit(self.process_chapter, plugin, src_dir, chapter_dir, chapter)
                for chapter_dir, chapter in chapters
            ]
            wait(futures, return_when=FIRST_EXCEPTION)
            # Chapters not started yet are dropped once one has failed.
            executor.shutdown(wait=True, cancel_futures=True)
            for future in futures:
                if future.cancelled():
                    continue
                exc = future.exception()
                if exc is not None:
                    raise exc
            changed = sum(1 for future in futures if future.result())
        finally:
            executor.shutdown(wait=True)
        logger.debug("Modified %d of %d chapters", changed, len(chapters))


__all__ = [
    "DriverOptions",
    "PreprocessorDriver",
    "SimplePreprocessor",
    "collect_chapters",
]
