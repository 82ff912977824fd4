"""Utilities for writing mdBook preprocessors in Python.

A plugin subclasses :class:`SimplePreprocessor`, describing which spans of a
chapter to replace and which static assets to ship; the driver takes care of
the host protocol, of writing the assets and of linking them from every
chapter it changed.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .assets import Asset, copy_assets, load_assets
from .book import Book, Chapter, PartTitle, Separator
from .context import PreprocessorContext
from .errors import (
    AssetError,
    ConfigurationError,
    InputError,
    MalformedReplacementError,
    PreprocessorError,
    TransformationError,
)
from .processor import DriverOptions, PreprocessorDriver, SimplePreprocessor
from .text.html import HtmlElementBuilder
from .cli import main

__all__ = [
    "Asset",
    "AssetError",
    "Book",
    "Chapter",
    "ConfigurationError",
    "DriverOptions",
    "HtmlElementBuilder",
    "InputError",
    "MalformedReplacementError",
    "PartTitle",
    "PreprocessorContext",
    "PreprocessorDriver",
    "PreprocessorError",
    "Separator",
    "SimplePreprocessor",
    "TransformationError",
    "copy_assets",
    "load_assets",
    "main",
]
