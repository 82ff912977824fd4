"""Exceptions raised while running a preprocessor."""

from __future__ import annotations

__all__ = [
    "AssetError",
    "ConfigurationError",
    "InputError",
    "MalformedReplacementError",
    "PreprocessorError",
    "TransformationError",
]


class PreprocessorError(Exception):
    """Base class for every error surfaced by a preprocessor run."""


class ConfigurationError(PreprocessorError):
    """The plugin could not be built from the supplied context."""


class InputError(PreprocessorError):
    """The host sent a payload that is not a valid ``[context, book]`` pair."""


class AssetError(PreprocessorError):
    """Reading or writing an asset failed."""


class TransformationError(PreprocessorError):
    """The plugin failed to compute replacements for a chapter."""

    def __init__(self, chapter: str, message: str) -> None:
        super().__init__(f"{chapter}: {message}")
        self.chapter = chapter


class MalformedReplacementError(PreprocessorError, ValueError):
    """A replacement span is out of bounds or overlaps another span."""
