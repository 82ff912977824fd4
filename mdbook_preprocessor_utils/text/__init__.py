"""Text helpers shared by the driver and by plugins."""

from .html import HtmlElementBuilder
from .replace import Replacement, apply_replacements, normalize_replacements

__all__ = [
    "HtmlElementBuilder",
    "Replacement",
    "apply_replacements",
    "normalize_replacements",
]
