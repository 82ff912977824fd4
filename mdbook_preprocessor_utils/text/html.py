"""Small builder for the ``<div>`` placeholders plugins inject into chapters."""

from __future__ import annotations

import html
import json
from typing import Any, List


class HtmlElementBuilder:
    """Build a ``<div>`` element one attribute at a time.

    >>> HtmlElementBuilder().attr("class", "demo").data("n", 1).finish()
    '<div class="demo" data-n="1"></div>'
    """

    def __init__(self) -> None:
        self._parts: List[str] = ["<div"]

    def attr(self, key: str, value: str) -> "HtmlElementBuilder":
        self._parts.append(f' {key}="{html.escape(value, quote=True)}"')
        return self

    def data(self, key: str, value: Any) -> "HtmlElementBuilder":
        value_json = json.dumps(value)
        self._parts.append(f' data-{key}="{html.escape(value_json, quote=True)}"')
        return self

    def finish(self) -> str:
        return "".join(self._parts) + "></div>"


__all__ = ["HtmlElementBuilder"]
