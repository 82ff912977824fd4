"""Apply plugin-supplied span replacements to chapter text.

Spans are half-open ``[start, end)`` offsets into the *original* text,
counted in characters. Replacements are sorted by start offset and then
spliced in from the rightmost span to the leftmost, so that every span that
has not been applied yet still points at untouched text.
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence, Tuple, Union

from ..errors import MalformedReplacementError

Span = Union[Tuple[int, int], range]


class Replacement(NamedTuple):
    start: int
    end: int
    text: str


def _span_bounds(span: Span) -> Tuple[int, int]:
    if isinstance(span, range):
        if span.step != 1:
            raise MalformedReplacementError(f"Span {span!r} must have a step of 1")
        return span.start, span.stop
    try:
        start, end = span
    except (TypeError, ValueError) as exc:
        raise MalformedReplacementError(f"Span {span!r} is not a (start, end) pair") from exc
    for offset in (start, end):
        if not isinstance(offset, int) or isinstance(offset, bool):
            raise MalformedReplacementError(f"Span {span!r} must hold integer offsets")
    return start, end


def normalize_replacements(
    replacements: Iterable[Tuple[Span, str]], length: int
) -> List[Replacement]:
    """Sort replacements by start offset and validate them against *length*.

    Raises :class:`MalformedReplacementError` for reversed, out-of-bounds or
    overlapping spans, non-integer offsets and non-string replacement text.
    """

    normalized: List[Replacement] = []
    for item in replacements:
        try:
            span, text = item
        except (TypeError, ValueError) as exc:
            raise MalformedReplacementError(f"Replacement {item!r} is not a (span, text) pair") from exc
        if not isinstance(text, str):
            raise MalformedReplacementError(f"Replacement text for {span!r} must be a string, got {text!r}")
        start, end = _span_bounds(span)
        if start < 0 or end > length or start > end:
            raise MalformedReplacementError(
                f"Span [{start}, {end}) is outside of text of length {length}"
            )
        normalized.append(Replacement(start, end, text))

    normalized.sort(key=lambda item: (item.start, item.end))
    for previous, current in zip(normalized, normalized[1:]):
        if current.start < previous.end:
            raise MalformedReplacementError(
                f"Span [{current.start}, {current.end}) overlaps "
                f"[{previous.start}, {previous.end})"
            )
    return normalized


def apply_replacements(original: str, replacements: Sequence[Tuple[Span, str]]) -> str:
    """Return *original* with every replacement spliced in.

    An empty replacement set returns *original* unchanged.
    """

    if not replacements:
        return original

    text = original
    for start, end, replacement in reversed(normalize_replacements(replacements, len(original))):
        text = text[:start] + replacement + text[end:]
    return text


__all__ = ["Replacement", "Span", "apply_replacements", "normalize_replacements"]
