from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from mdbook_preprocessor_utils.context import (
    MDBOOK_VERSION,
    PreprocessorContext,
    parse_input,
    version_compatible,
)
from mdbook_preprocessor_utils.errors import InputError


def _payload(**ctx_overrides):
    ctx = {
        "root": "/books/demo",
        "config": {"book": {"src": "pages"}, "preprocessor": {"shout": {"loud": True}}},
        "renderer": "html",
        "mdbook_version": MDBOOK_VERSION,
    }
    ctx.update(ctx_overrides)
    return [ctx, {"sections": [], "__non_exhaustive": None}]


def test_parse_input_from_stream():
    ctx, book = parse_input(io.StringIO(json.dumps(_payload())))

    assert ctx.root == Path("/books/demo")
    assert ctx.src_dir == Path("/books/demo/pages")
    assert ctx.preprocessor_config("shout") == {"loud": True}
    assert ctx.preprocessor_config("other") == {}
    assert book.sections == []


def test_src_dir_defaults_to_src():
    ctx = PreprocessorContext(root=Path("/books/demo"))
    assert ctx.src_dir == Path("/books/demo/src")


@pytest.mark.parametrize("raw", ["not json", "{}", "[1, 2, 3]", '[{"config": {}}, {"sections": []}]'])
def test_parse_input_rejects_bad_payloads(raw):
    with pytest.raises(InputError):
        parse_input(raw)


def test_context_round_trip():
    ctx, _ = parse_input(json.dumps(_payload()))
    assert PreprocessorContext.from_json(ctx.to_json()) == ctx


@pytest.mark.parametrize(
    "host, required, expected",
    [
        ("0.4.40", "0.4.40", True),
        ("0.4.52", "0.4.40", True),
        ("0.4.10", "0.4.40", False),
        ("0.5.0", "0.4.40", False),
        ("1.2.0", "1.0.0", True),
        ("2.0.0", "1.0.0", False),
        ("garbage", "0.4.40", False),
    ],
)
def test_version_compatible(host, required, expected):
    assert version_compatible(host, required) is expected
