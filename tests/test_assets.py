from __future__ import annotations

import pytest

from mdbook_preprocessor_utils.assets import Asset, copy_assets, load_assets, materialize_assets
from mdbook_preprocessor_utils.errors import AssetError


def _snapshot(directory):
    return {path.name: path.read_bytes() for path in sorted(directory.iterdir())}


def test_materialize_creates_namespaced_directory(tmp_path):
    assets = [Asset("embed.js", b"js"), Asset("style.css", b"css")]
    target = materialize_assets("plugin", assets, tmp_path / "src")

    assert target == tmp_path / "src" / "plugin"
    assert _snapshot(target) == {"embed.js": b"js", "style.css": b"css"}


def test_materialize_twice_is_same_as_once(tmp_path):
    assets = [Asset("embed.js", b"js"), Asset("style.css", b"css")]
    once = _snapshot(materialize_assets("plugin", assets, tmp_path / "a"))
    materialize_assets("plugin", assets, tmp_path / "b")
    twice = _snapshot(materialize_assets("plugin", assets, tmp_path / "b"))
    assert once == twice


def test_materialize_overwrites_stale_files(tmp_path):
    stale = tmp_path / "plugin" / "embed.js"
    stale.parent.mkdir()
    stale.write_bytes(b"old")

    materialize_assets("plugin", [Asset("embed.js", b"new")], tmp_path)

    assert stale.read_bytes() == b"new"


def test_materialize_reports_io_errors(tmp_path):
    blocker = tmp_path / "plugin"
    blocker.write_text("not a directory")
    with pytest.raises(AssetError):
        materialize_assets("plugin", [Asset("embed.js", b"js")], tmp_path)


def test_load_assets_reads_named_files(tmp_path):
    (tmp_path / "embed.js").write_bytes(b"alert(1)")
    (tmp_path / "embed.css").write_bytes(b"p {}")

    assets = load_assets(tmp_path, "embed.js", "embed.css")

    assert assets == [Asset("embed.js", b"alert(1)"), Asset("embed.css", b"p {}")]


def test_load_assets_missing_file(tmp_path):
    with pytest.raises(AssetError):
        load_assets(tmp_path, "missing.js")


def test_copy_assets_copies_files_only(tmp_path):
    src = tmp_path / "js"
    src.mkdir()
    (src / "a.js").write_text("a")
    (src / "nested").mkdir()
    dst = tmp_path / "out" / "js"

    copy_assets(src, dst)

    assert sorted(path.name for path in dst.iterdir()) == ["a.js"]


def test_copy_assets_missing_source_is_not_an_error(tmp_path):
    dst = tmp_path / "out"
    copy_assets(tmp_path / "missing", dst)
    assert dst.is_dir()
    assert list(dst.iterdir()) == []


@pytest.mark.parametrize("name", ["../escaped.js", "nested/embed.js", "..\\escaped.js", "/abs.js", "..", ".", ""])
def test_asset_names_must_be_plain_file_names(name):
    with pytest.raises(AssetError):
        Asset(name, b"x")


def test_load_assets_uses_base_name_for_nested_files(tmp_path):
    (tmp_path / "js").mkdir()
    (tmp_path / "js" / "embed.js").write_bytes(b"js")

    assert load_assets(tmp_path, "js/embed.js") == [Asset("embed.js", b"js")]
