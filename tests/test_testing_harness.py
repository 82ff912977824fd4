from __future__ import annotations

from mdbook_preprocessor_utils.book import Chapter
from mdbook_preprocessor_utils.example import ExamplePreprocessor
from mdbook_preprocessor_utils.testing import MdbookTestHarness


def test_harness_initialises_a_book(tmp_path):
    harness = MdbookTestHarness(tmp_path)

    assert (tmp_path / "book.toml").exists()
    assert (tmp_path / "src" / "SUMMARY.md").read_text().startswith("# Summary")
    assert (tmp_path / "src" / "chapter_1.md").read_text() == "# Chapter 1\n"
    assert harness.src_dir == tmp_path / "src"


def test_harness_without_directory_uses_a_temporary_one():
    harness = MdbookTestHarness()
    assert (harness.dir / "book.toml").exists()


def test_example_preprocessor_is_a_no_op(harness):
    book = harness.compile(ExamplePreprocessor)

    (chapter,) = book.sections
    assert chapter.content == "# Chapter 1\n"
    assert (harness.src_dir / "example").is_dir()


def test_compile_runs_plugin_over_nested_chapters(harness, shout):
    harness.write_summary("# Summary\n\n- [One](one.md)\n  - [Two](guide/two.md)\n")
    harness.write_chapter("one.md", "@@one@@")
    harness.write_chapter("guide/two.md", "@@two@@")

    book = harness.compile(shout, {"volume": 11})

    one = book.sections[0]
    two = one.sub_items[0]
    assert isinstance(two, Chapter)
    assert one.content.startswith("<b>ONE</b>\n\n")
    assert 'src="shout/shout.js"' in one.content
    assert 'src="../shout/shout.js"' in two.content
    assert shout.finalized == ["done"]
