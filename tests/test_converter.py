"""Tests for MarkdownConverter and the flag → extension mapping."""

from __future__ import annotations

import threading
from types import SimpleNamespace

import pytest

from mdpreview.models.extensions import Extension
from mdpreview.models.settings import RenderSettings
from mdpreview.services.converter import (
    MarkdownConverter,
    RenderError,
    RenderTimeoutError,
    build_extensions,
)


def _convert(text: str, flags: Extension = Extension.NONE, **kwargs: object) -> str:
    converter = MarkdownConverter(RenderSettings(extensions=flags, **kwargs))
    return converter.convert(text)


def test_plain_markdown_and_empty_input() -> None:
    html = _convert("# Title\n\nSome *text*.")
    assert '<h1 id="title">Title</h1>' in html
    assert "<em>text</em>" in html
    assert _convert("") == ""


def test_headings_carry_ids_for_fragment_links() -> None:
    html = _convert("# Intro\n\n[go](#intro)")
    assert '<h1 id="intro">Intro</h1>' in html
    assert '<a href="#intro">go</a>' in html


def test_build_extensions_only_includes_enabled_features() -> None:
    names, configs = build_extensions(RenderSettings())
    assert names == ["toc"]
    assert configs == {"toc": {}}

    names, configs = build_extensions(
        RenderSettings(extensions=Extension.TABLES | Extension.SMARTS, highlight_code=True)
    )
    assert "tables" in names
    assert "smarty" in names
    assert "codehilite" in names
    assert configs["smarty"]["smart_dashes"] is True
    assert configs["smarty"]["smart_quotes"] is False
    assert configs["codehilite"]["noclasses"] is True


def test_tables_flag() -> None:
    text = "| a | b |\n|---|---|\n| 1 | 2 |"
    assert "<table>" in _convert(text, Extension.TABLES)
    assert "<table>" not in _convert(text)


def test_fenced_code_flag() -> None:
    text = "```\nprint('x')\n```"
    assert "<pre><code>" in _convert(text, Extension.FENCED_CODE_BLOCKS)
    assert "<pre>" not in _convert(text)


def test_highlight_code_uses_inline_styles() -> None:
    text = "```python\nvalue = 1\n```"
    html = _convert(text, Extension.FENCED_CODE_BLOCKS, highlight_code=True)
    assert "codehilite" in html
    assert "style=" in html


def test_hardwraps_flag() -> None:
    assert "<br" in _convert("first\nsecond", Extension.HARDWRAPS)
    assert "<br" not in _convert("first\nsecond")


def test_smarts_and_quotes_are_independent() -> None:
    text = 'a -- b... "quoted"'
    smarts = _convert(text, Extension.SMARTS)
    assert "&ndash;" in smarts
    assert "&hellip;" in smarts
    assert "&ldquo;" not in smarts

    quotes = _convert(text, Extension.QUOTES)
    assert "&ldquo;quoted&rdquo;" in quotes
    assert "&ndash;" not in quotes


def test_abbreviations_and_definitions() -> None:
    abbr = _convert("*[HTML]: Hyper Text Markup Language\n\nHTML rocks", Extension.ABBREVIATIONS)
    assert '<abbr title="Hyper Text Markup Language">HTML</abbr>' in abbr

    definitions = _convert("Term\n: Meaning", Extension.DEFINITIONS)
    assert "<dl>" in definitions
    assert "<dd>Meaning</dd>" in definitions


def test_wikilinks_point_at_markdown_files() -> None:
    html = _convert("See [[Other Page]].", Extension.WIKILINKS)
    assert 'href="Other_Page.md"' in html


def test_autolinks_bare_urls() -> None:
    html = _convert("Visit https://example.com/a_b_c. Or www.example.org", Extension.AUTOLINKS)
    assert '<a href="https://example.com/a_b_c">https://example.com/a_b_c</a>.' in html
    assert '<a href="http://www.example.org">www.example.org</a>' in html
    assert "<a" not in _convert("Visit https://example.com")


def test_autolinks_leave_existing_links_alone() -> None:
    html = _convert("[https://example.com](https://example.com)", Extension.AUTOLINKS)
    assert html.count("<a ") == 1


def test_suppress_html() -> None:
    text = "<div>block</div>\n\ntext <b>bold</b>"
    passthrough = _convert(text)
    assert "<div>block</div>" in passthrough
    assert "<b>bold</b>" in passthrough

    suppressed = _convert(text, Extension.SUPPRESS_ALL_HTML)
    assert "&lt;div&gt;" in suppressed
    assert "&lt;b&gt;" in suppressed

    inline_only = _convert("text <b>bold</b>", Extension.SUPPRESS_INLINE_HTML)
    assert "&lt;b&gt;bold&lt;/b&gt;" in inline_only


def test_library_failure_is_wrapped(monkeypatch) -> None:
    def broken(_text: str) -> str:
        raise ValueError("bad input")

    converter = MarkdownConverter(RenderSettings())
    monkeypatch.setattr(converter, "_new_markdown", lambda: SimpleNamespace(convert=broken))

    with pytest.raises(RenderError, match="bad input") as info:
        converter.convert("x")
    assert isinstance(info.value.__cause__, ValueError)
    assert not isinstance(info.value, RenderTimeoutError)


def test_timeout_raises_render_timeout(monkeypatch) -> None:
    release = threading.Event()

    def stuck(_text: str) -> str:
        release.wait(5)
        return "<p>late</p>"

    converter = MarkdownConverter(RenderSettings(parsing_timeout_ms=50))
    monkeypatch.setattr(converter, "_new_markdown", lambda: SimpleNamespace(convert=stuck))
    try:
        with pytest.raises(RenderTimeoutError, match="50 ms"):
            converter.convert("x")
    finally:
        release.set()


def test_closed_converter_refuses_work() -> None:
    converter = MarkdownConverter(RenderSettings())
    converter.close()
    with pytest.raises(RenderError, match="closed"):
        converter.convert("x")


def test_settings_property() -> None:
    settings = RenderSettings(extensions=Extension.TABLES)
    assert MarkdownConverter(settings).settings is settings


class TestInFlightConversion:
    @pytest.fixture
    def stuck(self, monkeypatch):
        release = threading.Event()
        started: list[str] = []

        def convert(text: str) -> str:
            started.append(text)
            release.wait(5)
            return f"<p>{text}</p>"

        monkeypatch.setattr(
            MarkdownConverter, "_new_markdown", lambda self: SimpleNamespace(convert=convert)
        )
        yield release, started
        release.set()

    def test_retry_of_same_text_reuses_running_worker(self, stuck) -> None:
        release, started = stuck
        converter = MarkdownConverter(RenderSettings(parsing_timeout_ms=20))
        for _ in range(3):
            with pytest.raises(RenderTimeoutError):
                converter.convert("x")
        assert started == ["x"]
        assert converter.busy

        release.set()
        assert converter.convert("x") == "<p>x</p>"
        assert not converter.busy
        assert started == ["x"]

    def test_other_text_waits_for_running_worker(self, stuck) -> None:
        release, started = stuck
        converter = MarkdownConverter(RenderSettings(parsing_timeout_ms=20))
        with pytest.raises(RenderTimeoutError):
            converter.convert("first")
        with pytest.raises(RenderTimeoutError, match="still running"):
            converter.convert("second")
        assert started == ["first"]

        release.set()
        assert converter.convert("second") == "<p>second</p>"
        assert started == ["first", "second"]

    def test_close_drops_in_flight_conversion(self, stuck) -> None:
        converter = MarkdownConverter(RenderSettings(parsing_timeout_ms=20))
        with pytest.raises(RenderTimeoutError):
            converter.convert("x")
        converter.close()
        assert not converter.busy
        with pytest.raises(RenderError, match="closed"):
            converter.convert("x")
