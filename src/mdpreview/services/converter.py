"""Markdown → HTML conversion built from a RenderSettings snapshot."""

from __future__ import annotations

import logging
import threading
import xml.etree.ElementTree as etree
from concurrent.futures import Future, wait
from typing import Any

import markdown
from markdown.extensions import Extension as MarkdownExtension
from markdown.inlinepatterns import InlineProcessor
from markdown.util import AtomicString

from mdpreview.models.extensions import Extension
from mdpreview.models.settings import RenderSettings

logger = logging.getLogger(__name__)

# Bare http(s):// or www. URL, not ending in trailing punctuation.
_BARE_URL_RE = r"(?<![\w/@])((?:https?://|www\.)[^\s<>\"']*[^\s<>\"'.,;:!?)\]])"

# (flag, markdown extension name) for features that map one-to-one.
_SIMPLE_EXTENSIONS: tuple[tuple[Extension, str], ...] = (
    (Extension.ABBREVIATIONS, "abbr"),
    (Extension.HARDWRAPS, "nl2br"),
    (Extension.TABLES, "tables"),
    (Extension.DEFINITIONS, "def_list"),
    (Extension.FENCED_CODE_BLOCKS, "fenced_code"),
)


class RenderError(Exception):
    """Conversion failed, for whatever reason."""


class RenderTimeoutError(RenderError):
    """Conversion did not finish within the parsing timeout."""


class _BareUrlInlineProcessor(InlineProcessor):
    ANCESTOR_EXCLUDES = ("a",)

    def handleMatch(self, m, data):  # type: ignore[no-untyped-def]  # noqa: N802
        url = m.group(1)
        el = etree.Element("a")
        el.set("href", url if "://" in url else f"http://{url}")
        el.text = AtomicString(url)
        return el, m.start(0), m.end(0)


class AutolinkExtension(MarkdownExtension):
    """Turn bare URLs into links."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        # Above emphasis so underscores inside URLs survive.
        md.inlinePatterns.register(_BareUrlInlineProcessor(_BARE_URL_RE, md), "bare_url", 95)


class SuppressHtmlExtension(MarkdownExtension):
    """Escape raw HTML instead of passing it through."""

    def __init__(self, **kwargs: Any) -> None:
        self.config = {
            "blocks": [True, "Escape raw HTML blocks"],
            "inline": [True, "Escape inline HTML tags"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        if self.getConfig("blocks"):
            md.preprocessors.deregister("html_block", strict=False)
        if self.getConfig("inline"):
            md.inlinePatterns.deregister("html", strict=False)


def build_extensions(settings: RenderSettings) -> tuple[list[Any], dict[str, dict[str, Any]]]:
    """Map enabled flags onto Python-Markdown extensions and their configs."""
    # Headings always get ids so that #fragment links have a target.
    extensions: list[Any] = ["toc"]
    configs: dict[str, dict[str, Any]] = {"toc": {}}

    for flag, name in _SIMPLE_EXTENSIONS:
        if settings.enabled(flag):
            extensions.append(name)

    smarts = settings.enabled(Extension.SMARTS)
    quotes = settings.enabled(Extension.QUOTES)
    if smarts or quotes:
        extensions.append("smarty")
        configs["smarty"] = {
            "smart_dashes": smarts,
            "smart_ellipses": smarts,
            "smart_quotes": quotes,
            "smart_angled_quotes": quotes,
        }

    if settings.enabled(Extension.WIKILINKS):
        extensions.append("wikilinks")
        configs["wikilinks"] = {"base_url": "", "end_url": ".md"}

    if settings.highlight_code:
        extensions.append("codehilite")
        configs["codehilite"] = {"noclasses": True, "guess_lang": False}

    if settings.enabled(Extension.AUTOLINKS):
        extensions.append(AutolinkExtension())

    blocks = settings.enabled(Extension.SUPPRESS_HTML_BLOCKS)
    inline = settings.enabled(Extension.SUPPRESS_INLINE_HTML)
    if blocks or inline:
        extensions.append(SuppressHtmlExtension(blocks=blocks, inline=inline))

    return extensions, configs


class MarkdownConverter:
    """Converts Markdown text to an HTML fragment.

    Conversions run on a daemon thread so that the caller can stop waiting once
    ``parsing_timeout_ms`` has elapsed. A thread cannot be interrupted, so a
    conversion that times out stays in flight: asking again for the same text
    waits on it, and asking for other text first waits for it to drain. At most
    one worker per converter is ever running.
    """

    def __init__(self, settings: RenderSettings) -> None:
        self._settings = settings
        self._extensions, self._configs = build_extensions(settings)
        self._in_flight: tuple[str, Future[str]] | None = None
        self._closed = False

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    @property
    def busy(self) -> bool:
        """Whether a timed-out conversion is still running."""
        return self._in_flight is not None and not self._in_flight[1].done()

    def convert(self, text: str) -> str:
        """Return the HTML body for ``text``.

        Raises:
            RenderTimeoutError: The parsing timeout expired, or an earlier
                conversion of other text is still running.
            RenderError: Any other conversion failure.
        """
        if self._closed:
            raise RenderError("Converter is closed")

        timeout = self._settings.parsing_timeout
        in_flight = self._in_flight
        if in_flight is not None and in_flight[0] == text:
            future = in_flight[1]
        else:
            if in_flight is not None:
                done, _ = wait([in_flight[1]], timeout=timeout)
                if not done:
                    raise RenderTimeoutError(
                        "Previous Markdown parsing still running after "
                        f"{self._settings.parsing_timeout_ms} ms"
                    )
            future = self._start(text)
        self._in_flight = (text, future)

        try:
            html = future.result(timeout=timeout)
        except TimeoutError:
            raise RenderTimeoutError(
                f"Markdown parsing exceeded {self._settings.parsing_timeout_ms} ms"
            ) from None
        except Exception as exc:
            self._in_flight = None
            raise RenderError(f"Markdown conversion failed: {exc}") from exc
        self._in_flight = None
        return html

    def close(self) -> None:
        """Refuse further work and drop any in-flight conversion.

        A running worker exits once its parse returns; the result is discarded.
        """
        self._closed = True
        self._in_flight = None

    def _new_markdown(self) -> markdown.Markdown:
        return markdown.Markdown(
            extensions=list(self._extensions),
            extension_configs=self._configs,
            output_format="html",
        )

    def _start(self, text: str) -> Future[str]:
        future: Future[str] = Future()
        future.set_running_or_notify_cancel()
        worker = threading.Thread(
            target=self._run,
            args=(text, future),
            name="mdpreview-render",
            daemon=True,
        )
        worker.start()
        return future

    def _run(self, text: str, future: Future[str]) -> None:
        try:
            html = self._new_markdown().convert(text)
        except Exception as exc:
            logger.debug("Conversion raised %r", exc)
            future.set_exception(exc)
        else:
            future.set_result(html)
