"""Editor tab that shows the rendered HTML of a Markdown document."""

from __future__ import annotations

import importlib.resources
import logging
import time
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QTextBrowser, QWidget

from mdpreview.services.converter import MarkdownConverter
from mdpreview.services.protocols import EMPTY_STATE, EditorState
from mdpreview.ui.link_handler import MarkdownLinkHandler

if TYPE_CHECKING:
    from mdpreview.models.document import MarkdownDocument
    from mdpreview.models.settings import RenderSettings
    from mdpreview.services.protocols import NavigationService
    from mdpreview.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

EDITOR_NAME = "Preview"
PREVIEW_STYLESHEET = "preview.css"


def load_preview_stylesheet() -> str:
    """Load preview.css from the templates package."""
    files = importlib.resources.files("mdpreview.ui.templates")
    return (files / PREVIEW_STYLESHEET).read_text(encoding="utf-8")


def wrap_preview_html(body: str) -> str:
    return f'<div id="markdown-preview">{body}</div>'


class MarkdownPreviewEditor:
    """Read-only preview of a MarkdownDocument.

    Document edits and settings changes only mark the preview obsolete. The
    HTML is regenerated the next time the tab becomes visible, so any number
    of edits made while the tab is hidden cost a single conversion.

    A failed conversion is logged and leaves both the displayed HTML and the
    obsolete flag as they were, so the next visibility change retries.
    """

    def __init__(
        self,
        document: MarkdownDocument,
        settings_service: SettingsService,
        navigation: NavigationService | None = None,
        parent: QWidget | None = None,
    ) -> None:
        stylesheet = load_preview_stylesheet()
        self._document = document
        self._settings_service = settings_service
        self._converter = MarkdownConverter(settings_service.current)
        self._preview_is_obsolete = True
        self._disposed = False
        self._html = ""

        document.changed.connect(self.on_document_changed)
        settings_service.settings_changed.connect(self.on_settings_changed)

        self._browser = QTextBrowser(parent)
        self._browser.setReadOnly(True)
        self._browser.setOpenLinks(False)
        self._browser.document().setDefaultStyleSheet(stylesheet)

        self._link_handler = MarkdownLinkHandler(
            self._browser, document, navigation, parent=self._browser
        )
        self._browser.anchorClicked.connect(self._link_handler.on_anchor_clicked)

    # ── Notifications ──

    def on_document_changed(self) -> None:
        if not self._disposed:
            self._preview_is_obsolete = True

    def on_settings_changed(self, settings: RenderSettings) -> None:
        if self._disposed:
            return
        self._converter.close()
        self._converter = MarkdownConverter(settings)
        self._preview_is_obsolete = True

    # ── Visibility ──

    def become_visible(self) -> None:
        """Regenerate the HTML if the document or settings changed since the last render."""
        if self._disposed or not self._preview_is_obsolete:
            return
        started = time.perf_counter()
        try:
            text = self._document.text()
            if text is None:
                raise ValueError("Document text is not readable")
            body = self._converter.convert(text)
        except Exception:
            logger.exception("Failed processing Markdown document")
            return
        self._set_html(wrap_preview_html(body))
        self._preview_is_obsolete = False
        logger.debug(
            "Rendered %d chars in %.1f ms",
            len(text),
            (time.perf_counter() - started) * 1000,
        )

    def become_hidden(self) -> None:
        """Keep the rendered content for the next time the tab is shown."""

    def _set_html(self, html: str) -> None:
        # setHtml() jumps back to the top; keep the reader where they were.
        scrollbar = self._browser.verticalScrollBar()
        position = scrollbar.value()
        self._browser.setHtml(html)
        scrollbar.setValue(min(position, scrollbar.maximum()))
        self._html = html

    # ── Queries ──

    @property
    def name(self) -> str:
        return EDITOR_NAME

    @property
    def is_stale(self) -> bool:
        return self._preview_is_obsolete

    def html(self) -> str:
        """The HTML last handed to the view."""
        return self._html

    def component(self) -> QTextBrowser:
        return self._browser

    def preferred_focused_component(self) -> QTextBrowser:
        return self._browser

    def get_state(self) -> EditorState:
        return EMPTY_STATE

    def set_state(self, state: EditorState) -> None:
        """Stateless; nothing to restore."""

    def is_modified(self) -> bool:
        return False

    def is_valid(self) -> bool:
        return self._document.text() is not None

    def current_location(self) -> None:
        return None

    def background_highlighter(self) -> None:
        return None

    def structure_view_builder(self) -> None:
        return None

    # ── Lifecycle ──

    def dispose(self) -> None:
        """Unsubscribe and release the view. Further calls do nothing."""
        if self._disposed:
            return
        self._disposed = True
        for signal, slot in (
            (self._document.changed, self.on_document_changed),
            (self._settings_service.settings_changed, self.on_settings_changed),
        ):
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError):
                logger.debug("Subscription already gone: %s", slot.__name__)
        self._converter.close()
        self._browser.deleteLater()
