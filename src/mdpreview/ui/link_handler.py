"""Activation of links clicked in the preview."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QUrl, Slot
from PySide6.QtGui import QDesktopServices
from result import Ok

from mdpreview.services.link_resolver import resolve_link

if TYPE_CHECKING:
    from PySide6.QtWidgets import QTextBrowser

    from mdpreview.models.document import MarkdownDocument
    from mdpreview.models.links import LinkTarget
    from mdpreview.services.protocols import NavigationService

logger = logging.getLogger(__name__)


class MarkdownLinkHandler(QObject):
    """Routes ``anchorClicked`` from the preview browser.

    In-page anchors scroll the browser. Web and mail links go to the desktop.
    Local files go to the host navigation service, or to the desktop when the
    host has none.
    """

    def __init__(
        self,
        browser: QTextBrowser,
        document: MarkdownDocument,
        navigation: NavigationService | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._browser = browser
        self._document = document
        self._navigation = navigation

    @Slot(QUrl)
    def on_anchor_clicked(self, url: QUrl) -> None:
        self.activate(url.toString())

    def activate(self, href: str) -> bool:
        """Follow ``href``. Returns True when something was opened."""
        result = resolve_link(href, self._document.path)
        if not isinstance(result, Ok):
            logger.warning("Ignoring link %r: %s", href, result.err_value)
            return False
        return self._open(result.ok_value)

    def _open(self, target: LinkTarget) -> bool:
        match target.kind:
            case "anchor":
                self._browser.scrollToAnchor(target.fragment)
                return True
            case "external":
                return QDesktopServices.openUrl(QUrl(target.url))
            case _:
                assert target.path is not None
                if self._navigation is not None:
                    return self._navigation.open_file(target.path, target.fragment)
                return QDesktopServices.openUrl(QUrl.fromLocalFile(str(target.path)))
