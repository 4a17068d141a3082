"""PySide6 application bootstrap: main window hosting the preview, run_app()."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import QSettings
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QStatusBar,
    QTabWidget,
)

from mdpreview.models.document import MarkdownDocument
from mdpreview.models.extensions import EXTENSION_OPTIONS, extension_keys
from mdpreview.services.settings_service import SettingsService
from mdpreview.ui.preview_editor import MarkdownPreviewEditor
from mdpreview.ui.theme import build_stylesheet, format_timeout_ms, window_title

if TYPE_CHECKING:
    from mdpreview.config import Config
    from mdpreview.models.settings import RenderSettings

logger = logging.getLogger(__name__)


class PreviewMainWindow(QMainWindow):
    """Text/Preview tabs over one document, with a settings menu."""

    def __init__(self, config: Config) -> None:
        super().__init__()
        self._config = config
        self.setMinimumSize(800, 600)

        self._document = (
            MarkdownDocument.from_file(config.file, parent=self)
            if config.file is not None
            else MarkdownDocument(parent=self)
        )
        self._settings_service = SettingsService(config.settings, parent=self)

        # ── Tabs ──
        self._tabs = QTabWidget()
        self._tabs.setDocumentMode(True)
        self.setCentralWidget(self._tabs)

        self._source = QPlainTextEdit()
        self._source.setPlainText(self._document.text() or "")
        self._tabs.addTab(self._source, "Text")

        self._preview = MarkdownPreviewEditor(
            self._document, self._settings_service, navigation=self
        )
        self._tabs.addTab(self._preview.component(), self._preview.name)

        # ── Status bar ──
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_label = QLabel()
        self._status_bar.addWidget(self._status_label)

        # ── Wire signals ──
        self._source.textChanged.connect(self._on_source_edited)
        self._document.changed.connect(self._on_document_changed)
        self._tabs.currentChanged.connect(self._on_tab_changed)
        self._settings_service.settings_changed.connect(self._on_settings_changed)

        self._extension_actions: dict[str, QAction] = {}
        self._setup_menus()

        self._update_title()
        self._update_status(self._settings_service.current)
        self._restore_state()

    @property
    def document(self) -> MarkdownDocument:
        return self._document

    @property
    def preview(self) -> MarkdownPreviewEditor:
        return self._preview

    @property
    def settings_service(self) -> SettingsService:
        return self._settings_service

    def _setup_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        open_action = file_menu.addAction("&Open…")
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._choose_file)
        file_menu.addSeparator()
        quit_action = file_menu.addAction("&Quit")
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)

        settings_menu = self.menuBar().addMenu("&Settings")
        current = self._settings_service.current
        for option in EXTENSION_OPTIONS:
            action = settings_menu.addAction(option.label)
            action.setCheckable(True)
            action.setChecked(current.enabled(option.flag))
            action.toggled.connect(
                lambda checked, flag=option.flag: self._settings_service.set_extension_enabled(
                    flag, checked
                )
            )
            self._extension_actions[option.key] = action

        settings_menu.addSeparator()
        self._highlight_action = settings_menu.addAction("Highlight code")
        self._highlight_action.setCheckable(True)
        self._highlight_action.setChecked(current.highlight_code)
        self._highlight_action.toggled.connect(self._settings_service.set_highlight_code)

        timeout_action = settings_menu.addAction("Parsing timeout…")
        timeout_action.triggered.connect(self._choose_timeout)

    # ── NavigationService ──

    def open_file(self, path: Path, fragment: str = "") -> bool:
        """Load ``path`` into the document, then scroll to ``fragment``."""
        try:
            self._document.load(path)
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot open %s", path, exc_info=True)
            return False
        self._update_title()
        if self._tabs.currentWidget() is self._preview.component():
            self._preview.become_visible()
            if fragment:
                self._preview.component().scrollToAnchor(fragment)
        return True

    # ── Slots ──

    def _on_source_edited(self) -> None:
        self._document.set_text(self._source.toPlainText())

    def _on_document_changed(self) -> None:
        text = self._document.text() or ""
        if text != self._source.toPlainText():
            # Echoes back through _on_source_edited as an unchanged set_text().
            self._source.setPlainText(text)

    def _on_tab_changed(self, index: int) -> None:
        if self._tabs.widget(index) is self._preview.component():
            self._preview.become_visible()
        else:
            self._preview.become_hidden()

    def _on_settings_changed(self, settings: RenderSettings) -> None:
        self._update_status(settings)
        # The visible preview would otherwise wait for the next tab switch.
        if self._tabs.currentWidget() is self._preview.component():
            self._preview.become_visible()

    def _choose_file(self) -> None:
        start = str(self._document.path.parent) if self._document.path else ""
        file_name, _ = QFileDialog.getOpenFileName(
            self, "Open Markdown", start, "Markdown (*.md *.markdown);;All files (*)"
        )
        if file_name:
            self.open_file(Path(file_name))

    def _choose_timeout(self) -> None:
        current = self._settings_service.current.parsing_timeout_ms
        value, ok = QInputDialog.getInt(
            self, "Parsing timeout", "Timeout (ms):", current, 1, 600_000, 100
        )
        if ok:
            self._settings_service.set_parsing_timeout(value)

    def _update_title(self) -> None:
        path = self._document.path
        self.setWindowTitle(window_title(path.name if path else ""))

    def _update_status(self, settings: RenderSettings) -> None:
        keys = extension_keys(settings.extensions)
        self._status_label.setText(
            f"Extensions: {', '.join(keys) or 'none'}  "
            f"Timeout: {format_timeout_ms(settings.parsing_timeout_ms)}"
        )

    # ── Window state ──

    def _restore_state(self) -> None:
        settings = QSettings(*self._config.qsettings_scope)
        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)  # type: ignore[arg-type]

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Save geometry and release the preview."""
        settings = QSettings(*self._config.qsettings_scope)
        settings.setValue("geometry", self.saveGeometry())
        settings.sync()
        self._preview.dispose()
        event.accept()


def run_app(config: Config) -> int:
    """Entry point: create QApplication, main window, and run the Qt loop."""
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Markdown Preview")
    app.setOrganizationName(config.qsettings_scope[0])
    app.setStyleSheet(build_stylesheet())  # type: ignore[union-attr]

    try:
        window = PreviewMainWindow(config)
    except Exception:
        logger.exception("Application startup failed")
        return 1
    window.show()
    logger.info("Previewing %s", config.file or "an empty document")
    return app.exec()  # type: ignore[union-attr]
