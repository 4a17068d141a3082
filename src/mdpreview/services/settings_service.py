"""Render settings channel shared by every open preview."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from mdpreview.models.extensions import Extension, extension_keys
from mdpreview.models.settings import RenderSettings

logger = logging.getLogger(__name__)


class SettingsService(QObject):
    """Holds the current RenderSettings and announces replacements.

    Subscribers receive the new snapshot through ``settings_changed``. The
    service never mutates a snapshot in place.
    """

    settings_changed = Signal(object)

    def __init__(
        self,
        settings: RenderSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or RenderSettings.default()

    @property
    def current(self) -> RenderSettings:
        return self._settings

    def update(self, settings: RenderSettings) -> None:
        """Replace the current snapshot and notify subscribers if it differs."""
        if settings == self._settings:
            return
        self._settings = settings
        logger.info(
            "Render settings changed: extensions=%s timeout=%dms highlight=%s",
            ",".join(extension_keys(settings.extensions)) or "none",
            settings.parsing_timeout_ms,
            settings.highlight_code,
        )
        self.settings_changed.emit(settings)

    def set_extension_enabled(self, flag: Extension, enabled: bool) -> None:
        self.update(self._settings.with_extension(flag, enabled))

    def set_parsing_timeout(self, timeout_ms: int) -> None:
        self.update(self._settings.with_timeout(timeout_ms))

    def set_highlight_code(self, enabled: bool) -> None:
        self.update(self._settings.with_highlight_code(enabled))
