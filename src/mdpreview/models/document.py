"""Observable Markdown text buffer owned by the host editor."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, Signal


class MarkdownDocument(QObject):
    """Mutable text buffer that emits ``changed`` on every edit.

    Once released the buffer is unreadable and ``text()`` returns None.
    """

    changed = Signal()

    def __init__(
        self,
        text: str = "",
        path: Path | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._text: str | None = text
        self._path = path

    @classmethod
    def from_file(cls, path: Path, parent: QObject | None = None) -> MarkdownDocument:
        return cls(path.read_text(encoding="utf-8"), path=path, parent=parent)

    @property
    def path(self) -> Path | None:
        return self._path

    def text(self) -> str | None:
        return self._text

    def set_text(self, text: str) -> None:
        """Replace the whole buffer. Unchanged text does not notify."""
        if self._text is None or text == self._text:
            return
        self._text = text
        self.changed.emit()

    def insert(self, offset: int, text: str) -> None:
        current = self._text or ""
        offset = max(0, min(offset, len(current)))
        self.set_text(current[:offset] + text + current[offset:])

    def load(self, path: Path) -> None:
        """Point the buffer at another file and read its content."""
        text = path.read_text(encoding="utf-8")
        self._path = path
        self._text = text
        self.changed.emit()

    def release(self) -> None:
        self._text = None
        self.changed.emit()
