"""Shared fixtures for mdpreview tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QSettings  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from mdpreview.models.document import MarkdownDocument  # noqa: E402
from mdpreview.models.settings import RenderSettings  # noqa: E402
from mdpreview.services.converter import RenderError  # noqa: E402
from mdpreview.services.settings_service import SettingsService  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> Iterator[QApplication]:
    """One QApplication for every widget test."""
    app = QApplication.instance() or QApplication([])
    yield app  # type: ignore[misc]


@pytest.fixture
def document() -> MarkdownDocument:
    return MarkdownDocument("# Title\n\nSome *text*.")


@pytest.fixture
def settings_service() -> SettingsService:
    return SettingsService(RenderSettings())


@pytest.fixture
def markdown_file(tmp_path: Path) -> Path:
    """A Markdown file with a sibling it links to."""
    (tmp_path / "other.md").write_text("# Other\n", encoding="utf-8")
    path = tmp_path / "notes.md"
    path.write_text("# Notes\n\nSee [other](other.md).\n", encoding="utf-8")
    return path


@pytest.fixture
def isolated_qsettings(tmp_path: Path) -> None:
    """Keep QSettings writes inside the test's temp dir."""
    QSettings.setPath(QSettings.Format.NativeFormat, QSettings.Scope.UserScope, str(tmp_path))
    QSettings.setPath(QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(tmp_path))


class FakeConverter:
    """Stands in for MarkdownConverter and records every call."""

    instances: list[FakeConverter] = []

    def __init__(self, settings: RenderSettings) -> None:
        self.settings = settings
        self.calls: list[str] = []
        self.fail = False
        self.closed = False
        FakeConverter.instances.append(self)

    def convert(self, text: str) -> str:
        self.calls.append(text)
        if self.fail:
            raise RenderError("boom")
        return f"<p>{text}</p>"

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_converter(monkeypatch) -> type[FakeConverter]:
    """Patch the preview editor to build FakeConverter instances."""
    FakeConverter.instances = []
    monkeypatch.setattr("mdpreview.ui.preview_editor.MarkdownConverter", FakeConverter)
    return FakeConverter
