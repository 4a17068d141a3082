"""Protocol definitions for the host editor seams."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from PySide6.QtWidgets import QWidget


class EditorState:
    """Opaque per-editor state. Stateless editors share ``EMPTY_STATE``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "EditorState()"


EMPTY_STATE = EditorState()


@runtime_checkable
class FileEditor(Protocol):
    """Capabilities a host expects from an editor tab."""

    @property
    def name(self) -> str: ...

    def component(self) -> QWidget: ...

    def preferred_focused_component(self) -> QWidget | None: ...

    def get_state(self) -> EditorState: ...

    def set_state(self, state: EditorState) -> None: ...

    def is_modified(self) -> bool: ...

    def is_valid(self) -> bool: ...

    def become_visible(self) -> None: ...

    def become_hidden(self) -> None: ...

    def dispose(self) -> None: ...


@runtime_checkable
class NavigationService(Protocol):
    """Host service that opens files referenced from a document."""

    def open_file(self, path: Path, fragment: str = "") -> bool: ...
