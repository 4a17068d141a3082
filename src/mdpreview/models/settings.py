"""Render settings snapshot."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mdpreview.models.extensions import Extension, extension_from_keys

DEFAULT_PARSING_TIMEOUT_MS = 2000


class RenderSettings(BaseModel):
    """Immutable snapshot of everything the converter is built from.

    Instances are never mutated; the ``with_*`` helpers return new snapshots.
    """

    model_config = ConfigDict(frozen=True)

    extensions: Extension = Extension.NONE
    parsing_timeout_ms: int = Field(default=DEFAULT_PARSING_TIMEOUT_MS, gt=0)
    highlight_code: bool = False

    @field_validator("extensions", mode="before")
    @classmethod
    def _coerce_extensions(cls, value: Any) -> Any:
        if isinstance(value, Extension):
            return value
        if isinstance(value, int):
            return Extension(value)
        if isinstance(value, str):
            return extension_from_keys(value.split(","))
        if isinstance(value, list | tuple | set | frozenset):
            return extension_from_keys(list(value))
        return value

    @classmethod
    def default(cls) -> RenderSettings:
        return cls()

    @property
    def parsing_timeout(self) -> float:
        """Parsing timeout in seconds."""
        return self.parsing_timeout_ms / 1000

    def enabled(self, flag: Extension) -> bool:
        return bool(flag) and (self.extensions & flag) == flag

    def with_extension(self, flag: Extension, enabled: bool = True) -> RenderSettings:
        if enabled:
            extensions = int(self.extensions) | int(flag)
        else:
            extensions = int(self.extensions) & ~int(flag)
        return self.model_copy(update={"extensions": Extension(extensions)})

    def with_timeout(self, timeout_ms: int) -> RenderSettings:
        return RenderSettings(
            extensions=self.extensions,
            parsing_timeout_ms=timeout_ms,
            highlight_code=self.highlight_code,
        )

    def with_highlight_code(self, enabled: bool) -> RenderSettings:
        return self.model_copy(update={"highlight_code": enabled})
