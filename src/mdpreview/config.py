"""Configuration for mdpreview."""

from dataclasses import dataclass, field
from pathlib import Path

from mdpreview.models.settings import RenderSettings


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    file: Path | None = None
    settings: RenderSettings = field(default_factory=RenderSettings.default)
    log_level: str = "INFO"
    qsettings_scope: tuple[str, str] = ("mdpreview", "MarkdownPreview")
