"""Pydantic models and value types for mdpreview."""

from mdpreview.models.document import MarkdownDocument
from mdpreview.models.extensions import (
    ALL_EXTENSION_KEYS,
    EXTENSION_OPTIONS,
    Extension,
    ExtensionOption,
    extension_from_keys,
    extension_keys,
)
from mdpreview.models.links import LinkKind, LinkTarget
from mdpreview.models.settings import DEFAULT_PARSING_TIMEOUT_MS, RenderSettings

__all__ = [
    "Extension",
    "ExtensionOption",
    "LinkKind",
    "LinkTarget",
    "MarkdownDocument",
    "RenderSettings",
    "ALL_EXTENSION_KEYS",
    "DEFAULT_PARSING_TIMEOUT_MS",
    "EXTENSION_OPTIONS",
    "extension_from_keys",
    "extension_keys",
]
