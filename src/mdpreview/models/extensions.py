"""Optional Markdown syntax features, as a bit-set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


class Extension(IntFlag):
    """Bitmask of optional syntax features enabled on top of plain Markdown."""

    NONE = 0x00
    SMARTS = 0x01
    QUOTES = 0x02
    SMARTYPANTS = SMARTS | QUOTES
    ABBREVIATIONS = 0x04
    HARDWRAPS = 0x08
    AUTOLINKS = 0x10
    TABLES = 0x20
    DEFINITIONS = 0x40
    FENCED_CODE_BLOCKS = 0x80
    WIKILINKS = 0x100
    ALL = 0xFFFF
    SUPPRESS_HTML_BLOCKS = 0x10000
    SUPPRESS_INLINE_HTML = 0x20000
    SUPPRESS_ALL_HTML = SUPPRESS_HTML_BLOCKS | SUPPRESS_INLINE_HTML


@dataclass(frozen=True)
class ExtensionOption:
    """Display metadata for one user-toggleable extension."""

    key: str
    label: str
    flag: Extension


EXTENSION_OPTIONS: tuple[ExtensionOption, ...] = (
    ExtensionOption("smarts", "Smart dashes and ellipses", Extension.SMARTS),
    ExtensionOption("quotes", "Smart quotes", Extension.QUOTES),
    ExtensionOption("abbreviations", "Abbreviations", Extension.ABBREVIATIONS),
    ExtensionOption("hardwraps", "Hard wraps", Extension.HARDWRAPS),
    ExtensionOption("autolinks", "Autolinks", Extension.AUTOLINKS),
    ExtensionOption("tables", "Tables", Extension.TABLES),
    ExtensionOption("definitions", "Definition lists", Extension.DEFINITIONS),
    ExtensionOption("fenced_code_blocks", "Fenced code blocks", Extension.FENCED_CODE_BLOCKS),
    ExtensionOption("wikilinks", "Wiki links", Extension.WIKILINKS),
    ExtensionOption("suppress_html_blocks", "Suppress HTML blocks", Extension.SUPPRESS_HTML_BLOCKS),
    ExtensionOption("suppress_inline_html", "Suppress inline HTML", Extension.SUPPRESS_INLINE_HTML),
)
ALL_EXTENSION_KEYS: tuple[str, ...] = tuple(item.key for item in EXTENSION_OPTIONS)
FLAG_BY_KEY: dict[str, Extension] = {item.key: item.flag for item in EXTENSION_OPTIONS}


def extension_from_keys(keys: list[str] | tuple[str, ...] | set[str]) -> Extension:
    """Return the OR of the named extensions.

    Names are matched case-insensitively and may use dashes or underscores.
    Besides the option keys, any ``Extension`` member name is accepted
    (``all``, ``smartypants``, ``suppress_all_html``...).

    Raises:
        ValueError: If a name is unknown.
    """
    flags = Extension.NONE
    for raw in keys:
        key = raw.strip().lower().replace("-", "_")
        if key in FLAG_BY_KEY:
            flags |= FLAG_BY_KEY[key]
            continue
        try:
            flags |= Extension[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown extension: {raw!r}") from None
    return flags


def extension_keys(flags: int) -> list[str]:
    """Return option keys enabled in ``flags``, in canonical order."""
    return [item.key for item in EXTENSION_OPTIONS if flags & item.flag]
