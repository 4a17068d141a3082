"""Resolve hrefs found in rendered Markdown to navigation targets."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlsplit

from result import Err, Ok, Result

from mdpreview.models.links import LinkTarget

_EXTERNAL_SCHEMES = frozenset({"http", "https", "mailto", "ftp"})


def resolve_link(href: str, document_path: Path | None = None) -> Result[LinkTarget, str]:
    """Classify ``href`` and resolve local paths against the document folder."""
    raw = href.strip()
    if not raw:
        return Err("Empty link")

    if raw.startswith("#"):
        fragment = unquote(raw[1:])
        if not fragment:
            return Err("Empty anchor")
        return Ok(LinkTarget(kind="anchor", fragment=fragment))

    parts = urlsplit(raw)
    scheme = parts.scheme.lower()
    if scheme in _EXTERNAL_SCHEMES:
        return Ok(LinkTarget(kind="external", url=raw))
    # Single letters are Windows drive letters, not schemes.
    if scheme and scheme != "file" and len(scheme) > 1:
        return Err(f"Unsupported link scheme: {scheme}")

    if scheme == "file":
        target = Path(unquote(parts.path))
    elif len(scheme) == 1:
        target = Path(raw)
    else:
        target = Path(unquote(parts.path))
    fragment = unquote(parts.fragment) if len(scheme) != 1 else ""

    if not target.is_absolute():
        if document_path is None:
            return Err(f"Cannot resolve relative link without a document path: {raw}")
        target = document_path.parent / target

    target = target.expanduser()
    if not target.exists():
        return Err(f"Link target does not exist: {target}")
    return Ok(LinkTarget(kind="file", path=target.resolve(), fragment=fragment))
