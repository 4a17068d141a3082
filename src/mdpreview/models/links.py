"""Link target models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel

LinkKind = Literal["anchor", "external", "file"]


class LinkTarget(BaseModel):
    """Where an activated preview link should lead."""

    kind: LinkKind
    url: str = ""
    path: Path | None = None
    fragment: str = ""
