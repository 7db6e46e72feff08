"""Immutable document snapshots."""

from __future__ import annotations

from pydantic import BaseModel


class XMLDocument(BaseModel):
    """An owned, immutable XML text.

    The same snapshot must back both the position index and the diff,
    otherwise positional paths drift away from their line ranges.
    """

    text: str
    name: str | None = None

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    @property
    def line_count(self) -> int:
        return len(self.text.splitlines())
