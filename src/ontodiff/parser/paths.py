"""Positional paths and line ranges shared by the indexer and the diff engine."""

from __future__ import annotations

import re
from dataclasses import dataclass

_STEP_RE = re.compile(r"/([^/\[\]]+)\[([1-9][0-9]*)\]")


def strip_prefix(name: str) -> str:
    """``prefix:local`` -> ``local``."""
    return name.split(":", 1)[1] if ":" in name else name


@dataclass(frozen=True)
class PathStep:
    tag: str
    ordinal: int

    def __str__(self) -> str:
        return f"{self.tag}[{self.ordinal}]"


@dataclass(frozen=True)
class PositionalPath:
    """Root-relative element address such as ``/RDF[1]/Class[2]``.

    Each step is a namespace-less tag name plus its 1-based ordinal among
    same-named siblings under the same parent.
    """

    steps: tuple[PathStep, ...] = ()

    @classmethod
    def root(cls, tag: str) -> PositionalPath:
        return cls((PathStep(strip_prefix(tag), 1),))

    @classmethod
    def parse(cls, text: str) -> PositionalPath:
        """Inverse of ``str()``; raises ``ValueError`` on malformed paths."""
        steps: list[PathStep] = []
        pos = 0
        while pos < len(text):
            match = _STEP_RE.match(text, pos)
            if match is None:
                raise ValueError(f"Malformed positional path '{text}' at offset {pos}")
            steps.append(PathStep(match.group(1), int(match.group(2))))
            pos = match.end()
        if not steps:
            raise ValueError("Positional path must have at least one step")
        return cls(tuple(steps))

    def child(self, tag: str, ordinal: int) -> PositionalPath:
        if ordinal < 1:
            raise ValueError(f"Ordinal must be >= 1, got {ordinal}")
        return PositionalPath(self.steps + (PathStep(strip_prefix(tag), ordinal),))

    @property
    def parent(self) -> PositionalPath | None:
        if len(self.steps) <= 1:
            return None
        return PositionalPath(self.steps[:-1])

    @property
    def depth(self) -> int:
        return len(self.steps)

    @property
    def is_root(self) -> bool:
        """True for the document element path (single step, ordinal 1)."""
        return len(self.steps) == 1 and self.steps[0].ordinal == 1

    def __str__(self) -> str:
        return "".join(f"/{step}" for step in self.steps)


@dataclass(frozen=True)
class LineRange:
    """1-based inclusive line span of an element in its source text."""

    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.start_line < 1:
            raise ValueError(f"start_line must be >= 1, got {self.start_line}")
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) precedes start_line ({self.start_line})"
            )

    def contains(self, other: LineRange) -> bool:
        return self.start_line <= other.start_line and other.end_line <= self.end_line
