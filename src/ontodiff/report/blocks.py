"""Group error records into highlight blocks for the editor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ontodiff.models.errors import ErrorInfo


@dataclass(frozen=True)
class ErrorBlock:
    """A run of source lines highlighted as one editable unit."""

    start_line: int
    end_line: int
    errors: tuple[ErrorInfo, ...]

    @property
    def primary(self) -> ErrorInfo:
        """The record whose message feeds the block's "Fix" action."""
        return self.errors[0]

    def lines(self, text: str) -> list[str]:
        """The block's source lines out of ``text``."""
        return text.splitlines()[self.start_line - 1 : self.end_line]


def _make_block(start: int, end: int, members: list[tuple[int, ErrorInfo]]) -> ErrorBlock:
    members.sort(key=lambda member: member[0])
    return ErrorBlock(start, end, tuple(error for _, error in members))


def group_error_blocks(errors: Sequence[ErrorInfo]) -> list[ErrorBlock]:
    """Merge overlapping line ranges, ordered by line.

    Ranges that merely touch stay separate blocks. Inside a block the
    records keep their original order.
    """
    ordered = sorted(
        enumerate(errors), key=lambda item: (item[1].start_line, -item[1].end_line)
    )
    blocks: list[ErrorBlock] = []
    members: list[tuple[int, ErrorInfo]] = []
    start = end = 0

    for position, error in ordered:
        if members and error.start_line <= end:
            members.append((position, error))
            end = max(end, error.end_line)
            continue
        if members:
            blocks.append(_make_block(start, end, members))
        members = [(position, error)]
        start, end = error.start_line, error.end_line

    if members:
        blocks.append(_make_block(start, end, members))
    return blocks
