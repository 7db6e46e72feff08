"""Streaming index from positional paths to source line ranges."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from xml.parsers import expat

from ontodiff.parser.loader import (
    MAX_DEPTH,
    MAX_ELEMENT_COUNT,
    XMLLoader,
    XMLParseError,
    XMLSafetyError,
)
from ontodiff.parser.paths import LineRange, PositionalPath, strip_prefix

logger = logging.getLogger("ontodiff.parser")


class PositionIndex:
    """Immutable mapping ``PositionalPath -> LineRange`` for one document snapshot.

    Iteration follows document order of the start tags.
    """

    def __init__(self, ranges: dict[PositionalPath, LineRange] | None = None) -> None:
        self._ranges = MappingProxyType(dict(ranges or {}))

    @staticmethod
    def _key(path: PositionalPath | str) -> PositionalPath | None:
        if isinstance(path, PositionalPath):
            return path
        try:
            return PositionalPath.parse(path)
        except ValueError:
            return None

    def get(self, path: PositionalPath | str) -> LineRange | None:
        key = self._key(path)
        if key is None:
            return None
        return self._ranges.get(key)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (PositionalPath, str)):
            return False
        return self.get(path) is not None

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[PositionalPath]:
        return iter(self._ranges)

    def items(self) -> Iterator[tuple[PositionalPath, LineRange]]:
        return iter(self._ranges.items())

    @property
    def paths(self) -> list[str]:
        return [str(path) for path in self._ranges]


@dataclass
class _OpenElement:
    """An element whose end tag has not been seen yet."""

    path: PositionalPath
    start_line: int
    children: Counter[str] = field(default_factory=Counter)


class PositionIndexer:
    """Builds a ``PositionIndex`` in a single forward pass with pyexpat.

    Sibling ordinals are counted per open parent, keyed by the local tag
    name. Namespace prefixes are dropped, so ``a:Tag`` and ``b:Tag`` siblings
    share one counter.
    """

    def build(self, content: str | None) -> PositionIndex:
        if content is None or not content.strip():
            return PositionIndex()
        XMLLoader.check_document_size(content)

        parser = expat.ParserCreate(encoding="utf-8")
        stack: list[_OpenElement] = []
        top_level: Counter[str] = Counter()
        order: list[PositionalPath] = []
        ranges: dict[PositionalPath, LineRange] = {}

        def on_start(name: str, _attrs: Any) -> None:
            if len(stack) >= MAX_DEPTH:
                raise XMLSafetyError(
                    f"XML document exceeds maximum nesting depth ({MAX_DEPTH})",
                    line=parser.CurrentLineNumber,
                )
            if len(order) >= MAX_ELEMENT_COUNT:
                raise XMLSafetyError(
                    f"XML document exceeds maximum element count ({MAX_ELEMENT_COUNT:,})",
                    line=parser.CurrentLineNumber,
                )
            tag = strip_prefix(name)
            if stack:
                siblings = stack[-1].children
                parent_path = stack[-1].path
            else:
                siblings = top_level
                parent_path = PositionalPath()
            siblings[tag] += 1
            path = parent_path.child(tag, siblings[tag])
            stack.append(_OpenElement(path, parser.CurrentLineNumber))
            order.append(path)

        def on_end(_name: str) -> None:
            # For <tag/> expat reports the end event at the start position.
            element = stack.pop()
            ranges[element.path] = LineRange(element.start_line, parser.CurrentLineNumber)

        parser.StartElementHandler = on_start
        parser.EndElementHandler = on_end

        try:
            parser.Parse(content.encode("utf-8"), True)
        except expat.ExpatError as exc:
            raise XMLParseError(
                expat.ErrorString(exc.code), exc.lineno, exc.offset + 1
            ) from exc

        logger.debug("Indexed %d elements", len(ranges))
        return PositionIndex({path: ranges[path] for path in order})


def build_index(content: str | None) -> PositionIndex:
    """Convenience wrapper around ``PositionIndexer().build``."""
    return PositionIndexer().build(content)
