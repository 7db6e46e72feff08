"""Element matching strategies.

A selector answers one question: can this control element and this test
element be compared as the same logical node? ``NodeMatcher`` pairs up two
sibling lists using an ordered chain of selectors.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from lxml import etree

from ontodiff.diff.nodes import element_children, merged_text, significant_attributes


class ElementSelector(Protocol):
    def can_be_compared(self, control: etree._Element, test: etree._Element) -> bool: ...


class ByName:
    """Same namespace URI and local name; prefixes are irrelevant."""

    def can_be_compared(self, control: etree._Element, test: etree._Element) -> bool:
        # lxml tags are Clark notation: "{uri}local"
        return control.tag == test.tag


class ByNameAndText(ByName):
    """Same name and same normalized direct text."""

    def can_be_compared(self, control: etree._Element, test: etree._Element) -> bool:
        return super().can_be_compared(control, test) and merged_text(control) == merged_text(
            test
        )


class ByNameAndAllAttributes(ByName):
    """Same name and identical significant attributes (order ignored)."""

    def can_be_compared(self, control: etree._Element, test: etree._Element) -> bool:
        return super().can_be_compared(control, test) and significant_attributes(
            control
        ) == significant_attributes(test)


class ByEqualSubtree(ByName):
    """Whole subtrees are equivalent: names, attributes, text and children in order."""

    def can_be_compared(self, control: etree._Element, test: etree._Element) -> bool:
        if not super().can_be_compared(control, test):
            return False
        if merged_text(control) != merged_text(test):
            return False
        if significant_attributes(control) != significant_attributes(test):
            return False
        control_children = element_children(control)
        test_children = element_children(test)
        if len(control_children) != len(test_children):
            return False
        return all(
            self.can_be_compared(c, t) for c, t in zip(control_children, test_children)
        )


by_name = ByName()
by_name_and_text = ByNameAndText()
by_name_and_all_attributes = ByNameAndAllAttributes()
by_equal_subtree = ByEqualSubtree()

# Unchanged siblings pair up first, so a deleted or edited element is not
# paired with an unrelated sibling that merely shares its tag and text.
DEFAULT_SELECTORS: tuple[ElementSelector, ...] = (
    by_equal_subtree,
    by_name_and_text,
    by_name,
)


class NodeMatcher:
    """Pairs control children with test children.

    Each selector runs as its own pass over the control nodes still
    unmatched. Within a pass, a control node searches the unmatched test
    nodes starting right after the previous match and wrapping around, so
    in-order siblings pair up positionally and reordered ones still match.
    """

    def __init__(self, selectors: Sequence[ElementSelector] = DEFAULT_SELECTORS) -> None:
        if not selectors:
            raise ValueError("NodeMatcher needs at least one selector")
        self._selectors = tuple(selectors)

    def match(
        self,
        controls: Sequence[etree._Element],
        tests: Sequence[etree._Element],
    ) -> dict[int, int]:
        """Return ``{control_index: test_index}`` for every matched pair."""
        matched: dict[int, int] = {}
        taken: set[int] = set()
        for selector in self._selectors:
            last = -1
            for ci, control in enumerate(controls):
                if ci in matched:
                    continue
                ti = self._find(control, tests, taken, selector, last)
                if ti is not None:
                    matched[ci] = ti
                    taken.add(ti)
                    last = ti
        return matched

    @staticmethod
    def _find(
        control: etree._Element,
        tests: Sequence[etree._Element],
        taken: set[int],
        selector: ElementSelector,
        last: int,
    ) -> int | None:
        count = len(tests)
        for offset in range(count):
            ti = (last + 1 + offset) % count
            if ti not in taken and selector.can_be_compared(control, tests[ti]):
                return ti
        return None
