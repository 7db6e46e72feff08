"""Structural comparison of a control XML document against a test document."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from lxml import etree

from ontodiff.diff.nodes import (
    attribute_name,
    element_children,
    local_name,
    merged_text,
    qualified_name,
    significant_attributes,
)
from ontodiff.diff.selectors import DEFAULT_SELECTORS, ElementSelector, NodeMatcher
from ontodiff.parser.loader import XMLLoader, XMLParseError
from ontodiff.parser.paths import PositionalPath

logger = logging.getLogger("ontodiff.diff")

NULL_VALUE = "null"


class ComparisonType(StrEnum):
    ELEMENT_TAG_NAME = "element_tag_name"
    ATTR_NAME_LOOKUP = "attr_name_lookup"
    ATTR_VALUE = "attr_value"
    TEXT_VALUE = "text_value"
    CHILD_LOOKUP = "child_lookup"


class DiffStatus(StrEnum):
    MATCH = "match"
    DIFFERENT = "different"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class DiffContext:
    """Where a difference sits: the enclosing tag and the differing tag."""

    parent_tag: str
    property_tag: str


@dataclass(frozen=True)
class Difference:
    """One structural mismatch, addressed on the control document."""

    kind: ComparisonType
    control_value: str | None
    test_value: str | None
    path: PositionalPath
    context: DiffContext

    @property
    def control_text(self) -> str:
        return NULL_VALUE if self.control_value is None else self.control_value

    @property
    def test_text(self) -> str:
        return NULL_VALUE if self.test_value is None else self.test_value

    @property
    def identity(self) -> str:
        return (
            f"Control: {self.control_text} => Test: {self.test_text} | "
            f"Context: Class: {self.context.parent_tag}, Property: {self.context.property_tag}"
        )


@dataclass(frozen=True)
class DiffResult:
    """Outcome of a comparison: match, differences, or unparseable input."""

    status: DiffStatus
    differences: tuple[Difference, ...] = ()
    error: XMLParseError | None = None

    @classmethod
    def from_differences(cls, differences: Sequence[Difference]) -> DiffResult:
        if not differences:
            return cls(DiffStatus.MATCH)
        return cls(DiffStatus.DIFFERENT, tuple(differences))

    @classmethod
    def malformed(cls, error: XMLParseError) -> DiffResult:
        return cls(DiffStatus.MALFORMED, error=error)

    @property
    def is_malformed(self) -> bool:
        return self.status is DiffStatus.MALFORMED

    @property
    def has_differences(self) -> bool:
        return self.status is DiffStatus.DIFFERENT


def _clean(value: str | None) -> str | None:
    return None if value is None else value.strip()


def _child_paths(
    parent_path: PositionalPath, children: Sequence[etree._Element]
) -> list[PositionalPath]:
    """Positional paths of ``children``, numbered like the indexer does."""
    counts: Counter[str] = Counter()
    paths: list[PositionalPath] = []
    for child in children:
        tag = local_name(child)
        counts[tag] += 1
        paths.append(parent_path.child(tag, counts[tag]))
    return paths


class StructuralDiffer:
    """Compares two documents in "similar" mode.

    Whitespace-only text, comments, attribute order, namespace prefixes and
    namespace declarations never produce differences. Child elements are
    paired by a ``NodeMatcher`` before being compared recursively.
    """

    def __init__(self, selectors: Sequence[ElementSelector] = DEFAULT_SELECTORS) -> None:
        self._loader = XMLLoader()
        self._matcher = NodeMatcher(selectors)

    def diff(self, control_xml: str | None, test_xml: str | None) -> DiffResult:
        if not control_xml or not control_xml.strip() or not test_xml or not test_xml.strip():
            logger.debug("Nothing to compare: control or test document is empty")
            return DiffResult(DiffStatus.MATCH)

        try:
            control = self._loader.parse(control_xml, source="control")
            test = self._loader.parse(test_xml, source="test")
        except XMLParseError as exc:
            logger.warning("Cannot compare documents: %s", exc)
            return DiffResult.malformed(exc)

        differences: list[Difference] = []
        self._compare_elements(control, test, PositionalPath.root(local_name(control)), differences)
        logger.debug("Structural diff found %d differences", len(differences))
        return DiffResult.from_differences(differences)

    # -- comparisons ---------------------------------------------------------

    def _compare_elements(
        self,
        control: etree._Element,
        test: etree._Element,
        path: PositionalPath,
        out: list[Difference],
    ) -> None:
        context = DiffContext(qualified_name(control.getparent()), qualified_name(control))

        if control.tag != test.tag:
            out.append(
                Difference(
                    ComparisonType.ELEMENT_TAG_NAME,
                    qualified_name(control),
                    qualified_name(test),
                    path,
                    context,
                )
            )

        self._compare_attributes(control, test, path, context, out)

        control_text = merged_text(control)
        test_text = merged_text(test)
        if control_text != test_text:
            out.append(
                Difference(
                    ComparisonType.TEXT_VALUE,
                    control_text or None,
                    test_text or None,
                    path,
                    context,
                )
            )

        self._compare_children(control, test, path, out)

    @staticmethod
    def _compare_attributes(
        control: etree._Element,
        test: etree._Element,
        path: PositionalPath,
        context: DiffContext,
        out: list[Difference],
    ) -> None:
        control_attrs = significant_attributes(control)
        test_attrs = significant_attributes(test)
        for key, value in control_attrs.items():
            if key not in test_attrs:
                out.append(
                    Difference(
                        ComparisonType.ATTR_NAME_LOOKUP,
                        attribute_name(control, key),
                        None,
                        path,
                        context,
                    )
                )
            elif value != test_attrs[key]:
                out.append(
                    Difference(
                        ComparisonType.ATTR_VALUE,
                        _clean(value),
                        _clean(test_attrs[key]),
                        path,
                        context,
                    )
                )
        for key in test_attrs:
            if key not in control_attrs:
                out.append(
                    Difference(
                        ComparisonType.ATTR_NAME_LOOKUP,
                        None,
                        attribute_name(test, key),
                        path,
                        context,
                    )
                )

    def _compare_children(
        self,
        control: etree._Element,
        test: etree._Element,
        path: PositionalPath,
        out: list[Difference],
    ) -> None:
        control_children = element_children(control)
        test_children = element_children(test)
        if not control_children and not test_children:
            return

        pairs = self._matcher.match(control_children, test_children)
        control_name = qualified_name(control)

        # Extra test children surface on the control parent that should hold
        # them, right after the matched control child they follow in the test.
        extras: dict[int, list[etree._Element]] = {}
        test_to_control = {ti: ci for ci, ti in pairs.items()}
        anchor = -1
        for ti, test_child in enumerate(test_children):
            if ti in test_to_control:
                anchor = test_to_control[ti]
            else:
                extras.setdefault(anchor, []).append(test_child)

        def emit_extras(anchor: int) -> None:
            for extra in extras.get(anchor, ()):
                out.append(
                    Difference(
                        ComparisonType.CHILD_LOOKUP,
                        None,
                        qualified_name(extra),
                        path,
                        DiffContext(control_name, qualified_name(extra)),
                    )
                )

        emit_extras(-1)
        for ci, (child, child_path) in enumerate(
            zip(control_children, _child_paths(path, control_children))
        ):
            if ci in pairs:
                self._compare_elements(child, test_children[pairs[ci]], child_path, out)
            else:
                out.append(
                    Difference(
                        ComparisonType.CHILD_LOOKUP,
                        qualified_name(child),
                        None,
                        child_path,
                        DiffContext(control_name, qualified_name(child)),
                    )
                )
            emit_extras(ci)


def diff_documents(control_xml: str | None, test_xml: str | None) -> DiffResult:
    """Convenience wrapper around ``StructuralDiffer().diff``."""
    return StructuralDiffer().diff(control_xml, test_xml)
