"""Projects structural differences onto control document line ranges."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ontodiff.diff.engine import Difference
from ontodiff.models.errors import ErrorInfo
from ontodiff.parser.indexer import PositionIndex

logger = logging.getLogger("ontodiff.report")


class ErrorProjector:
    """Turns ``Difference`` records into ``ErrorInfo`` records.

    The document element's own difference is dropped: once any descendant
    differs it only repeats what the descendant's record already says.
    Differences whose path is missing from the index are skipped. Records
    are deduplicated on ``details`` and keep the diff's traversal order.
    """

    def project(
        self, differences: Iterable[Difference], index: PositionIndex
    ) -> list[ErrorInfo]:
        errors: list[ErrorInfo] = []
        seen: set[str] = set()

        for difference in differences:
            if difference.path.is_root:
                continue

            span = index.get(difference.path)
            if span is None:
                logger.debug("No source position for %s, skipping", difference.path)
                continue

            details = difference.identity
            if details in seen:
                continue
            seen.add(details)

            errors.append(
                ErrorInfo(
                    start_line=span.start_line,
                    end_line=span.end_line,
                    message=difference.test_text,
                    details=details,
                )
            )
        return errors


def project_errors(
    differences: Iterable[Difference], index: PositionIndex
) -> list[ErrorInfo]:
    """Convenience wrapper around ``ErrorProjector().project``."""
    return ErrorProjector().project(differences, index)
