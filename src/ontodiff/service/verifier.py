"""Verification service: the in-process entry point used by the editor."""

from __future__ import annotations

import logging

from ontodiff.diff.engine import DiffStatus, StructuralDiffer
from ontodiff.models.document import XMLDocument
from ontodiff.models.errors import VerificationReport, VerificationStatus
from ontodiff.parser.formatter import format_xml
from ontodiff.parser.indexer import PositionIndexer
from ontodiff.parser.loader import XMLParseError
from ontodiff.report.projector import ErrorProjector
from ontodiff.settings import Settings

logger = logging.getLogger("ontodiff.service")


def _as_document(value: XMLDocument | str | None) -> XMLDocument | None:
    if value is None or isinstance(value, XMLDocument):
        return value
    return XMLDocument(text=value)


class VerificationService:
    """Runs diff, index and projection against one control snapshot.

    The control text handed to the indexer is the exact text handed to
    the diff engine; both come from the same ``XMLDocument``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        differ: StructuralDiffer | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._differ = differ or StructuralDiffer()
        self._indexer = PositionIndexer()
        self._projector = ErrorProjector()

    # -- verification --------------------------------------------------------

    def verify(
        self,
        control: XMLDocument | str | None,
        proposed: XMLDocument | str | None,
    ) -> VerificationReport:
        """Compare ``control`` with the grammar engine's ``proposed`` form.

        A missing or empty document on either side means there is nothing
        to compare and the report is ``valid``.
        """
        control_doc = _as_document(control)
        proposed_doc = _as_document(proposed)
        if (
            control_doc is None
            or proposed_doc is None
            or control_doc.is_empty
            or proposed_doc.is_empty
        ):
            logger.info("verify: nothing to compare")
            return VerificationReport(status=VerificationStatus.VALID)

        logger.info(
            "verify called (control=%s, %d lines)",
            control_doc.name or "<string>",
            control_doc.line_count,
        )
        result = self._differ.diff(control_doc.text, proposed_doc.text)
        if result.status is DiffStatus.MALFORMED:
            return self._malformed(result.error)
        if result.status is DiffStatus.MATCH:
            return VerificationReport(status=VerificationStatus.VALID)

        try:
            index = self._indexer.build(control_doc.text)
        except XMLParseError as exc:
            return self._malformed(exc.with_source("control"))

        errors = self._projector.project(result.differences, index)
        logger.info(
            "verify: %d differences projected to %d errors",
            len(result.differences),
            len(errors),
        )
        if not errors:
            return VerificationReport(status=VerificationStatus.VALID)
        return VerificationReport(status=VerificationStatus.INVALID, errors=errors)

    @staticmethod
    def _malformed(error: XMLParseError | None) -> VerificationReport:
        message = error.describe() if error is not None else "Document is not well-formed"
        logger.warning("verify: %s", message)
        return VerificationReport(status=VerificationStatus.MALFORMED, message=message)

    # -- formatting ----------------------------------------------------------

    def format(self, document: XMLDocument | str) -> XMLDocument:
        """Return a re-indented copy of ``document``.

        Raises ``ValueError`` for empty input and ``XMLParseError`` when the
        document is not well-formed.
        """
        doc = document if isinstance(document, XMLDocument) else XMLDocument(text=document)
        text = format_xml(
            doc.text,
            namespaces_on_new_line=self._settings.format_namespaces_on_new_line,
            indent=" " * self._settings.format_indent,
        )
        return XMLDocument(text=text, name=doc.name)
