"""End-to-end verify cycles: diff, index, project, edit, re-verify."""

from __future__ import annotations

import pytest

from ontodiff.diff.engine import DiffStatus, StructuralDiffer
from ontodiff.models.errors import VerificationStatus
from ontodiff.parser.formatter import format_xml
from ontodiff.parser.indexer import PositionIndexer
from ontodiff.report.blocks import group_error_blocks
from ontodiff.report.projector import ErrorProjector
from ontodiff.service.verifier import VerificationService
from tests.conftest import (
    INDIVIDUO_BLOCK,
    SAMPLE_ONTOLOGY_XML,
    SIMPLE_CONTROL_XML,
    SIMPLE_TEST_XML,
)

DOCUMENTS = [
    SAMPLE_ONTOLOGY_XML,
    SIMPLE_CONTROL_XML,
    "<root/>",
    '<r xmlns:x="urn:one" xmlns:y="urn:two">\n  <x:T>1</x:T>\n  <y:T>2</y:T>\n</r>',
    "<doc>\n  <!-- note -->\n  <p>one <b>two</b> three</p>\n  <p/>\n</doc>",
]


def _errors(control: str, test: str) -> list:
    result = StructuralDiffer().diff(control, test)
    index = PositionIndexer().build(control)
    return ErrorProjector().project(result.differences, index)


class TestProperties:
    @pytest.mark.parametrize("document", DOCUMENTS)
    def test_no_diff_idempotence(self, document: str) -> None:
        assert _errors(document, document) == []

    @pytest.mark.parametrize("document", DOCUMENTS)
    def test_formatted_copy_has_no_errors(self, document: str) -> None:
        assert _errors(document, format_xml(document)) == []

    def test_root_suppression(self) -> None:
        test = SAMPLE_ONTOLOGY_XML.replace(
            'xml:base="http://www.persone/"', 'xml:base="http://www.people/"'
        ).replace(">Studente</rdfs:label>", ">Student</rdfs:label>")
        errors = _errors(SAMPLE_ONTOLOGY_XML, test)
        assert [(e.start_line, e.end_line) for e in errors] == [(13, 13)]

    def test_no_sentinel_leakage(self) -> None:
        test = (
            SAMPLE_ONTOLOGY_XML.replace(INDIVIDUO_BLOCK, "")
            .replace(">Persona</rdfs:label>", ">Person</rdfs:label>")
            .replace("<rdfs:subClassOf", "<rdfs:seeAlso")
        )
        errors = _errors(SAMPLE_ONTOLOGY_XML, test)
        assert errors
        assert all(e.start_line != -1 and e.end_line != -1 for e in errors)


class TestScenarios:
    def test_changed_value(self, service: VerificationService) -> None:
        report = service.verify(SIMPLE_CONTROL_XML, SIMPLE_TEST_XML)
        (error,) = report.errors
        assert error.start_line == error.end_line == 2
        assert "2" in error.message

    def test_missing_element(self, service: VerificationService) -> None:
        test = SAMPLE_ONTOLOGY_XML.replace(INDIVIDUO_BLOCK, "")
        report = service.verify(SAMPLE_ONTOLOGY_XML, test)
        (error,) = report.errors
        assert (error.start_line, error.end_line) == (4, 7)
        assert error.message == "null"

    def test_malformed_proposal(self) -> None:
        result = StructuralDiffer().diff(SIMPLE_CONTROL_XML, "<r>\n<a>2</a>\n<b")
        assert result.status is DiffStatus.MALFORMED
        assert result.differences == ()

    def test_attribute_order_and_whitespace_only(self, service: VerificationService) -> None:
        test = SAMPLE_ONTOLOGY_XML.replace(
            'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" '
            'xmlns:owl="http://www.w3.org/2002/07/owl#"',
            'xmlns:owl="http://www.w3.org/2002/07/owl#"   '
            'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"',
        ).replace("\n    ", "\n\t\t")
        assert test != SAMPLE_ONTOLOGY_XML
        report = service.verify(SAMPLE_ONTOLOGY_XML, test)
        assert report.status is VerificationStatus.VALID
        assert report.errors == []


class TestEditCycle:
    def test_fix_then_reverify(self, service: VerificationService) -> None:
        proposed = SAMPLE_ONTOLOGY_XML.replace(">Persona</rdfs:label>", ">Person</rdfs:label>")
        report = service.verify(SAMPLE_ONTOLOGY_XML, proposed)
        assert report.status is VerificationStatus.INVALID

        (block,) = group_error_blocks(report.errors)
        assert (block.start_line, block.end_line) == (9, 9)
        assert block.primary.message == "Person"

        lines = SAMPLE_ONTOLOGY_XML.splitlines(keepends=True)
        lines[block.start_line - 1] = lines[block.start_line - 1].replace(
            "Persona", block.primary.message
        )
        edited = "".join(lines)
        assert service.verify(edited, proposed).status is VerificationStatus.VALID

    def test_remove_block_then_reverify(self, service: VerificationService) -> None:
        proposed = SAMPLE_ONTOLOGY_XML.replace(INDIVIDUO_BLOCK, "")
        (block,) = group_error_blocks(service.verify(SAMPLE_ONTOLOGY_XML, proposed).errors)
        lines = SAMPLE_ONTOLOGY_XML.splitlines(keepends=True)
        del lines[block.start_line - 1 : block.end_line]
        edited = "".join(lines)
        assert service.verify(edited, proposed).status is VerificationStatus.VALID
