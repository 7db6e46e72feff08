"""Shared test fixtures for ontodiff."""

from __future__ import annotations

import pytest

from ontodiff.diff.engine import StructuralDiffer
from ontodiff.parser.indexer import PositionIndexer
from ontodiff.report.projector import ErrorProjector
from ontodiff.service.verifier import VerificationService
from ontodiff.settings import Settings


@pytest.fixture
def indexer() -> PositionIndexer:
    return PositionIndexer()


@pytest.fixture
def differ() -> StructuralDiffer:
    return StructuralDiffer()


@pytest.fixture
def projector() -> ErrorProjector:
    return ErrorProjector()


@pytest.fixture
def service() -> VerificationService:
    """VerificationService with default formatting options, ignoring any .env."""
    return VerificationService(settings=Settings(_env_file=None))


# Line numbers matter: the declaration is line 1, rdf:RDF spans 2-16,
# the three owl:Class blocks span 4-7, 8-11 and 12-15.
SAMPLE_ONTOLOGY_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" xmlns:owl="http://www.w3.org/2002/07/owl#" xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#" xmlns:skos="http://www.w3.org/2004/02/skos/core#" xml:base="http://www.persone/">
    <rdfs:label xml:lang="it">Ind</rdfs:label>
    <owl:Class rdf:about="http://www.persone#Individuo">
        <rdfs:label xml:lang="it">Ind</rdfs:label>
        <skos:scopeNote xml:lang="it">Class</skos:scopeNote>
    </owl:Class>
    <owl:Class rdf:about="http://www.persone#Persona">
        <rdfs:label xml:lang="it">Persona</rdfs:label>
        <skos:scopeNote xml:lang="it">Class</skos:scopeNote>
    </owl:Class>
    <owl:Class rdf:about="http://www.persone#Studente">
        <rdfs:label xml:lang="it">Studente</rdfs:label>
        <rdfs:subClassOf rdf:resource="http://www.persone#Persona"/>
    </owl:Class>
</rdf:RDF>
"""

INDIVIDUO_BLOCK = """\
    <owl:Class rdf:about="http://www.persone#Individuo">
        <rdfs:label xml:lang="it">Ind</rdfs:label>
        <skos:scopeNote xml:lang="it">Class</skos:scopeNote>
    </owl:Class>
"""

SIMPLE_CONTROL_XML = "<r>\n<a>1</a>\n</r>\n"
SIMPLE_TEST_XML = "<r><a>2</a></r>"
