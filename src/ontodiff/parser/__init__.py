"""XML parsing with line fidelity for ontodiff."""

from ontodiff.parser.formatter import format_xml
from ontodiff.parser.indexer import PositionIndex, PositionIndexer, build_index
from ontodiff.parser.loader import XMLLoader, XMLParseError, XMLSafetyError
from ontodiff.parser.paths import LineRange, PathStep, PositionalPath

__all__ = [
    "LineRange",
    "PathStep",
    "PositionIndex",
    "PositionIndexer",
    "PositionalPath",
    "XMLLoader",
    "XMLParseError",
    "XMLSafetyError",
    "build_index",
    "format_xml",
]
