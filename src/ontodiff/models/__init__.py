"""Pydantic domain models for ontodiff."""

from ontodiff.models.document import XMLDocument
from ontodiff.models.errors import ErrorInfo, VerificationReport, VerificationStatus

__all__ = [
    "ErrorInfo",
    "VerificationReport",
    "VerificationStatus",
    "XMLDocument",
]
