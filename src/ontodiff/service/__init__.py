"""Service layer for ontodiff."""

from ontodiff.service.verifier import VerificationService

__all__ = ["VerificationService"]
