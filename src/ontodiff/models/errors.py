"""Error records handed to the editor, with source line ranges."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class ErrorInfo(BaseModel):
    """One contiguous block of source text reported as wrong.

    ``message`` is what the block should become (the proposed value),
    ``details`` is the identity string used for deduplication.
    """

    start_line: int = Field(ge=1)
    end_line: int = Field(ge=1)
    message: str
    details: str

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_line_order(self) -> ErrorInfo:
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) precedes start_line ({self.start_line})"
            )
        return self


class VerificationStatus(StrEnum):
    VALID = "valid"
    INVALID = "invalid"
    MALFORMED = "malformed"


class VerificationReport(BaseModel):
    """Result of verifying a document against its proposed canonical form."""

    status: VerificationStatus
    errors: list[ErrorInfo] = []
    message: str | None = None

    @property
    def valid(self) -> bool:
        return self.status is VerificationStatus.VALID
