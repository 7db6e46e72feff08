"""Projection of structural differences onto source line ranges."""

from ontodiff.report.blocks import ErrorBlock, group_error_blocks
from ontodiff.report.projector import ErrorProjector, project_errors

__all__ = [
    "ErrorBlock",
    "ErrorProjector",
    "group_error_blocks",
    "project_errors",
]
