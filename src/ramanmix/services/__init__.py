"""Application service layer for orchestrating ramanmix workflows.

This module provides high-level service facades that the CLI and other
adapters can use without knowing core implementation details.
"""

from ramanmix.services.batch import (
    BatchPipeline,
    BatchRunner,
    BatchSummary,
    SampleOutcome,
    SampleStatus,
)

__all__ = [
    "BatchPipeline",
    "BatchRunner",
    "BatchSummary",
    "SampleOutcome",
    "SampleStatus",
]
