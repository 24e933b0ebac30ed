"""Batch service: fit lists of spectra and record them in the ledger."""

from ramanmix.services.batch.pipeline import BatchPipeline, load_config_basis
from ramanmix.services.batch.runner import (
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
    "load_config_basis",
]
