"""I/O module for ramanmix.

Handles file operations including:
- Configuration file loading/saving (TOML)
- The results ledger
- Per-sample result files
"""

from ramanmix.io.config import generate_default_config, load_config, save_config
from ramanmix.io.ledger import LedgerRepository
from ramanmix.io.output import SampleReport, write_sample_outputs

__all__ = [
    "LedgerRepository",
    "SampleReport",
    "generate_default_config",
    "load_config",
    "save_config",
    "write_sample_outputs",
]
