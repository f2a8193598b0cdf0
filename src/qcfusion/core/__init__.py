"""Core constants shared by the fusion stages."""

from .constants import (
    ALGORITHM_VERSION,
    DATA_SCALE,
    DEFAULT_TIME_BUDGET,
)

__all__ = [
    "ALGORITHM_VERSION",
    "DATA_SCALE",
    "DEFAULT_TIME_BUDGET",
]
