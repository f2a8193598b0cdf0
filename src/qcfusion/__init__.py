"""
qcfusion: Confidence-weighted fusion of quantum and classical pipeline results.

Given two independently produced numeric series, qcfusion provides:
- Length alignment by linear resampling
- Independent quantum and classical confidence estimates
- Agreement metrics (alignment score, Pearson correlation, convergence)
- A confidence-weighted merged prediction with quality metadata

License: MIT
"""

__version__ = "1.0.0"

from .core.constants import ALGORITHM_VERSION
from .fusion.config import FusionConfig
from .fusion.engine import FusionEngine, FusionQuality, FusionResult, merge
from .fusion.metrics import QualityMetrics

__all__ = [
    "merge",
    "FusionEngine",
    "FusionResult",
    "FusionQuality",
    "FusionConfig",
    "QualityMetrics",
    "ALGORITHM_VERSION",
    "__version__",
]
