"""
Quantum/classical result fusion.

Merges the output of a quantum pipeline and a classical pipeline into a
single prediction, weighted by how much each side can be trusted.

Pipeline
--------
1. **Alignment**: resample the shorter signal to the longer one's length
2. **Confidence**: independent quantum and classical estimators
3. **Agreement**: alignment score, Pearson correlation, convergence
4. **Fusion**: confidence-weighted linear combination
5. **Reporting**: overall confidence, quality grade, parity, warnings

Example
-------
>>> from qcfusion.fusion import FusionEngine
>>>
>>> engine = FusionEngine()
>>> result = engine.merge([1.0, 2.0, 3.0, 4.0], [1.0, 3.0])
>>>
>>> print(result.aligned_classical)
>>> print(f"Confidence: {result.confidence_level:.2f}")
>>> print(f"Quality: {result.quality.value}")
"""

from qcfusion.fusion.alignment import (
    AlignedPair,
    align_lengths,
    interpolate_to_length,
)
from qcfusion.fusion.normalize import normalize
from qcfusion.fusion.confidence import (
    ConfidenceEstimate,
    ConfidenceKind,
    quantum_confidence,
    classical_confidence,
)
from qcfusion.fusion.metrics import (
    QualityMetrics,
    alignment_score,
    correlation_coefficient,
    convergence_score,
)
from qcfusion.fusion.parity import (
    ParityResult,
    SignalDisagreement,
    check_parity,
)
from qcfusion.fusion.config import (
    FusionConfig,
    get_fusion_config,
    set_fusion_config,
    configure_fusion,
)
from qcfusion.fusion.engine import (
    FusionEngine,
    FusionMetadata,
    FusionQuality,
    FusionResult,
    merge,
)

__all__ = [
    # Alignment
    "AlignedPair",
    "align_lengths",
    "interpolate_to_length",
    "normalize",
    # Confidence
    "ConfidenceEstimate",
    "ConfidenceKind",
    "quantum_confidence",
    "classical_confidence",
    # Agreement
    "QualityMetrics",
    "alignment_score",
    "correlation_coefficient",
    "convergence_score",
    # Parity
    "ParityResult",
    "SignalDisagreement",
    "check_parity",
    # Configuration
    "FusionConfig",
    "get_fusion_config",
    "set_fusion_config",
    "configure_fusion",
    # Engine
    "FusionEngine",
    "FusionMetadata",
    "FusionQuality",
    "FusionResult",
    "merge",
]
