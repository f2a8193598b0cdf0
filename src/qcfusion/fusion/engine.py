"""
Quantum/classical fusion engine.

Runs the full pipeline in one synchronous call:

1. Align lengths (linear resampling of the shorter signal)
2. Estimate quantum and classical confidence independently
3. Score agreement (alignment, correlation, convergence)
4. Fuse by confidence-weighted linear combination
5. Attach quality metadata and diagnostics

The engine holds only its configuration. Every call works on its own
copies of the input, so one engine can be shared across threads.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, List, Any, Tuple
import logging
import time

import numpy as np

from qcfusion.core.constants import (
    ALGORITHM_VERSION,
    OVERALL_CONFIDENCE_WEIGHT,
    OVERALL_ALIGNMENT_WEIGHT,
    OVERALL_CORRELATION_WEIGHT,
    MIN_USABLE_CONFIDENCE,
)
from qcfusion.fusion.alignment import SignalLike, as_signal, align_lengths
from qcfusion.fusion.confidence import (
    ConfidenceEstimate,
    quantum_confidence,
    classical_confidence,
)
from qcfusion.fusion.config import FusionConfig
from qcfusion.fusion.metrics import (
    QualityMetrics,
    alignment_score,
    correlation_coefficient,
    convergence_score,
)
from qcfusion.fusion.parity import ParityResult, SignalDisagreement, check_parity

logger = logging.getLogger(__name__)


class FusionQuality(Enum):
    """
    Coarse quality grade of a fusion result.

    Levels
    ------
    EXCELLENT : overall confidence >= 0.8
    GOOD : overall confidence >= 0.6
    FAIR : overall confidence >= 0.4
    POOR : overall confidence < 0.4
    UNKNOWN : fusion could not run (empty input)
    """
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNKNOWN = "unknown"

    @classmethod
    def from_confidence(cls, confidence: float) -> "FusionQuality":
        """Grade an overall confidence value."""
        if confidence >= 0.8:
            return cls.EXCELLENT
        if confidence >= 0.6:
            return cls.GOOD
        if confidence >= 0.4:
            return cls.FAIR
        return cls.POOR

    @property
    def description(self) -> str:
        """Human-readable description of the grade."""
        descriptions = {
            FusionQuality.EXCELLENT: (
                "Both pipelines are confident and agree closely."
            ),
            FusionQuality.GOOD: (
                "Pipelines broadly agree; merged prediction is reliable."
            ),
            FusionQuality.FAIR: (
                "Partial agreement or low confidence on one side. "
                "Use with care."
            ),
            FusionQuality.POOR: (
                "Pipelines disagree or lack confidence. "
                "Merged prediction is not trustworthy."
            ),
            FusionQuality.UNKNOWN: (
                "Fusion did not run; the quantum input was echoed back."
            ),
        }
        return descriptions.get(self, "Unknown quality")


@dataclass(frozen=True)
class FusionMetadata:
    """
    Bookkeeping for a single fusion run.

    Attributes
    ----------
    timestamp : datetime
        UTC time the merge started
    processing_time : float
        Wall-clock duration of the merge in seconds
    algorithm_version : str
        Version tag of the fusion algorithm
    quality_metrics : QualityMetrics
        Per-metric breakdown
    aligned_length : int
        Length of the aligned signals
    original_lengths : Tuple[int, int]
        (quantum, classical) input lengths
    time_budget : float
        Advisory processing budget in seconds
    quantum_estimate : ConfidenceEstimate, optional
        Quantum confidence with sub-metrics
    classical_estimate : ConfidenceEstimate, optional
        Classical confidence with sub-metrics
    """
    timestamp: datetime
    processing_time: float
    algorithm_version: str
    quality_metrics: QualityMetrics
    aligned_length: int
    original_lengths: Tuple[int, int]
    time_budget: float
    quantum_estimate: Optional[ConfidenceEstimate] = None
    classical_estimate: Optional[ConfidenceEstimate] = None

    @property
    def within_budget(self) -> bool:
        """Whether processing finished inside the advisory budget."""
        return self.processing_time <= self.time_budget

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "processing_time": self.processing_time,
            "algorithm_version": self.algorithm_version,
            "quality_metrics": self.quality_metrics.to_dict(),
            "aligned_length": self.aligned_length,
            "original_lengths": list(self.original_lengths),
            "time_budget": self.time_budget,
            "within_budget": self.within_budget,
            "quantum_estimate": (
                self.quantum_estimate.to_dict() if self.quantum_estimate else None
            ),
            "classical_estimate": (
                self.classical_estimate.to_dict() if self.classical_estimate else None
            ),
        }


@dataclass(frozen=True, eq=False)
class FusionResult:
    """
    Result of fusing a quantum and a classical signal.

    Attributes
    ----------
    aligned_quantum : np.ndarray
        Quantum signal at the aligned length
    aligned_classical : np.ndarray
        Classical signal at the aligned length
    alignment_score : float
        Shape agreement of the standardized signals [0, 1]
    confidence_level : float
        Overall confidence in the merged prediction [0, 1]
    merged_prediction : np.ndarray
        Confidence-weighted combination of the aligned signals
    metadata : FusionMetadata
        Timing, version and per-metric breakdown
    quantum_weight : float
        Weight applied to the quantum signal
    classical_weight : float
        Weight applied to the classical signal
    quality : FusionQuality
        Coarse grade of ``confidence_level``
    parity : ParityResult, optional
        Sample-wise comparison of the aligned signals
    warnings : Tuple[str, ...]
        Diagnostics collected during fusion
    is_degraded : bool
        True when fusion could not run and the quantum input was echoed
    min_usable_confidence : float
        Threshold used by ``is_usable``
    """
    aligned_quantum: np.ndarray
    aligned_classical: np.ndarray
    alignment_score: float
    confidence_level: float
    merged_prediction: np.ndarray
    metadata: FusionMetadata
    quantum_weight: float = 1.0
    classical_weight: float = 0.0
    quality: FusionQuality = FusionQuality.UNKNOWN
    parity: Optional[ParityResult] = None
    warnings: Tuple[str, ...] = ()
    is_degraded: bool = False
    min_usable_confidence: float = MIN_USABLE_CONFIDENCE

    def __post_init__(self):
        # arrays are frozen in place and warnings become a tuple
        for arr in (self.aligned_quantum, self.aligned_classical, self.merged_prediction):
            arr.setflags(write=False)
        object.__setattr__(self, "warnings", tuple(self.warnings))

    @property
    def quality_metrics(self) -> QualityMetrics:
        """Shortcut to ``metadata.quality_metrics``."""
        return self.metadata.quality_metrics

    @property
    def is_usable(self) -> bool:
        """Whether fusion ran and cleared the usable-confidence threshold."""
        return (
            not self.is_degraded
            and self.confidence_level >= self.min_usable_confidence
        )

    def equivalent_to(self, other: "FusionResult") -> bool:
        """
        Compare two results ignoring timestamp and processing time.

        Merging identical inputs twice yields equivalent results.
        """
        return (
            np.array_equal(self.merged_prediction, other.merged_prediction)
            and np.array_equal(self.aligned_quantum, other.aligned_quantum)
            and np.array_equal(self.aligned_classical, other.aligned_classical)
            and self.alignment_score == other.alignment_score
            and self.confidence_level == other.confidence_level
            and self.quality_metrics == other.quality_metrics
            and self.metadata.algorithm_version == other.metadata.algorithm_version
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "aligned_quantum": self.aligned_quantum.tolist(),
            "aligned_classical": self.aligned_classical.tolist(),
            "alignment_score": self.alignment_score,
            "confidence_level": self.confidence_level,
            "merged_prediction": self.merged_prediction.tolist(),
            "metadata": self.metadata.to_dict(),
            "quantum_weight": self.quantum_weight,
            "classical_weight": self.classical_weight,
            "quality": self.quality.value,
            "quality_description": self.quality.description,
            "parity": self.parity.to_dict() if self.parity else None,
            "warnings": list(self.warnings),
            "is_degraded": self.is_degraded,
            "is_usable": self.is_usable,
        }


def fuse_signals(
    quantum: np.ndarray,
    classical: np.ndarray,
    quantum_conf: float,
    classical_conf: float,
) -> Tuple[np.ndarray, float, float]:
    """
    Confidence-weighted linear combination of two aligned signals.

    Parameters
    ----------
    quantum, classical : np.ndarray
        Aligned signals of equal length
    quantum_conf, classical_conf : float
        Confidence of each signal [0, 1]

    Returns
    -------
    Tuple[np.ndarray, float, float]
        (merged signal, quantum weight, classical weight). When both
        confidences are zero the quantum signal is returned unchanged
        with weights (1.0, 0.0).
    """
    total = quantum_conf + classical_conf
    if total <= 0.0:
        return quantum.copy(), 1.0, 0.0

    wq = quantum_conf / total
    wc = classical_conf / total
    return wq * quantum + wc * classical, wq, wc


def overall_confidence(
    quantum_conf: float,
    classical_conf: float,
    alignment: float,
    correlation: float,
) -> float:
    """``0.4 * mean(confidences) + 0.3 * alignment + 0.3 * |correlation|``, clamped."""
    value = (
        OVERALL_CONFIDENCE_WEIGHT * (quantum_conf + classical_conf) / 2.0
        + OVERALL_ALIGNMENT_WEIGHT * alignment
        + OVERALL_CORRELATION_WEIGHT * abs(correlation)
    )
    return float(np.clip(value, 0.0, 1.0))


class FusionEngine:
    """
    Fusion engine for quantum and classical pipeline outputs.

    Parameters
    ----------
    config : FusionConfig, optional
        Engine configuration. Defaults to ``FusionConfig()``, so results
        depend only on the inputs. Pass ``get_fusion_config()`` or
        ``FusionConfig.from_env()`` to opt in to the global or
        environment configuration.

    Examples
    --------
    >>> engine = FusionEngine()
    >>> result = engine.merge([0.1, 0.4, 0.35, 0.8], [0.2, 0.3, 0.7])
    >>> result.merged_prediction.shape
    (4,)
    >>> print(f"Confidence: {result.confidence_level:.2f} ({result.quality.value})")
    """

    def __init__(self, config: Optional[FusionConfig] = None):
        self.config = config or FusionConfig()

    def merge(self, quantum: SignalLike, classical: SignalLike) -> FusionResult:
        """
        Fuse a quantum and a classical signal.

        Parameters
        ----------
        quantum : sequence of float
            Quantum pipeline output
        classical : sequence of float
            Classical pipeline output

        Returns
        -------
        FusionResult
            Merged prediction with confidence and quality metadata. If
            either input is empty, a zero-confidence result echoing the
            quantum input.
        """
        timestamp = datetime.now(timezone.utc)
        start = time.perf_counter()

        q = as_signal(quantum, "quantum")
        c = as_signal(classical, "classical")

        if len(q) == 0 or len(c) == 0:
            return self._degraded(q, c, timestamp, start)

        warnings: List[str] = []

        # Stage 1: Align lengths
        pair = align_lengths(q, c)
        if pair.interpolated:
            warnings.append(
                f"Interpolated {pair.interpolated} signal from "
                f"{min(pair.original_lengths)} to {len(pair)} samples"
            )

        # Stage 2: Independent confidence estimates
        q_est = quantum_confidence(pair.quantum, self.config.data_scale)
        c_est = classical_confidence(pair.classical)

        # Stage 3: Agreement
        alignment = alignment_score(pair.quantum, pair.classical)
        correlation = correlation_coefficient(pair.quantum, pair.classical)
        convergence = convergence_score(
            pair.quantum, pair.classical, self.config.data_scale
        )

        if correlation < 0:
            warnings.append(
                f"Signals are anti-correlated (r={correlation:.3f}); "
                "alignment score clamps this to 0"
            )

        # Stage 4: Weighted fusion
        merged, wq, wc = fuse_signals(
            pair.quantum, pair.classical, q_est.value, c_est.value
        )
        if q_est.value + c_est.value <= 0.0:
            warnings.append("Both confidences are zero; returning quantum signal")

        confidence = overall_confidence(
            q_est.value, c_est.value, alignment, correlation
        )

        # Stage 5: Diagnostics and reporting
        parity = check_parity(
            pair.quantum, pair.classical, self.config.parity_tolerance
        )
        if not parity.parity_achieved:
            warnings.append(
                f"Parity not achieved: mean difference {parity.difference:.4f} "
                f"> tolerance {parity.tolerance:.4f}"
            )

        disagreement = SignalDisagreement.check(q_est.value, c_est.value)
        if disagreement and disagreement.is_critical:
            warnings.append(disagreement.message)

        quality = FusionQuality.from_confidence(confidence)
        if confidence < self.config.min_usable_confidence:
            warnings.append(
                f"Overall confidence {confidence:.3f} below usable threshold "
                f"{self.config.min_usable_confidence:.3f}"
            )

        metrics = QualityMetrics(
            quantum_confidence=q_est.value,
            classical_confidence=c_est.value,
            correlation_coefficient=correlation,
            convergence_score=convergence,
        )

        elapsed = time.perf_counter() - start
        metadata = FusionMetadata(
            timestamp=timestamp,
            processing_time=elapsed,
            algorithm_version=ALGORITHM_VERSION,
            quality_metrics=metrics,
            aligned_length=len(pair),
            original_lengths=pair.original_lengths,
            time_budget=self.config.time_budget,
            quantum_estimate=q_est,
            classical_estimate=c_est,
        )
        if not metadata.within_budget:
            logger.warning(
                "Fusion of %d samples took %.4fs, over advisory budget %.4fs",
                len(pair), elapsed, self.config.time_budget,
            )
            warnings.append(
                f"Processing time {elapsed:.4f}s exceeded advisory budget "
                f"{self.config.time_budget:.4f}s"
            )

        logger.debug(
            "Fused %d samples: confidence=%.4f alignment=%.4f weights=(%.3f, %.3f)",
            len(pair), confidence, alignment, wq, wc,
        )

        return FusionResult(
            aligned_quantum=pair.quantum,
            aligned_classical=pair.classical,
            alignment_score=alignment,
            confidence_level=confidence,
            merged_prediction=merged,
            metadata=metadata,
            quantum_weight=wq,
            classical_weight=wc,
            quality=quality,
            parity=parity,
            warnings=warnings,
            min_usable_confidence=self.config.min_usable_confidence,
        )

    def _degraded(
        self,
        quantum: np.ndarray,
        classical: np.ndarray,
        timestamp: datetime,
        start: float,
    ) -> FusionResult:
        """Zero-confidence result echoing the quantum input."""
        empty = "quantum" if len(quantum) == 0 else "classical"
        if len(quantum) == 0 and len(classical) == 0:
            empty = "quantum and classical"
        logger.warning("Empty %s input; returning zero-confidence result", empty)

        metadata = FusionMetadata(
            timestamp=timestamp,
            processing_time=time.perf_counter() - start,
            algorithm_version=ALGORITHM_VERSION,
            quality_metrics=QualityMetrics.zero(),
            aligned_length=0,
            original_lengths=(len(quantum), len(classical)),
            time_budget=self.config.time_budget,
        )
        return FusionResult(
            aligned_quantum=quantum,
            aligned_classical=classical,
            alignment_score=0.0,
            confidence_level=0.0,
            merged_prediction=quantum.copy(),
            metadata=metadata,
            quality=FusionQuality.UNKNOWN,
            warnings=[f"Empty {empty} input: fusion skipped"],
            is_degraded=True,
            min_usable_confidence=self.config.min_usable_confidence,
        )


def merge(
    quantum: SignalLike,
    classical: SignalLike,
    config: Optional[FusionConfig] = None,
) -> FusionResult:
    """
    Fuse a quantum and a classical signal in one call.

    Convenience wrapper around :meth:`FusionEngine.merge`.

    Parameters
    ----------
    quantum : sequence of float
        Quantum pipeline output
    classical : sequence of float
        Classical pipeline output
    config : FusionConfig, optional
        Configuration (defaults to ``FusionConfig()``)

    Returns
    -------
    FusionResult
        Fused result
    """
    return FusionEngine(config=config).merge(quantum, classical)
