"""
Agreement metrics between two aligned signals.

All metrics take equal-length arrays (see :func:`align_lengths`) and
return plain floats with a defined fallback for degenerate input.
"""

from dataclasses import dataclass
from typing import Dict

import numpy as np
from scipy import stats

from qcfusion.core.constants import DATA_SCALE
from qcfusion.fusion.alignment import SignalLike, as_signal
from qcfusion.fusion.normalize import normalize, peak_scaled


def _check_pair(quantum: SignalLike, classical: SignalLike):
    q = as_signal(quantum, "quantum")
    c = as_signal(classical, "classical")
    if len(q) != len(c):
        raise ValueError(
            f"Signals must be aligned, got lengths {len(q)} and {len(c)}"
        )
    return q, c


def alignment_score(quantum: SignalLike, classical: SignalLike) -> float:
    """
    Shape agreement of two signals after standardization.

    Computes the mean pairwise product of the z-scored signals, which
    equals the Pearson correlation for non-constant input. Negative
    agreement is clamped to 0, so anti-correlated signals score the
    same as unrelated ones.

    Returns
    -------
    float
        Alignment score in [0, 1]
    """
    q, c = _check_pair(quantum, classical)
    if len(q) == 0:
        return 0.0

    score = float(np.mean(normalize(q) * normalize(c)))
    return float(np.clip(score, 0.0, 1.0))


def correlation_coefficient(quantum: SignalLike, classical: SignalLike) -> float:
    """
    Pearson correlation coefficient.

    Returns 0.0 with fewer than two samples or when either signal
    is constant.

    Returns
    -------
    float
        Correlation in [-1, 1]
    """
    q, c = _check_pair(quantum, classical)
    if len(q) < 2:
        return 0.0

    if np.ptp(q) == 0.0 or np.ptp(c) == 0.0:
        return 0.0

    r, _ = stats.pearsonr(peak_scaled(q), peak_scaled(c))
    if not np.isfinite(r):
        return 0.0

    return float(np.clip(r, -1.0, 1.0))


def convergence_score(
    quantum: SignalLike,
    classical: SignalLike,
    data_scale: float = DATA_SCALE,
) -> float:
    """
    Closeness of raw values: ``max(0, 1 - MSE / data_scale)``.

    ``data_scale`` is the assumed spread of pre-normalized data, not a
    value estimated from the signals.

    Returns
    -------
    float
        Convergence score in [0, 1]
    """
    q, c = _check_pair(quantum, classical)
    if len(q) == 0:
        return 0.0

    # an overflowing MSE is inf and floors the score at 0
    with np.errstate(over="ignore"):
        mse = float(np.mean((q - c) ** 2))
    return float(np.clip(1.0 - mse / data_scale, 0.0, 1.0))


@dataclass(frozen=True)
class QualityMetrics:
    """
    Per-metric breakdown attached to every fusion result.

    Attributes
    ----------
    quantum_confidence : float
        Quantum-side confidence [0, 1]
    classical_confidence : float
        Classical-side confidence [0, 1]
    correlation_coefficient : float
        Pearson correlation of the aligned signals [-1, 1]
    convergence_score : float
        Inverse-MSE closeness of the aligned signals [0, 1]
    """
    quantum_confidence: float
    classical_confidence: float
    correlation_coefficient: float
    convergence_score: float

    @classmethod
    def zero(cls) -> "QualityMetrics":
        """Metrics for a fusion that could not run."""
        return cls(0.0, 0.0, 0.0, 0.0)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {
            "quantum_confidence": self.quantum_confidence,
            "classical_confidence": self.classical_confidence,
            "correlation_coefficient": self.correlation_coefficient,
            "convergence_score": self.convergence_score,
        }
