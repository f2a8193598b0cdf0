"""
Self-assessed confidence for quantum and classical signals.

The two families get deliberately different scorers:

- Quantum outputs are judged on local smoothness (purity, low variance,
  small step-to-step jumps).
- Classical outputs are judged on statistical significance, serial
  stability and how well a linear trend explains them.

Each scorer is a weighted sum of three sub-metrics in [0, 1]. They are
kept as separate functions on purpose; do not merge them into one
parameterized scorer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any
import logging

import numpy as np
from scipy import stats

from qcfusion.core.constants import (
    DATA_SCALE,
    QUANTUM_PURITY_WEIGHT,
    QUANTUM_STABILITY_WEIGHT,
    QUANTUM_COHERENCE_WEIGHT,
    CLASSICAL_SIGNIFICANCE_WEIGHT,
    CLASSICAL_STABILITY_WEIGHT,
    CLASSICAL_FIT_WEIGHT,
    T_STAT_SCALE,
)
from qcfusion.fusion.alignment import SignalLike, as_signal
from qcfusion.fusion.normalize import peak_scaled

logger = logging.getLogger(__name__)


class ConfidenceKind(Enum):
    """Which estimator produced a confidence value."""
    QUANTUM = "quantum"
    CLASSICAL = "classical"


@dataclass(frozen=True)
class ConfidenceEstimate:
    """
    Confidence value with its sub-metric breakdown.

    Attributes
    ----------
    kind : ConfidenceKind
        Producing estimator
    value : float
        Weighted confidence [0, 1]
    components : Dict[str, float]
        Named sub-metrics, each in [0, 1]
    """
    kind: ConfidenceKind
    value: float
    components: Dict[str, float] = field(default_factory=dict)

    def __float__(self) -> float:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "value": self.value,
            "components": dict(self.components),
        }


def _unit(value: float) -> float:
    """Clamp to [0, 1], mapping NaN to 0 and infinities to the nearer bound."""
    if np.isnan(value):
        return 0.0
    return float(np.clip(value, 0.0, 1.0))


def _is_constant(x: np.ndarray) -> bool:
    return len(x) == 0 or x.min() == x.max()


# ---------------------------------------------------------------------------
# Quantum sub-metrics
# ---------------------------------------------------------------------------

def quantum_purity(data: SignalLike) -> float:
    """Mean squared amplitude, ``mean(x**2)``, clamped to [0, 1]."""
    x = as_signal(data)
    if len(x) == 0:
        return 0.0
    # squares of huge samples overflow to inf, which clamps to 1
    with np.errstate(over="ignore"):
        return _unit(np.mean(x ** 2))


def quantum_stability(data: SignalLike, data_scale: float = DATA_SCALE) -> float:
    """``max(0, 1 - variance / data_scale)`` with population variance."""
    x = as_signal(data)
    if len(x) == 0:
        return 0.0
    if _is_constant(x):
        variance = 0.0
    else:
        with np.errstate(over="ignore", invalid="ignore"):
            variance = float(np.var(x, ddof=0))
    return _unit(1.0 - variance / data_scale)


def quantum_coherence(data: SignalLike) -> float:
    """
    Mean of ``exp(-|x[i] - x[i-1]|)`` over consecutive samples.

    A single sample has no jumps and is fully coherent.
    """
    x = as_signal(data)
    if len(x) == 0:
        return 0.0
    if len(x) == 1:
        return 1.0
    with np.errstate(over="ignore"):
        return _unit(np.mean(np.exp(-np.abs(np.diff(x)))))


def quantum_confidence(
    data: SignalLike,
    data_scale: float = DATA_SCALE,
) -> ConfidenceEstimate:
    """
    Confidence of a quantum pipeline output.

    ``0.4 * purity + 0.3 * stability + 0.3 * coherence``

    Parameters
    ----------
    data : sequence of float
        Quantum signal (assumed roughly normalized)
    data_scale : float
        Assumed data spread used by the stability term

    Returns
    -------
    ConfidenceEstimate
        Quantum confidence with purity/stability/coherence breakdown
    """
    x = as_signal(data, "quantum")
    components = {
        "purity": quantum_purity(x),
        "stability": quantum_stability(x, data_scale),
        "coherence": quantum_coherence(x),
    }
    if len(x) == 0:
        return ConfidenceEstimate(ConfidenceKind.QUANTUM, 0.0, components)

    value = (
        QUANTUM_PURITY_WEIGHT * components["purity"]
        + QUANTUM_STABILITY_WEIGHT * components["stability"]
        + QUANTUM_COHERENCE_WEIGHT * components["coherence"]
    )
    logger.debug("Quantum confidence %.4f from %s", value, components)
    return ConfidenceEstimate(ConfidenceKind.QUANTUM, _unit(value), components)


# ---------------------------------------------------------------------------
# Classical sub-metrics
# ---------------------------------------------------------------------------

def classical_significance(data: SignalLike) -> float:
    """
    One-sample t-test of the mean against zero, mapped to [0, 1).

    ``t = |mean| / sqrt(s**2 / n)`` with the n-1 sample variance, then
    ``1 - exp(-t / 10)``. Needs at least two non-identical samples.
    """
    x = as_signal(data)
    if len(x) < 2 or _is_constant(x):
        return 0.0

    t_stat = abs(float(stats.ttest_1samp(peak_scaled(x), 0.0).statistic))
    return _unit(1.0 - np.exp(-t_stat / T_STAT_SCALE))


def classical_stability(data: SignalLike) -> float:
    """Absolute lag-1 autocorrelation, normalized by variance."""
    x = as_signal(data)
    if len(x) < 2 or _is_constant(x):
        return 0.0

    scaled = peak_scaled(x)
    centered = scaled - scaled.mean()
    autocovariance = np.sum(centered[:-1] * centered[1:])
    return _unit(abs(autocovariance / np.sum(centered ** 2)))


def classical_fit_quality(data: SignalLike) -> float:
    """R² of a least-squares line fitted against sample index (n > 2)."""
    x = as_signal(data)
    if len(x) <= 2 or _is_constant(x):
        return 0.0

    fit = stats.linregress(np.arange(len(x), dtype=np.float64), peak_scaled(x))
    return _unit(fit.rvalue ** 2)


def classical_confidence(data: SignalLike) -> ConfidenceEstimate:
    """
    Confidence of a classical pipeline output.

    ``0.4 * significance + 0.3 * stability + 0.3 * fit_quality``

    Parameters
    ----------
    data : sequence of float
        Classical signal

    Returns
    -------
    ConfidenceEstimate
        Classical confidence with significance/stability/fit_quality
        breakdown
    """
    x = as_signal(data, "classical")
    components = {
        "significance": classical_significance(x),
        "stability": classical_stability(x),
        "fit_quality": classical_fit_quality(x),
    }
    value = (
        CLASSICAL_SIGNIFICANCE_WEIGHT * components["significance"]
        + CLASSICAL_STABILITY_WEIGHT * components["stability"]
        + CLASSICAL_FIT_WEIGHT * components["fit_quality"]
    )
    logger.debug("Classical confidence %.4f from %s", value, components)
    return ConfidenceEstimate(ConfidenceKind.CLASSICAL, _unit(value), components)
