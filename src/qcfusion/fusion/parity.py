"""
Quantum/classical parity and disagreement diagnostics.

Parity asks whether the two pipelines produced the same numbers within
a tolerance. Disagreement asks whether the two confidence estimators
trust their own outputs to very different degrees. Neither changes the
fused prediction; both feed the warnings on a FusionResult.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

import numpy as np

from qcfusion.core.constants import (
    DEFAULT_PARITY_TOLERANCE,
    DISAGREEMENT_THRESHOLD,
    CRITICAL_DISAGREEMENT_THRESHOLD,
)
from qcfusion.fusion.alignment import SignalLike, as_signal


@dataclass(frozen=True)
class ParityResult:
    """
    Outcome of a parity check between two aligned signals.

    Attributes
    ----------
    parity_achieved : bool
        Whether mean absolute difference is within tolerance
    difference : float
        Mean absolute difference
    max_deviation : float
        Largest absolute difference at any sample
    tolerance : float
        Tolerance used for the check
    n_samples : int
        Number of compared samples
    """
    parity_achieved: bool
    difference: float
    max_deviation: float
    tolerance: float
    n_samples: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "parity_achieved": self.parity_achieved,
            "difference": self.difference,
            "max_deviation": self.max_deviation,
            "tolerance": self.tolerance,
            "n_samples": self.n_samples,
        }


def check_parity(
    quantum: SignalLike,
    classical: SignalLike,
    tolerance: float = DEFAULT_PARITY_TOLERANCE,
) -> ParityResult:
    """
    Compare two aligned signals sample by sample.

    Parameters
    ----------
    quantum, classical : sequence of float
        Equal-length signals
    tolerance : float
        Allowed mean absolute difference

    Returns
    -------
    ParityResult
        Parity verdict with difference statistics. Empty input trivially
        achieves parity.
    """
    q = as_signal(quantum, "quantum")
    c = as_signal(classical, "classical")

    if len(q) != len(c):
        raise ValueError(
            f"Signals must be aligned, got lengths {len(q)} and {len(c)}"
        )
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")

    if len(q) == 0:
        return ParityResult(True, 0.0, 0.0, tolerance, 0)

    deviations = np.abs(q - c)
    difference = float(np.mean(deviations))

    return ParityResult(
        parity_achieved=difference <= tolerance,
        difference=difference,
        max_deviation=float(np.max(deviations)),
        tolerance=tolerance,
        n_samples=len(q),
    )


@dataclass(frozen=True)
class SignalDisagreement:
    """
    Gap between the quantum and classical confidence estimates.

    Attributes
    ----------
    quantum_confidence : float
        Quantum-side confidence [0, 1]
    classical_confidence : float
        Classical-side confidence [0, 1]
    delta : float
        Absolute difference between the two
    is_critical : bool
        Whether the gap reaches the critical threshold
    message : str
        Human-readable description
    """
    quantum_confidence: float
    classical_confidence: float
    delta: float
    is_critical: bool
    message: str

    @property
    def favored(self) -> str:
        """The family the fusion weights more heavily."""
        if self.quantum_confidence >= self.classical_confidence:
            return "quantum"
        return "classical"

    @classmethod
    def check(
        cls,
        quantum_confidence: float,
        classical_confidence: float,
        threshold: float = DISAGREEMENT_THRESHOLD,
        critical_threshold: float = CRITICAL_DISAGREEMENT_THRESHOLD,
    ) -> Optional["SignalDisagreement"]:
        """
        Report a confidence gap if it is large enough to matter.

        Returns
        -------
        SignalDisagreement or None
            Disagreement if ``delta >= threshold``, otherwise None
        """
        delta = abs(quantum_confidence - classical_confidence)
        if delta < threshold:
            return None

        is_critical = delta >= critical_threshold

        if quantum_confidence >= classical_confidence:
            higher, lower = "quantum", "classical"
        else:
            higher, lower = "classical", "quantum"
        higher_conf = max(quantum_confidence, classical_confidence)
        lower_conf = min(quantum_confidence, classical_confidence)

        if is_critical:
            message = (
                f"CRITICAL: {higher} confidence ({higher_conf:.2f}) far exceeds "
                f"{lower} confidence ({lower_conf:.2f}); the merged prediction "
                f"is dominated by the {higher} signal."
            )
        else:
            message = (
                f"Moderate disagreement: {higher} ({higher_conf:.2f}) vs "
                f"{lower} ({lower_conf:.2f})."
            )

        return cls(
            quantum_confidence=quantum_confidence,
            classical_confidence=classical_confidence,
            delta=delta,
            is_critical=is_critical,
            message=message,
        )
