"""
Constants for quantum/classical result fusion.

The sub-metric weights below are part of the published algorithm and
are versioned together with ALGORITHM_VERSION. Changing any of them
changes fused outputs and requires a version bump.
"""

# Version tag stamped into every FusionResult
ALGORITHM_VERSION = "1.0.0"

# Assumed scale of (pre-normalized) input data.
# Used as the divisor in the stability and convergence formulas.
DATA_SCALE = 1.0

# Advisory processing budget in seconds. Reported, never enforced.
DEFAULT_TIME_BUDGET = 0.1

# Quantum confidence = purity, stability, coherence
QUANTUM_PURITY_WEIGHT = 0.4
QUANTUM_STABILITY_WEIGHT = 0.3
QUANTUM_COHERENCE_WEIGHT = 0.3

# Classical confidence = significance, stability, fit quality
CLASSICAL_SIGNIFICANCE_WEIGHT = 0.4
CLASSICAL_STABILITY_WEIGHT = 0.3
CLASSICAL_FIT_WEIGHT = 0.3

# t-statistic -> significance mapping: 1 - exp(-t / T_STAT_SCALE)
T_STAT_SCALE = 10.0

# Overall confidence = mean family confidence, alignment, |correlation|
OVERALL_CONFIDENCE_WEIGHT = 0.4
OVERALL_ALIGNMENT_WEIGHT = 0.3
OVERALL_CORRELATION_WEIGHT = 0.3

# Confidence gap between the two families worth reporting
DISAGREEMENT_THRESHOLD = 0.2
CRITICAL_DISAGREEMENT_THRESHOLD = 0.4

# Default mean-absolute-difference tolerance for parity
DEFAULT_PARITY_TOLERANCE = 0.01

# Overall confidence below which a result is not considered usable
MIN_USABLE_CONFIDENCE = 0.3
