"""Tests for the quantum and classical confidence estimators."""

import math

import pytest
import numpy as np

from qcfusion.fusion import (
    ConfidenceEstimate,
    ConfidenceKind,
    quantum_confidence,
    classical_confidence,
)
from qcfusion.fusion.confidence import (
    quantum_purity,
    quantum_stability,
    quantum_coherence,
    classical_significance,
    classical_stability,
    classical_fit_quality,
)


class TestQuantumSubMetrics:
    """Tests for purity, stability and coherence."""

    def test_purity(self):
        """Test mean squared amplitude."""
        assert quantum_purity([0.5, -0.5]) == pytest.approx(0.25)

    def test_purity_clamped(self):
        """Test that large amplitudes clamp to 1."""
        assert quantum_purity([2.0, 3.0]) == 1.0

    def test_stability_constant(self):
        """Test constant signal is fully stable."""
        assert quantum_stability([0.3, 0.3, 0.3]) == 1.0

    def test_stability_unit_variance(self):
        """Test variance equal to data scale gives zero stability."""
        # population variance of [0, 2] is 1
        assert quantum_stability([0.0, 2.0]) == pytest.approx(0.0)

    def test_stability_data_scale(self):
        """Test that data_scale changes the divisor."""
        assert quantum_stability([0.0, 2.0], data_scale=4.0) == pytest.approx(0.75)

    def test_coherence_single_sample(self):
        """Test single sample defaults to full coherence."""
        assert quantum_coherence([0.7]) == 1.0

    def test_coherence_steps(self):
        """Test mean of exp(-|jump|)."""
        expected = (math.exp(-1.0) + math.exp(-2.0)) / 2
        assert quantum_coherence([0.0, 1.0, -1.0]) == pytest.approx(expected)

    def test_coherence_flat(self):
        """Test flat signal has coherence 1."""
        assert quantum_coherence([0.2, 0.2, 0.2]) == pytest.approx(1.0)


class TestQuantumConfidence:
    """Tests for quantum_confidence."""

    def test_weighted_sum(self):
        """Test 0.4/0.3/0.3 weighting."""
        est = quantum_confidence([1.0, 2.0, 3.0])

        expected = 0.4 * 1.0 + 0.3 * (1 - 2 / 3) + 0.3 * math.exp(-1.0)
        assert est.value == pytest.approx(expected)
        assert est.kind == ConfidenceKind.QUANTUM
        assert set(est.components) == {"purity", "stability", "coherence"}

    def test_empty(self):
        """Test empty input yields zero confidence."""
        assert quantum_confidence([]).value == 0.0

    def test_float_conversion(self):
        """Test estimates convert to float."""
        est = quantum_confidence([0.1, 0.2])
        assert float(est) == est.value


class TestClassicalSubMetrics:
    """Tests for significance, stability and fit quality."""

    def test_significance(self):
        """Test t-statistic mapping."""
        # mean 2, sample variance 1, n 3 -> t = 2 / sqrt(1/3)
        t = 2.0 / math.sqrt(1.0 / 3.0)
        expected = 1 - math.exp(-t / 10)
        assert classical_significance([1.0, 2.0, 3.0]) == pytest.approx(expected)

    def test_significance_zero_mean(self):
        """Test zero mean is not significant."""
        assert classical_significance([-1.0, 1.0]) == pytest.approx(0.0)

    def test_significance_degenerate(self):
        """Test too few samples and constant input."""
        assert classical_significance([5.0]) == 0.0
        assert classical_significance([2.0, 2.0, 2.0]) == 0.0

    def test_lag1_autocorrelation(self):
        """Test lag-1 autocorrelation of a ramp."""
        # centered [-2,-1,0,1,2]: lag products sum 4, squares sum 10
        assert classical_stability([1.0, 2.0, 3.0, 4.0, 5.0]) == pytest.approx(0.4)

    def test_autocorrelation_absolute(self):
        """Test negative autocorrelation is reported by magnitude."""
        assert classical_stability([1.0, -1.0, 1.0, -1.0]) > 0.0

    def test_fit_quality_linear(self):
        """Test perfect linear trend has R² of 1."""
        assert classical_fit_quality([0.5, 1.0, 1.5, 2.0]) == pytest.approx(1.0)

    def test_fit_quality_needs_three(self):
        """Test that two samples give no fit quality."""
        assert classical_fit_quality([1.0, 2.0]) == 0.0

    def test_fit_quality_no_trend(self):
        """Test symmetric signal has no linear trend."""
        assert classical_fit_quality([0.0, 1.0, 0.0]) == pytest.approx(0.0, abs=1e-12)


class TestClassicalConfidence:
    """Tests for classical_confidence."""

    def test_weighted_sum(self):
        """Test 0.4/0.3/0.3 weighting."""
        data = [1.0, 2.0, 3.0, 4.0, 5.0]
        est = classical_confidence(data)

        expected = (
            0.4 * classical_significance(data)
            + 0.3 * classical_stability(data)
            + 0.3 * classical_fit_quality(data)
        )
        assert est.value == pytest.approx(expected)
        assert est.kind == ConfidenceKind.CLASSICAL
        assert set(est.components) == {"significance", "stability", "fit_quality"}

    def test_single_sample(self):
        """Test single sample has zero classical confidence."""
        assert classical_confidence([3.0]).value == 0.0

    def test_empty(self):
        """Test empty input yields zero confidence."""
        assert classical_confidence([]).value == 0.0


class TestAsymmetry:
    """The two estimators judge the same data differently."""

    def test_different_scores(self):
        """Test that quantum and classical disagree on a ramp."""
        data = [0.1, 0.2, 0.3, 0.4]
        assert quantum_confidence(data).value != pytest.approx(
            classical_confidence(data).value
        )

    @pytest.mark.parametrize("seed", range(6))
    def test_bounds(self, seed):
        """Test both confidences stay in [0, 1]."""
        rng = np.random.default_rng(seed)
        data = rng.normal(scale=rng.uniform(0.1, 10.0), size=rng.integers(1, 40))

        for est in (quantum_confidence(data), classical_confidence(data)):
            assert isinstance(est, ConfidenceEstimate)
            assert 0.0 <= est.value <= 1.0
            assert all(0.0 <= v <= 1.0 for v in est.components.values())

    def test_to_dict(self):
        """Test estimate serialization."""
        d = quantum_confidence([0.1, 0.3]).to_dict()
        assert d["kind"] == "quantum"
        assert "purity" in d["components"]


@pytest.mark.filterwarnings("error::RuntimeWarning")
class TestLargeAmplitude:
    """Finite samples large enough that their squares overflow."""

    def test_purity_saturates(self):
        """Test purity clamps to 1 instead of collapsing to 0."""
        assert quantum_purity([1e200, 1e200]) == 1.0

    def test_stability_floors(self):
        """Test an overflowing variance floors stability at 0."""
        assert quantum_stability([1e200, -1e200]) == 0.0

    def test_coherence_large_jumps(self):
        """Test huge jumps give zero coherence."""
        assert quantum_coherence([1e308, -1e308]) == 0.0

    def test_quantum_constant(self):
        """Test a large constant signal is fully confident."""
        assert quantum_confidence([1e200, 1e200]).value == pytest.approx(1.0)

    def test_classical_scale_free(self):
        """Test classical sub-metrics match their unit-scale values."""
        small = [1.0, -1.0, 1.0, -0.5, 0.8]
        large = [v * 1e200 for v in small]

        assert classical_stability(large) == pytest.approx(classical_stability(small))
        assert classical_significance(large) == pytest.approx(
            classical_significance(small)
        )
        assert classical_fit_quality(large) == pytest.approx(
            classical_fit_quality(small)
        )
        assert classical_confidence(large).value == pytest.approx(
            classical_confidence(small).value
        )
