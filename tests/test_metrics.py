"""Tests for agreement metrics and parity checks."""

import warnings

import pytest
import numpy as np

from qcfusion.fusion import (
    QualityMetrics,
    alignment_score,
    correlation_coefficient,
    convergence_score,
    check_parity,
    ParityResult,
    SignalDisagreement,
)


class TestAlignmentScore:
    """Tests for alignment_score."""

    def test_identical_shapes(self):
        """Test identical signals align perfectly."""
        assert alignment_score([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_scale_invariant(self):
        """Test that offset and scale do not matter after standardization."""
        assert alignment_score([1.0, 2.0, 3.0], [10.0, 20.0, 30.0]) == pytest.approx(1.0)

    def test_anticorrelated_clamped(self):
        """Test that anti-correlation clamps to zero."""
        assert alignment_score([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == 0.0

    def test_constant_side(self):
        """Test that a constant signal gives zero alignment."""
        assert alignment_score([1.0, 1.0, 1.0], [1.0, 2.0, 3.0]) == 0.0

    def test_length_mismatch(self):
        """Test that unaligned input is rejected."""
        with pytest.raises(ValueError, match="aligned"):
            alignment_score([1.0, 2.0], [1.0, 2.0, 3.0])


class TestCorrelation:
    """Tests for correlation_coefficient."""

    def test_perfect_positive(self):
        """Test perfectly correlated signals."""
        assert correlation_coefficient([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        """Test perfectly anti-correlated signals."""
        assert correlation_coefficient([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == pytest.approx(-1.0)

    def test_single_sample(self):
        """Test that one sample gives zero correlation."""
        assert correlation_coefficient([1.0], [2.0]) == 0.0

    def test_zero_variance(self):
        """Test that a constant side gives zero correlation."""
        assert correlation_coefficient([1.0, 2.0, 3.0], [5.0, 5.0, 5.0]) == 0.0

    @pytest.mark.parametrize("seed", range(5))
    def test_bounds(self, seed):
        """Test correlation stays in [-1, 1]."""
        rng = np.random.default_rng(seed)
        q, c = rng.normal(size=(2, 25))
        r = correlation_coefficient(q, c)
        assert -1.0 <= r <= 1.0
        assert r == pytest.approx(np.corrcoef(q, c)[0, 1])

    def test_huge_values(self):
        """Test correlation and alignment of very large samples."""
        q = [1e200, 2e200, 3e200]
        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            assert correlation_coefficient(q, q[::-1]) == pytest.approx(-1.0)
            assert alignment_score(q, q) == pytest.approx(1.0)


class TestConvergence:
    """Tests for convergence_score."""

    def test_identical(self):
        """Test identical signals converge fully."""
        assert convergence_score([0.1, 0.5], [0.1, 0.5]) == 1.0

    def test_mse(self):
        """Test 1 - MSE."""
        # MSE = (0.25 + 0.25) / 2
        assert convergence_score([0.0, 0.0], [0.5, -0.5]) == pytest.approx(0.75)

    def test_floor_at_zero(self):
        """Test large errors floor at zero."""
        assert convergence_score([0.0, 0.0], [5.0, 5.0]) == 0.0

    def test_data_scale(self):
        """Test that data_scale rescales the MSE."""
        assert convergence_score([0.0], [2.0], data_scale=8.0) == pytest.approx(0.5)

    def test_overflowing_mse(self):
        """Test an MSE too large to represent floors at zero."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            assert convergence_score([1e200, -1e200], [-1e200, 1e200]) == 0.0


class TestQualityMetrics:
    """Tests for QualityMetrics."""

    def test_zero(self):
        """Test zero metrics."""
        m = QualityMetrics.zero()
        assert m.quantum_confidence == 0.0
        assert m.convergence_score == 0.0

    def test_immutable(self):
        """Test metrics cannot be modified."""
        m = QualityMetrics(0.5, 0.6, 0.7, 0.8)
        with pytest.raises(AttributeError):
            m.quantum_confidence = 1.0

    def test_to_dict(self):
        """Test serialization."""
        d = QualityMetrics(0.5, 0.6, -0.7, 0.8).to_dict()
        assert d["correlation_coefficient"] == -0.7
        assert len(d) == 4


class TestParity:
    """Tests for check_parity."""

    def test_identical(self):
        """Test identical signals achieve parity."""
        result = check_parity([1.0, 0.0, 1.0, 0.0], [1.0, 0.0, 1.0, 0.0])

        assert isinstance(result, ParityResult)
        assert result.parity_achieved
        assert result.difference == 0.0
        assert result.n_samples == 4

    def test_outside_tolerance(self):
        """Test large differences fail parity."""
        result = check_parity([0.0, 0.0], [1.0, 0.5], tolerance=0.1)

        assert not result.parity_achieved
        assert result.difference == pytest.approx(0.75)
        assert result.max_deviation == pytest.approx(1.0)

    def test_within_tolerance(self):
        """Test small differences pass parity."""
        result = check_parity([1.0, 2.0], [1.0005, 2.0005], tolerance=0.001)
        assert result.parity_achieved

    def test_negative_tolerance(self):
        """Test that negative tolerance is rejected."""
        with pytest.raises(ValueError):
            check_parity([1.0], [1.0], tolerance=-0.1)


class TestSignalDisagreement:
    """Tests for SignalDisagreement."""

    def test_no_disagreement(self):
        """Test small gaps are not reported."""
        assert SignalDisagreement.check(0.5, 0.45) is None

    def test_moderate(self):
        """Test a moderate gap."""
        d = SignalDisagreement.check(0.6, 0.35)

        assert d is not None
        assert not d.is_critical
        assert d.favored == "quantum"
        assert "Moderate" in d.message

    def test_critical(self):
        """Test a critical gap."""
        d = SignalDisagreement.check(0.2, 0.9)

        assert d.is_critical
        assert d.favored == "classical"
        assert d.delta == pytest.approx(0.7)
        assert "CRITICAL" in d.message
