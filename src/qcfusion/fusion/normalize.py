"""
Z-score normalization used by the alignment score.
"""

from typing import Tuple

import numpy as np

from qcfusion.fusion.alignment import SignalLike, as_signal


def population_stats(data: SignalLike) -> Tuple[float, float]:
    """
    Mean and population standard deviation (divide by n).

    Returns (0.0, 0.0) for an empty signal.
    """
    arr = as_signal(data)
    if len(arr) == 0:
        return 0.0, 0.0
    return float(np.mean(arr)), float(np.std(arr, ddof=0))


def peak_scaled(data: SignalLike) -> np.ndarray:
    """
    Divide a signal by its largest absolute value.

    Keeps squares and products of very large samples finite. Statistics
    that do not depend on scale (z-scores, correlations, t-statistics)
    are unchanged. An all-zero or empty signal is returned as is.
    """
    arr = as_signal(data)
    if len(arr) == 0:
        return arr
    peak = float(np.max(np.abs(arr)))
    if peak == 0.0:
        return arr
    return arr / peak


def normalize(data: SignalLike) -> np.ndarray:
    """
    Rescale a signal to zero mean and unit standard deviation.

    A constant signal has no spread to rescale and maps to all zeros.

    Parameters
    ----------
    data : sequence of float
        Input signal

    Returns
    -------
    np.ndarray
        Standardized signal, same length as input
    """
    arr = peak_scaled(data)
    mean, std = population_stats(arr)

    # ptp catches constant signals whose float mean leaves a tiny residual std
    if std == 0.0 or np.ptp(arr) == 0.0:
        return np.zeros_like(arr)

    return (arr - mean) / std
