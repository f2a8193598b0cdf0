"""
Length alignment for quantum/classical signal pairs.

Two pipelines rarely emit the same number of samples. Both signals are
treated as uniformly sampled over the same span, so the shorter one is
linearly resampled onto the sample count of the longer one.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union
import logging

import numpy as np
from scipy import interpolate

logger = logging.getLogger(__name__)

SignalLike = Union[Sequence[float], np.ndarray]


def as_signal(data: SignalLike, name: str = "signal") -> np.ndarray:
    """
    Coerce input to a 1-D float64 array.

    Parameters
    ----------
    data : sequence of float or np.ndarray
        Raw signal values
    name : str
        Name used in error messages

    Returns
    -------
    np.ndarray
        Copy of the data as a 1-D float array (may be empty)

    Raises
    ------
    ValueError
        If the data is not one-dimensional or contains NaN/inf
    """
    arr = np.array(data, dtype=np.float64)

    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1D, got {arr.ndim}D")

    if arr.size and not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains non-finite values")

    return arr


def interpolate_to_length(data: SignalLike, target_length: int) -> np.ndarray:
    """
    Linearly resample a signal onto ``target_length`` evenly spaced samples.

    Target sample ``i`` sits at position ``i * (n - 1) / (m - 1)`` along
    the source index range. A single-element source is broadcast.

    Parameters
    ----------
    data : sequence of float
        Non-empty source signal of length n
    target_length : int
        Number of output samples m

    Returns
    -------
    np.ndarray
        Resampled signal of length ``target_length``
    """
    source = as_signal(data)
    n = len(source)

    if n == 0:
        raise ValueError("Cannot interpolate an empty signal")
    if target_length < 1:
        raise ValueError(f"target_length must be >= 1, got {target_length}")

    if n == target_length:
        return source
    if n == 1:
        return np.full(target_length, source[0])
    if target_length == 1:
        return source[:1].copy()

    interp = interpolate.interp1d(
        np.arange(n, dtype=np.float64),
        source,
        kind="linear",
        bounds_error=False,
        fill_value=(source[0], source[-1]),
    )
    positions = np.linspace(0.0, n - 1, target_length)
    return np.asarray(interp(positions), dtype=np.float64)


@dataclass(frozen=True)
class AlignedPair:
    """
    Two signals of equal length, ready for comparison.

    Attributes
    ----------
    quantum : np.ndarray
        Aligned quantum signal
    classical : np.ndarray
        Aligned classical signal
    original_lengths : Tuple[int, int]
        (quantum, classical) lengths before alignment
    """
    quantum: np.ndarray
    classical: np.ndarray
    original_lengths: Tuple[int, int]

    def __len__(self) -> int:
        return len(self.quantum)

    @property
    def interpolated(self) -> Optional[str]:
        """Which side was resampled ("quantum", "classical") or None."""
        q_len, c_len = self.original_lengths
        if q_len < c_len:
            return "quantum"
        if c_len < q_len:
            return "classical"
        return None


def align_lengths(quantum: SignalLike, classical: SignalLike) -> AlignedPair:
    """
    Bring two non-empty signals to a common length.

    The longer signal is kept as is and the shorter one is resampled
    with :func:`interpolate_to_length`.

    Parameters
    ----------
    quantum : sequence of float
        Quantum pipeline output
    classical : sequence of float
        Classical pipeline output

    Returns
    -------
    AlignedPair
        Both signals at length ``max(len(quantum), len(classical))``

    Raises
    ------
    ValueError
        If either signal is empty
    """
    q = as_signal(quantum, "quantum")
    c = as_signal(classical, "classical")

    if len(q) == 0 or len(c) == 0:
        raise ValueError("Cannot align empty signals")

    target = max(len(q), len(c))
    pair = AlignedPair(
        quantum=interpolate_to_length(q, target),
        classical=interpolate_to_length(c, target),
        original_lengths=(len(q), len(c)),
    )

    if pair.interpolated:
        logger.debug(
            "Resampled %s signal from %d to %d samples",
            pair.interpolated, min(len(q), len(c)), target,
        )

    return pair
