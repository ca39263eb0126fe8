"""YIN fundamental frequency estimation for a single block of audio.

Implements the first five steps of the YIN algorithm (de Cheveigne &
Kawahara, 2002) on a caller-owned buffer:

1-2. Difference function (the squared-difference form of autocorrelation)
3.   Cumulative mean normalized difference (CMND)
4.   Absolute threshold
5.   Parabolic interpolation

Each step operates in place on a float buffer of length ``n``. The waveform
must hold at least ``2 * n`` samples because the difference function reads
``wave[i + tau]`` for ``i, tau < n``. The buffer is fully overwritten on
every call, so one allocation can be reused across calls.
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np
from scipy import signal

from ..core.constants import ABSOLUTE_THRESHOLD, DEFAULT_DIFFERENCE_METHOD

# Differences at or below this count as zero when deciding a block is flat
FLAT_TOLERANCE = 1e-10


@dataclass(frozen=True)
class PitchEstimate:
    """Result of one YIN detection."""

    frequency: float  # sample_rate / refined_tau
    tau: int  # Integer period from the threshold search
    refined_tau: float  # Period after parabolic interpolation
    aperiodicity: float  # CMND value at tau (0 = perfectly periodic)
    periodic: bool  # Threshold search found a dip
    flat: bool  # Every lag had zero difference (silence or DC)

    def is_reliable(self, min_frequency: float) -> bool:
        """Whether the estimate is worth showing as a note."""
        return (
            not self.flat
            and np.isfinite(self.frequency)
            and self.frequency > min_frequency
        )


def difference(wave: np.ndarray, buffer: np.ndarray) -> np.ndarray:
    """
    Squared difference function, computed directly in O(n^2).

    For every lag ``j`` in ``1..n-1``::

        buffer[j] = sum((wave[i] - wave[i + j]) ** 2 for i in range(n))

    ``buffer[0]`` is left untouched.

    Args:
        wave: Normalized waveform, at least ``2 * len(buffer)`` samples
        buffer: Output buffer

    Returns:
        The buffer
    """
    n = len(buffer)
    wave = np.asarray(wave, dtype=np.float64)
    frame = wave[:n]
    for j in range(1, n):
        delta = frame - wave[j:j + n]
        buffer[j] = np.dot(delta, delta)
    return buffer


def difference_fft(wave: np.ndarray, buffer: np.ndarray) -> np.ndarray:
    """
    Squared difference function in O(n log n).

    Expands ``(a - b)^2 = a^2 + b^2 - 2ab``: the energy terms come from a
    prefix sum of squares and the cross term from an FFT cross-correlation.
    Produces the same values as :func:`difference` up to rounding.
    """
    n = len(buffer)
    samples = np.asarray(wave[:2 * n], dtype=np.float64)
    frame = samples[:n]

    energy = np.concatenate(([0.0], np.cumsum(samples * samples)))
    window_energy = energy[n:2 * n] - energy[:n]
    cross = signal.correlate(samples[:2 * n - 1], frame, mode="valid", method="fft")

    # Rounding in the FFT can leave tiny negatives where the true value is 0
    buffer[1:] = np.maximum(window_energy[0] + window_energy[1:] - 2.0 * cross[1:], 0.0)
    return buffer


def cumulative_mean_normalized_difference(buffer: np.ndarray) -> np.ndarray:
    """
    Divide each difference by the running mean of the differences so far.

    ``buffer[0]`` becomes 1.0 and ``buffer[j] *= j / sum(buffer[1..j])``.
    Lags whose running sum is still zero are set to 1.0, so a silent block
    yields a flat curve with no dip.
    """
    buffer[0] = 1.0
    lags = np.arange(1, len(buffer), dtype=np.float64)
    running_sum = np.cumsum(buffer[1:])

    with np.errstate(divide="ignore", invalid="ignore"):
        normalized = buffer[1:] * lags / running_sum
    buffer[1:] = np.where(running_sum > 0, normalized, 1.0)
    return buffer


def absolute_threshold(buffer: np.ndarray, threshold: float = ABSOLUTE_THRESHOLD) -> int:
    """
    Find the first dip below ``threshold`` and descend to its floor.

    The first two entries of a CMND buffer carry no period information, so
    the scan starts at index 2. When nothing drops below the threshold the
    last index is returned instead of a failure value.

    Returns:
        Integer tau in ``[2, n - 1]``
    """
    n = len(buffer)
    below = np.flatnonzero(buffer[2:] < threshold)
    if len(below) == 0:
        return n - 1

    tau = int(below[0]) + 2
    while tau + 1 < n and buffer[tau + 1] < buffer[tau]:
        tau += 1
    return tau


def parabolic_interpolation(buffer: np.ndarray, tau: int) -> float:
    """
    Refine ``tau`` with a parabola through its two neighbours.

    At either edge of the buffer there is only one neighbour; the lower of
    ``tau`` and that neighbour wins, ties staying on ``tau``. A flat dip
    (denominator numerically zero) leaves ``tau`` unmoved.

    Returns:
        Fractional tau within ``[tau - 1, tau + 1]``, hence never outside
        ``[0, len(buffer) - 1]``
    """
    n = len(buffer)
    x0 = tau if tau < 1 else tau - 1
    x2 = tau + 1 if tau + 1 < n else tau

    if x0 == tau:
        return float(tau) if buffer[tau] <= buffer[x2] else float(x2)
    if x2 == tau:
        return float(tau) if buffer[tau] <= buffer[x0] else float(x0)

    s0, s1, s2 = buffer[x0], buffer[tau], buffer[x2]
    denominator = 2.0 * (2.0 * s1 - s2 - s0)
    if abs(denominator) < np.finfo(np.float64).eps:
        return float(tau)

    better_tau = tau + (s2 - s0) / denominator
    # Clamp to the neighbour interval
    return float(min(max(better_tau, x0), x2))


class YinPitchDetector:
    """Estimates the fundamental frequency of one waveform block."""

    METHODS = {
        "direct": difference,
        "fft": difference_fft,
    }

    def __init__(
        self,
        sample_rate: float,
        buffer_length: int,
        threshold: float = ABSOLUTE_THRESHOLD,
        method: str = DEFAULT_DIFFERENCE_METHOD,
    ):
        """
        Initialize YinPitchDetector.

        Args:
            sample_rate: Sample rate of the waveforms in Hz
            buffer_length: Length of the difference buffer (max period in samples)
            threshold: Absolute threshold for the CMND dip search
            method: 'direct' or 'fft' difference function

        Raises:
            ValueError: If the buffer is too short or the method unknown
        """
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        if buffer_length < 3:
            raise ValueError(f"buffer_length must be at least 3, got {buffer_length}")
        if method not in self.METHODS:
            raise ValueError(
                f"Unknown difference method: {method}. Supported: {sorted(self.METHODS)}"
            )

        self.sample_rate = float(sample_rate)
        self.buffer_length = buffer_length
        self.threshold = threshold
        self.method = method
        self._difference = self.METHODS[method]

    @property
    def min_waveform_length(self) -> int:
        return 2 * self.buffer_length

    def new_buffer(self) -> np.ndarray:
        """Allocate a difference buffer sized for this detector."""
        return np.zeros(self.buffer_length, dtype=np.float64)

    def estimate(
        self,
        wave: np.ndarray,
        buffer: Optional[np.ndarray] = None,
    ) -> PitchEstimate:
        """
        Run the YIN steps on ``wave``.

        Args:
            wave: Normalized waveform of at least ``2 * buffer_length`` samples
            buffer: Optional reusable buffer from :meth:`new_buffer`

        Returns:
            PitchEstimate for the block
        """
        wave = np.asarray(wave, dtype=np.float64)
        if len(wave) < self.min_waveform_length:
            raise ValueError(
                f"Waveform has {len(wave)} samples, need at least "
                f"{self.min_waveform_length}"
            )
        if buffer is None:
            buffer = self.new_buffer()
        elif len(buffer) != self.buffer_length:
            raise ValueError(
                f"Buffer has {len(buffer)} entries, expected {self.buffer_length}"
            )

        self._difference(wave, buffer)
        flat = not np.any(buffer[1:] > FLAT_TOLERANCE)
        cumulative_mean_normalized_difference(buffer)

        tau = absolute_threshold(buffer, self.threshold)
        better_tau = parabolic_interpolation(buffer, tau)

        # Frequency = 1 / period, with the period measured in samples
        frequency = self.sample_rate / better_tau if better_tau > 0 else float("inf")

        return PitchEstimate(
            frequency=frequency,
            tau=tau,
            refined_tau=better_tau,
            aperiodicity=float(buffer[tau]),
            periodic=bool(buffer[tau] < self.threshold),
            flat=flat,
        )

    def detect(self, wave: np.ndarray, buffer: Optional[np.ndarray] = None) -> float:
        """Return the estimated fundamental frequency of ``wave`` in Hz."""
        return self.estimate(wave, buffer).frequency


def detect(
    wave: np.ndarray,
    sample_rate: float,
    buffer_length: int,
    threshold: float = ABSOLUTE_THRESHOLD,
) -> float:
    """Estimate the fundamental frequency of ``wave`` with a one-off detector."""
    return YinPitchDetector(sample_rate, buffer_length, threshold).detect(wave)
