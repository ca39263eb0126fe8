"""Tuner configuration."""

from dataclasses import dataclass

from .constants import (
    ABSOLUTE_THRESHOLD,
    DEFAULT_CADENCE_MS,
    DEFAULT_CAPTURE_LENGTH,
    DEFAULT_DETECTION_LENGTH,
    DEFAULT_DIFFERENCE_METHOD,
    DEFAULT_SAMPLE_FORMAT,
    DEFAULT_SAMPLE_RATE,
    MIN_AUDIBLE_FREQUENCY,
    REFERENCE_PITCH,
)
from .errors import ConfigError
from .formats import SampleFormat, get_sample_format

DIFFERENCE_METHODS = ("direct", "fft")


@dataclass
class TunerConfig:
    """Configuration consumed by the detection pipeline.

    Attributes:
        sample_rate: Capture sample rate in Hz (default: 44100)
        capture_length: Samples per raw block pulled from the source (default: 2048)
        detection_length: Length of the YIN difference buffer (default: 1024).
            Must satisfy capture_length >= 2 * detection_length
        cadence_ms: Interval between detection cycles in milliseconds (default: 250)
        threshold: YIN absolute threshold (default: 0.125)
        min_frequency: Frequencies at or below this are reported as unknown (default: 10 Hz)
        reference_pitch: Frequency of A4 in Hz (default: 440)
        sample_format: Raw PCM encoding of captured blocks (default: 'pcm16')
        difference_method: 'direct' O(n^2) or 'fft' O(n log n) difference function
    """

    sample_rate: int = DEFAULT_SAMPLE_RATE
    capture_length: int = DEFAULT_CAPTURE_LENGTH
    detection_length: int = DEFAULT_DETECTION_LENGTH
    cadence_ms: int = DEFAULT_CADENCE_MS
    threshold: float = ABSOLUTE_THRESHOLD
    min_frequency: float = MIN_AUDIBLE_FREQUENCY
    reference_pitch: float = REFERENCE_PITCH
    sample_format: str = DEFAULT_SAMPLE_FORMAT
    difference_method: str = DEFAULT_DIFFERENCE_METHOD

    @property
    def cadence_seconds(self) -> float:
        return self.cadence_ms / 1000.0

    @property
    def encoding(self) -> SampleFormat:
        return get_sample_format(self.sample_format)

    def validate(self) -> "TunerConfig":
        """Check the settings, returning self.

        Raises:
            ConfigError: If any setting is unusable
        """
        if self.sample_rate <= 0:
            raise ConfigError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.detection_length < 3:
            raise ConfigError(
                f"detection_length must be at least 3, got {self.detection_length}"
            )
        if self.capture_length < 2 * self.detection_length:
            raise ConfigError(
                f"capture_length ({self.capture_length}) must be at least twice "
                f"detection_length ({self.detection_length})"
            )
        if self.cadence_ms < 0:
            raise ConfigError(f"cadence_ms must not be negative, got {self.cadence_ms}")
        if not 0.0 < self.threshold < 1.0:
            raise ConfigError(f"threshold must be in (0, 1), got {self.threshold}")
        if self.min_frequency < 0:
            raise ConfigError(
                f"min_frequency must not be negative, got {self.min_frequency}"
            )
        if self.reference_pitch <= 0:
            raise ConfigError(
                f"reference_pitch must be positive, got {self.reference_pitch}"
            )
        if self.difference_method not in DIFFERENCE_METHODS:
            raise ConfigError(
                f"Unknown difference method: {self.difference_method}. "
                f"Supported: {DIFFERENCE_METHODS}"
            )
        get_sample_format(self.sample_format)
        return self
