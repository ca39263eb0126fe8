"""Core types and constants for Glass Tuner."""

from .note import Note
from .config import TunerConfig
from .errors import TunerError, ConfigError, EndOfStream
from .formats import SampleFormat, SAMPLE_FORMATS, get_sample_format
from .constants import (
    PITCH_NAMES,
    REFERENCE_PITCH,
    ABSOLUTE_THRESHOLD,
    MIN_AUDIBLE_FREQUENCY,
    UNKNOWN_STATUS,
)

__all__ = [
    "Note",
    "TunerConfig",
    "TunerError",
    "ConfigError",
    "EndOfStream",
    "SampleFormat",
    "SAMPLE_FORMATS",
    "get_sample_format",
    "PITCH_NAMES",
    "REFERENCE_PITCH",
    "ABSOLUTE_THRESHOLD",
    "MIN_AUDIBLE_FREQUENCY",
    "UNKNOWN_STATUS",
]
