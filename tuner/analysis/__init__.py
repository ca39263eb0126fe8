"""Analysis layer - Pitch estimation and note mapping.

- YIN fundamental frequency detection on one block
- Equal-temperament note mapping
"""

from .yin import (
    YinPitchDetector,
    PitchEstimate,
    detect,
    difference,
    difference_fft,
    cumulative_mean_normalized_difference,
    absolute_threshold,
    parabolic_interpolation,
)
from .notes import NoteMapper, map_to_note

__all__ = [
    "YinPitchDetector",
    "PitchEstimate",
    "detect",
    "difference",
    "difference_fft",
    "cumulative_mean_normalized_difference",
    "absolute_threshold",
    "parabolic_interpolation",
    "NoteMapper",
    "map_to_note",
]
