"""Frequency to note mapping in twelve-tone equal temperament."""

import numpy as np

from ..core import Note
from ..core.constants import REFERENCE_MIDI, REFERENCE_PITCH


class NoteMapper:
    """Maps frequencies to the nearest equal-temperament note."""

    def __init__(self, reference_pitch: float = REFERENCE_PITCH):
        """
        Initialize NoteMapper.

        Args:
            reference_pitch: Frequency of A4 in Hz
        """
        if reference_pitch <= 0:
            raise ValueError(f"reference_pitch must be positive, got {reference_pitch}")
        self.reference_pitch = reference_pitch

    def semitones(self, frequency: float) -> float:
        """Fractional semitone distance from A4."""
        if not np.isfinite(frequency) or frequency <= 0:
            raise ValueError(f"Frequency must be positive and finite, got {frequency}")
        return float(12 * np.log2(frequency / self.reference_pitch))

    def map_to_note(self, frequency: float) -> Note:
        """
        Find the note nearest to ``frequency``.

        Args:
            frequency: Frequency in Hz

        Returns:
            Note with its name and signed cents deviation

        Raises:
            ValueError: If frequency is not positive and finite
        """
        semitones = self.semitones(frequency)
        nearest = int(round(semitones))
        return Note(
            midi=REFERENCE_MIDI + nearest,
            cents=100.0 * (semitones - nearest),
            frequency=float(frequency),
            reference_pitch=self.reference_pitch,
        )

    def note_name(self, frequency: float) -> str:
        """Name of the nearest note (e.g., 'A4')."""
        return self.map_to_note(frequency).name


def map_to_note(frequency: float, reference_pitch: float = REFERENCE_PITCH) -> Note:
    """Map ``frequency`` to its nearest note."""
    return NoteMapper(reference_pitch).map_to_note(frequency)
