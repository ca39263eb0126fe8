"""Note data class - a detected pitch snapped to equal temperament."""

from dataclasses import dataclass

from .constants import PITCH_NAMES, REFERENCE_MIDI, REFERENCE_PITCH


@dataclass(frozen=True)
class Note:
    """Represents the nearest note to a measured frequency."""

    midi: int  # MIDI pitch of the nearest note
    cents: float  # Signed deviation from that note, in cents
    frequency: float = 0.0  # Measured frequency in Hz
    reference_pitch: float = REFERENCE_PITCH  # A4 tuning

    @property
    def name(self) -> str:
        """Get note name with octave (e.g., 'A4', 'C#3')."""
        return f"{self.letter}{self.octave}"

    @property
    def letter(self) -> str:
        """Get note name without octave (e.g., 'A', 'C#')."""
        return PITCH_NAMES[self.midi % 12]

    @property
    def octave(self) -> int:
        return (self.midi // 12) - 1

    @property
    def target_frequency(self) -> float:
        """Exact equal-temperament frequency of the note."""
        return self.midi_to_freq(self.midi, self.reference_pitch)

    @property
    def in_tune(self) -> bool:
        """True when within 5 cents of the target."""
        return abs(self.cents) <= 5.0

    def __str__(self) -> str:
        return self.name

    @staticmethod
    def midi_to_freq(midi: int, reference_pitch: float = REFERENCE_PITCH) -> float:
        """Convert MIDI pitch to frequency (Hz)."""
        return reference_pitch * (2 ** ((midi - REFERENCE_MIDI) / 12.0))
