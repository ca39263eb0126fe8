"""Tests for the Note type and frequency to note mapping."""

import math

import pytest

from tuner.analysis import NoteMapper, map_to_note
from tuner.core import Note


class TestNote:
    """Tests for Note dataclass."""

    def test_name(self):
        assert Note(midi=60, cents=0.0).name == "C4"
        assert Note(midi=69, cents=0.0).name == "A4"
        assert Note(midi=61, cents=0.0).name == "C#4"
        assert Note(midi=57, cents=0.0).name == "A3"

    def test_letter_and_octave(self):
        note = Note(midi=70, cents=0.0)
        assert note.letter == "A#"
        assert note.octave == 4

    def test_str_is_name(self):
        assert str(Note(midi=40, cents=3.0)) == "E2"

    def test_frozen(self):
        note = Note(midi=69, cents=0.0)
        with pytest.raises(AttributeError):
            note.midi = 70

    def test_midi_to_freq(self):
        assert Note.midi_to_freq(69) == 440.0
        assert abs(Note.midi_to_freq(60) - 261.63) < 1.0
        assert Note.midi_to_freq(69, reference_pitch=442.0) == 442.0

    def test_target_frequency(self):
        assert Note(midi=57, cents=12.0).target_frequency == pytest.approx(220.0)

    def test_in_tune(self):
        assert Note(midi=69, cents=-4.9).in_tune
        assert not Note(midi=69, cents=12.0).in_tune


class TestNoteMapper:
    """Tests for NoteMapper."""

    @pytest.mark.parametrize(
        "freq,name",
        [
            (440.0, "A4"),
            (220.0, "A3"),
            (261.63, "C4"),
            (466.16, "A#4"),
            (82.41, "E2"),
            (27.5, "A0"),
            (4186.01, "C8"),
        ],
    )
    def test_note_names(self, freq, name):
        assert map_to_note(freq).name == name

    def test_exact_note_has_zero_cents(self):
        note = map_to_note(440.0)
        assert note.cents == pytest.approx(0.0)
        assert note.frequency == 440.0

    def test_sharp_cents(self):
        note = map_to_note(440.0 * 2 ** (30 / 1200))
        assert note.name == "A4"
        assert note.cents == pytest.approx(30.0)

    def test_rounds_to_nearest_semitone(self):
        # 60 cents below A4 is 40 cents above G#4
        note = map_to_note(440.0 * 2 ** (-60 / 1200))
        assert note.name == "G#4"
        assert note.cents == pytest.approx(40.0)

    def test_cents_within_half_semitone(self):
        mapper = NoteMapper()
        for i in range(200):
            freq = 50.0 * 1.013 ** i
            assert -50.0 <= mapper.map_to_note(freq).cents <= 50.0

    @pytest.mark.parametrize("midi", range(21, 100))
    def test_octave_doubling(self, midi):
        low = map_to_note(Note.midi_to_freq(midi))
        high = map_to_note(2 * Note.midi_to_freq(midi))

        assert high.letter == low.letter
        assert high.octave == low.octave + 1

    def test_custom_reference(self):
        mapper = NoteMapper(reference_pitch=442.0)
        note = mapper.map_to_note(442.0)

        assert note.name == "A4"
        assert note.cents == pytest.approx(0.0)
        assert map_to_note(440.0, reference_pitch=442.0).cents == pytest.approx(
            1200 * math.log2(440.0 / 442.0)
        )

    def test_note_name_helper(self):
        assert NoteMapper().note_name(329.63) == "E4"

    @pytest.mark.parametrize("freq,midi", [(440.0, 69), (261.63, 60), (880.0, 81), (27.5, 21)])
    def test_midi_number(self, freq, midi):
        assert map_to_note(freq).midi == midi

    @pytest.mark.parametrize("freq", [0.0, -440.0, float("nan"), float("inf")])
    def test_rejects_invalid_frequency(self, freq):
        with pytest.raises(ValueError, match="positive and finite"):
            map_to_note(freq)

    def test_rejects_invalid_reference(self):
        with pytest.raises(ValueError, match="reference_pitch"):
            NoteMapper(reference_pitch=0.0)
