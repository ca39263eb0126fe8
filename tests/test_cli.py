"""Tests for the command-line interface."""

import json

import pytest
import soundfile as sf
from typer.testing import CliRunner

from generate_test_audio import generate_sine_wave
from tuner.cli import app

runner = CliRunner()


@pytest.fixture
def a4_wav(tmp_path):
    path = tmp_path / "a4.wav"
    sf.write(str(path), generate_sine_wave(440.0, 0.5, 44100), 44100, subtype="PCM_16")
    return path


class TestDetectCommand:
    """Tests for `tuner detect`."""

    def test_json_output(self, a4_wav):
        result = runner.invoke(app, ["detect", str(a4_wav), "--json"])

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["sample_rate"] == 44100
        assert len(report["blocks"]) > 5

        # The final block is zero-padded, so only check the full ones
        for block in report["blocks"][:-1]:
            assert block["note"] == "A4"
            assert block["status"].startswith("A4: ")
            assert abs(block["cents"]) < 10

    def test_fft_matches(self, a4_wav):
        result = runner.invoke(app, ["detect", str(a4_wav), "--json", "--fft"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["blocks"][0]["note"] == "A4"

    def test_table_output(self, a4_wav):
        result = runner.invoke(app, ["detect", str(a4_wav)])

        assert result.exit_code == 0, result.output
        assert "Detected Pitch" in result.stdout
        assert "A4" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["detect", str(tmp_path / "nope.wav")])

        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_invalid_config(self, a4_wav):
        result = runner.invoke(app, ["detect", str(a4_wav), "--detection-length", "2048"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout


class TestNoteCommand:
    """Tests for `tuner note`."""

    def test_exact_note(self):
        result = runner.invoke(app, ["note", "440"])

        assert result.exit_code == 0
        assert "A4" in result.stdout
        assert "+0.0 cents" in result.stdout

    def test_reference(self):
        result = runner.invoke(app, ["note", "442", "--reference", "442"])

        assert result.exit_code == 0
        assert "A4" in result.stdout

    def test_invalid_frequency(self):
        result = runner.invoke(app, ["note", "0"])

        assert result.exit_code == 1
        assert "positive and finite" in result.stdout
