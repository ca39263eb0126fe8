"""Shared fixtures for tuner tests."""

import numpy as np
import pytest

from generate_test_audio import generate_sine_wave, generate_white_noise
from tuner.core import TunerConfig
from tuner.input import to_pcm


@pytest.fixture
def sample_rate():
    return 44100


@pytest.fixture
def config():
    return TunerConfig(cadence_ms=0)


@pytest.fixture
def sine_block(sample_rate):
    """Factory for a raw PCM16 block holding a sine wave."""

    def make(freq: float, length: int = 2048, amplitude: float = 0.5) -> np.ndarray:
        wave = generate_sine_wave(freq, length / sample_rate, sample_rate, amplitude)
        return to_pcm(wave[:length], "pcm16")

    return make


@pytest.fixture
def noise_block(sample_rate):
    def make(length: int = 2048, amplitude: float = 0.2) -> np.ndarray:
        return to_pcm(generate_white_noise(length / sample_rate, sample_rate, amplitude), "pcm16")

    return make
