"""Generate sample WAV files for trying out the tuner."""

import os
from typing import Optional

import numpy as np
from scipy.io import wavfile

# Ensure examples directory exists
EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")

# Standard guitar tuning, low to high
GUITAR_STRINGS = {
    "E2": 82.41,
    "A2": 110.00,
    "D3": 146.83,
    "G3": 196.00,
    "B3": 246.94,
    "E4": 329.63,
}


def generate_sine_wave(
    freq: float,
    duration: float,
    sr: int = 44100,
    amplitude: float = 0.8,
) -> np.ndarray:
    """Generate a sine wave at given frequency."""
    t = np.arange(int(round(sr * duration))) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def generate_plucked_tone(
    freq: float,
    duration: float,
    sr: int = 44100,
    harmonics: int = 5,
) -> np.ndarray:
    """Generate a decaying tone with harmonics, closer to a real string."""
    t = np.arange(int(round(sr * duration))) / sr
    tone = sum(np.sin(2 * np.pi * freq * k * t) / k for k in range(1, harmonics + 1))
    envelope = np.exp(-3.0 * t)
    tone = tone * envelope
    return (0.8 * tone / np.max(np.abs(tone))).astype(np.float32)


def generate_note_sequence(
    frequencies: list, durations: list, sr: int = 44100
) -> np.ndarray:
    """Generate a sequence of notes."""
    audio = []
    for freq, dur in zip(frequencies, durations):
        note = generate_sine_wave(freq, dur, sr)
        # Apply simple envelope to avoid clicks
        envelope = np.ones_like(note)
        attack = int(0.01 * sr)
        release = int(0.01 * sr)
        envelope[:attack] = np.linspace(0, 1, attack)
        envelope[-release:] = np.linspace(1, 0, release)
        audio.append(note * envelope)
    return np.concatenate(audio)


def generate_white_noise(
    duration: float,
    sr: int = 44100,
    amplitude: float = 0.1,
    seed: Optional[int] = 0,
) -> np.ndarray:
    """Generate white noise."""
    rng = np.random.default_rng(seed)
    return (rng.standard_normal(int(round(sr * duration))) * amplitude).astype(np.float32)


def save_wav(filename: str, audio: np.ndarray, sr: int = 44100) -> str:
    """Save audio as 16-bit WAV file."""
    os.makedirs(EXAMPLES_DIR, exist_ok=True)
    audio_16bit = (np.clip(audio, -1.0, 1.0) * 32767).astype(np.int16)
    filepath = os.path.join(EXAMPLES_DIR, filename)
    wavfile.write(filepath, sr, audio_16bit)
    print(f"Created: {filepath}")
    return filepath


def main():
    sr = 44100

    # 1. Concert A (440 Hz) - 2 seconds
    print("Generating single_a4.wav...")
    save_wav("single_a4.wav", generate_sine_wave(440.0, 2.0, sr), sr)

    # 2. Open guitar strings, plucked, 1.5 seconds each
    for name, freq in GUITAR_STRINGS.items():
        print(f"Generating string_{name.lower()}.wav...")
        save_wav(f"string_{name.lower()}.wav", generate_plucked_tone(freq, 1.5, sr), sr)

    # 3. C Major scale (C4 to C5)
    print("Generating c_major_scale.wav...")
    scale_freqs = [261.63, 293.66, 329.63, 349.23, 392.00, 440.00, 493.88, 523.25]
    scale = generate_note_sequence(scale_freqs, [0.5] * 8, sr)
    save_wav("c_major_scale.wav", scale, sr)

    # 4. A4 played 20 cents sharp
    print("Generating sharp_a4.wav...")
    save_wav("sharp_a4.wav", generate_sine_wave(440.0 * 2 ** (20 / 1200), 2.0, sr), sr)

    # 5. Silence and noise (should read as '?' or unstable)
    print("Generating silence.wav...")
    save_wav("silence.wav", np.zeros(sr * 2, dtype=np.float32), sr)
    print("Generating white_noise.wav...")
    save_wav("white_noise.wav", generate_white_noise(2.0, sr), sr)

    print("\nAll test audio files generated!")


if __name__ == "__main__":
    main()
