"""Input layer - Raw audio acquisition and normalization."""

from .normalizer import normalize, normalize_bytes, to_pcm
from .sources import AudioSource, ArraySource, FileSource, MicrophoneSource

__all__ = [
    "normalize",
    "normalize_bytes",
    "to_pcm",
    "AudioSource",
    "ArraySource",
    "FileSource",
    "MicrophoneSource",
]
