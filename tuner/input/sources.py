"""Audio sources - collaborators that fill raw sample blocks.

Every source exposes ``read_into(block)``, a blocking pull that overwrites
the caller's block with the next ``len(block)`` raw samples. The pipeline
only depends on that callable, so any function with the same signature can
stand in for a source.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import librosa
import numpy as np

from ..core.constants import DEFAULT_SAMPLE_FORMAT, DEFAULT_SAMPLE_RATE
from ..core.errors import EndOfStream
from ..core.formats import SampleFormat, get_sample_format
from .normalizer import to_pcm

logger = logging.getLogger(__name__)


class AudioSource(ABC):
    """Abstract base class for raw PCM block providers."""

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        sample_format: Union[str, SampleFormat] = DEFAULT_SAMPLE_FORMAT,
    ):
        self.sample_rate = sample_rate
        self.sample_format = get_sample_format(sample_format)

    @abstractmethod
    def read_into(self, block: np.ndarray) -> None:
        """
        Fill ``block`` with the next raw samples, blocking until available.

        Raises:
            EndOfStream: If a finite source has no samples left
        """
        pass

    def open(self) -> "AudioSource":
        return self

    def close(self) -> None:
        pass

    def __enter__(self) -> "AudioSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ArraySource(AudioSource):
    """Serves consecutive blocks from an in-memory PCM array.

    The last partial block is zero-padded; reading past it raises
    EndOfStream. With ``loop=True`` the array repeats forever. Floating-point
    input is rejected with ValueError; convert it with ``to_pcm`` first.
    """

    def __init__(
        self,
        samples: np.ndarray,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        sample_format: Union[str, SampleFormat] = DEFAULT_SAMPLE_FORMAT,
        loop: bool = False,
    ):
        super().__init__(sample_rate, sample_format)
        samples = np.asarray(samples)
        if np.issubdtype(samples.dtype, np.floating):
            raise ValueError(
                "ArraySource expects raw PCM integers, got floating-point samples; "
                "convert with to_pcm() first"
            )
        self.samples = samples.astype(self.sample_format.dtype, copy=False)
        self.loop = loop
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return not self.loop and self.position >= len(self.samples)

    def read_into(self, block: np.ndarray) -> None:
        if len(self.samples) == 0 or self.exhausted:
            raise EndOfStream(f"No samples left after {self.position}")

        needed = len(block)
        filled = 0
        while filled < needed:
            if self.position >= len(self.samples):
                if not self.loop:
                    block[filled:] = 0
                    return
                self.position = 0
            chunk = self.samples[self.position:self.position + needed - filled]
            block[filled:filled + len(chunk)] = chunk
            filled += len(chunk)
            self.position += len(chunk)

    def rewind(self) -> None:
        self.position = 0


class FileSource(ArraySource):
    """Plays an audio file back as raw PCM blocks.

    The file is decoded with librosa (resampled, mono) and re-encoded to the
    configured PCM format so it takes the same path as captured audio.
    """

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        path: Union[str, Path],
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        sample_format: Union[str, SampleFormat] = DEFAULT_SAMPLE_FORMAT,
        loop: bool = False,
    ):
        """
        Load an audio file.

        Args:
            path: Path to audio file
            sample_rate: Target sample rate for resampling
            sample_format: PCM encoding of served blocks
            loop: Restart from the beginning instead of ending

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(str(path), sr=sample_rate, mono=True)
        fmt = get_sample_format(sample_format)
        super().__init__(to_pcm(audio, fmt), sr, fmt, loop=loop)
        self.path = path
        logger.debug("Loaded %s: %d samples at %d Hz", path, len(audio), sr)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return len(self.samples) / self.sample_rate


class MicrophoneSource(AudioSource):
    """Captures mono PCM from an input device using sounddevice."""

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        sample_format: Union[str, SampleFormat] = DEFAULT_SAMPLE_FORMAT,
        device: Optional[Union[int, str]] = None,
        blocksize: int = 0,
    ):
        super().__init__(sample_rate, sample_format)
        self.device = device
        self.blocksize = blocksize
        self._stream = None

    def open(self) -> "MicrophoneSource":
        if self._stream is not None:
            return self

        import sounddevice as sd

        self._stream = sd.InputStream(
            samplerate=self.sample_rate,
            channels=1,
            dtype=self.sample_format.dtype.name,
            device=self.device,
            blocksize=self.blocksize,
        )
        self._stream.start()
        logger.info(
            "Recording from %s at %d Hz (%s)",
            self.device if self.device is not None else "default device",
            self.sample_rate,
            self.sample_format.name,
        )
        return self

    def close(self) -> None:
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None

    def read_into(self, block: np.ndarray) -> None:
        if self._stream is None:
            self.open()
        data, overflowed = self._stream.read(len(block))
        if overflowed:
            logger.debug("Input overflow, samples were dropped")
        block[:] = data[:, 0]
