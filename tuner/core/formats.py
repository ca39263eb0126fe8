"""PCM sample encodings understood by the normalizer."""

from dataclasses import dataclass
from typing import Dict, Union
import numpy as np

from .errors import ConfigError


@dataclass(frozen=True)
class SampleFormat:
    """A signed integer PCM encoding.

    Attributes:
        name: Short identifier used in configuration ('pcm16', ...)
        dtype: Native numpy dtype of one sample
    """

    name: str
    dtype: np.dtype

    @property
    def min_value(self) -> int:
        return int(np.iinfo(self.dtype).min)

    @property
    def max_value(self) -> int:
        return int(np.iinfo(self.dtype).max)

    @property
    def divisor(self) -> float:
        """Maximum magnitude of the encoding, -(minimum representable value)."""
        return float(-self.min_value)

    @property
    def sample_width(self) -> int:
        """Bytes per sample."""
        return self.dtype.itemsize


SAMPLE_FORMATS: Dict[str, SampleFormat] = {
    "pcm8": SampleFormat("pcm8", np.dtype(np.int8)),
    "pcm16": SampleFormat("pcm16", np.dtype(np.int16)),
    "pcm32": SampleFormat("pcm32", np.dtype(np.int32)),
}


def get_sample_format(sample_format: Union[str, SampleFormat]) -> SampleFormat:
    """Resolve a format name (or pass a SampleFormat through)."""
    if isinstance(sample_format, SampleFormat):
        return sample_format
    try:
        return SAMPLE_FORMATS[sample_format.lower()]
    except KeyError:
        raise ConfigError(
            f"Unknown sample format: {sample_format}. "
            f"Supported: {sorted(SAMPLE_FORMATS)}"
        ) from None
