"""Sample normalization - raw PCM to a bounded floating-point waveform."""

from typing import Optional, Union
import numpy as np

from ..core.formats import SampleFormat, get_sample_format


def normalize(
    samples: np.ndarray,
    sample_format: Union[str, SampleFormat] = "pcm16",
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Convert integer PCM samples to floats in [-1.0, 1.0].

    Each sample is divided by the encoding's maximum magnitude (32768 for
    16-bit PCM) and clamped, since signed ranges are not symmetric.

    Args:
        samples: Raw integer samples
        sample_format: Encoding of the samples
        out: Optional float array of the same length to write into

    Returns:
        Normalized waveform (``out`` when given)
    """
    fmt = get_sample_format(sample_format)
    samples = np.asarray(samples)

    if out is None:
        out = np.empty(samples.shape, dtype=np.float64)
    elif out.shape != samples.shape:
        raise ValueError(
            f"Output shape {out.shape} does not match input shape {samples.shape}"
        )

    np.divide(samples, fmt.divisor, out=out)
    np.clip(out, -1.0, 1.0, out=out)
    return out


def normalize_bytes(
    data: bytes,
    sample_format: Union[str, SampleFormat] = "pcm16",
    byteorder: str = "little",
) -> np.ndarray:
    """
    Decode raw PCM bytes and normalize them.

    Args:
        data: Interleaved mono PCM bytes
        sample_format: Encoding of the samples
        byteorder: 'little' or 'big'

    Returns:
        Normalized waveform, one value per decoded sample

    Raises:
        ValueError: If the byte count is not a whole number of samples
    """
    fmt = get_sample_format(sample_format)
    if len(data) % fmt.sample_width:
        raise ValueError(
            f"Byte length {len(data)} is not a multiple of the "
            f"{fmt.name} sample width ({fmt.sample_width})"
        )
    if byteorder not in ("little", "big"):
        raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}")

    dtype = fmt.dtype.newbyteorder("<" if byteorder == "little" else ">")
    samples = np.frombuffer(data, dtype=dtype)
    return normalize(samples, fmt)


def to_pcm(
    waveform: np.ndarray,
    sample_format: Union[str, SampleFormat] = "pcm16",
) -> np.ndarray:
    """Encode a float waveform as integer PCM, saturating at the range limits."""
    fmt = get_sample_format(sample_format)
    scaled = np.round(np.asarray(waveform, dtype=np.float64) * fmt.divisor)
    return np.clip(scaled, fmt.min_value, fmt.max_value).astype(fmt.dtype)
