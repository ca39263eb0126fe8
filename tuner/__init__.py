"""Glass Tuner - Real-time monophonic pitch detection.

Architecture Layers:
    1. core/      - Note type, configuration, constants, errors
    2. input/     - Audio sources and PCM sample normalization
    3. analysis/  - YIN pitch detection and note mapping
    4. pipeline/  - Detection cycle driver and display sinks
"""

__version__ = "0.1.0"

# Core types
from .core import Note, TunerConfig, TunerError, ConfigError, EndOfStream

# Input layer
from .input import (
    normalize,
    normalize_bytes,
    AudioSource,
    ArraySource,
    FileSource,
    MicrophoneSource,
)

# Analysis layer
from .analysis import YinPitchDetector, PitchEstimate, NoteMapper, detect, map_to_note

# Pipeline layer
from .pipeline import PipelineDriver, CycleResult, ConsoleDisplay, LogDisplay

__all__ = [
    # Core
    "Note",
    "TunerConfig",
    "TunerError",
    "ConfigError",
    "EndOfStream",
    # Input
    "normalize",
    "normalize_bytes",
    "AudioSource",
    "ArraySource",
    "FileSource",
    "MicrophoneSource",
    # Analysis
    "YinPitchDetector",
    "PitchEstimate",
    "NoteMapper",
    "detect",
    "map_to_note",
    # Pipeline
    "PipelineDriver",
    "CycleResult",
    "ConsoleDisplay",
    "LogDisplay",
]
