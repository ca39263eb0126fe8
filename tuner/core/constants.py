"""Global constants for Glass Tuner."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Tuning reference
REFERENCE_PITCH = 440.0  # A4
REFERENCE_MIDI = 69  # A4

# Capture defaults
DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CAPTURE_LENGTH = 2048
DEFAULT_DETECTION_LENGTH = 1024
DEFAULT_SAMPLE_FORMAT = "pcm16"

# Detection defaults
ABSOLUTE_THRESHOLD = 0.125  # YIN paper suggests 0.10-0.15
MIN_AUDIBLE_FREQUENCY = 10.0  # Hz
DEFAULT_DIFFERENCE_METHOD = "direct"

# Display cadence
DEFAULT_CADENCE_MS = 250

# Status shown when no reliable pitch was found
UNKNOWN_STATUS = "?"
