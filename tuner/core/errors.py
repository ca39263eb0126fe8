"""Exception types for Glass Tuner."""


class TunerError(Exception):
    """Base class for tuner errors."""


class ConfigError(TunerError, ValueError):
    """Raised when a configuration cannot be used to build a pipeline."""


class EndOfStream(TunerError, EOFError):
    """Raised by finite audio sources once every block has been served."""
