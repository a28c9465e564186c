class SignpostError(Exception):
    """Base exception for the Signpost project."""


class ConfigError(SignpostError):
    """Raised when the UI configuration cannot be read or fails validation."""
