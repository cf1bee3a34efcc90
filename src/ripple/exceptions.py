"""Custom exceptions for Ripple."""


class RippleError(Exception):
    """Base exception for all Ripple errors."""


class ConfigError(RippleError):
    """Configuration-related errors."""


class InspectorError(RippleError):
    """A source file could not be read or parsed."""

    def __init__(self, file_path: str, message: str):
        super().__init__(f"{file_path}: {message}")
        self.file_path = file_path


class AnalysisError(RippleError):
    """Impact analysis could not be started."""
