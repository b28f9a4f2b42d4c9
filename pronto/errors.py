"""Custom exceptions."""


class ProntoError(Exception):
    """Base exception for pronto."""


class InvalidConfigError(ProntoError):
    """Raised when the configuration file is incomplete or malformed."""


class InvalidScheduleError(ProntoError):
    """Raised when target schedule text cannot be parsed."""


class InvalidStampError(ProntoError):
    """Raised when a stamp argument cannot be turned into an entry or exit."""
