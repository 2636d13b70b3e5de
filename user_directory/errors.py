"""Exception types raised by the directory core."""


class UserDirectoryError(Exception):
    """Base class for every error raised by this package."""


class PhotoValidationError(UserDirectoryError):
    """The uploaded file has a disallowed type, is too large, or is empty."""


class OptimizationError(UserDirectoryError):
    """The image could not be decoded, resized or re-encoded."""


class EncodingError(UserDirectoryError):
    """The photo bytes could not be read into a storable reference."""


class PersistenceError(UserDirectoryError):
    """The local key-value store could not be read or written."""
