"""Errors raised by the E-521 toolkit.

Every error is a ValueError, so callers that only care about "bad input"
can keep catching that.
"""


class E521Error(ValueError):
    """Base class for toolkit errors."""


class DecodingError(E521Error):
    """A byte buffer does not have the expected layout."""


class PointDecodingError(DecodingError):
    """A point encoding has the wrong length or does not describe a curve point."""


class CryptogramFormatError(DecodingError):
    """A cryptogram is too short to hold its fixed-size fields."""


class SignatureFormatError(DecodingError):
    """A signature encoding cannot be parsed."""


class PointNotFoundError(E521Error):
    """No curve point has the requested x coordinate."""


class AuthenticationError(E521Error):
    """The authentication tag of a cryptogram did not match."""
