"""
Exception types raised by the Fairplay core.

Classes:
    FairplayError: Base class for all library errors
    InvalidActionError: A history action or selection edit violated its contract
    ImageDecodeError: Bytes could not be decoded into a pixel buffer
    ImageEncodeError: A pixel buffer could not be encoded
"""


class FairplayError(Exception):
    """Base class for errors raised by FP_Libs."""


class InvalidActionError(FairplayError):
    """
    Raised when an action is applied against state it does not fit.

    Examples are removing an index that does not exist or applying options
    while nothing is selected. The session is left untouched.
    """


class ImageDecodeError(FairplayError):
    """Raised when image bytes cannot be decoded."""


class ImageEncodeError(FairplayError):
    """Raised when a pixel buffer cannot be encoded in the requested format."""
