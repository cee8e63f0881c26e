"""Exceptions raised by QR code detection.

"Not found" and "not decoded" are ordinary results, not errors. These
exceptions cover bad input and failures inside OpenCV or a detector.
"""


class QRScanError(Exception):
    """Base class for all detection errors."""


class InvalidArgument(QRScanError, TypeError):
    """Input was neither an image path nor an encoded image buffer."""


class DecodeError(QRScanError, ValueError):
    """Input could not be read or parsed as an image."""


class InternalFailure(QRScanError, RuntimeError):
    """A preprocessing primitive or the detector raised unexpectedly.

    The underlying exception is available as __cause__.
    """
