"""Exceptions raised by the PCM decoder and the WAV encoder."""


class AudioError(Exception):
    """Base exception for audio conversion errors."""

    pass


class DecodeError(AudioError):
    """Error raised when a transport payload cannot be turned into samples.

    Covers malformed base-64 and decoded byte counts that do not form whole
    16-bit samples. The payload is unusable and must not be retried.
    """

    pass


class EncodeError(AudioError):
    """Error raised when samples or their descriptor cannot be encoded.

    Covers non-finite sample values and invalid descriptors (channel count
    other than 1, bit depth other than 16, non-positive sample rate).
    """

    pass
