"""Decoding of base-64 transport payloads into normalized PCM samples.

The speech service returns mono 16-bit little-endian linear PCM without any
header, wrapped in base-64. This module turns that payload into a float32
sample buffer and holds the integer/float conversions shared with the WAV
encoder.
"""

import base64
import binascii
import logging

import numpy as np

from src.studio.audio.errors import DecodeError

logger = logging.getLogger(__name__)

PCM16_FULL_SCALE = 32768.0
PCM16_MIN = -32768
PCM16_MAX = 32767

# Signed 16-bit little-endian, independent of host byte order
PCM16_DTYPE = np.dtype("<i2")


def pcm16_to_float(pcm: np.ndarray) -> np.ndarray:
    """Normalize signed 16-bit samples to float32 in [-1.0, 1.0).

    Every sample is divided by 32768, so -32768 maps to exactly -1.0 and
    32767 maps to 0.999969482421875.

    Args:
        pcm: Array of 16-bit integer samples.

    Returns:
        float32 array of the same length.
    """
    return (np.asarray(pcm, dtype=np.float32) / np.float32(PCM16_FULL_SCALE)).astype(np.float32)


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Convert finite float samples to signed 16-bit little-endian integers.

    Samples are clamped to [-1.0, 1.0], scaled by 32768 and rounded half away
    from zero. The positive half saturates at 32767, so 1.0 maps to 0x7FFF,
    -1.0 maps to 0x8000, and every value produced by pcm16_to_float converts
    back to the integer it came from.

    Args:
        samples: 1-D array of finite floats.

    Returns:
        Array with dtype '<i2'.
    """
    clamped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    scaled = clamped * PCM16_FULL_SCALE
    rounded = np.sign(scaled) * np.floor(np.abs(scaled) + 0.5)
    return np.clip(rounded, PCM16_MIN, PCM16_MAX).astype(PCM16_DTYPE)


def decode_base64(payload: str) -> bytes:
    """Strictly decode a base-64 payload into raw PCM bytes.

    Args:
        payload: Base-64 text as returned by the speech service.

    Returns:
        Decoded bytes. The length is always even.

    Raises:
        DecodeError: If the payload is not valid base-64 or does not decode
            to whole 16-bit samples.
    """
    if not isinstance(payload, str):
        raise DecodeError(f"Transport payload must be a string, got {type(payload).__name__}")

    if len(payload) % 4 != 0:
        raise DecodeError(f"Base-64 payload length must be a multiple of 4, got {len(payload)}")

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base-64 payload: {e}") from e

    if len(raw) % 2 != 0:
        raise DecodeError(
            f"Decoded payload has {len(raw)} bytes, which is not a whole number of 16-bit samples"
        )

    return raw


def decode_pcm16(payload: str) -> np.ndarray:
    """Decode a base-64 transport payload into a normalized sample buffer.

    Args:
        payload: Base-64 encoded mono 16-bit little-endian PCM.

    Returns:
        float32 array with one sample per 2 decoded bytes, in playback order.

    Raises:
        DecodeError: If the payload is malformed or has an odd byte count.
    """
    raw = decode_base64(payload)
    samples = pcm16_to_float(np.frombuffer(raw, dtype=PCM16_DTYPE))
    logger.debug(f"Decoded {len(samples)} samples from {len(raw)} payload bytes")
    return samples
