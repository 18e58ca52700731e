"""Audio conversion module.

Turns the base-64 PCM payload returned by the speech service into a WAV
container that any standard player can open:

    payload (base-64) -> decode_pcm16 -> float32 samples -> encode_wav -> ContainerBlob
"""

from pydantic import ValidationError

from src.studio.audio.errors import AudioError, DecodeError, EncodeError
from src.studio.audio.pcm import decode_pcm16, float_to_pcm16, pcm16_to_float
from src.studio.audio.wav import AudioDescriptor, ContainerBlob, encode_wav

DEFAULT_SAMPLE_RATE = 24000


def synthesize_to_container(payload: str, sample_rate: int = DEFAULT_SAMPLE_RATE) -> ContainerBlob:
    """Decode a transport payload and encode it as a mono 16-bit WAV container.

    Args:
        payload: Base-64 encoded mono 16-bit little-endian PCM.
        sample_rate: Sample rate of the PCM in Hz.

    Returns:
        The encoded container.

    Raises:
        DecodeError: If the payload is malformed.
        EncodeError: If the sample rate is invalid.
    """
    samples = decode_pcm16(payload)
    try:
        descriptor = AudioDescriptor(sample_rate=sample_rate)
    except ValidationError as e:
        raise EncodeError(f"Invalid sample rate: {sample_rate!r}") from e
    return encode_wav(samples, descriptor)


__all__ = [
    "AudioDescriptor",
    "AudioError",
    "ContainerBlob",
    "DEFAULT_SAMPLE_RATE",
    "DecodeError",
    "EncodeError",
    "decode_pcm16",
    "encode_wav",
    "float_to_pcm16",
    "pcm16_to_float",
    "synthesize_to_container",
]
