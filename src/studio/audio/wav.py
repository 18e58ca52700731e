"""WAV container encoding for normalized PCM sample buffers.

Produces the canonical 44-byte RIFF/WAVE header followed by signed 16-bit
little-endian samples:

    offset  size  field
    0       4     "RIFF"
    4       4     36 + data length
    8       4     "WAVE"
    12      4     "fmt "
    16      4     16 (fmt chunk size)
    20      2     1 (linear PCM)
    22      2     channel count
    24      4     sample rate
    28      4     byte rate
    32      2     block align
    34      2     bits per sample
    36      4     "data"
    40      4     data length
    44      n     samples
"""

import logging
import struct
from pathlib import Path
from typing import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from src.studio.audio.errors import EncodeError
from src.studio.audio.pcm import float_to_pcm16

logger = logging.getLogger(__name__)

WAV_HEADER_SIZE = 44
WAV_MIME_TYPE = "audio/wav"
PCM_FORMAT_CODE = 1
FMT_CHUNK_SIZE = 16

_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


class AudioDescriptor(BaseModel):
    """Describes how a sample buffer is interpreted and encoded."""

    model_config = ConfigDict(frozen=True)

    sample_rate: int = Field(..., description="Samples per second (Hz)")
    channel_count: int = Field(default=1, description="Number of channels (only mono is supported)")
    bit_depth: int = Field(default=16, description="Bits per sample (only 16 is supported)")

    @property
    def bytes_per_sample(self) -> int:
        """Bytes used by one sample of one channel."""
        return self.bit_depth // 8

    @property
    def block_align(self) -> int:
        """Bytes per frame across all channels."""
        return self.channel_count * self.bytes_per_sample

    @property
    def byte_rate(self) -> int:
        """Bytes of audio data per second."""
        return self.sample_rate * self.block_align


class ContainerBlob(BaseModel):
    """An encoded WAV file owned by the caller."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Complete WAV file contents")
    sample_rate: int = Field(..., description="Sample rate written into the header")
    sample_count: int = Field(..., description="Number of samples in the data chunk")
    mime_type: str = Field(default=WAV_MIME_TYPE, description="MIME type of the container")

    @property
    def data_length(self) -> int:
        """Length of the data chunk in bytes."""
        return len(self.data) - WAV_HEADER_SIZE

    @property
    def duration(self) -> float:
        """Playback duration in seconds."""
        return self.sample_count / self.sample_rate

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def save(self, path: str | Path) -> Path:
        """Write the container to disk.

        Args:
            path: Destination file path. Parent directories are created.

        Returns:
            Path of the written file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        logger.info(f"Saved {len(self.data)} bytes of WAV audio to {path}")
        return path


def _validate_descriptor(descriptor: AudioDescriptor) -> None:
    if not isinstance(descriptor, AudioDescriptor):
        raise EncodeError(f"Expected AudioDescriptor, got {type(descriptor).__name__}")
    if descriptor.channel_count != 1:
        raise EncodeError(f"Only mono audio is supported, got {descriptor.channel_count} channels")
    if descriptor.bit_depth != 16:
        raise EncodeError(f"Only 16-bit audio is supported, got {descriptor.bit_depth} bits")
    if descriptor.sample_rate <= 0:
        raise EncodeError(f"Sample rate must be positive, got {descriptor.sample_rate}")


def _as_sample_array(samples: Sequence[float] | np.ndarray) -> np.ndarray:
    try:
        array = np.asarray(samples)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Samples are not a numeric buffer: {e}") from e

    if array.ndim != 1:
        raise EncodeError(f"Samples must be a 1-D buffer, got {array.ndim} dimensions")
    if array.size and array.dtype.kind not in "iuf":
        raise EncodeError(f"Samples must be real numbers, got dtype {array.dtype}")

    array = array.astype(np.float64)
    if not np.all(np.isfinite(array)):
        bad = int(np.count_nonzero(~np.isfinite(array)))
        raise EncodeError(f"Samples contain {bad} non-finite value(s)")
    return array


def build_header(data_length: int, descriptor: AudioDescriptor) -> bytes:
    """Build the 44-byte RIFF/WAVE header for a data chunk of the given size.

    Raises:
        EncodeError: If a field does not fit its 16- or 32-bit slot.
    """
    try:
        return _HEADER_STRUCT.pack(
            b"RIFF",
            36 + data_length,
            b"WAVE",
            b"fmt ",
            FMT_CHUNK_SIZE,
            PCM_FORMAT_CODE,
            descriptor.channel_count,
            descriptor.sample_rate,
            descriptor.byte_rate,
            descriptor.block_align,
            descriptor.bit_depth,
            b"data",
            data_length,
        )
    except struct.error as e:
        raise EncodeError(f"Header field out of range: {e}") from e


def encode_wav(samples: Sequence[float] | np.ndarray, descriptor: AudioDescriptor) -> ContainerBlob:
    """Encode a normalized sample buffer into a WAV container.

    Args:
        samples: 1-D buffer of finite floats, nominally in [-1.0, 1.0].
            Finite values outside the range are clamped.
        descriptor: Sample rate and format of the output.

    Returns:
        ContainerBlob of exactly 44 + 2 * len(samples) bytes.

    Raises:
        EncodeError: If the descriptor is invalid or a sample is NaN or infinite.
    """
    _validate_descriptor(descriptor)
    array = _as_sample_array(samples)

    pcm = float_to_pcm16(array).tobytes()
    header = build_header(len(pcm), descriptor)

    blob = ContainerBlob(
        data=header + pcm,
        sample_rate=descriptor.sample_rate,
        sample_count=len(array),
    )
    logger.debug(f"Encoded {blob.sample_count} samples at {blob.sample_rate} Hz into {len(blob)} bytes")
    return blob
