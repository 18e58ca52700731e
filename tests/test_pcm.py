"""Unit tests for base-64 PCM decoding and sample conversion."""

import base64

import numpy as np
import pytest

from src.studio.audio import DecodeError, decode_pcm16, float_to_pcm16, pcm16_to_float


class TestDecodePcm16:
    """Test decode_pcm16()."""

    def test_decode_boundary_samples(self) -> None:
        """Test 0, 32767 and -32768 decode to 0.0, just under 1.0 and -1.0."""
        payload = base64.b64encode(bytes([0x00, 0x00, 0xFF, 0x7F, 0x00, 0x80])).decode()

        samples = decode_pcm16(payload)

        assert samples.dtype == np.float32
        assert len(samples) == 3
        assert samples[0] == 0.0
        assert samples[1] == pytest.approx(0.999969482421875, abs=0)
        assert samples[2] == -1.0

    def test_decode_is_little_endian(self) -> None:
        """Test byte order: 0x01 0x00 is sample 1, not 256."""
        payload = base64.b64encode(bytes([0x01, 0x00, 0x00, 0x01])).decode()

        samples = decode_pcm16(payload)

        assert samples[0] == pytest.approx(1 / 32768)
        assert samples[1] == pytest.approx(256 / 32768)

    def test_decode_preserves_order(self, pcm_payload) -> None:
        """Test samples come out in payload order."""
        values = [-3, -2, -1, 0, 1, 2, 3]

        samples = decode_pcm16(pcm_payload(values))

        np.testing.assert_array_equal(samples * 32768, np.asarray(values, dtype=np.float32))

    def test_decode_empty_payload(self) -> None:
        """Test empty payload gives an empty buffer."""
        samples = decode_pcm16("")

        assert samples.dtype == np.float32
        assert len(samples) == 0

    def test_decode_odd_byte_count(self) -> None:
        """Test a trailing half sample is rejected, not dropped."""
        payload = base64.b64encode(b"\x00\x01\x02").decode()

        with pytest.raises(DecodeError, match="16-bit"):
            decode_pcm16(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            "AAE",  # length not a multiple of 4
            "@@@@",  # outside the alphabet
            "AA=A",  # padding in the middle
            "A===",  # too much padding
            "AAAA\n",  # whitespace
            "ÀÀÀÀ",  # non-ASCII
        ],
    )
    def test_decode_invalid_base64(self, payload: str) -> None:
        """Test malformed base-64 raises DecodeError."""
        with pytest.raises(DecodeError):
            decode_pcm16(payload)

    def test_decode_non_string(self) -> None:
        """Test a non-string payload raises DecodeError."""
        with pytest.raises(DecodeError, match="string"):
            decode_pcm16(None)  # type: ignore[arg-type]


class TestSampleConversion:
    """Test float/int16 conversion helpers."""

    def test_pcm16_to_float_divides_by_32768(self) -> None:
        """Test normalization constant."""
        result = pcm16_to_float(np.array([-32768, -16384, 0, 16384, 32767], dtype=np.int16))

        np.testing.assert_array_equal(
            result, np.array([-1.0, -0.5, 0.0, 0.5, 32767 / 32768], dtype=np.float32)
        )

    def test_float_to_pcm16_boundaries(self) -> None:
        """Test 1.0 -> 0x7FFF, -1.0 -> 0x8000, 0.0 -> 0."""
        result = float_to_pcm16(np.array([1.0, -1.0, 0.0]))

        assert result.dtype == np.dtype("<i2")
        assert result.tolist() == [32767, -32768, 0]
        assert result.tobytes() == bytes([0xFF, 0x7F, 0x00, 0x80, 0x00, 0x00])

    def test_float_to_pcm16_clamps(self) -> None:
        """Test out-of-range values clamp to the extremes."""
        result = float_to_pcm16(np.array([1.5, -1.5, 100.0, -100.0]))

        assert result.tolist() == [32767, -32768, 32767, -32768]

    def test_float_to_pcm16_rounds_half_away_from_zero(self) -> None:
        """Test rounding policy on exact halves and near-halves."""
        step = 1 / 32768
        result = float_to_pcm16(np.array([0.5 * step, -0.5 * step, 0.4 * step, -0.4 * step, 1.5 * step]))

        assert result.tolist() == [1, -1, 0, 0, 2]

    def test_decoded_samples_convert_back_exactly(self) -> None:
        """Test every 16-bit value survives int -> float -> int."""
        values = np.arange(-32768, 32768, dtype=np.int16)

        result = float_to_pcm16(pcm16_to_float(values))

        np.testing.assert_array_equal(result, values)
