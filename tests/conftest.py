"""Shared pytest fixtures for testing."""

import base64
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np
import pytest

from src.studio.audio import AudioDescriptor, ContainerBlob, encode_wav
from src.studio.models import GenerationSettings
from src.studio.tts.base import TTSProvider

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch


class FakeTTSProvider(TTSProvider):
    """Provider returning a fixed payload instead of calling the API."""

    def __init__(self, payload: str = "", error: Optional[Exception] = None, sample_rate: int = 24000) -> None:
        self.payload = payload
        self.error = error
        self.sample_rate = sample_rate
        self.requests: list[GenerationSettings] = []
        self.initialized = False
        self.cleaned_up = False

    async def generate_payload(self, settings: GenerationSettings) -> str:
        self.requests.append(settings)
        if self.error is not None:
            raise self.error
        return self.payload

    async def list_voices(self, gender=None) -> list[dict]:
        return []

    async def initialize(self) -> None:
        self.initialized = True

    async def cleanup(self) -> None:
        self.cleaned_up = True


def encode_pcm16_payload(values: list[int]) -> str:
    """Encode integer samples as a base-64 little-endian 16-bit payload."""
    return base64.b64encode(np.asarray(values, dtype="<i2").tobytes()).decode("ascii")


@pytest.fixture(autouse=True, scope="function")
def mock_settings(monkeypatch: "MonkeyPatch", tmp_path: Path) -> None:
    """Mock settings for testing.

    This fixture is automatically applied to all tests (autouse=True).
    """
    monkeypatch.delenv("ENV_FILE", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-api-key")
    monkeypatch.setenv("AUDIO_OUTPUT_DIR", str(tmp_path / "output"))
    # Keep a stray .env in the working directory out of the tests
    monkeypatch.chdir(tmp_path)

    # Clear the global settings cache to force reload
    import src.config.settings as settings_module
    settings_module._settings = None


@pytest.fixture
def pcm_payload() -> Callable[[list[int]], str]:
    """Factory for base-64 PCM payloads."""
    return encode_pcm16_payload


@pytest.fixture
def generation_settings() -> GenerationSettings:
    """Generation settings with default controls."""
    return GenerationSettings(text="Hola, esto es una prueba.")


@pytest.fixture
def wav_blob() -> ContainerBlob:
    """A short 24kHz WAV clip."""
    samples = np.sin(2 * np.pi * 440 * np.arange(2400) / 24000).astype(np.float32) * 0.5
    return encode_wav(samples, AudioDescriptor(sample_rate=24000))


@pytest.fixture
def fake_provider() -> FakeTTSProvider:
    """Provider returning three samples: 0, 32767, -32768."""
    return FakeTTSProvider(payload=encode_pcm16_payload([0, 32767, -32768]))


@pytest.fixture
def make_provider() -> type[FakeTTSProvider]:
    """Factory for fake providers with a custom payload or error."""
    return FakeTTSProvider
