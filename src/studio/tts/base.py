"""Base interface for speech generation providers.

This module defines the abstract base class that speech providers must
implement. Providers return the raw transport payload (base-64 encoded mono
16-bit PCM); turning it into a WAV container is shared by all providers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from src.studio.audio import ContainerBlob, synthesize_to_container
from src.studio.models import GenerationSettings
from src.studio.voices import Gender

logger = logging.getLogger(__name__)


class TTSError(Exception):
    """Base exception for speech generation errors."""

    pass


class TTSProviderError(TTSError):
    """Error raised when the speech service request fails."""

    pass


class TTSEmptyAudioError(TTSProviderError):
    """Error raised when the speech service responds without audio content."""

    pass


class TTSConfigurationError(TTSError):
    """Error raised when a provider is missing required configuration (e.g. API key)."""

    pass


class TTSProvider(ABC):
    """Abstract base class for speech generation providers.

    The audio returned by every provider is:
    - Format: base-64 encoded linear PCM, no header
    - Sample format: signed 16-bit little-endian
    - Channels: Mono (1 channel)
    - Sample rate: provider.sample_rate (24kHz for Gemini)
    """

    sample_rate: int = 24000

    @abstractmethod
    async def generate_payload(self, settings: GenerationSettings) -> str:
        """Request speech for the given settings.

        Args:
            settings: Validated generation settings.

        Returns:
            Base-64 transport payload of mono 16-bit PCM.

        Raises:
            TTSProviderError: If the request fails or returns no audio.
        """
        pass

    @abstractmethod
    async def list_voices(self, gender: Optional[Gender] = None) -> list[dict]:
        """List available voices.

        Args:
            gender: Optional gender to filter voices.

        Returns:
            List of voice dictionaries with at least 'id' and 'name' keys.
        """
        pass

    async def synthesize(self, settings: GenerationSettings) -> ContainerBlob:
        """Generate speech and package it as a WAV container.

        Args:
            settings: Validated generation settings.

        Returns:
            Encoded WAV container.

        Raises:
            TTSProviderError: If the request fails.
            DecodeError: If the payload is not usable PCM.
            EncodeError: If the provider sample rate is invalid.
        """
        payload = await self.generate_payload(settings)
        blob = synthesize_to_container(payload, self.sample_rate)
        logger.info(f"Synthesized {blob.duration:.2f}s of audio ({len(blob)} bytes)")
        return blob

    async def initialize(self) -> None:
        """Initialize the provider (open connections, etc.).

        Default implementation does nothing.
        """
        pass

    async def cleanup(self) -> None:
        """Release provider resources. Default implementation does nothing."""
        pass

    @property
    def is_initialized(self) -> bool:
        """Check if provider is initialized and ready to use.

        Default implementation returns True (assumes ready after __init__).
        """
        return True
