"""Factory for creating speech provider instances.

This module provides a factory function to create and configure the speech
provider based on application settings.
"""

import logging
from typing import Optional

from src.config import get_settings
from src.config.settings import AudioSettings, GeminiSettings
from src.studio.models import GenerationSettings
from src.studio.tts.base import TTSConfigurationError, TTSProvider
from src.studio.tts.gemini_tts import GeminiTTSProvider

logger = logging.getLogger(__name__)


def create_tts_provider(
    gemini: Optional[GeminiSettings] = None, audio: Optional[AudioSettings] = None
) -> TTSProvider:
    """Create and configure the speech provider from settings.

    Args:
        gemini: Optional Gemini settings. If None, uses get_settings().gemini.
        audio: Optional audio settings. If None, uses get_settings().audio.

    Returns:
        Configured provider instance.

    Raises:
        TTSConfigurationError: If the API key is missing.
    """
    if gemini is None or audio is None:
        settings = get_settings()
        gemini = gemini or settings.gemini
        audio = audio or settings.audio

    if not gemini.api_key:
        raise TTSConfigurationError("Gemini provider requires GEMINI_API_KEY to be set.")

    logger.debug(f"Creating Gemini provider for model {gemini.model}")
    return GeminiTTSProvider(
        api_key=gemini.api_key,
        model=gemini.model,
        endpoint=gemini.endpoint,
        timeout=gemini.timeout,
        max_retries=gemini.max_retries,
        sample_rate=audio.sample_rate,
    )


async def health_check(provider: TTSProvider) -> bool:
    """Check if the provider can generate speech.

    Args:
        provider: Provider instance to check.

    Returns:
        True if a short test phrase produced audio, False otherwise.
    """
    try:
        blob = await provider.synthesize(GenerationSettings(text="prueba"))
        return blob.sample_count > 0
    except Exception as e:
        logger.warning(f"Speech provider health check failed: {e}")
        return False
