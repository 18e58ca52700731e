"""Speech generation module.

Providers return base-64 encoded mono 16-bit PCM, which is packaged into a
WAV container by TTSProvider.synthesize():
- Format: WAV (RIFF, linear PCM)
- Sample rate: 24kHz (24000 Hz)
- Channels: Mono (1 channel)
"""

from src.studio.tts.base import (
    TTSConfigurationError,
    TTSEmptyAudioError,
    TTSError,
    TTSProvider,
    TTSProviderError,
)
from src.studio.tts.factory import create_tts_provider, health_check
from src.studio.tts.gemini_tts import GeminiTTSProvider

__all__ = [
    "TTSProvider",
    "GeminiTTSProvider",
    "create_tts_provider",
    "health_check",
    "TTSError",
    "TTSProviderError",
    "TTSEmptyAudioError",
    "TTSConfigurationError",
]
