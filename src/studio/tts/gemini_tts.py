"""Gemini speech generation provider.

This module calls the Gemini generateContent REST endpoint with an audio
response modality. The model answers with base-64 encoded raw PCM (mono,
16-bit little-endian, 24kHz) inside the first candidate's inline data.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from src.studio.models import GenerationSettings
from src.studio.prompts import build_prompt
from src.studio.tts.base import (
    TTSConfigurationError,
    TTSEmptyAudioError,
    TTSProvider,
    TTSProviderError,
)
from src.studio.voices import Gender, find_voice, list_voices

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash-preview-tts"


class GeminiTTSProvider(TTSProvider):
    """Speech provider backed by the Gemini TTS model.

    Handles authentication, prompt construction, retries with exponential
    backoff and extraction of the audio payload from the response.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: int = 60,
        max_retries: int = 3,
        sample_rate: int = 24000,
    ) -> None:
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key.
            model: Model name. Defaults to gemini-2.5-flash-preview-tts.
            endpoint: Base URL of the models endpoint.
            timeout: Request timeout in seconds. Defaults to 60.
            max_retries: Maximum number of request attempts. Defaults to 3.
            sample_rate: Sample rate of the returned PCM (Hz). Defaults to 24000.

        Raises:
            TTSConfigurationError: If the API key is missing.
        """
        if not api_key:
            raise TTSConfigurationError("Gemini API key is not set. Set GEMINI_API_KEY.")

        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.sample_rate = sample_rate

    def _get_url(self) -> str:
        return f"{self.endpoint}/{self.model}:generateContent"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    def _get_request_payload(self, prompt: str, voice_name: str) -> dict:
        """Get request body for the generateContent call.

        Args:
            prompt: Full instruction prompt including the text to read.
            voice_name: Gemini prebuilt voice name.

        Returns:
            Request payload dictionary.
        """
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {
                        "prebuiltVoiceConfig": {"voiceName": voice_name},
                    },
                },
            },
        }

    @staticmethod
    def _extract_audio(data: dict[str, Any]) -> str:
        """Pull the base-64 audio out of a generateContent response.

        Raises:
            TTSEmptyAudioError: If the response carries no audio data.
        """
        try:
            audio = data["candidates"][0]["content"]["parts"][0]["inlineData"]["data"]
        except (KeyError, IndexError, TypeError) as e:
            raise TTSEmptyAudioError("No audio content generated.") from e

        if not audio:
            raise TTSEmptyAudioError("No audio content generated.")
        return audio

    async def _make_request(self, payload: dict) -> dict[str, Any]:
        """Make API request with retry logic.

        Args:
            payload: Request body.

        Returns:
            Decoded JSON response.

        Raises:
            TTSProviderError: If the request fails after retries.
        """
        url = self._get_url()
        headers = self._get_headers()

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)
                    response.raise_for_status()
                    return response.json()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status == 429 or status >= 500:
                    last_error = e
                    if attempt + 1 < self.max_retries:
                        wait_time = 2 ** attempt
                        logger.warning(f"Gemini returned {status}, retrying in {wait_time}s...")
                        await asyncio.sleep(wait_time)
                    continue
                # Client error, don't retry
                logger.error(f"Gemini request rejected with status {status}")
                raise TTSProviderError(f"API request failed: {e}") from e
            except httpx.RequestError as e:
                last_error = e
                if attempt + 1 < self.max_retries:
                    wait_time = 2 ** attempt
                    logger.warning(f"Request error ({e}), retrying in {wait_time}s...")
                    await asyncio.sleep(wait_time)
            except ValueError as e:
                raise TTSProviderError(f"Invalid JSON in API response: {e}") from e

        raise TTSProviderError(
            f"API request failed after {self.max_retries} attempts: {last_error}"
        ) from last_error

    async def generate_payload(self, settings: GenerationSettings) -> str:
        """Generate speech for the settings and return the base-64 PCM payload.

        Args:
            settings: Validated generation settings.

        Returns:
            Base-64 transport payload.

        Raises:
            TTSProviderError: If the request fails.
            TTSEmptyAudioError: If the response contains no audio.
        """
        voice = find_voice(settings.voice_id)
        prompt = build_prompt(settings)
        logger.info(
            f"Requesting speech: voice={voice.name} ({voice.prebuilt_voice}), "
            f"accent={settings.accent.value}, style={settings.style.value}, "
            f"words={settings.word_count}"
        )

        data = await self._make_request(self._get_request_payload(prompt, voice.prebuilt_voice))
        return self._extract_audio(data)

    async def list_voices(self, gender: Optional[Gender] = None) -> list[dict]:
        """List catalog voices available with this provider.

        Args:
            gender: Optional gender filter.

        Returns:
            List of voice dictionaries with 'id' and 'name' keys.
        """
        return [voice.to_dict() for voice in list_voices(gender)]
