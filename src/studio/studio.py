"""Speech studio service.

This module orchestrates a generation:
1. Validate the request (GenerationSettings)
2. Request speech from the provider (base-64 PCM)
3. Decode and encode to a WAV container
4. Record the clip in the session history

A clip is only recorded when every step succeeds; failures propagate to the
caller and leave the history untouched.
"""

import logging
from pathlib import Path
from typing import Optional

from src.config import get_settings
from src.studio.history import SessionHistory
from src.studio.models import GenerationSettings, HistoryItem
from src.studio.tts.base import TTSProvider
from src.studio.tts.factory import create_tts_provider

logger = logging.getLogger(__name__)

TEXT_FILE_SUFFIXES = {".txt"}


class SpeechStudio:
    """Generates speech clips and keeps them in a session history."""

    def __init__(
        self,
        tts_provider: Optional[TTSProvider] = None,
        history: Optional[SessionHistory] = None,
    ) -> None:
        """Initialize studio.

        Args:
            tts_provider: Speech provider instance. If None, creates from settings.
            history: Session history. If None, creates one bounded by
                settings.studio.history_limit.
        """
        self.settings = get_settings()
        self.tts_provider = tts_provider if tts_provider is not None else create_tts_provider()
        if history is None:
            history = SessionHistory(max_items=self.settings.studio.history_limit)
        self.history = history
        self._initialized = False

    async def start(self) -> None:
        """Initialize the provider."""
        if self._initialized:
            return
        await self.tts_provider.initialize()
        self._initialized = True

    async def stop(self) -> None:
        """Release provider resources."""
        if not self._initialized:
            return
        try:
            await self.tts_provider.cleanup()
        finally:
            self._initialized = False

    def default_settings(self, text: str) -> GenerationSettings:
        """Build generation settings from the configured defaults."""
        defaults = self.settings.studio
        return GenerationSettings(
            text=text,
            voice_id=defaults.voice_id,
            accent=defaults.accent,
            style=defaults.style,
            speed=defaults.speed,
            pitch=defaults.pitch,
        )

    async def generate(self, settings: GenerationSettings) -> HistoryItem:
        """Generate a clip and add it to the history.

        Args:
            settings: Validated generation settings.

        Returns:
            The new history entry.

        Raises:
            TTSError: If the provider fails.
            DecodeError: If the provider payload is unusable.
            EncodeError: If encoding fails.
        """
        logger.info(f"Generating speech for {settings.word_count} word(s)")
        try:
            blob = await self.tts_provider.synthesize(settings)
        except Exception as e:
            logger.error(f"Generation failed: {e}")
            raise

        item = HistoryItem.from_generation(settings, blob)
        self.history.add(item)
        return item

    def save_latest(self, directory: Optional[str | Path] = None) -> Path:
        """Save the most recent clip to directory (defaults to settings.audio.output_dir)."""
        return self.history.save_latest(directory or self.settings.audio.output_dir)

    @staticmethod
    def load_text(path: str | Path) -> str:
        """Read text to synthesize from a plain-text file.

        Raises:
            ValueError: If the file is not a .txt file.
            FileNotFoundError: If the file does not exist.
        """
        path = Path(path)
        if path.suffix.lower() not in TEXT_FILE_SUFFIXES:
            raise ValueError(f"Please select a plain-text (.txt) file, got {path.name}")
        return path.read_text(encoding="utf-8")
