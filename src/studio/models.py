"""Generation settings and history models.

This module defines Pydantic models for validating generation requests and
for the clips kept in the session history.
"""

import math
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from src.studio.audio.wav import ContainerBlob
from src.studio.voices import Accent, Style

MAX_WORDS = 15000
SNIPPET_LENGTH = 100
SUPPORTED_TAGS = ("[pausa]", "[risa]", "[grito]", "[llanto]")


class VoiceControls(BaseModel):
    """Voice, accent, style, speed and pitch selected for a generation."""

    voice_id: str = Field(default="f1", description="Catalog voice ID")
    accent: Accent = Field(default=Accent.PERU, description="Accent to speak with")
    style: Style = Field(default=Style.NATURAL, description="Speaking style")
    speed: float = Field(default=1.0, ge=0.5, le=2.0, description="Speed multiplier (0.5-2.0)")
    pitch: int = Field(default=0, ge=-10, le=10, description="Pitch offset (-10 to 10)")


class GenerationSettings(VoiceControls):
    """A complete generation request: controls plus the text to read."""

    text: str = Field(..., description="Text to read aloud")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject blank text and text over the word limit."""
        if not v.strip():
            raise ValueError("Text cannot be empty")
        word_count = len(v.split())
        if word_count > MAX_WORDS:
            raise ValueError(f"Text has {word_count} words, the limit is {MAX_WORDS}")
        return v

    @property
    def word_count(self) -> int:
        """Number of whitespace-separated words in the text."""
        return len(self.text.split())

    def without_text(self) -> VoiceControls:
        """Return the controls without the text, as stored in the history."""
        return VoiceControls(**self.model_dump(exclude={"text"}))


class HistoryItem(BaseModel):
    """A generated clip in the session history."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Unique clip ID")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Generation time (UTC)"
    )
    text_snippet: str = Field(..., description="Beginning of the generated text")
    settings: VoiceControls = Field(..., description="Controls used for the generation")
    audio: ContainerBlob = Field(..., description="Encoded WAV audio")

    @classmethod
    def from_generation(cls, settings: GenerationSettings, audio: ContainerBlob) -> "HistoryItem":
        """Create a history entry for a successful generation."""
        return cls(
            text_snippet=make_snippet(settings.text),
            settings=settings.without_text(),
            audio=audio,
        )

    @property
    def duration(self) -> float:
        """Clip duration in seconds."""
        return self.audio.duration

    @property
    def filename(self) -> str:
        """Default download file name."""
        return f"voice-gen-{self.id}.wav"


def make_snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    """Shorten text for display, appending '...' when truncated."""
    if len(text) > length:
        return text[:length] + "..."
    return text


def insert_tag(text: str, tag: str) -> str:
    """Append an inline performance tag such as '[pausa]' to the text.

    Raises:
        ValueError: If the tag is not supported.
    """
    if tag not in SUPPORTED_TAGS:
        raise ValueError(f"Unsupported tag: {tag}. Supported tags: {list(SUPPORTED_TAGS)}")
    return f"{text} {tag} "


def speed_to_ui(speed: float) -> int:
    """Map a speed multiplier (0.5-2.0) onto the -10..10 slider scale.

    The slow half is twice as fine-grained as the fast half:
    0.5 -> -10, 1.0 -> 0, 2.0 -> 10. Halves round up.
    """
    if speed == 1.0:
        return 0
    if speed < 1.0:
        return math.floor((speed - 1) * 20 + 0.5)
    return math.floor((speed - 1) * 10 + 0.5)


def ui_to_speed(value: int) -> float:
    """Map a -10..10 slider value back onto a speed multiplier."""
    if value == 0:
        return 1.0
    if value < 0:
        return 1 + value / 20
    return 1 + value / 10
