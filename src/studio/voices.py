"""Voice catalog for the speech studio.

The studio exposes its own named voices and maps each of them onto one of
the Gemini prebuilt voices (Puck, Charon, Kore, Fenrir, Zephyr) plus a base
tone description that is injected into the generation prompt.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    """Voice gender as shown in the catalog."""

    MALE = "Hombre"
    FEMALE = "Mujer"


class Accent(str, Enum):
    """Spanish accents the model is asked to speak with."""

    SPAIN = "España"
    MEXICO = "México"
    ARGENTINA = "Argentina"
    PERU = "Perú"
    COLOMBIA = "Colombia"


class Style(str, Enum):
    """Speaking styles."""

    NATURAL = "Natural"
    JOYFUL = "Alegre"
    SAD = "Triste"
    WHISPER = "Susurrar"
    STORYTELLER = "Storyteller"


class VoiceOption(BaseModel):
    """A selectable voice and its mapping onto a prebuilt model voice."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Catalog voice ID")
    name: str = Field(..., description="Display name")
    gender: Gender = Field(..., description="Voice gender")
    prebuilt_voice: str = Field(..., description="Gemini prebuilt voice name")
    base_tone_description: str = Field(..., description="Tone description added to the prompt")

    def to_dict(self) -> dict:
        """Return the voice as a plain dictionary with 'id' and 'name' keys."""
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "prebuilt_voice": self.prebuilt_voice,
            "description": self.base_tone_description,
        }


# Female voices are listed first
AVAILABLE_VOICES: list[VoiceOption] = [
    VoiceOption(id="f1", name="Valentina", gender=Gender.FEMALE, prebuilt_voice="Kore",
                base_tone_description="Voz femenina clara y versátil"),
    VoiceOption(id="f2", name="Camila", gender=Gender.FEMALE, prebuilt_voice="Zephyr",
                base_tone_description="Voz femenina suave y tranquila"),
    VoiceOption(id="f3", name="Isabella", gender=Gender.FEMALE, prebuilt_voice="Kore",
                base_tone_description="Voz femenina dinámica y alegre"),
    VoiceOption(id="f4", name="Sofía", gender=Gender.FEMALE, prebuilt_voice="Zephyr",
                base_tone_description="Voz femenina profunda y profesional"),
    VoiceOption(id="f5", name="Mariana", gender=Gender.FEMALE, prebuilt_voice="Kore",
                base_tone_description="Voz femenina dulce y amable"),
    VoiceOption(id="m1", name="Mateo", gender=Gender.MALE, prebuilt_voice="Puck",
                base_tone_description="Voz masculina estándar y amigable"),
    VoiceOption(id="m2", name="Santiago", gender=Gender.MALE, prebuilt_voice="Fenrir",
                base_tone_description="Voz profunda, seria y autoritaria"),
    VoiceOption(id="m3", name="Leonardo", gender=Gender.MALE, prebuilt_voice="Charon",
                base_tone_description="Voz grave, madura y narrativa"),
    VoiceOption(id="m4", name="Diego", gender=Gender.MALE, prebuilt_voice="Puck",
                base_tone_description="Voz joven, rápida y enérgica"),
    VoiceOption(id="m5", name="Gabriel", gender=Gender.MALE, prebuilt_voice="Fenrir",
                base_tone_description="Voz suave, pausada y reflexiva"),
]


def find_voice(voice_id: Optional[str]) -> VoiceOption:
    """Look up a voice by ID, falling back to the first catalog voice."""
    for voice in AVAILABLE_VOICES:
        if voice.id == voice_id:
            return voice
    return AVAILABLE_VOICES[0]


def list_voices(gender: Optional[Gender] = None) -> list[VoiceOption]:
    """List catalog voices, optionally filtered by gender."""
    if gender is None:
        return list(AVAILABLE_VOICES)
    return [voice for voice in AVAILABLE_VOICES if voice.gender == gender]
