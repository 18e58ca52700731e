"""Unit tests for the voice catalog and prompt construction."""

import pytest

from src.studio.models import GenerationSettings
from src.studio.prompts import build_prompt, describe_accent, describe_pitch, describe_speed
from src.studio.voices import AVAILABLE_VOICES, Accent, Gender, Style, find_voice, list_voices


class TestVoiceCatalog:
    """Test the voice catalog."""

    def test_catalog_ids_unique(self) -> None:
        """Test every voice has its own ID."""
        ids = [voice.id for voice in AVAILABLE_VOICES]

        assert len(ids) == len(set(ids)) == 10

    def test_female_voices_first(self) -> None:
        """Test female voices are listed before male voices."""
        genders = [voice.gender for voice in AVAILABLE_VOICES]

        assert genders == [Gender.FEMALE] * 5 + [Gender.MALE] * 5

    def test_prebuilt_voices(self) -> None:
        """Test every voice maps onto a known prebuilt voice."""
        assert {voice.prebuilt_voice for voice in AVAILABLE_VOICES} <= {"Puck", "Charon", "Kore", "Fenrir", "Zephyr"}

    def test_find_voice(self) -> None:
        """Test lookup by ID."""
        voice = find_voice("m3")

        assert voice.name == "Leonardo"
        assert voice.prebuilt_voice == "Charon"

    @pytest.mark.parametrize("voice_id", ["unknown", "", None])
    def test_find_voice_fallback(self, voice_id) -> None:
        """Test unknown IDs fall back to the first voice."""
        assert find_voice(voice_id) is AVAILABLE_VOICES[0]

    def test_list_voices_by_gender(self) -> None:
        """Test gender filter."""
        males = list_voices(Gender.MALE)

        assert len(males) == 5
        assert all(voice.gender == Gender.MALE for voice in males)
        assert len(list_voices()) == 10

    def test_voice_to_dict(self) -> None:
        """Test dictionary form has id and name keys."""
        data = find_voice("f2").to_dict()

        assert data["id"] == "f2"
        assert data["name"] == "Camila"
        assert data["gender"] == "Mujer"


class TestDescriptions:
    """Test speed, pitch and accent descriptions."""

    @pytest.mark.parametrize(
        "speed, fragment",
        [
            (0.5, "extremadamente lenta"),
            (0.6, "extremadamente lenta"),
            (0.7, "muy lenta"),
            (0.8, "muy lenta"),
            (0.9, "un poco más lenta"),
            (1.0, "natural y estándar"),
            (1.1, "ligeramente animada"),
            (1.2, "rápida, dinámica"),
            (1.3, "rápida, dinámica"),
            (1.5, "muy rápida"),
            (1.7, "extremadamente rápida"),
            (2.0, "extremadamente rápida"),
        ],
    )
    def test_describe_speed(self, speed: float, fragment: str) -> None:
        """Test speed thresholds."""
        assert fragment in describe_speed(speed)

    @pytest.mark.parametrize(
        "pitch, fragment",
        [
            (-10, "extremadamente grave"),
            (-8, "extremadamente grave"),
            (-7, "muy grave"),
            (-5, "muy grave"),
            (-1, "ligeramente más grave"),
            (0, "tono natural"),
            (1, "ligeramente más agudo"),
            (4, "ligeramente más agudo"),
            (6, "agudo y juvenil"),
            (8, "muy agudo"),
            (10, "muy agudo"),
        ],
    )
    def test_describe_pitch(self, pitch: int, fragment: str) -> None:
        """Test pitch thresholds."""
        assert fragment in describe_pitch(pitch)

    def test_describe_accent(self) -> None:
        """Test known accents use the accent table."""
        assert "Rioplatense" in describe_accent(Accent.ARGENTINA)
        assert "limeño" in describe_accent("Perú")

    def test_describe_unknown_accent(self) -> None:
        """Test unknown accents get a generic instruction."""
        assert describe_accent("Chile") == "Español con acento de Chile"


class TestBuildPrompt:
    """Test build_prompt()."""

    def test_prompt_contents(self) -> None:
        """Test all five settings and the text end up in the prompt."""
        settings = GenerationSettings(
            text="Había una vez [pausa] un dragón.",
            voice_id="m3",
            accent=Accent.COLOMBIA,
            style=Style.STORYTELLER,
            speed=0.7,
            pitch=-6,
        )

        prompt = build_prompt(settings)

        assert "Español de Colombia" in prompt
        assert "ESTILO: Storyteller." in prompt
        assert "muy lenta, pausada y deliberada" in prompt
        assert "tono muy grave y resonante" in prompt
        assert "Voz grave, madura y narrativa" in prompt
        assert "[llanto]: Habla sollozando." in prompt
        assert prompt.endswith('"Había una vez [pausa] un dragón."')
