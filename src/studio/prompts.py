"""Prompt construction for the speech generation model.

The model is steered with natural-language instructions rather than numeric
parameters, so slider values for speed and pitch are translated into
granular descriptions that change even for small slider movements.
"""

from src.studio.models import GenerationSettings
from src.studio.voices import Accent, find_voice

ACCENT_PROMPTS: dict[Accent, str] = {
    Accent.SPAIN: "Español de España (Castellano), pronunciación peninsular con distinción de s/z.",
    Accent.MEXICO: "Español de México, acento mexicano natural y auténtico.",
    Accent.ARGENTINA: "Español Rioplatense (Argentina), entonación característica y sheísmo marcado.",
    Accent.PERU: "Español de Perú, acento limeño neutro, claro y pausado.",
    Accent.COLOMBIA: "Español de Colombia, acento colombiano (bogotano/paisa) con entonación melódica.",
}


def describe_speed(speed: float) -> str:
    """Translate a speed multiplier (0.5-2.0) into a pacing instruction."""
    if speed <= 0.6:
        return "extremadamente lenta, arrastrando las palabras (slow motion)"
    if speed <= 0.8:
        return "muy lenta, pausada y deliberada"
    if speed < 1.0:
        return "un poco más lenta de lo normal, relajada"
    if speed == 1.0:
        return "velocidad de conversación natural y estándar"
    if speed <= 1.1:
        return "ligeramente animada y fluida"
    if speed <= 1.3:
        return "rápida, dinámica y ágil"
    if speed <= 1.6:
        return "muy rápida, apresurada y urgente"
    return "extremadamente rápida, casi frenética (fast paced)"


def describe_pitch(pitch: int) -> str:
    """Translate a pitch offset (-10 to 10) into a tone instruction."""
    if pitch <= -8:
        return "tono extremadamente grave y profundo (sub-bass)"
    if pitch <= -5:
        return "tono muy grave y resonante"
    if pitch < 0:
        return "tono ligeramente más grave de lo habitual"
    if pitch == 0:
        return "tono natural de la voz"
    if pitch <= 4:
        return "tono ligeramente más agudo y brillante"
    if pitch <= 7:
        return "tono agudo y juvenil"
    return "tono muy agudo y alto"


def describe_accent(accent: Accent | str) -> str:
    """Return the accent instruction, with a generic fallback for unknown accents."""
    try:
        return ACCENT_PROMPTS[Accent(accent)]
    except ValueError:
        value = accent.value if isinstance(accent, Accent) else accent
        return f"Español con acento de {value}"


def build_prompt(settings: GenerationSettings) -> str:
    """Build the voice-actor instructions sent to the model.

    Args:
        settings: Validated generation settings.

    Returns:
        Prompt text including the mandatory configuration, the inline tag
        instructions and the quoted text to read.
    """
    voice = find_voice(settings.voice_id)

    return f"""
Eres un actor de voz profesional. Tu tarea es leer el texto con las siguientes especificaciones EXACTAS.

CONFIGURACIÓN OBLIGATORIA:
1. IDIOMA Y ACENTO: {describe_accent(settings.accent)}. (Mantén este acento pase lo que pase).
2. ESTILO: {settings.style.value}.
3. VELOCIDAD: {describe_speed(settings.speed)}. (Esta instrucción sobrescribe cualquier descripción base de la voz).
4. TONO: {describe_pitch(settings.pitch)}.
5. VOZ BASE: {voice.base_tone_description}.

INSTRUCCIONES DE FORMATO:
- [pausa]: Haz una pausa clara de 2 segundos.
- [risa]: Ríete o di la frase riendo.
- [grito]: Grita o exclama con mucha fuerza.
- [llanto]: Habla sollozando.

TEXTO A LEER:
"{settings.text}"
""".strip()
