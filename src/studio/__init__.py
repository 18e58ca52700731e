"""Voice studio: text to speech with WAV output and a session history."""

# Import only lightweight models directly; providers pull in settings
from src.studio.models import GenerationSettings, HistoryItem, VoiceControls

__all__ = [
    "GenerationSettings",
    "HistoryItem",
    "VoiceControls",
    # Other exports available via direct imports
    # "SpeechStudio",
    # "SessionHistory",
    # "synthesize_to_container",
]
