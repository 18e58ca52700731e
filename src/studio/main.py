"""Command-line entry point for the voice studio.

Generates speech from text or a .txt file, writes the WAV clip to the output
directory and lists the voice catalog.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from src.config import get_settings
from src.studio.audio import AudioError
from src.studio.models import GenerationSettings, speed_to_ui
from src.studio.studio import SpeechStudio
from src.studio.tts.base import TTSError
from src.studio.voices import Accent, Gender, Style, list_voices

logger = logging.getLogger(__name__)


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure logging for the application.

    Args:
        log_level: Optional log level override. If None, uses settings.log_level.
    """
    if log_level is None:
        try:
            log_level = get_settings().log_level
        except Exception:
            log_level = "INFO"

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("src.studio").setLevel(numeric_level)
    logging.getLogger("src.config").setLevel(numeric_level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Voice Studio - text to speech with Gemini",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate a clip with the default voice
  python -m src.studio.main generate --text "Hola, ¿cómo estás?"

  # Read the text from a file with a specific voice and accent
  python -m src.studio.main generate --text-file guion.txt --voice m3 --accent México

  # List female voices
  python -m src.studio.main voices --gender Mujer

  # Test configuration only
  python -m src.studio.main --dry-run
        """,
    )

    parser.add_argument(
        "--env-file",
        "--config",
        type=str,
        default=None,
        help="Path to environment file (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override log level (default: from settings)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Test configuration without generating audio",
    )

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate a speech clip")
    source = generate.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", type=str, help="Text to read aloud")
    source.add_argument("--text-file", type=Path, help="Plain-text (.txt) file to read aloud")
    generate.add_argument("--voice", type=str, default=None, help="Voice ID (see 'voices')")
    generate.add_argument(
        "--accent", type=str, choices=[a.value for a in Accent], default=None, help="Accent"
    )
    generate.add_argument(
        "--style", type=str, choices=[s.value for s in Style], default=None, help="Speaking style"
    )
    generate.add_argument("--speed", type=float, default=None, help="Speed multiplier (0.5-2.0)")
    generate.add_argument("--pitch", type=int, default=None, help="Pitch offset (-10 to 10)")
    generate.add_argument(
        "--output-dir", type=Path, default=None, help="Directory for the WAV file (default: from settings)"
    )

    voices = subparsers.add_parser("voices", help="List available voices")
    voices.add_argument(
        "--gender", type=str, choices=[g.value for g in Gender], default=None, help="Filter by gender"
    )

    return parser.parse_args(argv)


def build_generation_settings(args: argparse.Namespace, text: str) -> GenerationSettings:
    """Merge command-line overrides with the configured defaults."""
    defaults = get_settings().studio
    return GenerationSettings(
        text=text,
        voice_id=args.voice or defaults.voice_id,
        accent=args.accent or defaults.accent,
        style=args.style or defaults.style,
        speed=args.speed if args.speed is not None else defaults.speed,
        pitch=args.pitch if args.pitch is not None else defaults.pitch,
    )


def print_voices(gender: Optional[str] = None) -> None:
    """Print the voice catalog."""
    for voice in list_voices(Gender(gender) if gender else None):
        print(f"{voice.id:4} {voice.name:10} {voice.gender.value:7} {voice.base_tone_description}")


async def run_generate(args: argparse.Namespace) -> Path:
    """Generate one clip and save it.

    Returns:
        Path of the written WAV file.
    """
    text = SpeechStudio.load_text(args.text_file) if args.text_file else args.text
    settings = build_generation_settings(args, text)

    studio = SpeechStudio()
    await studio.start()
    try:
        item = await studio.generate(settings)
    finally:
        await studio.stop()

    path = studio.save_latest(args.output_dir)
    logger.info(
        f"Clip {item.id}: {item.duration:.2f}s, {settings.accent.value}, {settings.style.value}, "
        f"speed {settings.speed}x (slider {speed_to_ui(settings.speed)}), pitch {settings.pitch}"
    )
    return path


async def main(argv: Optional[list[str]] = None) -> int:
    """Main application entry point.

    Returns:
        Process exit code.
    """
    args = parse_arguments(argv)

    env_file = None
    if args.env_file:
        env_path = Path(args.env_file)
        if not env_path.exists():
            print(f"Environment file not found: {env_path}", file=sys.stderr)
            return 1
        env_file = str(env_path)
        os.environ["ENV_FILE"] = env_file

    setup_logging(args.log_level)

    if args.dry_run:
        logger.info("DRY RUN MODE: Testing configuration...")
        try:
            settings = get_settings(env_file=env_file)
            logger.info(f"  App Name: {settings.app_name}")
            logger.info(f"  Model: {settings.gemini.model}")
            logger.info(f"  API Key: {'set' if settings.gemini.api_key else 'MISSING'}")
            logger.info(f"  Sample Rate: {settings.audio.sample_rate} Hz")
            logger.info(f"  Output Dir: {settings.audio.output_dir}")
            logger.info("Configuration test passed!")
            return 0
        except Exception as e:
            logger.error(f"Configuration test failed: {e}", exc_info=True)
            return 1

    try:
        get_settings(env_file=env_file)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.command == "voices":
        print_voices(args.gender)
        return 0

    if args.command == "generate":
        try:
            path = await run_generate(args)
        except (TTSError, AudioError, ValueError, OSError) as e:
            logger.error(f"Could not generate audio: {e}")
            return 1
        print(path)
        return 0

    logger.error("No command given. Use 'generate' or 'voices' (see --help).")
    return 1


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    run()
