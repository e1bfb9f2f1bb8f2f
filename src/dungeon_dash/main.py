"""
Main entry point for DUNGEON DASH.

Loads settings (environment / .env), applies command line overrides and
launches the pygame window.
"""

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from dungeon_dash.audio.engine import get_audio_engine
from dungeon_dash.core.events import Event, EventBus
from dungeon_dash.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Dungeon Dash arcade runner.")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible spawns.")
    parser.add_argument(
        "--variant",
        choices=["classic", "dash", "brawler"],
        help="Ruleset: classic (jump only), dash (fast-fall) or brawler (attack).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--no-audio", action="store_true", help="Disable sound effects.")
    parser.add_argument("--fullscreen", action="store_true", help="Run fullscreen.")
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command line flags layered on top."""
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.variant:
        overrides["variant"] = args.variant
    if args.debug:
        overrides["debug"] = True
    if args.no_audio:
        overrides["audio_enabled"] = False

    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def _trace_event(event: Event) -> None:
    logger.debug(f"{event.source}: {event.type.name} {event.data}")


async def run_game(settings: Settings, fullscreen: bool = False) -> None:
    """Run the desktop version."""
    from dungeon_dash.simulator.window import GameWindow, WindowConfig

    event_bus = EventBus()
    if settings.debug:
        event_bus.subscribe_all(_trace_event)

    audio = None
    if settings.audio_enabled:
        audio = get_audio_engine()
        if audio.init():
            audio.attach(event_bus)
        else:
            logger.warning("Continuing without audio")
            audio = None

    window = GameWindow(
        settings,
        config=WindowConfig(fullscreen=fullscreen),
        event_bus=event_bus,
        audio=audio,
    )
    await window.run()


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    setup_logging(settings.debug)

    logger.info(f"Starting Dungeon Dash (variant={settings.variant}, seed={settings.seed})")
    try:
        asyncio.run(run_game(settings, fullscreen=args.fullscreen))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
