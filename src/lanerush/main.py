"""
Main entry point for LANE RUSH.

Reads settings from the environment (``LANERUSH_*``, ``.env``) and
launches the pygame simulator for the configured variant.
"""

import asyncio
import logging
import random
import sys

from lanerush.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run one session inside the simulator window."""
    from lanerush.game.session import GameSession
    from lanerush.simulator.window import SimulatorWindow, WindowConfig

    session = GameSession(
        settings.mode,
        settings=settings,
        rng=random.Random(settings.seed),
    )
    config = WindowConfig(
        width=settings.window_width,
        height=settings.window_height,
        fullscreen=settings.fullscreen,
        fps=settings.fps,
        render_size=settings.render_size,
        title=f"LANE RUSH - {session.mode.display_name}",
    )
    window = SimulatorWindow(session, config=config)
    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()
    get_settings.cache_clear()
    settings = get_settings()

    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info(f"LANE RUSH starting ({settings.mode})...")

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("LANE RUSH stopped")


if __name__ == "__main__":
    main()
