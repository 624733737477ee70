#!/usr/bin/env python3
"""Main entry point for the catalog player."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from catalog_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from catalog_player.config.container import Container

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        from catalog_player.utils.logging import console_handler

        logging.basicConfig(level=resolved_level, handlers=[console_handler()])
        logging.warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )

    logging.getLogger().setLevel(resolved_level)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    from catalog_player.application.services.session_controller import DEFAULT_PREFERENCES

    parser = argparse.ArgumentParser(
        description="Search the track catalog and optionally preview the results.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "daft punk"                  # Print the first page
  %(prog)s "daft punk" --pages 2        # Also load two more pages
  %(prog)s --preference Chill           # Browse a preference instead of a search
  %(prog)s jazz --play-seconds 10       # Preview from the first track for 10s
        """,
    )
    parser.add_argument("query", nargs="?", default="", help="free-text search")
    parser.add_argument(
        "--preference",
        choices=[p.name for p in DEFAULT_PREFERENCES],
        default=None,
        help="preference used when the search text is empty",
    )
    parser.add_argument(
        "--pages",
        "-p",
        type=int,
        default=0,
        help="number of additional pages to load (default: 0)",
    )
    parser.add_argument(
        "--play-seconds",
        type=float,
        default=0.0,
        help="preview playback from the first track for this many seconds",
    )
    return parser


async def run_session(container: Container, args: argparse.Namespace) -> int:
    from catalog_player.application.services.session_controller import DEFAULT_PREFERENCES

    logger = logging.getLogger(__name__)
    session = container.session_controller
    fetcher = container.pagination_fetcher

    try:
        preference = next((p for p in DEFAULT_PREFERENCES if p.name == args.preference), None)
        task = session.update(search_text=args.query, preference=preference)
        if task is None:
            print("Nothing to search: give a query or a --preference.", file=sys.stderr)
            return 2
        await task

        for _ in range(max(args.pages, 0)):
            task = session.load_more()
            if task is None:
                break
            await task

        for number, track in enumerate(fetcher.catalog.tracks, start=1):
            print(f"{number:>3}. {track.display_title}")
        print(
            f"{len(fetcher.catalog)} tracks for {fetcher.query!r}"
            f" (more available: {'yes' if fetcher.has_more else 'no'})"
        )

        if fetcher.last_error is not None:
            logger.error(LogTemplates.APP_FATAL_ERROR, fetcher.last_error.message)
            return 1

        if args.play_seconds > 0 and not fetcher.catalog.is_empty:
            playback = container.playback_queue
            await playback.play_at(0)
            await asyncio.sleep(args.play_seconds)
            track = playback.current_track
            state = playback.state
            if track is not None:
                print(
                    f"{state.status.value}: {track.display_title}"
                    f" [{state.current_time:.1f}s / {state.duration:.1f}s]"
                )
        return 0
    finally:
        await container.shutdown()


def main(argv: list[str] | None = None) -> int:
    from catalog_player.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)
    args = build_parser().parse_args(argv)

    logger = logging.getLogger(__name__)
    logger.info(LogTemplates.APP_STARTING.format(environment=settings.environment))

    from catalog_player.config.container import create_container

    container = create_container(settings)

    try:
        return asyncio.run(run_session(container, args))
    except KeyboardInterrupt:
        logger.info(LogTemplates.APP_STOPPED)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.APP_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
