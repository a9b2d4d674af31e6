#!/usr/bin/env python3
"""
Shot history console client.
Connects to the machine, loads the shot list and prints it.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from shot_history.config import AppSettings
from shot_history.core.di_container import AppContainer
from shot_history.managers import HistoryView

logger = logging.getLogger("ShotHistory.Main")


def print_view(view: HistoryView) -> None:
    print(view.status_label)
    for item in view.items:
        print(f"  {item.id}  {item.profile or '-'}  {item.duration_ms / 1000:.1f}s")
    if view.is_empty:
        print("  No shots available")
    elif view.show_load_more:
        print(f"  ({view.remaining} remaining)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shot-history")
    parser.add_argument("--config", default=None, help="Path to settings.yml")
    parser.add_argument("--uri", default=None, help="Machine WebSocket URI")
    parser.add_argument(
        "--pages", type=int, default=1, help="Number of pages to load (default 1)"
    )
    parser.add_argument("--delete", metavar="ID", default=None, help="Delete a shot by id")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


async def run(args: argparse.Namespace) -> int:
    settings = AppSettings.load(args.config)
    if args.uri:
        settings = replace(
            settings, connection=replace(settings.connection, uri=args.uri)
        )
    container = AppContainer.create(settings)
    loader = container.history_loader
    errors = []
    loader.on_error = lambda message, error: errors.append(message)

    gate = container.connectivity_manager
    gate.start()
    try:
        if not await container.client.connect():
            print(f"Could not connect to {settings.connection.uri}", file=sys.stderr)
            return 1
        await gate.wait_idle()

        if args.delete is not None:
            await loader.on_delete(args.delete)

        for _ in range(max(0, args.pages - 1)):
            if not await loader.load_more():
                break

        print_view(loader.view())
        return 1 if errors else 0
    finally:
        gate.stop()
        await container.client.close()


def main(argv=None) -> int:
    """Entry point"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Shot history client starting...")
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
