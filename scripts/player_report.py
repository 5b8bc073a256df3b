#!/usr/bin/env python
"""
CLI entrypoint to run the player statistics operations without the chat agent.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List

from pitchside.analytics import CHART_TYPES
from pitchside.config import APISettings
from pitchside.services.player_stats import PlayerStatsGateway, ToolResult


LOGGER = logging.getLogger(__name__)


def _parse_categories(values: List[str] | None) -> List[int]:
    if not values:
        return []
    categories: List[int] = []
    for value in values:
        for token in value.split(","):
            token = token.strip()
            if token:
                categories.append(int(token))
    return categories


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search, analyse and compare football players from the command line.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--mock",
        dest="enable_mocks",
        action="store_const",
        const=True,
        help="Serve built-in fixtures instead of calling the provider.",
    )
    source.add_argument(
        "--live",
        dest="enable_mocks",
        action="store_const",
        const=False,
        help="Call the live provider (requires BESOC_API_KEY).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Find a player id by name.")
    search.add_argument("name", help="Player name or part of it.")

    analyze = commands.add_parser("analyze", help="Current and previous season statistics.")
    analyze.add_argument("player_id", type=int)

    history = commands.add_parser("history", help="Statistics aggregated over every season.")
    history.add_argument("player_id", type=int)

    compare = commands.add_parser("compare", help="Chart-ready comparison of two or more players.")
    compare.add_argument("player_ids", type=int, nargs="+")
    compare.add_argument("--chart", choices=CHART_TYPES, default="bar")
    compare.add_argument(
        "--category",
        "-c",
        action="append",
        help="Category id to compare. Supports multiple values or a comma separated list.",
    )
    return parser


async def _run(gateway: PlayerStatsGateway, args: argparse.Namespace) -> ToolResult:
    if args.command == "search":
        return await gateway.search_players(args.name)
    if args.command == "analyze":
        return await gateway.analyze_player(args.player_id)
    if args.command == "history":
        return await gateway.analyze_historical_stats(args.player_id)
    return await gateway.compare_players(
        args.player_ids,
        args.chart,
        _parse_categories(args.category),
    )


def main(argv: List[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    level = getattr(logging, str(args.log_level).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = APISettings.from_env()
    gateway = PlayerStatsGateway(settings=settings, enable_mocks=args.enable_mocks)
    LOGGER.info("Running '%s' against the %s provider", args.command, gateway.source)

    result = asyncio.run(_run(gateway, args))
    if isinstance(result, str):
        print(result)
        return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    if isinstance(result, dict) and result.get("status") == "no_statistics":
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
