"""CLI entry point for the gig scraper."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gigscraper.core.config import ScraperSettings
from gigscraper.core.errors import UnknownPlatformError
from gigscraper.core.schemas import ScrapeResult
from gigscraper.pipeline.orchestrator import ScraperOrchestrator


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Freelance gig scraper - extract job listings from marketplaces",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- scrape subcommand (default) ---
    scrape_parser = subparsers.add_parser("scrape", help="Scrape job listings")
    scrape_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml, optional)",
    )
    scrape_parser.add_argument(
        "--platform",
        action="append",
        dest="platforms",
        help="Platform id to scrape (repeatable; default: all registered)",
    )
    scrape_parser.add_argument("--keyword", help="Search keyword")
    scrape_parser.add_argument("--category", help="Platform category slug")
    scrape_parser.add_argument(
        "--tags",
        nargs="+",
        help="Tags used as the keyword when --keyword is not given",
    )
    scrape_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["csv", "json", "both"],
        help="Output format (overrides config)",
    )
    scrape_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- platforms subcommand ---
    platforms_parser = subparsers.add_parser(
        "platforms",
        help="List supported platforms and their categories",
    )
    platforms_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    if argv is None:
        argv = sys.argv[1:]
    # Default to scrape when no subcommand given
    if not argv or argv[0] not in ("scrape", "platforms", "-h", "--help"):
        argv = ["scrape", *argv]

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(args: argparse.Namespace) -> ScraperSettings:
    """Load YAML settings if the file exists, then apply CLI overrides."""
    path = Path(args.config)
    settings = ScraperSettings.from_yaml(path) if path.exists() else ScraperSettings()

    overrides: dict[str, Any] = {}
    if args.platforms:
        overrides["platforms"] = args.platforms
    if args.output_format:
        overrides["output_format"] = args.output_format

    filter_overrides: dict[str, Any] = {}
    if args.keyword:
        filter_overrides["keyword"] = args.keyword
    if args.category:
        filter_overrides["category"] = args.category
    if args.tags:
        filter_overrides["tags"] = args.tags
    if filter_overrides:
        overrides["search_filters"] = {
            **settings.search_filters.model_dump(),
            **filter_overrides,
        }

    if not overrides:
        return settings
    return ScraperSettings.model_validate({**settings.model_dump(), **overrides})


def print_summary(orchestrator: ScraperOrchestrator, results: list[ScrapeResult]) -> None:
    statistics = orchestrator.get_statistics(results)
    print(
        f"\nScraping complete: {statistics.total_jobs} jobs from "
        f"{statistics.successful_platforms}/{statistics.total_platforms} platforms."
    )
    for r in results:
        status = "OK" if r.success else "FAILED"
        print(f"  {r.platform}: {len(r.jobs)} jobs [{status}] ({r.search_query})")
        for error in r.errors:
            print(f"    error: {error}")
    if statistics.top_skills:
        print("Top skills:")
        for entry in statistics.top_skills:
            print(f"  {entry.skill}: {entry.count}")


async def run(settings: ScraperSettings) -> list[ScrapeResult]:
    orchestrator = ScraperOrchestrator(settings)
    try:
        results = await orchestrator.scrape_all(settings.search_filters)
    finally:
        await orchestrator.cleanup()
    print_summary(orchestrator, results)
    return results


def cmd_platforms() -> None:
    """Handle platforms subcommand."""
    orchestrator = ScraperOrchestrator()
    for platform in orchestrator.supported_platforms():
        print(platform)
        for category in orchestrator.supported_categories(platform):
            print(f"  - {category}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "platforms":
        cmd_platforms()
        return

    try:
        settings = load_settings(args)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run(settings))
    except UnknownPlatformError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
