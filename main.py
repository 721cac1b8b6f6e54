#!/usr/bin/env python
"""CLI for District news ingestion."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from district_ingest.config import (
    create_from_config,
    create_sources,
    get_default_config_path,
    load_config,
)
from district_ingest.data import IngestResult

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    config: Path
    mode: Literal["single", "batch"] | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def report(result: IngestResult) -> None:
    """Log a human-readable summary of a run."""
    logger.info(f"\n{result.message}\n")
    for i, record in enumerate(result.inserted, 1):
        logger.info(f"{i}. {record.title}")
        logger.info(f"   Source: {record.source_name}")
        logger.info(f"   URL: {record.source_url}")
        logger.info(f"   Topic: {record.topic} | Tags: {', '.join(record.categories)}")
        logger.info(f"   Headline: {record.headline.headline} / {record.headline.subheadline}")

    logger.info("\n--- Sources ---")
    for diag in result.diagnostics:
        status = f"{len(diag.inserted_urls)} inserted" if diag.inserted_urls else diag.skip_reason
        feed = "feed" if diag.feed_found else "no feed"
        logger.info(f"{diag.source}: {diag.candidates_found} candidates ({feed}), {status}")
        if diag.error:
            logger.info(f"   Error: {diag.error}")

    usage = result.usage
    logger.info("\n--- Usage Summary ---")
    logger.info(f"HTTP requests: {usage.http_requests} ({usage.http_failures} failed)")
    logger.info(f"API calls: {len(usage.api_calls)}")
    logger.info(f"Input tokens: {usage.input_tokens:,}")
    logger.info(f"Output tokens: {usage.output_tokens:,}")


async def run(args: CLIArgs) -> bool:
    """Run one ingestion pass with the given configuration.

    Args:
        args: Validated CLI arguments.

    Returns:
        The run's ``ok`` flag.
    """
    config = load_config(args.config)
    options = config.options
    if args.mode:
        options = options.model_copy(update={"mode": args.mode})

    orchestrator, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    sources = create_sources(config.sources)

    logger.info(f"Ingesting from {len(sources)} sources ({options.mode} mode)")
    logger.info(f"Config: {args.config}")

    try:
        result = await orchestrator.run(sources, options)
    finally:
        await orchestrator.aclose()
    report(result)

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")
    return result.ok


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ingest news from configured publishers.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=get_default_config_path(),
        help="Path to YAML config file (default: the bundled configs/default.yaml)",
    )
    parser.add_argument(
        "--mode",
        choices=["single", "batch"],
        default=None,
        help="Override the run mode from the config",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable per-source run logging to a JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = build_parser()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()

    try:
        args = CLIArgs(config=ns.config, mode=ns.mode, log=ns.log, log_dir=ns.log_dir)
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        ok = asyncio.run(run(args))
    except (ValidationError, yaml.YAMLError) as e:
        logger.error(f"Invalid config {args.config}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
