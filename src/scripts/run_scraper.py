#!/usr/bin/env python3
"""
Main execution script for the YC Companies Scraper
"""

import sys
import time
import logging
import argparse
from pathlib import Path
from typing import List, Optional

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

# flake8: noqa: E402
from src.scraper.config import ScraperConfig, load_credentials  # type: ignore
from src.scraper.errors import ExtractionError  # type: ignore
from src.scraper.formatter import count_jobs  # type: ignore
from src.scraper.yc_extractor import YCDataExtractor  # type: ignore
from src.utils.logging_utils import (  # type: ignore
    log_execution_time,
    log_extraction_stats,
    setup_logging,
)
from src.utils.paths import get_jobs_csv_path, get_output_path  # type: ignore
from src.utils.raw_storage import save_companies_json, save_jobs_csv  # type: ignore


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract YC Work at a Startup companies")
    parser.add_argument(
        "--max-companies",
        type=int,
        default=None,
        help="Number of companies to extract (defaults to sources.yc.max_companies)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output JSON path (defaults to data/yc_companies_data.json)",
    )
    parser.add_argument(
        "--jobs-csv",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Also write a flat one-row-per-job CSV (optional path)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML config (defaults to config/scraper_config.yaml)",
    )
    return parser


@log_execution_time
def run_extraction(extractor: YCDataExtractor, max_companies: int) -> list:
    return extractor.extract_data(max_companies)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = _build_arg_parser().parse_args(argv)

    config = ScraperConfig(args.config)
    setup_logging(
        level=config.get("common.logging.level", "INFO"),
        log_file=config.get("common.logging.file"),
        log_format=config.get(
            "common.logging.format",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        ),
    )
    logger = logging.getLogger(__name__)

    # Apply CLI size override if provided
    if args.max_companies is not None:
        config.update("sources.yc.max_companies", args.max_companies)
        logger.info(f"Company count overridden via CLI: {args.max_companies}")
    max_companies = int(config.get("sources.yc.max_companies", 537))
    output_path = args.output or get_output_path(config)

    # Fail fast before any network call
    try:
        credentials = load_credentials()
    except EnvironmentError as e:
        logger.error(f"❌ Configuration error: {e}")
        return 1

    start_time = time.time()
    try:
        extractor = YCDataExtractor(credentials, config)
        data = run_extraction(extractor, max_companies)

        saved = save_companies_json(data, output_path)
        logger.info(f"✅ Data saved to {saved}")

        if args.jobs_csv is not None:
            csv_path = Path(args.jobs_csv) if args.jobs_csv else get_jobs_csv_path(config)
            logger.info(f"✅ Jobs CSV saved to {save_jobs_csv(data, csv_path)}")

        log_extraction_stats(len(data), count_jobs(data), time.time() - start_time, logger)
        return 0

    except ExtractionError as e:
        logger.error(f"❌ Extraction failed: {e}", exc_info=True)
        return 1
    except Exception as e:
        logger.error(f"❌ Fatal error in main execution: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
