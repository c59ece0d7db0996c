"""
Shop Metrics command line interface.

Generates one report for a date range and prints it as JSON.

Usage:
    shop-metrics {orders,products,collections,dashboard} --from YYYY-MM-DD --to YYYY-MM-DD [options]

Examples:
    shop-metrics orders --from 2024-01-01 --to 2024-01-31
    shop-metrics dashboard --from 2024-01-01 --to 2024-01-31 --export january.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

from shop_metrics.core.config import ShopifyConfig, get_settings
from shop_metrics.core.logging_config import setup_logging
from shop_metrics.domain.value_objects import DateRange
from shop_metrics.services.reports import (
    get_collection_stats,
    get_dashboard_report,
    get_financial_summary,
    get_product_stats,
)
from shop_metrics.utils.error_handler import ReportGenerationException, ValidationException

logger = logging.getLogger(__name__)

REPORTS: Dict[str, Callable[[DateRange, ShopifyConfig], Awaitable[Dict[str, Any]]]] = {
    "orders": get_financial_summary,
    "products": get_product_stats,
    "collections": get_collection_stats,
    "dashboard": get_dashboard_report,
}


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the report command."""
    parser = argparse.ArgumentParser(
        prog="shop-metrics",
        description="Generate Shopify sales reports for a date range",
    )
    parser.add_argument("report", choices=sorted(REPORTS), help="Report to generate")
    parser.add_argument("--from", dest="from_date", required=True, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="to_date", required=True, help="Inclusive end date (YYYY-MM-DD)")
    parser.add_argument("--export", metavar="FILE", help="Also write the JSON result to FILE")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


async def run(argv: Optional[List[str]] = None, config: Optional[ShopifyConfig] = None) -> int:
    """
    Parse arguments, generate the report and print it.

    Returns:
        int: Process exit code (0 ok, 1 report failure, 2 invalid input)
    """
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.verbose:
        settings = settings.model_copy(update={"LOG_LEVEL": "DEBUG"})
    setup_logging(settings, stream="ext://sys.stderr")

    try:
        date_range = DateRange.parse(args.from_date, args.to_date)
    except ValidationException as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    config = config or ShopifyConfig.from_settings(settings)

    try:
        result = await REPORTS[args.report](date_range, config)
    except ReportGenerationException as e:
        print(json.dumps({"error": e.message}), file=sys.stderr)
        return 1

    output = json.dumps(result, indent=2, ensure_ascii=False)
    print(output)

    if args.export:
        Path(args.export).write_text(output, encoding="utf-8")
        logger.info(f"Results exported to: {args.export}")

    return 0


def main() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(run()))
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
