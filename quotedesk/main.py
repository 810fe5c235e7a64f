"""Quote Desk - Main Entry Point with CLI Commands.

Supports:
- companies: List the company directory
- quote: Fetch the latest quote for a symbol
- logo: Download the logo for a symbol
- dashboard: Launch the Streamlit dashboard
"""

import argparse
import asyncio
import subprocess
import sys
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

from loguru import logger

from quotedesk.app.logic.quote_display import format_number
from quotedesk.app.logic.services import open_services
from quotedesk.config.settings import DEFAULT_CONFIG_PATH, load_config
from quotedesk.core.config import configure_logging, get_settings
from quotedesk.core.exceptions import FetchError

DASHBOARD_SCRIPT = Path(__file__).parent / "app" / "00_Quotes.py"


async def _list_companies(args: argparse.Namespace) -> None:
    async with open_services(get_settings(), load_config(args.config)) as services:
        directory = await services.directory_loader.load()

    logger.info(f"Found {len(directory)} companies:")
    for index, name in enumerate(directory.names):
        print(f"{index:>3}  {directory.symbol_for(name):<8} {name}")


async def _show_quote(args: argparse.Namespace) -> None:
    async with open_services(get_settings(), load_config(args.config)) as services:
        quote = await services.fetcher.fetch_quote(args.symbol)

    print(f"{quote.company_name} ({quote.symbol})")
    print(f"  Price:  {format_number(quote.latest_price)}")
    print(f"  Change: {format_number(quote.change)} [{quote.trend.value}]")


async def _save_logo(args: argparse.Namespace) -> None:
    async with open_services(get_settings(), load_config(args.config)) as services:
        image = await services.fetcher.fetch_logo(args.symbol)

    output = Path(args.output) if args.output else Path(f"{args.symbol}.png")
    output.write_bytes(image)
    logger.success(f"✅ Saved logo for {args.symbol} to {output}")


def cmd_companies(args: argparse.Namespace) -> None:
    """List the company directory."""
    logger.info("=== Loading Company Directory ===")
    _run(_list_companies(args))


def cmd_quote(args: argparse.Namespace) -> None:
    """Fetch and print the latest quote."""
    _run(_show_quote(args))


def cmd_logo(args: argparse.Namespace) -> None:
    """Download a company logo."""
    _run(_save_logo(args))


def cmd_dashboard(args: argparse.Namespace) -> None:
    """Launch the Streamlit dashboard."""
    logger.info(f"Starting dashboard from {DASHBOARD_SCRIPT}")
    result = subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(DASHBOARD_SCRIPT)],
        check=False,
    )
    sys.exit(result.returncode)


def _run(coro: Coroutine[Any, Any, None]) -> None:
    try:
        asyncio.run(coro)
    except FetchError as e:
        logger.error(f"Request failed: {e}")
        sys.exit(1)


def main() -> None:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Quote Desk - Live stock quotes from IEX Cloud",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML configuration (default: {DEFAULT_CONFIG_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # Companies command
    parser_companies = subparsers.add_parser("companies", help="List the company directory")
    parser_companies.set_defaults(func=cmd_companies)

    # Quote command
    parser_quote = subparsers.add_parser("quote", help="Fetch the latest quote for a symbol")
    parser_quote.add_argument("symbol", help="Ticker symbol (e.g., AAPL)")
    parser_quote.set_defaults(func=cmd_quote)

    # Logo command
    parser_logo = subparsers.add_parser("logo", help="Download the logo for a symbol")
    parser_logo.add_argument("symbol", help="Ticker symbol, case sensitive (e.g., AAPL)")
    parser_logo.add_argument(
        "--output",
        type=str,
        help="Target file (default: <SYMBOL>.png in the current directory)",
    )
    parser_logo.set_defaults(func=cmd_logo)

    # Dashboard command
    parser_dashboard = subparsers.add_parser("dashboard", help="Launch the Streamlit dashboard")
    parser_dashboard.set_defaults(func=cmd_dashboard)

    # Parse arguments and execute
    args = parser.parse_args()
    configure_logging(get_settings().log_level)
    args.func(args)


if __name__ == "__main__":
    main()
