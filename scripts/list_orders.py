#!/usr/bin/env python3
"""
List or fetch Poynt orders for a business.

Usage:
    # List the latest orders of a business
    python scripts/list_orders.py --business-id d308764d-... --limit 20

    # Filter by store and time window
    python scripts/list_orders.py --business-id d308764d-... --store-id abc --start-at 2025-01-01T00:00:00Z

    # Fetch a single order
    python scripts/list_orders.py --business-id d308764d-... --order-id 4f561b57-...

    # Force-complete an order
    python scripts/list_orders.py --business-id d308764d-... --order-id 4f561b57-... --force-complete

Requires POYNT_ACCESS_TOKEN (and optionally POYNT_API_URL) in the environment or .env.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.logging_config import setup_logging  # noqa: E402
from app.db.poynt_clients import OrderClient, PoyntRequestExecutor  # noqa: E402
from app.utils.error_handler import AppException, log_error  # noqa: E402
from app.version import version_string  # noqa: E402

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options."""
    parser = argparse.ArgumentParser(
        description="List or fetch Poynt orders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=version_string())
    parser.add_argument("--business-id", required=True, help="Poynt business id")
    parser.add_argument("--order-id", help="Fetch this order instead of listing")
    parser.add_argument("--store-id", help="Only orders for this store")
    parser.add_argument("--start-at", help="Fetch orders from this time")
    parser.add_argument("--end-at", help="Fetch orders until this time")
    parser.add_argument("--start-offset", type=int, help="Pagination offset")
    parser.add_argument("--limit", type=int, help="Number of orders to fetch")
    parser.add_argument(
        "--force-complete",
        action="store_true",
        help="Force-complete the order given by --order-id",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> dict:
    """Map parsed arguments to order client options, dropping unset ones."""
    options = {
        "businessId": args.business_id,
        "orderId": args.order_id,
        "storeId": args.store_id,
        "startAt": args.start_at,
        "endAt": args.end_at,
        "startOffset": args.start_offset,
        "limit": args.limit,
    }
    return {key: value for key, value in options.items() if value is not None}


async def run(args: argparse.Namespace):
    """Execute the requested order operation and return its result."""
    options = options_from_args(args)

    async with PoyntRequestExecutor() as executor:
        client = OrderClient(executor.request)

        if args.force_complete:
            return await client.send_cloud_order_complete(options)
        if args.order_id:
            return await client.get_order(options)
        return await client.list_orders(options)


async def main():
    """Main execution function."""
    parser = build_parser()
    args = parser.parse_args()

    if args.force_complete and not args.order_id:
        parser.error("--force-complete requires --order-id")

    setup_logging()

    try:
        result = await run(args)
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user")
        sys.exit(130)
    except AppException as e:
        log_error(e, context={"business_id": args.business_id})
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
