"""
Command line entry point

    python -m permit2_swap --sell-token WETH --buy-token WSTETH --amount 0.1

Exit status: 0 when the swap was submitted or skipped, 1 when a stage
failed, 2 on configuration errors.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import config, setup_logging
from .errors import ConfigurationError, SignerError
from .modules.swap import SwapPipeline

logger = logging.getLogger("permit2_swap")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    trading = config.trading
    parser = argparse.ArgumentParser(
        prog="permit2_swap",
        description="Swap tokens through the 0x Permit2 API",
    )
    parser.add_argument("--sell-token", default=trading.sell_token, help="Sell token symbol or address")
    parser.add_argument("--buy-token", default=trading.buy_token, help="Buy token symbol or address")
    parser.add_argument("--amount", default=trading.sell_amount, help="Sell amount in token units, e.g. 0.1")
    parser.add_argument(
        "--affiliate-fee-bps",
        type=int,
        default=trading.affiliate_fee_bps,
        help="Affiliate fee in basis points (100 = 1%%)",
    )
    parser.add_argument(
        "--no-surplus",
        dest="surplus_collection",
        action="store_false",
        default=trading.surplus_collection,
        help="Disable trade surplus collection",
    )
    parser.add_argument(
        "--no-sources",
        dest="list_sources",
        action="store_false",
        help="Do not list liquidity sources before swapping",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.log_level:
        config.logging.log_level = args.log_level
    setup_logging()

    try:
        pipeline = SwapPipeline.from_config(config)
    except (ConfigurationError, SignerError) as e:
        logger.error(f"Startup failed: {e}")
        return 2

    with pipeline:
        try:
            if args.list_sources:
                pipeline.list_liquidity_sources()
            request = pipeline.build_trade_request(
                args.sell_token,
                args.buy_token,
                args.amount,
                affiliate_fee_bps=args.affiliate_fee_bps,
                surplus_collection=args.surplus_collection,
            )
        except ConfigurationError as e:
            logger.error(f"Invalid trade: {e}")
            return 2
        except Exception as e:
            logger.error(f"Failed to prepare trade: {e}")
            return 1

        try:
            result = pipeline.execute(request)
        except Exception:
            logger.exception("Unexpected error during the swap process")
            return 1

    logger.info(str(result))
    return 1 if result.is_failed else 0


if __name__ == "__main__":
    sys.exit(main())
