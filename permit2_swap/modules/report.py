"""
Human-readable reporting of aggregator data

Formatting only; nothing here affects settlement.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from ..types.quote import Route, TokenMetadata, Quote, LiquiditySource

logger = logging.getLogger(__name__)


def format_bps_percent(bps: Union[int, str]) -> str:
    """Basis points as a percentage with two decimals ("5000" -> "50.00%")"""
    return f"{Decimal(int(bps)) / Decimal(100):.2f}%"


def format_sources(sources: Iterable[LiquiditySource], chain_name: str = "Scroll") -> str:
    names = ", ".join(s.name for s in sources)
    return f"Liquidity sources for {chain_name} chain: {names}"


def format_liquidity_sources(route: Route) -> List[str]:
    """Per-source breakdown of a route"""
    if not route.fills:
        return ["No liquidity sources found."]

    lines = [f"{len(route.fills)} Sources"]
    for fill in route.fills:
        lines.append(f"{fill.source}: {format_bps_percent(fill.proportion_bps)}")
    return lines


def format_token_taxes(metadata: Optional[TokenMetadata]) -> List[str]:
    """Buy token taxes; zero taxes are not reported"""
    if metadata is None:
        return []

    lines = []
    if metadata.buy_token.buy_tax_bps > 0:
        lines.append(f"Buy Token Buy Tax: {format_bps_percent(metadata.buy_token.buy_tax_bps)}")
    if metadata.buy_token.sell_tax_bps > 0:
        lines.append(f"Buy Token Sell Tax: {format_bps_percent(metadata.buy_token.sell_tax_bps)}")
    return lines


def format_monetization(quote: Quote) -> List[str]:
    """Affiliate fee and collected surplus"""
    lines = []
    if quote.affiliate_fee_bps:
        lines.append(f"Affiliate Fee: {format_bps_percent(quote.affiliate_fee_bps)}")
    if quote.surplus_amount > 0:
        lines.append(f"Trade Surplus Collected: {quote.trade_surplus}")
    return lines


def format_quote(quote: Quote) -> List[str]:
    """All report lines for a firm quote"""
    return (
        format_liquidity_sources(quote.route)
        + format_token_taxes(quote.token_metadata)
        + format_monetization(quote)
    )


def log_lines(lines: Iterable[str], log: Optional[logging.Logger] = None) -> None:
    log = log or logger
    for line in lines:
        log.info(line)
