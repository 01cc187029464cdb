"""
0x Swap API integration

Usage:
    from permit2_swap.protocols.zeroex import ZeroExAPI

    with ZeroExAPI() as api:
        quote = api.get_quote(request)
"""

from .api import ZeroExAPI, SOURCES_ENDPOINT, PRICE_ENDPOINT, QUOTE_ENDPOINT

__all__ = [
    "ZeroExAPI",
    "SOURCES_ENDPOINT",
    "PRICE_ENDPOINT",
    "QUOTE_ENDPOINT",
]
