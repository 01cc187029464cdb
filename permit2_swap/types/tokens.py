"""
Token registry for the Scroll chain

Maps common token symbols to addresses so trades can be requested as
"WETH -> WSTETH" rather than raw addresses. Decimals listed here are only a
fallback; the pipeline reads decimals() from the token contract.
"""

from typing import Dict, Optional
from enum import Enum
from dataclasses import dataclass

from ..errors import ConfigurationError


class EVMChain(Enum):
    """Chains with a token registry"""
    SCROLL = 534352


@dataclass(frozen=True)
class EVMToken:
    """EVM token information"""
    address: str
    symbol: str
    decimals: int
    name: str = ""
    chain_id: int = EVMChain.SCROLL.value

    def __str__(self) -> str:
        return self.symbol


SCROLL_TOKENS: Dict[str, EVMToken] = {
    "WETH": EVMToken("0x5300000000000000000000000000000000000004", "WETH", 18, "Wrapped Ether"),
    "WSTETH": EVMToken("0xf610A9dfB7C89644979b4A0f27063E9e7d7Cda32", "WSTETH", 18, "Wrapped liquid staked Ether 2.0"),
    "USDC": EVMToken("0x06eFdBFf2a14a7c8E15944D1F4A48F9F95F663A4", "USDC", 6, "USD Coin"),
    "USDT": EVMToken("0xf55BEC9cafDbE8730f096Aa55dad6D22d44099Df", "USDT", 6, "Tether USD"),
}

_REGISTRY: Dict[int, Dict[str, EVMToken]] = {
    EVMChain.SCROLL.value: SCROLL_TOKENS,
}


def _is_address(value: str) -> bool:
    return value.startswith("0x") and len(value) == 42


def get_token(symbol: str, chain_id: int) -> Optional[EVMToken]:
    """Look up a token by symbol (case-insensitive); None when unknown"""
    return _REGISTRY.get(chain_id, {}).get(symbol.upper())


def get_token_symbol(address: str, chain_id: int) -> Optional[str]:
    """Reverse lookup of a token symbol by address"""
    for token in _REGISTRY.get(chain_id, {}).values():
        if token.address.lower() == address.lower():
            return token.symbol
    return None


def get_token_decimals(symbol_or_address: str, chain_id: int) -> int:
    """
    Registry decimals for a token symbol or address.

    Unknown tokens default to 18.
    """
    if _is_address(symbol_or_address):
        symbol = get_token_symbol(symbol_or_address, chain_id)
        if symbol is None:
            return 18
        symbol_or_address = symbol

    token = get_token(symbol_or_address, chain_id)
    return token.decimals if token else 18


def resolve_token_address(token: str, chain_id: int) -> str:
    """
    Resolve a token symbol or address to an address.

    Addresses are passed through unchanged.

    Raises:
        ConfigurationError: If the symbol is not in the registry
    """
    if _is_address(token):
        return token

    entry = get_token(token, chain_id)
    if entry is None:
        raise ConfigurationError.invalid(
            "token",
            f"Unknown token '{token}' on chain {chain_id}. Use a contract address instead.",
        )
    return entry.address
