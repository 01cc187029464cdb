"""
Shared configuration and fixtures for module integration tests.

WARNING: test_swap_scroll executes a real swap and spends real tokens!

Environment Variables:
    ZERO_EX_API_KEY: 0x API key (required)
    PRIVATE_KEY: Hex private key of the trading account (required for quotes and swaps)
    ALCHEMY_HTTP_TRANSPORT_URL: Scroll RPC endpoint (required for quotes and swaps)
    PERMIT2_SWAP_LIVE: Set to 1 to allow the real swap test
"""

import os
import sys
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

# Load .env file
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env_or_fail(key: str) -> str:
    """Get required environment variable or raise error"""
    value = os.getenv(key)
    if not value:
        raise EnvironmentError(
            f"Missing required environment variable: {key}\n"
            f"Please set {key} in your .env file or environment."
        )
    return value


def skip_if_no_api_key():
    """Return a skip message if the 0x API key is not available"""
    try:
        get_env_or_fail("ZERO_EX_API_KEY")
        return None
    except EnvironmentError as e:
        return str(e)


def skip_if_no_config():
    """Return a skip message unless API key, private key and RPC are all set"""
    try:
        for key in ("ZERO_EX_API_KEY", "PRIVATE_KEY", "ALCHEMY_HTTP_TRANSPORT_URL"):
            get_env_or_fail(key)
        return None
    except EnvironmentError as e:
        return str(e)


def skip_if_not_live():
    """Return a skip message unless real swaps are explicitly enabled"""
    skip_msg = skip_if_no_config()
    if skip_msg:
        return skip_msg
    if os.getenv("PERMIT2_SWAP_LIVE") != "1":
        return "Set PERMIT2_SWAP_LIVE=1 to execute a real swap"
    return None


def create_pipeline():
    """Create SwapPipeline from the environment"""
    from permit2_swap.config import reload_config
    from permit2_swap.modules.swap import SwapPipeline

    return SwapPipeline.from_config(reload_config())


def get_token_balance(pipeline, token: str) -> Decimal:
    """ERC-20 balance of the trader in UI units"""
    from permit2_swap.types.tokens import resolve_token_address

    chain = pipeline.chain
    token_address = resolve_token_address(token, chain.chain_id)

    erc20_abi = [{"constant": True, "inputs": [{"name": "_owner", "type": "address"}], "name": "balanceOf", "outputs": [{"name": "balance", "type": "uint256"}], "type": "function"}]

    contract = chain.web3.eth.contract(address=chain.web3.to_checksum_address(token_address), abi=erc20_abi)
    balance = contract.functions.balanceOf(chain.address).call()
    return Decimal(balance) / Decimal(10 ** chain.get_decimals(token_address))


def get_native_balance(pipeline) -> Decimal:
    """ETH balance of the trader (pays gas on Scroll)"""
    chain = pipeline.chain
    return Decimal(chain.web3.eth.get_balance(chain.address)) / Decimal(10 ** 18)

