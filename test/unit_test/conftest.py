"""
Shared sample data for unit tests.

Payloads mirror the shape of 0x /swap/permit2 responses on Scroll.
No network access or credentials are needed.
"""

import copy
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


# Well-known test key (never funded)
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

SCROLL_CHAIN_ID = 534352
WETH = "0x5300000000000000000000000000000000000004"
WSTETH = "0xf610A9dfB7C89644979b4A0f27063E9e7d7Cda32"
PERMIT2 = "0x000000000022d473030f116ddee9f6b43ac78ba3"
SETTLER = "0x7f6cee965959295cc64d0e6c00d99d6532d8e86b"
TAKER = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"

ORIGINAL_CALL_DATA = "0x1fff991f" + "00" * 60 + "ab" * 4

EIP712_PAYLOAD = {
    "types": {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "chainId", "type": "uint256"},
            {"name": "verifyingContract", "type": "address"},
        ],
        "PermitTransferFrom": [
            {"name": "permitted", "type": "TokenPermissions"},
            {"name": "spender", "type": "address"},
            {"name": "nonce", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
        ],
        "TokenPermissions": [
            {"name": "token", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
    },
    "domain": {
        "name": "Permit2",
        "chainId": SCROLL_CHAIN_ID,
        "verifyingContract": PERMIT2,
    },
    "primaryType": "PermitTransferFrom",
    "message": {
        "permitted": {"token": WETH, "amount": 100000000000000000},
        "spender": SETTLER,
        "nonce": 2241959297937691820908574931991575,
        "deadline": 1733788800,
    },
}


def make_price_payload(allowance_spender=PERMIT2):
    """Price response; pass allowance_spender=None for an already-approved taker"""
    payload = {
        "blockNumber": "11780000",
        "buyAmount": "84432098765432101",
        "buyToken": WSTETH,
        "sellAmount": "100000000000000000",
        "sellToken": WETH,
        "liquidityAvailable": True,
        "minBuyAmount": "83587777777777780",
        "gas": "288079",
        "gasPrice": "40000000",
        "issues": {
            "allowance": None,
            "balance": None,
            "simulationIncomplete": False,
            "invalidSourcesPassed": [],
        },
        "route": {
            "fills": [
                {"from": WETH, "to": WSTETH, "source": "Ambient", "proportionBps": "5000"},
                {"from": WETH, "to": WSTETH, "source": "SyncSwap", "proportionBps": "5000"},
            ],
        },
        "tokenMetadata": {
            "buyToken": {"buyTaxBps": "0", "sellTaxBps": "0"},
            "sellToken": {"buyTaxBps": "0", "sellTaxBps": "0"},
        },
        "zid": "0x1a2b3c4d5e6f",
    }
    if allowance_spender:
        payload["issues"]["allowance"] = {"actual": "0", "spender": allowance_spender}
    return payload


def make_quote_payload(allowance_spender=None, with_permit=True, with_data=True):
    """Quote response with a Permit2 payload and prepared transaction"""
    payload = make_price_payload(allowance_spender)
    payload.update({
        "affiliateFeeBps": "100",
        "tradeSurplus": "0",
        "permit2": {
            "type": "Permit2",
            "hash": "0x" + "11" * 32,
            "eip712": copy.deepcopy(EIP712_PAYLOAD),
        } if with_permit else None,
        "transaction": {
            "to": SETTLER,
            "data": ORIGINAL_CALL_DATA if with_data else "",
            "gas": "288079",
            "gasPrice": "40000000",
            "value": "0",
        },
    })
    return payload


def make_chain_mock(nonce=7):
    """Mock ChainClient with the capabilities the pipeline uses"""
    chain = Mock()
    chain.chain_id = SCROLL_CHAIN_ID
    chain.address = TAKER
    chain.get_nonce.return_value = nonce
    chain.get_decimals.return_value = 18
    chain.gas_price.return_value = 50000000
    chain.estimate_gas.return_value = 300000
    chain.simulate_approve.return_value = True
    chain.send_approve.return_value = "0x" + "aa" * 32
    chain.wait_for_receipt.return_value = {"status": 1, "blockNumber": 11780001}
    chain.sign_typed_data.return_value = b"\x01" * 65
    chain.sign_transaction.return_value = (b"\xf8signed", "0x" + "bb" * 32)
    chain.send_raw_transaction.return_value = "0x" + "bb" * 32
    return chain

