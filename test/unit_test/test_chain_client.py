"""
Test ChainClient with a mocked Web3

Checks the RPC calls the pipeline depends on without a live node.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

from hexbytes import HexBytes
from web3 import Web3

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from conftest import TEST_PRIVATE_KEY, WETH, PERMIT2, SETTLER

from permit2_swap.infra.evm_signer import EVMSigner
from permit2_swap.infra.chain_client import ChainClient
from permit2_swap.modules.allowance import MAX_UINT256


def _client(web3=None):
    signer = EVMSigner.from_private_key(TEST_PRIVATE_KEY)
    return ChainClient(web3 or Mock(), signer, chain_id=534352)


def test_get_nonce_pending():
    """Test nonce includes pending transactions"""
    print("Testing get_nonce...")

    web3 = Mock()
    web3.eth.get_transaction_count.return_value = 5
    client = _client(web3)

    assert client.get_nonce() == 5
    web3.eth.get_transaction_count.assert_called_once_with(client.address, "pending")

    print("  get_nonce: PASSED")


def test_get_decimals():
    """Test decimals() read from the token contract"""
    print("Testing get_decimals...")

    web3 = Mock()
    contract = web3.eth.contract.return_value
    contract.functions.decimals.return_value.call.return_value = 6
    client = _client(web3)

    assert client.get_decimals(WETH.lower()) == 6
    kwargs = web3.eth.contract.call_args[1]
    assert kwargs["address"] == Web3.to_checksum_address(WETH)

    print("  get_decimals: PASSED")


def test_simulate_approve():
    """Test approval simulation uses eth_call from the trader"""
    print("Testing simulate_approve...")

    web3 = Mock()
    approve = web3.eth.contract.return_value.functions.approve
    approve.return_value.call.return_value = True
    client = _client(web3)

    assert client.simulate_approve(WETH, PERMIT2, MAX_UINT256) is True
    approve.assert_called_once_with(Web3.to_checksum_address(PERMIT2), MAX_UINT256)
    approve.return_value.call.assert_called_once_with({"from": client.address})

    print("  simulate_approve: PASSED")


def test_send_approve():
    """Test approval is built, signed locally and broadcast"""
    print("Testing send_approve...")

    web3 = Mock()
    client = _client(web3)
    web3.eth.get_transaction_count.return_value = 9
    build = web3.eth.contract.return_value.functions.approve.return_value.build_transaction
    build.return_value = {
        "from": client.address,
        "to": Web3.to_checksum_address(WETH),
        "data": "0x095ea7b3",
        "value": 0,
        "gas": 50000,
        "gasPrice": 40000000,
        "nonce": 9,
        "chainId": 534352,
    }
    web3.eth.send_raw_transaction.return_value = HexBytes(b"\xaa" * 32)

    tx_hash = client.send_approve(WETH, PERMIT2, MAX_UINT256)

    assert tx_hash == "0x" + "aa" * 32
    build.assert_called_once_with({"from": client.address, "nonce": 9, "chainId": 534352})
    raw_tx = web3.eth.send_raw_transaction.call_args[0][0]
    assert isinstance(raw_tx, bytes)

    print("  send_approve: PASSED")


def test_estimate_gas_sets_sender():
    """Test gas estimation is made from the trader address"""
    print("Testing estimate_gas...")

    web3 = Mock()
    web3.eth.estimate_gas.return_value = 300000
    client = _client(web3)

    tx = {"to": SETTLER, "data": b"\x01", "value": 0}
    assert client.estimate_gas(tx) == 300000
    sent = web3.eth.estimate_gas.call_args[0][0]
    assert sent["from"] == client.address
    assert "from" not in tx

    print("  estimate_gas: PASSED")


def test_wait_for_receipt():
    """Test receipt wait passes the timeout through"""
    print("Testing wait_for_receipt...")

    web3 = Mock()
    web3.eth.wait_for_transaction_receipt.return_value = {"status": 1, "blockNumber": 10}
    client = _client(web3)

    receipt = client.wait_for_receipt("0xabc", timeout=60)
    assert receipt["status"] == 1
    web3.eth.wait_for_transaction_receipt.assert_called_once_with("0xabc", timeout=60)

    print("  wait_for_receipt: PASSED")


def main():
    """Run all chain client tests"""
    print("=" * 60)
    print("ChainClient Tests")
    print("=" * 60)

    tests = [
        test_get_nonce_pending,
        test_get_decimals,
        test_simulate_approve,
        test_send_approve,
        test_estimate_gas_sets_sender,
        test_wait_for_receipt,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
