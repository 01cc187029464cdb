"""
Blockchain client used by the swap pipeline

Wraps a Web3 connection and an EVMSigner behind the small set of
capabilities the pipeline needs: account address, token decimals, approval
simulation and execution, typed-data signing, nonce reads, transaction
signing, raw broadcast and receipt waits.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from web3 import Web3

from .evm_signer import EVMSigner

logger = logging.getLogger(__name__)


ERC20_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "spender", "type": "address"}, {"name": "value", "type": "uint256"}],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


class ChainClient:
    """
    Web3-backed chain access for one account on one chain

    Usage:
        client = ChainClient(create_web3(rpc_url), signer, chain_id=534352)
        decimals = client.get_decimals(weth_address)
        nonce = client.get_nonce()
    """

    def __init__(self, web3: Web3, signer: EVMSigner, chain_id: int):
        self._web3 = web3
        self._signer = signer
        self._chain_id = chain_id

    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def address(self) -> str:
        """Trader address (checksummed)"""
        return self._signer.address

    def _token(self, token_address: str):
        return self._web3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=ERC20_ABI,
        )

    # ---- Reads ---------------------------------------------------------------

    def get_decimals(self, token_address: str) -> int:
        return int(self._token(token_address).functions.decimals().call())

    def get_nonce(self) -> int:
        """Current transaction count including mempool transactions"""
        return int(self._web3.eth.get_transaction_count(self.address, "pending"))

    def gas_price(self) -> int:
        return int(self._web3.eth.gas_price)

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        tx = dict(tx)
        tx.setdefault("from", self.address)
        return int(self._web3.eth.estimate_gas(tx))

    # ---- Approvals -----------------------------------------------------------

    def simulate_approve(self, token_address: str, spender: str, amount: int) -> bool:
        """eth_call the approval; raises if it would revert"""
        fn = self._token(token_address).functions.approve(Web3.to_checksum_address(spender), amount)
        return bool(fn.call({"from": self.address}))

    def send_approve(self, token_address: str, spender: str, amount: int) -> str:
        """Build, sign and broadcast an approval. Returns the tx hash."""
        fn = self._token(token_address).functions.approve(Web3.to_checksum_address(spender), amount)
        tx = fn.build_transaction({
            "from": self.address,
            "nonce": self.get_nonce(),
            "chainId": self._chain_id,
        })
        raw_tx, _ = self.sign_transaction(tx)
        return self.send_raw_transaction(raw_tx)

    # ---- Signing & broadcast -------------------------------------------------

    def sign_typed_data(self, payload: Dict[str, Any]) -> bytes:
        return self._signer.sign_typed_data(payload)

    def sign_transaction(self, tx: Dict[str, Any]) -> Tuple[bytes, str]:
        return self._signer.sign_transaction(tx)

    def send_raw_transaction(self, raw_tx: bytes) -> str:
        tx_hash = self._web3.eth.send_raw_transaction(raw_tx)
        return Web3.to_hex(tx_hash)

    def wait_for_receipt(self, tx_hash: str, timeout: float) -> Dict[str, Any]:
        """
        Block until the transaction is mined.

        Raises:
            web3.exceptions.TimeExhausted: If not mined within timeout
        """
        receipt = self._web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        return dict(receipt)

    def __repr__(self) -> str:
        return f"ChainClient(chain_id={self._chain_id}, address={self.address})"
