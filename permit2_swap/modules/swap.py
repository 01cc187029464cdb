"""
Swap Module

Runs one Permit2 swap end to end:

    price -> quote -> allowance (if needed) -> permit signature -> submit

Each stage consumes the previous stage's output; stages never run
concurrently and nothing is retried. Any stage error ends the run.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from ..config import Config, config as global_config
from ..errors import SwapError, AllowanceError
from ..infra.chain_client import ChainClient
from ..infra.evm_signer import EVMSigner, create_web3, create_evm_signer
from ..protocols.zeroex import ZeroExAPI
from ..types.trade import TradeRequest, to_raw_amount
from ..types.tokens import resolve_token_address, get_token_symbol
from ..types.result import SwapResult
from .allowance import AllowanceManager
from .permit import PermitSigner
from .submit import TransactionSubmitter
from . import report

logger = logging.getLogger(__name__)


class SwapPipeline:
    """
    Permit2 swap pipeline for one account

    Usage:
        with SwapPipeline.from_config() as pipeline:
            request = pipeline.build_trade_request("WETH", "WSTETH", "0.1")
            result = pipeline.execute(request)
    """

    def __init__(
        self,
        api: ZeroExAPI,
        chain: ChainClient,
        receipt_timeout: float = 120.0,
        explorer_tx_url: Optional[str] = None,
    ):
        self._api = api
        self._chain = chain
        self._explorer_tx_url = explorer_tx_url
        self._allowance = AllowanceManager(chain, receipt_timeout=receipt_timeout)
        self._permit = PermitSigner(chain)
        self._submitter = TransactionSubmitter(chain)

    @classmethod
    def from_config(
        cls,
        cfg: Optional[Config] = None,
        signer: Optional[EVMSigner] = None,
    ) -> "SwapPipeline":
        """
        Build a pipeline from configuration.

        Raises:
            ConfigurationError: If a required setting is missing
            SignerError: If the private key is invalid
        """
        cfg = cfg or global_config
        cfg.validate()

        signer = signer or create_evm_signer(cfg.signer.private_key)
        web3 = create_web3(cfg.chain.rpc_url, timeout=cfg.chain.rpc_timeout)
        chain = ChainClient(web3, signer, chain_id=cfg.chain.chain_id)
        api = ZeroExAPI(
            api_key=cfg.zeroex.api_key,
            base_url=cfg.zeroex.base_url,
            api_version=cfg.zeroex.api_version,
            timeout=cfg.zeroex.timeout,
        )
        return cls(
            api,
            chain,
            receipt_timeout=cfg.chain.receipt_timeout,
            explorer_tx_url=cfg.chain.explorer_tx_url,
        )

    @property
    def api(self) -> ZeroExAPI:
        return self._api

    @property
    def chain(self) -> ChainClient:
        return self._chain

    def build_trade_request(
        self,
        sell_token: str,
        buy_token: str,
        amount: Union[Decimal, str],
        affiliate_fee_bps: int = 0,
        surplus_collection: bool = False,
    ) -> TradeRequest:
        """
        Resolve tokens and convert a UI amount using the sell token's on-chain
        decimals.
        """
        chain_id = self._chain.chain_id
        sell_address = resolve_token_address(sell_token, chain_id)
        buy_address = resolve_token_address(buy_token, chain_id)
        decimals = self._chain.get_decimals(sell_address)

        return TradeRequest(
            chain_id=chain_id,
            sell_token=sell_address,
            buy_token=buy_address,
            sell_amount=to_raw_amount(amount, decimals),
            taker=self._chain.address,
            affiliate_fee_bps=affiliate_fee_bps,
            surplus_collection=surplus_collection,
        )

    def list_liquidity_sources(self) -> None:
        """Report the aggregator's liquidity sources; failures are not fatal"""
        try:
            sources = self._api.get_liquidity_sources()
        except SwapError as e:
            logger.error(f"Error fetching liquidity sources: {e}")
            return
        logger.info(report.format_sources(sources))

    def execute(self, request: TradeRequest) -> SwapResult:
        """
        Run the pipeline once.

        Returns:
            SwapResult: PENDING with the tx hash once broadcast, SKIPPED when
            the quote offers no Permit2 path, FAILED when any stage raised
        """
        approval_tx_hash = None
        try:
            sell_symbol = get_token_symbol(request.sell_token, request.chain_id) or request.sell_token
            buy_symbol = get_token_symbol(request.buy_token, request.chain_id) or request.buy_token
            logger.info(f"Fetching price to swap {request.sell_amount} {sell_symbol} for {buy_symbol}")

            price = self._api.get_price(request)
            if not price.liquidity_available:
                logger.warning("Aggregator reports no liquidity for this trade")
            if price.needs_allowance:
                logger.info(f"Taker needs to set an allowance for {price.issues.allowance.spender}")

            quote = self._api.get_quote(request)
            report.log_lines(report.format_quote(quote))

            approval_tx_hash = self._allowance.ensure_for_quote(quote, request.sell_token)

            if not quote.eip712:
                logger.info("Quote carries no Permit2 payload, swap not submitted")
                return SwapResult.skipped(
                    "Quote has no Permit2 payload",
                    approval_tx_hash=approval_tx_hash,
                )

            signature = self._permit.sign_permit(quote.eip712)
            tx_hash = self._submitter.submit(quote, signature)
            if tx_hash is None:
                return SwapResult.skipped(
                    "Quote has no transaction call data",
                    approval_tx_hash=approval_tx_hash,
                )

        except SwapError as e:
            logger.error(f"Error during the swap process: {e}", exc_info=e.original_error is not None)
            if isinstance(e, AllowanceError) and e.tx_hash:
                approval_tx_hash = e.tx_hash
            return SwapResult.failed(
                str(e),
                error_code=e.code.value,
                recoverable=e.recoverable,
                approval_tx_hash=approval_tx_hash,
            )

        explorer_url = None
        if self._explorer_tx_url:
            explorer_url = f"{self._explorer_tx_url.rstrip('/')}/{tx_hash}"
            logger.info(f"See tx details at {explorer_url}")

        return SwapResult.pending(
            tx_hash,
            approval_tx_hash=approval_tx_hash,
            explorer_url=explorer_url,
        )

    def close(self):
        """Close the API client"""
        self._api.close()

    def __enter__(self) -> "SwapPipeline":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"SwapPipeline(chain={self._chain!r})"
