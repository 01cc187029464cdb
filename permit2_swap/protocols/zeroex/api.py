"""
0x Swap API Client

REST client for the 0x Permit2 swap endpoints (API v2).
"""

import logging
from typing import Optional, Dict, Any, List

import httpx

from ...types.trade import TradeRequest
from ...types.quote import PriceResult, Quote, LiquiditySource
from ...errors import ConfigurationError, QuoteUnavailable
from ...config import config as global_config

logger = logging.getLogger(__name__)

SOURCES_ENDPOINT = "swap/v1/sources"
PRICE_ENDPOINT = "swap/permit2/price"
QUOTE_ENDPOINT = "swap/permit2/quote"


class ZeroExAPI:
    """
    0x REST API client

    Provides:
    - Liquidity source listing
    - Indicative prices
    - Firm Permit2 quotes

    Usage:
        with ZeroExAPI(api_key="...") as api:
            price = api.get_price(request)
            quote = api.get_quote(request)

    Requests are not retried; a failed call raises QuoteUnavailable.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize 0x API client

        Args:
            api_key: 0x API key (or set ZERO_EX_API_KEY env var)
            base_url: API base URL
            api_version: Value of the 0x-version header
            timeout: Request timeout in seconds
        """
        self._api_key = api_key or global_config.zeroex.api_key
        self._base_url = (base_url or global_config.zeroex.base_url).rstrip("/")
        self._api_version = api_version or global_config.zeroex.api_version
        self._timeout = timeout or global_config.zeroex.timeout
        self._client: Optional[httpx.Client] = None

        if not self._api_key:
            raise ConfigurationError.missing(
                "ZERO_EX_API_KEY",
                "0x API key is required. Set ZERO_EX_API_KEY environment variable."
            )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "0x-api-key": self._api_key,
            "0x-version": self._api_version,
        }

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client with auth headers"""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                headers=self.headers,
            )
        return self._client

    def _build_url(self, endpoint: str) -> str:
        """Build full API URL"""
        return f"{self._base_url}/{endpoint}"

    def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Make a GET request

        Raises:
            QuoteUnavailable: On transport failure, timeout, non-2xx or non-JSON body
        """
        client = self._get_client()
        url = self._build_url(endpoint)

        try:
            response = client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code}"
            try:
                error_data = e.response.json()
                if not isinstance(error_data, dict):
                    error_msg = e.response.text[:500] or error_msg
                elif "message" in error_data:
                    error_msg = error_data["message"]
                elif "reason" in error_data:
                    error_msg = error_data["reason"]
                else:
                    error_msg = str(error_data)
            except ValueError:
                error_msg = e.response.text[:500] if e.response.text else error_msg

            logger.warning(f"0x API error on {endpoint}: {error_msg}")
            raise QuoteUnavailable.http_error(endpoint, e.response.status_code, error_msg) from e
        except httpx.TimeoutException as e:
            logger.warning(f"0x API timeout on {endpoint}")
            raise QuoteUnavailable.timeout(endpoint, self._timeout) from e
        except httpx.RequestError as e:
            logger.warning(f"0x API request error on {endpoint}: {e}")
            raise QuoteUnavailable.request_failed(endpoint, e) from e

        try:
            data = response.json()
        except ValueError as e:
            raise QuoteUnavailable.invalid_response(endpoint, "body is not JSON") from e
        if not isinstance(data, dict):
            raise QuoteUnavailable.invalid_response(endpoint, "expected a JSON object")
        return data

    def get_liquidity_sources(self) -> List[LiquiditySource]:
        """
        Get list of liquidity sources

        Returns:
            Sources in the order the API reports them
        """
        data = self._get(SOURCES_ENDPOINT)
        sources = data.get("sources") or []
        return [
            LiquiditySource(name=s["name"])
            for s in sources
            if isinstance(s, dict) and s.get("name")
        ]

    def get_price(self, request: TradeRequest) -> PriceResult:
        """
        Get an indicative price

        Args:
            request: Trade parameters; the same instance must be passed to get_quote

        Returns:
            PriceResult (advisory, not used for execution)
        """
        data = self._get(PRICE_ENDPOINT, params=request.to_query_params())
        logger.debug(f"priceResponse: {data}")
        return PriceResult.from_dict(data)

    def get_quote(self, request: TradeRequest) -> Quote:
        """
        Get a firm quote with the prepared transaction and Permit2 payload

        Args:
            request: Trade parameters, identical to the price request

        Returns:
            Quote to settle
        """
        data = self._get(QUOTE_ENDPOINT, params=request.to_query_params())
        logger.debug(f"quoteResponse: {data}")
        return Quote.from_dict(data)

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ZeroExAPI":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"ZeroExAPI(base_url={self._base_url}, version={self._api_version})"
