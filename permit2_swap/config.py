"""
Configuration management for the Permit2 swap pipeline

Loads settings from environment variables and .env file.
Includes logging configuration with optional file output.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv

from .errors import ConfigurationError


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # permit2_swap package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class ZeroExConfig:
    """0x Swap API configuration"""
    base_url: str = field(default_factory=lambda: _get_env("ZERO_EX_BASE_URL", "https://api.0x.org"))
    api_key: Optional[str] = field(default_factory=lambda: _get_env("ZERO_EX_API_KEY", None))
    # Sent as the 0x-version header
    api_version: str = field(default_factory=lambda: _get_env("ZERO_EX_API_VERSION", "v2"))
    timeout: float = field(default_factory=lambda: _get_env_float("ZERO_EX_TIMEOUT", 30.0))


@dataclass
class ChainConfig:
    """EVM chain connection settings (defaults target Scroll mainnet)"""
    rpc_url: str = field(default_factory=lambda: _get_env("ALCHEMY_HTTP_TRANSPORT_URL", ""))
    chain_id: int = field(default_factory=lambda: _get_env_int("CHAIN_ID", 534352))
    rpc_timeout: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))
    # Upper bound on waiting for the approval transaction to be mined
    receipt_timeout: float = field(default_factory=lambda: _get_env_float("RECEIPT_TIMEOUT_SECONDS", 120.0))
    explorer_tx_url: str = field(default_factory=lambda: _get_env("EXPLORER_TX_URL", "https://scrollscan.com/tx/"))


@dataclass
class SignerConfig:
    """Local private key signing"""
    private_key: Optional[str] = field(default_factory=lambda: _get_env("PRIVATE_KEY", None))


@dataclass
class TradingConfig:
    """Default trade parameters"""
    sell_token: str = field(default_factory=lambda: _get_env("SELL_TOKEN", "WETH"))
    buy_token: str = field(default_factory=lambda: _get_env("BUY_TOKEN", "WSTETH"))
    # Amount in UI units of the sell token
    sell_amount: str = field(default_factory=lambda: _get_env("SELL_AMOUNT", "0.1"))
    affiliate_fee_bps: int = field(default_factory=lambda: _get_env_int("AFFILIATE_FEE_BPS", 100))
    surplus_collection: bool = field(default_factory=lambda: _get_env_bool("SURPLUS_COLLECTION", True))


@dataclass
class LoggingConfig:
    """
    Logging configuration.

    Environment variables:
        LOG_FILE: Path to log file (default: no file output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Loads all settings from environment variables and .env file.

    Usage:
        from permit2_swap.config import config

        config.validate()
        print(config.zeroex.base_url)
    """
    zeroex: ZeroExConfig = field(default_factory=ZeroExConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    trading: TradingConfig = field(default_factory=TradingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """
        Check that every credential the pipeline needs is present.

        Raises:
            ConfigurationError: naming the first missing setting
        """
        if not self.signer.private_key:
            raise ConfigurationError.missing("PRIVATE_KEY")
        if not self.zeroex.api_key:
            raise ConfigurationError.missing("ZERO_EX_API_KEY")
        if not self.chain.rpc_url:
            raise ConfigurationError.missing("ALCHEMY_HTTP_TRANSPORT_URL")
        if not 0 <= self.trading.affiliate_fee_bps <= 10_000:
            raise ConfigurationError.invalid(
                "AFFILIATE_FEE_BPS", f"must be within 0..10000, got {self.trading.affiliate_fee_bps}"
            )

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def get_config() -> Config:
    """Get global configuration instance"""
    return config


def reload_config() -> Config:
    """Reload and return new configuration"""
    global config
    config = Config.reload()
    return config


# Client libraries that log every request at INFO
_CLIENT_LOGGERS = ("httpx", "httpcore", "web3", "urllib3")


def _build_handlers(log_config: LoggingConfig) -> List[logging.Handler]:
    """File (rotating) and/or console handlers sharing one formatter"""
    formatter = logging.Formatter(log_config.log_format)
    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        Path(log_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        ))

    if log_config.console_output:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(log_config.level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "permit2_swap",
) -> logging.Logger:
    """
    Configure the pipeline logger.

    Module loggers (permit2_swap.modules.*, permit2_swap.protocols.*, ...)
    propagate to it. Request-level logging of the HTTP and web3 client
    libraries is kept at WARNING unless the level is DEBUG, so request URLs
    do not flood the swap report.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure

    Returns:
        Configured logger instance
    """
    log_config = log_config or config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close before removing to release file handles
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    for handler in _build_handlers(log_config):
        logger.addHandler(handler)

    client_level = logging.DEBUG if log_config.level <= logging.DEBUG else logging.WARNING
    for name in _CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
