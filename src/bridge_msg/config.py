#!/usr/bin/env python3
"""Configuration management for bridge message construction.

This module provides a type-safe configuration dataclass with validation.
Configuration is loaded from environment variables with sensible defaults
where appropriate.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import ClassVar

from .types import MAINNET_HRP, TESTNET_HRP, AccountAddress

# Get logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Settings for the native chain messages are built for.

    Attributes:
        network: Native network name, selects the bech32 address prefix
        expire_window: Seconds from now used when an expiry is not given
    """

    network: str = "mainnet"
    expire_window: int = 3600

    # Supported networks and their account address prefixes
    NETWORK_PREFIXES: ClassVar[dict[str, str]] = {
        "mainnet": MAINNET_HRP,
        "testnet": TESTNET_HRP,
    }
    MAX_EXPIRE_WINDOW: ClassVar[int] = 7 * 24 * 3600

    def __post_init__(self) -> None:
        """Validate network configuration."""
        if self.network not in self.NETWORK_PREFIXES:
            raise ValueError(
                f"Unsupported network: {self.network}. "
                f"Supported networks: {', '.join(sorted(self.NETWORK_PREFIXES))}"
            )

        if self.expire_window <= 0:
            raise ValueError(f"Expire window must be positive, got {self.expire_window}")
        if self.expire_window > self.MAX_EXPIRE_WINDOW:
            raise ValueError(
                f"Expire window too long (max {self.MAX_EXPIRE_WINDOW}s), got {self.expire_window}"
            )

    @property
    def hrp(self) -> str:
        return self.NETWORK_PREFIXES[self.network]

    @classmethod
    def from_env(cls) -> "NetworkConfig":
        """Load configuration from environment variables.

        Returns:
            NetworkConfig instance with loaded values

        Raises:
            ValueError: If an environment variable is invalid
        """
        network = os.environ.get("BRIDGE_NETWORK", "mainnet")

        raw_window = os.environ.get("EXPIRE_WINDOW", "3600")
        try:
            expire_window = int(raw_window)
        except ValueError:
            raise ValueError(
                f"EXPIRE_WINDOW must be an integer number of seconds, got {raw_window!r}"
            ) from None

        return cls(network=network, expire_window=expire_window)

    def account_address(self, value: str | bytes) -> AccountAddress:
        """Build a native account address on this network.

        Args:
            value: Bech32 string, or raw address bytes

        Raises:
            ValueError: If a bech32 string has the wrong prefix or checksum
        """
        if isinstance(value, str):
            return AccountAddress.from_bech32(value, hrp=self.hrp)
        return AccountAddress(value, self.hrp)

    def expire_time(self, now: int | None = None) -> int:
        """Expiry timestamp ``expire_window`` seconds after ``now``."""
        if now is None:
            now = int(time.time())
        return now + self.expire_window

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("Bridge Message Configuration")
        logger.info("=" * 60)
        logger.info(f"  Network: {self.network}")
        logger.info(f"  Address Prefix: {self.hrp}")
        logger.info(f"  Expire Window: {self.expire_window} seconds")
        logger.info("=" * 60)
