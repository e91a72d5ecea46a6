#!/usr/bin/env python3
"""Address and amount value types for bridge messages.

This module provides immutable value types for the two address families a
bridge message touches: ``ForeignAddress`` for the 20-byte smart-chain side
and ``AccountAddress`` for bech32 native-chain accounts, plus the native
``Coin`` amount.
"""

import logging
from dataclasses import dataclass
from typing import Any

from bech32 import bech32_decode, bech32_encode, convertbits
from hexbytes import HexBytes
from web3 import Web3

logger = logging.getLogger(__name__)

FOREIGN_ADDRESS_LENGTH = 20
ACCOUNT_ADDRESS_LENGTH = 20

MAINNET_HRP = "bnb"
TESTNET_HRP = "tbnb"


def _right_align(raw: bytes) -> bytes:
    """Fit raw bytes into a foreign address: keep the tail, zero-pad the head."""
    if len(raw) > FOREIGN_ADDRESS_LENGTH:
        return raw[-FOREIGN_ADDRESS_LENGTH:]
    return raw.rjust(FOREIGN_ADDRESS_LENGTH, b"\x00")


@dataclass(frozen=True, slots=True)
class ForeignAddress:
    """A 20-byte address on the foreign smart chain.

    Construction never fails: shorter inputs are left-padded with zero bytes
    and longer inputs keep only their trailing 20 bytes, the same way the
    foreign chain builds addresses from arbitrary byte strings.

    Attributes:
        raw: Exactly 20 address bytes
    """

    raw: bytes = bytes(FOREIGN_ADDRESS_LENGTH)

    def __post_init__(self) -> None:
        """Copy and right-align the input bytes."""
        object.__setattr__(self, "raw", _right_align(bytes(self.raw)))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "ForeignAddress":
        """Build an address from raw bytes, applying the pad/truncate rule."""
        return cls(raw)

    @classmethod
    def from_hex(cls, text: str) -> "ForeignAddress":
        """
        Build an address from hex text, with or without a ``0x`` prefix.

        Malformed input yields the zero address instead of raising; callers
        detect it with ``is_empty()``.

        Args:
            text: Hex string; odd lengths are left-padded with one nibble

        Returns:
            Decoded address, or the zero address if ``text`` is not hex
        """
        try:
            decoded = bytes(HexBytes(text))
        except ValueError as e:
            logger.debug(f"Hex decode of foreign address {text!r} failed, using zero address: {e}")
            return cls()
        return cls(decoded)

    @classmethod
    def from_json_value(cls, value: Any) -> "ForeignAddress":
        """
        Strictly decode an address from its JSON string form.

        Unlike ``from_hex``, wire payloads with malformed hex are rejected.

        Raises:
            ValueError: If ``value`` is not a hex string
        """
        if not isinstance(value, str):
            raise ValueError(f"Foreign address must be a JSON string, got {type(value).__name__}")
        return cls(bytes(HexBytes(value)))

    def to_hex(self) -> str:
        """Lowercase ``0x``-prefixed hex form, also the JSON wire form."""
        return Web3.to_hex(self.raw)

    def to_checksum(self) -> str:
        """EIP-55 mixed-case form for display. Not used on the wire."""
        return Web3.to_checksum_address(self.to_hex())

    def is_empty(self) -> bool:
        return not any(self.raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True, slots=True)
class AccountAddress:
    """A native-chain account address.

    The value keeps its bech32 prefix so that rendering it is a pure
    function of the value itself.

    Attributes:
        raw: Address bytes (20 for a well-formed account)
        hrp: Bech32 human-readable prefix (``bnb`` or ``tbnb``)
    """

    raw: bytes
    hrp: str = MAINNET_HRP

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_bech32(cls, text: str, hrp: str | None = None) -> "AccountAddress":
        """
        Decode a bech32 account address.

        Args:
            text: Bech32 string such as ``bnb1...``
            hrp: Required prefix; any prefix is accepted when None

        Returns:
            Decoded account address

        Raises:
            ValueError: If the checksum, data or prefix is invalid
        """
        decoded_hrp, data = bech32_decode(text)
        if decoded_hrp is None or data is None:
            raise ValueError(f"Invalid bech32 account address: {text!r}")

        if hrp is not None and decoded_hrp != hrp:
            raise ValueError(
                f"Account address prefix mismatch: expected {hrp}, got {decoded_hrp}"
            )

        raw = convertbits(data, 5, 8, False)
        if raw is None:
            raise ValueError(f"Invalid bech32 data in account address: {text!r}")

        return cls(bytes(raw), decoded_hrp)

    def to_bech32(self) -> str:
        return bech32_encode(self.hrp, convertbits(self.raw, 8, 5))

    def __len__(self) -> int:
        return len(self.raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_bech32()


@dataclass(frozen=True, slots=True)
class Coin:
    """A native-chain coin amount.

    Attributes:
        denom: Token symbol, e.g. ``BNB``
        amount: Integer amount in the token's smallest unit
    """

    denom: str
    amount: int

    def is_positive(self) -> bool:
        return self.amount > 0

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire dict, in wire field order."""
        return {
            "denom": self.denom,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coin":
        return cls(denom=data["denom"], amount=data["amount"])
