#!/usr/bin/env python3
"""Signable bridge messages.

This module provides the two user-originated bridge actions, ``BindMsg`` and
``TransferOutMsg``. Each message can describe itself for logs, report its
signers, validate its fields and render the canonical bytes an external
signer signs.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from .types import AccountAddress, Coin, ForeignAddress
from .utils.sign_encoder import SignEncoder
from .validator import validate_bind, validate_transfer_out

logger = logging.getLogger(__name__)

ROUTE_BRIDGE = "bridge"

BIND_MSG_TYPE = "crossBind"
TRANSFER_OUT_MSG_TYPE = "crossTransferOut"


class BridgeMsg:
    """Behaviour shared by every signable bridge message.

    Subclasses are frozen dataclasses with a ``from_address`` field and
    provide ``TYPE``, ``describe``, ``validate_basic``, ``to_dict`` and
    ``from_dict``.
    """

    __slots__ = ()

    ROUTE: ClassVar[str] = ROUTE_BRIDGE
    TYPE: ClassVar[str]

    def route(self) -> str:
        return self.ROUTE

    def type(self) -> str:
        return self.TYPE

    def signers(self) -> list[AccountAddress]:
        return [self.from_address]

    def involved_addresses(self) -> list[AccountAddress]:
        return self.signers()

    def sign_bytes(self) -> bytes:
        """
        Render the canonical bytes a signature is computed over.

        Always call ``validate_basic`` first.

        Raises:
            EncodingDefect: If the message cannot be serialized
        """
        return SignEncoder.sign_bytes(self.to_dict(), self.TYPE)

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True, slots=True)
class BindMsg(BridgeMsg):
    """Request to bind a native-chain token to a foreign-chain contract.

    Attributes:
        from_address: Token owner, the only signer
        symbol: Native token symbol
        amount: Amount of the token locked for the bind
        contract_address: Foreign-chain token contract
        contract_decimals: Decimal precision of the foreign contract
        expire_time: Unix timestamp after which the bind request lapses
    """

    TYPE: ClassVar[str] = BIND_MSG_TYPE

    from_address: AccountAddress
    symbol: str
    amount: int
    contract_address: ForeignAddress
    contract_decimals: int
    expire_time: int

    def describe(self) -> str:
        """Log line format; field order and separators are relied upon by log tooling."""
        return (
            f"Bind{{{self.from_address}#{self.symbol}#{self.amount}"
            f"${self.contract_address.to_hex()}#{self.contract_decimals}#{self.expire_time}}}"
        )

    def validate_basic(self) -> None:
        validate_bind(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire dict, in wire field order."""
        return {
            "from": str(self.from_address),
            "symbol": self.symbol,
            "amount": self.amount,
            "contract_address": self.contract_address.to_hex(),
            "contract_decimals": self.contract_decimals,
            "expire_time": self.expire_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BindMsg":
        return cls(
            from_address=AccountAddress.from_bech32(data["from"]),
            symbol=data["symbol"],
            amount=data["amount"],
            contract_address=ForeignAddress.from_json_value(data["contract_address"]),
            contract_decimals=data["contract_decimals"],
            expire_time=data["expire_time"],
        )


@dataclass(frozen=True, slots=True)
class TransferOutMsg(BridgeMsg):
    """Request to move value from the native chain to the foreign chain.

    Attributes:
        from_address: Sender, the only signer
        to: Foreign-chain recipient
        amount: Coin amount to transfer
        expire_time: Unix timestamp after which the transfer is refunded
    """

    TYPE: ClassVar[str] = TRANSFER_OUT_MSG_TYPE

    from_address: AccountAddress
    to: ForeignAddress
    amount: Coin
    expire_time: int

    def describe(self) -> str:
        return f"TransferOut{{{self.from_address}#{self.to.to_hex()}#{self.amount}#{self.expire_time}}}"

    def validate_basic(self) -> None:
        validate_transfer_out(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire dict, in wire field order."""
        return {
            "from": str(self.from_address),
            "to": self.to.to_hex(),
            "amount": self.amount.to_dict(),
            "expire_time": self.expire_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransferOutMsg":
        return cls(
            from_address=AccountAddress.from_bech32(data["from"]),
            to=ForeignAddress.from_json_value(data["to"]),
            amount=Coin.from_dict(data["amount"]),
            expire_time=data["expire_time"],
        )


MSG_TYPES: dict[str, type[BridgeMsg]] = {
    BIND_MSG_TYPE: BindMsg,
    TRANSFER_OUT_MSG_TYPE: TransferOutMsg,
}


def decode_msg(msg_type: str, payload: dict[str, Any]) -> BridgeMsg:
    """
    Rebuild a message from its type discriminator and wire dict.

    Args:
        msg_type: ``crossBind`` or ``crossTransferOut``
        payload: Decoded JSON object

    Returns:
        The matching message instance

    Raises:
        ValueError: If the type is unknown or a field cannot be decoded
        KeyError: If a required key is missing
    """
    match MSG_TYPES.get(msg_type):
        case None:
            raise ValueError(f"Unknown bridge message type: {msg_type}")
        case msg_cls:
            logger.debug(f"Decoding {msg_type} message")
            return msg_cls.from_dict(payload)
