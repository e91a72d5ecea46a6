#!/usr/bin/env python3
"""Claims attested from the foreign chain.

This module provides immutable records for the facts oracle relayers attest
about foreign-chain activity: inbound transfers, refunds of failed outbound
transfers, bind outcomes and skipped sequence numbers. Each claim carries its
``ClaimType`` tag and converts to and from its JSON wire dict.
"""

import json
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar

from .types import AccountAddress, Coin, ForeignAddress
from .utils.sign_encoder import SignEncoder
from .validator import validate_transfer_in

logger = logging.getLogger(__name__)


class ClaimType(IntEnum):
    """Tag identifying the kind of an oracle claim."""
    SKIP_SEQUENCE = 1
    UPDATE_BIND = 2
    TRANSFER_OUT_REFUND = 3
    TRANSFER_IN = 4


class RefundReason(IntEnum):
    """Why an outbound transfer was refunded."""
    UNBOUND_TOKEN = 1
    TIMEOUT = 2
    INSUFFICIENT_BALANCE = 3
    UNKNOWN = 4


class BindStatus(IntEnum):
    """Outcome of a bind request on the foreign chain."""
    SUCCESS = 0
    REJECTED = 1
    TIMEOUT = 2
    INVALID_PARAMETER = 3


class BridgeClaim:
    """Behaviour shared by every claim variant."""

    __slots__ = ()

    CLAIM_TYPE: ClassVar[ClaimType]

    def validate(self) -> None:
        """Check claim invariants. Claims without invariants accept everything."""

    def to_json(self) -> str:
        return SignEncoder.to_json(self.to_dict())


@dataclass(frozen=True, slots=True)
class TransferInClaim(BridgeClaim):
    """A batch of inbound transfers locked on the foreign chain.

    Index ``i`` of ``refund_addresses``, ``receiver_addresses`` and
    ``amounts`` together describe one transfer.

    Attributes:
        contract_address: Foreign token contract the value was locked in
        refund_addresses: Foreign addresses to refund if delivery fails
        receiver_addresses: Native-chain recipients
        amounts: Amount for each recipient
        symbol: Native token symbol
        relay_fee: Fee paid to the relaying party
        expire_time: Unix timestamp after which the claim is refunded
    """

    CLAIM_TYPE: ClassVar[ClaimType] = ClaimType.TRANSFER_IN

    contract_address: ForeignAddress
    refund_addresses: tuple[ForeignAddress, ...]
    receiver_addresses: tuple[AccountAddress, ...]
    amounts: tuple[int, ...]
    symbol: str
    relay_fee: Coin
    expire_time: int

    def __post_init__(self) -> None:
        """Freeze the sequences so the claim stays immutable."""
        object.__setattr__(self, "refund_addresses", tuple(self.refund_addresses))
        object.__setattr__(self, "receiver_addresses", tuple(self.receiver_addresses))
        object.__setattr__(self, "amounts", tuple(self.amounts))

    def validate(self) -> None:
        validate_transfer_in(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire dict, in wire field order."""
        return {
            "contract_address": self.contract_address.to_hex(),
            "refund_addresses": [addr.to_hex() for addr in self.refund_addresses],
            "receiver_addresses": [str(addr) for addr in self.receiver_addresses],
            "amounts": list(self.amounts),
            "symbol": self.symbol,
            "relay_fee": self.relay_fee.to_dict(),
            "expire_time": self.expire_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransferInClaim":
        return cls(
            contract_address=ForeignAddress.from_json_value(data["contract_address"]),
            refund_addresses=tuple(
                ForeignAddress.from_json_value(addr) for addr in data["refund_addresses"]
            ),
            receiver_addresses=tuple(
                AccountAddress.from_bech32(addr) for addr in data["receiver_addresses"]
            ),
            amounts=tuple(data["amounts"]),
            symbol=data["symbol"],
            relay_fee=Coin.from_dict(data["relay_fee"]),
            expire_time=data["expire_time"],
        )


@dataclass(frozen=True, slots=True)
class TransferOutRefundClaim(BridgeClaim):
    """Refund of an outbound transfer the foreign chain could not complete."""

    CLAIM_TYPE: ClassVar[ClaimType] = ClaimType.TRANSFER_OUT_REFUND

    refund_address: AccountAddress
    amount: Coin
    refund_reason: RefundReason

    def to_dict(self) -> dict[str, Any]:
        return {
            "refund_address": str(self.refund_address),
            "amount": self.amount.to_dict(),
            "refund_reason": int(self.refund_reason),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransferOutRefundClaim":
        return cls(
            refund_address=AccountAddress.from_bech32(data["refund_address"]),
            amount=Coin.from_dict(data["amount"]),
            refund_reason=RefundReason(data["refund_reason"]),
        )


@dataclass(frozen=True, slots=True)
class UpdateBindClaim(BridgeClaim):
    """Outcome of a bind request, reported back from the foreign chain."""

    CLAIM_TYPE: ClassVar[ClaimType] = ClaimType.UPDATE_BIND

    status: BindStatus
    symbol: str
    contract_address: ForeignAddress

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": int(self.status),
            "symbol": self.symbol,
            "contract_address": self.contract_address.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpdateBindClaim":
        return cls(
            status=BindStatus(data["status"]),
            symbol=data["symbol"],
            contract_address=ForeignAddress.from_json_value(data["contract_address"]),
        )


@dataclass(frozen=True, slots=True)
class SkipSequenceClaim(BridgeClaim):
    """Marks ``sequence`` of the given claim type as consumed without executing it."""

    CLAIM_TYPE: ClassVar[ClaimType] = ClaimType.SKIP_SEQUENCE

    claim_type: ClaimType
    sequence: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "claim_type": int(self.claim_type),
            "sequence": self.sequence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SkipSequenceClaim":
        return cls(
            claim_type=ClaimType(data["claim_type"]),
            sequence=data["sequence"],
        )


CLAIM_TYPES: dict[ClaimType, type[BridgeClaim]] = {
    ClaimType.SKIP_SEQUENCE: SkipSequenceClaim,
    ClaimType.UPDATE_BIND: UpdateBindClaim,
    ClaimType.TRANSFER_OUT_REFUND: TransferOutRefundClaim,
    ClaimType.TRANSFER_IN: TransferInClaim,
}


def decode_claim(claim_type: int, payload: str | dict[str, Any]) -> BridgeClaim:
    """
    Parse a relayed claim payload into its typed record.

    Args:
        claim_type: Numeric claim tag
        payload: JSON text or an already decoded JSON object

    Returns:
        The matching, validated claim instance

    Raises:
        ValueError: If the tag is unknown, the JSON is malformed or the
            claim fails validation
        KeyError: If a required key is missing
    """
    try:
        claim_cls = CLAIM_TYPES[ClaimType(claim_type)]
    except ValueError:
        raise ValueError(f"Unknown claim type: {claim_type}") from None

    data = json.loads(payload) if isinstance(payload, str) else payload
    claim = claim_cls.from_dict(data)
    claim.validate()

    logger.debug(f"Decoded {claim_cls.__name__}: {claim}")
    return claim
