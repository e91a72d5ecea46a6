"""
Field constraint checks for bridge messages and claims.

Each check raises ``ValidationError`` on the first violated constraint it
meets. Callers should only rely on a message being rejected or accepted,
not on which field is reported when several are invalid.
"""

import logging
from typing import TYPE_CHECKING

from .errors import ValidationError
from .types import ACCOUNT_ADDRESS_LENGTH

if TYPE_CHECKING:
    from .claims import TransferInClaim
    from .msgs import BindMsg, TransferOutMsg

logger = logging.getLogger(__name__)

# Integer widths the remote decoder uses for each field.
INT64_MAX = 2**63 - 1
INT8_MAX = 2**7 - 1


def _check_sender(length: int) -> None:
    if length != ACCOUNT_ADDRESS_LENGTH:
        raise ValidationError("from", f"address length should be {ACCOUNT_ADDRESS_LENGTH}")


def _check_int(field: str, value: object) -> None:
    # bool is an int subclass but encodes as a JSON literal
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(field, f"{field} should be an integer, got {type(value).__name__}")


def _check_text(field: str, value: object) -> None:
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} should be a string, got {type(value).__name__}")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError(field, f"{field} is not valid UTF-8 text") from e


def _check_expire_time(expire_time: int) -> None:
    _check_int("expire_time", expire_time)
    if expire_time <= 0:
        raise ValidationError("expire_time", "expire time should be larger than 0")
    if expire_time > INT64_MAX:
        raise ValidationError("expire_time", "expire time exceeds int64 range")


def validate_bind(msg: "BindMsg") -> None:
    """
    Check a bind request before it is signed.

    A message that passes these checks always has sign bytes.

    Args:
        msg: Bind message to check

    Raises:
        ValidationError: If any field violates its constraint
    """
    _check_sender(len(msg.from_address))

    _check_text("symbol", msg.symbol)
    if not msg.symbol:
        raise ValidationError("symbol", "symbol should not be empty")

    _check_int("amount", msg.amount)
    if msg.amount <= 0:
        raise ValidationError("amount", "amount should be larger than 0")
    if msg.amount > INT64_MAX:
        raise ValidationError("amount", "amount exceeds int64 range")

    if msg.contract_address.is_empty():
        raise ValidationError("contract_address", "contract address should not be empty")

    _check_int("contract_decimals", msg.contract_decimals)
    if msg.contract_decimals < 0:
        raise ValidationError("contract_decimals", "decimal should be no less than 0")
    if msg.contract_decimals > INT8_MAX:
        raise ValidationError("contract_decimals", f"decimal should be no more than {INT8_MAX}")

    _check_expire_time(msg.expire_time)


def validate_transfer_out(msg: "TransferOutMsg") -> None:
    """
    Check an outbound transfer before it is signed.

    Raises:
        ValidationError: If any field violates its constraint
    """
    _check_sender(len(msg.from_address))

    if msg.to.is_empty():
        raise ValidationError("to", "to address should not be empty")

    _check_text("amount", msg.amount.denom)
    _check_int("amount", msg.amount.amount)
    if not msg.amount.is_positive():
        raise ValidationError("amount", "amount should be positive")
    if msg.amount.amount > INT64_MAX:
        raise ValidationError("amount", "amount exceeds int64 range")

    _check_expire_time(msg.expire_time)


def validate_transfer_in(claim: "TransferInClaim") -> None:
    """Check that each inbound transfer has a refund address, receiver and amount."""
    refunds = len(claim.refund_addresses)
    receivers = len(claim.receiver_addresses)
    amounts = len(claim.amounts)

    if not refunds == receivers == amounts:
        logger.debug(
            f"TransferInClaim length mismatch: refunds={refunds}, "
            f"receivers={receivers}, amounts={amounts}"
        )
        raise ValidationError(
            "amounts",
            "length of refund_addresses, receiver_addresses and amounts should be equal",
        )
