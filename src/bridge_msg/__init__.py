"""
Bridge message package.

Construction, validation and sign-byte generation for cross-chain bridge
messages and oracle claims.
"""

from .claims import (
    BindStatus,
    ClaimType,
    RefundReason,
    SkipSequenceClaim,
    TransferInClaim,
    TransferOutRefundClaim,
    UpdateBindClaim,
    decode_claim,
)
from .config import NetworkConfig
from .errors import EncodingDefect, ValidationError
from .msgs import (
    BIND_MSG_TYPE,
    ROUTE_BRIDGE,
    TRANSFER_OUT_MSG_TYPE,
    BindMsg,
    TransferOutMsg,
    decode_msg,
)
from .types import AccountAddress, Coin, ForeignAddress

__all__ = [
    "AccountAddress",
    "BIND_MSG_TYPE",
    "BindMsg",
    "BindStatus",
    "ClaimType",
    "Coin",
    "EncodingDefect",
    "ForeignAddress",
    "NetworkConfig",
    "ROUTE_BRIDGE",
    "RefundReason",
    "SkipSequenceClaim",
    "TRANSFER_OUT_MSG_TYPE",
    "TransferInClaim",
    "TransferOutMsg",
    "TransferOutRefundClaim",
    "UpdateBindClaim",
    "ValidationError",
    "decode_claim",
    "decode_msg",
]
__version__ = "0.1.0"
