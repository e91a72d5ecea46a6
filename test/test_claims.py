#!/usr/bin/env python3
"""Tests for the oracle claim records."""

import json

import pytest

from bridge_msg.claims import (
    CLAIM_TYPES,
    BindStatus,
    ClaimType,
    RefundReason,
    SkipSequenceClaim,
    TransferInClaim,
    TransferOutRefundClaim,
    UpdateBindClaim,
    decode_claim,
)
from bridge_msg.errors import ValidationError
from bridge_msg.types import AccountAddress, Coin, ForeignAddress

CONTRACT = ForeignAddress.from_hex("0x" + "aa" * 20)
REFUND_A = ForeignAddress.from_hex("0x" + "01" * 20)
REFUND_B = ForeignAddress.from_hex("0x" + "02" * 20)
RECEIVER_A = AccountAddress(b"\x0a" * 20)
RECEIVER_B = AccountAddress(b"\x0b" * 20)


def make_transfer_in(**overrides) -> TransferInClaim:
    fields = dict(
        contract_address=CONTRACT,
        refund_addresses=[REFUND_A, REFUND_B],
        receiver_addresses=[RECEIVER_A, RECEIVER_B],
        amounts=[100, 200],
        symbol="BNB",
        relay_fee=Coin("BNB", 10),
        expire_time=1700000000,
    )
    fields.update(overrides)
    return TransferInClaim(**fields)


class TestEnums:
    """Tests for the claim enumerations."""

    def test_refund_reason_values(self):
        """Test refund reason wire values."""
        assert RefundReason.UNBOUND_TOKEN == 1
        assert RefundReason.TIMEOUT == 2
        assert RefundReason.INSUFFICIENT_BALANCE == 3
        assert RefundReason.UNKNOWN == 4

    def test_bind_status_values(self):
        """Test bind status wire values."""
        assert BindStatus.SUCCESS == 0
        assert BindStatus.REJECTED == 1
        assert BindStatus.TIMEOUT == 2
        assert BindStatus.INVALID_PARAMETER == 3

    def test_claim_type_values(self):
        """Test claim type tags."""
        assert [int(t) for t in ClaimType] == [1, 2, 3, 4]

    def test_every_claim_type_has_a_record(self):
        """Test that the dispatch table covers every tag."""
        assert set(CLAIM_TYPES) == set(ClaimType)
        for claim_type, claim_cls in CLAIM_TYPES.items():
            assert claim_cls.CLAIM_TYPE == claim_type


class TestTransferInClaim:
    """Tests for TransferInClaim."""

    def test_sequences_frozen_to_tuples(self):
        """Test that list inputs are stored as tuples."""
        claim = make_transfer_in()
        assert claim.amounts == (100, 200)
        assert isinstance(claim.refund_addresses, tuple)
        assert isinstance(claim.receiver_addresses, tuple)

    def test_to_dict_keys_and_types(self):
        """Test the wire keys, their order and JSON types."""
        data = make_transfer_in().to_dict()

        assert list(data) == [
            "contract_address",
            "refund_addresses",
            "receiver_addresses",
            "amounts",
            "symbol",
            "relay_fee",
            "expire_time",
        ]
        assert data["contract_address"] == "0x" + "aa" * 20
        assert data["refund_addresses"] == ["0x" + "01" * 20, "0x" + "02" * 20]
        assert data["receiver_addresses"] == [str(RECEIVER_A), str(RECEIVER_B)]
        assert data["amounts"] == [100, 200]
        assert data["relay_fee"] == {"denom": "BNB", "amount": 10}
        assert data["expire_time"] == 1700000000

    def test_valid_claim(self):
        """Test that matching sequence lengths pass validation."""
        make_transfer_in().validate()
        make_transfer_in(refund_addresses=[], receiver_addresses=[], amounts=[]).validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amounts": [100]},
            {"refund_addresses": [REFUND_A]},
            {"receiver_addresses": [RECEIVER_A, RECEIVER_B, RECEIVER_A]},
        ],
    )
    def test_length_mismatch_rejected(self, overrides):
        """Test that mismatched sequence lengths are rejected."""
        with pytest.raises(ValidationError, match="should be equal"):
            make_transfer_in(**overrides).validate()

    def test_json_round_trip(self):
        """Test decoding a claim from its JSON form."""
        claim = make_transfer_in()
        assert decode_claim(ClaimType.TRANSFER_IN, claim.to_json()) == claim

    def test_decode_rejects_length_mismatch(self):
        """Test that decoded claims are validated."""
        data = make_transfer_in().to_dict()
        data["amounts"] = [100]
        with pytest.raises(ValidationError):
            decode_claim(ClaimType.TRANSFER_IN, data)

    def test_decode_rejects_malformed_address(self):
        """Test that malformed addresses in a payload are not zeroed."""
        data = make_transfer_in().to_dict()
        data["refund_addresses"][0] = "0xnothex"
        with pytest.raises(ValueError):
            decode_claim(ClaimType.TRANSFER_IN, data)


class TestTransferOutRefundClaim:
    """Tests for TransferOutRefundClaim."""

    def test_to_dict(self):
        """Test the wire dict."""
        claim = TransferOutRefundClaim(
            refund_address=RECEIVER_A,
            amount=Coin("BNB", 5),
            refund_reason=RefundReason.TIMEOUT,
        )
        assert claim.to_dict() == {
            "refund_address": str(RECEIVER_A),
            "amount": {"denom": "BNB", "amount": 5},
            "refund_reason": 2,
        }

    def test_round_trip(self):
        """Test decoding by claim type."""
        claim = TransferOutRefundClaim(RECEIVER_B, Coin("XYZ-000", 1), RefundReason.UNBOUND_TOKEN)
        decoded = decode_claim(3, claim.to_json())
        assert decoded == claim
        assert decoded.refund_reason is RefundReason.UNBOUND_TOKEN

    def test_unknown_refund_reason(self):
        """Test that an unknown refund reason is rejected."""
        payload = {
            "refund_address": str(RECEIVER_A),
            "amount": {"denom": "BNB", "amount": 5},
            "refund_reason": 9,
        }
        with pytest.raises(ValueError):
            decode_claim(ClaimType.TRANSFER_OUT_REFUND, payload)


class TestUpdateBindClaim:
    """Tests for UpdateBindClaim."""

    def test_to_json(self):
        """Test the compact JSON form."""
        claim = UpdateBindClaim(BindStatus.REJECTED, "BNB", CONTRACT)
        assert claim.to_json() == (
            f'{{"status":1,"symbol":"BNB","contract_address":"0x{"aa" * 20}"}}'
        )

    def test_round_trip(self):
        """Test decoding by claim type."""
        claim = UpdateBindClaim(BindStatus.SUCCESS, "ABC-123", CONTRACT)
        assert decode_claim(ClaimType.UPDATE_BIND, claim.to_json()) == claim


class TestSkipSequenceClaim:
    """Tests for SkipSequenceClaim."""

    def test_to_dict(self):
        """Test that the claim type is a JSON number."""
        claim = SkipSequenceClaim(ClaimType.TRANSFER_IN, 42)
        assert json.loads(claim.to_json()) == {"claim_type": 4, "sequence": 42}

    def test_round_trip(self):
        """Test decoding by claim type."""
        claim = SkipSequenceClaim(ClaimType.UPDATE_BIND, 7)
        decoded = decode_claim(ClaimType.SKIP_SEQUENCE, claim.to_dict())
        assert decoded == claim
        assert decoded.claim_type is ClaimType.UPDATE_BIND


class TestDecodeClaim:
    """Tests for decode_claim dispatch."""

    def test_unknown_claim_type(self):
        """Test that unknown tags are rejected."""
        with pytest.raises(ValueError, match="Unknown claim type: 9"):
            decode_claim(9, {})

    def test_malformed_json(self):
        """Test that malformed JSON text is rejected."""
        with pytest.raises(ValueError):
            decode_claim(ClaimType.SKIP_SEQUENCE, "{not json")

    def test_missing_key(self):
        """Test that a missing key is reported."""
        with pytest.raises(KeyError):
            decode_claim(ClaimType.SKIP_SEQUENCE, {"claim_type": 1})
