"""Tests for owner-gated fee configuration."""

import pytest

from feeledger import (
    EventType,
    InvalidParameterValueError,
    RedundantStateToggleError,
    UnauthorizedError,
    ValidationError,
)

from .conftest import ANOTHER, BENEFICIARY, FEE, NEW_BENEFICIARY, OWNER, ZERO, snapshot


class TestEnableFees:
    def test_enables_fees(self, token):
        token.enable_fees(OWNER)
        assert token.fees_enabled is True

    def test_emits_enabled_fees_event(self, token):
        token.enable_fees(OWNER)

        (event,) = token.events
        assert event.event_type == EventType.ENABLED_FEES
        assert event.name == "EnabledFees"

    def test_already_enabled_reverts(self, fee_token):
        with pytest.raises(RedundantStateToggleError) as exc:
            fee_token.enable_fees(OWNER)
        assert exc.value.flag == "fees_enabled"
        assert exc.value.current_state is True

    def test_non_owner_reverts(self, token):
        with pytest.raises(UnauthorizedError) as exc:
            token.enable_fees(ANOTHER)
        assert exc.value.caller == ANOTHER
        assert exc.value.operation == "enable_fees"
        assert token.fees_enabled is False

    def test_ownership_checked_before_state(self, fee_token):
        with pytest.raises(UnauthorizedError):
            fee_token.enable_fees(ANOTHER)


class TestDisableFees:
    def test_disables_fees(self, fee_token):
        fee_token.disable_fees(OWNER)
        assert fee_token.fees_enabled is False

    def test_emits_disabled_fees_event(self, fee_token):
        fee_token.disable_fees(OWNER)
        assert fee_token.events[-1].event_type == EventType.DISABLED_FEES

    def test_already_disabled_reverts(self, token):
        with pytest.raises(RedundantStateToggleError):
            token.disable_fees(OWNER)

    def test_non_owner_reverts(self, fee_token):
        with pytest.raises(UnauthorizedError):
            fee_token.disable_fees(ANOTHER)


class TestSetFee:
    def test_updates_fee(self, token):
        token.set_fee(OWNER, 10_000)
        assert token.fee == 10_000

    def test_emits_fee_changed_event(self, token):
        token.set_fee(OWNER, 10_000)

        (event,) = token.events
        assert event.event_type == EventType.FEE_CHANGED
        assert event.args == {"fee": 10_000}

    def test_accepts_100_percent(self, token):
        token.set_fee(OWNER, 1_000_000)
        assert token.fee == 1_000_000

    def test_accepts_minimum(self, token):
        token.set_fee(OWNER, 1)
        assert token.fee == 1

    @pytest.mark.parametrize("bad_fee", [0, 1_000_001, -1, True, "5000"])
    def test_out_of_range_reverts(self, token, bad_fee):
        before = snapshot(token, OWNER)
        with pytest.raises(InvalidParameterValueError) as exc:
            token.set_fee(OWNER, bad_fee)
        assert exc.value.parameter == "fee"
        assert snapshot(token, OWNER) == before

    def test_non_owner_reverts(self, token):
        with pytest.raises(UnauthorizedError):
            token.set_fee(ANOTHER, 10_000)
        assert token.fee == FEE

    @pytest.mark.parametrize("bad_fee", [-1, 0, "5000"])
    def test_ownership_checked_before_value(self, token, bad_fee):
        with pytest.raises(UnauthorizedError):
            token.set_fee(ANOTHER, bad_fee)

    def test_not_gated_by_pause(self, token):
        token.pause(OWNER)
        token.set_fee(OWNER, 10_000)
        assert token.fee == 10_000


class TestSetFeeBeneficiary:
    def test_updates_beneficiary(self, token):
        token.set_fee_beneficiary(OWNER, NEW_BENEFICIARY)
        assert token.fee_beneficiary == NEW_BENEFICIARY

    def test_emits_event(self, token):
        token.set_fee_beneficiary(OWNER, NEW_BENEFICIARY)

        (event,) = token.events
        assert event.event_type == EventType.FEE_BENEFICIARY_CHANGED
        assert event.args == {"feeBeneficiary": NEW_BENEFICIARY}

    def test_zero_address_reverts(self, token):
        with pytest.raises(InvalidParameterValueError):
            token.set_fee_beneficiary(OWNER, ZERO)
        assert token.fee_beneficiary == BENEFICIARY

    def test_non_owner_reverts(self, token):
        with pytest.raises(UnauthorizedError):
            token.set_fee_beneficiary(ANOTHER, NEW_BENEFICIARY)

    @pytest.mark.parametrize("bad_beneficiary", ["nope", ZERO, b"\x01"])
    def test_ownership_checked_before_address(self, token, bad_beneficiary):
        with pytest.raises(UnauthorizedError):
            token.set_fee_beneficiary(ANOTHER, bad_beneficiary)
        assert token.fee_beneficiary == BENEFICIARY

    def test_new_beneficiary_receives_fees(self, fee_token):
        fee_token.set_fee_beneficiary(OWNER, NEW_BENEFICIARY)
        amount = fee_token.fee_threshold
        fee_token.transfer(OWNER, ANOTHER, amount)

        fee_token.transfer(ANOTHER, OWNER, amount)

        assert fee_token.balance_of(NEW_BENEFICIARY) == amount * FEE // 1_000_000
        assert fee_token.balance_of(BENEFICIARY) == 0


class TestSetFeeThreshold:
    def test_updates_threshold(self, token):
        token.set_fee_threshold(OWNER, 42)
        assert token.fee_threshold == 42

    def test_emits_event(self, token):
        token.set_fee_threshold(OWNER, 42)

        (event,) = token.events
        assert event.event_type == EventType.FEE_THRESHOLD_CHANGED
        assert event.args == {"feeThreshold": 42}

    def test_zero_reverts(self, token):
        with pytest.raises(InvalidParameterValueError) as exc:
            token.set_fee_threshold(OWNER, 0)
        assert exc.value.parameter == "feeThreshold"

    def test_non_owner_reverts(self, token):
        with pytest.raises(UnauthorizedError):
            token.set_fee_threshold(ANOTHER, 42)

    @pytest.mark.parametrize("bad_threshold", [-1, 0, "42"])
    def test_ownership_checked_before_value(self, token, bad_threshold):
        with pytest.raises(UnauthorizedError):
            token.set_fee_threshold(ANOTHER, bad_threshold)

    def test_malformed_threshold_reverts_for_owner(self, token):
        with pytest.raises(ValidationError):
            token.set_fee_threshold(OWNER, -1)
