"""Tests for the pause switch."""

import pytest

from feeledger import EventType, PausedError, RedundantStateToggleError, UnauthorizedError

from .conftest import ANOTHER, OWNER, RECIPIENT, TOTAL_SUPPLY, snapshot


class TestPause:
    def test_pauses_the_token(self, token):
        token.pause(OWNER)
        assert token.paused is True

    def test_emits_pause_event(self, token):
        token.pause(OWNER)
        (event,) = token.events
        assert event.event_type == EventType.PAUSE

    def test_already_paused_reverts(self, token):
        token.pause(OWNER)
        with pytest.raises(RedundantStateToggleError):
            token.pause(OWNER)

    def test_non_owner_reverts(self, token):
        with pytest.raises(UnauthorizedError):
            token.pause(ANOTHER)


class TestUnpause:
    def test_unpauses_the_token(self, token):
        token.pause(OWNER)
        token.unpause(OWNER)
        assert token.paused is False

    def test_emits_unpause_event(self, token):
        token.pause(OWNER)
        token.unpause(OWNER)
        assert token.events[-1].event_type == EventType.UNPAUSE

    def test_not_paused_reverts(self, token):
        with pytest.raises(RedundantStateToggleError):
            token.unpause(OWNER)

    def test_non_owner_reverts(self, token):
        token.pause(OWNER)
        with pytest.raises(UnauthorizedError):
            token.unpause(ANOTHER)


class TestPausableToken:
    """Balance-mutating operations are gated by the pause flag."""

    @pytest.fixture
    def paused_token(self, token):
        token.approve(OWNER, ANOTHER, 100)
        token.pause(OWNER)
        return token

    @pytest.mark.parametrize(
        "operation, args",
        [
            ("transfer", (OWNER, RECIPIENT, 100)),
            ("transfer_from", (ANOTHER, OWNER, RECIPIENT, 100)),
            ("approve", (OWNER, ANOTHER, 40)),
            ("increase_approval", (OWNER, ANOTHER, 40)),
            ("decrease_approval", (OWNER, ANOTHER, 40)),
        ],
    )
    def test_rejects_while_paused(self, paused_token, operation, args):
        before = snapshot(paused_token, OWNER, ANOTHER, RECIPIENT)

        with pytest.raises(PausedError) as exc:
            getattr(paused_token, operation)(*args)

        assert exc.value.operation == operation
        assert snapshot(paused_token, OWNER, ANOTHER, RECIPIENT) == before

    def test_transfer_works_again_after_unpause(self, paused_token):
        paused_token.unpause(OWNER)
        paused_token.transfer(OWNER, RECIPIENT, 100)
        assert paused_token.balance_of(OWNER) == TOTAL_SUPPLY - 100

    def test_owner_is_not_exempt_from_pause(self, paused_token):
        with pytest.raises(PausedError):
            paused_token.transfer(OWNER, RECIPIENT, 1)

    def test_fee_toggles_still_work_while_paused(self, paused_token):
        paused_token.enable_fees(OWNER)
        paused_token.disable_fees(OWNER)
        assert paused_token.fees_enabled is False
