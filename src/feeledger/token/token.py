"""
Fee-augmented fungible token ledger.

A single state object holding balances, allowances, fee parameters, the
paused flag and the owner identity. Every public operation runs under one
re-entrant lock and checks all of its preconditions before touching state,
so a rejected call leaves the ledger exactly as it was.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import TYPE_CHECKING

from feeledger.core.exceptions import (
    ArithmeticOverflowError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidConstructorParameterError,
    InvalidParameterValueError,
    InvalidRecipientError,
    PausedError,
    RedundantStateToggleError,
    UnauthorizedError,
)
from feeledger.core.logging import get_logger
from feeledger.core.types import (
    FEE_DENOMINATOR,
    MAX_FEE,
    MAX_UINT256,
    MIN_FEE,
    TOKEN_DECIMALS,
    TOKEN_NAME,
    TOKEN_SYMBOL,
    TOTAL_SUPPLY,
    AddressLike,
    FeeBreakdown,
    is_zero_address,
    require_uint256,
    to_address,
)
from feeledger.token.events import (
    EventType,
    TokenEvent,
    approval_event,
    transfer_event,
)

if TYPE_CHECKING:
    from feeledger.core.config import Config

logger = get_logger("token")


def _fee_in_range(fee: int) -> bool:
    if isinstance(fee, bool) or not isinstance(fee, int):
        return False
    return MIN_FEE <= fee <= MAX_FEE


class FeeToken:
    """
    Fungible token with an owner-configurable proportional transfer fee.

    Mutating calls take the acting address as an explicit ``caller`` argument.

    Example:
        >>> token = FeeToken(5000, beneficiary, 500 * 10**18, deployer=owner)
        >>> token.enable_fees(owner)
        >>> token.transfer(owner, alice, 1000 * 10**18)
        True
    """

    NAME = TOKEN_NAME
    SYMBOL = TOKEN_SYMBOL
    DECIMALS = TOKEN_DECIMALS
    TOTAL_SUPPLY = TOTAL_SUPPLY

    def __init__(
        self,
        fee: int,
        fee_beneficiary: AddressLike,
        fee_threshold: int,
        *,
        deployer: AddressLike,
    ) -> None:
        """
        Deploy the token.

        Args:
            fee: Fee in parts-per-million (1..1_000_000)
            fee_beneficiary: Account credited with fees (non-zero)
            fee_threshold: Smallest amount that pays a fee (non-zero)
            deployer: Becomes the owner and receives the whole supply

        Raises:
            InvalidConstructorParameterError: If any parameter is invalid
        """
        # Checked in order: fee, beneficiary, threshold, deployer
        if not _fee_in_range(fee):
            raise InvalidConstructorParameterError(
                f"fee must be between {MIN_FEE} and {MAX_FEE}", parameter="fee", value=fee
            )
        beneficiary = to_address(fee_beneficiary)
        if is_zero_address(beneficiary):
            raise InvalidConstructorParameterError(
                "feeBeneficiary cannot be the zero address",
                parameter="feeBeneficiary",
                value=beneficiary,
            )
        require_uint256(fee_threshold, "fee_threshold")
        if fee_threshold == 0:
            raise InvalidConstructorParameterError(
                "feeThreshold must be greater than zero",
                parameter="feeThreshold",
                value=fee_threshold,
            )
        owner = to_address(deployer)

        self._lock = threading.RLock()
        self._owner = owner
        self._total_supply = self.TOTAL_SUPPLY
        self._balances: dict[str, int] = {owner: self.TOTAL_SUPPLY}
        self._allowed: dict[tuple[str, str], int] = {}
        self._fee = fee
        self._fee_beneficiary = beneficiary
        self._fee_threshold = fee_threshold
        self._fees_enabled = False
        self._paused = False
        self._events: list[TokenEvent] = []

        logger.info(
            f"Deployed {self.SYMBOL} ledger (owner: {owner}, fee: {fee}ppm, "
            f"threshold: {fee_threshold})"
        )

    @classmethod
    def from_config(cls, config: Config, deployer: AddressLike) -> FeeToken:
        """Deploy a token using the fee parameters from a Config."""
        return cls(
            config.fee,
            config.fee_beneficiary,
            config.fee_threshold,
            deployer=deployer,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def symbol(self) -> str:
        return self.SYMBOL

    @property
    def decimals(self) -> int:
        return self.DECIMALS

    @property
    def owner(self) -> str:
        with self._lock:
            return self._owner

    @property
    def fee(self) -> int:
        with self._lock:
            return self._fee

    @property
    def fee_beneficiary(self) -> str:
        with self._lock:
            return self._fee_beneficiary

    @property
    def fee_threshold(self) -> int:
        with self._lock:
            return self._fee_threshold

    @property
    def fees_enabled(self) -> bool:
        with self._lock:
            return self._fees_enabled

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    @property
    def events(self) -> tuple[TokenEvent, ...]:
        """Full ordered event log."""
        with self._lock:
            return tuple(self._events)

    def events_since(self, index: int) -> list[TokenEvent]:
        """Events with ``event.index >= index``."""
        with self._lock:
            return self._events[max(index, 0):]

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: AddressLike) -> int:
        addr = to_address(account)
        with self._lock:
            return self._balances.get(addr, 0)

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        key = (to_address(owner), to_address(spender))
        with self._lock:
            return self._allowed.get(key, 0)

    def compute_fee(self, sender: AddressLike, amount: int) -> FeeBreakdown:
        """
        Split ``amount`` into fee and net portions for a transfer out of ``sender``.

        No fee is taken when fees are disabled, the amount is below the
        threshold, or the funds belong to the owner. The fee is truncated.
        """
        sender_addr = to_address(sender)
        require_uint256(amount)
        with self._lock:
            return self._compute_fee(sender_addr, amount)

    def _compute_fee(self, sender: str, amount: int) -> FeeBreakdown:
        if not self._fees_enabled or amount < self._fee_threshold or sender == self._owner:
            return FeeBreakdown(fee_amount=0, net_amount=amount)
        fee_amount = amount * self._fee // FEE_DENOMINATOR
        return FeeBreakdown(fee_amount=fee_amount, net_amount=amount - fee_amount)

    # ------------------------------------------------------------------
    # Internal guards
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str, operation: str) -> None:
        if caller != self._owner:
            logger.warning(f"Rejected {operation} from non-owner {caller}")
            raise UnauthorizedError(
                "Caller is not the owner",
                caller=caller,
                owner=self._owner,
                operation=operation,
            )

    def _require_not_paused(self, operation: str) -> None:
        if self._paused:
            raise PausedError("Ledger is paused", operation=operation)

    def _require_recipient(self, recipient: str) -> None:
        if is_zero_address(recipient):
            raise InvalidRecipientError("Cannot transfer to the zero address", recipient=recipient)

    def _require_balance(self, account: str, amount: int) -> None:
        balance = self._balances.get(account, 0)
        if balance < amount:
            raise InsufficientBalanceError(
                "Insufficient balance",
                account=account,
                current_balance=balance,
                required_amount=amount,
            )

    def _emit(self, *events: TokenEvent) -> None:
        base = len(self._events)
        self._events.extend(replace(e, index=base + i) for i, e in enumerate(events))

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        """Debit, fee split and credit. Preconditions already hold."""
        breakdown = self._compute_fee(sender, amount)

        self._balances[sender] = self._balances.get(sender, 0) - amount
        if breakdown.charged:
            beneficiary = self._fee_beneficiary
            self._balances[beneficiary] = self._balances.get(beneficiary, 0) + breakdown.fee_amount
            self._balances[recipient] = self._balances.get(recipient, 0) + breakdown.net_amount
            self._emit(
                transfer_event(sender, beneficiary, breakdown.fee_amount),
                transfer_event(sender, recipient, breakdown.net_amount),
            )
        else:
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
            self._emit(transfer_event(sender, recipient, amount))

        logger.debug(
            f"Transfer {sender} -> {recipient}: {amount} (fee: {breakdown.fee_amount})"
        )

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def transfer(self, caller: AddressLike, to: AddressLike, amount: int) -> bool:
        """
        Move ``amount`` from the caller to ``to``, taking a fee when it applies.

        The caller is debited the full amount; the recipient receives the
        amount minus the fee.

        Raises:
            PausedError: If the ledger is paused
            InvalidRecipientError: If ``to`` is the zero address
            InsufficientBalanceError: If the caller holds less than ``amount``
        """
        sender = to_address(caller)
        recipient = to_address(to)
        require_uint256(amount)

        with self._lock:
            self._require_not_paused("transfer")
            self._require_recipient(recipient)
            self._require_balance(sender, amount)

            self._move(sender, recipient, amount)
            return True

    def transfer_from(
        self,
        caller: AddressLike,
        from_: AddressLike,
        to: AddressLike,
        amount: int,
    ) -> bool:
        """
        Move ``amount`` out of ``from_`` on behalf of the calling spender.

        The fee exemption is decided by ``from_``, not by the spender. The
        allowance is reduced by the full ``amount`` even when a fee is taken.

        Raises:
            PausedError: If the ledger is paused
            InvalidRecipientError: If ``to`` is the zero address
            InsufficientBalanceError: If ``from_`` holds less than ``amount``
            InsufficientAllowanceError: If the spender's allowance is below ``amount``
        """
        spender = to_address(caller)
        holder = to_address(from_)
        recipient = to_address(to)
        require_uint256(amount)

        with self._lock:
            self._require_not_paused("transfer_from")
            self._require_recipient(recipient)
            self._require_balance(holder, amount)

            allowed = self._allowed.get((holder, spender), 0)
            if allowed < amount:
                raise InsufficientAllowanceError(
                    "Insufficient allowance",
                    owner=holder,
                    spender=spender,
                    current_allowance=allowed,
                    required_amount=amount,
                )

            self._move(holder, recipient, amount)
            self._allowed[(holder, spender)] = allowed - amount
            return True

    # ------------------------------------------------------------------
    # Allowances
    # ------------------------------------------------------------------

    def _set_allowance(self, owner: str, spender: str, value: int) -> None:
        self._allowed[(owner, spender)] = value
        self._emit(approval_event(owner, spender, value))
        logger.debug(f"Allowance {owner} -> {spender} set to {value}")

    def approve(self, caller: AddressLike, spender: AddressLike, amount: int) -> bool:
        """Set the spender's allowance over the caller's funds, replacing any previous value."""
        owner = to_address(caller)
        spender_addr = to_address(spender)
        require_uint256(amount)

        with self._lock:
            self._require_not_paused("approve")
            self._set_allowance(owner, spender_addr, amount)
            return True

    def increase_approval(self, caller: AddressLike, spender: AddressLike, delta: int) -> bool:
        """
        Add ``delta`` to the spender's allowance.

        Raises:
            ArithmeticOverflowError: If the result exceeds the uint256 range
        """
        owner = to_address(caller)
        spender_addr = to_address(spender)
        require_uint256(delta, "delta")

        with self._lock:
            self._require_not_paused("increase_approval")
            current = self._allowed.get((owner, spender_addr), 0)
            if current + delta > MAX_UINT256:
                raise ArithmeticOverflowError(
                    "Allowance overflow",
                    details={"current": str(current), "delta": str(delta)},
                )
            self._set_allowance(owner, spender_addr, current + delta)
            return True

    def decrease_approval(self, caller: AddressLike, spender: AddressLike, delta: int) -> bool:
        """Subtract ``delta`` from the spender's allowance, stopping at zero."""
        owner = to_address(caller)
        spender_addr = to_address(spender)
        require_uint256(delta, "delta")

        with self._lock:
            self._require_not_paused("decrease_approval")
            current = self._allowed.get((owner, spender_addr), 0)
            self._set_allowance(owner, spender_addr, max(current - delta, 0))
            return True

    # ------------------------------------------------------------------
    # Owner-gated configuration
    # ------------------------------------------------------------------

    def enable_fees(self, caller: AddressLike) -> None:
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "enable_fees")
            if self._fees_enabled:
                raise RedundantStateToggleError(
                    "Fees are already enabled", flag="fees_enabled", current_state=True
                )
            self._fees_enabled = True
            self._emit(TokenEvent(EventType.ENABLED_FEES))
            logger.info("Fees enabled")

    def disable_fees(self, caller: AddressLike) -> None:
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "disable_fees")
            if not self._fees_enabled:
                raise RedundantStateToggleError(
                    "Fees are already disabled", flag="fees_enabled", current_state=False
                )
            self._fees_enabled = False
            self._emit(TokenEvent(EventType.DISABLED_FEES))
            logger.info("Fees disabled")

    def set_fee(self, caller: AddressLike, fee: int) -> None:
        """
        Change the fee (parts-per-million).

        Raises:
            UnauthorizedError: If the caller is not the owner
            InvalidParameterValueError: If fee is outside 1..1_000_000
        """
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "set_fee")
            if not _fee_in_range(fee):
                raise InvalidParameterValueError(
                    f"fee must be between {MIN_FEE} and {MAX_FEE}", parameter="fee", value=fee
                )
            self._fee = fee
            self._emit(TokenEvent(EventType.FEE_CHANGED, {"fee": fee}))
            logger.info(f"Fee changed to {fee}ppm")

    def set_fee_beneficiary(self, caller: AddressLike, fee_beneficiary: AddressLike) -> None:
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "set_fee_beneficiary")
            beneficiary = to_address(fee_beneficiary)
            if is_zero_address(beneficiary):
                raise InvalidParameterValueError(
                    "feeBeneficiary cannot be the zero address",
                    parameter="feeBeneficiary",
                    value=beneficiary,
                )
            self._fee_beneficiary = beneficiary
            self._emit(
                TokenEvent(EventType.FEE_BENEFICIARY_CHANGED, {"feeBeneficiary": beneficiary})
            )
            logger.info(f"Fee beneficiary changed to {beneficiary}")

    def set_fee_threshold(self, caller: AddressLike, fee_threshold: int) -> None:
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "set_fee_threshold")
            require_uint256(fee_threshold, "fee_threshold")
            if fee_threshold == 0:
                raise InvalidParameterValueError(
                    "feeThreshold must be greater than zero",
                    parameter="feeThreshold",
                    value=fee_threshold,
                )
            self._fee_threshold = fee_threshold
            self._emit(
                TokenEvent(EventType.FEE_THRESHOLD_CHANGED, {"feeThreshold": fee_threshold})
            )
            logger.info(f"Fee threshold changed to {fee_threshold}")

    def pause(self, caller: AddressLike) -> None:
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "pause")
            if self._paused:
                raise RedundantStateToggleError(
                    "Ledger is already paused", flag="paused", current_state=True
                )
            self._paused = True
            self._emit(TokenEvent(EventType.PAUSE))
            logger.info("Ledger paused")

    def unpause(self, caller: AddressLike) -> None:
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "unpause")
            if not self._paused:
                raise RedundantStateToggleError(
                    "Ledger is not paused", flag="paused", current_state=False
                )
            self._paused = False
            self._emit(TokenEvent(EventType.UNPAUSE))
            logger.info("Ledger unpaused")

    def transfer_ownership(self, caller: AddressLike, new_owner: AddressLike) -> None:
        """
        Hand the owner role to ``new_owner``.

        Balances are not moved. The new owner becomes the fee-exempt party.
        """
        addr = to_address(caller)
        with self._lock:
            self._require_owner(addr, "transfer_ownership")
            successor = to_address(new_owner)
            if is_zero_address(successor):
                raise InvalidParameterValueError(
                    "New owner cannot be the zero address",
                    parameter="newOwner",
                    value=successor,
                )
            previous = self._owner
            self._owner = successor
            self._emit(
                TokenEvent(
                    EventType.OWNERSHIP_TRANSFERRED,
                    {"previousOwner": previous, "newOwner": successor},
                )
            )
            logger.info(f"Ownership transferred from {previous} to {successor}")
