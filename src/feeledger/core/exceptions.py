"""
Exception hierarchy for feeledger.

All ledger-specific exceptions inherit from FeeLedgerError for easy catching.
Every rejected operation raises one of these before any state is touched.
"""

from __future__ import annotations

from typing import Any


class FeeLedgerError(Exception):
    """
    Base exception for all feeledger errors.

    Example:
        >>> try:
        ...     token.transfer(sender, recipient, 10)
        ... except FeeLedgerError as e:
        ...     print(f"Rejected: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(FeeLedgerError):
    """
    Configuration is missing or invalid.

    Raised when:
    - Required environment variables are not set
    - Environment values cannot be parsed
    """

    pass


class ValidationError(FeeLedgerError):
    """
    Input validation error.

    Raised when:
    - An address is not a 20-byte identifier
    - An amount is not an integer in the uint256 range
    """

    pass


class InvalidConstructorParameterError(FeeLedgerError):
    """
    Deployment parameters failed validation.

    Raised when:
    - fee is 0 or greater than 1,000,000
    - feeBeneficiary is the zero address
    - feeThreshold is 0
    """

    def __init__(
        self,
        message: str,
        parameter: str,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.parameter = parameter
        self.value = value


class UnauthorizedError(FeeLedgerError):
    """A non-owner invoked an owner-gated operation."""

    def __init__(
        self,
        message: str,
        caller: str,
        owner: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.caller = caller
        self.owner = owner
        self.operation = operation

    def __str__(self) -> str:
        return f"[{self.operation}] {self.message} (caller: {self.caller})"


class InvalidRecipientError(FeeLedgerError):
    """Tokens were sent to the zero address."""

    def __init__(
        self,
        message: str,
        recipient: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.recipient = recipient


class InsufficientBalanceError(FeeLedgerError):
    """
    Account does not hold enough tokens for the transfer.

    The full requested amount is compared, fee included.
    """

    def __init__(
        self,
        message: str,
        account: str,
        current_balance: int,
        required_amount: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.account = account
        self.current_balance = current_balance
        self.required_amount = required_amount
        self.shortfall = required_amount - current_balance

    def __str__(self) -> str:
        return (
            f"{self.message} | "
            f"Balance: {self.current_balance}, Required: {self.required_amount}, "
            f"Shortfall: {self.shortfall}"
        )


class InsufficientAllowanceError(FeeLedgerError):
    """Spender's approved amount is below the requested transfer amount."""

    def __init__(
        self,
        message: str,
        owner: str,
        spender: str,
        current_allowance: int,
        required_amount: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.owner = owner
        self.spender = spender
        self.current_allowance = current_allowance
        self.required_amount = required_amount

    def __str__(self) -> str:
        return (
            f"{self.message} | "
            f"Allowance: {self.current_allowance}, Required: {self.required_amount}"
        )


class InvalidParameterValueError(FeeLedgerError):
    """
    An owner-gated setter received a value that fails validation.

    Raised by set_fee, set_fee_beneficiary, set_fee_threshold and
    transfer_ownership.
    """

    def __init__(
        self,
        message: str,
        parameter: str,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.parameter = parameter
        self.value = value


class RedundantStateToggleError(FeeLedgerError):
    """A flag was switched to the state it already holds."""

    def __init__(
        self,
        message: str,
        flag: str,
        current_state: bool,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.flag = flag
        self.current_state = current_state


class PausedError(FeeLedgerError):
    """A balance-mutating operation was attempted while the ledger is paused."""

    def __init__(
        self,
        message: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation


class ArithmeticOverflowError(FeeLedgerError):
    """A uint256 result would exceed 2**256 - 1."""

    pass


class StorageError(FeeLedgerError):
    """
    Journal persistence failed.

    Raised when a storage backend rejects a write after retries.
    """

    def __init__(
        self,
        message: str,
        backend: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.backend = backend
