"""
feeledger - Fee-augmented fungible token ledger.

Usage:
    >>> from feeledger import FeeToken
    >>>
    >>> token = FeeToken(5000, beneficiary, 500 * 10**18, deployer=owner)
    >>> token.enable_fees(owner)
    >>> token.transfer(owner, alice, 1000 * 10**18)
    True
"""

from feeledger.core.config import Config
from feeledger.core.exceptions import (
    ArithmeticOverflowError,
    ConfigurationError,
    FeeLedgerError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidConstructorParameterError,
    InvalidParameterValueError,
    InvalidRecipientError,
    PausedError,
    RedundantStateToggleError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from feeledger.core.logging import configure_from_config, configure_logging, get_logger
from feeledger.core.types import MAX_UINT256, ZERO_ADDRESS, FeeBreakdown, to_address
from feeledger.journal import EventJournal
from feeledger.token import EventType, FeeToken, TokenEvent

__version__ = "0.1.0"

__all__ = [
    # Ledger
    "FeeToken",
    "FeeBreakdown",
    "TokenEvent",
    "EventType",
    "EventJournal",
    # Config & logging
    "Config",
    "configure_logging",
    "configure_from_config",
    "get_logger",
    # Address helpers
    "to_address",
    "ZERO_ADDRESS",
    "MAX_UINT256",
    # Exceptions
    "FeeLedgerError",
    "ConfigurationError",
    "ValidationError",
    "InvalidConstructorParameterError",
    "UnauthorizedError",
    "InvalidRecipientError",
    "InsufficientBalanceError",
    "InsufficientAllowanceError",
    "InvalidParameterValueError",
    "RedundantStateToggleError",
    "PausedError",
    "ArithmeticOverflowError",
    "StorageError",
]
