"""
Token module - the fee-augmented ledger state machine.
"""

from feeledger.token.events import EventType, TokenEvent
from feeledger.token.token import FeeToken

__all__ = [
    "EventType",
    "FeeToken",
    "TokenEvent",
]
