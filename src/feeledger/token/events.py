"""
Event records emitted by the token ledger.

Every successful mutating operation appends zero or more events to the
ledger's append-only log. Argument names follow the token's public ABI
(``from``, ``to``, ``value``, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

# Argument keys whose values are uint256 integers
_INT_ARGS = frozenset({"value", "fee", "feeThreshold"})


class EventType(str, Enum):
    """Types of ledger events."""

    TRANSFER = "Transfer"
    APPROVAL = "Approval"
    ENABLED_FEES = "EnabledFees"
    DISABLED_FEES = "DisabledFees"
    FEE_CHANGED = "FeeChanged"
    FEE_BENEFICIARY_CHANGED = "FeeBeneficiaryChanged"
    FEE_THRESHOLD_CHANGED = "FeeThresholdChanged"
    PAUSE = "Pause"
    UNPAUSE = "Unpause"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


@dataclass(frozen=True)
class TokenEvent:
    """
    A single emitted ledger event.

    Attributes:
        event_type: Which event this is
        args: Event arguments keyed by ABI name
        index: Position in the ledger's event log (0-based)
        timestamp: When the event was emitted
    """

    event_type: EventType
    args: Mapping[str, Any] = field(default_factory=dict)
    index: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    @property
    def name(self) -> str:
        return self.event_type.value

    def involves(self, address: str) -> bool:
        """Check whether an address appears in any argument."""
        return any(v == address for k, v in self.args.items() if k not in _INT_ARGS)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "index": self.index,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "args": {k: str(v) if k in _INT_ARGS else v for k, v in self.args.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenEvent:
        """Create TokenEvent from dictionary."""
        ts_str = data.get("timestamp")
        timestamp = datetime.fromisoformat(ts_str) if ts_str else datetime.now()

        args = {
            k: int(v) if k in _INT_ARGS else v for k, v in (data.get("args") or {}).items()
        }

        return cls(
            event_type=EventType(data["event_type"]),
            args=args,
            index=int(data.get("index", 0)),
            timestamp=timestamp,
        )


def transfer_event(sender: str, recipient: str, value: int) -> TokenEvent:
    return TokenEvent(EventType.TRANSFER, {"from": sender, "to": recipient, "value": value})


def approval_event(owner: str, spender: str, value: int) -> TokenEvent:
    return TokenEvent(EventType.APPROVAL, {"owner": owner, "spender": spender, "value": value})
