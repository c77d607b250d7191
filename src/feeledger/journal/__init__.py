"""
Journal module - persistence of emitted ledger events.
"""

from feeledger.journal.journal import EventJournal

__all__ = ["EventJournal"]
