from typing import Dict, Optional


class LedgerError(Exception):
    pass


class InvalidAmount(LedgerError, ValueError):
    """Amount is negative, not a finite number, or too large for 4 decimal fixed point."""


class MalformedRecordError(LedgerError):
    """Input row could not be turned into a Transaction (raised in strict mode only)."""

    def __init__(self, line_number: int, reason: str, row: Optional[Dict[str, str]] = None):
        self.line_number = line_number
        self.reason = reason
        self.row = row
        super().__init__(f"line {line_number}: {reason}")
