from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from amount import Amount


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class Outcome(Enum):
    """Result of applying one transaction. Everything except APPLIED is a no-op."""

    APPLIED = "applied"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_TRANSACTION = "unknown_transaction"
    UNAUTHORIZED_DISPUTE = "unauthorized_dispute"
    NON_DISPUTABLE_TYPE = "non_disputable_type"
    ALREADY_DISPUTED = "already_disputed"
    NOT_DISPUTED = "not_disputed"
    ACCOUNT_LOCKED = "account_locked"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Amount] = None

    def __post_init__(self):
        if self.transaction_type.carries_amount and self.amount is None:
            raise ValueError(f"{self.transaction_type.value} tx {self.transaction_id} requires an amount")

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Amount = Amount.ZERO
    held: Amount = Amount.ZERO
    total: Amount = Amount.ZERO
    locked: bool = False

    def credit(self, amount: Amount) -> None:
        self.available += amount
        self.total += amount

    def debit(self, amount: Amount) -> bool:
        remaining = self.available.checked_sub(amount)
        if remaining is None:
            return False
        self.available = remaining
        self.total = self.total.saturating_sub(amount)
        return True

    def hold(self, amount: Amount) -> None:
        # Only what is still available can be frozen; held never exceeds it.
        self.held += min(self.available, amount)
        self.available = self.available.saturating_sub(amount)

    def rebalance_held(self, disputed: Amount) -> None:
        self.held = min(disputed, self.total)
        self.available = self.total.saturating_sub(self.held)

    def charge_back(self, amount: Amount) -> None:
        self.held = self.held.saturating_sub(amount)
        self.total = self.held + self.available
        self.locked = True


class ProcessingStats:
    """Counters for a single run: outcome per applied record plus skipped input rows."""

    def __init__(self):
        self.outcomes: Counter = Counter()
        self.skipped_rows = 0

    def record(self, outcome: Outcome) -> None:
        self.outcomes[outcome] += 1

    @property
    def applied(self) -> int:
        return self.outcomes[Outcome.APPLIED]

    @property
    def rejected(self) -> int:
        return sum(count for outcome, count in self.outcomes.items() if outcome is not Outcome.APPLIED)

    def summary(self) -> str:
        line = f"Applied: {self.applied}, Rejected: {self.rejected}, Skipped rows: {self.skipped_rows}"
        details = ", ".join(
            f"{outcome.value}={count}"
            for outcome, count in sorted(self.outcomes.items(), key=lambda item: item[0].value)
            if outcome is not Outcome.APPLIED
        )
        return f"{line} ({details})" if details else line
