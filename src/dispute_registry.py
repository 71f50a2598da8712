from typing import Dict, Iterator, Optional

from amount import Amount
from models import Transaction


class DisputeRegistry:
    """
    Deposits currently under dispute, keyed by transaction id.
    An id missing from the registry is not disputed.
    """

    def __init__(self):
        self._open: Dict[int, Transaction] = {}

    def is_disputed(self, transaction_id: int) -> bool:
        return transaction_id in self._open

    def get(self, transaction_id: int) -> Optional[Transaction]:
        return self._open.get(transaction_id)

    def open(self, deposit: Transaction) -> bool:
        """Register a dispute. Returns False if one is already open for this id."""
        if deposit.transaction_id in self._open:
            return False
        self._open[deposit.transaction_id] = deposit
        return True

    def close(self, transaction_id: int) -> Optional[Transaction]:
        """Remove and return the disputed deposit, or None if it was not disputed."""
        return self._open.pop(transaction_id, None)

    def disputed_amount(self, client_id: int) -> Amount:
        """Sum of all open disputed amounts belonging to one client."""
        total = Amount.ZERO
        for deposit in self._open.values():
            if deposit.client_id == client_id:
                total += deposit.amount
        return total

    def __len__(self) -> int:
        return len(self._open)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._open.values()))
