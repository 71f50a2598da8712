import logging
from typing import Dict, Optional

from models import Transaction, ClientAccount

logger = logging.getLogger(__name__)


class StateManager:
    """
    Account table plus the history of deposits and withdrawals used for dispute lookups.
    Owned by a single LedgerEngine; nothing else mutates it during a run.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, Transaction] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def store_transaction(self, transaction: Transaction) -> None:
        """Index a deposit or withdrawal by id. The first record seen for an id wins."""
        existing = self._transactions.setdefault(transaction.transaction_id, transaction)
        if existing is not transaction:
            logger.warning(f"Duplicate tx id {transaction.transaction_id}: keeping {existing} for dispute lookups")

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
