import logging
from typing import Optional

from dispute_registry import DisputeRegistry
from models import Transaction, TransactionType, ClientAccount, Outcome
from state_manager import StateManager

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Applies transactions, in input order, to the account table.

    Every handler is total: business rejections (insufficient funds, unknown or
    foreign disputes, ...) leave the account untouched and are reported through
    the returned Outcome instead of raising.
    """

    def __init__(
        self,
        state: StateManager,
        disputes: Optional[DisputeRegistry] = None,
        freeze_locked_accounts: bool = True,
    ):
        self._state = state
        self._disputes = disputes if disputes is not None else DisputeRegistry()
        self._freeze_locked_accounts = freeze_locked_accounts

    def apply(self, transaction: Transaction) -> Outcome:
        """
        Apply a single transaction.

        Returns:
            APPLIED when balances or dispute state changed, otherwise the reason
            the transaction was ignored.
        """
        account = self._state.get_or_create_account(transaction.client_id)

        if account.locked and self._freeze_locked_accounts:
            logger.info(f"{transaction}: client {account.client_id} is locked, ignoring")
            return Outcome.ACCOUNT_LOCKED

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(account, transaction)

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> Outcome:
        account.credit(transaction.amount)
        self._state.store_transaction(transaction)
        return Outcome.APPLIED

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> Outcome:
        self._state.store_transaction(transaction)
        if not account.debit(transaction.amount):
            logger.warning(
                f"Withdrawal tx {transaction.transaction_id}: insufficient funds for client {account.client_id} "
                f"(available {account.available}, requested {transaction.amount})"
            )
            return Outcome.INSUFFICIENT_FUNDS
        return Outcome.APPLIED

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> Outcome:
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None:
            logger.info(f"Dispute for tx {transaction.transaction_id}: transaction does not exist")
            return Outcome.UNKNOWN_TRANSACTION

        if original.client_id != transaction.client_id:
            logger.info(
                f"Dispute for tx {transaction.transaction_id}: raised by client {transaction.client_id}, "
                f"owned by client {original.client_id}"
            )
            return Outcome.UNAUTHORIZED_DISPUTE

        if original.transaction_type != TransactionType.DEPOSIT:
            logger.info(f"Dispute for tx {transaction.transaction_id}: only deposits can be disputed (got {original.transaction_type.value})")
            return Outcome.NON_DISPUTABLE_TYPE

        if not self._disputes.open(original):
            logger.info(f"Dispute for tx {transaction.transaction_id}: transaction already disputed")
            return Outcome.ALREADY_DISPUTED

        account.hold(original.amount)
        return Outcome.APPLIED

    def _close_dispute(self, transaction: Transaction) -> tuple[Outcome, Optional[Transaction]]:
        action = transaction.transaction_type.value.capitalize()
        disputed = self._disputes.get(transaction.transaction_id)

        if disputed is None:
            logger.info(f"{action} for tx {transaction.transaction_id}: transaction is not disputed")
            return Outcome.NOT_DISPUTED, None

        if disputed.client_id != transaction.client_id:
            logger.info(
                f"{action} for tx {transaction.transaction_id}: raised by client {transaction.client_id}, "
                f"dispute belongs to client {disputed.client_id}"
            )
            return Outcome.UNAUTHORIZED_DISPUTE, None

        return Outcome.APPLIED, self._disputes.close(transaction.transaction_id)

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> Outcome:
        outcome, _ = self._close_dispute(transaction)
        if outcome is not Outcome.APPLIED:
            return outcome

        # Held is recomputed from the client's remaining open disputes, capped at total.
        account.rebalance_held(self._disputes.disputed_amount(account.client_id))
        return Outcome.APPLIED

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> Outcome:
        outcome, disputed = self._close_dispute(transaction)
        if outcome is not Outcome.APPLIED:
            return outcome

        account.charge_back(disputed.amount)
        logger.info(f"Chargeback for tx {transaction.transaction_id}: client {account.client_id} locked")
        return Outcome.APPLIED
