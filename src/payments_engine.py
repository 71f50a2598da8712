import logging
from typing import Dict, Iterable, Optional

from config import EngineConfig
from csv_io import CsvTransactionReader
from dispute_registry import DisputeRegistry
from ledger_engine import LedgerEngine
from models import Transaction, ClientAccount, ProcessingStats
from state_manager import StateManager

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Replays a transaction log in a single forward pass and returns final balances.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._state = StateManager()
        self._disputes = DisputeRegistry()
        self._ledger = LedgerEngine(
            self._state,
            self._disputes,
            freeze_locked_accounts=self._config.freeze_locked_accounts,
        )
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")
        with open(filepath, "r", newline="") as f:
            reader = CsvTransactionReader(f, strict=self._config.strict)
            try:
                return self.process_transactions(reader)
            finally:
                self._stats.skipped_rows += reader.skipped_rows

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        """Apply already parsed transactions in order and return final account states."""
        for transaction in transactions:
            self._stats.record(self._ledger.apply(transaction))

        if len(self._disputes):
            logger.info(f"{len(self._disputes)} disputes still open at end of input")
            for deposit in self._disputes:
                logger.info(f"  Still disputed: {deposit}")
        logger.info(self._stats.summary())
        return self._state.get_all_accounts()
