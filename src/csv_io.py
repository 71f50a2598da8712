import csv
import logging
from typing import Dict, Iterator, Mapping, Optional, TextIO

from amount import Amount
from exceptions import MalformedRecordError
from models import Transaction, TransactionType, ClientAccount

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


class CsvTransactionReader:
    """
    Streams Transactions out of a `type, client, tx, amount` CSV.
    Reads forward only, so stdin and pipes work as well as files.
    """

    def __init__(self, stream: TextIO, strict: bool = False):
        self._reader = csv.DictReader(stream)
        self._strict = strict
        self.skipped_rows = 0

    def __iter__(self) -> Iterator[Transaction]:
        for row in self._reader:
            transaction = self._parse_csv_row(row, self._reader.line_num)
            if transaction is not None:
                yield transaction

    def _parse_csv_row(self, row: Dict[str, str], line_number: int) -> Optional[Transaction]:
        """Parse CSV row into Transaction."""
        try:
            return parse_row(row)
        except (KeyError, ValueError) as e:
            reason = f"missing column {e}" if isinstance(e, KeyError) else str(e)
            if self._strict:
                raise MalformedRecordError(line_number, reason, row) from e
            self.skipped_rows += 1
            logger.warning(f"Skipping line {line_number} {row}: {reason}")
            return None


def parse_row(row: Mapping[str, Optional[str]]) -> Transaction:
    """
    Build a Transaction from one CSV row.

    Raises:
        KeyError: a required column is missing.
        ValueError: unknown type, bad id, or invalid amount (InvalidAmount).
    """
    # Short rows yield None values; overflow fields land under a None key.
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

    transaction_type = TransactionType(normalized["type"].lower())
    client_id = _parse_id(normalized["client"], "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(normalized["tx"], "tx", MAX_TRANSACTION_ID)

    amount = None
    if transaction_type.carries_amount:
        amount_str = normalized.get("amount", "")
        if not amount_str:
            raise ValueError(f"{transaction_type.value} requires an amount")
        amount = Amount.parse(amount_str)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(text: str, column: str, maximum: int) -> int:
    value = int(text)
    if not 0 <= value <= maximum:
        raise ValueError(f"{column} id {value} out of range 0..{maximum}")
    return value


def write_accounts(accounts: Mapping[int, ClientAccount], stream: TextIO) -> None:
    """Write one row per account, amounts with exactly 4 decimal places."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        writer.writerow([
            client_id,
            account.available,
            account.held,
            account.total,
            str(account.locked).lower(),
        ])
