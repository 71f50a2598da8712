import argparse
import logging
import sys

from config import EngineConfig
from csv_io import write_accounts
from exceptions import LedgerError
from payments_engine import PaymentsEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payments-ledger",
        description="Replay a CSV transaction log and print final client balances.",
    )
    parser.add_argument("input", help="CSV file with columns: type, client, tx, amount")
    parser.add_argument("--strict", action="store_true", help="abort on the first malformed row instead of skipping it")
    parser.add_argument(
        "--allow-locked-activity",
        action="store_true",
        help="keep applying transactions to accounts locked by a chargeback",
    )
    parser.add_argument("--report", action="store_true", help="print a processing summary to stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every ignored transaction")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config = EngineConfig(strict=args.strict, freeze_locked_accounts=not args.allow_locked_activity)
    engine = PaymentsEngine(config)
    try:
        accounts = engine.process_file(args.input)
    except OSError as e:
        print(f"Failed to read {args.input}: {e}", file=sys.stderr)
        return 1
    except LedgerError as e:
        print(f"Aborting: {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)

    if args.report:
        print(engine.stats.summary(), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
