"""CLI adapter for ledger maintenance tasks.

Usage::

    python -m src.adapters.ledger_cli summary --window this_month
    python -m src.adapters.ledger_cli export backup.json
    python -m src.adapters.ledger_cli import backup.json
    python -m src.adapters.ledger_cli import-legacy db.json --replace
    python -m src.adapters.ledger_cli set-rate 36.5
    python -m src.adapters.ledger_cli clear --yes
"""

import argparse
from datetime import date
import json
from pathlib import Path
import sys

from src.application.use_cases.clear_ledger import ClearLedgerUseCase
from src.application.use_cases.exchange_rate import SetExchangeRateUseCase
from src.application.use_cases.get_ledger_view import (
    GetLedgerViewUseCase,
    LedgerView,
    LedgerViewSelection,
)
from src.application.use_cases.import_legacy_ledger import (
    ImportLegacyLedgerUseCase,
)
from src.application.use_cases.transfer_ledger import (
    ExportLedgerUseCase,
    ImportLedgerUseCase,
)
from src.domain.constants import ACCOUNT_LABELS
from src.domain.errors import LedgerError
from src.domain.services.date_window import WindowMode
from src.infrastructure.container import build_ledger_repository
from src.infrastructure.logging.logger import get_app_logger


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ledger CLI."""
    parser = argparse.ArgumentParser(prog="ledger", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    summary = commands.add_parser("summary", help="Print balances")
    summary.add_argument(
        "--window",
        choices=[mode.value for mode in WindowMode],
        default=WindowMode.ALL.value,
    )
    summary.add_argument("--start", type=_parse_date)
    summary.add_argument("--end", type=_parse_date)

    export = commands.add_parser("export", help="Write a JSON snapshot")
    export.add_argument("path", help="Output file, '-' for stdout")

    import_ = commands.add_parser("import", help="Replace the ledger")
    import_.add_argument("path")

    legacy = commands.add_parser(
        "import-legacy",
        help="Import the flat export of the earlier tool",
    )
    legacy.add_argument("path")
    legacy.add_argument("--replace", action="store_true")

    set_rate = commands.add_parser("set-rate", help="Update the exchange rate")
    set_rate.add_argument("rate")

    clear = commands.add_parser("clear", help="Delete every entry")
    clear.add_argument("--yes", action="store_true", required=True)
    return parser


def _read_json(path: str):
    with Path(path).open(encoding="utf-8") as handle:
        return json.load(handle)


def _print_summary(view: LedgerView) -> None:
    window = view.window
    bounds = (
        f"{window.start} .. {window.end}"
        if not window.is_unbounded
        else "all dates"
    )
    print(f"Window: {window.mode.value} ({bounds}), {len(view.entries)} entries")
    for account, balance in view.summary.accounts.items():
        print(
            f"  {ACCOUNT_LABELS[account]}: {balance.balance:,.2f} "
            f"(in {balance.credit_total:,.2f}, out {balance.debit_total:,.2f})"
        )
    print(f"Local total: {view.summary.local_total:,.2f}")
    print(f"USD total: {view.summary.usd_total:,.2f}")
    if view.estimated_usd is None:
        print("Estimated USD: unavailable (exchange rate not set)")
    else:
        print(
            f"Estimated USD: {view.estimated_usd:,.2f} "
            f"at {view.exchange_rate.rate}"
        )


def main(argv: list[str] | None = None) -> int:
    """Run the ledger CLI.

    Returns:
        int: Process exit status.
    """
    args = build_parser().parse_args(argv)
    logger = get_app_logger()
    try:
        repository = build_ledger_repository()
        if args.command == "summary":
            view = GetLedgerViewUseCase(repository, logger=logger).execute(
                LedgerViewSelection(
                    mode=WindowMode(args.window),
                    start=args.start,
                    end=args.end,
                )
            )
            _print_summary(view)
        elif args.command == "export":
            document = ExportLedgerUseCase(repository, logger=logger).execute()
            payload = json.dumps(document, indent=2, ensure_ascii=False)
            if args.path == "-":
                print(payload)
            else:
                Path(args.path).write_text(payload + "\n", encoding="utf-8")
                print(
                    f"Exported {len(document['entries'])} entries "
                    f"to {args.path}"
                )
        elif args.command == "import":
            result = ImportLedgerUseCase(repository, logger=logger).execute(
                _read_json(args.path)
            )
            print(
                f"Imported {result.imported_count} entries "
                f"(replaced {result.replaced_count}), rate={result.rate}"
            )
        elif args.command == "import-legacy":
            result = ImportLegacyLedgerUseCase(
                repository,
                logger=logger,
            ).execute(_read_json(args.path), replace=args.replace)
            print(
                f"Imported {result.imported_count} legacy entries, "
                f"skipped {result.skipped_count}; "
                f"ledger now holds {result.stored_count} entries"
            )
        elif args.command == "set-rate":
            setting = SetExchangeRateUseCase(
                repository,
                logger=logger,
            ).execute(args.rate)
            print(f"Exchange rate set to {setting.rate}")
        elif args.command == "clear":
            removed = ClearLedgerUseCase(repository, logger=logger).execute()
            print(f"Removed {removed} entries and reset the exchange rate.")
    except (LedgerError, OSError, json.JSONDecodeError) as exc:
        logger.error(f"{args.command} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
