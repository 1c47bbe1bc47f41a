#!/usr/bin/env python3

import sys
import argparse
import gzip
import shutil
from pathlib import Path
from datetime import datetime
from errors import ImportRejected, ImportPersistFailure, ValidationFailure
from ingestion import get_available_formats
from ledger.exporter import DEFAULT_FILENAME
from logger import get_logger
from models.category import is_known_category
from models.criteria import FilterCriteria
from models.transaction import KINDS, format_amount

logger = get_logger()


def _require_owner(services):
    """Exit unless an owner is signed in."""
    if services.session.owner_id() is None:
        logger.error("No owner signed in.")
        logger.info("Set [session] owner_id in ~/.config/balans.toml or pass --owner.")
        sys.exit(1)


def _criteria_from_args(args) -> FilterCriteria:
    return FilterCriteria(
        date=args.date,
        kind=args.type,
        category=args.category,
        description=args.description,
        amount=args.amount,
    )


def _archive_file(path: Path, config, owner_id: str) -> Path:
    """Gzip a copy of an imported file into the archive directory."""
    config.archive_dir.mkdir(parents=True, exist_ok=True)

    # {owner}_{timestamp}_{original_filename}.gz
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    archive_path = config.archive_dir / f"{owner_id}_{timestamp}_{path.name}.gz"

    with open(path, "rb") as f_in:
        with gzip.open(archive_path, "wb") as f_out:
            shutil.copyfileobj(f_in, f_out)

    return archive_path


def cmd_add(args, services):
    """Add a single income or expense.

    Args:
        args: Parsed command-line arguments with kind, amount, category, description, date
        services: Services container with the ledger service
    """
    _require_owner(services)

    try:
        transaction = services.ledger.add_transaction(
            args.kind,
            args.amount,
            category=args.category,
            description=args.description,
            transaction_date=args.date,
        )
    except ValidationFailure as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ {args.kind.capitalize()} added successfully with ID: {transaction.id}")
    logger.info(f"  Date: {transaction.date}")
    logger.info(f"  Category: {transaction.category}")
    logger.info(f"  Amount: {format_amount(transaction.amount)}")
    if transaction.description:
        logger.info(f"  Description: {transaction.description}")
    if not is_known_category(transaction.kind, transaction.category):
        logger.info(
            f"  Note: '{transaction.category}' is not a recommended {transaction.kind} category"
        )


def cmd_list(args, services):
    """List transactions matching the filter, with balances.

    Args:
        args: Parsed command-line arguments with filter options
        services: Services container with the ledger service
    """
    _require_owner(services)

    view = services.ledger.view(_criteria_from_args(args))
    rows = view.table_rows()

    if not rows:
        logger.info("No transactions found for the specified criteria.")
    else:
        logger.info(
            f"\n{'Date':<12} {'Type':<8} {'Category':<20} {'Description':<30} {'Amount':>12}"
        )
        logger.info("=" * 86)
        for row_date, kind, category, description, amount in rows:
            logger.info(
                f"{row_date:<12} {kind:<8} {category[:20]:<20} {description[:30]:<30} {amount:>12}"
            )
        logger.info("-" * 86)

    logger.info(f"Transactions shown: {len(rows)} of {len(view.ledger)}")
    if not view.criteria.is_empty():
        logger.info(f"Filtered balance: {format_amount(view.state.filtered_balance)}")
    logger.info(f"Total balance: {format_amount(view.state.balance)}")


def cmd_balance(args, services):
    """Show the balance over all transactions."""
    _require_owner(services)

    ledger = services.ledger.load()
    logger.info(f"Incomes: {len(ledger.incomes())}")
    logger.info(f"Expenses: {len(ledger.expenses())}")
    logger.info(f"Total balance: {format_amount(ledger.balance)}")


def cmd_trend(args, services):
    """Show monthly income and expense totals."""
    _require_owner(services)

    if args.chronological:
        services.ledger.chronological = True

    view = services.ledger.view()
    buckets = view.state.buckets

    if not buckets:
        logger.info("No dated transactions to chart.")
        return

    logger.info(f"\n{'Month':<10} {'Income':>14} {'Expense':>14} {'Net':>14}")
    logger.info("=" * 55)
    for bucket in buckets:
        logger.info(
            f"{bucket.label:<10} {format_amount(bucket.income):>14} "
            f"{format_amount(bucket.expense):>14} {format_amount(bucket.net):>14}"
        )


def cmd_import(args, services):
    """Import transactions from a spreadsheet file.

    Args:
        args: Parsed command-line arguments with file
        services: Services container with the ledger service and config
    """
    _require_owner(services)

    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {args.file}")
        sys.exit(1)

    logger.info(f"Importing transactions from: {path}")
    logger.info("-" * 80)

    try:
        batch = services.ledger.import_file(path)
    except ValueError as e:
        logger.error(str(e))
        logger.info(f"Supported formats: {', '.join(get_available_formats())}")
        sys.exit(1)
    except ImportRejected as e:
        logger.error(f"Import rejected, nothing was saved: {e}")
        sys.exit(1)
    except ImportPersistFailure as e:
        logger.error(f"Import failed: {e}")
        sys.exit(1)

    logger.info(f"✓ Imported {len(batch.incomes)} income(s) and {len(batch.expenses)} expense(s)")

    config = services.config
    if config.archive_enabled:
        archive_path = _archive_file(path, config, services.session.owner_id())
        logger.info(f"Archived file to: {archive_path}")

    ledger = services.ledger.load()
    logger.info(f"Total balance: {format_amount(ledger.balance)}")


def cmd_export(args, services):
    """Export filtered transactions with a balance row.

    Args:
        args: Parsed command-line arguments with output and filter options
        services: Services container with the ledger service
    """
    _require_owner(services)

    output_path = Path(args.output)
    criteria = _criteria_from_args(args)

    try:
        count = services.ledger.export_file(output_path, criteria)
    except ValueError as e:
        logger.error(str(e))
        logger.info(f"Supported formats: {', '.join(get_available_formats())}")
        sys.exit(1)

    logger.info(f"✓ Successfully exported {count} transaction(s) to: {output_path}")


def _add_filter_arguments(parser):
    parser.add_argument("--date", help="Keep dates containing this text (e.g. 2024-01)")
    parser.add_argument("--type", choices=KINDS, help="Keep only this kind")
    parser.add_argument("--category", help="Keep categories containing this text")
    parser.add_argument("--description", help="Keep descriptions containing this text")
    parser.add_argument("--amount", help="Keep amounts containing these digits")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record, list, import and export transactions",
        description="Record, list, import and export income and expense transactions",
    )
    parser.add_argument(
        "--owner",
        help="Owner id to act as (overrides [session] owner_id)",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add",
        help="Add an income or expense",
        epilog="""
Examples:
  python -m cli transactions add income --amount 1000 --category Зарплата
  python -m cli transactions add expense --amount 300 --category Транспорт --date 2024-01-10
        """,
    )
    add_parser.add_argument("kind", choices=KINDS, help="Transaction kind")
    add_parser.add_argument("--amount", required=True, help="Non-negative amount")
    add_parser.add_argument(
        "--category",
        help="Category (defaults to the first recommended category for the kind)",
    )
    add_parser.add_argument("--description", default="", help="Free-form description")
    add_parser.add_argument("--date", help="Date in YYYY-MM-DD format (defaults to today)")
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list",
        help="List transactions",
        description="List transactions, optionally filtered; all filters are combined",
    )
    _add_filter_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # transactions balance
    balance_parser = transactions_subparsers.add_parser(
        "balance", help="Show the total balance"
    )
    balance_parser.set_defaults(func=cmd_balance)

    # transactions trend
    trend_parser = transactions_subparsers.add_parser(
        "trend",
        help="Show monthly income and expense totals",
    )
    trend_parser.add_argument(
        "--chronological",
        action="store_true",
        help="Sort months by date instead of first appearance",
    )
    trend_parser.set_defaults(func=cmd_trend)

    # transactions import
    import_parser = transactions_subparsers.add_parser(
        "import",
        help="Import transactions from a spreadsheet",
        epilog="""
Expected columns (first row is a header, English or Russian):
  Date, Type, Category, Description, Amount
  Дата, Тип, Категория, Описание, Сумма

Type must be 'income' or 'expense'. Any invalid row rejects the whole file.

Examples:
  python -m cli transactions import доходы_расходы.xlsx
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    import_parser.add_argument("file", help="Path to an .xlsx or .csv file")
    import_parser.set_defaults(func=cmd_import)

    # transactions export
    export_parser = transactions_subparsers.add_parser(
        "export",
        help="Export transactions to a spreadsheet",
        epilog=f"""
Examples:
  python -m cli transactions export --output {DEFAULT_FILENAME}
  python -m cli transactions export --type expense --date 2024-01 --output january.xlsx
        """,
    )
    export_parser.add_argument(
        "--output",
        default=DEFAULT_FILENAME,
        help=f"Output file path, .xlsx or .csv (default: {DEFAULT_FILENAME})",
    )
    _add_filter_arguments(export_parser)
    export_parser.set_defaults(func=cmd_export)
