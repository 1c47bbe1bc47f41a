#!/usr/bin/env python3
"""
Balans CLI - Command-line interface for a personal income/expense ledger.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Record, list, import and export transactions
    categories   Show recommended categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli transactions add income --amount 1000 --category Зарплата
    python -m cli transactions list --type expense
    python -m cli transactions import доходы.xlsx
    python -m cli transactions export --output доходы_расходы.xlsx
"""

import sys
import argparse
from cli import transactions, migrate, categories
from config import load_config
from errors import BalansError
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging, get_logger


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Balans - Personal income and expense ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Commands that use services: transactions
            # Commands that use db_manager directly: migrate
            # Commands with no state: categories
            if args.command == "transactions":
                services = Services(config, owner_id=args.owner)
                args.func(args, services)
            elif args.command == "migrate":
                db_manager = DatabaseManager(config)
                args.func(args, db_manager)
            else:
                args.func(args)
        except BalansError as e:
            get_logger().error(f"Error: {e}")
            sys.exit(1)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
