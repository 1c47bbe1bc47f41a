#!/usr/bin/env python3

from logger import get_logger
from models.category import get_all_categories, get_categories
from models.transaction import KINDS

logger = get_logger()


def cmd_list(args):
    """List recommended categories, for one kind or for all."""
    if args.kind:
        categories = get_categories(args.kind)
        title = f"{args.kind.capitalize()} categories"
    else:
        categories = get_all_categories()
        title = "All categories"

    logger.info(f"\n{title}:")
    logger.info("=" * 40)
    for category in categories:
        logger.info(f"  {category}")

    logger.info(f"\nTotal categories: {len(categories)}")
    logger.info("Other category names are accepted too and shown as-is.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Show recommended categories",
        description="Show the recommended income and expense categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser(
        "list",
        help="List recommended categories",
        epilog="""
Examples:
  python -m cli categories list
  python -m cli categories list --kind expense
        """,
    )
    list_parser.add_argument(
        "--kind",
        choices=KINDS,
        help="Only show categories for this kind",
    )
    list_parser.set_defaults(func=cmd_list)
