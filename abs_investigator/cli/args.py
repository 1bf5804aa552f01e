"""
Argument parsing utilities for abs_investigator CLI.

Provides standard argument patterns used across commands.
"""

from abs_investigator.catalog.debt_types import DEBT_TYPES


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually query the remote sources (default is an offline dry-run)",
    )


def add_profile_arguments(parser):
    """
    Add the debt profile arguments to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--debt-type",
        required=True,
        help=f"Debt type ({', '.join(t.value for t in DEBT_TYPES)})",
    )
    parser.add_argument("--servicer", help="Current servicer name")
    parser.add_argument("--creditor", help="Original creditor name")
    parser.add_argument("--account-number", help="Account number (never sent to any source)")
    parser.add_argument("--state", help="Two-letter state code")
    parser.add_argument("--balance", type=float, help="Approximate balance")
    parser.add_argument("--origination-date", help="Origination date (YYYY-MM-DD)")
