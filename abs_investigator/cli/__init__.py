"""
CLI utilities for abs_investigator.

This package provides shared functionality for the console scripts:
- Logging setup
- Argument parsing
- Command entry points
"""

from abs_investigator.cli.args import add_execute_argument, add_profile_arguments
from abs_investigator.cli.commands import run_cache, run_investigate
from abs_investigator.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "print_dry_run_header",
    "print_execute_header",
    # Arguments
    "add_execute_argument",
    "add_profile_arguments",
    # Commands
    "run_investigate",
    "run_cache",
]
