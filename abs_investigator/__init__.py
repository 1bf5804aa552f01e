"""
ABS Investigator - trace a consumer debt to the securitization trust that may hold it.

This package provides utilities for:
- Deriving search queries from partial debt information
- Matching debt profiles against a bundled catalog of ABS/MBS trust shelves
- Cross-referencing SEC EDGAR, OpenFIGI, CFPB, FRED and TRACE concurrently
- Summarizing trade activity for matched securities
- Common CLI utilities for the console scripts
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from abs_investigator.consensus.investigator import MultiSourceInvestigator
from abs_investigator.domain.models import (
    CandidateTrust,
    DebtProfile,
    DebtType,
    InvestigationReport,
    Trade,
    TradingSummary,
)
from abs_investigator.domain.validation import InvalidProfileError
from abs_investigator.matching.candidates import TrustCandidateGenerator
from abs_investigator.queries.builder import build_queries
from abs_investigator.sources.base import SourceUnavailableError
from abs_investigator.trading.aggregation import summarize

__all__ = [
    "__version__",
    # Entry points
    "MultiSourceInvestigator",
    "TrustCandidateGenerator",
    "build_queries",
    "summarize",
    # Model
    "CandidateTrust",
    "DebtProfile",
    "DebtType",
    "InvestigationReport",
    "Trade",
    "TradingSummary",
    # Errors
    "InvalidProfileError",
    "SourceUnavailableError",
]
