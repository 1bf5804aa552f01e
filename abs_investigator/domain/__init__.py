"""Domain model and profile validation."""

from abs_investigator.domain.models import (
    CandidateTrust,
    DebtProfile,
    DebtType,
    EconomicSnapshot,
    InvestigationReport,
    MarketCondition,
    SecurityIdentifier,
    ServicerRiskProfile,
    Trade,
    TradingSummary,
    VerificationRecord,
)
from abs_investigator.domain.validation import (
    InvalidProfileError,
    is_valid_cusip,
    normalize_name,
    parse_debt_type,
    validate_profile,
)

__all__ = [
    "CandidateTrust",
    "DebtProfile",
    "DebtType",
    "EconomicSnapshot",
    "InvestigationReport",
    "MarketCondition",
    "SecurityIdentifier",
    "ServicerRiskProfile",
    "Trade",
    "TradingSummary",
    "VerificationRecord",
    "InvalidProfileError",
    "is_valid_cusip",
    "normalize_name",
    "parse_debt_type",
    "validate_profile",
]
