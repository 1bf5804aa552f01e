"""
Data models for debt securitization investigations.

These dataclasses represent the investigation input (DebtProfile), the
normalized records each source adapter returns, and the fused results
(CandidateTrust, VerificationRecord, TradingSummary, InvestigationReport).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from abs_investigator.constants import MAX_CONFIDENCE, NO_TRADE_DATE


class DebtType(str, Enum):
    """Debt categories the investigator understands."""

    MORTGAGE = "mortgage"
    AUTO = "auto"
    CREDIT_CARD = "creditCard"
    STUDENT_LOAN = "studentLoan"
    PERSONAL_LOAN = "personalLoan"
    MEDICAL = "medical"
    UTILITY = "utility"
    TELECOM = "telecom"


class MarketCondition(str, Enum):
    """Tri-state macro classification."""

    FAVORABLE = "favorable"
    NEUTRAL = "neutral"
    STRESSED = "stressed"


# Source class tags recorded on a VerificationRecord
SOURCE_FILING = "filing"
SOURCE_REGISTRANT = "registrant"
SOURCE_IDENTIFIER = "identifier"
SOURCE_TRADE = "trade"
SOURCE_CATALOG = "catalog"


# =============================================================================
# Investigation input
# =============================================================================


@dataclass(frozen=True)
class DebtProfile:
    """What the consumer knows about the debt. Immutable for one run."""

    debt_type: DebtType | str
    servicer_name: str | None = None
    original_creditor: str | None = None
    account_number: str | None = None
    state: str | None = None
    approximate_balance: float | None = None
    origination_date: str | None = None  # ISO date, feeds the vintage-year signal

    @property
    def origination_year(self) -> str | None:
        if not self.origination_date:
            return None
        return self.origination_date[:4]


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window for filing and trade searches."""

    start: date
    end: date


# =============================================================================
# Normalized source records
# =============================================================================


@dataclass(frozen=True)
class FilingRecord:
    """One hit from a filing repository."""

    entity_name: str
    form_category: str
    filing_date: date | None = None
    document_ref: str | None = None
    extracted_identifiers: tuple[str, ...] = ()
    deal_size: float | None = None
    registry_id: str | None = None
    issuer: str | None = None


@dataclass(frozen=True)
class IdentifierRecord:
    """One security returned by an identifier repository."""

    identifier: str
    name: str
    issuer: str | None = None
    market_sector: str | None = None
    security_type: str | None = None
    id_type: str = "CUSIP"


@dataclass(frozen=True)
class RegistrantRecord:
    """Registrant metadata resolved from a registry id."""

    registry_id: str
    name: str | None = None
    tax_id: str | None = None
    jurisdiction: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class Observation:
    """A single dated value of an economic series."""

    date: str
    value: float


# =============================================================================
# Trust candidates
# =============================================================================


@dataclass(frozen=True)
class SecurityIdentifier:
    """A tranche/note of a trust."""

    code: str
    tranche: str
    rating: str = "NR"
    face_balance: float = 0.0
    id_type: str = "CUSIP"


@dataclass(frozen=True)
class RelatedFiling:
    """A filing that supports a candidate."""

    form_category: str
    filing_date: str
    document_ref: str


@dataclass
class ServicerRiskProfile:
    """Complaint-derived risk profile for a servicer."""

    servicer_name: str
    total_complaints: int
    recent_complaints: int
    top_issues: list[str] = field(default_factory=list)
    risk_score: float = 0.0

    @property
    def risk_level(self) -> str:
        if self.risk_score > 60:
            return "high"
        if self.risk_score > 30:
            return "medium"
        return "low"


@dataclass
class EconomicSnapshot:
    """Point-in-time macro indicators."""

    market_condition: MarketCondition = MarketCondition.NEUTRAL
    mortgage_rate_30y: float | None = None
    mortgage_rate_15y: float | None = None
    delinquency_by_category: dict[str, float] = field(default_factory=dict)
    unemployment_rate: float | None = None
    inflation_rate: float | None = None
    fed_funds_rate: float | None = None
    high_yield_spread: float | None = None
    delinquency_trend: str | None = None  # improving / stable / worsening
    as_of: str | None = None


@dataclass
class VerificationRecord:
    """
    Audit trail of which sources corroborate a candidate.

    Confidence only ever grows: ``corroborate`` rejects negative boosts and
    clamps the total at MAX_CONFIDENCE.
    """

    filing_verified: bool = False
    identifier_verified: bool = False
    trade_verified: bool = False
    complaint_checked: bool = False
    last_verified: str | None = None
    confidence_score: float = 0.0
    data_sources: list[str] = field(default_factory=list)

    _FLAGS = {
        SOURCE_FILING: "filing_verified",
        SOURCE_IDENTIFIER: "identifier_verified",
        SOURCE_TRADE: "trade_verified",
    }

    def corroborate(self, source: str, boost: float, timestamp: str | None = None) -> None:
        """Record a contributing source and raise confidence by ``boost``."""
        if boost < 0:
            raise ValueError(f"confidence boost must be >= 0, got {boost}")
        if source not in self.data_sources:
            self.data_sources.append(source)
        flag = self._FLAGS.get(source)
        if flag:
            setattr(self, flag, True)
        self.confidence_score = min(MAX_CONFIDENCE, self.confidence_score + boost)
        if timestamp:
            self.last_verified = timestamp


@dataclass
class CandidateTrust:
    """A trust hypothesized to hold the consumer's debt."""

    trust_id: str
    name: str
    trustee: str
    debt_type: DebtType
    closing_date: str | None = None
    original_balance: float = 0.0
    securities: list[SecurityIdentifier] = field(default_factory=list)
    match_score: int = 0
    match_reasons: list[str] = field(default_factory=list)
    filing_link: str | None = None
    verification: VerificationRecord = field(default_factory=VerificationRecord)
    related_filings: list[RelatedFiling] = field(default_factory=list)
    registrant: RegistrantRecord | None = None
    servicer_risk: ServicerRiskProfile | None = None
    economic_snapshot: EconomicSnapshot | None = None
    trading_summary: TradingSummary | None = None

    @property
    def sources(self) -> set[str]:
        return set(self.verification.data_sources)

    @property
    def confidence_score(self) -> float:
        return self.verification.confidence_score

    @property
    def primary_identifier(self) -> SecurityIdentifier | None:
        return self.securities[0] if self.securities else None

    def has_identifier(self, code: str) -> bool:
        code = code.upper()
        return any(s.code.upper() == code for s in self.securities)


# =============================================================================
# Trading
# =============================================================================


@dataclass(frozen=True)
class Trade:
    """A reported trade. Price and yield arrive as strings from most feeds."""

    date: str = ""
    time: str = ""
    price: str | float = "0"
    yield_value: str | float = "0"
    volume: float = 0
    side: str = ""
    dealer: str = ""
    report_type: str = ""
    identifier: str | None = None
    trade_id: str | None = None


@dataclass(frozen=True)
class DealerVolume:
    dealer: str
    volume: float
    percentage: float


@dataclass(frozen=True)
class PricePoint:
    date: str
    price: float


@dataclass(frozen=True)
class PriceRange:
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class DateSpan:
    start: str = NO_TRADE_DATE
    end: str = NO_TRADE_DATE


@dataclass
class TradingSummary:
    """Aggregate statistics over a list of trades."""

    total_trades: int = 0
    average_price: float = 0.0
    average_yield: float = 0.0
    total_volume: float = 0
    price_range: PriceRange = field(default_factory=PriceRange)
    volume_by_dealer: list[DealerVolume] = field(default_factory=list)
    price_history: list[PricePoint] = field(default_factory=list)
    latest_trade_date: str = NO_TRADE_DATE
    date_range: DateSpan = field(default_factory=DateSpan)


# =============================================================================
# Investigation output
# =============================================================================


@dataclass
class ServicerAnalysis:
    servicer_name: str
    complaint_count: int
    risk_level: str
    recent_issues: list[str] = field(default_factory=list)


@dataclass
class InvestigationSummary:
    total_matches: int = 0
    high_confidence_matches: int = 0
    data_sources_queried: list[str] = field(default_factory=list)
    source_errors: dict[str, int] = field(default_factory=dict)
    elapsed_ms: int = 0
    economic_snapshot: EconomicSnapshot | None = None
    status: str = "ok"  # ok / partial / failed / cancelled
    quick: bool = False


@dataclass
class InvestigationReport:
    trusts: list[CandidateTrust] = field(default_factory=list)
    summary: InvestigationSummary = field(default_factory=InvestigationSummary)
    servicer_analysis: list[ServicerAnalysis] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain-JSON representation (enums and dates rendered as strings)."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value
