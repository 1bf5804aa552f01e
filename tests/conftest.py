"""
Pytest configuration and shared fixtures for abs_investigator tests.
"""

import random
import threading
import time
from datetime import date

import pytest

from abs_investigator.cache import AppCache
from abs_investigator.domain.models import (
    DebtProfile,
    DebtType,
    EconomicSnapshot,
    FilingRecord,
    IdentifierRecord,
    MarketCondition,
    Observation,
    RegistrantRecord,
    ServicerRiskProfile,
    Trade,
)
from abs_investigator.matching.candidates import TrustCandidateGenerator
from abs_investigator.sources.base import (
    ComplaintSource,
    EconomicSource,
    FilingSource,
    IdentifierSource,
    RegistrantSource,
    SourceUnavailableError,
    TradeSource,
)

FIXED_TODAY = date(2026, 10, 17)


def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture
def today():
    """Fixed clock for adapters and the investigator."""
    return fixed_today


@pytest.fixture
def app_cache(tmp_path):
    """AppCache backed by a temporary directory."""
    cache = AppCache(cache_dir=tmp_path / "cache")
    yield cache
    cache.close()


@pytest.fixture
def seeded_generator():
    """Offline generator with a fixed random source."""
    return TrustCandidateGenerator(rng=random.Random(42))


@pytest.fixture
def santander_profile():
    return DebtProfile(debt_type=DebtType.AUTO, servicer_name="Santander Consumer USA")


# =============================================================================
# Stub adapters
# =============================================================================


class StubFilingSource(FilingSource):
    """Returns the same records for every query (or raises ``error``)."""

    name = "stub_filings"

    def __init__(self, records=(), error: Exception | None = None, delay_event=None):
        self.records = list(records)
        self.error = error
        self.delay_event = delay_event
        self.queries: list[str] = []
        self._lock = threading.Lock()

    def search_filings(self, query, date_range=None):
        with self._lock:
            self.queries.append(query)
        if self.delay_event is not None:
            self.delay_event.wait(5)
        if self.error is not None:
            raise self.error
        return list(self.records)


class StubRegistrantSource(RegistrantSource):
    name = "stub_registrants"

    def __init__(self, records: dict | None = None, error: Exception | None = None):
        self.records = records or {}
        self.error = error
        self.lookups: list[str] = []

    def lookup_registrant(self, registry_id):
        self.lookups.append(registry_id)
        if self.error is not None:
            raise self.error
        return self.records.get(registry_id)


class StubIdentifierSource(IdentifierSource):
    name = "stub_identifiers"

    def __init__(self, search_results=(), lookups: dict | None = None, error=None, delay=0.0):
        self.search_results = list(search_results)
        self.lookups = lookups or {}
        self.error = error
        self.delay = delay
        self.searches: list[str] = []
        self._lock = threading.Lock()

    def search_identifiers(self, query):
        with self._lock:
            self.searches.append(query)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.search_results)

    def lookup_identifier(self, identifier):
        if self.error is not None:
            raise self.error
        return self.lookups.get(identifier)


class StubComplaintSource(ComplaintSource):
    name = "stub_complaints"

    def __init__(self, risk_score: float = 20.0, total: int = 150, error=None):
        self.risk_score = risk_score
        self.total = total
        self.error = error
        self.companies: list[str] = []

    def search_complaints(self, company_name):
        self.companies.append(company_name)
        if self.error is not None:
            raise self.error
        return ServicerRiskProfile(
            servicer_name=company_name,
            total_complaints=self.total,
            recent_complaints=12,
            top_issues=["Managing the loan or lease", "Problems at the end of the loan"],
            risk_score=self.risk_score,
        )


class StubEconomicSource(EconomicSource):
    name = "stub_economic"

    def __init__(self, condition=MarketCondition.NEUTRAL, trend=None, error=None):
        self.condition = condition
        self.trend = trend
        self.error = error

    def economic_snapshot(self):
        if self.error is not None:
            raise self.error
        return EconomicSnapshot(market_condition=self.condition, mortgage_rate_30y=6.4)

    def delinquency_trend(self, category, periods=12):
        if self.error is not None:
            raise self.error
        if self.trend is not None:
            return self.trend
        return [Observation(date=f"2026-{12 - i:02d}-01", value=2.0) for i in range(periods)]


class StubTradeSource(TradeSource):
    name = "stub_trades"

    def __init__(self, trades=(), error=None):
        self.trades = list(trades)
        self.error = error
        self.identifiers: list[str] = []
        self._lock = threading.Lock()

    def search_trades(self, identifier, date_range=None):
        with self._lock:
            self.identifiers.append(identifier)
        if self.error is not None:
            raise self.error
        return list(self.trades)


def unavailable(source: str = "stub") -> SourceUnavailableError:
    return SourceUnavailableError(source, "connection refused")


SANTANDER_FILING = FilingRecord(
    entity_name="Santander Drive Auto Receivables Trust",
    form_category="SF-3",
    filing_date=date(2026, 3, 2),
    document_ref="https://www.sec.gov/Archives/edgar/data/1234567/000123456726000001",
    issuer="Santander Consumer USA Inc.",
)

SANTANDER_SECURITY = IdentifierRecord(
    identifier="80286TAB9",
    name="SANTANDER DRIVE AUTO RECEIVABLES TRUST 2026-1 A2",
    issuer="SDART",
    market_sector="Corp",
    security_type="ABS Auto",
)

SAMPLE_TRADES = [
    Trade(date="2026-10-14", price="100.00", yield_value="5.0", volume=200000, dealer="A"),
    Trade(date="2026-10-15", price="102.00", yield_value="5.1", volume=300000, dealer="B"),
]

SANTANDER_REGISTRANT = RegistrantRecord(
    registry_id="0001234567",
    name="Santander Drive Auto Receivables LLC",
    tax_id="20-1234567",
    jurisdiction="DE",
    address="1601 Elm Street, Dallas, TX 75201",
)
