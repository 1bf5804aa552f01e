"""
Source adapter contracts.

Every external repository the investigator consults is reached through one
of these interfaces. Adapters normalize provider responses into the records
of ``abs_investigator.domain.models`` and follow one error convention:

- not found      -> empty list (searches) or None (lookups)
- anything else  -> raise SourceUnavailableError (network error, non-2xx
                    response, rate limiting, missing credentials)

The investigator treats every raised exception as "this source contributed
nothing" and carries on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from abs_investigator.domain.models import (
    DateRange,
    EconomicSnapshot,
    FilingRecord,
    IdentifierRecord,
    Observation,
    RegistrantRecord,
    ServicerRiskProfile,
    Trade,
)


class SourceUnavailableError(RuntimeError):
    """An adapter call failed or its provider could not be reached."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


def check_response(source: str, response) -> None:
    """Raise SourceUnavailableError for rate-limited or non-2xx responses."""
    if response.status_code == 429:
        raise SourceUnavailableError(source, "rate limited (HTTP 429)")
    if not 200 <= response.status_code < 300:
        raise SourceUnavailableError(source, f"HTTP {response.status_code}")


class FilingSource(ABC):
    """Full-text search over a filing repository."""

    name = "filing"

    @abstractmethod
    def search_filings(self, query: str, date_range: DateRange | None = None) -> list[FilingRecord]:
        ...


class RegistrantSource(ABC):
    """Registrant metadata keyed by registry id."""

    name = "registrant"

    @abstractmethod
    def lookup_registrant(self, registry_id: str) -> RegistrantRecord | None:
        ...


class IdentifierSource(ABC):
    """Security identifier search and lookup."""

    name = "identifier"

    @abstractmethod
    def search_identifiers(self, query: str) -> list[IdentifierRecord]:
        ...

    @abstractmethod
    def lookup_identifier(self, identifier: str) -> IdentifierRecord | None:
        ...


class ComplaintSource(ABC):
    """Consumer complaint statistics for a company."""

    name = "complaints"

    @abstractmethod
    def search_complaints(self, company_name: str) -> ServicerRiskProfile:
        ...


class EconomicSource(ABC):
    """Macroeconomic indicators."""

    name = "economic"

    @abstractmethod
    def economic_snapshot(self) -> EconomicSnapshot:
        ...

    @abstractmethod
    def delinquency_trend(self, category: str, periods: int = 12) -> list[Observation]:
        """Newest-first observations of the delinquency series for ``category``."""
        ...


class TradeSource(ABC):
    """Reported trades for a security identifier."""

    name = "trade"

    @abstractmethod
    def search_trades(self, identifier: str, date_range: DateRange | None = None) -> list[Trade]:
        ...
