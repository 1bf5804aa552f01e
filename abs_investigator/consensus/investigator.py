"""
Multi-source investigator.

Cross-references the filing, registrant, identifier, complaint, economic and
trade sources for one debt profile and fuses their partial answers into a
ranked list of candidate trusts.

Each step fans its adapter calls out concurrently (``utils.parallel``),
waits for them up to the adapter timeout, and then merges the results into
the candidate table one at a time on the calling thread. A failing or
timed-out call is logged, counted and skipped; only an invalid profile
aborts an investigation.

Steps:
    1. Filing search for each derived query (3 queries in quick mode, 8 otherwise)
    2. Registrant lookup for filings that carry a registry id (skipped in quick mode)
    3. Identifier search (base queries and candidate names) and lookup of
       identifiers extracted from filings
    4. Offline trust catalog, when the remote sources produced nothing
    5. Complaint profile per distinct servicer / creditor name
    6. Economic snapshot and delinquency trend (skipped in quick mode)
    7. Trade search for the top candidates' primary identifiers
"""

from __future__ import annotations

import logging
import random
import threading
import time
from collections.abc import Callable, Hashable, Sequence
from datetime import date
from typing import Any

import requests

from abs_investigator.cache import AppCache
from abs_investigator.catalog.debt_types import get_delinquency_category
from abs_investigator.config import Settings, get_settings
from abs_investigator.constants import (
    DEFAULT_ADAPTER_TIMEOUT,
    DEFAULT_WORKERS,
    DELINQUENCY_TREND_PERIODS,
    FULL_QUERY_LIMIT,
    HIGH_CONFIDENCE_THRESHOLD,
    QUICK_QUERY_LIMIT,
    QWR_RECOMMENDATION_THRESHOLD,
    REPORT_LIMIT,
    SERVICER_RISK_RECOMMENDATION_THRESHOLD,
    TRADE_LOOKUP_LIMIT,
)
from abs_investigator.consensus.evidence import (
    CandidateTable,
    CatalogEvidence,
    ComplaintEvidence,
    EconomicEvidence,
    FilingEvidence,
    IdentifierEvidence,
    RegistrantEvidence,
    TradeEvidence,
)
from abs_investigator.domain.models import (
    CandidateTrust,
    DebtProfile,
    EconomicSnapshot,
    InvestigationReport,
    InvestigationSummary,
    MarketCondition,
    SecurityIdentifier,
    ServicerAnalysis,
)
from abs_investigator.domain.validation import is_valid_cusip, normalize_name, validate_profile
from abs_investigator.matching.candidates import TrustCandidateGenerator
from abs_investigator.queries.builder import build_queries
from abs_investigator.sources.base import (
    ComplaintSource,
    EconomicSource,
    FilingSource,
    IdentifierSource,
    RegistrantSource,
    TradeSource,
)
from abs_investigator.sources.cfpb import CfpbComplaintSource
from abs_investigator.sources.fred import FredEconomicSource, classify_delinquency_trend
from abs_investigator.sources.openfigi import OpenFigiSource
from abs_investigator.sources.sec_edgar import SecEdgarSource
from abs_investigator.sources.trace import TraceSampleSource
from abs_investigator.utils.parallel import CallOutcome, fan_out
from abs_investigator.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

NOT_FOUND_RECOMMENDATION = (
    "No matching securitization trusts found. The debt may not have been securitized, "
    "or may be held in a private placement."
)
STRESSED_MARKET_RECOMMENDATION = (
    "Current market conditions are stressed. ABS valuations may be volatile; "
    "consider this in negotiations."
)

# Candidate names searched on the identifier source in addition to the base queries
NAME_SEARCH_LIMIT = 5


class _Run:
    """Bookkeeping for one investigation call."""

    def __init__(self, table: CandidateTable, cancel_event: threading.Event | None):
        self.table = table
        self.cancel_event = cancel_event
        self.stats = ExecutionStats()
        self.sources_queried: list[str] = []
        self.source_errors: dict[str, int] = {}
        self.dispatched = 0
        self.failed = 0
        self.recommendations: list[str] = []
        self.servicer_analysis: list[ServicerAnalysis] = []
        self.economic_snapshot: EconomicSnapshot | None = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def record(self, source_name: str, outcomes: list[CallOutcome]) -> None:
        if source_name not in self.sources_queried:
            self.sources_queried.append(source_name)
        for outcome in outcomes:
            self.dispatched += 1
            if outcome.failed:
                self.failed += 1
                self.source_errors[source_name] = self.source_errors.get(source_name, 0) + 1


class MultiSourceInvestigator:
    """
    Orchestrates one investigation across every configured source.

    Any source may be None; its steps are skipped. Sources are called from
    worker threads, so each must be safe to call concurrently.

    Args:
        filing_source: Filing search (SEC EDGAR)
        identifier_source: Security search and lookup (OpenFIGI)
        registrant_source: Registrant lookup by registry id (SEC EDGAR)
        complaint_source: Servicer complaint profile (CFPB)
        economic_source: Macro snapshot and delinquency trend (FRED)
        trade_source: Trade search (FINRA TRACE)
        fallback_generator: Offline matcher used when remote sources find nothing
        timeout: Seconds each step waits for its calls
        max_workers: Thread pool size per step
        today: Clock used for filing recency and verification stamps
        show_progress: Show tqdm progress bars per step
    """

    def __init__(
        self,
        filing_source: FilingSource | None = None,
        identifier_source: IdentifierSource | None = None,
        registrant_source: RegistrantSource | None = None,
        complaint_source: ComplaintSource | None = None,
        economic_source: EconomicSource | None = None,
        trade_source: TradeSource | None = None,
        fallback_generator: TrustCandidateGenerator | None = None,
        timeout: float = DEFAULT_ADAPTER_TIMEOUT,
        max_workers: int = DEFAULT_WORKERS,
        today: Callable[[], date] = date.today,
        show_progress: bool = False,
    ):
        self.filing_source = filing_source
        self.identifier_source = identifier_source
        self.registrant_source = registrant_source
        self.complaint_source = complaint_source
        self.economic_source = economic_source
        self.trade_source = trade_source
        self.fallback_generator = fallback_generator
        self.timeout = timeout
        self.max_workers = max_workers
        self.today = today
        self.show_progress = show_progress

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        cache: AppCache | None = None,
        session: requests.Session | None = None,
        show_progress: bool = False,
    ) -> MultiSourceInvestigator:
        """Investigator wired to the public data sources."""
        settings = settings or get_settings()
        session = session or requests.Session()
        timeout = settings.adapter_timeout_seconds

        edgar = SecEdgarSource(
            session,
            user_agent=settings.sec_user_agent,
            timeout=timeout,
            cache=cache,
            cache_ttl=settings.registrant_cache_ttl_seconds,
        )
        return cls(
            filing_source=edgar,
            identifier_source=OpenFigiSource(
                session, api_key=settings.openfigi_api_key, timeout=timeout
            ),
            registrant_source=edgar,
            complaint_source=CfpbComplaintSource(session, timeout=timeout),
            economic_source=FredEconomicSource(
                session, api_key=settings.fred_api_key, timeout=timeout
            ),
            trade_source=TraceSampleSource(),
            fallback_generator=TrustCandidateGenerator(
                rng=random.Random(settings.random_seed),
                jitter=settings.offline_jitter,
            ),
            timeout=timeout,
            max_workers=settings.max_workers,
            show_progress=show_progress,
        )

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def investigate(
        self,
        profile: DebtProfile,
        quick: bool = False,
        cancel_event: threading.Event | None = None,
    ) -> InvestigationReport:
        """
        Investigate one debt profile.

        Args:
            profile: What the consumer knows about the debt
            quick: Fewer filing queries; skip registrant and economic steps
            cancel_event: When set, in-flight calls are abandoned and the
                report accumulated so far is returned

        Returns:
            InvestigationReport with at most 10 candidates by confidence

        Raises:
            InvalidProfileError: If the profile is malformed
        """
        profile = validate_profile(profile)
        started = time.perf_counter()
        run = _Run(CandidateTable(profile.debt_type, today=self.today), cancel_event)

        queries = build_queries(profile)[: QUICK_QUERY_LIMIT if quick else FULL_QUERY_LIMIT]
        logger.info(
            f"Investigating {profile.debt_type.value} debt "
            f"({len(queries)} queries{', quick mode' if quick else ''})"
        )

        self._search_filings(run, queries)
        if not quick:
            self._lookup_registrants(run)
        self._search_identifiers(run, queries)
        self._apply_fallback(run, profile)
        self._check_complaints(run, profile)
        if not quick:
            self._attach_economic_context(run, profile)
        self._search_trades(run)

        report = self._build_report(run, quick, started)
        logger.info(
            f"Investigation {report.summary.status}: {report.summary.total_matches} candidates, "
            f"{report.summary.high_confidence_matches} high-confidence "
            f"({report.summary.elapsed_ms} ms)"
        )
        logger.debug(f"Fan-out stats: {run.stats}")
        return report

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _dispatch(
        self,
        run: _Run,
        source_name: str,
        calls: Sequence[tuple[Hashable, Callable[[], Any]]],
        desc: str,
    ) -> list[CallOutcome]:
        if not calls:
            return []
        outcomes = fan_out(
            calls,
            timeout=self.timeout,
            max_workers=self.max_workers,
            cancel_event=run.cancel_event,
            desc=desc,
            show_progress=self.show_progress,
            stats=run.stats,
        )
        run.record(source_name, outcomes)

        failures = [o for o in outcomes if o.failed]
        if failures:
            timed_out = sum(1 for o in failures if o.timed_out)
            logger.warning(
                f"{desc}: {len(failures)}/{len(outcomes)} {source_name} calls failed "
                f"({timed_out} timed out)"
            )
        return outcomes

    def _search_filings(self, run: _Run, queries: list[str]) -> None:
        source = self.filing_source
        if source is None or run.cancelled:
            return
        outcomes = self._dispatch(
            run,
            source.name,
            [(query, _bind(source.search_filings, query)) for query in queries],
            "Filing search",
        )
        for outcome in outcomes:
            if outcome.ok:
                for record in outcome.value or []:
                    run.table.merge(FilingEvidence(record))
        logger.info(f"Filing search: {len(run.table)} candidates")

    def _lookup_registrants(self, run: _Run) -> None:
        source = self.registrant_source
        if source is None or run.cancelled:
            return
        pending = run.table.registry_ids()
        outcomes = self._dispatch(
            run,
            source.name,
            [(key, _bind(source.lookup_registrant, rid)) for key, rid in pending.items()],
            "Registrant lookup",
        )
        resolved = 0
        for outcome in outcomes:
            if outcome.ok and outcome.value is not None:
                run.table.merge(RegistrantEvidence(outcome.key, outcome.value))
                resolved += 1
        if pending:
            logger.info(f"Registrant lookup: {resolved}/{len(pending)} resolved")

    def _search_identifiers(self, run: _Run, queries: list[str]) -> None:
        source = self.identifier_source
        if source is None or run.cancelled:
            return

        calls: list[tuple[Hashable, Callable[[], Any]]] = []
        searched = set()
        for query in queries:
            key = normalize_name(query)
            searched.add(key)
            # A query that names a known candidate corroborates that candidate
            call_key = ("name", key, query) if key in run.table else ("query", None, query)
            calls.append((call_key, _bind(source.search_identifiers, query)))
        for key, candidate in run.table.ranked()[:NAME_SEARCH_LIMIT]:
            if key not in searched:
                searched.add(key)
                search = _bind(source.search_identifiers, candidate.name)
                calls.append((("name", key, candidate.name), search))
        looked_up = set()
        for key, candidate in run.table.ranked():
            for security in candidate.securities:
                code = security.code
                if is_valid_cusip(code) and code not in looked_up:
                    looked_up.add(code)
                    calls.append((("lookup", key, code), _bind(source.lookup_identifier, code)))

        outcomes = self._dispatch(run, source.name, calls, "Identifier search")
        before = len(run.table)
        # Targeted results first, so open query results can attach by code
        targeted = sorted(outcomes, key=lambda o: o.key[0] == "query")
        for outcome in targeted:
            if not outcome.ok or not outcome.value:
                continue
            kind, key, _ = outcome.key
            records = [outcome.value] if kind == "lookup" else outcome.value
            for record in records:
                run.table.merge(IdentifierEvidence(record, candidate_key=key))
        logger.info(
            f"Identifier search: {len(run.table) - before} new candidates "
            f"({len(run.table)} total)"
        )

    def _apply_fallback(self, run: _Run, profile: DebtProfile) -> None:
        if len(run.table) or self.fallback_generator is None or run.cancelled:
            return
        candidates = self.fallback_generator.find_candidates(profile.debt_type, profile)
        for candidate in candidates:
            run.table.merge(CatalogEvidence(candidate))
        logger.info(
            f"Remote sources found nothing; offline catalog gave {len(candidates)} candidates"
        )

    def _check_complaints(self, run: _Run, profile: DebtProfile) -> None:
        source = self.complaint_source
        if source is None or run.cancelled:
            return

        names: dict[str, str] = {}
        for name in (profile.servicer_name, profile.original_creditor):
            if name and normalize_name(name) not in names:
                names[normalize_name(name)] = name
        outcomes = self._dispatch(
            run,
            source.name,
            [(name, _bind(source.search_complaints, name)) for name in names.values()],
            "Complaint search",
        )

        for outcome in outcomes:
            if not outcome.ok or outcome.value is None:
                continue
            risk = outcome.value
            run.servicer_analysis.append(
                ServicerAnalysis(
                    servicer_name=outcome.key,
                    complaint_count=risk.total_complaints,
                    risk_level=risk.risk_level,
                    recent_issues=list(risk.top_issues[:5]),
                )
            )
            run.table.merge(ComplaintEvidence(risk))
            if risk.risk_score > SERVICER_RISK_RECOMMENDATION_THRESHOLD:
                run.recommendations.append(
                    f'Servicer "{outcome.key}" has {risk.total_complaints} CFPB complaints. '
                    "Consider requesting complete chain of title documentation."
                )

    def _attach_economic_context(self, run: _Run, profile: DebtProfile) -> None:
        source = self.economic_source
        if source is None or run.cancelled:
            return
        category = get_delinquency_category(profile.debt_type)
        outcomes = self._dispatch(
            run,
            source.name,
            [
                ("snapshot", source.economic_snapshot),
                ("trend", _bind(source.delinquency_trend, category, DELINQUENCY_TREND_PERIODS)),
            ],
            "Economic context",
        )
        snapshot_outcome, trend_outcome = outcomes
        if not snapshot_outcome.ok or snapshot_outcome.value is None:
            return

        snapshot = snapshot_outcome.value
        if trend_outcome.ok and trend_outcome.value is not None:
            snapshot.delinquency_trend = classify_delinquency_trend(trend_outcome.value)
        run.economic_snapshot = snapshot
        run.table.merge(EconomicEvidence(snapshot))
        logger.info(f"Economic context: market {snapshot.market_condition.value}")

        if snapshot.market_condition == MarketCondition.STRESSED:
            run.recommendations.append(STRESSED_MARKET_RECOMMENDATION)

    def _search_trades(self, run: _Run) -> None:
        source = self.trade_source
        if source is None or run.cancelled:
            return

        calls = []
        for key, candidate in run.table.ranked()[:TRADE_LOOKUP_LIMIT]:
            security = _trade_identifier(candidate)
            if security is not None:
                calls.append(((key, security.code), _bind(source.search_trades, security.code)))

        outcomes = self._dispatch(run, source.name, calls, "Trade search")
        for outcome in outcomes:
            if outcome.ok and outcome.value:
                key, code = outcome.key
                run.table.merge(TradeEvidence(key, code, tuple(outcome.value)))

    # -------------------------------------------------------------------------
    # Report
    # -------------------------------------------------------------------------

    def _build_report(self, run: _Run, quick: bool, started: float) -> InvestigationReport:
        ranked = [candidate for _, candidate in run.table.ranked()]
        trusts = ranked[:REPORT_LIMIT]

        recommendations = list(run.recommendations)
        if not trusts:
            recommendations.append(NOT_FOUND_RECOMMENDATION)
        elif trusts[0].confidence_score > QWR_RECOMMENDATION_THRESHOLD:
            recommendations.append(
                f'High-confidence match found: "{trusts[0].name}". '
                "Send a Qualified Written Request to verify the ownership chain."
            )

        if run.cancelled:
            status = "cancelled"
        elif run.dispatched and run.failed == run.dispatched:
            status = "partial" if trusts else "failed"
        elif run.failed:
            status = "partial"
        else:
            status = "ok"

        summary = InvestigationSummary(
            total_matches=len(ranked),
            high_confidence_matches=sum(
                1 for c in ranked if c.confidence_score > HIGH_CONFIDENCE_THRESHOLD
            ),
            data_sources_queried=run.sources_queried,
            source_errors=run.source_errors,
            elapsed_ms=round((time.perf_counter() - started) * 1000),
            economic_snapshot=run.economic_snapshot,
            status=status,
            quick=quick,
        )
        return InvestigationReport(
            trusts=trusts,
            summary=summary,
            servicer_analysis=run.servicer_analysis,
            recommendations=recommendations,
        )


def _bind(fn: Callable, *args) -> Callable[[], Any]:
    return lambda: fn(*args)


def _trade_identifier(candidate: CandidateTrust) -> SecurityIdentifier | None:
    """First CUSIP of a candidate, else its primary identifier."""
    for security in candidate.securities:
        if security.id_type == "CUSIP":
            return security
    return candidate.primary_identifier
