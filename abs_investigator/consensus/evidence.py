"""
Evidence variants and the candidate table they merge into.

Every adapter result is wrapped in one evidence type per source kind before
it reaches the candidate table. The table applies evidence one piece at a
time on the investigating thread, dispatching on the evidence type to a
dedicated merge method, so worker threads never touch a candidate.

Candidates are keyed by their normalized name. Two candidates whose names
differ only by case or punctuation collapse into one: the higher-confidence
candidate survives and absorbs the other's securities, filings and sources.
Confidence only ever grows while evidence is applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from abs_investigator.constants import (
    ABS_FORM_TYPES,
    CONFIDENCE_ABS_FORM,
    CONFIDENCE_FILING_BASE,
    CONFIDENCE_IDENTIFIER,
    CONFIDENCE_IDENTIFIER_SEED,
    CONFIDENCE_RECENT_FILING,
    CONFIDENCE_REGISTRANT,
    CONFIDENCE_TRADE,
    MAX_CONFIDENCE,
    RECENT_FILING_YEARS,
)
from abs_investigator.domain.models import (
    SOURCE_FILING,
    SOURCE_IDENTIFIER,
    SOURCE_REGISTRANT,
    SOURCE_TRADE,
    CandidateTrust,
    DebtType,
    EconomicSnapshot,
    FilingRecord,
    IdentifierRecord,
    RegistrantRecord,
    RelatedFiling,
    SecurityIdentifier,
    ServicerRiskProfile,
    Trade,
    VerificationRecord,
)
from abs_investigator.domain.validation import (
    normalize_name,
    registry_id_from_link,
    significant_tokens,
)
from abs_investigator.matching.candidates import distinctive_tokens
from abs_investigator.trading.aggregation import summarize
from abs_investigator.utils.hashing import compute_text_hash

logger = logging.getLogger(__name__)

UNKNOWN_TRUSTEE = "Unknown"


# =============================================================================
# Evidence variants
# =============================================================================


@dataclass(frozen=True)
class FilingEvidence:
    """A filing hit; seeds (or reinforces) the candidate named by the filer."""

    record: FilingRecord


@dataclass(frozen=True)
class RegistrantEvidence:
    """Registrant details resolved for an existing candidate."""

    candidate_key: str
    record: RegistrantRecord


@dataclass(frozen=True)
class IdentifierEvidence:
    """
    A security from the identifier source.

    ``candidate_key`` is set when the security was found by searching for (or
    looking up an identifier of) a specific candidate; a searched security
    whose name lacks that candidate's issuer stem is treated as untargeted.
    Untargeted securities attach only to a candidate that already carries the
    same code, and seed a new candidate when none does; an issuer search
    routinely returns other issuers' securities of the same vintage.
    """

    record: IdentifierRecord
    candidate_key: str | None = None


@dataclass(frozen=True)
class ComplaintEvidence:
    """A servicer risk profile; applies to every candidate."""

    profile: ServicerRiskProfile


@dataclass(frozen=True)
class EconomicEvidence:
    """An economic snapshot; applies to every candidate."""

    snapshot: EconomicSnapshot


@dataclass(frozen=True)
class TradeEvidence:
    """Trades reported for one candidate's identifier."""

    candidate_key: str
    identifier: str
    trades: tuple[Trade, ...] = ()


@dataclass(frozen=True)
class CatalogEvidence:
    """A candidate produced offline by the trust candidate generator."""

    candidate: CandidateTrust


Evidence = (
    FilingEvidence
    | RegistrantEvidence
    | IdentifierEvidence
    | ComplaintEvidence
    | EconomicEvidence
    | TradeEvidence
    | CatalogEvidence
)


def candidate_key(name: str | None) -> str:
    """Deduplication key for a candidate name."""
    return normalize_name(name)


def same_issuer(candidate_name: str | None, security_name: str | None) -> bool:
    """
    True when a security's name carries the candidate's issuer stem.

    The stem is the candidate name's distinctive alphabetic tokens, so
    vintage and series tokens ("2024", "a2") never count as a match.
    """
    stem = {t for t in distinctive_tokens(candidate_name) if t.isalpha()}
    return bool(stem) and stem <= significant_tokens(security_name)


# =============================================================================
# Candidate table
# =============================================================================


class CandidateTable:
    """
    In-progress candidates of one investigation.

    Not thread-safe; only the investigating thread calls ``merge``.

    Args:
        debt_type: Debt type assigned to candidates seeded from remote sources
        today: Clock used for the recent-filing boost and verification stamps
    """

    def __init__(self, debt_type: DebtType, today: Callable[[], date] = date.today):
        self.debt_type = debt_type
        self.today = today
        self._candidates: dict[str, CandidateTrust] = {}
        self._registry_ids: dict[str, str] = {}
        self._confirmed_identifiers: dict[str, set[str]] = {}
        self._handlers: dict[type, Callable] = {
            FilingEvidence: self._merge_filing,
            RegistrantEvidence: self._merge_registrant,
            IdentifierEvidence: self._merge_identifier,
            ComplaintEvidence: self._merge_complaints,
            EconomicEvidence: self._merge_economic,
            TradeEvidence: self._merge_trades,
            CatalogEvidence: self._merge_catalog,
        }

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[CandidateTrust]:
        return iter(self._candidates.values())

    def __contains__(self, key: str) -> bool:
        return key in self._candidates

    def get(self, key: str) -> CandidateTrust | None:
        return self._candidates.get(key)

    def keys(self) -> list[str]:
        return list(self._candidates)

    def registry_ids(self) -> dict[str, str]:
        """Registry ids of candidates whose registrant is still unresolved."""
        return {
            key: registry_id
            for key, registry_id in self._registry_ids.items()
            if key in self._candidates and self._candidates[key].registrant is None
        }

    def ranked(self) -> list[tuple[str, CandidateTrust]]:
        """(key, candidate) pairs by confidence, highest first; ties keep insertion order."""
        return sorted(
            self._candidates.items(), key=lambda item: item[1].confidence_score, reverse=True
        )

    def merge(self, evidence: Evidence) -> CandidateTrust | None:
        """
        Apply one piece of evidence.

        Returns:
            The candidate the evidence landed on, or None when it applied to
            no single candidate (broadcast evidence, unknown candidate key,
            empty trade list)
        """
        handler = self._handlers.get(type(evidence))
        if handler is None:
            raise TypeError(f"Unsupported evidence type: {type(evidence).__name__}")
        return handler(evidence)

    def add(self, candidate: CandidateTrust) -> CandidateTrust:
        """
        Insert a candidate, collapsing it with any same-named candidate.

        The higher-confidence candidate survives (the existing one on a tie)
        and absorbs the other's securities, related filings and sources.
        """
        key = candidate_key(candidate.name)
        existing = self._candidates.get(key)
        if existing is None:
            self._candidates[key] = candidate
            return candidate

        if candidate.confidence_score > existing.confidence_score:
            winner, loser = candidate, existing
        else:
            winner, loser = existing, candidate
        _absorb(winner, loser)
        self._candidates[key] = winner
        logger.debug(
            f"Merged duplicate candidate {candidate.name!r} "
            f"(confidence {winner.confidence_score:.0f})"
        )
        return winner

    # -------------------------------------------------------------------------
    # Per-variant merges
    # -------------------------------------------------------------------------

    def _merge_filing(self, evidence: FilingEvidence) -> CandidateTrust:
        record = evidence.record
        name = record.entity_name or "Unknown Trust"
        today = self.today()

        confidence = CONFIDENCE_FILING_BASE
        reasons = ["Filing found in SEC EDGAR"]
        form = (record.form_category or "").upper()
        if any(form_type in form for form_type in ABS_FORM_TYPES):
            confidence += CONFIDENCE_ABS_FORM
            reasons.append(f"ABS-specific filing ({record.form_category})")
        if record.filing_date and today.year - record.filing_date.year <= RECENT_FILING_YEARS:
            confidence += CONFIDENCE_RECENT_FILING
            reasons.append(f"Recent filing ({record.filing_date.isoformat()})")
        confidence = min(confidence, MAX_CONFIDENCE)

        verification = VerificationRecord()
        verification.corroborate(SOURCE_FILING, confidence, timestamp=today.isoformat())

        securities = [
            SecurityIdentifier(code=code, tranche=f"Class A{i + 1}")
            for i, code in enumerate(_unique_codes(record.extracted_identifiers))
        ]
        related = []
        if record.document_ref:
            related.append(
                RelatedFiling(
                    form_category=record.form_category,
                    filing_date=record.filing_date.isoformat() if record.filing_date else "",
                    document_ref=record.document_ref,
                )
            )

        key = candidate_key(name)
        candidate = CandidateTrust(
            trust_id=f"SEC-{compute_text_hash(key)[:12].upper()}",
            name=name,
            trustee=record.issuer or UNKNOWN_TRUSTEE,
            debt_type=self.debt_type,
            closing_date=record.filing_date.isoformat() if record.filing_date else None,
            original_balance=record.deal_size or 0.0,
            securities=securities,
            match_score=confidence,
            match_reasons=reasons,
            filing_link=record.document_ref,
            verification=verification,
            related_filings=related,
        )

        registry_id = record.registry_id or registry_id_from_link(record.document_ref)
        if registry_id and key not in self._registry_ids:
            self._registry_ids[key] = registry_id
        return self.add(candidate)

    def _merge_registrant(self, evidence: RegistrantEvidence) -> CandidateTrust | None:
        candidate = self._candidates.get(evidence.candidate_key)
        if candidate is None or candidate.registrant is not None:
            return candidate

        candidate.registrant = evidence.record
        candidate.verification.corroborate(
            SOURCE_REGISTRANT, CONFIDENCE_REGISTRANT, timestamp=self.today().isoformat()
        )
        candidate.match_reasons.append(
            f"Registrant details resolved (CIK {evidence.record.registry_id})"
        )
        return candidate

    def _merge_identifier(self, evidence: IdentifierEvidence) -> CandidateTrust | None:
        record = evidence.record
        code = (record.identifier or "").strip().upper()
        if not code:
            return None

        candidate = None
        if evidence.candidate_key is not None:
            candidate = self._candidates.get(evidence.candidate_key)
            if candidate is None:
                return None
            if not candidate.has_identifier(code) and not same_issuer(
                candidate.name, record.name
            ):
                # Another issuer's security returned by the candidate's search
                candidate = None

        if candidate is None:
            candidate = self._find_by_identifier(code)
        if candidate is None:
            return self._seed_from_identifier(record, code)

        key = candidate_key(candidate.name)
        confirmed = self._confirmed_identifiers.setdefault(key, set())
        if code in confirmed:
            return candidate
        confirmed.add(code)

        if not candidate.has_identifier(code):
            candidate.securities.append(
                SecurityIdentifier(
                    code=code,
                    tranche=f"Class A{len(candidate.securities) + 1}",
                    id_type=record.id_type,
                )
            )
        candidate.verification.corroborate(
            SOURCE_IDENTIFIER, CONFIDENCE_IDENTIFIER, timestamp=self.today().isoformat()
        )
        candidate.match_reasons.append(f"Security {code} confirmed by identifier source")
        return candidate

    def _seed_from_identifier(self, record: IdentifierRecord, code: str) -> CandidateTrust:
        verification = VerificationRecord()
        verification.corroborate(
            SOURCE_IDENTIFIER, CONFIDENCE_IDENTIFIER_SEED, timestamp=self.today().isoformat()
        )
        candidate = CandidateTrust(
            trust_id=f"{record.id_type}-{code}",
            name=record.name or "Unknown Security",
            trustee=record.issuer or UNKNOWN_TRUSTEE,
            debt_type=self.debt_type,
            securities=[SecurityIdentifier(code=code, tranche="Class A", id_type=record.id_type)],
            match_score=CONFIDENCE_IDENTIFIER_SEED,
            match_reasons=["Security found by identifier search"],
            verification=verification,
        )
        candidate = self.add(candidate)
        self._confirmed_identifiers.setdefault(candidate_key(candidate.name), set()).add(code)
        return candidate

    def _merge_complaints(self, evidence: ComplaintEvidence) -> None:
        for candidate in self._candidates.values():
            if candidate.servicer_risk is None:
                candidate.servicer_risk = evidence.profile
            candidate.verification.complaint_checked = True

    def _merge_economic(self, evidence: EconomicEvidence) -> None:
        for candidate in self._candidates.values():
            candidate.economic_snapshot = evidence.snapshot

    def _merge_trades(self, evidence: TradeEvidence) -> CandidateTrust | None:
        candidate = self._candidates.get(evidence.candidate_key)
        if candidate is None or not evidence.trades:
            return None
        if candidate.verification.trade_verified:
            return candidate

        candidate.trading_summary = summarize(evidence.trades)
        candidate.verification.corroborate(
            SOURCE_TRADE, CONFIDENCE_TRADE, timestamp=self.today().isoformat()
        )
        candidate.match_reasons.append(
            f"{len(evidence.trades)} trades reported for {evidence.identifier}"
        )
        return candidate

    def _merge_catalog(self, evidence: CatalogEvidence) -> CandidateTrust:
        return self.add(evidence.candidate)

    # -------------------------------------------------------------------------
    # Matching helpers
    # -------------------------------------------------------------------------

    def _find_by_identifier(self, code: str) -> CandidateTrust | None:
        for candidate in self._candidates.values():
            if candidate.has_identifier(code):
                return candidate
        return None


def _absorb(winner: CandidateTrust, loser: CandidateTrust) -> None:
    """Fold ``loser``'s corroboration into ``winner`` without lowering anything."""
    for security in loser.securities:
        if not winner.has_identifier(security.code):
            winner.securities.append(security)

    known_refs = {f.document_ref for f in winner.related_filings}
    for filing in loser.related_filings:
        if filing.document_ref not in known_refs:
            winner.related_filings.append(filing)
            known_refs.add(filing.document_ref)

    for reason in loser.match_reasons:
        if reason not in winner.match_reasons:
            winner.match_reasons.append(reason)

    verification = winner.verification
    for source in loser.verification.data_sources:
        verification.corroborate(source, 0)
    verification.complaint_checked |= loser.verification.complaint_checked
    verification.confidence_score = max(
        verification.confidence_score, loser.verification.confidence_score
    )
    winner.match_score = max(winner.match_score, loser.match_score)

    winner.filing_link = winner.filing_link or loser.filing_link
    winner.registrant = winner.registrant or loser.registrant
    winner.servicer_risk = winner.servicer_risk or loser.servicer_risk
    winner.economic_snapshot = winner.economic_snapshot or loser.economic_snapshot
    winner.trading_summary = winner.trading_summary or loser.trading_summary
    if not winner.original_balance:
        winner.original_balance = loser.original_balance


def _unique_codes(codes: Iterable[str]) -> list[str]:
    """Upper-cased, stripped codes in first-seen order, blanks dropped."""
    return list(dict.fromkeys(c.strip().upper() for c in codes if c and c.strip()))
