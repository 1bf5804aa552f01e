"""
Offline trust candidate generator.

Scores every catalog shelf of the requested debt type against the debt
profile using independent signals:

    +40  servicer is known to service the shelf's prefix
    +20  shelf name overlaps the servicer name
    +15  shelf name overlaps the original creditor
    +15  origination year inside the shelf's vintage range
    +10  borrower state inside the shelf's focus area

Shelves scoring below 30 are discarded. Survivors get a small tie-breaking
jitter drawn from an injected random source and are clamped to [30, 100].
No network calls are made; this is the investigator's fallback when every
remote source comes back empty.
"""

from __future__ import annotations

import logging
import random

from abs_investigator.catalog.servicers import get_servicer_trust_prefixes
from abs_investigator.catalog.trusts import TRUST_CATALOG, TrustTemplate
from abs_investigator.constants import (
    DEFAULT_MAX_RESULTS,
    MAX_JITTER,
    MAX_MATCH_SCORE,
    MIN_MATCH_SCORE,
    SCORE_GEOGRAPHY,
    SCORE_ORIGINATOR_NAME,
    SCORE_SERVICER_NAME,
    SCORE_SERVICER_PREFIX,
    SCORE_VINTAGE_YEAR,
)
from abs_investigator.domain.models import (
    SOURCE_CATALOG,
    CandidateTrust,
    DebtProfile,
    DebtType,
    VerificationRecord,
)
from abs_investigator.domain.validation import parse_debt_type, significant_tokens
from abs_investigator.matching.identifiers import generate_trust_securities
from abs_investigator.utils.hashing import stable_int

logger = logging.getLogger(__name__)

# Asset-class words shared by many shelf names; they say nothing about the issuer
GENERIC_NAME_TOKENS = frozenset(
    {
        "asset",
        "backed",
        "securities",
        "securitization",
        "receivables",
        "auto",
        "automobile",
        "mortgage",
        "loan",
        "loans",
        "credit",
        "card",
        "student",
        "consumer",
        "capital",
        "finance",
        "funding",
        "master",
        "note",
        "issuance",
        "owner",
        "medical",
        "utility",
        "abs",
        "rmbs",
    }
)

DEFAULT_REASON = "Pattern match based on debt characteristics"


def distinctive_tokens(name: str | None) -> set[str]:
    """Significant tokens of a name, minus generic asset-class words."""
    return significant_tokens(name) - GENERIC_NAME_TOKENS


class TrustCandidateGenerator:
    """
    Heuristic matcher over the bundled trust catalog.

    Args:
        catalog: Shelf templates keyed by prefix (default: TRUST_CATALOG)
        rng: Random source for jitter; pass ``random.Random(seed)`` in tests
        jitter: Set False to disable the tie-breaking jitter entirely
    """

    def __init__(
        self,
        catalog: dict[str, TrustTemplate] | None = None,
        rng: random.Random | None = None,
        jitter: bool = True,
    ):
        self.catalog = catalog if catalog is not None else TRUST_CATALOG
        self.rng = rng or random.Random()
        self.jitter = jitter

    def score_template(
        self,
        template: TrustTemplate,
        profile: DebtProfile,
        servicer_prefixes: tuple[str, ...] = (),
    ) -> tuple[int, list[str]]:
        """
        Score one shelf against a profile, before jitter and clamping.

        Returns:
            (score, reasons)
        """
        score = 0
        reasons: list[str] = []
        trust_tokens = distinctive_tokens(template.name)

        if template.prefix in servicer_prefixes:
            score += SCORE_SERVICER_PREFIX
            reasons.append("Trust prefix matches known trusts for servicer")

        servicer = profile.servicer_name
        if servicer:
            servicer_tokens = distinctive_tokens(servicer)
            if trust_tokens & servicer_tokens or template.prefix.lower() in servicer_tokens:
                score += SCORE_SERVICER_NAME
                reasons.append("Trust name matches servicer")

        if profile.original_creditor and trust_tokens & distinctive_tokens(
            profile.original_creditor
        ):
            score += SCORE_ORIGINATOR_NAME
            reasons.append("Trust associated with originator")

        if template.covers_year(_origination_year(profile)):
            score += SCORE_VINTAGE_YEAR
            reasons.append("Origination year within trust vintage range")

        if profile.state and profile.state.upper() in template.focus_states:
            score += SCORE_GEOGRAPHY
            reasons.append("Geographic alignment with trust focus area")

        return score, reasons

    def find_candidates(
        self,
        debt_type: DebtType | str,
        profile: DebtProfile,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[CandidateTrust]:
        """
        Rank catalog trusts that may hold the profile's debt.

        Args:
            debt_type: Debt type to search (enum or its string value)
            profile: What the consumer knows about the debt
            max_results: Maximum candidates returned

        Returns:
            Candidates sorted by match score, highest first. Each carries the
            "catalog" source tag and a confidence equal to its match score.

        Raises:
            InvalidProfileError: If ``debt_type`` is unrecognized
        """
        debt_type = parse_debt_type(debt_type)
        servicer_prefixes = get_servicer_trust_prefixes(debt_type, profile.servicer_name)
        year = _origination_year(profile)

        candidates = []
        for template in self.catalog.values():
            if template.debt_type != debt_type:
                continue

            score, reasons = self.score_template(template, profile, servicer_prefixes)
            if score < MIN_MATCH_SCORE:
                continue

            if self.jitter:
                score += self.rng.randint(0, MAX_JITTER)
            score = max(MIN_MATCH_SCORE, min(MAX_MATCH_SCORE, score))

            vintage = year if template.covers_year(year) else template.latest_year
            candidates.append(
                self._build_candidate(template, vintage, template.series[0], score, reasons)
            )

        candidates.sort(key=lambda c: c.match_score, reverse=True)
        logger.debug(
            f"Offline matcher: {len(candidates)} {debt_type.value} candidates "
            f"(returning {min(len(candidates), max_results)})"
        )
        return candidates[:max_results]

    def get_trust_by_id(self, trust_id: str) -> CandidateTrust | None:
        """
        Look up a trust directly by id (``PREFIX-YEAR-SERIES``).

        Returns None for a malformed id or an unknown prefix.
        """
        parts = trust_id.split("-") if trust_id else []
        if len(parts) < 3:
            return None

        template = self.catalog.get(parts[0].upper())
        if template is None:
            return None
        try:
            year = int(parts[1])
        except ValueError:
            return None
        series = "-".join(parts[2:])

        return self._build_candidate(
            template, year, series, MAX_MATCH_SCORE, ["Direct trust lookup"], closing_month=6
        )

    def _build_candidate(
        self,
        template: TrustTemplate,
        year: int,
        series: str,
        score: int,
        reasons: list[str],
        closing_month: int | None = None,
    ) -> CandidateTrust:
        securities = generate_trust_securities(template.prefix, year, series, template.series)
        month = closing_month or stable_int(template.prefix, year, series, modulo=12) + 1
        return CandidateTrust(
            trust_id=f"{template.prefix}-{year}-{series}",
            name=f"{template.name} {year}-{series}",
            trustee=template.trustee,
            debt_type=template.debt_type,
            closing_date=f"{year}-{month:02d}-15",
            original_balance=sum(s.face_balance for s in securities),
            securities=securities,
            match_score=score,
            match_reasons=reasons or [DEFAULT_REASON],
            verification=VerificationRecord(
                confidence_score=float(score),
                data_sources=[SOURCE_CATALOG],
            ),
        )


def _origination_year(profile: DebtProfile) -> int | None:
    year = profile.origination_year
    if year and year.isdigit():
        return int(year)
    return None
