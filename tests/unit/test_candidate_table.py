"""
Unit tests for evidence merging into the candidate table.
"""

import dataclasses
from datetime import date

import pytest
from conftest import (
    SAMPLE_TRADES,
    SANTANDER_FILING,
    SANTANDER_REGISTRANT,
    SANTANDER_SECURITY,
    fixed_today,
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
    candidate_key,
)
from abs_investigator.domain.models import (
    DebtType,
    EconomicSnapshot,
    IdentifierRecord,
    MarketCondition,
    ServicerRiskProfile,
    VerificationRecord,
)
from abs_investigator.matching.candidates import TrustCandidateGenerator


@pytest.fixture
def table():
    return CandidateTable(DebtType.AUTO, today=fixed_today)


SANTANDER_KEY = candidate_key(SANTANDER_FILING.entity_name)

CARMAX_SECURITY = IdentifierRecord(
    identifier="14318XAB1", name="CARMAX AUTO OWNER TRUST 2024-A A2", issuer="CARMX"
)


class TestFilingEvidence:
    """Tests for filing merges."""

    def test_seed_score(self, table):
        """40 base + 20 for an ABS form + 10 for a filing this year."""
        candidate = table.merge(FilingEvidence(SANTANDER_FILING))

        assert candidate.confidence_score == 70
        assert candidate.match_score == 70
        assert candidate.sources == {"filing"}
        assert candidate.verification.filing_verified
        assert candidate.trustee == "Santander Consumer USA Inc."
        assert candidate.debt_type is DebtType.AUTO
        assert candidate.filing_link == SANTANDER_FILING.document_ref
        assert len(candidate.related_filings) == 1
        assert candidate.related_filings[0].form_category == "SF-3"
        assert candidate.verification.last_verified == "2026-10-17"

    def test_old_non_abs_filing(self, table):
        """A 10-K from 2015 earns only the base score."""
        record = dataclasses.replace(
            SANTANDER_FILING, form_category="10-K", filing_date=date(2015, 2, 1)
        )

        candidate = table.merge(FilingEvidence(record))

        assert candidate.confidence_score == 40

    def test_extracted_identifiers_become_securities(self, table):
        record = dataclasses.replace(
            SANTANDER_FILING, extracted_identifiers=("80286tab9", "80286TAB9", "037833100")
        )

        candidate = table.merge(FilingEvidence(record))

        assert [s.code for s in candidate.securities] == ["80286TAB9", "037833100"]
        assert candidate.securities[0].tranche == "Class A1"

    def test_extracted_identifiers_blank_and_padded(self, table):
        record = dataclasses.replace(
            SANTANDER_FILING, extracted_identifiers=(" 80286tab9 ", "", "80286TAB9")
        )

        candidate = table.merge(FilingEvidence(record))

        assert [s.code for s in candidate.securities] == ["80286TAB9"]

    def test_case_variants_merge_keeping_higher_score(self, table):
        """Names differing only by case collapse into one candidate with the higher score."""
        old = dataclasses.replace(
            SANTANDER_FILING,
            entity_name="SANTANDER DRIVE AUTO RECEIVABLES TRUST",
            form_category="10-D",
            filing_date=date(2012, 5, 1),
            document_ref="https://www.sec.gov/Archives/edgar/data/1234567/000123456712000009",
        )

        table.merge(FilingEvidence(old))
        table.merge(FilingEvidence(SANTANDER_FILING))

        assert len(table) == 1
        merged = table.get(SANTANDER_KEY)
        assert merged.confidence_score == 70
        assert merged.name == SANTANDER_FILING.entity_name
        assert len(merged.related_filings) == 2

    def test_lower_scoring_duplicate_does_not_lower_confidence(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))
        weaker = dataclasses.replace(
            SANTANDER_FILING,
            entity_name="santander drive auto receivables trust",
            form_category="8-K",
            filing_date=None,
        )

        merged = table.merge(FilingEvidence(weaker))

        assert len(table) == 1
        assert merged.confidence_score == 70

    def test_registry_id_from_link(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))

        assert table.registry_ids() == {SANTANDER_KEY: "0001234567"}


class TestRegistrantEvidence:
    """Tests for registrant merges."""

    def test_boost_once(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))

        first = table.merge(RegistrantEvidence(SANTANDER_KEY, SANTANDER_REGISTRANT))
        table.merge(RegistrantEvidence(SANTANDER_KEY, SANTANDER_REGISTRANT))

        assert first.confidence_score == 85
        assert first.registrant.tax_id == "20-1234567"
        assert "registrant" in first.sources
        assert table.registry_ids() == {}

    def test_unknown_candidate(self, table):
        assert table.merge(RegistrantEvidence("missing", SANTANDER_REGISTRANT)) is None


class TestIdentifierEvidence:
    """Tests for identifier merges."""

    def test_targeted_search_attaches(self, table):
        """A security found by searching a trust's name attaches with +15."""
        table.merge(FilingEvidence(SANTANDER_FILING))

        candidate = table.merge(
            IdentifierEvidence(SANTANDER_SECURITY, candidate_key=SANTANDER_KEY)
        )

        assert len(table) == 1
        assert candidate.confidence_score == 85
        assert candidate.sources == {"filing", "identifier"}
        assert candidate.verification.identifier_verified
        assert candidate.has_identifier("80286TAB9")

    def test_attach_by_identifier(self, table):
        """An identifier already on a candidate attaches even when the name differs."""
        record = dataclasses.replace(SANTANDER_FILING, extracted_identifiers=("80286TAB9",))
        table.merge(FilingEvidence(record))
        renamed = dataclasses.replace(SANTANDER_SECURITY, name="SDART 2026-1 A2")

        candidate = table.merge(IdentifierEvidence(renamed))

        assert candidate.name == SANTANDER_FILING.entity_name
        assert len(candidate.securities) == 1
        assert candidate.confidence_score == 85

    def test_same_identifier_boosts_once(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))

        table.merge(IdentifierEvidence(SANTANDER_SECURITY, candidate_key=SANTANDER_KEY))
        table.merge(IdentifierEvidence(SANTANDER_SECURITY))

        assert table.get(SANTANDER_KEY).confidence_score == 85

    def test_other_issuer_same_vintage_seeds_own_candidate(self, table):
        """A same-year security from another issuer never lands on an existing trust."""
        santander = dataclasses.replace(
            SANTANDER_FILING, entity_name="Santander Drive Auto Receivables Trust 2024-1"
        )
        table.merge(FilingEvidence(santander))

        carmax = table.merge(IdentifierEvidence(CARMAX_SECURITY))

        assert len(table) == 2
        assert carmax.name == CARMAX_SECURITY.name
        assert carmax.sources == {"identifier"}
        kept = table.get(candidate_key(santander.entity_name))
        assert kept.confidence_score == 70
        assert kept.sources == {"filing"}
        assert not kept.has_identifier("14318XAB1")

    def test_targeted_search_skips_other_issuer(self, table):
        """A trust's own search can return other issuers; those seed their own candidate."""
        table.merge(FilingEvidence(SANTANDER_FILING))

        landed = table.merge(IdentifierEvidence(CARMAX_SECURITY, candidate_key=SANTANDER_KEY))

        assert landed.name == CARMAX_SECURITY.name
        assert len(table) == 2
        assert table.get(SANTANDER_KEY).confidence_score == 70

    def test_unmatched_identifier_seeds_candidate(self, table):
        record = IdentifierRecord(
            identifier="BBG00XYZ1234",
            name="Carvana Auto Receivables Trust 2025-P1",
            issuer="CRVNA",
            id_type="FIGI",
        )

        candidate = table.merge(IdentifierEvidence(record))

        assert len(table) == 1
        assert candidate.confidence_score == 40
        assert candidate.sources == {"identifier"}
        assert candidate.trust_id == "FIGI-BBG00XYZ1234"
        assert candidate.securities[0].id_type == "FIGI"

    def test_targeted_identifier_for_missing_candidate(self, table):
        """Evidence addressed to an unknown candidate is dropped, not seeded."""
        assert table.merge(IdentifierEvidence(SANTANDER_SECURITY, candidate_key="gone")) is None
        assert len(table) == 0

    def test_blank_identifier_ignored(self, table):
        record = dataclasses.replace(SANTANDER_SECURITY, identifier="  ")

        assert table.merge(IdentifierEvidence(record)) is None


class TestBroadcastEvidence:
    """Tests for complaint and economic merges."""

    def test_complaints_attach_to_every_candidate(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))
        table.merge(
            IdentifierEvidence(
                IdentifierRecord(identifier="BBG00XYZ1234", name="Carvana Auto", id_type="FIGI")
            )
        )
        risk = ServicerRiskProfile("Santander", total_complaints=900, recent_complaints=80)

        table.merge(ComplaintEvidence(risk))

        for candidate in table:
            assert candidate.servicer_risk is risk
            assert candidate.verification.complaint_checked
        # Complaint data adds no confidence
        assert table.get(SANTANDER_KEY).confidence_score == 70

    def test_first_complaint_profile_wins(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))
        first = ServicerRiskProfile("Santander", 10, 1)
        second = ServicerRiskProfile("Chrysler Capital", 20, 2)

        table.merge(ComplaintEvidence(first))
        table.merge(ComplaintEvidence(second))

        assert table.get(SANTANDER_KEY).servicer_risk is first

    def test_economic_snapshot(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))
        snapshot = EconomicSnapshot(market_condition=MarketCondition.STRESSED)

        table.merge(EconomicEvidence(snapshot))

        assert table.get(SANTANDER_KEY).economic_snapshot is snapshot


class TestTradeEvidence:
    """Tests for trade merges."""

    def test_trades_verify_candidate(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))

        candidate = table.merge(
            TradeEvidence(SANTANDER_KEY, "80286TAB9", tuple(SAMPLE_TRADES))
        )

        assert candidate.confidence_score == 90
        assert candidate.verification.trade_verified
        assert candidate.trading_summary.total_trades == 2
        assert candidate.trading_summary.total_volume == 500000

    def test_empty_trades_change_nothing(self, table):
        table.merge(FilingEvidence(SANTANDER_FILING))

        assert table.merge(TradeEvidence(SANTANDER_KEY, "80286TAB9", ())) is None
        assert table.get(SANTANDER_KEY).confidence_score == 70
        assert table.get(SANTANDER_KEY).trading_summary is None


class TestCatalogEvidence:
    """Tests for offline candidates."""

    def test_catalog_candidates(self, table, santander_profile):
        generator = TrustCandidateGenerator(jitter=False)
        for candidate in generator.find_candidates(DebtType.AUTO, santander_profile):
            table.merge(CatalogEvidence(candidate))

        assert len(table) == 3
        assert [c.match_score for _, c in table.ranked()] == [60, 60, 40]


class TestMonotonicConfidence:
    """Confidence never decreases as evidence merges."""

    def test_sequence(self, table):
        steps = [
            FilingEvidence(SANTANDER_FILING),
            RegistrantEvidence(SANTANDER_KEY, SANTANDER_REGISTRANT),
            IdentifierEvidence(SANTANDER_SECURITY, candidate_key=SANTANDER_KEY),
            ComplaintEvidence(ServicerRiskProfile("Santander", 5000, 300, risk_score=90)),
            EconomicEvidence(EconomicSnapshot()),
            FilingEvidence(dataclasses.replace(SANTANDER_FILING, form_category="8-K")),
            TradeEvidence(SANTANDER_KEY, "80286TAB9", tuple(SAMPLE_TRADES)),
        ]

        previous = 0.0
        for evidence in steps:
            table.merge(evidence)
            current = table.get(SANTANDER_KEY).confidence_score
            assert current >= previous
            assert 0 <= current <= 100
            previous = current

        assert previous == 100

    def test_negative_boost_rejected(self):
        with pytest.raises(ValueError):
            VerificationRecord().corroborate("filing", -5)

    def test_unsupported_evidence(self, table):
        with pytest.raises(TypeError):
            table.merge("not evidence")
