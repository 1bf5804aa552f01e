"""
Unit tests for the CFPB complaint source.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests
from conftest import fixed_today

from abs_investigator.sources.base import SourceUnavailableError
from abs_investigator.sources.cfpb import COMPLAINTS_URL, CfpbComplaintSource, compute_risk_score


def _complaint(
    received="2026-06-01", issue="Managing the loan or lease", disputed="No", timely="Yes"
):
    return {
        "_source": {
            "date_received": f"{received}T12:00:00-05:00",
            "issue": issue,
            "consumer_disputed": disputed,
            "timely": timely,
        }
    }


@pytest.fixture
def source():
    with patch("abs_investigator.sources.cfpb.get_rate_limiter", return_value=MagicMock()):
        return CfpbComplaintSource(MagicMock(), today=fixed_today)


class TestComputeRiskScore:
    """Tests for the complaint risk score."""

    @pytest.mark.parametrize(
        "total,dispute_rate,timely_rate,expected",
        [
            (0, 0.0, None, 0),
            (101, 0.0, 1.0, 10),
            (501, 0.0, 1.0, 20),
            (1001, 0.0, 1.0, 30),
            (50, 11.0, 1.0, 10),
            (50, 31.0, 1.0, 20),
            (50, 51.0, 1.0, 30),
            (50, 0.0, 0.85, 10),
            (50, 0.0, 0.5, 20),
            (5000, 90.0, 0.1, 80),
        ],
    )
    def test_bands(self, total, dispute_rate, timely_rate, expected):
        assert compute_risk_score(total, dispute_rate, timely_rate) == expected

    def test_nothing_sampled_adds_no_timeliness_penalty(self):
        assert compute_risk_score(0, 0.0, None) == 0


class TestBuildProfile:
    """Tests for turning a search response into a risk profile."""

    def test_profile(self, source):
        hits = (
            [_complaint(disputed="Yes", timely="No")] * 4
            + [_complaint(issue="Problems at the end of the loan or lease")] * 3
            + [_complaint(received="2024-01-10", issue="Struggling to pay your loan")] * 3
        )
        payload = {"hits": {"total": {"value": 1500}, "hits": hits}}

        profile = source.build_profile("Santander Consumer USA", payload)

        assert profile.servicer_name == "Santander Consumer USA"
        assert profile.total_complaints == 1500
        assert profile.recent_complaints == 7
        assert profile.top_issues == [
            "Managing the loan or lease",
            "Problems at the end of the loan or lease",
            "Struggling to pay your loan",
        ]
        # 30 (total) + 20 (40% disputed) + 20 (60% timely)
        assert profile.risk_score == 70
        assert profile.risk_level == "high"

    def test_integer_total(self, source):
        payload = {"hits": {"total": 42, "hits": [_complaint()]}}

        assert source.build_profile("Ally", payload).total_complaints == 42

    def test_missing_total_counts_sample(self, source):
        payload = {"hits": {"hits": [_complaint(), _complaint()]}}

        assert source.build_profile("Ally", payload).total_complaints == 2

    def test_empty(self, source):
        profile = source.build_profile("Nobody Lending", {})

        assert profile.total_complaints == 0
        assert profile.recent_complaints == 0
        assert profile.top_issues == []
        assert profile.risk_score == 0
        assert profile.risk_level == "low"

    def test_unparsable_dates_skipped(self, source):
        hits = [{"_source": {"date_received": "sometime", "issue": "Fees"}}]

        assert source.build_profile("Ally", {"hits": {"hits": hits}}).recent_complaints == 0


class TestSearchComplaints:
    """Tests for the HTTP call."""

    def test_request(self, source):
        response = MagicMock(status_code=200)
        response.json.return_value = {"hits": {"total": {"value": 3}, "hits": []}}
        source.session.get.return_value = response

        profile = source.search_complaints("Santander Consumer USA")

        args, kwargs = source.session.get.call_args
        assert args[0] == COMPLAINTS_URL
        assert kwargs["params"]["company"] == "Santander Consumer USA"
        assert kwargs["params"]["size"] == "100"
        assert profile.total_complaints == 3

    def test_http_error(self, source):
        source.session.get.return_value = MagicMock(status_code=502)

        with pytest.raises(SourceUnavailableError, match="HTTP 502"):
            source.search_complaints("Ally")

    def test_network_error(self, source):
        source.session.get.side_effect = requests.ConnectionError("name resolution failed")

        with pytest.raises(SourceUnavailableError, match="name resolution failed"):
            source.search_complaints("Ally")
