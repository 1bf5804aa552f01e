"""
CFPB Consumer Complaint Database source.

Builds a servicer risk profile from the most recent complaints filed against
a company: total count, complaints in the last year, the most frequent
issues, and a 0-100 risk score.
"""

import logging
from collections import Counter
from collections.abc import Callable
from datetime import date, timedelta

import requests

from abs_investigator.constants import CFPB_RATE_LIMIT, DEFAULT_ADAPTER_TIMEOUT
from abs_investigator.domain.models import ServicerRiskProfile
from abs_investigator.sources.base import ComplaintSource, SourceUnavailableError, check_response
from abs_investigator.utils.rate_limiting import get_rate_limiter

logger = logging.getLogger(__name__)

COMPLAINTS_URL = "https://www.consumerfinance.gov/data-research/consumer-complaints/search/api/v1/"

DEFAULT_SAMPLE_SIZE = 100
RECENT_WINDOW_DAYS = 365
TOP_ISSUES_LIMIT = 5


def compute_risk_score(
    total_complaints: int, dispute_rate: float, timely_rate: float | None
) -> int:
    """
    Complaint-based risk score, capped at 100.

    Args:
        total_complaints: Complaints on file for the company
        dispute_rate: Percentage (0-100) of sampled complaints the consumer disputed
        timely_rate: Fraction (0-1) of sampled complaints answered on time,
            or None when nothing was sampled
    """
    score = 0

    if total_complaints > 1000:
        score += 30
    elif total_complaints > 500:
        score += 20
    elif total_complaints > 100:
        score += 10

    if dispute_rate > 50:
        score += 30
    elif dispute_rate > 30:
        score += 20
    elif dispute_rate > 10:
        score += 10

    if timely_rate is not None:
        if timely_rate < 0.8:
            score += 20
        elif timely_rate < 0.9:
            score += 10

    return min(score, 100)


class CfpbComplaintSource(ComplaintSource):
    """
    CFPB complaint adapter.

    Args:
        session: HTTP session
        timeout: Per-request timeout in seconds
        sample_size: Most recent complaints fetched for the statistics
        today: Clock used for the "recent" window
    """

    name = "cfpb"

    def __init__(
        self,
        session: requests.Session,
        timeout: float = DEFAULT_ADAPTER_TIMEOUT,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        today: Callable[[], date] = date.today,
    ):
        self.session = session
        self.timeout = timeout
        self.sample_size = sample_size
        self.today = today
        self._rate_limiter = get_rate_limiter("cfpb", CFPB_RATE_LIMIT)

    def search_complaints(self, company_name: str) -> ServicerRiskProfile:
        params = {
            "field": "all",
            "size": str(self.sample_size),
            "sort": "created_date_desc",
            "company": company_name,
        }
        if self._rate_limiter is not None:
            self._rate_limiter()
        try:
            response = self.session.get(
                COMPLAINTS_URL,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SourceUnavailableError(self.name, str(e)) from e
        check_response(self.name, response)

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceUnavailableError(self.name, f"invalid JSON: {e}") from e

        return self.build_profile(company_name, payload)

    def build_profile(self, company_name: str, payload: dict) -> ServicerRiskProfile:
        """Turn a complaint search response into a risk profile."""
        hits_block = payload.get("hits") or {}
        complaints = [hit.get("_source") or {} for hit in hits_block.get("hits") or []]

        total = hits_block.get("total")
        if isinstance(total, dict):
            total = total.get("value")
        total = int(total) if total is not None else len(complaints)

        sampled = len(complaints)
        disputed = sum(1 for c in complaints if c.get("consumer_disputed") == "Yes")
        timely = sum(1 for c in complaints if c.get("timely") == "Yes")
        dispute_rate = disputed * 100 / sampled if sampled else 0.0
        timely_rate = timely / sampled if sampled else None

        cutoff = self.today() - timedelta(days=RECENT_WINDOW_DAYS)
        recent = 0
        for complaint in complaints:
            received = str(complaint.get("date_received") or "")[:10]
            try:
                if date.fromisoformat(received) >= cutoff:
                    recent += 1
            except ValueError:
                continue

        issues = Counter(c.get("issue") for c in complaints if c.get("issue"))
        top_issues = [issue for issue, _ in issues.most_common(TOP_ISSUES_LIMIT)]

        return ServicerRiskProfile(
            servicer_name=company_name,
            total_complaints=total,
            recent_complaints=recent,
            top_issues=top_issues,
            risk_score=float(compute_risk_score(total, dispute_rate, timely_rate)),
        )
