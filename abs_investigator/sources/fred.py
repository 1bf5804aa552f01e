"""
FRED (Federal Reserve Economic Data) source.

Provides the macro context attached to every candidate: mortgage rates,
per-category delinquency rates, unemployment, CPI inflation, the fed funds
rate and the high-yield spread, plus a favorable/neutral/stressed market
classification and a trailing delinquency trend.
"""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import requests

from abs_investigator.constants import DEFAULT_ADAPTER_TIMEOUT, FRED_RATE_LIMIT
from abs_investigator.domain.models import EconomicSnapshot, MarketCondition, Observation
from abs_investigator.sources.base import EconomicSource, SourceUnavailableError, check_response
from abs_investigator.utils.rate_limiting import get_rate_limiter

logger = logging.getLogger(__name__)

OBSERVATIONS_URL = "https://api.stlouisfed.org/fred/series/observations"

MORTGAGE_30Y = "MORTGAGE30US"
MORTGAGE_15Y = "MORTGAGE15US"
UNEMPLOYMENT = "UNRATE"
CPI = "CPIAUCSL"
FED_FUNDS = "FEDFUNDS"
HIGH_YIELD_SPREAD = "BAMLH0A0HYM2"  # percent, option-adjusted

# Delinquency (or charge-off) series per delinquency category
DELINQUENCY_SERIES = {
    "mortgage": "DRSFRMACBS",
    "auto": "DTCTLVEACBS",
    "creditCard": "DRCCLACBS",
    "consumer": "DRCLACBS",
}
ALL_LOANS_DELINQUENCY = "DRALACBS"

# Monthly CPI needs 13 observations for a year-over-year change
CPI_OBSERVATIONS = 13

TREND_WINDOW = 3
TREND_THRESHOLD = 0.5


def classify_market_condition(
    mortgage_rate: float | None,
    mortgage_delinquency: float | None,
    high_yield_spread: float | None,
) -> MarketCondition:
    """
    Stress-score classification.

    Mortgage rate >7 scores 2 (>6 scores 1), mortgage delinquency >5 scores 2
    (>3 scores 1), high-yield spread >5.0 scores 2 (>4.0 scores 1). A total
    of 4 or more is stressed, 1 or less favorable, anything else neutral.
    Missing indicators score 0.
    """
    stress = 0
    for value, high, elevated in (
        (mortgage_rate, 7.0, 6.0),
        (mortgage_delinquency, 5.0, 3.0),
        (high_yield_spread, 5.0, 4.0),
    ):
        if value is None:
            continue
        if value > high:
            stress += 2
        elif value > elevated:
            stress += 1

    if stress >= 4:
        return MarketCondition.STRESSED
    if stress <= 1:
        return MarketCondition.FAVORABLE
    return MarketCondition.NEUTRAL


def classify_delinquency_trend(observations: list[Observation]) -> str:
    """
    Compare the newest and oldest observations of a newest-first series.

    Returns "worsening" when the mean of the newest three exceeds the mean of
    the oldest three by more than 0.5 points, "improving" when it is more
    than 0.5 lower, else "stable" (including series too short to compare).
    """
    if len(observations) < 2:
        return "stable"
    recent = observations[:TREND_WINDOW]
    older = observations[-TREND_WINDOW:]
    change = sum(o.value for o in recent) / len(recent) - sum(o.value for o in older) / len(older)
    if change > TREND_THRESHOLD:
        return "worsening"
    if change < -TREND_THRESHOLD:
        return "improving"
    return "stable"


def year_over_year_change(observations: list[Observation]) -> float | None:
    """Percent change between the newest observation and the one 12 periods older."""
    if len(observations) < CPI_OBSERVATIONS or not observations[12].value:
        return None
    return (observations[0].value / observations[12].value - 1) * 100


class FredEconomicSource(EconomicSource):
    """
    FRED adapter.

    Args:
        session: HTTP session
        api_key: FRED API key; without it every call raises SourceUnavailableError
        timeout: Per-request timeout in seconds
        max_workers: Series fetched concurrently for a snapshot
        today: Clock used for the snapshot date
    """

    name = "fred"

    def __init__(
        self,
        session: requests.Session,
        api_key: str | None,
        timeout: float = DEFAULT_ADAPTER_TIMEOUT,
        max_workers: int = 4,
        today: Callable[[], date] = date.today,
    ):
        self.session = session
        self.api_key = api_key
        self.timeout = timeout
        self.max_workers = max_workers
        self.today = today
        self._rate_limiter = get_rate_limiter("fred", FRED_RATE_LIMIT)

    def fetch_series(self, series_id: str, limit: int = 1) -> list[Observation]:
        """Newest-first observations of a series, skipping missing values ('.')."""
        if not self.api_key:
            raise SourceUnavailableError(self.name, "FRED_API_KEY is not configured")

        params = {
            "series_id": series_id,
            "api_key": self.api_key,
            "file_type": "json",
            "sort_order": "desc",
            "limit": str(limit),
        }
        if self._rate_limiter is not None:
            self._rate_limiter()
        try:
            response = self.session.get(OBSERVATIONS_URL, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailableError(self.name, f"{series_id}: {e}") from e
        check_response(self.name, response)

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceUnavailableError(self.name, f"{series_id}: invalid JSON: {e}") from e

        observations = []
        for obs in payload.get("observations") or []:
            try:
                observations.append(Observation(date=obs["date"], value=float(obs["value"])))
            except (KeyError, TypeError, ValueError):
                continue
        return observations

    def _latest(self, series_id: str, limit: int = 1) -> list[Observation] | None:
        try:
            return self.fetch_series(series_id, limit=limit)
        except SourceUnavailableError as e:
            logger.debug(f"FRED series {series_id} unavailable: {e}")
            return None

    def economic_snapshot(self) -> EconomicSnapshot:
        """
        Current macro indicators.

        Individual series may be missing; raises SourceUnavailableError only
        when no series at all could be fetched.
        """
        if not self.api_key:
            raise SourceUnavailableError(self.name, "FRED_API_KEY is not configured")

        requests_by_key = {
            "mortgage_30y": (MORTGAGE_30Y, 1),
            "mortgage_15y": (MORTGAGE_15Y, 1),
            "unemployment": (UNEMPLOYMENT, 1),
            "cpi": (CPI, CPI_OBSERVATIONS),
            "fed_funds": (FED_FUNDS, 1),
            "high_yield": (HIGH_YIELD_SPREAD, 1),
        }
        for category, series_id in DELINQUENCY_SERIES.items():
            requests_by_key[f"delinquency:{category}"] = (series_id, 1)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                key: executor.submit(self._latest, series_id, limit)
                for key, (series_id, limit) in requests_by_key.items()
            }
            results = {key: future.result() for key, future in futures.items()}

        if all(not observations for observations in results.values()):
            raise SourceUnavailableError(self.name, "no economic series could be fetched")

        def latest(key: str) -> float | None:
            observations = results.get(key)
            return observations[0].value if observations else None

        delinquency = {
            category: value
            for category in DELINQUENCY_SERIES
            if (value := latest(f"delinquency:{category}")) is not None
        }
        mortgage_rate = latest("mortgage_30y")
        high_yield = latest("high_yield")

        return EconomicSnapshot(
            market_condition=classify_market_condition(
                mortgage_rate, delinquency.get("mortgage"), high_yield
            ),
            mortgage_rate_30y=mortgage_rate,
            mortgage_rate_15y=latest("mortgage_15y"),
            delinquency_by_category=delinquency,
            unemployment_rate=latest("unemployment"),
            inflation_rate=year_over_year_change(results.get("cpi") or []),
            fed_funds_rate=latest("fed_funds"),
            high_yield_spread=high_yield,
            as_of=self.today().isoformat(),
        )

    def delinquency_trend(self, category: str, periods: int = 12) -> list[Observation]:
        series_id = DELINQUENCY_SERIES.get(category, ALL_LOANS_DELINQUENCY)
        return self.fetch_series(series_id, limit=periods)
