"""
FINRA TRACE trade source.

FINRA publishes no public REST API for TRACE prints; real access needs FINRA
membership or a data vendor. This adapter produces sample TRACE-style trades
instead: weekdays only, one to five prints a day, a bounded price random
walk, and inter-dealer / customer / ATS counterparties. The sample is seeded
from a stable hash of the identifier, so one CUSIP always yields the same
trade history for a given window.
"""

import logging
import random
from collections.abc import Callable
from datetime import date, timedelta

from abs_investigator.domain.models import DateRange, Trade
from abs_investigator.sources.base import TradeSource
from abs_investigator.utils.hashing import stable_int

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 90
MIN_PRICE = 50.0
MAX_PRICE = 150.0
MIN_QUANTITY = 100_000
MAX_QUANTITY = 1_000_000

# TRACE dealer type codes
DEALER_LABELS = {"D": "Inter-Dealer", "C": "Customer", "A": "ATS"}


class TraceSampleSource(TradeSource):
    """
    Sample TRACE adapter.

    Args:
        today: Clock used for the default 90-day window
        lookback_days: Length of the default window
    """

    name = "finra_trace"

    def __init__(
        self,
        today: Callable[[], date] = date.today,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    ):
        self.today = today
        self.lookback_days = lookback_days

    def search_trades(self, identifier: str, date_range: DateRange | None = None) -> list[Trade]:
        """
        Trades for a CUSIP, newest first.

        Identifiers that are not 9-character CUSIPs (e.g. FIGIs) have no
        TRACE history and return an empty list.
        """
        cusip = (identifier or "").strip().upper()
        if len(cusip) != 9 or not cusip.isalnum():
            return []

        end = date_range.end if date_range else self.today()
        start = date_range.start if date_range else end - timedelta(days=self.lookback_days)
        rng = random.Random(stable_int("trace", cusip, start.isoformat()))

        trades = []
        price = 95 + rng.random() * 10
        day = start
        while day <= end:
            if day.weekday() < 5:
                for i in range(rng.randint(1, 5)):
                    price = max(MIN_PRICE, min(MAX_PRICE, price + (rng.random() - 0.5) * 0.5))
                    dealer_code = rng.choices(("D", "C", "A"), weights=(3, 6, 1))[0]
                    trades.append(
                        Trade(
                            trade_id=f"TRC{cusip}{day:%Y%m%d}{i}",
                            identifier=cusip,
                            date=day.isoformat(),
                            time=f"{rng.randint(9, 16):02d}:{rng.randint(0, 59):02d}:00",
                            price=f"{price:.2f}",
                            yield_value=f"{100 / price * 5.5:.3f}",
                            volume=rng.randint(MIN_QUANTITY, MAX_QUANTITY),
                            side="BUY" if rng.random() > 0.5 else "SELL",
                            dealer=DEALER_LABELS[dealer_code],
                            report_type="S",
                        )
                    )
            day += timedelta(days=1)

        trades.sort(key=lambda t: (t.date, t.time), reverse=True)
        logger.debug(f"TRACE sample: {len(trades)} trades for {cusip} ({start} to {end})")
        return trades
