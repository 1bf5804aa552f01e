"""
Trade aggregation.

``summarize`` turns a list of reported trades into a TradingSummary. It is
pure and never raises: numeric fields that cannot be parsed count as 0, and
an empty list produces a zeroed summary with the "-" date sentinel.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from abs_investigator.constants import NO_TRADE_DATE
from abs_investigator.domain.models import (
    DateSpan,
    DealerVolume,
    PricePoint,
    PriceRange,
    Trade,
    TradingSummary,
)


def parse_number(value: object) -> float:
    """
    Parse a price, yield or volume field.

    Accepts numbers and numeric strings (thousands separators allowed).
    Anything else, including NaN and infinities, parses to 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip().replace(",", ""))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def summarize(trades: Iterable[Trade]) -> TradingSummary:
    """
    Aggregate statistics over trades.

    - average price and yield are arithmetic means of the parsed fields
    - volume_by_dealer is sorted by volume descending (ties by dealer name),
      each with its percentage of total volume
    - price_history averages same-day prices, oldest date first
    - latest_trade_date and date_range come from the trades' dates
    """
    trades = list(trades)
    if not trades:
        return TradingSummary()

    prices = [parse_number(t.price) for t in trades]
    yields = [parse_number(t.yield_value) for t in trades]
    volumes = [parse_number(t.volume) for t in trades]
    total_volume = sum(volumes)

    dealer_volumes: dict[str, float] = defaultdict(float)
    for trade, volume in zip(trades, volumes):
        dealer_volumes[trade.dealer] += volume

    volume_by_dealer = [
        DealerVolume(
            dealer=dealer,
            volume=volume,
            percentage=(volume * 100 / total_volume) if total_volume else 0.0,
        )
        for dealer, volume in sorted(dealer_volumes.items(), key=lambda kv: (-kv[1], kv[0]))
    ]

    prices_by_date: dict[str, list[float]] = defaultdict(list)
    for trade, price in zip(trades, prices):
        if trade.date:
            prices_by_date[trade.date].append(price)

    price_history = [
        PricePoint(date=day, price=sum(day_prices) / len(day_prices))
        for day, day_prices in sorted(prices_by_date.items())
    ]

    dates = sorted(prices_by_date)
    return TradingSummary(
        total_trades=len(trades),
        average_price=sum(prices) / len(prices),
        average_yield=sum(yields) / len(yields),
        total_volume=total_volume,
        price_range=PriceRange(min=min(prices), max=max(prices)),
        volume_by_dealer=volume_by_dealer,
        price_history=price_history,
        latest_trade_date=dates[-1] if dates else NO_TRADE_DATE,
        date_range=DateSpan(start=dates[0], end=dates[-1]) if dates else DateSpan(),
    )


def filter_trades(
    trades: Iterable[Trade],
    start: date | str | None = None,
    end: date | str | None = None,
    side: str | None = None,
    min_volume: float | None = None,
    dealer: str | None = None,
) -> list[Trade]:
    """
    Select trades matching every given criterion.

    Args:
        trades: Trades to filter
        start: Earliest trade date (inclusive)
        end: Latest trade date (inclusive)
        side: "BUY" or "SELL" (case-insensitive); "ALL" or None keeps both
        min_volume: Minimum volume
        dealer: Exact dealer label

    Trades with an unparsable date are dropped when a date bound is given.
    """
    start_date = _as_date(start)
    end_date = _as_date(end)
    wanted_side = side.upper() if side and side.upper() != "ALL" else None

    selected = []
    for trade in trades:
        if start_date or end_date:
            trade_date = _as_date(trade.date)
            if trade_date is None:
                continue
            if start_date and trade_date < start_date:
                continue
            if end_date and trade_date > end_date:
                continue
        if wanted_side and trade.side.upper() != wanted_side:
            continue
        if min_volume is not None and parse_number(trade.volume) < min_volume:
            continue
        if dealer and trade.dealer != dealer:
            continue
        selected.append(trade)
    return selected


def _as_date(value: date | str | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
