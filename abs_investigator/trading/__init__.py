from abs_investigator.trading.aggregation import filter_trades, parse_number, summarize

__all__ = ["filter_trades", "parse_number", "summarize"]
