"""Utility modules for abs_investigator."""

from abs_investigator.utils.hashing import compute_text_hash, stable_int
from abs_investigator.utils.parallel import CallOutcome, fan_out
from abs_investigator.utils.rate_limiting import RateLimiter, get_rate_limiter
from abs_investigator.utils.stats import ExecutionStats
from abs_investigator.utils.tqdm_logging import TqdmLoggingHandler, setup_tqdm_logging

__all__ = [
    "compute_text_hash",
    "stable_int",
    "CallOutcome",
    "fan_out",
    "RateLimiter",
    "get_rate_limiter",
    "ExecutionStats",
    "TqdmLoggingHandler",
    "setup_tqdm_logging",
]
