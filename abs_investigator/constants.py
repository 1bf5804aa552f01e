"""
Constants for abs_investigator package.

Centralizes magic numbers and configuration defaults.
"""

# Offline trust matcher weights
SCORE_SERVICER_PREFIX = 40  # Servicer is known to service the trust prefix
SCORE_SERVICER_NAME = 20  # Trust name overlaps the servicer name
SCORE_ORIGINATOR_NAME = 15  # Trust name overlaps the original creditor
SCORE_VINTAGE_YEAR = 15  # Origination year within the trust's vintage range
SCORE_GEOGRAPHY = 10  # Borrower state inside the trust's focus area
MAX_JITTER = 9  # Tie-breaking jitter is drawn from 0..MAX_JITTER
MIN_MATCH_SCORE = 30
MAX_MATCH_SCORE = 100
DEFAULT_MAX_RESULTS = 5

# Multi-source confidence weights
CONFIDENCE_FILING_BASE = 40  # Seed score for a filing hit
CONFIDENCE_ABS_FORM = 20  # Filing is an ABS-specific form
CONFIDENCE_RECENT_FILING = 10  # Filed within RECENT_FILING_YEARS
CONFIDENCE_REGISTRANT = 15  # Registrant details resolved
CONFIDENCE_IDENTIFIER = 15  # Identifier source corroborates the trust
CONFIDENCE_TRADE = 20  # Trades reported for the primary identifier
CONFIDENCE_IDENTIFIER_SEED = 40  # Seed score for an identifier-only candidate
MAX_CONFIDENCE = 100
RECENT_FILING_YEARS = 2
HIGH_CONFIDENCE_THRESHOLD = 70  # Counted as high-confidence in the summary
QWR_RECOMMENDATION_THRESHOLD = 80  # Top match strong enough to recommend a QWR
SERVICER_RISK_RECOMMENDATION_THRESHOLD = 50

# ABS-specific SEC form categories
ABS_FORM_TYPES = ("ABS-15G", "ABS-EE", "SF-1", "SF-3")

# Forms searched on SEC EDGAR
SEC_SEARCH_FORMS = (
    "ABS-15G",
    "ABS-EE",
    "SF-1",
    "SF-3",
    "10-D",
    "10-K",
    "8-K",
    "424B5",
    "FWP",
)

# Fan-out bounds
FULL_QUERY_LIMIT = 8  # Filing queries dispatched in a full investigation
QUICK_QUERY_LIMIT = 3  # Filing queries dispatched in quick mode
HITS_PER_QUERY = 5  # Filing / identifier records kept per query
TRADE_LOOKUP_LIMIT = 5  # Candidates checked for trade activity
REPORT_LIMIT = 10  # Candidates returned in a report
DELINQUENCY_TREND_PERIODS = 12

# Timeouts (seconds)
DEFAULT_ADAPTER_TIMEOUT = 8.0

# Parallel processing defaults
DEFAULT_WORKERS = 8

# Cache TTL (Time To Live)
REGISTRANT_CACHE_TTL_SECONDS = 300  # Registrant metadata (short-lived)

# API rate limits (requests per second)
SEC_EDGAR_RATE_LIMIT = 10.0  # SEC EDGAR official limit: 10 req/sec
OPENFIGI_RATE_LIMIT = 25 / 60  # OpenFIGI anonymous: 25 req/min
OPENFIGI_RATE_LIMIT_WITH_KEY = 250 / 60  # OpenFIGI with API key: 250 req/min
CFPB_RATE_LIMIT = 5.0  # CFPB: no published limit, stay polite
FRED_RATE_LIMIT = 2.0  # FRED: 120 req/min

# Sentinel used for dates when no trades were observed
NO_TRADE_DATE = "-"
