"""
Security identifier synthesis for catalog trusts.

Offline candidates have no real CUSIPs, so each is given a deterministic set
of CUSIP-shaped codes: the shelf prefix padded to a 6-character issuer code,
the vintage year's last digit and a tranche character, closed by a valid
check digit. Face balances come from a stable hash, so the same trust always
gets the same notes.
"""

from abs_investigator.domain.models import SecurityIdentifier
from abs_investigator.domain.validation import cusip_check_digit
from abs_investigator.utils.hashing import stable_int

TRANCHES = ("A-1", "A-2", "A-3", "M-1", "M-2", "B-1", "B-2", "C")
RATINGS = ("AAA", "AA+", "AA", "A+", "A", "BBB+", "BBB")

_ISSUE_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Face balance band for a synthesized tranche: $50M - $550M
MIN_TRANCHE_BALANCE = 50_000_000
TRANCHE_BALANCE_SPAN = 500_000_000


def tranche_count(series: tuple[str, ...] | list[str]) -> int:
    """Number of tranches synthesized for a shelf (between 1 and 8)."""
    return max(1, min(len(TRANCHES), 2 + len(series)))


def synthesize_cusip(prefix: str, year: int | str, series_index: int, tranche_index: int) -> str:
    issuer = "".join(c for c in prefix.upper() if c.isalnum()).ljust(6, "X")[:6]
    year_char = str(year)[-1]
    issue_char = _ISSUE_CHARS[(series_index * len(TRANCHES) + tranche_index) % len(_ISSUE_CHARS)]
    base = f"{issuer}{year_char}{issue_char}"
    return base + cusip_check_digit(base)


def generate_trust_securities(
    prefix: str,
    year: int | str,
    series: str,
    series_options: tuple[str, ...] | list[str],
) -> list[SecurityIdentifier]:
    """
    Synthesize the note structure of one trust.

    Args:
        prefix: Shelf prefix (e.g. "SDART")
        year: Vintage year
        series: Series letter of the trust
        series_options: All series letters the shelf uses

    Returns:
        Tranches in seniority order, ratings descending from AAA
    """
    series_index = list(series_options).index(series) if series in series_options else 0
    securities = []
    for i in range(tranche_count(series_options)):
        balance = MIN_TRANCHE_BALANCE + stable_int(
            prefix, year, series, i, modulo=TRANCHE_BALANCE_SPAN
        )
        securities.append(
            SecurityIdentifier(
                code=synthesize_cusip(prefix, year, series_index, i),
                tranche=TRANCHES[i],
                rating=RATINGS[min(i, len(RATINGS) - 1)],
                face_balance=float(balance),
            )
        )
    return securities
