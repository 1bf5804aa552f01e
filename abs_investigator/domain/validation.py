"""
Profile validation and normalization.

This module is the single place where user-supplied debt information is
checked and normalized before an investigation starts. It also holds the
name-normalization helpers used for matching and candidate deduplication,
and the CUSIP check-digit arithmetic used for security identifiers.
"""

import dataclasses
import re
from datetime import date

from abs_investigator.domain.models import DebtProfile, DebtType


class InvalidProfileError(ValueError):
    """Unrecognized debt type or malformed debt profile."""


# =============================================================================
# Debt type parsing
# =============================================================================

# Lowercased spellings without separators -> DebtType
_DEBT_TYPE_ALIASES = {dt.value.lower(): dt for dt in DebtType}


def parse_debt_type(value: DebtType | str) -> DebtType:
    """
    Parse a debt type from its enum, value, or a snake/kebab spelling.

    "creditCard", "credit_card", "credit-card" and "CREDIT CARD" all parse to
    DebtType.CREDIT_CARD.

    Raises:
        InvalidProfileError: If the value names no known debt type
    """
    if isinstance(value, DebtType):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidProfileError(f"Unrecognized debt type: {value!r}")

    key = re.sub(r"[\s_\-]", "", value).lower()
    debt_type = _DEBT_TYPE_ALIASES.get(key)
    if debt_type is None:
        raise InvalidProfileError(f"Unrecognized debt type: {value!r}")
    return debt_type


# =============================================================================
# Profile validation
# =============================================================================

_STATE_PATTERN = re.compile(r"^[A-Z]{2}$")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = " ".join(value.split())
    return value or None


def validate_profile(profile: DebtProfile) -> DebtProfile:
    """
    Validate a debt profile and return a normalized copy.

    Normalization collapses whitespace in free-text fields, upper-cases the
    state code, resolves the debt type to a DebtType and trims the
    origination date to ``YYYY-MM-DD``.

    Raises:
        InvalidProfileError: On an unknown debt type, a state that is not a
            two-letter code, a negative balance, or an unparsable date
    """
    debt_type = parse_debt_type(profile.debt_type)

    state = _clean(profile.state)
    if state is not None:
        state = state.upper()
        if not _STATE_PATTERN.match(state):
            raise InvalidProfileError(f"State must be a two-letter code, got {profile.state!r}")

    balance = profile.approximate_balance
    if balance is not None:
        try:
            balance = float(balance)
        except (TypeError, ValueError) as e:
            raise InvalidProfileError(f"Balance is not a number: {balance!r}") from e
        if balance < 0:
            raise InvalidProfileError(f"Balance must be non-negative, got {balance}")

    origination_date = _clean(profile.origination_date)
    if origination_date is not None:
        try:
            origination_date = date.fromisoformat(origination_date[:10]).isoformat()
        except ValueError as e:
            raise InvalidProfileError(
                f"Origination date must be an ISO date, got {profile.origination_date!r}"
            ) from e

    return dataclasses.replace(
        profile,
        debt_type=debt_type,
        servicer_name=_clean(profile.servicer_name),
        original_creditor=_clean(profile.original_creditor),
        account_number=_clean(profile.account_number),
        state=state,
        approximate_balance=balance,
        origination_date=origination_date,
    )


# =============================================================================
# Name normalization
# =============================================================================

# Corporate and structural words that say nothing about who the issuer is
NAME_STOPWORDS = frozenset(
    {
        "the",
        "of",
        "and",
        "inc",
        "llc",
        "lp",
        "co",
        "corp",
        "corporation",
        "company",
        "na",
        "usa",
        "us",
        "trust",
        "group",
        "holdings",
        "financial",
        "services",
        "bank",
    }
)


def normalize_name(name: str | None) -> str:
    """
    Case-insensitive comparison key for entity names.

    Lowercases, replaces punctuation with spaces and collapses whitespace, so
    "SANTANDER DRIVE AUTO RECEIVABLES TRUST" and
    "Santander Drive Auto Receivables Trust " normalize identically.
    """
    if not name:
        return ""
    return " ".join(re.sub(r"[^a-z0-9]+", " ", name.lower()).split())


def significant_tokens(name: str | None) -> set[str]:
    """Name tokens with corporate stopwords and single characters removed."""
    return {t for t in normalize_name(name).split() if len(t) > 1 and t not in NAME_STOPWORDS}


def names_overlap(a: str | None, b: str | None) -> bool:
    """True when two names share at least one significant token."""
    return bool(significant_tokens(a) & significant_tokens(b))


# =============================================================================
# Registry ids (SEC CIK)
# =============================================================================

_REGISTRY_ID_IN_LINK = re.compile(r"/data/(\d+)/")


def normalize_registry_id(value: str | int | None) -> str | None:
    """Zero-pad a numeric registry id to 10 digits; None if not numeric."""
    if value is None:
        return None
    digits = str(value).strip()
    if not digits.isdigit() or len(digits) > 10:
        return None
    return digits.zfill(10)


def registry_id_from_link(link: str | None) -> str | None:
    """Extract the registry id from a ``.../data/<digits>/...`` archive link."""
    if not link:
        return None
    match = _REGISTRY_ID_IN_LINK.search(link)
    return normalize_registry_id(match.group(1)) if match else None


# =============================================================================
# CUSIP identifiers
# =============================================================================

_CUSIP_PATTERN = re.compile(r"^[0-9A-Z*@#]{8}[0-9]$")
_CUSIP_SPECIAL = {"*": 36, "@": 37, "#": 38}


def _cusip_char_value(char: str) -> int:
    if char.isdigit():
        return int(char)
    if "A" <= char <= "Z":
        return ord(char) - ord("A") + 10
    if char in _CUSIP_SPECIAL:
        return _CUSIP_SPECIAL[char]
    raise ValueError(f"Invalid CUSIP character: {char!r}")


def cusip_check_digit(base: str) -> str:
    """
    Compute the check digit for the first eight characters of a CUSIP.

    Uses the standard modulus-10 "double-add-double" scheme: every second
    character's value is doubled and the digits of each value are summed.
    """
    base = base.upper()
    if len(base) != 8:
        raise ValueError(f"CUSIP base must be 8 characters, got {base!r}")

    total = 0
    for i, char in enumerate(base):
        value = _cusip_char_value(char)
        if i % 2 == 1:
            value *= 2
        total += value // 10 + value % 10
    return str((10 - total % 10) % 10)


def is_valid_cusip(code: str | None) -> bool:
    """True for a 9-character CUSIP whose check digit is correct."""
    if not code:
        return False
    code = code.strip().upper()
    if not _CUSIP_PATTERN.match(code):
        return False
    return cusip_check_digit(code[:8]) == code[8]


def parse_cusip(code: str) -> dict[str, str]:
    """
    Split a valid CUSIP into issuer, issue and check parts.

    Raises:
        ValueError: If the code is not a valid CUSIP
    """
    normalized = code.strip().upper() if code else ""
    if not is_valid_cusip(normalized):
        raise ValueError(f"Invalid CUSIP: {code!r}")
    return {"issuer": normalized[:6], "issue": normalized[6:8], "check": normalized[8]}


def format_cusip(code: str) -> str:
    """Render a CUSIP as ``ISSUER ISSUE CHECK`` for display."""
    parts = parse_cusip(code)
    return f"{parts['issuer']} {parts['issue']} {parts['check']}"
