"""
Search query derivation.

Turns partial debt information into the ordered list of free-text queries
sent to the filing and identifier repositories. Output is deterministic:
the same profile always yields the same queries in the same order.
"""

from abs_investigator.catalog.debt_types import get_common_issuers, get_keywords
from abs_investigator.domain.models import DebtProfile
from abs_investigator.domain.validation import parse_debt_type


def build_queries(profile: DebtProfile) -> list[str]:
    """
    Build search strings for a profile, most specific first.

    Order:
        1. "<servicer> trust", "<servicer> ABS"
        2. "<creditor> securitization"
        3. the debt type's keyword phrase
        4. "<issuer> <keyword phrase>" for each well-known issuer

    Duplicates (compared case-insensitively) keep their first position.

    Raises:
        InvalidProfileError: If the profile's debt type is unrecognized
    """
    debt_type = parse_debt_type(profile.debt_type)
    keywords = get_keywords(debt_type)

    queries: list[str] = []
    servicer = _clean(profile.servicer_name)
    if servicer:
        queries.append(f"{servicer} trust")
        queries.append(f"{servicer} ABS")

    creditor = _clean(profile.original_creditor)
    if creditor:
        queries.append(f"{creditor} securitization")

    queries.append(keywords)
    queries.extend(f"{issuer} {keywords}" for issuer in get_common_issuers(debt_type))

    return _dedupe(queries)


def _clean(value: str | None) -> str:
    return " ".join(value.split()) if value else ""


def _dedupe(queries: list[str]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for query in queries:
        key = query.lower()
        if key not in seen:
            seen.add(key)
            unique.append(query)
    return unique
