"""
Stable hashing helpers.

Python's built-in ``hash`` is salted per process, so anything that must be
reproducible across runs (synthesized balances, sample-trade seeds) derives
its numbers from SHA-256 instead.
"""

import hashlib


def compute_text_hash(text: str) -> str:
    """
    SHA-256 hex digest of whitespace-trimmed text.

    Returns an empty string for empty input.
    """
    if not text:
        return ""
    normalized = text.strip()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def stable_int(*parts: object, modulo: int | None = None) -> int:
    """
    Deterministic non-negative integer derived from ``parts``.

    Args:
        *parts: Values joined with "|" before hashing
        modulo: Optional upper bound (result is in ``[0, modulo)``)
    """
    digest = hashlib.sha256("|".join(str(p) for p in parts).encode("utf-8")).digest()
    value = int.from_bytes(digest[:8], "big")
    if modulo is not None:
        if modulo <= 0:
            raise ValueError(f"modulo must be > 0, got {modulo}")
        return value % modulo
    return value
