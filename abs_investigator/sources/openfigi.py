"""
OpenFIGI source: security identifier search and CUSIP lookup.

Search (``/v3/search``) matches free text against security names and returns
FIGIs; lookup (``/v3/mapping``) resolves a CUSIP to the security it names.
An API key is optional and only raises the rate limit.
"""

import logging

import requests

from abs_investigator.constants import (
    DEFAULT_ADAPTER_TIMEOUT,
    HITS_PER_QUERY,
    OPENFIGI_RATE_LIMIT,
    OPENFIGI_RATE_LIMIT_WITH_KEY,
)
from abs_investigator.domain.models import IdentifierRecord
from abs_investigator.sources.base import IdentifierSource, SourceUnavailableError, check_response
from abs_investigator.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)

SEARCH_URL = "https://api.openfigi.com/v3/search"
MAPPING_URL = "https://api.openfigi.com/v3/mapping"

# Sectors and type markers that indicate a structured-finance security
ABS_SECTORS = ("Mtge", "Corp", "Govt", "Muni")
ABS_TYPE_MARKERS = ("MBS", "ABS", "CMO", "CMBS", "CLO", "CDO")


def is_structured_security(record: IdentifierRecord) -> bool:
    """True when a record looks like an ABS/MBS security."""
    if record.market_sector in ABS_SECTORS:
        return True
    haystack = f"{record.security_type or ''} {record.name}".upper()
    return any(marker in haystack for marker in ABS_TYPE_MARKERS)


class OpenFigiSource(IdentifierSource):
    """
    OpenFIGI adapter.

    Args:
        session: HTTP session
        api_key: Optional OpenFIGI API key
        timeout: Per-request timeout in seconds
        max_hits: Records kept per search
    """

    name = "openfigi"

    def __init__(
        self,
        session: requests.Session,
        api_key: str | None = None,
        timeout: float = DEFAULT_ADAPTER_TIMEOUT,
        max_hits: int = HITS_PER_QUERY,
    ):
        self.session = session
        self.api_key = api_key
        self.timeout = timeout
        self.max_hits = max_hits
        rate = OPENFIGI_RATE_LIMIT_WITH_KEY if api_key else OPENFIGI_RATE_LIMIT
        self._rate_limiter = RateLimiter(requests_per_second=rate, source_name=self.name)

    def _post(self, url: str, payload):
        self._rate_limiter()
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-OPENFIGI-APIKEY"] = self.api_key
        try:
            response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailableError(self.name, str(e)) from e
        check_response(self.name, response)
        try:
            return response.json()
        except ValueError as e:
            raise SourceUnavailableError(self.name, f"invalid JSON: {e}") from e

    def search_identifiers(self, query: str) -> list[IdentifierRecord]:
        """Search securities by name. Returned identifiers are FIGIs."""
        payload = self._post(SEARCH_URL, {"query": query, "start": 0, "limit": self.max_hits})
        records = []
        for item in (payload or {}).get("data") or []:
            figi = item.get("figi")
            if not figi:
                continue
            records.append(
                IdentifierRecord(
                    identifier=figi,
                    name=item.get("name") or item.get("securityDescription") or "Unknown",
                    issuer=item.get("ticker"),
                    market_sector=item.get("marketSector"),
                    security_type=item.get("securityType") or item.get("securityType2"),
                    id_type="FIGI",
                )
            )
        return records[: self.max_hits]

    def lookup_identifier(self, identifier: str) -> IdentifierRecord | None:
        """Resolve a CUSIP; None when OpenFIGI knows no such security."""
        cusip = identifier.strip().upper()
        payload = self._post(MAPPING_URL, [{"idType": "ID_CUSIP", "idValue": cusip}])
        if not payload:
            return None

        result = payload[0] or {}
        if result.get("error"):
            raise SourceUnavailableError(self.name, result["error"])
        data = result.get("data") or []
        if not data:
            logger.debug(f"OpenFIGI: no security for CUSIP {cusip} ({result.get('warning')})")
            return None

        item = data[0]
        record = IdentifierRecord(
            identifier=cusip,
            name=item.get("name") or item.get("securityDescription") or "Unknown",
            issuer=item.get("ticker"),
            market_sector=item.get("marketSector"),
            security_type=item.get("securityType") or item.get("securityType2"),
            id_type="CUSIP",
        )
        if not is_structured_security(record):
            logger.debug(f"OpenFIGI: CUSIP {cusip} does not look like an ABS/MBS security")
        return record
