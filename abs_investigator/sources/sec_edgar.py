"""
SEC EDGAR source: ABS filing search and registrant lookup.

Filing search uses EDGAR full-text search restricted to ABS-related forms.
When full-text search is unavailable it falls back to the company browse
Atom feed. Registrant details (tax id, state of incorporation, business
address) come from the submissions API and are cached briefly, because the
same registrant is usually hit by several filings in one investigation.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import date

import requests

from abs_investigator.cache import AppCache
from abs_investigator.constants import (
    DEFAULT_ADAPTER_TIMEOUT,
    HITS_PER_QUERY,
    REGISTRANT_CACHE_TTL_SECONDS,
    SEC_EDGAR_RATE_LIMIT,
    SEC_SEARCH_FORMS,
)
from abs_investigator.domain.models import DateRange, FilingRecord, RegistrantRecord
from abs_investigator.domain.validation import normalize_registry_id, registry_id_from_link
from abs_investigator.sources.base import (
    FilingSource,
    RegistrantSource,
    SourceUnavailableError,
    check_response,
)
from abs_investigator.utils.rate_limiting import get_rate_limiter

logger = logging.getLogger(__name__)

FULL_TEXT_SEARCH_URL = "https://efts.sec.gov/LATEST/search-index"
COMPANY_SEARCH_URL = "https://www.sec.gov/cgi-bin/browse-edgar"
SUBMISSIONS_URL = "https://data.sec.gov/submissions/CIK{cik}.json"
ARCHIVE_URL = "https://www.sec.gov/Archives/edgar/data/{cik}/{accession}"

DEFAULT_SEARCH_START = date(2000, 1, 1)
REGISTRANT_NAMESPACE = "registrant"

_CIK_SUFFIX = re.compile(r"\s*\(CIK\s*\d+\)\s*$")


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class SecEdgarSource(FilingSource, RegistrantSource):
    """
    SEC EDGAR adapter.

    Args:
        session: HTTP session (one per investigation is enough)
        user_agent: Descriptive User-Agent, required by SEC
        timeout: Per-request timeout in seconds
        cache: Optional registrant cache; entries expire after ``cache_ttl``
        cache_ttl: Registrant cache TTL in seconds
        max_hits: Filing records kept per query
        today: Clock used for the default search window
    """

    name = "sec_edgar"

    def __init__(
        self,
        session: requests.Session,
        user_agent: str,
        timeout: float = DEFAULT_ADAPTER_TIMEOUT,
        cache: AppCache | None = None,
        cache_ttl: float = REGISTRANT_CACHE_TTL_SECONDS,
        max_hits: int = HITS_PER_QUERY,
        today: Callable[[], date] = date.today,
    ):
        self.session = session
        self.user_agent = user_agent
        self.timeout = timeout
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.max_hits = max_hits
        self.today = today
        self._rate_limiter = get_rate_limiter("sec_edgar", SEC_EDGAR_RATE_LIMIT)

    def _get(self, url: str, params: dict | None = None, accept: str = "application/json"):
        if self._rate_limiter is not None:
            self._rate_limiter()
        headers = {"User-Agent": self.user_agent, "Accept": accept}
        try:
            return self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailableError(self.name, str(e)) from e

    # -------------------------------------------------------------------------
    # Filing search
    # -------------------------------------------------------------------------

    def search_filings(self, query: str, date_range: DateRange | None = None) -> list[FilingRecord]:
        """
        Full-text search for ABS filings matching ``query``.

        Falls back to the company browse feed if full-text search answers
        with an error status. Raises SourceUnavailableError if both fail.
        """
        start = date_range.start if date_range else DEFAULT_SEARCH_START
        end = date_range.end if date_range else self.today()
        params = {
            "q": query,
            "dateRange": "custom",
            "startdt": start.isoformat(),
            "enddt": end.isoformat(),
            "forms": ",".join(SEC_SEARCH_FORMS),
        }

        response = self._get(FULL_TEXT_SEARCH_URL, params=params)
        if response.status_code != 200:
            logger.debug(
                f"Full-text search returned HTTP {response.status_code} for {query!r}, "
                "falling back to company search"
            )
            return self._search_by_company(query)

        try:
            payload = response.json()
        except ValueError as e:
            raise SourceUnavailableError(self.name, f"invalid full-text search JSON: {e}") from e

        hits = (payload.get("hits") or {}).get("hits") or []
        records = [self._parse_hit(hit) for hit in hits[: self.max_hits]]
        return [r for r in records if r is not None]

    def _parse_hit(self, hit: dict) -> FilingRecord | None:
        source = hit.get("_source") or {}
        ciks = source.get("ciks") or []
        cik = normalize_registry_id(ciks[0]) if ciks else None

        display_names = source.get("display_names") or []
        entity = display_names[0] if display_names else source.get("entity")
        if not entity:
            return None
        entity = _CIK_SUFFIX.sub("", entity).strip()

        accession = source.get("adsh") or str(hit.get("_id", "")).split(":")[0]
        document_ref = None
        if cik and accession:
            document_ref = ARCHIVE_URL.format(cik=int(cik), accession=accession.replace("-", ""))

        return FilingRecord(
            entity_name=entity,
            form_category=source.get("form") or source.get("root_form") or "",
            filing_date=_parse_date(source.get("file_date")),
            document_ref=document_ref,
            registry_id=cik,
            issuer=source.get("entity") or entity,
        )

    def _search_by_company(self, company_name: str) -> list[FilingRecord]:
        params = {
            "action": "getcompany",
            "company": company_name,
            "type": "",
            "dateb": "",
            "owner": "include",
            "count": "40",
            "output": "atom",
        }
        response = self._get(COMPANY_SEARCH_URL, params=params, accept="application/atom+xml")
        check_response(self.name, response)
        return self.parse_atom_feed(response.text)[: self.max_hits]

    @staticmethod
    def parse_atom_feed(text: str) -> list[FilingRecord]:
        """Parse EDGAR's browse Atom feed into filing records."""
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise SourceUnavailableError("sec_edgar", f"invalid Atom feed: {e}") from e

        records = []
        for entry in root.iter():
            if _local_name(entry.tag) != "entry":
                continue
            fields: dict[str, str] = {}
            for child in entry:
                tag = _local_name(child.tag)
                if tag == "link":
                    fields.setdefault("link", child.get("href", ""))
                elif tag == "category":
                    fields.setdefault("form", child.get("term", ""))
                elif tag in ("title", "updated"):
                    fields.setdefault(tag, (child.text or "").strip())

            title = fields.get("title")
            link = fields.get("link")
            if not title or not link:
                continue
            records.append(
                FilingRecord(
                    entity_name=title,
                    form_category=fields.get("form", ""),
                    filing_date=_parse_date(fields.get("updated")),
                    document_ref=link,
                    registry_id=registry_id_from_link(link),
                )
            )
        return records

    # -------------------------------------------------------------------------
    # Registrant lookup
    # -------------------------------------------------------------------------

    def lookup_registrant(self, registry_id: str) -> RegistrantRecord | None:
        """
        Registrant details for a CIK (cached for ``cache_ttl`` seconds).

        Returns None for a malformed CIK or an unknown registrant.
        """
        cik = normalize_registry_id(registry_id)
        if cik is None:
            return None
        if self.cache is None:
            return self._fetch_registrant(cik)
        return self.cache.get_or_load(
            REGISTRANT_NAMESPACE,
            cik,
            lambda: self._fetch_registrant(cik),
            ttl_seconds=self.cache_ttl,
        )

    def _fetch_registrant(self, cik: str) -> RegistrantRecord | None:
        response = self._get(SUBMISSIONS_URL.format(cik=cik))
        if response.status_code == 404:
            return None
        check_response(self.name, response)

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailableError(self.name, f"invalid submissions JSON: {e}") from e

        address = None
        business = (data.get("addresses") or {}).get("business") or {}
        if business:
            street = ", ".join(p for p in (business.get("street1"), business.get("street2")) if p)
            locality = " ".join(
                p for p in (business.get("stateOrCountry"), business.get("zipCode")) if p
            )
            address = ", ".join(p for p in (street, business.get("city"), locality) if p) or None

        return RegistrantRecord(
            registry_id=cik,
            name=data.get("name"),
            tax_id=data.get("ein") or None,
            jurisdiction=data.get("stateOfIncorporation") or None,
            address=address,
        )
