"""
Unit tests for the SEC EDGAR source.
"""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests
from conftest import fixed_today

from abs_investigator.domain.models import DateRange
from abs_investigator.sources.base import SourceUnavailableError
from abs_investigator.sources.sec_edgar import (
    COMPANY_SEARCH_URL,
    FULL_TEXT_SEARCH_URL,
    SecEdgarSource,
)

FULL_TEXT_PAYLOAD = {
    "hits": {
        "hits": [
            {
                "_id": "0001234567-26-000001:sdart2026-1_sf3.htm",
                "_source": {
                    "ciks": ["0001234567"],
                    "display_names": [
                        "Santander Drive Auto Receivables Trust 2026-1  (CIK 0001234567)"
                    ],
                    "form": "SF-3",
                    "file_date": "2026-03-02",
                    "adsh": "0001234567-26-000001",
                },
            },
            {
                "_id": "0000999999-25-000010:x.htm",
                "_source": {"ciks": [], "display_names": [], "form": "10-D"},
            },
        ]
    }
}

ATOM_FEED = """<?xml version="1.0"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Santander Drive Auto Receivables Trust</title>
  <entry>
    <category label="form type" scheme="https://www.sec.gov/" term="10-D" />
    <link href="https://www.sec.gov/Archives/edgar/data/1234567/000123456726000042" />
    <title>Santander Drive Auto Receivables Trust 2025-2</title>
    <updated>2026-09-15T16:05:12-04:00</updated>
  </entry>
  <entry>
    <title>Entry without a link</title>
  </entry>
</feed>
"""

SUBMISSIONS_PAYLOAD = {
    "cik": "1234567",
    "name": "Santander Drive Auto Receivables LLC",
    "ein": "201234567",
    "stateOfIncorporation": "DE",
    "addresses": {
        "business": {
            "street1": "1601 Elm Street",
            "street2": "Suite 800",
            "city": "Dallas",
            "stateOrCountry": "TX",
            "zipCode": "75201",
        }
    },
}


def _response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = text
    return response


@pytest.fixture
def make_source():
    """Build a SecEdgarSource with a mocked session and no throttling."""

    def _make(*responses, cache=None):
        session = MagicMock()
        session.get.side_effect = list(responses)
        with patch("abs_investigator.sources.sec_edgar.get_rate_limiter", return_value=MagicMock()):
            source = SecEdgarSource(
                session, user_agent="tests tests@example.com", cache=cache, today=fixed_today
            )
        return source, session

    return _make


class TestSearchFilings:
    """Tests for full-text filing search."""

    def test_parses_hits(self, make_source):
        source, session = make_source(_response(json_data=FULL_TEXT_PAYLOAD))

        records = source.search_filings("Santander Consumer USA trust")

        assert len(records) == 1
        record = records[0]
        assert record.entity_name == "Santander Drive Auto Receivables Trust 2026-1"
        assert record.form_category == "SF-3"
        assert record.filing_date == date(2026, 3, 2)
        assert record.registry_id == "0001234567"
        assert record.document_ref == (
            "https://www.sec.gov/Archives/edgar/data/1234567/000123456726000001"
        )

    def test_request_parameters(self, make_source):
        source, session = make_source(_response(json_data={"hits": {"hits": []}}))

        source.search_filings(
            "SDART", DateRange(start=date(2020, 1, 1), end=date(2021, 12, 31))
        )

        args, kwargs = session.get.call_args
        assert args[0] == FULL_TEXT_SEARCH_URL
        assert kwargs["params"]["q"] == "SDART"
        assert kwargs["params"]["startdt"] == "2020-01-01"
        assert kwargs["params"]["enddt"] == "2021-12-31"
        assert "ABS-EE" in kwargs["params"]["forms"]
        assert kwargs["headers"]["User-Agent"] == "tests tests@example.com"

    def test_default_window_ends_today(self, make_source):
        source, session = make_source(_response(json_data={}))

        assert source.search_filings("SDART") == []
        assert session.get.call_args.kwargs["params"]["enddt"] == "2026-10-17"

    def test_respects_max_hits(self, make_source):
        hit = FULL_TEXT_PAYLOAD["hits"]["hits"][0]
        source, _ = make_source(_response(json_data={"hits": {"hits": [hit] * 25}}))
        source.max_hits = 3

        assert len(source.search_filings("SDART")) == 3

    def test_falls_back_to_company_feed(self, make_source):
        """A failed full-text search retries against the browse Atom feed."""
        source, session = make_source(
            _response(status_code=500), _response(text=ATOM_FEED)
        )

        records = source.search_filings("Santander Drive")

        assert session.get.call_args_list[1].args[0] == COMPANY_SEARCH_URL
        assert len(records) == 1
        assert records[0].entity_name == "Santander Drive Auto Receivables Trust 2025-2"
        assert records[0].form_category == "10-D"
        assert records[0].filing_date == date(2026, 9, 15)
        assert records[0].registry_id == "0001234567"

    def test_both_endpoints_fail(self, make_source):
        source, _ = make_source(_response(status_code=503), _response(status_code=503))

        with pytest.raises(SourceUnavailableError, match="HTTP 503"):
            source.search_filings("SDART")

    def test_rate_limited_fallback(self, make_source):
        source, _ = make_source(_response(status_code=429), _response(status_code=429))

        with pytest.raises(SourceUnavailableError, match="rate limited"):
            source.search_filings("SDART")

    def test_network_error(self, make_source):
        source, _ = make_source(requests.ConnectionError("connection refused"))

        with pytest.raises(SourceUnavailableError, match="connection refused"):
            source.search_filings("SDART")

    def test_invalid_json(self, make_source):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        source, _ = make_source(response)

        with pytest.raises(SourceUnavailableError, match="invalid full-text search JSON"):
            source.search_filings("SDART")

    def test_invalid_atom_feed(self):
        with pytest.raises(SourceUnavailableError, match="invalid Atom feed"):
            SecEdgarSource.parse_atom_feed("<feed><entry>")


class TestLookupRegistrant:
    """Tests for registrant lookup."""

    def test_parses_submission(self, make_source):
        source, session = make_source(_response(json_data=SUBMISSIONS_PAYLOAD))

        record = source.lookup_registrant("1234567")

        assert session.get.call_args.args[0] == (
            "https://data.sec.gov/submissions/CIK0001234567.json"
        )
        assert record.registry_id == "0001234567"
        assert record.name == "Santander Drive Auto Receivables LLC"
        assert record.tax_id == "201234567"
        assert record.jurisdiction == "DE"
        assert record.address == "1601 Elm Street, Suite 800, Dallas, TX 75201"

    def test_not_found(self, make_source):
        source, _ = make_source(_response(status_code=404))

        assert source.lookup_registrant("0001234567") is None

    def test_malformed_cik(self, make_source):
        source, session = make_source()

        assert source.lookup_registrant("not-a-cik") is None
        session.get.assert_not_called()

    def test_server_error(self, make_source):
        source, _ = make_source(_response(status_code=500))

        with pytest.raises(SourceUnavailableError):
            source.lookup_registrant("0001234567")

    def test_cached(self, make_source, app_cache):
        """A second lookup of the same CIK is served from the cache."""
        source, session = make_source(_response(json_data=SUBMISSIONS_PAYLOAD), cache=app_cache)

        first = source.lookup_registrant("1234567")
        second = source.lookup_registrant("0001234567")

        assert first == second
        assert session.get.call_count == 1

    def test_not_found_is_not_cached(self, make_source, app_cache):
        source, session = make_source(
            _response(status_code=404),
            _response(json_data=SUBMISSIONS_PAYLOAD),
            cache=app_cache,
        )

        assert source.lookup_registrant("0001234567") is None
        assert source.lookup_registrant("0001234567") is not None
        assert session.get.call_count == 2
