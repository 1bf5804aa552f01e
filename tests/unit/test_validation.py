"""
Unit tests for profile validation, name normalization and CUSIP helpers.
"""

import pytest

from abs_investigator.domain.models import DebtProfile, DebtType
from abs_investigator.domain.validation import (
    InvalidProfileError,
    cusip_check_digit,
    format_cusip,
    is_valid_cusip,
    names_overlap,
    normalize_name,
    normalize_registry_id,
    parse_cusip,
    parse_debt_type,
    registry_id_from_link,
    validate_profile,
)


class TestParseDebtType:
    """Tests for parse_debt_type."""

    @pytest.mark.parametrize(
        "value",
        ["creditCard", "credit_card", "credit-card", "CREDIT CARD", DebtType.CREDIT_CARD],
    )
    def test_spellings(self, value):
        """Enum, value and snake/kebab spellings all parse."""
        assert parse_debt_type(value) is DebtType.CREDIT_CARD

    @pytest.mark.parametrize("value", ["", "   ", "boat", None, 3])
    def test_invalid(self, value):
        with pytest.raises(InvalidProfileError):
            parse_debt_type(value)


class TestValidateProfile:
    """Tests for validate_profile."""

    def test_normalizes_fields(self):
        """Whitespace is collapsed, state upper-cased, debt type resolved."""
        profile = validate_profile(
            DebtProfile(
                debt_type="auto",
                servicer_name="  Santander   Consumer USA ",
                state="tx",
                approximate_balance="18500",
                origination_date="2021-07-04T00:00:00",
            )
        )

        assert profile.debt_type is DebtType.AUTO
        assert profile.servicer_name == "Santander Consumer USA"
        assert profile.state == "TX"
        assert profile.approximate_balance == 18500.0
        assert profile.origination_date == "2021-07-04"
        assert profile.origination_year == "2021"

    def test_empty_strings_become_none(self):
        profile = validate_profile(DebtProfile(debt_type="mortgage", servicer_name="   "))

        assert profile.servicer_name is None

    def test_original_is_not_modified(self):
        """Validation returns a copy; the input profile is immutable."""
        original = DebtProfile(debt_type="auto", state="ca")

        validate_profile(original)

        assert original.state == "ca"

    @pytest.mark.parametrize("state", ["California", "C", "1A"])
    def test_bad_state(self, state):
        with pytest.raises(InvalidProfileError, match="two-letter"):
            validate_profile(DebtProfile(debt_type="auto", state=state))

    def test_negative_balance(self):
        with pytest.raises(InvalidProfileError, match="non-negative"):
            validate_profile(DebtProfile(debt_type="auto", approximate_balance=-1))

    def test_non_numeric_balance(self):
        with pytest.raises(InvalidProfileError, match="not a number"):
            validate_profile(DebtProfile(debt_type="auto", approximate_balance="lots"))

    def test_bad_date(self):
        with pytest.raises(InvalidProfileError, match="ISO date"):
            validate_profile(DebtProfile(debt_type="auto", origination_date="07/04/2021"))

    def test_unknown_debt_type(self):
        with pytest.raises(InvalidProfileError):
            validate_profile(DebtProfile(debt_type="yacht"))


class TestNames:
    """Tests for name normalization."""

    def test_case_and_punctuation(self):
        assert normalize_name("SANTANDER DRIVE AUTO RECEIVABLES TRUST") == normalize_name(
            "Santander Drive Auto Receivables Trust "
        )
        assert normalize_name("Ally Auto Receivables Trust, 2023-1") == (
            "ally auto receivables trust 2023 1"
        )
        assert normalize_name(None) == ""

    def test_overlap_ignores_stopwords(self):
        assert names_overlap("Santander Consumer USA Inc.", "Santander Drive Trust")
        assert not names_overlap("The Bank of Trust", "Trust Company Inc")


class TestRegistryIds:
    """Tests for registry id helpers."""

    def test_normalize(self):
        assert normalize_registry_id("1234567") == "0001234567"
        assert normalize_registry_id(320193) == "0000320193"
        assert normalize_registry_id("12345678901") is None
        assert normalize_registry_id("CIK123") is None
        assert normalize_registry_id(None) is None

    def test_from_link(self):
        link = "https://www.sec.gov/Archives/edgar/data/1234567/000123456726000001"

        assert registry_id_from_link(link) == "0001234567"
        assert registry_id_from_link("https://example.com/filing") is None
        assert registry_id_from_link(None) is None


class TestCusip:
    """Tests for CUSIP check digits."""

    @pytest.mark.parametrize("code", ["037833100", "594918104", "38141GXZ2"])
    def test_known_valid(self, code):
        assert is_valid_cusip(code)
        assert cusip_check_digit(code[:8]) == code[8]

    @pytest.mark.parametrize("code", ["037833101", "03783310", "0378331000", "", None, "ABCDEFGHI"])
    def test_invalid(self, code):
        assert not is_valid_cusip(code)

    def test_lowercase_accepted(self):
        assert is_valid_cusip("38141gxz2")

    def test_base_length(self):
        with pytest.raises(ValueError):
            cusip_check_digit("1234")

    def test_parse_and_format(self):
        assert parse_cusip("037833100") == {"issuer": "037833", "issue": "10", "check": "0"}
        assert format_cusip("037833100") == "037833 10 0"

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="Invalid CUSIP"):
            parse_cusip("037833101")
