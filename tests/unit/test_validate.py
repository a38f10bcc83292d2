from decimal import Decimal

import pytest

from taxengine.core.models import FilingStatus
from taxengine.core.validate import build_tax_input, parse_amount, validate_tax_form


def _codes(issues):
    return [issue.code for issue in issues]


def test_clean_form_is_valid():
    outcome = validate_tax_form(75000, 15705, "single", 2024)
    assert outcome.is_valid
    assert outcome.errors == []
    assert outcome.warnings == []


@pytest.mark.parametrize("income", [None, "", "abc", -5, "-1", True])
def test_invalid_income(income):
    outcome = validate_tax_form(income, None, "single", 2024)
    assert not outcome.is_valid
    assert "invalid_income" in _codes(outcome.errors)


def test_income_warnings():
    assert _codes(validate_tax_form(2_000_000, None, "single", 2024).warnings) == ["income_high"]
    assert _codes(validate_tax_form(500, None, "single", 2024).warnings) == ["income_low"]
    assert validate_tax_form(0, None, "single", 2024).warnings == []


def test_formatted_income_string_is_parsed():
    assert validate_tax_form("75,000", "15705", "single", "2024").is_valid


def test_deduction_warnings():
    outcome = validate_tax_form(75000, 80000, "single", 2024)
    assert outcome.is_valid
    assert _codes(outcome.warnings) == ["deductions_exceed_income"]

    outcome = validate_tax_form(75000, 1000, "single", 2024)
    assert _codes(outcome.warnings) == ["below_basic_personal_amount"]
    assert "$15,705" in outcome.warnings[0].message


def test_bpa_warning_follows_tax_year():
    outcome = validate_tax_form(75000, 1000, "single", "2022")
    assert "$14,398" in outcome.warnings[0].message


def test_invalid_deductions():
    outcome = validate_tax_form(75000, "lots", "single", 2024)
    assert _codes(outcome.errors) == ["invalid_deductions"]
    assert validate_tax_form(75000, "", "single", 2024).is_valid


def test_year_and_filing_status_errors():
    outcome = validate_tax_form(75000, None, "widowed", 2021)
    assert _codes(outcome.errors) == ["unsupported_tax_year", "invalid_filing_status"]
    assert validate_tax_form(75000, None, FilingStatus.HEAD_OF_HOUSEHOLD, 2023).is_valid


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,234.50", Decimal("1234.50")),
        (" 42 ", Decimal("42")),
        (7, Decimal("7")),
        (True, None),
        ("nan", None),
        ("", None),
        ("twelve", None),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_build_tax_input_reads_floats_by_their_repr():
    tax_input = build_tax_input(0.1, 0.2)
    assert tax_input.income == Decimal("0.1")
    assert tax_input.deductions == Decimal("0.2")
