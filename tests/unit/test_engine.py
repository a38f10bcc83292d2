from decimal import Decimal as D

import pytest
from pydantic import ValidationError

from taxengine.core import InvalidInputError, calculate, calculate_tax
from taxengine.core.models import FilingStatus, TaxInput
from tests.fixtures.scenarios import make_ontario_input


def test_ontario_reference_calculation():
    result = calculate(make_ontario_input())
    assert result.taxable_income == 59295
    assert result.federal_tax == 9083
    assert result.provincial_tax == 2718
    assert result.cpp_contribution == 4055
    assert result.ei_contribution == 1505
    assert result.total_tax == 17361
    assert result.net_income == 57639
    assert result.effective_rate_pct == 23.15
    assert result.marginal_rate_pct == 20.5
    assert result.rrsp_room == 13500
    assert result.tfsa_room == 7000
    assert result.rrsp_tax_savings == 2768
    assert [o.estimated_savings for o in result.optimizations] == [2768, 105, 400, 200]
    assert result.potential_savings == 3473


def test_rounding_happens_once_on_the_total():
    result = calculate(make_ontario_input())
    # Rounded components sum to 17361 here too, but the total is rounded from
    # the unrounded 17360.9735 rather than summed from rounded parts.
    parts = result.federal_tax + result.provincial_tax + result.cpp_contribution + result.ei_contribution
    assert abs(parts - result.total_tax) <= 2


def test_province_metadata_echoed():
    result = calculate(make_ontario_input())
    assert result.province == "ON"
    assert result.province_name == "Ontario"
    assert result.province_fallback is False
    assert result.sales_tax == "HST: 13%"
    assert result.basic_personal_amount == 15705
    assert result.income == 75000.0
    assert result.deductions == 15705.0
    assert result.tax_year == 2024


def test_deductions_below_bpa_are_floored():
    with_bpa = calculate_tax(75000, 15705)
    without = calculate_tax(75000, 0)
    assert without.taxable_income == with_bpa.taxable_income == 59295
    assert without.total_tax == with_bpa.total_tax


def test_deductions_above_bpa_reduce_taxable_income():
    result = calculate_tax(75000, 20000)
    assert result.taxable_income == 55000
    assert result.federal_tax == 8250


@pytest.mark.parametrize(
    "province, provincial",
    [("AB", 5400), ("BC", 3189), ("QC", 7972), ("SK", 4300)],
)
def test_flat_rate_provinces(province, provincial):
    result = calculate_tax(75000, 15705, province=province)
    assert result.provincial_tax == provincial
    assert result.federal_tax == 9083


def test_unknown_province_falls_back_to_ontario():
    result = calculate_tax(75000, 15705, province="ZZ")
    assert result.province == "ON"
    assert result.province_fallback is True
    assert result.total_tax == 17361


def test_lowercase_province_is_accepted():
    result = calculate_tax(75000, 15705, province="bc")
    assert result.province == "BC"
    assert result.province_fallback is False


def test_tax_year_2022():
    result = calculate_tax(75000, 0, tax_year=2022)
    assert result.taxable_income == 60602
    assert result.federal_tax == 9663
    assert result.provincial_tax == 3051
    assert result.cpp_contribution == 3500
    assert result.ei_contribution == 953
    assert result.total_tax == 17166
    assert result.tfsa_room == 6000


def test_zero_income():
    result = calculate_tax(0)
    assert result.total_tax == 0
    assert result.net_income == 0
    assert result.effective_rate_pct == 0.0
    assert result.marginal_rate_pct == 15.0
    assert result.rrsp_room == 0
    assert [o.estimated_savings for o in result.optimizations] == [105]


def test_filing_status_does_not_change_amounts():
    single = calculate_tax(75000, 15705, filing_status=FilingStatus.SINGLE)
    married = calculate_tax(75000, 15705, filing_status="married_joint")
    assert married.filing_status is FilingStatus.MARRIED_JOINT
    assert married.total_tax == single.total_tax


def test_float_income_is_read_as_written():
    result = calculate_tax(75000.10, 15705)
    assert result.income == 75000.1


@pytest.mark.parametrize(
    "kwargs, code",
    [
        ({"income": -1}, "invalid_income"),
        ({"income": "abc"}, "invalid_income"),
        ({"income": True}, "invalid_income"),
        ({"income": float("nan")}, "invalid_income"),
        ({"income": 1000, "deductions": -5}, "invalid_deductions"),
        ({"income": 1000, "tax_year": 2021}, "unsupported_tax_year"),
        ({"income": 1000, "filing_status": "widowed"}, "invalid_filing_status"),
    ],
)
def test_invalid_inputs_raise_before_computing(kwargs, code):
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_tax(**kwargs)
    assert code in [issue.code for issue in exc_info.value.issues]


def test_tax_input_is_frozen_and_strict():
    tax_input = make_ontario_input()
    with pytest.raises(ValidationError):
        tax_input.income = 1  # type: ignore[misc]
    with pytest.raises(ValidationError):
        TaxInput(income=1000, spouse_income=5)


def test_result_is_frozen():
    result = calculate(make_ontario_input())
    with pytest.raises(ValidationError):
        result.total_tax = 0  # type: ignore[misc]


@pytest.mark.parametrize("income", [10**29, 10**30, D("1E+40")])
def test_huge_incomes_are_computed_not_rejected(income):
    result = calculate_tax(income, 0)
    assert result.cpp_contribution == 4055
    assert result.ei_contribution == 1505
    assert result.total_tax > result.federal_tax > 0
    assert 0 < result.effective_rate_pct < 100
