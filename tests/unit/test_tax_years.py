from decimal import Decimal as D

import pytest

from taxengine.core.errors import InvalidInputError
from taxengine.core.tax_years import DEFAULT_TAX_YEAR, SUPPORTED_YEARS, get_tax_year_config


def test_supported_years():
    assert SUPPORTED_YEARS == (2022, 2023, 2024)
    assert DEFAULT_TAX_YEAR == 2024


def test_2024_configuration_values():
    config = get_tax_year_config(2024)
    assert config.federal_bpa == D("15705")
    assert config.cpp_max_contribution == D("4055")
    assert config.ei_max_contribution == D("1505")
    assert config.rrsp_max_contribution == D("31560")
    assert config.tfsa_annual_limit == D("7000")
    assert config.federal_brackets.thresholds == (
        D("55867"), D("111733"), D("173205"), D("246752"),
    )


@pytest.mark.parametrize("year", SUPPORTED_YEARS)
def test_rates_never_decrease(year):
    rates = [b.rate for b in get_tax_year_config(year).federal_brackets]
    assert rates == sorted(rates)


@pytest.mark.parametrize("year", [2021, 2025, "2024", None])
def test_unsupported_year_raises(year):
    with pytest.raises(InvalidInputError) as exc_info:
        get_tax_year_config(year)
    assert exc_info.value.issues[0].code == "unsupported_tax_year"


def test_configuration_is_frozen():
    config = get_tax_year_config(2024)
    with pytest.raises(AttributeError):
        config.federal_bpa = D("1")  # type: ignore[misc]
