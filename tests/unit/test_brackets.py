from decimal import Decimal as D

import pytest

from taxengine.core.brackets import BracketTable, TaxBracket
from taxengine.core.provinces.on import ON_BRACKETS_2024
from taxengine.core.tax_years.y2022 import BRACKETS_2022
from taxengine.core.tax_years.y2023 import BRACKETS_2023
from taxengine.core.tax_years.y2024 import BRACKETS_2024


def test_federal_2024_first_bracket_and_reference_income():
    assert BRACKETS_2024.tax(D("55867")) == D("8380.05")
    assert BRACKETS_2024.tax(D("59295")) == D("9082.79")


def test_tax_is_unrounded():
    # 0.01 * 0.15 would vanish under per-bracket rounding to cents.
    assert BRACKETS_2024.tax(D("0.01")) == D("0.0015")


def test_negative_taxable_income_is_zero():
    assert BRACKETS_2024.tax(D("-500")) == D("0")
    assert BRACKETS_2024.tax_closed_form(D("-500")) == D("0")


@pytest.mark.parametrize("table", [BRACKETS_2022, BRACKETS_2023, BRACKETS_2024])
def test_closed_form_matches_iterative_at_every_threshold(table: BracketTable):
    for threshold in table.thresholds:
        for income in (threshold - D("0.01"), threshold, threshold + D("0.01")):
            assert table.tax(income) == table.tax_closed_form(income)


@pytest.mark.parametrize("table", [BRACKETS_2022, BRACKETS_2023, BRACKETS_2024])
def test_bracket_boundaries_are_continuous(table: BracketTable):
    for i, bracket in enumerate(table.brackets[:-1]):
        assert table.tax(bracket.upper) == table.bases[i + 1]


def test_federal_bases_are_cumulative():
    assert BRACKETS_2024.bases[0] == D("0")
    assert BRACKETS_2024.bases[1] == D("8380.05")
    assert BRACKETS_2024.bases[2] == D("8380.05") + D("55866") * D("0.205")


def test_ontario_2024_uses_published_base():
    assert ON_BRACKETS_2024.bases[2] == D("2000")
    assert ON_BRACKETS_2024.tax_closed_form(D("59295")) == D("2718.1835")
    # Later bases build on the published figure.
    assert ON_BRACKETS_2024.bases[3] == D("2000") + D("51448") * D("0.0915")


def test_ontario_zero_band_below_provincial_bpa():
    assert ON_BRACKETS_2024.tax_closed_form(D("11865")) == D("0")
    assert ON_BRACKETS_2024.tax_closed_form(D("11866")) == D("0.0505")


def test_index_of_is_half_open_and_marginal_is_inclusive():
    assert BRACKETS_2024.index_of(D("55866.99")) == 0
    assert BRACKETS_2024.index_of(D("55867")) == 1
    assert BRACKETS_2024.marginal_rate(D("55867")) == D("0.15")
    assert BRACKETS_2024.marginal_rate(D("55867.01")) == D("0.205")
    assert BRACKETS_2024.marginal_rate(D("10000000")) == D("0.33")


def test_from_rows_accepts_explicit_base():
    table = BracketTable.from_rows([
        (D("0"), D("100"), D("0.10")),
        (D("100"), None, D("0.20"), D("50")),
    ])
    assert table.bases == (D("0"), D("50"))
    assert table.tax_closed_form(D("110")) == D("52")
    assert table.tax(D("110")) == D("12")


@pytest.mark.parametrize(
    "brackets, message",
    [
        ((), "at least one"),
        ((TaxBracket(D("10"), None, D("0.1")),), "start at zero"),
        ((TaxBracket(D("0"), D("100"), D("0.1")), TaxBracket(D("150"), None, D("0.2"))), "contiguous"),
        ((TaxBracket(D("0"), D("100"), D("0.1")),), "open-ended"),
        ((TaxBracket(D("0"), None, D("1.5")),), "outside"),
    ],
)
def test_invalid_tables_rejected(brackets, message):
    with pytest.raises(ValueError, match=message):
        BracketTable(tuple(brackets))
