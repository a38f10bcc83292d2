from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxengine.core.brackets import TaxBracket
from taxengine.core.money import ZERO
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal


@dataclass(frozen=True)
class FederalBracketInfo:
    bracket: TaxBracket
    marginal_rate: D
    next_threshold: D | None


def taxable_income(income: D, deductions: D, config: TaxYearConfig) -> D:
    # The federal BPA is a floor on the deduction, even when less is claimed.
    return max(ZERO, income - max(deductions, config.federal_bpa))


def federal_tax(taxable: D, config: TaxYearConfig) -> D:
    return config.federal_brackets.tax(taxable)


def federal_bracket_info(taxable: D, config: TaxYearConfig) -> FederalBracketInfo:
    """Bracket that sets the marginal rate, with inclusive upper bounds as in
    :func:`taxengine.core.room.marginal_rate_pct`."""
    bracket = config.federal_brackets.marginal_bracket(taxable)
    return FederalBracketInfo(
        bracket=bracket,
        marginal_rate=bracket.rate,
        next_threshold=bracket.upper,
    )


__all__ = ["FederalBracketInfo", "federal_bracket_info", "federal_tax", "taxable_income"]
