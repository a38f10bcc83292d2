from __future__ import annotations

from decimal import Decimal
from typing import cast

from taxengine.core.money import ZERO
from taxengine.core.provinces import ProvinceProfile
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal


def flat_rate_taxable(taxable: D, profile: ProvinceProfile, config: TaxYearConfig) -> D:
    return max(ZERO, taxable - (profile.basic_personal_amount - config.federal_bpa))


def provincial_tax(taxable: D, profile: ProvinceProfile, config: TaxYearConfig) -> D:
    """Unrounded provincial tax on federal taxable income.

    Bracket-scheme provinces apply their cumulative-base table directly; the
    provincial BPA is already reflected in the federal deduction floor. Flat-rate
    provinces shift the taxable amount by the gap between the provincial and
    federal basic personal amounts.
    """
    if profile.brackets is not None:
        return profile.brackets.tax_closed_form(max(ZERO, taxable))
    return flat_rate_taxable(taxable, profile, config) * cast(D, profile.flat_rate)


__all__ = ["flat_rate_taxable", "provincial_tax"]
