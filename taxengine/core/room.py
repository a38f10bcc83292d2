from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxengine.core.federal import federal_bracket_info
from taxengine.core.money import ZERO, as_percent
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal

TFSA_EXPECTED_RETURN = D("0.06")


@dataclass(frozen=True)
class ContributionRoom:
    rrsp_room: D
    tfsa_room: D
    marginal_rate_pct: D
    rrsp_tax_savings: D


def rrsp_room(income: D, config: TaxYearConfig) -> D:
    return min(max(ZERO, income) * config.rrsp_rate, config.rrsp_max_contribution)


def tfsa_room(config: TaxYearConfig) -> D:
    return config.tfsa_annual_limit


def marginal_rate_pct(taxable: D, config: TaxYearConfig) -> D:
    """Top federal rate reached by ``taxable``, in percent. Provincial rates are ignored."""
    return as_percent(federal_bracket_info(taxable, config).marginal_rate)


def rrsp_tax_savings(income: D, taxable: D, config: TaxYearConfig) -> D:
    return rrsp_room(income, config) * marginal_rate_pct(taxable, config) / 100


def remaining_rrsp_room(income: D, contributed: D, config: TaxYearConfig) -> D:
    return max(ZERO, rrsp_room(income, config) - contributed)


def remaining_tfsa_room(contributed: D, config: TaxYearConfig) -> D:
    return max(ZERO, tfsa_room(config) - contributed)


def tfsa_projected_growth(room: D, expected_return: D = TFSA_EXPECTED_RETURN) -> D:
    return room * expected_return


def compute_room(income: D, taxable: D, config: TaxYearConfig) -> ContributionRoom:
    return ContributionRoom(
        rrsp_room=rrsp_room(income, config),
        tfsa_room=tfsa_room(config),
        marginal_rate_pct=marginal_rate_pct(taxable, config),
        rrsp_tax_savings=rrsp_tax_savings(income, taxable, config),
    )


__all__ = [
    "ContributionRoom",
    "TFSA_EXPECTED_RETURN",
    "compute_room",
    "marginal_rate_pct",
    "remaining_rrsp_room",
    "remaining_tfsa_room",
    "rrsp_room",
    "rrsp_tax_savings",
    "tfsa_projected_growth",
    "tfsa_room",
]
