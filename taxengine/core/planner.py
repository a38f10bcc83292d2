"""Registered-account planning for a saver who has already contributed this year.

Unlike the advisor, which assumes nothing has been contributed yet, the plan
subtracts current RRSP and TFSA contributions from the annual room and prices
only what is left.
"""
from __future__ import annotations

from typing import Any

from taxengine.core.federal import federal_bracket_info, taxable_income
from taxengine.core.models import ContributionInput, ContributionPlan
from taxengine.core.money import as_percent, whole_dollars
from taxengine.core.room import (
    TFSA_EXPECTED_RETURN,
    remaining_rrsp_room,
    remaining_tfsa_room,
    rrsp_room,
    tfsa_projected_growth,
    tfsa_room,
)
from taxengine.core.tax_years import DEFAULT_TAX_YEAR, get_tax_year_config
from taxengine.core.validate import build_contribution_input


def plan(contribution_input: ContributionInput, expected_return=TFSA_EXPECTED_RETURN) -> ContributionPlan:
    config = get_tax_year_config(contribution_input.tax_year)
    income = contribution_input.income
    taxable = taxable_income(income, contribution_input.deductions, config)
    info = federal_bracket_info(taxable, config)

    rrsp_left = remaining_rrsp_room(income, contribution_input.rrsp_contributed, config)
    tfsa_left = remaining_tfsa_room(contribution_input.tfsa_contributed, config)

    return ContributionPlan(
        tax_year=contribution_input.tax_year,
        taxable_income=whole_dollars(taxable),
        marginal_rate_pct=float(as_percent(info.marginal_rate)),
        bracket_lower=whole_dollars(info.bracket.lower),
        next_threshold=None if info.next_threshold is None else whole_dollars(info.next_threshold),
        rrsp_room=whole_dollars(rrsp_room(income, config)),
        rrsp_contributed=whole_dollars(contribution_input.rrsp_contributed),
        rrsp_remaining=whole_dollars(rrsp_left),
        rrsp_tax_savings=whole_dollars(rrsp_left * info.marginal_rate),
        tfsa_room=whole_dollars(tfsa_room(config)),
        tfsa_contributed=whole_dollars(contribution_input.tfsa_contributed),
        tfsa_remaining=whole_dollars(tfsa_left),
        tfsa_projected_growth=whole_dollars(tfsa_projected_growth(tfsa_left, expected_return)),
    )


def plan_contributions(
    income: Any,
    deductions: Any = 0,
    rrsp_contributed: Any = 0,
    tfsa_contributed: Any = 0,
    tax_year: Any = DEFAULT_TAX_YEAR,
) -> ContributionPlan:
    return plan(
        build_contribution_input(
            income=income,
            deductions=deductions,
            rrsp_contributed=rrsp_contributed,
            tfsa_contributed=tfsa_contributed,
            tax_year=tax_year,
        )
    )


__all__ = ["plan", "plan_contributions"]
