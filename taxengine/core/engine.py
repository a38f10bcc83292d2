"""Single entry point that composes the calculators into one :class:`TaxResult`.

Every intermediate amount stays an unrounded ``Decimal``; monetary fields are
rounded to whole dollars only when the result is assembled.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from taxengine.core.advisor import AdvisorContext, advise
from taxengine.core.federal import federal_tax, taxable_income
from taxengine.core.models import FilingStatus, Optimization, TaxInput, TaxResult
from taxengine.core.money import ZERO, round_pct, whole_dollars
from taxengine.core.payroll import compute_contributions
from taxengine.core.provinces import is_known_province, resolve_province
from taxengine.core.provincial import provincial_tax
from taxengine.core.room import compute_room
from taxengine.core.tax_years import DEFAULT_TAX_YEAR, get_tax_year_config
from taxengine.core.validate import build_tax_input

D = Decimal


def calculate(tax_input: TaxInput) -> TaxResult:
    config = get_tax_year_config(tax_input.tax_year)
    profile = resolve_province(tax_input.province, tax_input.tax_year)
    fallback = not is_known_province(tax_input.province, tax_input.tax_year)

    income = tax_input.income
    taxable = taxable_income(income, tax_input.deductions, config)

    fed = federal_tax(taxable, config)
    prov = provincial_tax(taxable, profile, config)
    contributions = compute_contributions(income, config)
    room = compute_room(income, taxable, config)
    advice = advise(AdvisorContext(income=income, taxable_income=taxable, room=room))

    total = fed + prov + contributions.total
    effective = total / income * 100 if income > 0 else ZERO

    return TaxResult(
        income=float(income),
        deductions=float(tax_input.deductions),
        filing_status=tax_input.filing_status,
        tax_year=tax_input.tax_year,
        province=profile.code,
        province_name=profile.name,
        province_fallback=fallback,
        sales_tax=profile.sales_tax,
        basic_personal_amount=whole_dollars(config.federal_bpa),
        taxable_income=whole_dollars(taxable),
        federal_tax=whole_dollars(fed),
        provincial_tax=whole_dollars(prov),
        cpp_contribution=whole_dollars(contributions.cpp),
        ei_contribution=whole_dollars(contributions.ei),
        total_tax=whole_dollars(total),
        net_income=whole_dollars(income - total),
        effective_rate_pct=round_pct(effective),
        marginal_rate_pct=float(room.marginal_rate_pct),
        rrsp_room=whole_dollars(room.rrsp_room),
        tfsa_room=whole_dollars(room.tfsa_room),
        rrsp_tax_savings=whole_dollars(room.rrsp_tax_savings),
        optimizations=tuple(
            Optimization(description=s.description, estimated_savings=whole_dollars(s.estimated_savings))
            for s in advice.suggestions
        ),
        potential_savings=whole_dollars(advice.potential_savings),
    )


def calculate_tax(
    income: Any,
    deductions: Any = 0,
    filing_status: Any = FilingStatus.SINGLE,
    province: Any = "ON",
    tax_year: Any = DEFAULT_TAX_YEAR,
) -> TaxResult:
    return calculate(
        build_tax_input(
            income=income,
            deductions=deductions,
            filing_status=filing_status,
            province=province,
            tax_year=tax_year,
        )
    )


__all__ = ["calculate", "calculate_tax"]
