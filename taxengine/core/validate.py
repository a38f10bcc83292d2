from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from taxengine.core.errors import InvalidInputError, ValidationIssue
from taxengine.core.models import ContributionInput, FilingStatus, TaxInput
from taxengine.core.tax_years import SUPPORTED_YEARS, get_tax_year_config

D = Decimal

FILING_STATUSES = tuple(status.value for status in FilingStatus)

HIGH_INCOME_WARNING = D("1000000")
LOW_INCOME_WARNING = D("1000")

_FIELD_CODES = {
    "income": "invalid_income",
    "deductions": "invalid_deductions",
    "filing_status": "invalid_filing_status",
    "province": "invalid_province",
    "tax_year": "unsupported_tax_year",
    "rrsp_contributed": "invalid_rrsp_contributed",
    "tfsa_contributed": "invalid_tfsa_contributed",
}


def issues_from_validation_error(exc: ValidationError) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        name = str(loc[0]) if loc else None
        code = _FIELD_CODES.get(name or "", "invalid_input")
        label = name or "input"
        issues.append(ValidationIssue(code=code, message=f"{label}: {err.get('msg')}", field=name))
    return issues


def build_tax_input(
    income: Any,
    deductions: Any = 0,
    filing_status: Any = FilingStatus.SINGLE,
    province: Any = "ON",
    tax_year: Any = 2024,
) -> TaxInput:
    """Build a :class:`TaxInput`, converting pydantic failures into :class:`InvalidInputError`."""
    try:
        return TaxInput(
            income=_coerce_amount(income),
            deductions=_coerce_amount(deductions),
            filing_status=filing_status,
            province=province,
            tax_year=tax_year,
        )
    except ValidationError as exc:
        raise InvalidInputError(issues_from_validation_error(exc)) from exc


def build_contribution_input(
    income: Any,
    deductions: Any = 0,
    rrsp_contributed: Any = 0,
    tfsa_contributed: Any = 0,
    tax_year: Any = 2024,
) -> ContributionInput:
    try:
        return ContributionInput(
            income=_coerce_amount(income),
            deductions=_coerce_amount(deductions),
            rrsp_contributed=_coerce_amount(rrsp_contributed),
            tfsa_contributed=_coerce_amount(tfsa_contributed),
            tax_year=tax_year,
        )
    except ValidationError as exc:
        raise InvalidInputError(issues_from_validation_error(exc)) from exc


def _coerce_amount(value: Any) -> Any:
    # Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.
    if isinstance(value, float) and math.isfinite(value):
        return D(str(value))
    return value


def parse_amount(value: Any) -> D | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        amount = D(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


@dataclass
class FormValidation:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_tax_form(
    income: Any,
    deductions: Any = None,
    filing_status: Any = None,
    tax_year: Any = None,
) -> FormValidation:
    """Check raw form values the way the tax form screen does.

    Errors block a calculation; warnings are advisory.
    """
    result = FormValidation()
    year_value = _parse_year(tax_year)

    amount = parse_amount(income)
    if amount is None or amount < 0:
        result.errors.append(
            ValidationIssue("invalid_income", "Income must be a valid positive number", "income")
        )
    elif amount > HIGH_INCOME_WARNING:
        result.warnings.append(
            ValidationIssue("income_high", "Income exceeds $1M - ensure all T4/T5 slips are included", "income")
        )
    elif 0 < amount < LOW_INCOME_WARNING:
        result.warnings.append(
            ValidationIssue("income_low", "Income appears low - verify all income sources are included", "income")
        )

    if deductions not in (None, ""):
        claimed = parse_amount(deductions)
        if claimed is None or claimed < 0:
            result.errors.append(
                ValidationIssue("invalid_deductions", "Deductions must be a valid positive number", "deductions")
            )
        elif amount is not None and amount >= 0:
            if claimed > amount:
                result.warnings.append(
                    ValidationIssue("deductions_exceed_income", "Total deductions exceed income", "deductions")
                )
            year = year_value if year_value in SUPPORTED_YEARS else SUPPORTED_YEARS[-1]
            bpa = get_tax_year_config(year).federal_bpa
            if claimed < bpa and amount > 0:
                result.warnings.append(
                    ValidationIssue(
                        "below_basic_personal_amount",
                        f"Consider claiming Basic Personal Amount of ${int(bpa):,}",
                        "deductions",
                    )
                )

    if year_value not in SUPPORTED_YEARS:
        result.errors.append(
            ValidationIssue(
                "unsupported_tax_year",
                f"Please select a valid tax year ({SUPPORTED_YEARS[0]}-{SUPPORTED_YEARS[-1]})",
                "tax_year",
            )
        )

    status = filing_status.value if isinstance(filing_status, FilingStatus) else filing_status
    if status not in FILING_STATUSES:
        result.errors.append(
            ValidationIssue("invalid_filing_status", "Please select a valid filing status", "filing_status")
        )

    return result


def _parse_year(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


__all__ = [
    "FILING_STATUSES",
    "FormValidation",
    "build_contribution_input",
    "build_tax_input",
    "issues_from_validation_error",
    "parse_amount",
    "validate_tax_form",
]
