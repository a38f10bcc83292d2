from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taxengine.core.tax_years import DEFAULT_TAX_YEAR, SUPPORTED_YEARS


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED_JOINT = "married_joint"
    MARRIED_SEPARATE = "married_separate"
    HEAD_OF_HOUSEHOLD = "head_of_household"


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


def _supported_tax_year(value: int) -> int:
    if value not in SUPPORTED_YEARS:
        raise ValueError(f"tax year must be one of {list(SUPPORTED_YEARS)}")
    return value


class TaxInput(BaseModel):
    income: Decimal = Field(..., ge=0, allow_inf_nan=False)
    deductions: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    # Recorded on the result; no bracket, deduction or cap depends on it.
    filing_status: FilingStatus = FilingStatus.SINGLE
    province: str = "ON"
    tax_year: int = DEFAULT_TAX_YEAR

    model_config = ConfigDict(frozen=True, extra="forbid")

    _reject_bool_amounts = field_validator("income", "deductions", mode="before")(_reject_bool)

    @field_validator("province", mode="before")
    @classmethod
    def _normalize_province(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    _supported_year = field_validator("tax_year")(_supported_tax_year)


class ContributionInput(BaseModel):
    income: Decimal = Field(..., ge=0, allow_inf_nan=False)
    deductions: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    rrsp_contributed: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    tfsa_contributed: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    tax_year: int = DEFAULT_TAX_YEAR

    model_config = ConfigDict(frozen=True, extra="forbid")

    _reject_bool_amounts = field_validator(
        "income", "deductions", "rrsp_contributed", "tfsa_contributed", mode="before"
    )(_reject_bool)

    _supported_year = field_validator("tax_year")(_supported_tax_year)


class Optimization(BaseModel):
    description: str
    estimated_savings: int

    model_config = ConfigDict(frozen=True)


class TaxResult(BaseModel):
    income: float
    deductions: float
    filing_status: FilingStatus
    tax_year: int
    province: str
    province_name: str
    province_fallback: bool
    sales_tax: str
    basic_personal_amount: int
    taxable_income: int
    federal_tax: int
    provincial_tax: int
    cpp_contribution: int
    ei_contribution: int
    total_tax: int
    net_income: int
    effective_rate_pct: float
    marginal_rate_pct: float
    rrsp_room: int
    tfsa_room: int
    rrsp_tax_savings: int
    optimizations: tuple[Optimization, ...] = ()
    potential_savings: int

    model_config = ConfigDict(frozen=True)


class ComparisonResult(BaseModel):
    per_province: dict[str, TaxResult]
    ranking: tuple[str, ...]
    best: TaxResult
    worst: TaxResult
    potential_savings: int

    model_config = ConfigDict(frozen=True)

    @property
    def best_province(self) -> str:
        return self.ranking[0]

    @property
    def worst_province(self) -> str:
        return self.ranking[-1]


class ContributionPlan(BaseModel):
    tax_year: int
    taxable_income: int
    marginal_rate_pct: float
    bracket_lower: int
    next_threshold: int | None
    rrsp_room: int
    rrsp_contributed: int
    rrsp_remaining: int
    rrsp_tax_savings: int
    tfsa_room: int
    tfsa_contributed: int
    tfsa_remaining: int
    tfsa_projected_growth: int

    model_config = ConfigDict(frozen=True)


__all__ = [
    "ComparisonResult",
    "ContributionInput",
    "ContributionPlan",
    "FilingStatus",
    "Optimization",
    "TaxInput",
    "TaxResult",
]
