from __future__ import annotations

from taxengine.core.compare import compare, compare_provinces
from taxengine.core.engine import calculate, calculate_tax
from taxengine.core.errors import InvalidInputError, ValidationIssue
from taxengine.core.models import ComparisonResult, ContributionPlan, FilingStatus, Optimization, TaxInput, TaxResult
from taxengine.core.planner import plan_contributions
from taxengine.core.provinces import resolve_province
from taxengine.core.tax_years import SUPPORTED_YEARS

__all__ = [
    "ComparisonResult",
    "ContributionPlan",
    "FilingStatus",
    "InvalidInputError",
    "Optimization",
    "SUPPORTED_YEARS",
    "TaxInput",
    "TaxResult",
    "ValidationIssue",
    "calculate",
    "calculate_tax",
    "compare",
    "compare_provinces",
    "plan_contributions",
    "resolve_province",
]
