from __future__ import annotations

from typing import Any, Iterable

from taxengine.core.engine import calculate
from taxengine.core.errors import InvalidInputError
from taxengine.core.models import ComparisonResult, FilingStatus, TaxInput, TaxResult
from taxengine.core.provinces import normalize_code
from taxengine.core.tax_years import DEFAULT_TAX_YEAR
from taxengine.core.validate import build_tax_input

MIN_PROVINCES = 2
MAX_PROVINCES = 5


def _distinct_codes(provinces: Iterable[Any]) -> list[str]:
    if isinstance(provinces, str):
        raise InvalidInputError.single(
            "invalid_provinces", "provinces must be a collection of province codes", field="provinces"
        )
    codes: list[str] = []
    for code in provinces:
        if not isinstance(code, str) or not normalize_code(code):
            raise InvalidInputError.single(
                "invalid_provinces", f"Invalid province code {code!r}", field="provinces"
            )
        normalized = normalize_code(code)
        if normalized not in codes:
            codes.append(normalized)
    return codes


def compare(
    tax_input: TaxInput,
    provinces: Iterable[Any],
    min_size: int = MIN_PROVINCES,
    max_size: int = MAX_PROVINCES,
) -> ComparisonResult:
    """Run the same income/deductions through each province and rank by total tax.

    ``per_province`` keeps request order; ``ranking`` is ascending by total tax,
    ties keeping request order.
    """
    codes = _distinct_codes(provinces)
    if not min_size <= len(codes) <= max_size:
        raise InvalidInputError.single(
            "province_count_out_of_range",
            f"Compare between {min_size} and {max_size} provinces; got {len(codes)}",
            field="provinces",
        )

    per_province: dict[str, TaxResult] = {
        code: calculate(tax_input.model_copy(update={"province": code})) for code in codes
    }
    ranking = sorted(codes, key=lambda code: per_province[code].total_tax)
    best = per_province[ranking[0]]
    worst = per_province[ranking[-1]]
    return ComparisonResult(
        per_province=per_province,
        ranking=tuple(ranking),
        best=best,
        worst=worst,
        potential_savings=worst.total_tax - best.total_tax,
    )


def compare_provinces(
    income: Any,
    deductions: Any,
    provinces: Iterable[Any],
    filing_status: Any = FilingStatus.SINGLE,
    tax_year: Any = DEFAULT_TAX_YEAR,
    min_size: int = MIN_PROVINCES,
    max_size: int = MAX_PROVINCES,
) -> ComparisonResult:
    tax_input = build_tax_input(
        income=income,
        deductions=deductions,
        filing_status=filing_status,
        tax_year=tax_year,
    )
    return compare(tax_input, provinces, min_size=min_size, max_size=max_size)


__all__ = ["MAX_PROVINCES", "MIN_PROVINCES", "compare", "compare_provinces"]
