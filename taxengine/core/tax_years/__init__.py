from __future__ import annotations

from typing import Mapping

from taxengine.core.errors import InvalidInputError
from taxengine.core.tax_years.base import TaxYearConfig
from taxengine.core.tax_years.y2022 import CONFIG_2022
from taxengine.core.tax_years.y2023 import CONFIG_2023
from taxengine.core.tax_years.y2024 import CONFIG_2024

_CONFIGS: Mapping[int, TaxYearConfig] = {
    config.year: config for config in (CONFIG_2022, CONFIG_2023, CONFIG_2024)
}

SUPPORTED_YEARS: tuple[int, ...] = tuple(sorted(_CONFIGS))
DEFAULT_TAX_YEAR = 2024


def get_tax_year_config(year: int) -> TaxYearConfig:
    try:
        return _CONFIGS[year]
    except (KeyError, TypeError) as exc:
        raise InvalidInputError.single(
            "unsupported_tax_year",
            f"Unsupported tax year {year}; expected one of {', '.join(map(str, SUPPORTED_YEARS))}",
            field="tax_year",
        ) from exc


__all__ = ["DEFAULT_TAX_YEAR", "SUPPORTED_YEARS", "TaxYearConfig", "get_tax_year_config"]
