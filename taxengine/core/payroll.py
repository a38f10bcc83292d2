from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxengine.core.money import ZERO
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal


@dataclass(frozen=True)
class Contributions:
    cpp: D
    ei: D

    @property
    def total(self) -> D:
        return self.cpp + self.ei


def cpp_contribution(income: D, config: TaxYearConfig) -> D:
    pensionable = max(ZERO, income - config.cpp_exemption)
    return min(pensionable * config.cpp_rate, config.cpp_max_contribution)


def ei_contribution(income: D, config: TaxYearConfig) -> D:
    return min(max(ZERO, income) * config.ei_rate, config.ei_max_contribution)


def compute_contributions(income: D, config: TaxYearConfig) -> Contributions:
    return Contributions(cpp=cpp_contribution(income, config), ei=ei_contribution(income, config))


__all__ = ["Contributions", "compute_contributions", "cpp_contribution", "ei_contribution"]
