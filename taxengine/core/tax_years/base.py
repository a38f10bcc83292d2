from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxengine.core.brackets import BracketTable

D = Decimal


@dataclass(frozen=True)
class TaxYearConfig:
    year: int
    federal_brackets: BracketTable
    federal_bpa: D
    cpp_exemption: D
    cpp_max_earnings: D
    cpp_rate: D
    # Configured literal, not re-derived from (max earnings - exemption) * rate.
    cpp_max_contribution: D
    ei_max_earnings: D
    ei_rate: D
    ei_max_contribution: D
    rrsp_rate: D
    rrsp_max_contribution: D
    tfsa_annual_limit: D
