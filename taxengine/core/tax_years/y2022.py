from __future__ import annotations

from decimal import Decimal

from taxengine.core.brackets import BracketTable
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal

BRACKETS_2022 = BracketTable.from_rows([
    (D("0"),       D("50197"),  D("0.15")),
    (D("50197"),   D("100392"), D("0.205")),
    (D("100392"),  D("155625"), D("0.26")),
    (D("155625"),  D("221708"), D("0.29")),
    (D("221708"),  None,        D("0.33")),
])

BPA_2022 = D("14398")

CPP_BASIC_EXEMPTION_2022 = D("3500")
CPP_YMPE_2022 = D("64900")
CPP_RATE_2022 = D("0.0570")
CPP_MAX_EMPLOYEE_2022 = D("3499.80")

EI_MIE_2022 = D("60300")
EI_RATE_2022 = D("0.0158")
EI_MAX_EMPLOYEE_2022 = D("952.74")

RRSP_LIMIT_2022 = D("29210")
TFSA_LIMIT_2022 = D("6000")

CONFIG_2022 = TaxYearConfig(
    year=2022,
    federal_brackets=BRACKETS_2022,
    federal_bpa=BPA_2022,
    cpp_exemption=CPP_BASIC_EXEMPTION_2022,
    cpp_max_earnings=CPP_YMPE_2022,
    cpp_rate=CPP_RATE_2022,
    cpp_max_contribution=CPP_MAX_EMPLOYEE_2022,
    ei_max_earnings=EI_MIE_2022,
    ei_rate=EI_RATE_2022,
    ei_max_contribution=EI_MAX_EMPLOYEE_2022,
    rrsp_rate=D("0.18"),
    rrsp_max_contribution=RRSP_LIMIT_2022,
    tfsa_annual_limit=TFSA_LIMIT_2022,
)
