from __future__ import annotations

from decimal import Decimal

from taxengine.core.brackets import BracketTable
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal

BRACKETS_2024 = BracketTable.from_rows([
    (D("0"),       D("55867"),  D("0.15")),
    (D("55867"),   D("111733"), D("0.205")),
    (D("111733"),  D("173205"), D("0.26")),
    (D("173205"),  D("246752"), D("0.29")),
    (D("246752"),  None,        D("0.33")),
])

# Applied as a floor on the deduction amount, not as a non-refundable credit.
BPA_2024 = D("15705")

CPP_BASIC_EXEMPTION_2024 = D("3500")
CPP_YMPE_2024 = D("68500")
CPP_RATE_2024 = D("0.0595")
CPP_MAX_EMPLOYEE_2024 = D("4055")

EI_MIE_2024 = D("65700")
EI_RATE_2024 = D("0.0229")
EI_MAX_EMPLOYEE_2024 = D("1505")

RRSP_LIMIT_2024 = D("31560")
TFSA_LIMIT_2024 = D("7000")

CONFIG_2024 = TaxYearConfig(
    year=2024,
    federal_brackets=BRACKETS_2024,
    federal_bpa=BPA_2024,
    cpp_exemption=CPP_BASIC_EXEMPTION_2024,
    cpp_max_earnings=CPP_YMPE_2024,
    cpp_rate=CPP_RATE_2024,
    cpp_max_contribution=CPP_MAX_EMPLOYEE_2024,
    ei_max_earnings=EI_MIE_2024,
    ei_rate=EI_RATE_2024,
    ei_max_contribution=EI_MAX_EMPLOYEE_2024,
    rrsp_rate=D("0.18"),
    rrsp_max_contribution=RRSP_LIMIT_2024,
    tfsa_annual_limit=TFSA_LIMIT_2024,
)
