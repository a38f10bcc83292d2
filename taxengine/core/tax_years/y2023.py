from __future__ import annotations

from decimal import Decimal

from taxengine.core.brackets import BracketTable
from taxengine.core.tax_years.base import TaxYearConfig

D = Decimal

BRACKETS_2023 = BracketTable.from_rows([
    (D("0"),       D("53359"),  D("0.15")),
    (D("53359"),   D("106717"), D("0.205")),
    (D("106717"),  D("165430"), D("0.26")),
    (D("165430"),  D("235675"), D("0.29")),
    (D("235675"),  None,        D("0.33")),
])

BPA_2023 = D("15000")

CPP_BASIC_EXEMPTION_2023 = D("3500")
CPP_YMPE_2023 = D("66600")
CPP_RATE_2023 = D("0.0595")
CPP_MAX_EMPLOYEE_2023 = D("3754.45")

EI_MIE_2023 = D("61500")
EI_RATE_2023 = D("0.0163")
EI_MAX_EMPLOYEE_2023 = D("1002.45")

RRSP_LIMIT_2023 = D("30780")
TFSA_LIMIT_2023 = D("6500")

CONFIG_2023 = TaxYearConfig(
    year=2023,
    federal_brackets=BRACKETS_2023,
    federal_bpa=BPA_2023,
    cpp_exemption=CPP_BASIC_EXEMPTION_2023,
    cpp_max_earnings=CPP_YMPE_2023,
    cpp_rate=CPP_RATE_2023,
    cpp_max_contribution=CPP_MAX_EMPLOYEE_2023,
    ei_max_earnings=EI_MIE_2023,
    ei_rate=EI_RATE_2023,
    ei_max_contribution=EI_MAX_EMPLOYEE_2023,
    rrsp_rate=D("0.18"),
    rrsp_max_contribution=RRSP_LIMIT_2023,
    tfsa_annual_limit=TFSA_LIMIT_2023,
)
