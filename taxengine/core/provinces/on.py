from __future__ import annotations

from decimal import Decimal

from taxengine.core.brackets import BracketTable

D = Decimal

ON_BPA = D("11865")

# Cumulative-base form: income below the Ontario basic personal amount sits in
# a zero-rated band, and each later bracket carries the tax owed at its lower
# bound. The 2024 table uses the published rounded base at the second bracket.
ON_BRACKETS_2022 = BracketTable.from_rows([
    (D("0"),       ON_BPA,      D("0")),
    (ON_BPA,       D("46226"),  D("0.0505")),
    (D("46226"),   D("92454"),  D("0.0915")),
    (D("92454"),   D("150000"), D("0.1116")),
    (D("150000"),  D("220000"), D("0.1216")),
    (D("220000"),  None,        D("0.1316")),
])

ON_BRACKETS_2023 = BracketTable.from_rows([
    (D("0"),       ON_BPA,      D("0")),
    (ON_BPA,       D("49231"),  D("0.0505")),
    (D("49231"),   D("98463"),  D("0.0915")),
    (D("98463"),   D("150000"), D("0.1116")),
    (D("150000"),  D("220000"), D("0.1216")),
    (D("220000"),  None,        D("0.1316")),
])

ON_BRACKETS_2024 = BracketTable.from_rows([
    (D("0"),       ON_BPA,      D("0")),
    (ON_BPA,       D("51446"),  D("0.0505")),
    (D("51446"),   D("102894"), D("0.0915"), D("2000")),
    (D("102894"),  D("150000"), D("0.1116")),
    (D("150000"),  D("220000"), D("0.1216")),
    (D("220000"),  None,        D("0.1316")),
])

ON_BRACKETS_BY_YEAR = {
    2022: ON_BRACKETS_2022,
    2023: ON_BRACKETS_2023,
    2024: ON_BRACKETS_2024,
}
