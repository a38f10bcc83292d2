from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Mapping

from taxengine.core.brackets import BracketTable
from taxengine.core.errors import InvalidInputError
from taxengine.core.provinces.on import ON_BPA, ON_BRACKETS_BY_YEAR
from taxengine.core.tax_years import SUPPORTED_YEARS

D = Decimal

Scheme = Literal["brackets", "flat_rate"]

DEFAULT_PROVINCE = "ON"
DEFAULT_FLAT_RATE = D("0.075")


@dataclass(frozen=True)
class ProvinceProfile:
    code: str
    name: str
    basic_personal_amount: D
    sales_tax: str
    brackets: BracketTable | None = None
    flat_rate: D | None = None

    def __post_init__(self) -> None:
        if (self.brackets is None) == (self.flat_rate is None):
            raise ValueError(f"{self.code}: exactly one of brackets or flat_rate must be configured")

    @property
    def scheme(self) -> Scheme:
        return "brackets" if self.brackets is not None else "flat_rate"


# code -> (name, basic personal amount, sales tax label, flat rate)
_CATALOGUE: dict[str, tuple[str, D, str, D | None]] = {
    "ON": ("Ontario", ON_BPA, "HST: 13%", None),
    "BC": ("British Columbia", D("11980"), "GST: 5% + PST: 7%", D("0.0506")),
    "AB": ("Alberta", D("21003"), "GST: 5%", D("0.10")),
    "SK": ("Saskatchewan", D("17661"), "GST: 5% + PST: 6%", DEFAULT_FLAT_RATE),
    "MB": ("Manitoba", D("15000"), "GST: 5% + PST: 7%", DEFAULT_FLAT_RATE),
    "QC": ("Quebec", D("18056"), "GST: 5% + QST: 9.975%", D("0.14")),
    "NB": ("New Brunswick", D("12458"), "HST: 15%", DEFAULT_FLAT_RATE),
    "NS": ("Nova Scotia", D("8744"), "HST: 15%", DEFAULT_FLAT_RATE),
    "PE": ("Prince Edward Island", D("12500"), "HST: 15%", DEFAULT_FLAT_RATE),
    "NL": ("Newfoundland and Labrador", D("10382"), "HST: 15%", DEFAULT_FLAT_RATE),
    "YT": ("Yukon", D("15705"), "GST: 5%", DEFAULT_FLAT_RATE),
    "NT": ("Northwest Territories", D("16593"), "GST: 5%", DEFAULT_FLAT_RATE),
    "NU": ("Nunavut", D("18767"), "GST: 5%", DEFAULT_FLAT_RATE),
}


def _profiles_for_year(year: int) -> dict[str, ProvinceProfile]:
    profiles: dict[str, ProvinceProfile] = {}
    for code, (name, bpa, sales_tax, flat_rate) in _CATALOGUE.items():
        if flat_rate is None:
            profiles[code] = ProvinceProfile(code, name, bpa, sales_tax, brackets=ON_BRACKETS_BY_YEAR[year])
        else:
            profiles[code] = ProvinceProfile(code, name, bpa, sales_tax, flat_rate=flat_rate)
    return profiles


_PROFILES_BY_YEAR: Mapping[int, Mapping[str, ProvinceProfile]] = {
    year: _profiles_for_year(year) for year in SUPPORTED_YEARS
}


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def _year_profiles(tax_year: int) -> Mapping[str, ProvinceProfile]:
    try:
        return _PROFILES_BY_YEAR[tax_year]
    except (KeyError, TypeError) as exc:
        raise InvalidInputError.single(
            "unsupported_tax_year", f"No province profiles for tax year {tax_year}", field="tax_year"
        ) from exc


def is_known_province(code: str | None, tax_year: int = 2024) -> bool:
    return normalize_code(code) in _year_profiles(tax_year)


def resolve_province(code: str | None, tax_year: int = 2024) -> ProvinceProfile:
    """Return the profile for ``code``, or the Ontario profile when the code is unknown.

    Unknown codes never raise; callers that need strict validation should check
    :func:`is_known_province` first.
    """
    profiles = _year_profiles(tax_year)
    return profiles.get(normalize_code(code), profiles[DEFAULT_PROVINCE])


def list_provinces(tax_year: int = 2024) -> list[ProvinceProfile]:
    return list(_year_profiles(tax_year).values())


def supported_province_codes(tax_year: int = 2024) -> list[str]:
    return sorted(_year_profiles(tax_year))


__all__ = [
    "DEFAULT_PROVINCE",
    "ProvinceProfile",
    "is_known_province",
    "list_provinces",
    "normalize_code",
    "resolve_province",
    "supported_province_codes",
]
