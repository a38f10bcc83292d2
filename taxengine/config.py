from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic import ConfigDict, field_validator, model_validator

from taxengine.core.tax_years import DEFAULT_TAX_YEAR, SUPPORTED_YEARS

ENV_BOOL_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ENV_BOOL_TRUE


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Settings(BaseModel):
    default_tax_year: int = Field(default_factory=lambda: _env_int("DEFAULT_TAX_YEAR", DEFAULT_TAX_YEAR))
    default_province: str = Field(default_factory=lambda: os.getenv("DEFAULT_PROVINCE", "ON"))
    compare_min_provinces: int = Field(default_factory=lambda: _env_int("COMPARE_MIN_PROVINCES", 2))
    compare_max_provinces: int = Field(default_factory=lambda: _env_int("COMPARE_MAX_PROVINCES", 5))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))
    log_dir: str = Field(default_factory=lambda: os.getenv("LOG_DIR", "logs"))
    feature_file_log: bool = Field(default_factory=lambda: _env_bool("FEATURE_FILE_LOG", False))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("default_tax_year")
    @classmethod
    def _validate_year(cls, value: int) -> int:
        if value not in SUPPORTED_YEARS:
            raise ValueError(f"DEFAULT_TAX_YEAR must be one of {list(SUPPORTED_YEARS)}, got {value}")
        return value

    @field_validator("default_province", mode="before")
    @classmethod
    def _normalize_province(cls, value: str) -> str:
        code = (value or "ON").strip().upper()
        if len(code) != 2 or not code.isalpha():
            raise ValueError(f"DEFAULT_PROVINCE must be a two-letter code, got {value!r}")
        return code

    @field_validator("compare_min_provinces", "compare_max_provinces")
    @classmethod
    def _validate_bound(cls, value: int) -> int:
        return max(1, value)

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "Settings":
        if self.compare_min_provinces > self.compare_max_provinces:
            raise ValueError(
                "COMPARE_MIN_PROVINCES must not exceed COMPARE_MAX_PROVINCES "
                f"({self.compare_min_provinces} > {self.compare_max_provinces})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
