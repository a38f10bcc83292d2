import logging
from typing import Annotated

from fastapi import FastAPI, HTTPException, Query
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from taxengine.config import Settings, get_settings
from taxengine.core import compare_provinces, calculate_tax, plan_contributions
from taxengine.core.errors import InvalidInputError
from taxengine.core.models import ComparisonResult, FilingStatus, TaxResult
from taxengine.core.provinces import list_provinces
from taxengine.core.tax_years import SUPPORTED_YEARS
from taxengine.core.validate import validate_tax_form
from taxengine.lifespan import build_application_lifespan

logger = logging.getLogger("taxengine.api")

_PROVINCE_PATTERN = r"^[A-Za-z]{2}$"


async def _announce_defaults(_: FastAPI) -> None:
    settings = get_settings()
    logger.info(
        "Tax engine API ready; default_tax_year=%s default_province=%s compare_bounds=%s-%s",
        settings.default_tax_year,
        settings.default_province,
        settings.compare_min_provinces,
        settings.compare_max_provinces,
    )


app = FastAPI(
    title="Canadian Tax Engine",
    description="Federal, provincial, CPP and EI estimates for tax years 2022-2024, with RRSP/TFSA optimization.",
    lifespan=build_application_lifespan("api", startup_hook=_announce_defaults),
)


class CalculateRequest(BaseModel):
    income: float = Field(..., ge=0, allow_inf_nan=False)
    deductions: float = Field(0.0, ge=0, allow_inf_nan=False)
    province: str | None = Field(default=None, pattern=_PROVINCE_PATTERN)
    filing_status: FilingStatus = Field(
        FilingStatus.SINGLE,
        validation_alias=AliasChoices("filing_status", "filingStatus"),
    )
    tax_year: int | None = Field(default=None, validation_alias=AliasChoices("tax_year", "taxYear"))

    model_config = ConfigDict(extra="forbid")


class CompareRequest(BaseModel):
    income: float = Field(..., ge=0, allow_inf_nan=False)
    deductions: float = Field(0.0, ge=0, allow_inf_nan=False)
    provinces: list[Annotated[str, Field(pattern=_PROVINCE_PATTERN)]]
    filing_status: FilingStatus = Field(
        FilingStatus.SINGLE,
        validation_alias=AliasChoices("filing_status", "filingStatus"),
    )
    tax_year: int | None = Field(default=None, validation_alias=AliasChoices("tax_year", "taxYear"))

    model_config = ConfigDict(extra="forbid")


class PlanRequest(BaseModel):
    income: float = Field(..., ge=0, allow_inf_nan=False)
    deductions: float = Field(0.0, ge=0, allow_inf_nan=False)
    rrsp_contributed: float = Field(
        0.0, ge=0, allow_inf_nan=False, validation_alias=AliasChoices("rrsp_contributed", "rrspContributed")
    )
    tfsa_contributed: float = Field(
        0.0, ge=0, allow_inf_nan=False, validation_alias=AliasChoices("tfsa_contributed", "tfsaContributed")
    )
    tax_year: int | None = Field(default=None, validation_alias=AliasChoices("tax_year", "taxYear"))

    model_config = ConfigDict(extra="forbid")


class ValidateRequest(BaseModel):
    income: float | str | None = None
    deductions: float | str | None = None
    filing_status: str | None = Field(default=None, validation_alias=AliasChoices("filing_status", "filingStatus"))
    tax_year: int | str | None = Field(default=None, validation_alias=AliasChoices("tax_year", "taxYear"))

    model_config = ConfigDict(extra="forbid")


def _settings() -> Settings:
    return getattr(app.state, "settings", get_settings())


def _bad_request(exc: InvalidInputError, context: str) -> HTTPException:
    logger.info("Rejected %s request: %s", context, exc)
    return HTTPException(status_code=400, detail=exc.as_detail())


def _log_fallback(requested: str, result: TaxResult) -> None:
    if result.province_fallback:
        logger.warning("Unknown province %s; calculated with %s", requested, result.province)


@app.get("/health")
def health():
    settings = _settings()
    return {
        "status": "ok",
        "default_tax_year": settings.default_tax_year,
        "supported_years": list(SUPPORTED_YEARS),
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
    }


@app.get("/api/provinces")
def provinces(tax_year: int | None = None):
    year = tax_year or _settings().default_tax_year
    if year not in SUPPORTED_YEARS:
        raise HTTPException(status_code=400, detail=f"Unsupported tax year {year}")
    catalogue = getattr(app.state, "province_catalogue", None)
    if catalogue is not None:
        data = catalogue[year]
    else:
        data = [
            {
                "code": p.code,
                "name": p.name,
                "basic_personal": int(p.basic_personal_amount),
                "sales_tax": p.sales_tax,
                "scheme": p.scheme,
            }
            for p in list_provinces(year)
        ]
    return {"success": True, "data": data}


@app.post("/api/tax/calculate-by-province")
def calculate_by_province(req: CalculateRequest):
    settings = _settings()
    province = (req.province or settings.default_province).upper()
    try:
        result = calculate_tax(
            income=req.income,
            deductions=req.deductions,
            filing_status=req.filing_status,
            province=province,
            tax_year=req.tax_year or settings.default_tax_year,
        )
    except InvalidInputError as exc:
        raise _bad_request(exc, "calculate") from exc
    _log_fallback(province, result)
    return {"success": True, "data": result.model_dump(mode="json")}


@app.post("/api/tax/compare-provinces")
def compare(req: CompareRequest):
    settings = _settings()
    try:
        comparison: ComparisonResult = compare_provinces(
            income=req.income,
            deductions=req.deductions,
            provinces=req.provinces,
            filing_status=req.filing_status,
            tax_year=req.tax_year or settings.default_tax_year,
            min_size=settings.compare_min_provinces,
            max_size=settings.compare_max_provinces,
        )
    except InvalidInputError as exc:
        raise _bad_request(exc, "compare") from exc
    for requested, result in comparison.per_province.items():
        _log_fallback(requested, result)
    return {"success": True, "data": comparison.model_dump(mode="json")}


@app.post("/api/tax/optimize-contributions")
def optimize_contributions(req: PlanRequest):
    try:
        plan = plan_contributions(
            income=req.income,
            deductions=req.deductions,
            rrsp_contributed=req.rrsp_contributed,
            tfsa_contributed=req.tfsa_contributed,
            tax_year=req.tax_year or _settings().default_tax_year,
        )
    except InvalidInputError as exc:
        raise _bad_request(exc, "optimize") from exc
    return {"success": True, "data": plan.model_dump(mode="json")}


@app.post("/api/tax/validate")
def validate(req: ValidateRequest):
    outcome = validate_tax_form(
        income=req.income,
        deductions=req.deductions,
        filing_status=req.filing_status,
        tax_year=req.tax_year,
    )
    return {
        "is_valid": outcome.is_valid,
        "errors": [issue.__dict__ for issue in outcome.errors],
        "warnings": [issue.__dict__ for issue in outcome.warnings],
    }


@app.get("/api/tax/estimate")
def estimate(
    income: float = Query(..., ge=0),
    deductions: float = Query(0.0, ge=0),
    province: str | None = Query(None, pattern=_PROVINCE_PATTERN),
    tax_year: int | None = None,
):
    settings = _settings()
    code = (province or settings.default_province).upper()
    try:
        result = calculate_tax(
            income=income,
            deductions=deductions,
            province=code,
            tax_year=tax_year or settings.default_tax_year,
        )
    except InvalidInputError as exc:
        raise _bad_request(exc, "estimate") from exc
    _log_fallback(code, result)
    return result.model_dump(mode="json")
