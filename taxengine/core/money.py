from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

D = Decimal

ZERO = D("0")
_DOLLAR = D("1")
_HUNDREDTH = D("0.01")


def _quantize(value: Decimal, exp: Decimal) -> Decimal:
    # quantize raises InvalidOperation once the result needs more digits than
    # the context precision, so widen it to fit the integer part.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def whole_dollars(value: Decimal) -> int:
    return int(_quantize(value, _DOLLAR))


def round_pct(value: Decimal) -> float:
    return float(_quantize(value, _HUNDREDTH))


def as_percent(rate: Decimal) -> Decimal:
    return (rate * 100).normalize()


__all__ = ["D", "ZERO", "whole_dollars", "round_pct", "as_percent"]
