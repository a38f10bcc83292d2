"""Rule-based savings suggestions layered on top of a tax calculation.

Each rule is gated independently and contributes an additive estimate; rules
never suppress or reorder one another, so the output order is the declaration
order of :data:`DEFAULT_RULES`.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from taxengine.core.money import ZERO, whole_dollars
from taxengine.core.room import ContributionRoom, TFSA_EXPECTED_RETURN

D = Decimal

TFSA_ASSUMED_FUTURE_TAX_RATE = D("0.25")
HOME_OFFICE_INCOME_THRESHOLD = D("30000")
HOME_OFFICE_SAVINGS = D("400")
MEDICAL_INCOME_THRESHOLD = D("40000")
MEDICAL_SAVINGS = D("200")


@dataclass(frozen=True)
class AdvisorContext:
    income: D
    taxable_income: D
    room: ContributionRoom


@dataclass(frozen=True)
class Suggestion:
    key: str
    description: str
    estimated_savings: D


@dataclass(frozen=True)
class Advice:
    suggestions: tuple[Suggestion, ...]

    @property
    def potential_savings(self) -> D:
        return sum((s.estimated_savings for s in self.suggestions), ZERO)


@dataclass(frozen=True)
class OptimizationRule:
    key: str
    applies: Callable[[AdvisorContext], bool]
    savings: Callable[[AdvisorContext], D]
    describe: Callable[[AdvisorContext, D], str]

    def evaluate(self, ctx: AdvisorContext) -> Suggestion | None:
        if not self.applies(ctx):
            return None
        amount = self.savings(ctx)
        return Suggestion(key=self.key, description=self.describe(ctx, amount), estimated_savings=amount)


def _dollars(amount: D) -> str:
    return f"${whole_dollars(amount):,}"


RRSP_RULE = OptimizationRule(
    key="rrsp",
    applies=lambda ctx: ctx.room.rrsp_room > 0,
    savings=lambda ctx: ctx.room.rrsp_tax_savings,
    describe=lambda ctx, amount: f"Maximize RRSP contribution: Save {_dollars(amount)} in taxes",
)

TFSA_RULE = OptimizationRule(
    key="tfsa",
    applies=lambda ctx: ctx.room.tfsa_room > 0,
    savings=lambda ctx: ctx.room.tfsa_room * TFSA_EXPECTED_RETURN * TFSA_ASSUMED_FUTURE_TAX_RATE,
    describe=lambda ctx, amount: f"Use TFSA room: {_dollars(ctx.room.tfsa_room)} tax-free growth potential",
)

HOME_OFFICE_RULE = OptimizationRule(
    key="home_office",
    applies=lambda ctx: ctx.income > HOME_OFFICE_INCOME_THRESHOLD,
    savings=lambda ctx: HOME_OFFICE_SAVINGS,
    describe=lambda ctx, amount: "Claim home office expenses if working from home",
)

MEDICAL_RULE = OptimizationRule(
    key="medical",
    applies=lambda ctx: ctx.income > MEDICAL_INCOME_THRESHOLD,
    savings=lambda ctx: MEDICAL_SAVINGS,
    describe=lambda ctx, amount: "Claim eligible medical expenses above 3% of net income",
)

DEFAULT_RULES: tuple[OptimizationRule, ...] = (
    RRSP_RULE,
    TFSA_RULE,
    HOME_OFFICE_RULE,
    MEDICAL_RULE,
)


def advise(ctx: AdvisorContext, rules: Sequence[OptimizationRule] = DEFAULT_RULES) -> Advice:
    suggestions: Iterable[Suggestion | None] = (rule.evaluate(ctx) for rule in rules)
    return Advice(suggestions=tuple(s for s in suggestions if s is not None))


__all__ = [
    "Advice",
    "AdvisorContext",
    "DEFAULT_RULES",
    "HOME_OFFICE_RULE",
    "MEDICAL_RULE",
    "OptimizationRule",
    "RRSP_RULE",
    "Suggestion",
    "TFSA_RULE",
    "advise",
]
