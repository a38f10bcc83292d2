from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

from taxengine.core.money import ZERO

D = Decimal

BracketRow = tuple[D, D | None, D] | tuple[D, D | None, D, D | None]


@dataclass(frozen=True)
class TaxBracket:
    lower: D
    upper: D | None
    rate: D
    # Published tax owed at ``lower``; derived from the previous bracket when absent.
    base: D | None = None

    def contains(self, taxable_income: D) -> bool:
        return taxable_income >= self.lower and (self.upper is None or taxable_income < self.upper)


@dataclass(frozen=True)
class BracketTable:
    """Ordered, contiguous progressive brackets; the last one is open-ended.

    ``tax`` walks the brackets slice by slice. ``tax_closed_form`` uses the
    cumulative base owed at the start of the containing bracket. Tables built
    without explicit bases give identical results from both.
    """

    brackets: tuple[TaxBracket, ...]
    bases: tuple[D, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.brackets:
            raise ValueError("Bracket table must contain at least one bracket")
        if self.brackets[0].lower != ZERO:
            raise ValueError("First bracket must start at zero")
        for prev, nxt in zip(self.brackets, self.brackets[1:]):
            if prev.upper is None or prev.upper != nxt.lower:
                raise ValueError(f"Brackets are not contiguous at {prev.upper}")
        if self.brackets[-1].upper is not None:
            raise ValueError("Top bracket must be open-ended")
        for b in self.brackets:
            if b.upper is not None and b.upper <= b.lower:
                raise ValueError(f"Empty bracket starting at {b.lower}")
            if not ZERO <= b.rate <= D("1"):
                raise ValueError(f"Bracket rate {b.rate} outside [0, 1]")
        object.__setattr__(self, "bases", _cumulative_bases(self.brackets))

    @classmethod
    def from_rows(cls, rows: Iterable[BracketRow]) -> "BracketTable":
        return cls(tuple(TaxBracket(*row) for row in rows))

    def __iter__(self):
        return iter(self.brackets)

    def __len__(self) -> int:
        return len(self.brackets)

    @property
    def thresholds(self) -> tuple[D, ...]:
        return tuple(b.upper for b in self.brackets if b.upper is not None)

    def tax(self, taxable_income: D) -> D:
        ti = max(ZERO, taxable_income)
        tax = ZERO
        for b in self.brackets:
            upper = b.upper if b.upper is not None else ti
            if ti > b.lower:
                span = min(ti, upper) - b.lower
                if span > 0:
                    tax += span * b.rate
            if b.upper is not None and ti <= b.upper:
                break
        return tax

    def index_of(self, taxable_income: D) -> int:
        ti = max(ZERO, taxable_income)
        for i, b in enumerate(self.brackets):
            if b.contains(ti):
                return i
        return len(self.brackets) - 1

    def tax_closed_form(self, taxable_income: D) -> D:
        ti = max(ZERO, taxable_income)
        i = self.index_of(ti)
        bracket = self.brackets[i]
        return self.bases[i] + (ti - bracket.lower) * bracket.rate

    def marginal_bracket(self, taxable_income: D) -> TaxBracket:
        # Upper bounds are inclusive here: income sitting exactly on a
        # threshold is still taxed at the lower bracket's rate.
        for b in self.brackets:
            if b.upper is None or taxable_income <= b.upper:
                return b
        return self.brackets[-1]

    def marginal_rate(self, taxable_income: D) -> D:
        return self.marginal_bracket(taxable_income).rate


def _cumulative_bases(brackets: Sequence[TaxBracket]) -> tuple[D, ...]:
    bases: list[D] = []
    running = ZERO
    for i, b in enumerate(brackets):
        if b.base is not None:
            running = b.base
        elif i > 0:
            prev = brackets[i - 1]
            running = bases[-1] + (prev.upper - prev.lower) * prev.rate  # type: ignore[operator]
        bases.append(running)
    return tuple(bases)


__all__ = ["BracketRow", "BracketTable", "TaxBracket"]
