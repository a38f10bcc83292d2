from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    field: Optional[str] = None


class InvalidInputError(ValueError):
    """Raised before any computation when the engine is handed unusable input."""

    def __init__(self, issues: Iterable[ValidationIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(issue.message for issue in self.issues) or "invalid input")

    @classmethod
    def single(cls, code: str, message: str, field: str | None = None) -> "InvalidInputError":
        return cls([ValidationIssue(code=code, message=message, field=field)])

    def as_detail(self) -> list[dict[str, str | None]]:
        return [issue.__dict__ for issue in self.issues]


__all__ = ["InvalidInputError", "ValidationIssue"]
