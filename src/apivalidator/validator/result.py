"""Aggregation of per-field validation outcomes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import Field

from apivalidator.models import FrozenBaseModel

from .models import ErrorDetailModel, FieldOutcomeModel


class ValidationResult(FrozenBaseModel):
    """Outcomes of one validation pass, keyed by field-kind.

    Results are immutable: `merge` returns a new result. On a key collision
    the incoming outcome replaces the existing one. Merging results whose
    keys overlap with different outcomes is unsupported, no reconciliation
    is attempted.

    Example:
        >>> result = ValidationResult.all_valid(["header"]).merge(
        ...     ValidationResult.single_error("body", ErrorDetailModel(message="bad"))
        ... )
        >>> result.is_valid()
        False
        >>> sorted(result.errors())
        ['body']
    """

    outcomes: dict[str, FieldOutcomeModel] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> ValidationResult:
        return cls()

    @classmethod
    def all_valid(cls, kinds: Iterable[str]) -> ValidationResult:
        """A result marking every listed field-kind as valid."""
        return cls(outcomes={kind: FieldOutcomeModel.ok() for kind in kinds})

    @classmethod
    def single_error(cls, kind: str, detail: ErrorDetailModel) -> ValidationResult:
        return cls(outcomes={kind: FieldOutcomeModel.invalid(detail)})

    def merge(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(outcomes={**self.outcomes, **other.outcomes})

    def is_valid(self) -> bool:
        """True when every recorded outcome is valid, vacuously true when empty."""
        return all(outcome.valid for outcome in self.outcomes.values())

    def errors(self) -> dict[str, ErrorDetailModel]:
        """Error details of the invalid field-kinds only."""
        return {
            kind: outcome.error
            for kind, outcome in self.outcomes.items()
            if not outcome.valid and outcome.error is not None
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible summary of the result."""
        return {
            "valid": self.is_valid(),
            "errors": {kind: detail.to_dict() for kind, detail in self.errors().items()},
        }


def merge(*results: ValidationResult) -> ValidationResult:
    """Fold results left to right, later results winning on collisions."""
    merged = ValidationResult.empty()
    for result in results:
        merged = merged.merge(result)
    return merged
