"""Result models for indexing, validation and case lookups."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IndexReport:
    """Outcome of a bulk indexing run.

    Attributes:
        total: Number of cases submitted.
        indexed: Number of cases embedded and upserted.
        failed: Ids of cases whose embedding or upsert failed.
    """

    total: int
    indexed: int = 0
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class ValidationReport:
    """Outcome of validating the loaded corpus."""

    valid: int = 0
    errors: dict[str, str] = field(default_factory=dict)
    missing_sections: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class CaseLookup:
    """Typed result of a ``get-case`` call.

    ``payload`` is set when the case was found; otherwise ``is_error`` is
    True and ``message`` says why.
    """

    payload: dict[str, Any] | None = None
    is_error: bool = False
    message: str = ""

    @classmethod
    def not_found(cls, case_id: str) -> "CaseLookup":
        return cls(is_error=True, message=f'Case with ID "{case_id}" not found.')
