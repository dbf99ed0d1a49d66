"""ValidationResult data model representing invariant checks on a computed invoice."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ValidationResult:
    """Validation result for a computed invoice.

    Attributes:
        status: "OK" or "REVIEW"
        lines_sum: Sum of all TaxedLine.line_total
        diff: grand_total - lines_sum (signed)
        tolerance: Validation tolerance in rupees
        errors: Invariant violations (status REVIEW when non-empty)
        warnings: Data-quality notes that do not block rendering
    """

    status: str
    lines_sum: float
    diff: float
    tolerance: float = 0.01
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate ValidationResult fields."""
        if self.status not in ["OK", "REVIEW"]:
            raise ValueError(
                f"status must be 'OK' or 'REVIEW', got '{self.status}'"
            )

        if self.tolerance < 0:
            raise ValueError(
                f"tolerance must be >= 0, got {self.tolerance}"
            )

    @property
    def passed(self) -> bool:
        return self.status == "OK"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "lines_sum": self.lines_sum,
            "diff": self.diff,
            "tolerance": self.tolerance,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
