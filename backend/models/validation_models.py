"""Pydantic models for caller-side input validation.

The probability engine assumes validated input. These models carry the
outcome of checking a request before it reaches the engine: blocking
errors and advisory warnings, each with a machine-readable code.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation problem with context.

    Attributes:
        code: Machine-readable issue code
        message: Human-readable description
        card_id: Related card id if applicable
        combination_id: Related combination id if applicable
        severity: error blocks the run, warning is advisory
    """

    code: str = Field(description="Machine-readable issue code")
    message: str = Field(description="Human-readable description")
    card_id: str | None = Field(default=None, description="Related card id")
    combination_id: str | None = Field(default=None, description="Related combination id")
    severity: Literal["error", "warning"] = Field(
        default="error",
        description="error = blocks the run, warning = advisory",
    )


class InputValidationResult(BaseModel):
    """Complete validation result for a simulation request.

    Attributes:
        valid: True if the request can be passed to the engine
        errors: Blocking issues
        warnings: Advisory issues
        card_count: Total cards entered
        distinct_card_count: Number of distinct card names
        deck_size: Requested deck size
        draw_size: Requested draw size
    """

    valid: bool = Field(description="True if the request can be simulated")
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    card_count: int = Field(default=0)
    distinct_card_count: int = Field(default=0)
    deck_size: int = Field(default=0)
    draw_size: int = Field(default=0)

    def summary(self) -> str:
        """Generate a human-readable validation summary."""
        header = f"{self.card_count}/{self.deck_size} cards, drawing {self.draw_size}"
        if self.valid and not self.warnings:
            return f"✓ Input valid ({header})"

        status = "✓ Input valid" if self.valid else "✗ Input invalid"
        lines = [f"{status} ({header})"]
        for err in self.errors:
            lines.append(f"  ERROR: {err.message}")
        for warn in self.warnings:
            lines.append(f"  WARN: {warn.message}")
        return "\n".join(lines)
