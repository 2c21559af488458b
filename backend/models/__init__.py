"""Pydantic models for the Deck Probability Calculator backend."""

from backend.models.simulation_models import (
    Card,
    CardProbabilitySummary,
    Combination,
    CombinationSummary,
    DeckConfig,
    HypergeometricRequest,
    HypergeometricResponse,
    ProbabilityMode,
    SimulationRequest,
    SimulationResponse,
    SimulationResult,
)
from backend.models.validation_models import (
    InputValidationResult,
    ValidationIssue,
)

__all__ = [
    # Engine models
    "Card",
    "Combination",
    "DeckConfig",
    "ProbabilityMode",
    "SimulationRequest",
    "SimulationResult",
    # API models
    "CardProbabilitySummary",
    "CombinationSummary",
    "HypergeometricRequest",
    "HypergeometricResponse",
    "SimulationResponse",
    # Validation models
    "InputValidationResult",
    "ValidationIssue",
]
