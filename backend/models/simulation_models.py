"""Pydantic models for the deck probability engine.

This module defines the input and result schemas shared by the engine,
the caller-owned deck state and the HTTP API. The engine receives these
as immutable snapshots and returns a fresh SimulationResult on every run.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Probability = Annotated[float, Field(ge=0.0, le=1.0)]


class ProbabilityMode(str, Enum):
    """How the probability of drawing several card names together is computed."""

    INDEPENDENT = "independent"  # Product of single-card probabilities (approximation)
    EXACT = "exact"  # Multivariate hypergeometric joint probability


class Card(BaseModel):
    """A single physical card in the deck.

    Cards sharing a name are fungible copies of one logical card type.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique card identifier")
    name: str = Field(description="Card name; copies share the same name")


class Combination(BaseModel):
    """A named set of cards that must all be drawn together.

    The engine reduces ``card_ids`` to the distinct card names they refer to,
    so listing several copies of the same card adds a single requirement.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Unique combination identifier")
    name: str = Field(description="Display name")
    card_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("card_ids", "cardIds", "cards"),
        description="Card ids this combination requires",
    )


class DeckConfig(BaseModel):
    """Population and sample sizes for a draw.

    Sizes are not constrained here so that InputValidator can report every
    problem with its own error code.
    """

    model_config = ConfigDict(populate_by_name=True)

    deck_size: int = Field(
        default=40,
        validation_alias=AliasChoices("deck_size", "deckSize"),
        description="Population size N, must be at least 1",
    )
    draw_size: int = Field(
        default=5,
        validation_alias=AliasChoices("draw_size", "drawSize"),
        description="Sample size n, must not exceed deck_size",
    )


class SimulationRequest(DeckConfig):
    """Complete snapshot of a deck handed to the engine."""

    cards: list[Card] = Field(default_factory=list, description="Cards in the deck")
    combinations: list[Combination] = Field(
        default_factory=list, description="User-defined combinations"
    )
    mode: ProbabilityMode = Field(
        default=ProbabilityMode.INDEPENDENT,
        description="Joint probability mode for multi-card requirements",
    )


class SimulationResult(BaseModel):
    """Probabilities computed for one snapshot of a deck."""

    single_card_probabilities: dict[str, Probability] = Field(
        default_factory=dict,
        description="Card name -> probability of drawing at least one copy",
    )
    combination_probabilities: dict[str, Probability] = Field(
        default_factory=dict,
        description="Combination id -> probability of drawing every required card",
    )
    any_combination_probability: Probability | None = Field(
        default=None,
        description="Probability that at least one combination is drawn; None without combinations",
    )
    mode: ProbabilityMode = Field(default=ProbabilityMode.INDEPENDENT)
    deck_size: int = Field(description="Population size used")
    draw_size: int = Field(description="Sample size used")


class CardProbabilitySummary(BaseModel):
    """Display row for a single card type."""

    name: str
    count: int = Field(ge=1, description="Copies of this card in the deck")
    probability: Probability
    percentage: str = Field(description="Probability formatted as a percentage")


class CombinationSummary(BaseModel):
    """Display row for a single combination."""

    combination_id: str
    name: str
    required_cards: list[str] = Field(description="Distinct card names required")
    label: str = Field(description='Required cards joined with " + "')
    probability: Probability
    percentage: str


class SimulationResponse(BaseModel):
    """API response: raw result plus formatted summaries."""

    result: SimulationResult
    cards: list[CardProbabilitySummary] = Field(default_factory=list)
    combinations: list[CombinationSummary] = Field(default_factory=list)
    any_combination_percentage: str | None = None
    warnings: list[str] = Field(default_factory=list)


class HypergeometricRequest(BaseModel):
    """Direct query of the hypergeometric distribution."""

    population_size: int = Field(ge=1, description="N, deck size")
    successes_in_population: int = Field(ge=0, description="K, copies in deck")
    sample_size: int = Field(ge=0, description="n, cards drawn")
    successes_in_sample: int = Field(ge=0, description="k, copies in hand")


class HypergeometricResponse(BaseModel):
    """Exact and cumulative hypergeometric probabilities."""

    exact: Probability = Field(description="P(X = k)")
    at_least: Probability = Field(description="P(X >= k)")
