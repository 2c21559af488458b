"""Display helpers that turn engine results into summary rows."""

from collections.abc import Iterable

from backend.models.simulation_models import (
    CardProbabilitySummary,
    CombinationSummary,
    SimulationRequest,
    SimulationResponse,
    SimulationResult,
)
from backend.services.simulator import count_card_types, required_card_names


def format_percentage(probability: float) -> str:
    """Format a probability as a percentage with two decimals, e.g. ``12.50%``."""
    return f"{probability * 100:.2f}%"


def combination_label(names: Iterable[str]) -> str:
    """Join required card names for display, e.g. ``Ash + Pot of Greed``."""
    return " + ".join(names)


def build_response(
    request: SimulationRequest,
    result: SimulationResult,
    warnings: list[str] | None = None,
) -> SimulationResponse:
    """Pair a result with per-card and per-combination summaries.

    Args:
        request: The snapshot the result was computed from.
        result: Engine output for that snapshot.
        warnings: Advisory messages to pass through to the caller.

    Returns:
        SimulationResponse in the request's card and combination order.
    """
    card_counts = count_card_types(request.cards)
    cards_by_id = {card.id: card for card in request.cards}

    card_rows = [
        CardProbabilitySummary(
            name=name,
            count=count,
            probability=result.single_card_probabilities[name],
            percentage=format_percentage(result.single_card_probabilities[name]),
        )
        for name, count in card_counts.items()
    ]

    combination_rows = []
    for combo in request.combinations:
        probability = result.combination_probabilities.get(combo.id)
        if probability is None:
            continue
        names = required_card_names(combo, cards_by_id)
        combination_rows.append(
            CombinationSummary(
                combination_id=combo.id,
                name=combo.name,
                required_cards=names,
                label=combination_label(names),
                probability=probability,
                percentage=format_percentage(probability),
            )
        )

    any_percentage = None
    if result.any_combination_probability is not None:
        any_percentage = format_percentage(result.any_combination_probability)

    return SimulationResponse(
        result=result,
        cards=card_rows,
        combinations=combination_rows,
        any_combination_percentage=any_percentage,
        warnings=warnings or [],
    )
