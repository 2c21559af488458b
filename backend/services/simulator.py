"""Deck probability engine.

Computes, for one snapshot of a deck, the probability of drawing at least
one copy of every card name, the probability of drawing every card a
combination requires, and the probability of drawing at least one full
combination. Despite the module name nothing here is random: every value
is a closed-form hypergeometric probability, so identical inputs always
yield identical results.

The "any combination" probability applies inclusion-exclusion over every
non-empty subset of combinations, which is exponential in the number of
combinations. Runs are rejected above ``EngineConfig.max_combinations``.
"""

import time
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from backend.core.logging_config import get_logger
from backend.models.simulation_models import (
    Card,
    Combination,
    ProbabilityMode,
    SimulationRequest,
    SimulationResult,
)
from backend.services.engine_config import get_engine_config
from backend.services.probability import (
    probability_of_drawing,
    probability_of_drawing_all,
)

logger = get_logger(__name__)


class CombinationLimitError(ValueError):
    """Raised when too many combinations are supplied for inclusion-exclusion."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            f"{count} combinations exceed the limit of {limit} "
            f"(inclusion-exclusion would evaluate {2**count - 1} subsets)"
        )


# =============================================================================
# Input normalization
# =============================================================================


def _as_card(card: Card | Mapping[str, Any]) -> Card:
    if isinstance(card, Card):
        return card
    return Card.model_validate(card)


def _as_combination(combination: Combination | Mapping[str, Any]) -> Combination:
    if isinstance(combination, Combination):
        return combination
    return Combination.model_validate(combination)


def count_card_types(cards: Iterable[Card]) -> dict[str, int]:
    """Group cards by name.

    Returns:
        Mapping of card name to number of copies, in order of first appearance.
    """
    counts: dict[str, int] = {}
    for card in cards:
        counts[card.name] = counts.get(card.name, 0) + 1
    return counts


def required_card_names(
    combination: Combination, cards_by_id: Mapping[str, Card]
) -> list[str]:
    """Distinct card names a combination requires.

    Ids that no longer resolve to a card are skipped, and several ids of
    the same name collapse into one requirement.
    """
    names: dict[str, None] = {}
    for card_id in combination.card_ids:
        card = cards_by_id.get(card_id)
        if card is not None:
            names[card.name] = None
    return list(names)


# =============================================================================
# Probability aggregation
# =============================================================================


def _joint_probability(
    names: Iterable[str],
    card_counts: Mapping[str, int],
    single_card_probabilities: Mapping[str, float],
    deck_size: int,
    draw_size: int,
    mode: ProbabilityMode,
) -> float:
    """Probability of drawing at least one copy of every name."""
    names = list(names)
    if any(card_counts.get(name, 0) <= 0 for name in names):
        return 0.0

    if mode is ProbabilityMode.EXACT:
        return probability_of_drawing_all(
            (card_counts[name] for name in names), deck_size, draw_size
        )

    # Treats each name as an independent event; overestimates the true joint
    # probability because copies of one card use up draw slots.
    probability = 1.0
    for name in names:
        probability *= single_card_probabilities[name]
    return probability


def combination_probability(
    required_names: Sequence[str],
    card_counts: Mapping[str, int],
    single_card_probabilities: Mapping[str, float],
    deck_size: int,
    draw_size: int,
    mode: ProbabilityMode = ProbabilityMode.INDEPENDENT,
) -> float:
    """Probability of drawing every card a single combination requires.

    A combination with no resolvable cards can never be satisfied and
    returns 0.0, as does one requiring a card with no copies in the deck.
    """
    if not required_names:
        return 0.0
    return _joint_probability(
        required_names,
        card_counts,
        single_card_probabilities,
        deck_size,
        draw_size,
        mode,
    )


def any_combination_probability(
    required_sets: Sequence[Sequence[str]],
    card_counts: Mapping[str, int],
    single_card_probabilities: Mapping[str, float],
    deck_size: int,
    draw_size: int,
    mode: ProbabilityMode = ProbabilityMode.INDEPENDENT,
) -> float | None:
    """Probability of drawing at least one complete combination.

    Applies inclusion-exclusion over every non-empty subset S of the
    combinations::

        P(C1 or ... or Cm) = sum over S of (-1)^(|S|+1) * P(all of S)

    where P(all of S) is the joint probability of the union of the card
    names required across S. The sum is clamped to [0, 1] since the
    independence approximation can push it outside valid bounds.

    Args:
        required_sets: Distinct required card names for each combination.
        card_counts: Copies in the deck per card name.
        single_card_probabilities: At-least-one probability per card name.
        deck_size: Population size.
        draw_size: Sample size.
        mode: Joint probability mode.

    Returns:
        The union probability, or None when there are no combinations.
    """
    combo_count = len(required_sets)
    if combo_count == 0:
        return None

    total = 0.0
    for mask in range(1, 1 << combo_count):
        subset = [required_sets[i] for i in range(combo_count) if mask & (1 << i)]

        # An unsatisfiable combination makes every intersection containing it empty
        if any(not names for names in subset):
            continue

        union: dict[str, None] = {}
        for names in subset:
            union.update(dict.fromkeys(names))

        probability = _joint_probability(
            union,
            card_counts,
            single_card_probabilities,
            deck_size,
            draw_size,
            mode,
        )
        if len(subset) % 2 == 1:
            total += probability
        else:
            total -= probability

    return max(0.0, min(1.0, total))


# =============================================================================
# Entry points
# =============================================================================


def run_simulation(
    cards: Sequence[Card | Mapping[str, Any]],
    combinations: Sequence[Combination | Mapping[str, Any]],
    deck_size: int,
    draw_size: int,
    mode: ProbabilityMode = ProbabilityMode.INDEPENDENT,
    max_combinations: int | None = None,
) -> SimulationResult:
    """Compute draw probabilities for a deck snapshot.

    Inputs are expected to be validated by the caller (see
    ``backend.services.validators.InputValidator``); degenerate sizes
    resolve to 0 or 1 rather than raising.

    Args:
        cards: Cards in the deck, as models or ``{"id", "name"}`` dicts.
        combinations: Combinations, as models or dicts with card ids.
        deck_size: Population size N.
        draw_size: Sample size n.
        mode: INDEPENDENT (product approximation) or EXACT joint probability.
        max_combinations: Upper bound on combinations; defaults to the
            configured ``max_combinations``.

    Returns:
        A fresh SimulationResult.

    Raises:
        CombinationLimitError: If more combinations than allowed are given.
    """
    config = get_engine_config()
    limit = max_combinations if max_combinations is not None else config.max_combinations
    if len(combinations) > limit:
        raise CombinationLimitError(len(combinations), limit)

    mode = ProbabilityMode(mode)
    start_time = time.perf_counter()

    card_models = [_as_card(card) for card in cards]
    combination_models = [_as_combination(combo) for combo in combinations]

    card_counts = count_card_types(card_models)
    cards_by_id = {card.id: card for card in card_models}

    single_card_probabilities = {
        name: probability_of_drawing(count, deck_size, draw_size)
        for name, count in card_counts.items()
    }

    required_sets = [
        required_card_names(combo, cards_by_id) for combo in combination_models
    ]
    combination_probabilities = {
        combo.id: combination_probability(
            names,
            card_counts,
            single_card_probabilities,
            deck_size,
            draw_size,
            mode,
        )
        for combo, names in zip(combination_models, required_sets)
    }

    if len(required_sets) >= config.background_threshold:
        logger.warning(
            f"Evaluating {2 ** len(required_sets) - 1} combination subsets",
            extra={"extra_data": {"combinations": len(required_sets)}},
        )

    any_probability = any_combination_probability(
        required_sets,
        card_counts,
        single_card_probabilities,
        deck_size,
        draw_size,
        mode,
    )

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(
        "Simulation completed",
        extra={
            "extra_data": {
                "card_types": len(card_counts),
                "combinations": len(required_sets),
                "deck_size": deck_size,
                "draw_size": draw_size,
                "mode": mode.value,
                "duration_ms": round(duration_ms, 2),
            }
        },
    )

    return SimulationResult(
        single_card_probabilities=single_card_probabilities,
        combination_probabilities=combination_probabilities,
        any_combination_probability=any_probability,
        mode=mode,
        deck_size=deck_size,
        draw_size=draw_size,
    )


def run_request(
    request: SimulationRequest, max_combinations: int | None = None
) -> SimulationResult:
    """Run the engine on a SimulationRequest snapshot."""
    return run_simulation(
        request.cards,
        request.combinations,
        request.deck_size,
        request.draw_size,
        mode=request.mode,
        max_combinations=max_combinations,
    )
