"""Caller-owned, mutable deck state.

The probability engine is stateless. ``DeckState`` holds what a user edits
interactively (cards, combinations and deck settings) and hands the engine
an independent ``SimulationRequest`` snapshot on every run.
"""

import uuid
from dataclasses import dataclass, field

from backend.core.logging_config import get_logger
from backend.models.simulation_models import (
    Card,
    Combination,
    ProbabilityMode,
    SimulationRequest,
    SimulationResult,
)
from backend.services.engine_config import DEFAULT_DECK_SIZE, DEFAULT_DRAW_SIZE
from backend.services.simulator import count_card_types, run_request

logger = get_logger(__name__)


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass
class DeckState:
    """Cards, combinations and deck settings being edited by a user."""

    deck_size: int = DEFAULT_DECK_SIZE
    draw_size: int = DEFAULT_DRAW_SIZE
    cards: list[Card] = field(default_factory=list)
    combinations: list[Combination] = field(default_factory=list)

    def add_cards(self, name: str, quantity: int = 1) -> list[Card]:
        """Add ``quantity`` copies of a named card, each with its own id.

        Raises:
            ValueError: If the name is blank or quantity is not positive.
        """
        name = name.strip()
        if not name:
            raise ValueError("Card name must not be blank")
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")

        batch = _short_id()
        new_cards = [Card(id=f"card-{batch}-{i}", name=name) for i in range(quantity)]
        self.cards.extend(new_cards)
        logger.debug(f"Added {quantity} x {name}")
        return new_cards

    def remove_card(self, card_id: str) -> Card:
        """Remove a single card by id.

        Combinations pointing at the removed copy are moved to a remaining
        copy of the same name. Once no copy is left they keep the stale id,
        which the engine skips, so the combination scores 0.

        Raises:
            KeyError: If no card has this id.
        """
        for index, card in enumerate(self.cards):
            if card.id == card_id:
                removed = self.cards.pop(index)
                break
        else:
            raise KeyError(card_id)

        replacement = next((c.id for c in self.cards if c.name == removed.name), None)
        if replacement is not None:
            self.combinations = [
                self._replace_card_id(combo, card_id, replacement)
                for combo in self.combinations
            ]
        return removed

    @staticmethod
    def _replace_card_id(combo: Combination, old_id: str, new_id: str) -> Combination:
        if old_id not in combo.card_ids:
            return combo
        card_ids = [new_id if cid == old_id else cid for cid in combo.card_ids]
        return combo.model_copy(update={"card_ids": list(dict.fromkeys(card_ids))})

    def remove_cards(self, name: str) -> int:
        """Remove every copy of a named card and return how many were removed."""
        remaining = [card for card in self.cards if card.name != name]
        removed = len(self.cards) - len(remaining)
        self.cards = remaining
        return removed

    def card_counts(self) -> dict[str, int]:
        """Copies per card name, in the order names were first added."""
        return count_card_types(self.cards)

    def add_combination(self, name: str, card_names: list[str]) -> Combination:
        """Define a combination requiring at least one copy of each named card.

        Each name is stored as the id of its first copy in the deck.

        Raises:
            ValueError: If the name is blank, no cards are given, or a card
                name is not in the deck.
        """
        name = name.strip()
        if not name:
            raise ValueError("Combination name must not be blank")
        if not card_names:
            raise ValueError("A combination needs at least one card")

        first_ids: dict[str, str] = {}
        for card in self.cards:
            first_ids.setdefault(card.name, card.id)

        missing = [card_name for card_name in card_names if card_name not in first_ids]
        if missing:
            raise ValueError(f"Cards not in deck: {', '.join(missing)}")

        combination = Combination(
            id=f"combo-{_short_id()}",
            name=name,
            card_ids=[first_ids[card_name] for card_name in dict.fromkeys(card_names)],
        )
        self.combinations.append(combination)
        return combination

    def remove_combination(self, combination_id: str) -> Combination:
        """Remove a combination by id.

        Raises:
            KeyError: If no combination has this id.
        """
        for index, combo in enumerate(self.combinations):
            if combo.id == combination_id:
                return self.combinations.pop(index)
        raise KeyError(combination_id)

    def reset(self) -> None:
        """Clear all cards and combinations and restore default sizes."""
        self.cards = []
        self.combinations = []
        self.deck_size = DEFAULT_DECK_SIZE
        self.draw_size = DEFAULT_DRAW_SIZE

    def snapshot(
        self, mode: ProbabilityMode = ProbabilityMode.INDEPENDENT
    ) -> SimulationRequest:
        """Independent copy of the current state for the engine."""
        return SimulationRequest(
            deck_size=self.deck_size,
            draw_size=self.draw_size,
            cards=list(self.cards),
            combinations=[combo.model_copy(deep=True) for combo in self.combinations],
            mode=mode,
        )

    def simulate(
        self, mode: ProbabilityMode = ProbabilityMode.INDEPENDENT
    ) -> SimulationResult:
        """Run the engine on a snapshot of the current state."""
        return run_request(self.snapshot(mode))
