"""Shared pytest fixtures."""

import pytest

from backend.models.simulation_models import Card, Combination
from backend.services.engine_config import clear_config_cache


@pytest.fixture(autouse=True)
def engine_config_cache():
    """Reload engine configuration for every test."""
    clear_config_cache()
    yield
    clear_config_cache()


def make_cards(name: str, quantity: int, prefix: str | None = None) -> list[Card]:
    """Build ``quantity`` copies of a card with predictable ids."""
    prefix = prefix or name.lower().replace(" ", "-")
    return [Card(id=f"{prefix}-{i}", name=name) for i in range(quantity)]


@pytest.fixture
def card_factory():
    """Fixture exposing make_cards to tests."""
    return make_cards


@pytest.fixture
def sample_cards() -> list[Card]:
    """Twelve named cards: Ash Blossom x3, Pot of Greed x1, Raigeki x2, Dark Hole x2,
    Monster Reborn x4."""
    return (
        make_cards("Ash Blossom", 3, "ash")
        + make_cards("Pot of Greed", 1, "pot")
        + make_cards("Raigeki", 2, "raigeki")
        + make_cards("Dark Hole", 2, "hole")
        + make_cards("Monster Reborn", 4, "reborn")
    )


@pytest.fixture
def sample_combinations() -> list[Combination]:
    """Two overlapping combinations and one standalone."""
    return [
        Combination(id="combo-1", name="Ash + Pot", card_ids=["ash-0", "pot-0"]),
        Combination(id="combo-2", name="Ash + Raigeki", card_ids=["ash-1", "raigeki-0"]),
        Combination(id="combo-3", name="Board Wipe", card_ids=["hole-0"]),
    ]
