"""Pure Python validation of simulation requests.

The probability engine never rejects numeric input: degenerate deck and
draw sizes quietly resolve to 0 or 1. This validator is the caller-side
gate that catches such input before it reaches the engine and explains
what is wrong with it.
"""

from collections import Counter

from backend.core.logging_config import get_logger
from backend.models.simulation_models import SimulationRequest
from backend.models.validation_models import InputValidationResult, ValidationIssue
from backend.services.engine_config import get_engine_config
from backend.services.simulator import count_card_types

logger = get_logger(__name__)


class InputValidator:
    """Validates a SimulationRequest against the engine's preconditions.

    Typical usage:
        validator = InputValidator()
        result = validator.validate(request)
        if result.valid:
            run_request(request)
    """

    def __init__(self, max_combinations: int | None = None) -> None:
        """Initialize the validator.

        Args:
            max_combinations: Combination limit; defaults to the configured one.
        """
        if max_combinations is None:
            max_combinations = get_engine_config().max_combinations
        self.max_combinations = max_combinations

    def validate(self, request: SimulationRequest) -> InputValidationResult:
        """Validate a request.

        Args:
            request: Snapshot of cards, combinations and deck settings.

        Returns:
            InputValidationResult with valid flag, errors, and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        card_counts = count_card_types(request.cards)
        total_cards = sum(card_counts.values())

        # 1. Deck and draw sizes
        errors.extend(self._validate_sizes(request.deck_size, request.draw_size))

        # 2. Cards must fit in the deck
        if request.deck_size >= 1 and total_cards > request.deck_size:
            errors.append(
                ValidationIssue(
                    code="CARD_COUNT",
                    message=(
                        f"{total_cards} cards entered but the deck only holds "
                        f"{request.deck_size}"
                    ),
                )
            )

        # 3. Card ids must be unique
        errors.extend(self._validate_card_ids(request))

        # 4. Combination ids must be unique
        errors.extend(self._validate_combination_ids(request))

        # 5. Combination limit
        if len(request.combinations) > self.max_combinations:
            errors.append(
                ValidationIssue(
                    code="COMBINATION_LIMIT",
                    message=(
                        f"{len(request.combinations)} combinations exceed the limit "
                        f"of {self.max_combinations}"
                    ),
                )
            )

        # 6. Combination references
        warnings.extend(self._validate_combinations(request))

        # 7. Advisory deck warnings
        if not request.cards:
            warnings.append(
                ValidationIssue(
                    code="NO_CARDS",
                    message="No cards have been added to the deck",
                    severity="warning",
                )
            )
        elif total_cards < request.deck_size:
            filler = request.deck_size - total_cards
            warnings.append(
                ValidationIssue(
                    code="FILLER_CARDS",
                    message=f"{filler} unnamed cards fill the rest of the deck",
                    severity="warning",
                )
            )

        result = InputValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            card_count=total_cards,
            distinct_card_count=len(card_counts),
            deck_size=request.deck_size,
            draw_size=request.draw_size,
        )
        if not result.valid:
            logger.info(
                "Simulation request rejected",
                extra={"extra_data": {"errors": [e.code for e in errors]}},
            )
        return result

    def _validate_sizes(self, deck_size: int, draw_size: int) -> list[ValidationIssue]:
        """Check deck size is positive and draw size lies in [0, deck_size]."""
        errors: list[ValidationIssue] = []
        if deck_size < 1:
            errors.append(
                ValidationIssue(
                    code="DECK_SIZE",
                    message=f"Deck size must be at least 1, got {deck_size}",
                )
            )
        if draw_size < 0 or (deck_size >= 1 and draw_size > deck_size):
            errors.append(
                ValidationIssue(
                    code="DRAW_SIZE",
                    message=f"Draw size must be between 0 and {deck_size}, got {draw_size}",
                )
            )
        return errors

    def _validate_card_ids(self, request: SimulationRequest) -> list[ValidationIssue]:
        id_counts = Counter(card.id for card in request.cards)
        return [
            ValidationIssue(
                code="DUPLICATE_CARD_ID",
                message=f"Card id {card_id!r} is used {count} times",
                card_id=card_id,
            )
            for card_id, count in id_counts.items()
            if count > 1
        ]

    def _validate_combination_ids(
        self, request: SimulationRequest
    ) -> list[ValidationIssue]:
        """Results are keyed by combination id, so a repeated id hides a combination."""
        id_counts = Counter(combo.id for combo in request.combinations)
        return [
            ValidationIssue(
                code="DUPLICATE_COMBINATION_ID",
                message=f"Combination id {combo_id!r} is used {count} times",
                combination_id=combo_id,
            )
            for combo_id, count in id_counts.items()
            if count > 1
        ]

    def _validate_combinations(
        self, request: SimulationRequest
    ) -> list[ValidationIssue]:
        """Flag stale card references and combinations with nothing to draw."""
        warnings: list[ValidationIssue] = []
        known_ids = {card.id for card in request.cards}

        for combo in request.combinations:
            unknown = [card_id for card_id in combo.card_ids if card_id not in known_ids]
            for card_id in dict.fromkeys(unknown):
                warnings.append(
                    ValidationIssue(
                        code="UNKNOWN_CARD_ID",
                        message=f"Combination {combo.name!r} references unknown card {card_id!r}",
                        card_id=card_id,
                        combination_id=combo.id,
                        severity="warning",
                    )
                )
            if len(unknown) == len(combo.card_ids):
                warnings.append(
                    ValidationIssue(
                        code="EMPTY_COMBINATION",
                        message=(
                            f"Combination {combo.name!r} requires no cards in the deck "
                            "and can never be drawn"
                        ),
                        combination_id=combo.id,
                        severity="warning",
                    )
                )
        return warnings
