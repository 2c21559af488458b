"""Tests for hypergeometric probability primitives."""

import itertools
import math

import pytest

from backend.services.probability import (
    binomial_coefficient,
    hypergeometric_at_least,
    hypergeometric_probability,
    probability_of_drawing,
    probability_of_drawing_all,
    probability_of_not_drawing,
)

# =============================================================================
# Test Binomial Coefficient
# =============================================================================


class TestBinomialCoefficient:
    """Tests for binomial_coefficient."""

    @pytest.mark.parametrize("n", [0, 1, 5, 40, 60])
    def test_choose_zero_and_all(self, n):
        """C(n, 0) and C(n, n) are both 1."""
        assert binomial_coefficient(n, 0) == 1
        assert binomial_coefficient(n, n) == 1

    @pytest.mark.parametrize("n, k", [(5, -1), (5, 6), (0, 1), (-3, 2)])
    def test_out_of_range_is_zero(self, n, k):
        """k < 0 or k > n gives 0."""
        assert binomial_coefficient(n, k) == 0

    @pytest.mark.parametrize("n, k", [(10, 3), (40, 5), (60, 7), (99, 40)])
    def test_symmetry(self, n, k):
        """C(n, k) equals C(n, n - k)."""
        assert binomial_coefficient(n, k) == binomial_coefficient(n, n - k)

    def test_known_values(self):
        """Matches hand-computed values."""
        assert binomial_coefficient(5, 2) == 10
        assert binomial_coefficient(40, 5) == 658008
        assert binomial_coefficient(36, 5) == 376992

    def test_large_deck_is_exact(self):
        """Stays exact for decks in the low thousands."""
        assert binomial_coefficient(2000, 700) == math.comb(2000, 700)


# =============================================================================
# Test Hypergeometric Probability
# =============================================================================


class TestHypergeometricProbability:
    """Tests for hypergeometric_probability."""

    @pytest.mark.parametrize(
        "population, successes, sample",
        [(40, 4, 5), (60, 4, 7), (30, 2, 5), (10, 10, 3), (50, 0, 6), (20, 7, 20)],
    )
    def test_distribution_sums_to_one(self, population, successes, sample):
        """Probabilities over k = 0..n sum to 1."""
        total = sum(
            hypergeometric_probability(population, successes, sample, k)
            for k in range(sample + 1)
        )
        assert total == pytest.approx(1.0, abs=1e-12)

    def test_exactly_one_of_playset_in_opening_hand(self):
        """Exactly 1 copy of a 4-of in 7 cards from 60 is ~33.63%."""
        prob = hypergeometric_probability(60, 4, 7, 1)
        assert prob == pytest.approx(0.3363, abs=0.0005)

    def test_sample_larger_than_population_is_zero(self):
        """No sample of size n exists when n > N."""
        assert hypergeometric_probability(5, 2, 6, 0) == 0.0

    def test_more_successes_than_population_does_not_raise(self):
        """K > N resolves to a bounded value instead of raising."""
        prob = hypergeometric_probability(5, 10, 2, 0)
        assert 0.0 <= prob <= 1.0

    def test_impossible_success_count_is_zero(self):
        """More successes in the sample than in the population is impossible."""
        assert hypergeometric_probability(40, 2, 5, 3) == 0.0


class TestHypergeometricAtLeast:
    """Tests for hypergeometric_at_least."""

    def test_at_least_zero_is_certain(self):
        """Drawing at least 0 copies always happens."""
        assert hypergeometric_at_least(40, 3, 5, 0) == 1.0

    def test_at_least_one_matches_complement(self):
        """P(X >= 1) equals 1 - P(X = 0)."""
        expected = 1 - hypergeometric_probability(40, 3, 5, 0)
        assert hypergeometric_at_least(40, 3, 5, 1) == pytest.approx(expected)

    def test_at_least_more_than_available(self):
        """Needing more copies than exist is impossible."""
        assert hypergeometric_at_least(40, 2, 5, 3) == 0.0


# =============================================================================
# Test Drawing Helpers
# =============================================================================


class TestProbabilityOfNotDrawing:
    """Tests for probability_of_not_drawing and probability_of_drawing."""

    def test_forty_card_deck_four_copies(self):
        """4 copies in 40 cards, drawing 5: P(at least one) = 1 - C(36,5)/C(40,5)."""
        expected = 1 - 376992 / 658008
        assert probability_of_drawing(4, 40, 5) == pytest.approx(expected, abs=1e-12)
        assert probability_of_drawing(4, 40, 5) == pytest.approx(0.4271, abs=0.001)

    def test_zero_copies_never_drawn(self):
        """A card with no copies is never drawn."""
        assert probability_of_not_drawing(0, 40, 5) == 1.0
        assert probability_of_drawing(0, 40, 5) == 0.0

    def test_zero_draw_never_draws(self):
        """Drawing no cards never draws anything."""
        assert probability_of_not_drawing(3, 40, 0) == 1.0
        assert probability_of_drawing(3, 40, 0) == 0.0

    def test_count_equal_to_deck_is_certain(self):
        """A deck made only of the card always draws it."""
        assert probability_of_drawing(40, 40, 1) == 1.0

    def test_count_above_deck_does_not_raise(self):
        """Over-specified counts resolve to certainty."""
        assert probability_of_drawing(50, 40, 5) == 1.0

    def test_draw_whole_deck(self):
        """Drawing the whole deck always finds the card."""
        assert probability_of_drawing(1, 40, 40) == pytest.approx(1.0)

    def test_monotonic_in_copies(self):
        """More copies never lower the probability."""
        probs = [probability_of_drawing(k, 40, 5) for k in range(0, 41)]
        assert all(a <= b + 1e-15 for a, b in zip(probs, probs[1:]))

    def test_monotonic_in_draw_size(self):
        """Drawing more cards never lowers the probability."""
        probs = [probability_of_drawing(3, 40, n) for n in range(0, 41)]
        assert all(a <= b + 1e-15 for a, b in zip(probs, probs[1:]))


class TestProbabilityOfDrawingAll:
    """Tests for the exact multivariate probability_of_drawing_all."""

    def test_single_type_matches_single_card(self):
        """With one card type it reduces to the at-least-one probability."""
        assert probability_of_drawing_all([4], 40, 5) == pytest.approx(
            probability_of_drawing(4, 40, 5)
        )

    def test_small_deck_by_hand(self):
        """2 A, 2 B, 2 others; draw 3.

        Hands missing A: C(4,3) = 4, missing B: 4, missing both: C(2,3) = 0.
        P = (20 - 4 - 4 + 0) / 20 = 0.6
        """
        assert probability_of_drawing_all([2, 2], 6, 3) == pytest.approx(0.6)

    def test_not_above_independent_product(self):
        """The exact joint probability is at most the independent product."""
        exact = probability_of_drawing_all([3, 2, 4], 40, 5)
        product = (
            probability_of_drawing(3, 40, 5)
            * probability_of_drawing(2, 40, 5)
            * probability_of_drawing(4, 40, 5)
        )
        assert exact <= product

    def test_missing_type_is_zero(self):
        """A required type with no copies can never be drawn."""
        assert probability_of_drawing_all([3, 0], 40, 5) == 0.0

    def test_more_types_than_draws_is_zero(self):
        """Three distinct types cannot all appear in a two-card hand."""
        assert probability_of_drawing_all([3, 3, 3], 40, 2) == pytest.approx(0.0)

    def test_empty_is_vacuous(self):
        """No requirements are trivially satisfied."""
        assert probability_of_drawing_all([], 40, 5) == 1.0

    def test_many_single_copy_types(self):
        """25 single-copy types, draw 30 of 40.

        Every required card must be in the hand, so the other five cards
        come from the 15 remaining: C(15, 5) / C(40, 30).
        """
        expected = math.comb(15, 5) / math.comb(40, 30)
        assert probability_of_drawing_all([1] * 25, 40, 30) == pytest.approx(expected)

    def test_many_types_scale_with_deck_not_subsets(self):
        """60 types in a 200-card deck; 2^60 missing-type sets would never finish."""
        result = probability_of_drawing_all([2] * 60, 200, 150)
        assert 0.0 <= result <= 1.0

    def test_matches_subset_enumeration(self):
        """Grouped sum agrees with summing over every missing-type set."""
        counts = [3, 1, 2, 4]
        deck_size, draw_size = 30, 8
        favourable = 0
        for size in range(len(counts) + 1):
            for missing in itertools.combinations(counts, size):
                favourable += (-1) ** size * math.comb(deck_size - sum(missing), draw_size)
        expected = favourable / math.comb(deck_size, draw_size)

        assert probability_of_drawing_all(counts, deck_size, draw_size) == pytest.approx(
            expected
        )
