"""Hypergeometric probability primitives.

All functions here are pure and deterministic. Binomial coefficients are
computed with an exact integer multiply/divide recurrence, so probabilities
are formed as a single ratio of Python integers and stay exact up to the
final float rounding even for decks in the low thousands.

Degenerate inputs (more successes than the population holds, samples larger
than the population, negative counts) never raise. They resolve to 0 or 1
through the binomial guards instead of producing NaN or a division by zero.
"""

from collections.abc import Iterable


def binomial_coefficient(n: int, k: int) -> int:
    """Number of ways to choose k items from n.

    Returns 0 when k < 0 or k > n and 1 when k is 0 or n. Otherwise uses the
    recurrence ``result = result * (n - (k - i)) / i`` for i = 1..k; each
    partial product is a binomial coefficient itself, so the integer division
    is exact.
    """
    if k < 0 or k > n:
        return 0
    if k == 0 or k == n:
        return 1

    result = 1
    for i in range(1, k + 1):
        result = result * (n - (k - i)) // i
    return result


def _clamp(probability: float) -> float:
    return max(0.0, min(1.0, probability))


def hypergeometric_probability(
    population_size: int,
    successes_in_population: int,
    sample_size: int,
    successes_in_sample: int,
) -> float:
    """Probability of exactly k successes in a sample drawn without replacement.

    Computes ``C(K, k) * C(N - K, n - k) / C(N, n)``.

    Args:
        population_size: N, the deck size.
        successes_in_population: K, copies of the target card in the deck.
        sample_size: n, the number of cards drawn.
        successes_in_sample: k, copies of the target card in the hand.

    Returns:
        Probability in [0, 1]. Returns 0.0 when no sample of size n exists.
    """
    total_ways = binomial_coefficient(population_size, sample_size)
    if total_ways == 0:
        return 0.0

    success_ways = binomial_coefficient(successes_in_population, successes_in_sample)
    failure_ways = binomial_coefficient(
        population_size - successes_in_population,
        sample_size - successes_in_sample,
    )
    return _clamp(success_ways * failure_ways / total_ways)


def hypergeometric_at_least(
    population_size: int,
    successes_in_population: int,
    sample_size: int,
    minimum_successes: int,
) -> float:
    """Probability of drawing at least ``minimum_successes`` target cards."""
    if minimum_successes <= 0:
        return 1.0

    upper = min(sample_size, successes_in_population)
    total = sum(
        hypergeometric_probability(
            population_size, successes_in_population, sample_size, k
        )
        for k in range(minimum_successes, upper + 1)
    )
    return _clamp(total)


def probability_of_not_drawing(count: int, deck_size: int, draw_size: int) -> float:
    """Probability that none of ``count`` copies appear in the hand."""
    if count <= 0:
        return 1.0
    return hypergeometric_probability(deck_size, count, draw_size, 0)


def probability_of_drawing(count: int, deck_size: int, draw_size: int) -> float:
    """Probability that at least one of ``count`` copies appears in the hand."""
    return _clamp(1.0 - probability_of_not_drawing(count, deck_size, draw_size))


def probability_of_drawing_all(
    counts: Iterable[int], deck_size: int, draw_size: int
) -> float:
    """Exact probability that every card type appears at least once.

    Uses the multivariate hypergeometric distribution rather than treating
    each card type as independent. By inclusion-exclusion over the set T of
    card types missing from the hand::

        P = sum over T of (-1)^|T| * C(N - K_T, n) / C(N, n)

    where K_T is the total number of copies of the types in T. Terms are
    grouped by K_T: the signed number of sets T with K_T = s is the
    coefficient of x^s in ``prod(1 - x^K_i)``, so the sum costs O(r * N)
    for r card types instead of 2^r. The card types must be disjoint
    (distinct names).

    Args:
        counts: Copies in the deck of each required card type.
        deck_size: N, the deck size.
        draw_size: n, the number of cards drawn.

    Returns:
        Probability in [0, 1]. An empty ``counts`` is vacuously 1.0.
    """
    counts = list(counts)
    if any(count <= 0 for count in counts):
        return 0.0

    total_ways = binomial_coefficient(deck_size, draw_size)
    if total_ways == 0:
        return 0.0

    # coefficients[s]: signed count of missing-type sets holding s copies.
    # Sets with more than N copies contribute C(N - s, n) = 0 and are dropped.
    coefficients = [0] * (deck_size + 1)
    coefficients[0] = 1
    for count in counts:
        for missing in range(deck_size, count - 1, -1):
            coefficients[missing] -= coefficients[missing - count]

    favourable = sum(
        coefficient * binomial_coefficient(deck_size - missing, draw_size)
        for missing, coefficient in enumerate(coefficients)
        if coefficient
    )
    return _clamp(favourable / total_ways)
