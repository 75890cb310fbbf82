"""
Prime implicant chart: essential implicants and minimal covers.

The exhaustive search enumerates combinations of increasing size and is
bounded by `max_cover_size`. When the bound is hit, a weighted MaxSAT
formulation (one soft clause per candidate) still yields a single
minimum-cardinality cover.
"""

from itertools import combinations
from typing import Iterable

from pysat.formula import WCNF
from pysat.examples.rc2 import RC2

from .quine_mccluskey import Implicant

DEFAULT_MAX_COVER_SIZE = 6


def build_coverage_chart(
    primes: list[Implicant],
    true_minterms: Iterable[int],
) -> dict[int, list[int]]:
    """
    Map each true minterm to the indices of the primes covering it.

    Don't-cares carry no coverage obligation and are left out of the chart.
    """
    chart = {m: [] for m in sorted(true_minterms)}

    for i, impl in enumerate(primes):
        for m in impl.covered:
            if m in chart:
                chart[m].append(i)

    return chart


def extract_essentials(
    primes: list[Implicant],
    true_minterms: Iterable[int],
) -> tuple[list[Implicant], list[int]]:
    """
    Find essential prime implicants.

    Returns:
        Tuple of (essentials in prime order, sorted minterms not covered
        by any essential)
    """
    chart = build_coverage_chart(primes, true_minterms)

    essential_idx = sorted({
        coverers[0] for coverers in chart.values() if len(coverers) == 1
    })
    essentials = [primes[i] for i in essential_idx]

    covered = set()
    for impl in essentials:
        covered |= impl.covered

    uncovered = [m for m in chart if m not in covered]
    return essentials, uncovered


def _candidates(
    primes: list[Implicant],
    essentials: list[Implicant],
    uncovered: frozenset[int],
) -> list[tuple[Implicant, frozenset[int]]]:
    """Non-essential primes paired with the uncovered minterms they cover."""
    essential_set = set(essentials)
    result = []
    for impl in primes:
        if impl in essential_set:
            continue
        useful = impl.covered & uncovered
        if useful:
            result.append((impl, useful))
    return result


def find_minimal_covers(
    primes: list[Implicant],
    essentials: list[Implicant],
    uncovered: Iterable[int],
    max_cover_size: int = DEFAULT_MAX_COVER_SIZE,
) -> list[list[Implicant]]:
    """
    Find every minimum-size completion of the essential implicants.

    Combinations of non-essential candidates are tried by increasing size
    k; the first k with any full cover is minimal, and all covers of that
    size are returned as `essentials + combination`.

    Returns:
        List of solutions, or an empty list if no cover of at most
        `max_cover_size` additional terms exists
    """
    target = frozenset(uncovered)
    if not target:
        return [list(essentials)]

    candidates = _candidates(primes, essentials, target)
    limit = min(max_cover_size, len(candidates))

    for k in range(1, limit + 1):
        solutions = []
        for combo in combinations(candidates, k):
            reached = frozenset().union(*(useful for _, useful in combo))
            if reached == target:
                solutions.append(list(essentials) + [impl for impl, _ in combo])
        if solutions:
            return solutions

    return []


def maxsat_minimum_cover(
    primes: list[Implicant],
    essentials: list[Implicant],
    uncovered: Iterable[int],
) -> list[Implicant]:
    """
    Find one minimum-cardinality cover with MaxSAT.

    Formulates the remaining covering problem as weighted MaxSAT where:
    - Hard clauses: every uncovered minterm must be covered
    - Soft clauses: each selected candidate costs 1
    """
    target = frozenset(uncovered)
    if not target:
        return list(essentials)

    candidates = _candidates(primes, essentials, target)

    wcnf = WCNF()

    # Variable mapping: candidate index -> SAT variable (1-indexed)
    impl_vars = {i: i + 1 for i in range(len(candidates))}

    for minterm in sorted(target):
        covering = [
            impl_vars[i]
            for i, (_, useful) in enumerate(candidates)
            if minterm in useful
        ]
        if not covering:
            raise RuntimeError(f"No implicant covers minterm {minterm}")
        wcnf.append(covering)

    for var in impl_vars.values():
        wcnf.append([-var], weight=1)

    with RC2(wcnf) as solver:
        model = solver.compute()
        if model is None:
            raise RuntimeError("MaxSAT solver found no solution")
        chosen = set(lit for lit in model if lit > 0)

    selected = [
        impl for i, (impl, _) in enumerate(candidates) if impl_vars[i] in chosen
    ]
    return list(essentials) + selected
