"""
Two-level minimization of a single Boolean function.

Composes the three phases:
1. Quine's tabulation for prime implicants
2. Essential prime implicant extraction
3. Exhaustive minimal cover search, with a MaxSAT fallback once the
   search bound is exceeded
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .cover import (
    DEFAULT_MAX_COVER_SIZE,
    extract_essentials,
    find_minimal_covers,
    maxsat_minimum_cover,
)
from .function import BooleanFunction
from .quine_mccluskey import Implicant, generate_prime_implicants


class CoverStatus(str, Enum):
    """How complete `MinimizationResult.minimal_solutions` is."""

    EXACT = "exact"                 # every minimal cover is listed
    CAP_EXCEEDED = "cap_exceeded"   # search stopped at max_cover_size


@dataclass
class MinimizationResult:
    """Result of minimizing one function."""

    variable_count: int
    prime_implicants: list[Implicant]
    essential_implicants: list[Implicant]
    uncovered_minterms: list[int]
    minimal_solutions: list[list[Implicant]]
    status: CoverStatus = CoverStatus.EXACT
    max_cover_size: int = DEFAULT_MAX_COVER_SIZE
    # One minimum cover found by MaxSAT when the exhaustive search gave up
    maxsat_solution: Optional[list[Implicant]] = None

    @property
    def has_solution(self) -> bool:
        return bool(self.minimal_solutions) or self.maxsat_solution is not None

    @property
    def num_terms(self) -> Optional[int]:
        """Term count of the minimal form, or None if none was found."""
        if self.minimal_solutions:
            return len(self.minimal_solutions[0])
        if self.maxsat_solution is not None:
            return len(self.maxsat_solution)
        return None

    def solution(self, index: int = 0) -> list[Implicant]:
        """
        Select a minimal solution by 0-based index.

        Falls back to the MaxSAT cover when the exhaustive search produced
        no solutions.
        """
        if self.minimal_solutions:
            if not 0 <= index < len(self.minimal_solutions):
                raise ValueError(
                    f"Solution index {index} out of range "
                    f"(found {len(self.minimal_solutions)} solutions)"
                )
            return self.minimal_solutions[index]

        if self.maxsat_solution is not None and index == 0:
            return self.maxsat_solution

        raise ValueError("No minimal solution available")


def minimize(
    function: BooleanFunction,
    max_cover_size: int = DEFAULT_MAX_COVER_SIZE,
    use_maxsat: bool = True,
) -> MinimizationResult:
    """
    Minimize a Boolean function to sum-of-products form.

    Args:
        function: Validated function to minimize
        max_cover_size: Largest number of non-essential terms the
            exhaustive search tries
        use_maxsat: If True, compute one minimum cover with MaxSAT when
            the exhaustive search exceeds max_cover_size

    Returns:
        MinimizationResult; a function with no minterms yields the single
        empty solution (constant 0)
    """
    primes = generate_prime_implicants(function)
    essentials, uncovered = extract_essentials(primes, function.minterms)
    solutions = find_minimal_covers(primes, essentials, uncovered, max_cover_size)

    status = CoverStatus.EXACT
    fallback = None
    if not solutions:
        status = CoverStatus.CAP_EXCEEDED
        if use_maxsat:
            fallback = maxsat_minimum_cover(primes, essentials, uncovered)

    return MinimizationResult(
        variable_count=function.variable_count,
        prime_implicants=primes,
        essential_implicants=essentials,
        uncovered_minterms=uncovered,
        minimal_solutions=solutions,
        status=status,
        max_cover_size=max_cover_size,
        maxsat_solution=fallback,
    )
