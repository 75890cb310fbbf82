"""
Pure Python implementation of Quine's tabulation for prime implicant generation.

Implicants are bit-fields over the minterm index:
- value: required bit values (meaningless where mask is set)
- mask: don't-care positions (1 = don't care)

Bit i of value/mask is bit i of the minterm index. Variable names are only
used for presentation: variable A is the most significant bit, so for
3 variables (A, B, C):
- Bit 2 = A (MSB)
- Bit 1 = B
- Bit 0 = C (LSB)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional

from .function import BooleanFunction


def variable_name(index: int) -> str:
    """Name of the variable at a 0-based position (0 -> A, 1 -> B, ...)."""
    return chr(ord('A') + index)


@dataclass(frozen=True, order=True)
class Implicant:
    """
    A product term with a don't-care mask.

    Equality, hashing and ordering use (mask, value) only; `covered` holds
    the original minterms/don't-cares the term subsumes and never takes
    part in comparisons. Implicants built by the generator always carry a
    non-empty `covered`; the empty default only serves lookup keys such as
    `Implicant(mask=m, value=v) in primes`.
    """

    mask: int       # Don't-care positions (1 = don't care)
    value: int      # Required values for the remaining positions
    covered: frozenset[int] = field(default=frozenset(), compare=False)

    @property
    def ones(self) -> int:
        """Number of set bits outside the don't-care mask."""
        return bin(self.value & ~self.mask).count('1')

    def covers(self, point: int) -> bool:
        """Check if this implicant contains a given input combination."""
        return (point & ~self.mask) == (self.value & ~self.mask)

    def literals(self, variable_count: int) -> list[tuple[int, bool]]:
        """(variable index, uncomplemented) pairs in ascending variable order."""
        result = []
        for var_idx in range(variable_count):
            bit = 1 << (variable_count - 1 - var_idx)
            if self.mask & bit:
                continue
            result.append((var_idx, bool(self.value & bit)))
        return result

    def num_literals(self, variable_count: int) -> int:
        return len(self.literals(variable_count))

    def as_binary_string(self, variable_count: int) -> str:
        """Tabular form, MSB first, '-' for don't-care positions."""
        chars = []
        for i in range(variable_count - 1, -1, -1):
            if (self.mask >> i) & 1:
                chars.append('-')
            else:
                chars.append('1' if (self.value >> i) & 1 else '0')
        return "".join(chars)

    def as_boolean_expression(self, variable_count: int) -> str:
        """Product term such as A'BC; a term with no literals is "1"."""
        terms = []
        for var_idx, positive in self.literals(variable_count):
            name = variable_name(var_idx)
            terms.append(name if positive else f"{name}'")
        return "".join(terms) if terms else "1"

    def __repr__(self):
        return f"Implicant(value={self.value:#b}, mask={self.mask:#b})"


def try_merge(impl1: Implicant, impl2: Implicant) -> Optional[Implicant]:
    """
    Try to merge two implicants differing in exactly one variable.

    Two implicants can merge if:
    1. They have the same don't-care mask
    2. They differ in exactly one bit position outside the mask

    Returns a new implicant with that position turned into a don't-care,
    or None if they can't merge.
    """
    if impl1.mask != impl2.mask:
        return None

    diff = (impl1.value ^ impl2.value) & ~impl1.mask

    if diff == 0 or diff & (diff - 1):
        return None

    return Implicant(
        mask=impl1.mask | diff,
        value=impl1.value & ~diff,
        covered=impl1.covered | impl2.covered,
    )


def _merge_rank(
    current: list[Implicant],
) -> tuple[dict[tuple[int, int], Implicant], set[tuple[int, int]]]:
    """
    Merge every compatible pair of one rank.

    Implicants are bucketed by mask and then by 1-count: a single-bit
    difference always separates adjacent 1-counts, so only neighbouring
    buckets of the same mask are compared.
    """
    buckets = defaultdict(lambda: defaultdict(list))
    for impl in current:
        buckets[impl.mask][impl.ones].append(impl)

    next_rank = {}
    used = set()

    for mask in sorted(buckets):
        by_ones = buckets[mask]
        for ones in sorted(by_ones):
            upper = by_ones.get(ones + 1)
            if not upper:
                continue
            for impl1 in by_ones[ones]:
                for impl2 in upper:
                    merged = try_merge(impl1, impl2)
                    if merged is None:
                        continue
                    key = (merged.value, merged.mask)
                    existing = next_rank.get(key)
                    if existing is not None:
                        merged = Implicant(
                            mask=merged.mask,
                            value=merged.value,
                            covered=existing.covered | merged.covered,
                        )
                    next_rank[key] = merged
                    used.add((impl1.value, impl1.mask))
                    used.add((impl2.value, impl2.mask))

    return next_rank, used


def generate_prime_implicants(function: BooleanFunction) -> list[Implicant]:
    """
    Run Quine's tabulation to find all prime implicants.

    Args:
        function: The Boolean function; its minterms and don't-cares are
            the rank 0 implicants

    Returns:
        Prime implicants sorted by (mask, value), without duplicates.
        Primes that only cover don't-cares are kept; the cover solver
        never selects them.
    """
    current = [
        Implicant(mask=0, value=point, covered=frozenset((point,)))
        for point in sorted(function.care_points)
    ]

    primes = {}

    while current:
        current.sort(key=lambda impl: (impl.ones, impl.mask, impl.value))
        next_rank, used = _merge_rank(current)

        for impl in current:
            key = (impl.value, impl.mask)
            if key not in used and key not in primes:
                primes[key] = impl

        current = list(next_rank.values())

    return sorted(primes.values())
