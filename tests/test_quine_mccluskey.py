import random
from itertools import product

import pytest

from quine_minimizer import BooleanFunction, Implicant, generate_prime_implicants
from quine_minimizer.quine_mccluskey import try_merge, variable_name


def brute_force_primes(function: BooleanFunction) -> set[tuple[int, int]]:
    """All maximal cubes inside the care set, as (value, mask) pairs."""
    n = function.variable_count
    care = function.care_points

    def points(value, mask):
        return {p for p in range(1 << n) if (p & ~mask) == (value & ~mask)}

    implicants = set()
    for digits in product("01-", repeat=n):
        value = mask = 0
        for i, d in enumerate(reversed(digits)):
            if d == "-":
                mask |= 1 << i
            elif d == "1":
                value |= 1 << i
        if points(value, mask) <= care:
            implicants.add((value, mask))

    primes = set()
    for value, mask in implicants:
        maximal = True
        for i in range(n):
            bit = 1 << i
            if not mask & bit and (value & ~bit, mask | bit) in implicants:
                maximal = False
                break
        if maximal:
            primes.add((value, mask))
    return primes


def test_variable_names():
    assert variable_name(0) == "A"
    assert variable_name(3) == "D"
    assert variable_name(19) == "T"


def test_try_merge_single_bit_difference():
    a = Implicant(mask=0, value=0b010, covered=frozenset({2}))
    b = Implicant(mask=0, value=0b011, covered=frozenset({3}))

    merged = try_merge(a, b)

    assert merged == Implicant(mask=0b001, value=0b010)
    assert merged.covered == {2, 3}


@pytest.mark.parametrize("a,b", [
    (Implicant(mask=0b001, value=0b000), Implicant(mask=0b010, value=0b001)),
    (Implicant(mask=0, value=0b000), Implicant(mask=0, value=0b011)),
    (Implicant(mask=0, value=0b101), Implicant(mask=0, value=0b101)),
])
def test_try_merge_rejects(a, b):
    assert try_merge(a, b) is None


def test_equality_ignores_covered():
    a = Implicant(mask=1, value=2, covered=frozenset({2, 3}))
    b = Implicant(mask=1, value=2, covered=frozenset({3}))
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_ordering_is_mask_then_value():
    impls = [
        Implicant(mask=0b10, value=0b01),
        Implicant(mask=0b01, value=0b10),
        Implicant(mask=0b01, value=0b00),
    ]
    assert sorted(impls) == [impls[2], impls[1], impls[0]]


def test_views():
    impl = Implicant(mask=0b0100, value=0b1001)
    assert impl.as_binary_string(4) == "1-01"
    assert impl.as_boolean_expression(4) == "AC'D"
    assert impl.literals(4) == [(0, True), (2, False), (3, True)]
    assert impl.num_literals(4) == 3
    assert impl.covers(0b1101)
    assert impl.covers(0b1001)
    assert not impl.covers(0b1011)


def test_empty_function_has_no_primes():
    assert generate_prime_implicants(BooleanFunction(2)) == []


def test_tautology_prime():
    primes = generate_prime_implicants(BooleanFunction(1, {0, 1}))

    assert primes == [Implicant(mask=0b1, value=0)]
    assert primes[0].covered == {0, 1}
    assert primes[0].as_boolean_expression(1) == "1"


def test_all_even_minterms(evens_function):
    primes = generate_prime_implicants(evens_function)

    assert primes == [Implicant(mask=0b1110, value=0)]
    assert primes[0].covered == evens_function.minterms
    assert primes[0].as_boolean_expression(4) == "D'"


def test_cyclic_primes(cyclic_function):
    primes = generate_prime_implicants(cyclic_function)

    assert [(p.mask, p.value) for p in primes] == [
        (0b001, 0b000),
        (0b001, 0b110),
        (0b010, 0b000),
        (0b010, 0b101),
        (0b100, 0b001),
        (0b100, 0b010),
    ]
    assert [sorted(p.covered) for p in primes] == [
        [0, 1], [6, 7], [0, 2], [5, 7], [1, 5], [2, 6],
    ]


def test_dont_care_only_prime_is_kept():
    primes = generate_prime_implicants(BooleanFunction(2, {0}, {3}))
    assert set(primes) == {Implicant(mask=0, value=0), Implicant(mask=0, value=3)}


@pytest.mark.parametrize("seed", range(20))
def test_matches_brute_force(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 4)
    points = list(range(1 << n))
    rng.shuffle(points)
    n_on = rng.randint(0, len(points))
    n_dc = rng.randint(0, len(points) - n_on)
    function = BooleanFunction(n, points[:n_on], points[n_on:n_on + n_dc])

    primes = generate_prime_implicants(function)

    assert {(p.value, p.mask) for p in primes} == brute_force_primes(function)
    assert primes == sorted(set(primes))
    for p in primes:
        cube = {x for x in range(1 << n) if p.covers(x)}
        assert p.covered == cube & function.care_points


def test_generation_is_repeatable():
    first = BooleanFunction(4, [15, 3, 7, 1, 0, 9], [11, 2])
    second = BooleanFunction(4, [0, 1, 3, 7, 9, 15], [2, 11])

    primes1 = generate_prime_implicants(first)
    primes2 = generate_prime_implicants(second)

    assert primes1 == primes2
    assert [p.covered for p in primes1] == [p.covered for p in primes2]
    assert generate_prime_implicants(first) == primes1


def test_generated_implicants_cover_something(cyclic_function):
    primes = generate_prime_implicants(cyclic_function)
    assert all(p.covered for p in primes)
    assert Implicant(mask=0b001, value=0b000) in primes
