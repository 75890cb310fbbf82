"""
Verification of minimization results.

Ensures every solution evaluates to the function's minterms on the whole
input space; don't-care points may evaluate either way.
"""

from .function import BooleanFunction
from .quine_mccluskey import Implicant
from .solver import MinimizationResult


def evaluate_sop(implicants: list[Implicant], point: int) -> bool:
    """Evaluate a sum-of-products on a specific input (OR of AND terms)."""
    return any(impl.covers(point) for impl in implicants)


def verify_solution(
    function: BooleanFunction,
    solution: list[Implicant],
) -> tuple[bool, list[str]]:
    """
    Verify that a sum-of-products reproduces a function.

    Args:
        function: The function the solution must reproduce
        solution: The product terms to check

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = []
    width = function.variable_count

    for point in range(function.size):
        if point in function.dont_cares:
            continue

        actual = evaluate_sop(solution, point)
        expected = point in function.minterms

        if actual != expected:
            errors.append(
                f"Point {point} ({point:0{width}b}): "
                f"expected {int(expected)}, got {int(actual)}"
            )

    return len(errors) == 0, errors


def verify_result(
    function: BooleanFunction,
    result: MinimizationResult,
) -> tuple[bool, list[str]]:
    """
    Verify every solution carried by a minimization result.

    Checks each minimal solution (and the MaxSAT cover, if present) and
    that all minimal solutions have the same number of terms.
    """
    errors = []

    for i, solution in enumerate(result.minimal_solutions, start=1):
        _, solution_errors = verify_solution(function, solution)
        errors.extend(f"Solution {i}: {err}" for err in solution_errors)

    sizes = {len(solution) for solution in result.minimal_solutions}
    if len(sizes) > 1:
        errors.append(f"Minimal solutions differ in size: {sorted(sizes)}")

    if result.maxsat_solution is not None:
        _, solution_errors = verify_solution(function, result.maxsat_solution)
        errors.extend(f"MaxSAT solution: {err}" for err in solution_errors)

    return len(errors) == 0, errors
