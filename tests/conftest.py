import pytest

from quine_minimizer import BooleanFunction


@pytest.fixture
def cyclic_function():
    """3-variable function whose prime implicant chart is a 6-cycle."""
    return BooleanFunction(3, {0, 1, 2, 5, 6, 7})


@pytest.fixture
def evens_function():
    return BooleanFunction(4, {0, 2, 4, 6, 8, 10, 12, 14})
