"""
Boolean function descriptions and the text loader that builds them.

Input format (blank lines and '#' comments are ignored):

    3               <- number of variables (1-20)
    m0,m1,m2,m5     <- minterms, or maxterms written M0,M3,...
    d7              <- optional don't-cares

With maxterm notation the true points are every index that is neither a
maxterm nor a don't-care.
"""

from dataclasses import dataclass, field
from pathlib import Path

MIN_VARIABLES = 1
MAX_VARIABLES = 20


class FunctionFormatError(ValueError):
    """Raised when a function description is malformed or inconsistent."""


@dataclass(frozen=True)
class BooleanFunction:
    """
    A completely or incompletely specified single-output Boolean function.

    Sets are stored as frozensets so instances can be shared freely. The
    loader guarantees that minterms and don't-cares are disjoint and lie in
    [0, 2**variable_count).
    """

    variable_count: int
    minterms: frozenset[int] = field(default_factory=frozenset)
    dont_cares: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "minterms", frozenset(self.minterms))
        object.__setattr__(self, "dont_cares", frozenset(self.dont_cares))

    @property
    def size(self) -> int:
        """Number of points in the input space."""
        return 1 << self.variable_count

    @property
    def care_points(self) -> frozenset[int]:
        """Minterms and don't-cares together (the rank 0 implicants)."""
        return self.minterms | self.dont_cares

    @property
    def maxterms(self) -> frozenset[int]:
        return frozenset(range(self.size)) - self.care_points


def _parse_count(line: str) -> int:
    try:
        count = int(line)
    except ValueError:
        raise FunctionFormatError(f"Invalid variable count: {line!r}") from None

    if not MIN_VARIABLES <= count <= MAX_VARIABLES:
        raise FunctionFormatError(
            f"Variable count must be between {MIN_VARIABLES} and "
            f"{MAX_VARIABLES}, got {count}"
        )
    return count


def _parse_terms(line: str, size: int) -> tuple[str, set[int]]:
    """Parse one comma-separated term list, returning (prefix, indices)."""
    prefix = None
    indices = set()

    for token in line.split(","):
        token = token.strip()
        if not token:
            continue

        kind, digits = token[0], token[1:].strip()
        if kind not in ("m", "M", "d"):
            raise FunctionFormatError(
                f"Unknown term {token!r} (expected m<i>, M<i> or d<i>)"
            )
        if prefix is None:
            prefix = kind
        elif kind != prefix:
            raise FunctionFormatError(
                f"Mixed notation in one line: {prefix!r} and {kind!r}"
            )

        try:
            index = int(digits)
        except ValueError:
            raise FunctionFormatError(f"Invalid term index: {token!r}") from None

        if not 0 <= index < size:
            raise FunctionFormatError(
                f"Term {token!r} out of range [0, {size - 1}]"
            )
        indices.add(index)

    if prefix is None:
        raise FunctionFormatError(f"Empty term list: {line!r}")

    return prefix, indices


def parse_function(text: str) -> BooleanFunction:
    """
    Parse a function description.

    Args:
        text: Description in the format documented at module level

    Returns:
        The validated BooleanFunction

    Raises:
        FunctionFormatError: if the description is malformed, out of range
            or inconsistent
    """
    lines = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if line:
            lines.append(line)

    if not lines:
        raise FunctionFormatError("Missing variable count")

    variable_count = _parse_count(lines[0])
    size = 1 << variable_count

    true_points = None
    maxterm_notation = False
    dont_cares = None

    for line in lines[1:]:
        prefix, indices = _parse_terms(line, size)
        if prefix == "d":
            if dont_cares is not None:
                raise FunctionFormatError("Don't-cares given more than once")
            dont_cares = indices
        else:
            if true_points is not None:
                raise FunctionFormatError("Minterms/maxterms given more than once")
            true_points = indices
            maxterm_notation = prefix == "M"

    true_points = true_points or set()
    dont_cares = dont_cares or set()

    overlap = true_points & dont_cares
    if overlap:
        kind = "maxterms" if maxterm_notation else "minterms"
        raise FunctionFormatError(
            f"Indices listed as both {kind} and don't-cares: "
            f"{', '.join(str(i) for i in sorted(overlap))}"
        )

    if maxterm_notation:
        minterms = set(range(size)) - true_points - dont_cares
    else:
        minterms = true_points

    return BooleanFunction(variable_count, minterms, dont_cares)


def load_function(path) -> BooleanFunction:
    """Read and parse a function description file."""
    return parse_function(Path(path).read_text())
