import pytest

from quine_minimizer import BooleanFunction, FunctionFormatError, load_function, parse_function


def test_minterms_and_dont_cares():
    function = parse_function("3\nm0,m1,m2,m5\nd7\n")

    assert function == BooleanFunction(3, {0, 1, 2, 5}, {7})
    assert function.size == 8
    assert function.care_points == {0, 1, 2, 5, 7}
    assert function.maxterms == {3, 4, 6}


def test_maxterm_notation():
    function = parse_function("3\nM0, M3\nd1\n")

    assert function.minterms == {2, 4, 5, 6, 7}
    assert function.dont_cares == {1}


def test_comments_blank_lines_and_whitespace():
    text = """
    # majority of three
    3

    m3, m5 ,m6,m7,   # trailing comma
    """
    assert parse_function(text) == BooleanFunction(3, {3, 5, 6, 7})


def test_only_variable_count():
    assert parse_function("2") == BooleanFunction(2)


def test_dont_cares_without_minterms():
    assert parse_function("2\nd0,d3") == BooleanFunction(2, set(), {0, 3})


def test_duplicates_are_tolerated():
    assert parse_function("2\nm1,m1,m2").minterms == {1, 2}


def test_sets_are_frozen():
    function = BooleanFunction(2, [1, 2], [0])
    assert isinstance(function.minterms, frozenset)
    assert isinstance(function.dont_cares, frozenset)


@pytest.mark.parametrize("text,message", [
    ("", "Missing variable count"),
    ("three\nm1", "Invalid variable count"),
    ("0\nm0", "between 1 and 20"),
    ("21\nm0", "between 1 and 20"),
    ("2\nx1", "Unknown term"),
    ("2\nm1,M2", "Mixed notation"),
    ("2\nm1\nm2", "given more than once"),
    ("2\nm1\nd0\nd2", "given more than once"),
    ("2\nmx", "Invalid term index"),
    ("2\nm4", "out of range"),
    ("2\nm-1", "out of range"),
    ("2\nm1,m2\nd2", "both minterms and don't-cares: 2"),
    ("2\nM1\nd1", "both maxterms and don't-cares: 1"),
    ("2\n,,", "Empty term list"),
])
def test_rejects_malformed_input(text, message):
    with pytest.raises(FunctionFormatError, match=message):
        parse_function(text)


def test_format_error_is_value_error():
    assert issubclass(FunctionFormatError, ValueError)


def test_load_function(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("4\nm0,m2,m4,m6,m8,m10,m12,m14\n")

    function = load_function(path)

    assert function.variable_count == 4
    assert function.minterms == {0, 2, 4, 6, 8, 10, 12, 14}
