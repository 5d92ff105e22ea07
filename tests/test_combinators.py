import pytest
from hypothesis import given, strategies as st

from kappa.errors import KappaSyntaxError
from kappa.reader.combinators import (
    Forward,
    and_then,
    any_char,
    any_of,
    char,
    describe,
    digit,
    end_of_input,
    excluding,
    fmap,
    labelled,
    lift,
    lift_lazy,
    many,
    map_err,
    one_or_more,
    recursive,
    sequence,
    succeed,
    surrounded,
    uint,
    word,
    ws,
)
from kappa.types.result import Err, Ok


def failing(tag):
    return lambda source: Err(KappaSyntaxError(f"fail {tag}", source))


SAMPLE_PARSERS = [
    char("a"),
    word("ab"),
    uint,
    digit,
    ws,
    any_char,
    excluding("a", any_char),
    succeed("x"),
    failing("p"),
    any_of([char("a"), char("b")]),
]

inputs = st.text(alphabet="ab12 \n\"", max_size=20)
parsers = st.sampled_from(SAMPLE_PARSERS)


# ----------------------
# Character level
# ----------------------

def test_any_char():
    assert any_char("ab") == Ok(("b", "a"))
    result = any_char("")
    assert isinstance(result, Err)
    assert result.error.message == "expected char found empty string"


def test_char_matches_exactly():
    assert char("a")("abc") == Ok(("bc", "a"))
    result = char("a")("xbc")
    assert isinstance(result, Err)
    assert result.error.remaining == "xbc"
    assert "end of input" in char("a")("").error.message


def test_word():
    assert word("true")("true!") == Ok(("!", "true"))
    result = word("true")("trux")
    assert result == Err(KappaSyntaxError("expected 'true' found 'trux'", "trux"))


@pytest.mark.parametrize(
    "source, expected",
    [
        ("0", Ok(("", 0))),
        ("7", Ok(("", 7))),
        ("123abc", Ok(("abc", 123))),
        ("007", Ok(("", 7))),
    ],
)
def test_uint(source, expected):
    assert uint(source) == expected


def test_uint_needs_a_digit():
    assert isinstance(uint("abc"), Err)
    assert isinstance(uint(""), Err)


@given(st.integers(min_value=0, max_value=10**30))
def test_uint_reads_any_natural_number(n):
    assert uint(str(n)) == Ok(("", n))


def test_ws_spaces_and_newlines_only():
    assert ws("  \n x") == Ok(("x", "  \n "))
    assert ws("x") == Ok(("x", ""))
    assert ws("") == Ok(("", ""))
    assert ws("\tx") == Ok(("\tx", ""))


def test_end_of_input():
    assert end_of_input("") == Ok(("", None))
    assert end_of_input("x").error.remaining == "x"


# ----------------------
# Combinators
# ----------------------

def test_fmap_transforms_success_only():
    assert fmap(lambda n: n * 2, uint)("21") == Ok(("", 42))
    assert fmap(lambda n: n * 2, uint)("x") == uint("x")


def test_and_then_chooses_next_parser_from_value():
    parser = and_then(lambda n: word("x" * n), digit)
    assert parser("3xxx!") == Ok(("!", "xxx"))
    assert isinstance(parser("3xx!"), Err)
    assert parser("q") == digit("q")


def test_map_err_sees_original_input():
    parser = map_err(lambda source, _: KappaSyntaxError("custom", source), char("a"))
    assert parser("bcd") == Err(KappaSyntaxError("custom", "bcd"))
    assert parser("abc") == Ok(("bc", "a"))


def test_lift_consumes_nothing():
    assert lift(Ok(5))("abc") == Ok(("abc", 5))
    error = KappaSyntaxError("nope", "")
    assert lift(Err(error))("abc") == Err(error)


def test_lift_lazy_runs_at_parse_time():
    calls = []
    parser = lift_lazy(lambda: calls.append(1) or Ok("v"))
    assert calls == []
    assert parser("s") == Ok(("s", "v"))
    assert calls == [1]


def test_sequence_collects_values_in_order():
    assert sequence([char("a"), char("b")])("abc") == Ok(("c", ["a", "b"]))
    assert sequence([])("x") == Ok(("x", []))


def test_sequence_aborts_on_first_failure():
    result = sequence([char("a"), char("b"), failing("never")])("acb")
    assert isinstance(result, Err)
    assert result.error.remaining == "cb"


def test_any_of_first_success_wins():
    assert any_of([char("a"), word("ab")])("abc") == Ok(("bc", "a"))
    assert any_of([word("ab"), char("a")])("abc") == Ok(("c", "ab"))


def test_any_of_without_alternatives_fails():
    assert any_of([])("abc") == Err(KappaSyntaxError("no alternatives to choose from", "abc"))
    assert many(any_of([]))("abc") == Ok(("abc", []))


def test_any_of_retries_from_same_input():
    parser = any_of([sequence([char("a"), char("x")]), fmap(lambda c: [c], char("a"))])
    assert parser("ab") == Ok(("b", ["a"]))


def test_many():
    assert many(char("a"))("aaab") == Ok(("b", ["a", "a", "a"]))
    assert many(char("a"))("") == Ok(("", []))
    assert many(char("a"))("b") == Ok(("b", []))


def test_many_stops_on_empty_success():
    assert many(succeed(1))("abc") == Ok(("abc", [1]))


def test_one_or_more():
    assert one_or_more(char("a"))("aab") == Ok(("b", ["a", "a"]))
    result = one_or_more(char("a"))("b")
    assert result == Err(KappaSyntaxError("expected one or more of 'a' but got 0", "b"))


def test_excluding():
    assert excluding('"', any_char)('x"') == Ok(('"', "x"))
    assert isinstance(excluding('"', any_char)('"x'), Err)
    assert isinstance(excluding('"', any_char)(""), Err)


def test_surrounded_keeps_middle_value():
    parser = surrounded(char("("), char(")"), uint)
    assert parser("(12)rest") == Ok(("rest", 12))
    assert isinstance(parser("(12"), Err)
    assert isinstance(parser("12)"), Err)


def test_recursive_builds_parser_at_parse_time():
    built = []

    def build():
        built.append(True)
        return char("a")

    parser = recursive(build)
    assert built == []
    assert parser("ab") == Ok(("b", "a"))
    assert parser("ab") == Ok(("b", "a"))
    assert built == [True, True]


def test_forward_allows_self_reference():
    nested = Forward("nested")
    nested.define(
        any_of([fmap(lambda inner: inner + 1, surrounded(char("("), char(")"), nested)), succeed(0)])
    )
    assert nested("((()))") == Ok(("", 3))
    assert nested("x") == Ok(("x", 0))


def test_forward_must_be_defined_once():
    slot = Forward("slot")
    with pytest.raises(ValueError):
        slot("x")
    slot.define(char("x"))
    with pytest.raises(ValueError):
        slot.define(char("y"))


def test_describe_and_labelled():
    assert describe(char("a")) == "'a'"
    assert describe(labelled("thing", char("a"))) == "thing"
    assert describe(Forward("expression")) == "expression"
    assert describe(many(char("a"))) == "many('a')"


# ----------------------
# Properties
# ----------------------

@given(parsers, inputs)
def test_many_never_fails(parser, source):
    result = many(parser)(source)
    assert result.is_ok()
    rest, values = result.value
    assert source.endswith(rest)


@given(parsers, inputs)
def test_one_or_more_fails_iff_many_is_empty(parser, source):
    _, values = many(parser)(source).value
    assert one_or_more(parser)(source).is_err() == (values == [])


@given(st.integers(min_value=1, max_value=6), inputs)
def test_any_of_reports_last_error(n, source):
    result = any_of([failing(i) for i in range(n)])(source)
    assert result == Err(KappaSyntaxError(f"fail {n - 1}", source))
