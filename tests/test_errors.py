import pytest
from hypothesis import given, strategies as st

from pyparsa.Builtins import TakeError, TakeFailure, WordError, take, whitespace, word
from pyparsa.Cursor import Cursor
from pyparsa.Errors import (
    ConversionError, ErrorUnion, Infallible, InfallibleViolation,
    absorbs, can_convert, coerce, conversion, register_conversion, unregister_conversion,
)
from pyparsa.Parser import Err, Ok, Parser


@absorbs(WordError, TakeError)
class LineError(ErrorUnion):
    pass


class Unrelated(Exception):
    pass


class Code:
    """A non-exception error type."""

    def __init__(self, n):
        self.n = n

    def __eq__(self, other):
        return isinstance(other, Code) and other.n == self.n


@conversion(TakeError, Code)
def take_to_code(err):
    return Code(len(err.expected))


# --- Declaring and checking edges ---

def test_absorbs_declares_edges():
    assert can_convert(WordError, LineError)
    assert can_convert(TakeError, LineError)
    assert not can_convert(Unrelated, LineError)


def test_edges_are_one_directional():
    assert not can_convert(LineError, WordError)


def test_identity_and_subclass_need_no_edge():
    assert can_convert(WordError, WordError)
    assert can_convert(LineError, ErrorUnion)
    assert can_convert(WordError, object)


def test_infallible_converts_into_anything():
    assert can_convert(Infallible, WordError)
    assert can_convert(Infallible, Unrelated)
    assert can_convert(Infallible, Code)


def test_infallible_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Infallible()


def test_edges_do_not_chain():
    class Outer(ErrorUnion):
        pass

    register_conversion(LineError, Outer)
    try:
        assert can_convert(LineError, Outer)
        assert not can_convert(WordError, Outer)
    finally:
        unregister_conversion(LineError, Outer)
    assert not can_convert(LineError, Outer)


def test_edge_found_through_subclass_of_source():
    class SpecialWordError(WordError):
        pass

    assert can_convert(SpecialWordError, LineError)
    wrapped = coerce(SpecialWordError(), LineError)
    assert isinstance(wrapped, LineError)
    assert wrapped.variant is SpecialWordError


def test_registering_infallible_is_rejected():
    with pytest.raises(ValueError):
        register_conversion(Infallible, LineError)


# --- Applying edges ---

def test_coerce_wraps_cause():
    err = coerce(WordError(), LineError)
    assert err == LineError(WordError())
    assert err.cause == WordError()
    assert err.__cause__ == WordError()
    assert str(err) == str(WordError())


def test_coerce_with_custom_function():
    assert coerce(TakeError("let"), Code) == Code(3)


def test_coerce_passes_through_matching_type():
    err = WordError()
    assert coerce(err, WordError) is err


def test_coerce_without_edge_raises():
    with pytest.raises(ConversionError) as info:
        coerce(Unrelated(), LineError)
    assert info.value.source is Unrelated
    assert info.value.target is LineError
    assert isinstance(info.value, TypeError)


# --- convert_err ---

def test_convert_err_retargets_type_and_value(cursor):
    p = word.convert_err(LineError)
    assert p.err_type is LineError
    c = cursor("  x")
    res = p(c)
    assert res == Err(LineError(WordError()), 0)
    assert c.pos == 0


def test_convert_err_leaves_success_alone(cursor):
    c = cursor("abc def")
    assert word.convert_err(LineError)(c).value == "abc"
    assert c.pos == 3


def test_convert_err_without_edge_fails_when_built():
    with pytest.raises(ConversionError):
        word.convert_err(Unrelated)


def test_convert_err_from_infallible():
    p = whitespace.convert_err(LineError)
    assert p.err_type is LineError
    assert p.run("   ") == Ok(3)


def test_infallible_parser_that_fails_is_an_invariant_violation():
    liar = Parser(lambda c: Err("boom"), Infallible, "liar")
    with pytest.raises(InfallibleViolation):
        liar.convert_err(LineError).run("")


def test_undeclared_error_type_is_checked_when_it_fails():
    p = Parser(lambda c: Err(Unrelated()), name="loose").convert_err(LineError)
    with pytest.raises(ConversionError):
        p.run("x")


# --- Coherence ---

adaptable = st.sampled_from([word, take("="), take("ab")])


@given(adaptable, st.text(max_size=5))
def test_conversion_is_coherent(p, text):
    original = p(Cursor(text))
    converted = p.convert_err(LineError)(Cursor(text))
    if original:
        assert converted == original
    else:
        assert isinstance(converted, Err)
        assert converted.error == coerce(original.error, LineError)
        assert converted.error.cause == original.error
        assert converted.pos == original.pos


@given(st.text(max_size=5))
def test_take_conversion_to_non_exception_type(text):
    res = take("abc").convert_err(Code)(Cursor(text))
    if not res:
        assert res.error == Code(3)


def test_take_kind_survives_conversion():
    res = take("abc").convert_err(LineError).run("x")
    assert res.error.cause.kind is TakeFailure.NO_SPACE
