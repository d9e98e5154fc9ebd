import pytest
from hypothesis import given, strategies as st

from pyparsa.Cursor import Cursor, Span


def test_peek_does_not_advance(cursor):
    c = cursor("ab")
    assert c.peek() == "a"
    assert c.peek() == "a"
    assert c.pos == 0


def test_peek_at_end_is_none(cursor):
    c = cursor("")
    assert c.peek() is None
    assert c.is_eof


def test_advance_and_rest(cursor):
    c = cursor("abc123")
    c.advance(2)
    assert c.rest == "c123"
    assert len(c) == 4
    assert c.pos == 2


def test_advance_past_end_raises(cursor):
    c = cursor("ab")
    with pytest.raises(ValueError):
        c.advance(3)
    assert c.pos == 0


def test_take_splits_front(cursor):
    c = cursor("abc123")
    assert c.take(3) == "abc"
    assert c.take(3) == "123"
    assert c.is_eof


def test_try_take_without_enough_input(cursor):
    c = cursor("abc123")
    assert c.try_take(5) == "abc12"
    assert c.try_take(5) is None
    assert c.pos == 5


def test_save_restore(cursor):
    c = cursor("abc123")
    mark = c.save()
    c.take(3)
    c.restore(mark)
    assert c.take(3) == "abc"
    assert c.take(3) == "123"


def test_restore_outside_input_raises(cursor):
    c = cursor("abc")
    with pytest.raises(ValueError):
        c.restore(4)


def test_slice_from_is_a_view(cursor):
    c = cursor("hello world")
    mark = c.save()
    c.advance(5)
    span = c.slice_from(mark)
    assert isinstance(span, Span)
    assert span.source is c.source
    assert (span.start, span.end) == (0, 5)
    assert span == "hello"
    assert str(span) == "hello"


def test_multibyte_characters(cursor):
    text = "🗻∈🌏"
    c = cursor(text)
    assert c.rest == text
    assert c.take(1) == "🗻"
    assert c.peek() == "∈"


def test_line_col(cursor):
    c = cursor("ab\ncd\nef")
    assert c.line_col(0) == (1, 1)
    assert c.line_col(4) == (2, 2)
    assert c.line_col(6) == (3, 1)


def test_str_shows_remaining_input(cursor):
    c = cursor("val = 123")
    c.advance(6)
    assert str(c) == "123"
    assert "pos=6" in repr(c)


def test_span_equality_and_hash():
    a = Span("abab", 0, 2)
    b = Span("abab", 2, 4)
    assert a == b
    assert hash(a) == hash(b) == hash("ab")
    assert a != "ba"
    assert len(a) == 2


def test_invalid_span_rejected():
    with pytest.raises(ValueError):
        Span("abc", 2, 1)


@given(st.text(), st.data())
def test_span_round_trip(text, data):
    start = data.draw(st.integers(min_value=0, max_value=len(text)))
    end = data.draw(st.integers(min_value=start, max_value=len(text)))
    c = Cursor(text, start)
    c.advance(end - start)
    span = c.slice_from(start)
    assert text[span.start:span.end] == span.text
    assert len(span) == end - start
