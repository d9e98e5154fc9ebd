from enum import Enum

from .Cursor import Cursor
from .Errors import Infallible, ParseFailure
from .Parser import Err, Ok, Outcome, Parser


class EndOfInput(ParseFailure):
    """`next_char` found no characters left."""

    def __init__(self):
        super().__init__()

    def __str__(self) -> str:
        return "unexpected end of input"


class WordError(ParseFailure):
    """`word` found no characters before whitespace or end of input."""

    def __init__(self):
        super().__init__()

    def __str__(self) -> str:
        return "expected a word, found no characters"


class TakeFailure(Enum):
    NO_SPACE = "ran out of input"
    NO_MATCH = "did not match"


class TakeError(ParseFailure):
    """`take` did not find its literal."""

    def __init__(self, expected: str, kind: TakeFailure = TakeFailure.NO_MATCH):
        super().__init__(expected, kind)
        self.expected = expected
        self.kind = kind

    def __str__(self) -> str:
        return f"expected {self.expected!r}: {self.kind.value}"


def _next_char(cursor: Cursor) -> Outcome:
    if cursor.is_eof:
        return Err(EndOfInput(), cursor.pos)
    return Ok(cursor.take(1))


# One character, or EndOfInput.
next_char = Parser(_next_char, EndOfInput, "next_char")


def _word(cursor: Cursor) -> Outcome:
    mark = cursor.save()
    c = cursor.peek()
    while c is not None and not c.isspace():
        cursor.advance()
        c = cursor.peek()
    if cursor.pos == mark:
        cursor.restore(mark)
        return Err(WordError(), mark)
    return Ok(cursor.slice_from(mark))


# The next run of non-whitespace characters.
word = Parser(_word, WordError, "word")


def _whitespace(cursor: Cursor) -> Outcome:
    mark = cursor.save()
    c = cursor.peek()
    while c is not None and c.isspace():
        cursor.advance()
        c = cursor.peek()
    return Ok(cursor.pos - mark)


# Skips whitespace, returning how many characters were skipped.
whitespace = Parser(_whitespace, Infallible, "whitespace")


def take(literal: str) -> Parser:
    """
    Match `literal` exactly and return the matched span.

    On failure nothing is consumed and the TakeError reports the literal,
    with NO_SPACE when fewer characters remain than the literal has.
    """
    def parse(cursor: Cursor) -> Outcome:
        if cursor.startswith(literal):
            return Ok(cursor.take(len(literal)))
        if len(cursor) < len(literal):
            return Err(TakeError(literal, TakeFailure.NO_SPACE), cursor.pos)
        return Err(TakeError(literal, TakeFailure.NO_MATCH), cursor.pos)
    return Parser(parse, TakeError, f"take({literal!r})")
