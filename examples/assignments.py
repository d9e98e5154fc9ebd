"""
Parses a list of `name = value` assignments into a dict.

    python examples/assignments.py "width = 80  height = 24"
"""
import sys
from dataclasses import dataclass

from pyparsa import (
    Cursor, ErrorUnion, Ok, TakeError, WordError,
    absorbs, eof, many, take, whitespace, word,
)


@absorbs(TakeError, WordError, ValueError)
class AssignmentError(ErrorUnion):
    pass


@dataclass
class Assignment:
    name: str
    value: int

    Err = AssignmentError

    @classmethod
    def parse(cls, cursor):
        # name = value
        name = (
            word.convert_err(AssignmentError)
            .after(whitespace)
            .after(take("="))
            .after(whitespace)
        )(cursor)
        if not name:
            return name
        value = (
            word.convert_err(AssignmentError)
            .and_then(lambda s: int(s.text))
            .after(whitespace)
        )(cursor)
        if not value:
            return value
        return Ok(cls(name.value.text, value.value))


def parse_assignments(text: str):
    cursor = Cursor(text)
    whitespace(cursor)
    items = many(Assignment)(cursor).value
    if not eof(cursor):
        # many() stopped early; parse the offending assignment again for its error
        return Assignment.parse(cursor)
    return Ok({a.name: a.value for a in items})


if __name__ == "__main__":
    source = " ".join(sys.argv[1:]) or "width = 80  height = 24"
    result = parse_assignments(source)

    if result:
        print("Parsed:", result.value)
    else:
        print("Parsing Failed:", result.describe(source))
