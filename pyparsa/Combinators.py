import logging
from typing import Any, Callable, List, Optional, Sequence

from . import Config
from .Cursor import Cursor
from .Errors import Infallible, NonAdvancingParser, ParseFailure
from .Parser import Err, Ok, Outcome, Parser, T, as_parser
from .Prim import fail, many

logger = logging.getLogger(__name__)


class NoAlternatives(ParseFailure):
    """`choice` was given no parsers."""

    def __init__(self):
        super().__init__()

    def __str__(self) -> str:
        return "no alternatives"


class ExpectedEndOfInput(ParseFailure):
    """`eof` found input left over."""

    def __init__(self, found: str = ""):
        super().__init__(found)
        self.found = found

    def __str__(self) -> str:
        return f"expected end of input, found {self.found!r}"


# --- Function forms of the Parser methods ---

def then(first: Any, second: Any) -> Parser:
    """Run `first`, then `second`; succeeds with both values as a pair."""
    return as_parser(first).then(second)


def after(primary: Any, ignored: Any) -> Parser:
    """Run `primary`, then `ignored`; keeps `primary`'s value."""
    return as_parser(primary).after(ignored)


def before(ignored: Any, primary: Any) -> Parser:
    """Run `ignored`, then `primary`; keeps `primary`'s value."""
    return as_parser(ignored).before(primary)


def and_then(p: Any, f: Callable[[Any], Any], err: type = ValueError) -> Parser:
    return as_parser(p).and_then(f, err)


def map(p: Any, f: Callable[[Any], Any]) -> Parser:
    return as_parser(p).map(f)


def convert_err(p: Any, target: type) -> Parser:
    return as_parser(p).convert_err(target)


def map_err(p: Any, f: Callable[[Any], Any], err_type: type = object) -> Parser:
    return as_parser(p).map_err(f, err_type)


def or_else(first: Any, second: Any) -> Parser:
    return as_parser(first).or_else(second)


# --- Alternation ---

def choice(parsers: Sequence[Any]) -> Parser:
    """
    Applies a list of parsers in order until one succeeds.

    Each alternative starts from the same position. If all fail, the last
    one's error is reported.
    """
    if not parsers:
        return fail(NoAlternatives())
    result = as_parser(parsers[0])
    for p in parsers[1:]:
        result = result | p
    return result


def option(default: T, p: Any) -> Parser[T]:
    """Tries parser p; returns its value on success, else `default` without consuming input."""
    inner = as_parser(p)

    def parse(cursor: Cursor) -> Outcome:
        mark = cursor.save()
        res = inner(cursor)
        if res:
            return res
        cursor.restore(mark)
        return Ok(default)
    return Parser(parse, Infallible, f"option({inner.name})")


def option_maybe(p: Any) -> Parser[Optional[Any]]:
    """Like `option` with None as the default."""
    return option(None, p)


# --- Repetition ---

def many1(p: Any) -> Parser[List[Any]]:
    """
    Applies parser p one or more times, returning a list of results.
    """
    inner = as_parser(p)
    return inner.then(many(inner)).map(lambda pair: [pair[0]] + pair[1])


def sep_by1(p: Any, sep: Any) -> Parser[List[Any]]:
    """
    Parses one or more occurrences of p separated by sep.

    A separator not followed by p is left unconsumed.
    """
    item, separator = as_parser(p), as_parser(sep)

    def parse(cursor: Cursor) -> Outcome:
        first = item(cursor)
        if not first:
            return first
        items = [first.value]
        while True:
            mark = cursor.save()
            if not separator(cursor):
                cursor.restore(mark)
                break
            res = item(cursor)
            if not res:
                cursor.restore(mark)
                break
            if cursor.pos == mark and Config.settings.check_progress:
                logger.warning("sep_by1(%s) stopped: separator and item consumed no input", item.name)
                raise NonAdvancingParser(mark)
            items.append(res.value)
        return Ok(items)
    return Parser(parse, item.err_type, f"sep_by1({item.name}, {separator.name})")


def sep_by(p: Any, sep: Any) -> Parser[List[Any]]:
    """
    Parses zero or more occurrences of p separated by sep. Never fails.
    """
    some = sep_by1(p, sep)

    def parse(cursor: Cursor) -> Outcome:
        mark = cursor.save()
        res = some(cursor)
        if res:
            return res
        cursor.restore(mark)
        return Ok([])
    return Parser(parse, Infallible, f"sep_by({some.name})")


# --- End of input ---

def _eof(cursor: Cursor) -> Outcome:
    if cursor.is_eof:
        return Ok(None)
    return Err(ExpectedEndOfInput(cursor.rest[:Config.settings.trace_preview]), cursor.pos)


# Succeeds only when no input remains.
eof = Parser(_eof, ExpectedEndOfInput, "eof")


# --- Debugging ---

def _preview(cursor: Cursor) -> str:
    width = Config.settings.trace_preview
    rest = cursor.source[cursor.pos:cursor.pos + width]
    return rest + ("..." if len(cursor) > width else "")


def parser_trace(label_str: str) -> Parser[None]:
    """Logs the remaining input at DEBUG level. Consumes nothing, never fails."""
    def parse(cursor: Cursor) -> Outcome:
        if logger.isEnabledFor(logging.DEBUG):
            line, column = cursor.line_col()
            logger.debug("%s: %r at line %d, column %d", label_str, _preview(cursor), line, column)
        return Ok(None)
    return Parser(parse, Infallible, f"trace({label_str})")


def parser_traced(label_str: str, p: Any) -> Parser:
    """
    Wraps `p` with DEBUG logging of where it starts and whether it backtracked.

    A failure rewinds the cursor.
    """
    inner = as_parser(p)
    enter = parser_trace(label_str)
    backtracked = parser_trace(f"{label_str} backtracked")

    def parse(cursor: Cursor) -> Outcome:
        enter(cursor)
        mark = cursor.save()
        res = inner(cursor)
        if res:
            logger.debug("%s: matched %r", label_str, res.value)
            return res
        cursor.restore(mark)
        backtracked(cursor)
        logger.debug("%s: failed with %r", label_str, res.error)
        return res
    return Parser(parse, inner.err_type, f"traced({label_str})")
