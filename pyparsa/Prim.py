import logging
from typing import Any, Callable, List, Optional, Tuple

from . import Config
from .Cursor import Cursor
from .Errors import Infallible, NonAdvancingParser
from .Parser import Err, Ok, Outcome, Parser, T, as_parser

logger = logging.getLogger(__name__)


def pure(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(cursor: Cursor) -> Outcome:
        return Ok(value)
    return Parser(parse, Infallible, f"pure({value!r})")


def fail(error: Any) -> Parser[Any]:
    """A parser that always fails with `error`, consuming nothing."""
    def parse(cursor: Cursor) -> Outcome:
        return Err(error, cursor.pos)
    return Parser(parse, type(error), f"fail({error!r})")


def try_parse(parser: Any) -> Parser[Any]:
    """Try a parser, rewinding the cursor if it fails."""
    return as_parser(parser).rewind()


def lazy(factory: Callable[[], Any], err_type: type = object) -> Parser[Any]:
    """
    Defer building a parser until it is first used.

    Needed for recursive grammars, where a parser refers to itself.
    """
    built: List[Parser] = []

    def parse(cursor: Cursor) -> Outcome:
        if not built:
            built.append(as_parser(factory()))
        return built[0](cursor)
    return Parser(parse, err_type, f"lazy({getattr(factory, '__name__', 'factory')})")


def many(p: Any) -> Parser[List[Any]]:
    """
    Parse zero or more occurrences of `p`. Never fails.

    The cursor is rewound to the start of the failed attempt, so only
    complete matches are consumed. `p` must consume input whenever it
    succeeds; with `check_progress` on, a success that does not raises
    NonAdvancingParser.
    """
    sub = as_parser(p)

    def parse(cursor: Cursor) -> Outcome:
        items: List[Any] = []
        while True:
            mark = cursor.save()
            res = sub(cursor)
            if not res:
                cursor.restore(mark)
                return Ok(items)
            if cursor.pos == mark and Config.settings.check_progress:
                logger.warning("many(%s) stopped: parser succeeded without consuming input", sub.name)
                raise NonAdvancingParser(mark)
            items.append(res.value)
    return Parser(parse, Infallible, f"many({sub.name})")


def skip_many(p: Any) -> Parser[None]:
    """Skips zero or more occurrences of `p`."""
    return many(p).map(lambda _: None)


def run_parser(parser: Any, input_str: str) -> Tuple[Optional[Any], Optional[Any]]:
    """
    Run `parser` from the start of `input_str`.

    Returns (value, None) on success and (None, error) on failure.
    """
    cursor = Cursor(input_str)
    result = as_parser(parser)(cursor)
    if result:
        logger.debug("parse succeeded at position %d: %r", cursor.pos, result.value)
        return result.value, None
    logger.debug("parse failed at position %s: %r", result.pos, result.error)
    return None, result.error


def parse_test(parser: Any, input_str: str) -> None:
    """Test a parser and print the result."""
    result = as_parser(parser).run(input_str)
    if result:
        print(result.value)
    else:
        print(result.describe(input_str))
