from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar, Union

from .Cursor import Cursor
from .Errors import (
    Infallible, InfallibleViolation, PyparsaError,
    coerce, join, require_conversion,
)

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')
E = TypeVar('E')  # Generic type for error values


class UnwrapFailed(PyparsaError, ValueError):
    """`unwrap()` was called on a failure whose error is not an exception."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful parse. The cursor has been advanced past the match."""
    value: T

    def __bool__(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """
    A failed parse.

    `pos` is where the failure is reported. Parsing functions may leave it
    as None; `Parser.__call__` fills in the cursor position.
    """
    error: E
    pos: Optional[int] = None

    def __bool__(self) -> bool:
        return False

    def unwrap(self) -> Any:
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapFailed(f"parse failed: {self.error!r}")

    def describe(self, source: str) -> str:
        """Human readable message with line, column and a caret under the failure."""
        pos = len(source) if self.pos is None else min(self.pos, len(source))
        line, column = Cursor(source).line_col(pos)
        lines = source.split("\n")
        text = lines[line - 1] if line - 1 < len(lines) else ""
        if column <= 20:
            excerpt = f"{text[:40]}\n{' ' * (column - 1)}^"
        else:
            excerpt = f"{text[column - 21:column + 19]}\n{' ' * 20}^"
        return f"{self.error} (line {line}, column {column})\n{excerpt}"


Outcome = Union[Ok[T], Err[Any]]

ParseFn = Callable[[Cursor], Outcome]


def _retarget(failure: Err, target: type, source: 'Parser') -> Err:
    """Convert the error of `source`'s failure into `target`, keeping the position."""
    if issubclass(source.err_type, Infallible):
        raise InfallibleViolation(
            f"{source.name} is declared Infallible but failed with {failure.error!r}"
        )
    return Err(coerce(failure.error, target), failure.pos)


def _exception_type(err: Any) -> Any:
    if isinstance(err, type) and issubclass(err, BaseException):
        return err
    return ()


class Parser(Generic[T]):
    """
    A parsing step: a function from a Cursor to `Ok(value)` or `Err(error)`.

    `err_type` is the declared type of error values; `object` means the
    parser did not declare one. Every combinator is available as a method
    so parsers compose in builder style:

    ```
    name = word.convert_err(AssignError).after(whitespace)
    ```
    """
    def __init__(self, parse_fn: ParseFn, err_type: type = object, name: Optional[str] = None):
        self.parse_fn = parse_fn
        self.err_type = err_type
        self.name = name or getattr(parse_fn, "__name__", "parser")

    def __call__(self, cursor: Cursor) -> Outcome:
        result = self.parse_fn(cursor)
        if isinstance(result, Err):
            if result.pos is None:
                return Err(result.error, cursor.pos)
            return result
        if not isinstance(result, Ok):
            raise TypeError(f"{self.name} returned {result!r}; parsers must return Ok or Err")
        return result

    def parse(self, cursor: Cursor) -> Outcome:
        return self(cursor)

    def run(self, text: str) -> Outcome:
        """Parse from the start of `text`."""
        return self(Cursor(text))

    def __repr__(self) -> str:
        return f"<Parser {self.name}: {getattr(self.err_type, '__name__', self.err_type)}>"

    # --- Sequencing ---

    def then(self, other: Any) -> 'Parser[Tuple[T, Any]]':
        """Run self, then other. Keeps both values. Does not rewind on failure."""
        first, second = self, as_parser(other)
        err_type = join(first.err_type, second.err_type, f"{first.name} & {second.name}")

        def parse(cursor: Cursor) -> Outcome:
            res1 = first(cursor)
            if not res1:
                return _retarget(res1, err_type, first)
            res2 = second(cursor)
            if not res2:
                return _retarget(res2, err_type, second)
            return Ok((res1.value, res2.value))
        return Parser(parse, err_type, f"{first.name} & {second.name}")

    def after(self, ignored: Any) -> 'Parser[T]':
        """Run self, then `ignored`, keeping only self's value."""
        return self.then(ignored).map(lambda pair: pair[0])

    def before(self, primary: Any) -> 'Parser[Any]':
        """Run self, then `primary`, keeping only primary's value."""
        return self.then(primary).map(lambda pair: pair[1])

    # Sequence (&)
    def __and__(self, other: Any) -> 'Parser[Tuple[T, Any]]':
        return self.then(other)

    # Sequence (<*)
    def __lt__(self, other: Any) -> 'Parser[T]':
        return self.after(other)

    # Sequence (*>)
    def __gt__(self, other: Any) -> 'Parser[Any]':
        return self.before(other)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], Any]) -> 'Parser[Any]':
        """
        Run self, then the parser `f` builds from its value.

        The next parser is only known at run time, so its errors are
        converted when they happen.
        """
        inner = self
        err_type = object if issubclass(inner.err_type, Infallible) else inner.err_type

        def parse(cursor: Cursor) -> Outcome:
            res = inner(cursor)
            if not res:
                return _retarget(res, err_type, inner)
            following = as_parser(f(res.value))
            res2 = following(cursor)
            if not res2:
                return _retarget(res2, err_type, following)
            return res2
        return Parser(parse, err_type, f"{inner.name} >>= {getattr(f, '__name__', 'f')}")

    def __rshift__(self, f: Callable[[T], Any]) -> 'Parser[Any]':
        return self.bind(f)

    # --- Post-processing ---

    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        """Transform the value of a success. `f` cannot fail."""
        inner = self

        def parse(cursor: Cursor) -> Outcome:
            res = inner(cursor)
            if not res:
                return res
            return Ok(f(res.value))
        return Parser(parse, inner.err_type, f"{inner.name}.map")

    def and_then(self, f: Callable[[T], Any], err: type = ValueError) -> 'Parser[Any]':
        """
        Transform the value of a success with a function that may fail.

        `f` may return a plain value, an `Ok` or an `Err`, or raise an
        instance of `err`, its declared error type. Other exceptions
        propagate. Failures are converted into this parser's error type and
        reported after the matched input.
        """
        inner = self
        err_type = join(inner.err_type, err, f"{inner.name}.and_then")
        catch = _exception_type(err)

        def parse(cursor: Cursor) -> Outcome:
            res = inner(cursor)
            if not res:
                return _retarget(res, err_type, inner)
            try:
                out = f(res.value)
            except catch as e:
                return Err(coerce(e, err_type), cursor.pos)
            if isinstance(out, Err):
                return Err(coerce(out.error, err_type), cursor.pos if out.pos is None else out.pos)
            if isinstance(out, Ok):
                return out
            return Ok(out)
        return Parser(parse, err_type, f"{inner.name}.and_then")

    # --- Error adaptation ---

    def convert_err(self, target: type) -> 'Parser[T]':
        """Re-target the error type. The edge err_type -> target must be declared."""
        inner = self
        require_conversion(inner.err_type, target, f"{inner.name}.convert_err")

        def parse(cursor: Cursor) -> Outcome:
            res = inner(cursor)
            if not res:
                return _retarget(res, target, inner)
            return res
        return Parser(parse, target, inner.name)

    def map_err(self, f: Callable[[Any], Any], err_type: type = object) -> 'Parser[T]':
        """Replace the error of a failure with `f(error)`."""
        inner = self

        def parse(cursor: Cursor) -> Outcome:
            res = inner(cursor)
            if not res:
                return Err(f(res.error), res.pos)
            return res
        return Parser(parse, err_type, f"{inner.name}.map_err")

    # --- Backtracking ---

    def or_else(self, other: Any) -> 'Parser[Any]':
        """
        Try self; if it fails, rewind and try `other` from the same start.

        If both fail the cursor is rewound and `other`'s error is reported.
        """
        first, second = self, as_parser(other)
        err_type = join(first.err_type, second.err_type, f"{first.name} | {second.name}")

        def parse(cursor: Cursor) -> Outcome:
            mark = cursor.save()
            res1 = first(cursor)
            if res1:
                return res1
            cursor.restore(mark)
            res2 = second(cursor)
            if res2:
                return res2
            cursor.restore(mark)
            return _retarget(res2, err_type, second)
        return Parser(parse, err_type, f"{first.name} | {second.name}")

    # Alternative (<|>)
    def __or__(self, other: Any) -> 'Parser[Any]':
        return self.or_else(other)

    def rewind(self) -> 'Parser[T]':
        """Restore the cursor when this parser fails."""
        inner = self

        def parse(cursor: Cursor) -> Outcome:
            mark = cursor.save()
            res = inner(cursor)
            if not res:
                cursor.restore(mark)
            return res
        return Parser(parse, inner.err_type, f"try {inner.name}")

    # --- Repetition ---

    def many(self) -> 'Parser[list]':
        from .Prim import many
        return many(self)


def _declared_err_type(obj: Any) -> type:
    err_type = getattr(obj, "err_type", None)
    if isinstance(err_type, type):
        return err_type
    owner = getattr(obj, "__self__", None)
    err_type = getattr(owner, "Err", None)
    if isinstance(err_type, type):
        return err_type
    return object


def as_parser(obj: Any, err_type: Optional[type] = None) -> Parser:
    """
    Adapt anything with the parser shape into a Parser.

    Accepts a Parser, a Parsable class (its `parse` and `Err`), a bound
    `parse` method of one, or a plain function `Cursor -> Ok | Err`.
    """
    if isinstance(obj, Parser):
        return obj
    if isinstance(obj, type):
        parse_fn = getattr(obj, "parse", None)
        if not callable(parse_fn):
            raise TypeError(f"{obj.__name__} has no parse(cursor) function")
        declared = getattr(obj, "Err", object)
        return Parser(parse_fn, err_type or declared, obj.__name__)
    if callable(obj):
        return Parser(obj, err_type or _declared_err_type(obj))
    raise TypeError(f"{obj!r} is not a parser")


def parser(err_type: type = object, name: Optional[str] = None) -> Callable[[ParseFn], Parser]:
    """
    Decorator turning a parsing function into a Parser with a declared error type.

    ```
    @parser(TakeError)
    def equals(cursor):
        return take("=")(cursor)
    ```
    """
    def decorator(fn: ParseFn) -> Parser:
        return Parser(fn, err_type, name or fn.__name__)
    return decorator
