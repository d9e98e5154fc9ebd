"""
Error types and the conversion rules between them.

Every parser declares the type of error value it can fail with. When two
parsers with different error types are combined, the second one's errors
must convert into the first one's. A conversion is declared once per edge:

```
@absorbs(WordError, TakeError, ValueError)
class AssignError(ErrorUnion):
    pass

word.convert_err(AssignError)     # WordError -> AssignError
```

Edges are not chained: declaring A -> B and B -> C does not give A -> C.
`Infallible` converts into anything, so parsers that cannot fail never
need an edge of their own.
"""
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar('E')

# source type -> {target type -> conversion}
_EDGES: Dict[type, Dict[type, Callable[[Any], Any]]] = {}


# --- Engine exceptions (raised, never returned) ---

class PyparsaError(Exception):
    """Base class for misuse of the engine itself."""


class ConversionError(PyparsaError, TypeError):
    """No conversion edge exists between two error types."""

    def __init__(self, source: type, target: type, context: str = ""):
        self.source = source
        self.target = target
        where = f" in {context}" if context else ""
        super().__init__(
            f"no conversion from {source.__name__} to {target.__name__}{where}; "
            f"declare one with register_conversion() or @absorbs()"
        )


class InfallibleViolation(PyparsaError, AssertionError):
    """A parser declared as Infallible reported a failure."""


class NonAdvancingParser(PyparsaError, RuntimeError):
    """A repeated parser succeeded without consuming input."""

    def __init__(self, pos: int):
        self.pos = pos
        super().__init__(f"many: parser succeeded without consuming input at position {pos}")


# --- Failure values ---

class ParseFailure(Exception):
    """
    Base for the failure values returned by the builtin parsers.

    Failures are returned inside `Err`, not raised. They are exceptions only
    so that `Err.unwrap()` can raise them. Two failures are equal when they
    have the same type and arguments.
    """

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class Infallible(Exception):
    """
    The error type of parsers that cannot fail.

    It cannot be instantiated. It converts into every other error type.
    """

    def __new__(cls, *args, **kwargs):
        raise TypeError("Infallible cannot be instantiated")


class ErrorUnion(Exception):
    """
    Convenience base for caller-defined sum error types.

    Wraps the sub-parser error it was converted from as `cause`; the variant
    is the type of the cause.
    """

    def __init__(self, cause: Any):
        super().__init__(cause)
        self.cause = cause

    @property
    def variant(self) -> type:
        return type(self.cause)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.cause == other.cause

    def __hash__(self) -> int:
        return hash((type(self), type(self.cause)))

    def __str__(self) -> str:
        return str(self.cause)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cause!r})"


# --- Declaring edges ---

def _wrapping(target: type) -> Callable[[Any], Any]:
    def wrap(error: Any) -> Any:
        wrapped = target(error)
        if isinstance(wrapped, BaseException) and isinstance(error, BaseException) and wrapped.__cause__ is None:
            wrapped.__cause__ = error
        return wrapped
    return wrap


def register_conversion(source: type, target: type, fn: Optional[Callable[[Any], Any]] = None) -> None:
    """Declare that errors of type `source` convert into `target` via `fn` (default: `target(error)`)."""
    if issubclass(source, Infallible):
        raise ValueError("Infallible already converts into every type")
    _EDGES.setdefault(source, {})[target] = fn if fn is not None else _wrapping(target)
    logger.debug("registered conversion %s -> %s", source.__name__, target.__name__)


def conversion(source: type, target: type) -> Callable[[Callable[[Any], E]], Callable[[Any], E]]:
    """Decorator form of `register_conversion`."""
    def decorator(fn: Callable[[Any], E]) -> Callable[[Any], E]:
        register_conversion(source, target, fn)
        return fn
    return decorator


def absorbs(*sources: type) -> Callable[[type], type]:
    """Class decorator: the decorated error type absorbs each of `sources` by wrapping it."""
    def decorator(cls: type) -> type:
        for source in sources:
            register_conversion(source, cls)
        return cls
    return decorator


def unregister_conversion(source: type, target: type) -> None:
    edges = _EDGES.get(source)
    if edges is not None:
        edges.pop(target, None)
        if not edges:
            del _EDGES[source]


# --- Applying edges ---

def _find_edge(source: type, target: type) -> Optional[Callable[[Any], Any]]:
    for klass in source.__mro__:
        edges = _EDGES.get(klass)
        if edges is not None and target in edges:
            return edges[target]
    return None


def can_convert(source: type, target: type) -> bool:
    if target is object or issubclass(source, target):
        return True
    if issubclass(source, Infallible):
        return True
    return _find_edge(source, target) is not None


def require_conversion(source: type, target: type, context: str = "") -> None:
    """
    Check an edge exists when a parser is built.

    A source of `object` means the error type was not declared; such
    parsers are only checked when they actually fail.
    """
    if source is object:
        return
    if not can_convert(source, target):
        logger.debug("missing conversion %s -> %s in %s", source.__name__, target.__name__, context)
        raise ConversionError(source, target, context)


def join(first: type, second: type, context: str = "") -> type:
    """
    The error type of a parser combining `first` and `second`.

    It is `first`, unless `first` is Infallible, in which case it is
    `second`. The other side must convert into it.
    """
    if issubclass(first, Infallible):
        return second
    require_conversion(second, first, context)
    return first


def coerce(error: Any, target: type) -> Any:
    """Convert an error value into `target` using the declared edges."""
    if target is object or isinstance(error, target):
        return error
    fn = _find_edge(type(error), target)
    if fn is None:
        logger.debug("cannot convert %r into %s", error, target.__name__)
        raise ConversionError(type(error), target)
    return fn(error)
