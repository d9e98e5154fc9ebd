"""
The Parsable protocol.

A type becomes parsable by giving itself a `parse(cursor)` classmethod
returning `Ok(instance)` or `Err(error)`. Nothing else is needed: no base
class and no registration. Declaring `Err` lets combinators check error
conversions when they are built.

```
class Assignment:
    Err = AssignError

    @classmethod
    def parse(cls, cursor):
        ...

many(Assignment)                      # the class itself is a parser
as_parser(Assignment).after(whitespace)  # builder methods need a Parser
```
"""
from typing import Any, ClassVar, Protocol, runtime_checkable

from .Cursor import Cursor
from .Parser import Outcome, Parser, as_parser


@runtime_checkable
class Parsable(Protocol):
    Err: ClassVar[type]

    @classmethod
    def parse(cls, cursor: Cursor) -> Outcome:
        ...


def is_parsable(obj: Any) -> bool:
    """True for classes that provide a callable `parse`."""
    return isinstance(obj, type) and callable(getattr(obj, "parse", None))


def parsable_parser(cls: type) -> Parser:
    """The Parser for a Parsable class, named after the class."""
    if not is_parsable(cls):
        raise TypeError(f"{cls!r} does not define parse(cursor)")
    return as_parser(cls)
