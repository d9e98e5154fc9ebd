# Core
from .Cursor import Cursor, Span
from .Parser import Parser, Ok, Err, Outcome, UnwrapFailed, as_parser, parser
from .Prim import run_parser, parse_test, pure, fail, try_parse, lazy, many, skip_many

# Error coercion
from .Errors import (
    Infallible, ErrorUnion, ParseFailure,
    PyparsaError, ConversionError, InfallibleViolation, NonAdvancingParser,
    register_conversion, unregister_conversion, conversion, absorbs,
    can_convert, coerce,
)

# Builtin parsers
from .Builtins import next_char, word, whitespace, take, EndOfInput, WordError, TakeError, TakeFailure

# Combinators
from .Combinators import (
    then, after, before, and_then, convert_err, map_err, or_else,
    choice, option, option_maybe, many1, sep_by, sep_by1, eof,
    parser_trace, parser_traced,
    NoAlternatives, ExpectedEndOfInput,
)

# Parsable protocol
from .Parsable import Parsable, is_parsable, parsable_parser

# Settings
from .Config import Settings, configure
