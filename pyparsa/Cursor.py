from typing import Optional, Tuple


class Span:
    """
    A zero-copy view of part of the input.

    Holds a reference to the source string and the [start, end) offsets.
    The text is only sliced out when asked for. A span compares equal to
    a `str` with the same text.
    """
    __slots__ = ("source", "start", "end")

    def __init__(self, source: str, start: int, end: int):
        if not 0 <= start <= end <= len(source):
            raise ValueError(f"invalid span {start}..{end} over input of length {len(source)}")
        self.source = source
        self.start = start
        self.end = end

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Span({self.text!r}, {self.start}..{self.end})"

    def __len__(self) -> int:
        return self.end - self.start

    def __bool__(self) -> bool:
        return self.end > self.start

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Span):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)


class Cursor:
    """
    A mutable read position over an input string.

    The source is never copied; primitives advance the position in place
    and hand out `Span`s. `save` / `restore` are the backtracking primitive.

    ```
    c = Cursor("abc 123")
    mark = c.save()
    c.advance(3)
    c.slice_from(mark)   # Span('abc', 0..3)
    c.restore(mark)
    c.rest               # 'abc 123'
    ```
    """
    __slots__ = ("source", "pos")

    def __init__(self, source: str, pos: int = 0):
        if not 0 <= pos <= len(source):
            raise ValueError(f"position {pos} is outside the input (length {len(source)})")
        self.source = source
        self.pos = pos

    # --- Inspection ---

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def rest(self) -> str:
        """The unconsumed input. This one copies."""
        return self.source[self.pos:]

    def __len__(self) -> int:
        return len(self.source) - self.pos

    def peek(self) -> Optional[str]:
        """The next character, or None at end of input."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def startswith(self, literal: str) -> bool:
        return self.source.startswith(literal, self.pos)

    # --- Movement ---

    def advance(self, n: int = 1) -> None:
        if n < 0:
            raise ValueError("cannot advance by a negative amount, use restore()")
        if self.pos + n > len(self.source):
            raise ValueError(f"cannot advance {n} past end of input at position {self.pos}")
        self.pos += n

    def take(self, n: int) -> Span:
        """Consume `n` characters and return them. Raises ValueError if fewer remain."""
        start = self.pos
        self.advance(n)
        return Span(self.source, start, self.pos)

    def try_take(self, n: int) -> Optional[Span]:
        """Like `take`, but returns None (and moves nothing) if fewer than `n` remain."""
        if self.pos + n > len(self.source):
            return None
        return self.take(n)

    # --- Backtracking ---

    def save(self) -> int:
        return self.pos

    def restore(self, mark: int) -> None:
        if not 0 <= mark <= len(self.source):
            raise ValueError(f"mark {mark} is outside the input (length {len(self.source)})")
        self.pos = mark

    def slice_from(self, mark: int) -> Span:
        """Span from a saved mark to the current position."""
        return Span(self.source, mark, self.pos)

    # --- Diagnostics ---

    def line_col(self, pos: Optional[int] = None) -> Tuple[int, int]:
        """1-based (line, column) of `pos` (default: current position)."""
        if pos is None:
            pos = self.pos
        pos = min(pos, len(self.source))
        line = self.source.count("\n", 0, pos) + 1
        column = pos - self.source.rfind("\n", 0, pos)
        return line, column

    def __str__(self) -> str:
        return self.rest

    def __repr__(self) -> str:
        preview = self.source[self.pos:self.pos + 20]
        more = "..." if len(self) > 20 else ""
        return f"Cursor(pos={self.pos}, rest={preview!r}{more})"
