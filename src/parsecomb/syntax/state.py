"""Immutable input position and parse state.

Implements the immutable cursor pattern: every advance returns a NEW State,
so saving a State is a plain reference copy and restoring it after a failed
attempt is simply reusing the saved reference.

Design Philosophy:
    - Position and State are frozen dataclasses
    - Row and column are maintained incrementally by advance()
    - EOF is a state (is_eof), not a return value
    - Backtracking never needs an explicit undo step

Line Ending Support:
    - "\\n" is the only line delimiter. CRLF input works because the "\\n"
      is still present; the "\\r" counts as an ordinary column.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from parsecomb.constants import DEFAULT_SOURCE_NAME

__all__ = ["Position", "State", "restore", "snapshot"]


@dataclass(frozen=True, slots=True)
class Position:
    """Location inside the input.

    Attributes:
        offset: Characters consumed since the start of input
        row: Newlines consumed (0-based line)
        col: Characters consumed since the last newline (0-based column)

    Example:
        >>> Position().advanced_over("ab\\nc")
        Position(offset=4, row=1, col=1)
    """

    offset: int = 0
    row: int = 0
    col: int = 0

    def __post_init__(self) -> None:
        """Validate Position invariants."""
        if self.offset < 0 or self.row < 0 or self.col < 0:
            msg = f"Position fields must be >= 0, got {self.offset}/{self.row}/{self.col}"
            raise ValueError(msg)

    def advanced_over(self, consumed: str) -> "Position":
        """Return the Position reached after consuming text.

        Args:
            consumed: The text consumed from this position

        Returns:
            New Position (original unchanged)
        """
        if not consumed:
            return self
        newlines = consumed.count("\n")
        if newlines == 0:
            return Position(self.offset + len(consumed), self.row, self.col + len(consumed))
        col = len(consumed) - consumed.rfind("\n") - 1
        return Position(self.offset + len(consumed), self.row + newlines, col)


@dataclass(frozen=True, slots=True)
class State:
    """Immutable parse state: input, source label and position.

    Key Design Decisions:
        1. Frozen dataclass - a saved State can never be corrupted
        2. Slots - states are created once per successful match
        3. The full input is shared by reference, never copied

    Example:
        >>> state = State("hello")
        >>> state.peek()
        'h'
        >>> later = state.advance("he")
        >>> later.peek()
        'l'
        >>> state.offset  # Original unchanged (immutability)
        0
    """

    source: str
    name: str = DEFAULT_SOURCE_NAME
    position: Position = Position()

    @property
    def offset(self) -> int:
        """Absolute character offset."""
        return self.position.offset

    @property
    def row(self) -> int:
        """0-based line."""
        return self.position.row

    @property
    def col(self) -> int:
        """0-based column."""
        return self.position.col

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.position.offset >= len(self.source)

    @property
    def is_soi(self) -> bool:
        """Check if at start of input."""
        return self.position.offset == 0

    def peek(self) -> str | None:
        """Current character, or None at end of input."""
        if self.is_eof:
            return None
        return self.source[self.position.offset]

    @property
    def previous(self) -> str | None:
        """Character before the current position, or None at start of input."""
        if self.position.offset == 0:
            return None
        return self.source[self.position.offset - 1]

    def startswith(self, text: str) -> bool:
        """Check whether the remaining input starts with text."""
        return self.source.startswith(text, self.position.offset)

    def advance(self, consumed: str) -> "State":
        """Return new state positioned after consumed text.

        Args:
            consumed: Text matched at the current position

        Returns:
            New State (original unchanged)
        """
        if not consumed:
            return self
        return State(self.source, self.name, self.position.advanced_over(consumed))


def snapshot(state: State) -> State:
    """Save a state for later backtracking.

    States are immutable, so the saved value is the state itself.
    """
    return state


def restore(saved: State) -> State:
    """Resume from a previously saved state."""
    return saved
