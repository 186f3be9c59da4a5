"""Nesting limits for parser evaluation.

Every combinator the evaluator enters counts as one level. Left-recursive
rules and pathologically nested input both show up as unbounded levels,
so the evaluator stops them with DepthLimitExceededError long before the
interpreter would raise RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from parsecomb.constants import MAX_DEPTH
from parsecomb.diagnostics import DepthLimitExceededError
from parsecomb.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Counts open evaluation levels and refuses to open one past max_depth.

    One guard belongs to one parse; it is mutable because the count moves
    on every enter and exit.

        guard = DepthGuard(max_depth=100)
        with guard:
            outcome = evaluate(child, state)

    Attributes:
        max_depth: Levels allowed, already clamped to the interpreter stack
        current_depth: Levels currently open
        peak_depth: Deepest level reached since construction
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)
    peak_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # A raising __enter__ gets no __exit__, so check before counting.
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self.max_depth)
            )
        self.current_depth += 1
        self.peak_depth = max(self.peak_depth, self.current_depth)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Largest usable depth not above requested_depth.

    The interpreter's recursion limit minus reserve_frames is the ceiling;
    a request above it is lowered to it and a warning is logged.

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(300)
        >>> depth_clamp(120)
        120
        >>> depth_clamp(1000)
        250
    """
    ceiling = sys.getrecursionlimit() - reserve_frames
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Clamping nesting depth %d to %d: recursion limit is %d",
        requested_depth,
        ceiling,
        sys.getrecursionlimit(),
    )
    return ceiling
