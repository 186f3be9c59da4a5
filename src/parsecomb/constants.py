"""Default limits and labels used when callers pass None.

ParserEngine and Evaluator take each limit as a keyword argument; these
are the values used when the caller passes None.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Display
    "DEFAULT_SOURCE_NAME",
    "CONTEXT_LINES",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Evaluation is plain recursive descent. Each guarded level is exactly one
# interpreter frame (a node evaluation or a repetition loop), so MAX_DEPTH
# counts frames. The evaluator clamps it with depth_clamp() to stay below
# sys.getrecursionlimit() with room left for the caller.
#
# ============================================================================

# Default maximum evaluator nesting depth.
MAX_DEPTH: int = 800

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DISPLAY
# ============================================================================

# Source label used when the caller does not supply one.
DEFAULT_SOURCE_NAME: str = "<string>"

# Lines of source shown around a failure by ParseError.format_with_context().
CONTEXT_LINES: int = 2
