"""Custom exceptions for step library expansion."""

from typing import List, Optional

from ..errors import ProcessorError


class StepLibraryError(ProcessorError):
    """Base exception for all step library errors."""

    pass


class CircularIncludeError(StepLibraryError):
    """Raised when a library includes itself, directly or transitively.

    Attributes:
        chain: The include chain that forms the cycle
    """

    def __init__(self, message: str, chain: Optional[List[str]] = None):
        self.chain = chain or []
        super().__init__(message)


class MaxDepthExceededError(StepLibraryError):
    """Raised when libraries include each other more levels deep than allowed.

    Attributes:
        depth: Nesting level the rejected include would have opened
        max_depth: Configured include nesting limit (``--max-depth``)
    """

    def __init__(self, message: str, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(message)
