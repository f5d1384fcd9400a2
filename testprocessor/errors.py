"""Custom exceptions for the YAML test processor."""

from typing import List, Optional


class ProcessorError(Exception):
    """Base exception for all processor errors."""

    pass


class DefinitionError(ProcessorError):
    """Raised when a test case, suite or step library document is invalid.

    Attributes:
        source: Name of the file (or other origin) of the document
        problems: Individual validation messages, if any
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        problems: Optional[List[str]] = None,
    ):
        self.source = source
        self.problems = problems or []

        if self.problems:
            message = message + ": " + "; ".join(self.problems)
        super().__init__(message)


class ConditionError(ProcessorError):
    """Raised when a condition expression cannot be evaluated."""

    pass
