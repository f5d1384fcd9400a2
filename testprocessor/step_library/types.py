"""Type definitions for step libraries and step nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..context import to_text
from .errors import CircularIncludeError, MaxDepthExceededError


@dataclass(frozen=True)
class Parameter:
    """Parameter declared by a step library.

    Attributes:
        name: Parameter name (used in {{name}} placeholders)
        description: Human-readable description
        default: Default value, None when the library declares none
    """

    name: str
    description: str = ""
    default: Optional[str] = None


@dataclass(frozen=True)
class TextStep:
    """Plain instruction text."""

    text: str


@dataclass(frozen=True)
class ConditionalStep:
    """Step (or steps) included only when the condition holds.

    Attributes:
        condition: Condition expression
        step: Single guarded step
        steps: Guarded list of nested steps (used when step is absent)
    """

    condition: Any
    step: Any = None
    steps: Optional[List[Any]] = None


@dataclass(frozen=True)
class IncludeStep:
    """Reference to a step library expanded in place.

    Attributes:
        include: Library name
        parameters: Values supplied at the call site
    """

    include: str
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OpaqueStep:
    """Any other structured value, kept visible as serialized text."""

    value: Any


StepNode = Union[TextStep, ConditionalStep, IncludeStep, OpaqueStep]


def parse_step_node(raw: Any, include_first: bool = False) -> StepNode:
    """Classify a raw YAML step.

    A mapping with a non-empty ``condition`` is a conditional step, even
    when it also names an ``include``. Top-level test case steps pass
    ``include_first=True`` so an ``include`` key wins there.

    Args:
        raw: A step as loaded from YAML
        include_first: Check for ``include`` before ``condition``

    Returns:
        The matching step node variant
    """
    if isinstance(raw, str):
        return TextStep(raw)

    if isinstance(raw, dict):
        if include_first and raw.get("include"):
            return _include_step(raw)
        if raw.get("condition"):
            steps = raw.get("steps")
            return ConditionalStep(
                condition=raw["condition"],
                step=raw.get("step"),
                steps=list(steps) if isinstance(steps, list) else None,
            )
        if raw.get("include"):
            return _include_step(raw)

    return OpaqueStep(raw)


def _include_step(raw: Dict[str, Any]) -> IncludeStep:
    parameters = raw.get("parameters")
    return IncludeStep(
        include=str(raw["include"]),
        parameters=dict(parameters) if isinstance(parameters, dict) else {},
    )


@dataclass
class StepLibrary:
    """A named, reusable, parameterizable sequence of steps.

    Attributes:
        name: Unique library name (file stem)
        description: What this library does
        parameters: Declared parameters
        steps: Raw step definitions
    """

    name: str
    description: str = ""
    parameters: List[Parameter] = field(default_factory=list)
    steps: List[Any] = field(default_factory=list)

    def get_defaults(self) -> Dict[str, str]:
        """Get declared default values keyed by parameter name."""
        return {
            param.name: param.default
            for param in self.parameters
            if param.default is not None
        }


@dataclass
class IncludeStack:
    """Tracks nested includes during expansion.

    Used for circular include detection and depth limiting.

    Attributes:
        chain: Library names currently being expanded
        max_depth: Maximum allowed nesting depth
    """

    chain: List[str] = field(default_factory=list)
    max_depth: int = 10

    def push(self, library_name: str) -> None:
        """Push a library onto the stack.

        Raises:
            CircularIncludeError: If the library is already being expanded
            MaxDepthExceededError: If max depth would be exceeded
        """
        if library_name in self.chain:
            chain = self.chain + [library_name]
            raise CircularIncludeError(
                f"Circular include detected: {' → '.join(chain)}",
                chain=chain,
            )

        if len(self.chain) >= self.max_depth:
            raise MaxDepthExceededError(
                f"Maximum include depth ({self.max_depth}) exceeded. "
                f"Current chain: {' → '.join(self.chain)}",
                depth=len(self.chain) + 1,
                max_depth=self.max_depth,
            )

        self.chain.append(library_name)

    def pop(self) -> str:
        """Pop the most recent library from the stack."""
        return self.chain.pop()

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return len(self.chain)


def normalize_default(value: Any) -> Optional[str]:
    """Normalize a YAML default to text; None means no default."""
    if value is None:
        return None
    return to_text(value)
