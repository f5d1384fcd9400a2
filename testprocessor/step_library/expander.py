"""Expansion of step lists into flat instruction strings.

Includes are expanded depth-first in declared order. Parameters for an
include are layered (highest precedence first):

1. values supplied at the include call site
2. parameters inherited from the including library
3. defaults declared by the included library

Anything left unresolved stays in the output as a literal {{NAME}}.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Set

from ..conditions import ConditionEvaluator
from ..context import VariableScope, substitute
from ..display import print_warning
from .types import (
    ConditionalStep,
    IncludeStack,
    IncludeStep,
    OpaqueStep,
    StepLibrary,
    StepNode,
    TextStep,
    parse_step_node,
)

_STEP_NODE_TYPES = (TextStep, ConditionalStep, IncludeStep, OpaqueStep)
_JSON_KEY_TYPES = (str, int, float, bool, type(None))


def missing_library_placeholder(name: str) -> str:
    """Text emitted in place of an include of an unknown library."""
    return f"[MISSING LIBRARY: {name}]"


class StepLibraryExpander:
    """Expands includes, conditions and placeholders in step lists.

    The library table and environment profile are read-only; every call
    produces fresh output.

    Attributes:
        libraries: Step libraries keyed by name
        env_vars: Environment profile values
        max_depth: Maximum include nesting depth
    """

    def __init__(
        self,
        libraries: Mapping[str, StepLibrary],
        env_vars: Optional[Mapping[str, str]] = None,
        max_depth: int = 10,
    ) -> None:
        self.libraries = libraries
        self.env_vars = env_vars or {}
        self.max_depth = max_depth
        self.conditions = ConditionEvaluator(self.env_vars)

    def resolve_parameters(
        self,
        library: StepLibrary,
        provided_params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Overlay provided parameters on the library's declared defaults.

        Args:
            library: The library being included
            provided_params: Values from the caller (win on collision)

        Returns:
            Parameter mapping; parameters with neither a default nor a
            provided value are absent
        """
        resolved: Dict[str, Any] = library.get_defaults()
        resolved.update(provided_params or {})
        return resolved

    def expand_includes(
        self,
        steps: List[Any],
        inherited_params: Optional[Mapping[str, Any]] = None,
    ) -> List[str]:
        """Expand a raw step list into instruction strings.

        Args:
            steps: Raw steps as loaded from YAML
            inherited_params: Parameters visible to these steps

        Returns:
            Flat, ordered list of resolved instructions

        Raises:
            CircularIncludeError: If a library includes itself
            MaxDepthExceededError: If includes nest deeper than max_depth
        """
        stack = IncludeStack(max_depth=self.max_depth)
        params = dict(inherited_params or {})

        expanded: List[str] = []
        for step in steps:
            node = self._as_node(step, include_first=True)
            expanded.extend(self._process(node, params, stack))
        return expanded

    def expand_single_include(
        self,
        include_step: Any,
        inherited_params: Optional[Mapping[str, Any]] = None,
    ) -> List[str]:
        """Expand one include reference.

        Args:
            include_step: IncludeStep, or a raw {"include": ...} mapping
            inherited_params: Parameters of the including context

        Returns:
            The library's expanded steps, or a single placeholder string
            if the library is unknown
        """
        node = self._as_node(include_step)
        if not isinstance(node, IncludeStep):
            raise TypeError(f"Not an include step: {include_step!r}")

        stack = IncludeStack(max_depth=self.max_depth)
        return self._expand_include(node, dict(inherited_params or {}), stack)

    def process_step(
        self,
        step: Any,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> List[str]:
        """Process one step (raw or already classified).

        Args:
            step: Raw YAML step or StepNode
            parameters: Resolved parameters for the current scope

        Returns:
            Zero or more resolved instructions
        """
        stack = IncludeStack(max_depth=self.max_depth)
        return self._process(step, dict(parameters or {}), stack)

    def _process(
        self,
        step: Any,
        parameters: Dict[str, Any],
        stack: IncludeStack,
    ) -> List[str]:
        node = self._as_node(step)
        scope = VariableScope(parameters=parameters, env_vars=self.env_vars)

        if isinstance(node, TextStep):
            return [substitute(node.text, scope)]

        if isinstance(node, ConditionalStep):
            return self._process_conditional(node, parameters, stack)

        if isinstance(node, IncludeStep):
            return self._expand_include(node, parameters, stack)

        if isinstance(node, OpaqueStep):
            return [substitute(self._serialize(node.value), scope)]

        raise TypeError(f"Unknown step node: {node!r}")

    def _process_conditional(
        self,
        node: ConditionalStep,
        parameters: Dict[str, Any],
        stack: IncludeStack,
    ) -> List[str]:
        if not self.conditions.evaluate(node.condition, parameters):
            return []

        if node.step:
            return self._process(node.step, parameters, stack)

        processed: List[str] = []
        for sub_step in node.steps or []:
            processed.extend(self._process(sub_step, parameters, stack))
        return processed

    def _expand_include(
        self,
        node: IncludeStep,
        inherited_params: Dict[str, Any],
        stack: IncludeStack,
    ) -> List[str]:
        library = self.libraries.get(node.include)
        if library is None:
            print_warning(f"Step library '{node.include}' not found")
            return [missing_library_placeholder(node.include)]

        merged = self.resolve_parameters(
            library, {**inherited_params, **node.parameters}
        )

        stack.push(node.include)
        try:
            expanded: List[str] = []
            for step in library.steps:
                expanded.extend(self._process(step, merged, stack))
            return expanded
        finally:
            stack.pop()

    @staticmethod
    def _as_node(step: Any, include_first: bool = False) -> StepNode:
        if isinstance(step, _STEP_NODE_TYPES):
            return step
        return parse_step_node(step, include_first=include_first)

    @staticmethod
    def _serialize(value: Any) -> str:
        """Canonical compact JSON text for structured steps.

        Falls back to ``str(value)`` for self-referencing YAML anchors.
        """
        try:
            return json.dumps(
                _json_keys(value, set()),
                ensure_ascii=False,
                separators=(",", ":"),
                default=str,
            )
        except ValueError:
            return str(value)


def _json_keys(value: Any, seen: Set[int]) -> Any:
    """Copy nested mappings with keys json can encode (dates etc. become text)."""
    if not isinstance(value, (dict, list)) or id(value) in seen:
        return value

    seen = seen | {id(value)}
    if isinstance(value, list):
        return [_json_keys(item, seen) for item in value]
    return {
        (key if isinstance(key, _JSON_KEY_TYPES) else str(key)): _json_keys(item, seen)
        for key, item in value.items()
    }
