"""Condition evaluation for conditional steps.

Supported forms (after {{NAME}} substitution):
- Inequality: left != right
- Equality: left == right (right may be the literal true/false)
- Literal: true / false
- Anything else: non-empty text is true, empty text is false

Operands are trimmed and surrounding quotes are stripped before comparing.
Evaluation failures make the condition false.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .context import VariableScope, substitute
from .display import print_warning
from .errors import ConditionError

_QUOTES = "'\""


class ConditionEvaluator:
    """Evaluates condition strings against parameters and environment.

    Attributes:
        env_vars: Environment profile used as the second lookup layer
    """

    def __init__(self, env_vars: Optional[Mapping[str, str]] = None) -> None:
        self.env_vars = env_vars or {}

    def evaluate(
        self,
        condition: Any,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Evaluate a condition.

        Args:
            condition: Condition text such as "{{ENABLED}} == true"
            parameters: Resolved parameters for the current include

        Returns:
            Whether the guarded step should be included
        """
        if condition is None or condition == "":
            return True

        try:
            return self._evaluate(condition, parameters or {})
        except (ConditionError, TypeError, ValueError) as e:
            print_warning(f"Error evaluating condition '{condition}': {e}")
            return False

    def _evaluate(self, condition: Any, parameters: Mapping[str, Any]) -> bool:
        if isinstance(condition, bool):
            return condition
        if not isinstance(condition, str):
            raise ConditionError(
                f"expected a string, got {type(condition).__name__}"
            )

        scope = VariableScope(parameters=parameters, env_vars=self.env_vars)
        resolved = substitute(condition, scope)

        if "!=" in resolved:
            left, right = self._split(resolved, "!=")
            return left != right

        if "==" in resolved:
            left, right = self._split(resolved, "==")
            if right == "true":
                return self._is_true(left)
            if right == "false":
                return self._is_false(left)
            return left == right

        if resolved == "true":
            return True
        if resolved == "false":
            return False

        return bool(resolved)

    def _split(self, text: str, operator: str) -> tuple[str, str]:
        """Split on an operator into quote-stripped, trimmed operands."""
        parts = text.split(operator)
        return self._strip_quotes(parts[0]), self._strip_quotes(parts[1])

    @staticmethod
    def _strip_quotes(value: str) -> str:
        return value.strip().strip(_QUOTES)

    @staticmethod
    def _is_true(value: Any) -> bool:
        return value is True or value == "true"

    @staticmethod
    def _is_false(value: Any) -> bool:
        return value is False or value == "false"
