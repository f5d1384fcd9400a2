"""Variable scopes and {{NAME}} placeholder substitution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .display import print_warning

# Matches {{NAME}}; the name is trimmed before lookup
_PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


def to_text(value: Any) -> str:
    """Render a parameter value the way it appears in YAML.

    Booleans become "true"/"false" and None becomes an empty string so
    that conditions such as "{{FLAG}} == true" work with YAML booleans.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class VariableScope:
    """Two ordered lookup layers used for substitution.

    Parameters are consulted first, then environment variables.

    Attributes:
        parameters: Resolved step-library parameters for the current call
        env_vars: Environment profile values (read-only)
    """

    parameters: Mapping[str, Any] = field(default_factory=dict)
    env_vars: Mapping[str, str] = field(default_factory=dict)

    def lookup(self, name: str) -> Optional[str]:
        """Return the value for a name, or None if neither layer defines it."""
        if name in self.parameters:
            return to_text(self.parameters[name])
        if name in self.env_vars:
            return to_text(self.env_vars[name])
        return None

    def with_parameters(self, parameters: Mapping[str, Any]) -> VariableScope:
        """Create a scope with a different parameter layer."""
        return VariableScope(parameters=dict(parameters), env_vars=self.env_vars)


def substitute(text: Any, scope: VariableScope) -> Any:
    """Replace {{NAME}} placeholders in a string.

    Non-string values are returned unchanged. Unknown names are left as
    written and reported with a warning.

    Args:
        text: Template string (or any other value)
        scope: Parameter and environment lookup layers

    Returns:
        Substituted string, or the original value if not a string
    """
    if not isinstance(text, str):
        return text

    def replace_match(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        value = scope.lookup(name)
        if value is None:
            print_warning(f"Variable '{name}' not found")
            return match.group(0)
        return value

    return _PLACEHOLDER_PATTERN.sub(replace_match, text)


def substitute_variables(
    text: Any,
    parameters: Optional[Dict[str, Any]] = None,
    env_vars: Optional[Dict[str, str]] = None,
) -> Any:
    """Convenience wrapper around substitute() taking plain mappings."""
    return substitute(text, VariableScope(parameters or {}, env_vars or {}))
