"""Resolution of individual test cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .display import print_error
from .errors import DefinitionError
from .schemas import validate_document
from .step_library import StepLibraryError, StepLibraryExpander
from .tags import matches_tag_filter


@dataclass(frozen=True)
class TestCase:
    """A resolved test case.

    Attributes:
        name: File name of the test case
        original_file: Path the test case was loaded from
        description: Description from the definition
        tags: Tags from the definition
        steps: Flat, fully substituted instructions
        raw_steps: Steps as written, before expansion
        error: Why the test case could not be resolved, if it failed
    """

    __test__ = False  # not a pytest test class

    name: str
    original_file: str = ""
    description: str = ""
    tags: List[Any] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    raw_steps: List[Any] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def step_count(self) -> int:
        """Number of resolved steps."""
        return len(self.steps)

    @classmethod
    def failed(cls, name: str, original_file: str, error: str) -> TestCase:
        """Create a test case carrying an error and no steps."""
        return cls(name=name, original_file=original_file, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON report shape."""
        data: Dict[str, Any] = {
            "name": self.name,
            "originalFile": self.original_file,
            "description": self.description,
            "tags": list(self.tags),
            "steps": list(self.steps),
            "stepCount": self.step_count,
            "rawSteps": list(self.raw_steps),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


class TestCaseResolver:
    """Applies tag filtering to a test case and expands its steps.

    Attributes:
        expander: Expander holding the step libraries and environment
    """

    __test__ = False  # not a pytest test class

    def __init__(self, expander: StepLibraryExpander) -> None:
        self.expander = expander

    def resolve(
        self,
        definition: Any,
        name: str,
        original_file: str = "",
        tag_filter: Optional[str] = None,
    ) -> Optional[TestCase]:
        """Resolve a parsed test case definition.

        Args:
            definition: Parsed YAML document
            name: Test case name (usually the file name)
            original_file: Source path, for reporting
            tag_filter: Tag filter to apply, None to accept any tags

        Returns:
            The resolved test case, a test case with ``error`` set if the
            definition is invalid, or None if the tag filter excludes it
        """
        try:
            validate_document("test case", definition, source=name)

            if not matches_tag_filter(definition.get("tags"), tag_filter):
                return None

            raw_steps = list(definition.get("steps") or [])
            steps = self.expander.expand_includes(raw_steps)
        except (DefinitionError, StepLibraryError) as e:
            print_error(f"Error processing test case {original_file or name}: {e}")
            return TestCase.failed(name, original_file, str(e))

        return TestCase(
            name=name,
            original_file=original_file,
            description=definition.get("description") or "",
            tags=list(definition.get("tags") or []),
            steps=steps,
            raw_steps=raw_steps,
        )

    def resolve_text(
        self,
        text: str,
        name: str,
        original_file: str = "",
        tag_filter: Optional[str] = None,
    ) -> Optional[TestCase]:
        """Parse YAML text and resolve it as a test case.

        Malformed YAML yields a test case with ``error`` set.
        """
        try:
            definition = yaml.safe_load(text)
        except yaml.YAMLError as e:
            print_error(f"Error processing test case {original_file or name}: {e}")
            return TestCase.failed(name, original_file, f"YAML parse error: {e}")

        return self.resolve(definition, name, original_file, tag_filter)
