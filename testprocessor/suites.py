"""Resolution of test suites.

A suite lists test case files plus suite-level metadata:

    ```yaml
    name: "E-commerce smoke"
    tags: [smoke]
    pre-actions:
      - "Clear browser cookies"
    test-cases:
      - test-cases/login.yml
      - path: test-cases/order.yml
    ```

The tag filter is applied once, to the suite. Test cases referenced by a
matching suite are always resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml

from .cases import TestCase, TestCaseResolver
from .display import print_error
from .errors import DefinitionError
from .schemas import validate_document
from .tags import matches_tag_filter

# Reads a referenced test case: path as written -> (original file, text).
# Must raise FileNotFoundError when the file does not exist.
TestCaseReader = Callable[[str], Tuple[str, str]]

INVALID_REFERENCE_MESSAGE = "Invalid test case reference format"


@dataclass(frozen=True)
class SuiteError:
    """A test case reference that could not be resolved."""

    test_case: Any
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"testCase": self.test_case, "error": self.error}


@dataclass(frozen=True)
class TestSuite:
    """A resolved test suite.

    Attributes:
        name: File name of the suite
        original_file: Path the suite was loaded from
        suite_name: Declared suite name (falls back to the file name)
        description: Description from the definition
        tags: Tags from the definition
        pre_actions: Instructions to run before the test cases
        post_actions: Instructions to run after the test cases
        test_cases: Resolved test cases, in declared order
        errors: References that could not be resolved
        error: Why the suite itself could not be resolved, if it failed
    """

    __test__ = False  # not a pytest test class

    name: str
    original_file: str = ""
    suite_name: str = ""
    description: str = ""
    tags: List[Any] = field(default_factory=list)
    pre_actions: List[str] = field(default_factory=list)
    post_actions: List[str] = field(default_factory=list)
    test_cases: List[TestCase] = field(default_factory=list)
    errors: List[SuiteError] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def total_steps(self) -> int:
        """Sum of resolved steps over all test cases."""
        return sum(case.step_count for case in self.test_cases)

    @property
    def total_errors(self) -> int:
        """Reference errors, or 1 when the suite itself failed."""
        if self.error is not None:
            return 1
        return len(self.errors)

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "totalTestCases": len(self.test_cases),
            "totalSteps": self.total_steps,
            "totalErrors": self.total_errors,
        }

    @classmethod
    def failed(cls, name: str, original_file: str, error: str) -> TestSuite:
        """Create a suite carrying an error and no test cases."""
        return cls(name=name, original_file=original_file, suite_name=name, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON report shape."""
        data: Dict[str, Any] = {
            "name": self.name,
            "originalFile": self.original_file,
            "suiteName": self.suite_name,
            "description": self.description,
            "tags": list(self.tags),
            "preActions": list(self.pre_actions),
            "postActions": list(self.post_actions),
            "testCases": [case.to_dict() for case in self.test_cases],
            "errors": [error.to_dict() for error in self.errors],
            "summary": self.summary,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


def normalize_reference(reference: Any) -> str:
    """Get the path from a test case reference.

    Accepts a bare string or a mapping with a ``path`` field.

    Raises:
        DefinitionError: If the reference has any other shape
    """
    if isinstance(reference, str):
        return reference
    if isinstance(reference, dict) and reference.get("path"):
        return str(reference["path"])
    raise DefinitionError(INVALID_REFERENCE_MESSAGE)


class TestSuiteResolver:
    """Applies tag filtering to a suite and resolves its test cases.

    Attributes:
        case_resolver: Resolver used for every referenced test case
        read_test_case: Reader for referenced test case files
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        case_resolver: TestCaseResolver,
        read_test_case: TestCaseReader,
    ) -> None:
        self.case_resolver = case_resolver
        self.read_test_case = read_test_case

    def resolve(
        self,
        definition: Any,
        name: str,
        original_file: str = "",
        tag_filter: Optional[str] = None,
    ) -> Optional[TestSuite]:
        """Resolve a parsed suite definition.

        Args:
            definition: Parsed YAML document
            name: Suite file name
            original_file: Source path, for reporting
            tag_filter: Tag filter applied to the suite's own tags

        Returns:
            The resolved suite, a suite with ``error`` set if the
            definition is invalid, or None if the tag filter excludes it
        """
        try:
            validate_document("test suite", definition, source=name)
        except DefinitionError as e:
            print_error(f"Error processing test suite {original_file or name}: {e}")
            return TestSuite.failed(name, original_file, str(e))

        if not matches_tag_filter(definition.get("tags"), tag_filter):
            return None

        test_cases: List[TestCase] = []
        errors: List[SuiteError] = []

        for reference in definition.get("test-cases") or []:
            try:
                test_case = self._resolve_reference(reference)
            except DefinitionError as e:
                errors.append(SuiteError(test_case=reference, error=str(e)))
                continue

            if test_case is not None:
                test_cases.append(test_case)

        return TestSuite(
            name=name,
            original_file=original_file,
            suite_name=definition.get("name") or name,
            description=definition.get("description") or "",
            tags=list(definition.get("tags") or []),
            pre_actions=list(definition.get("pre-actions") or []),
            post_actions=list(definition.get("post-actions") or []),
            test_cases=test_cases,
            errors=errors,
        )

    def resolve_text(
        self,
        text: str,
        name: str,
        original_file: str = "",
        tag_filter: Optional[str] = None,
    ) -> Optional[TestSuite]:
        """Parse YAML text and resolve it as a suite.

        Malformed YAML yields a suite with ``error`` set.
        """
        try:
            definition = yaml.safe_load(text)
        except yaml.YAMLError as e:
            print_error(f"Error processing test suite {original_file or name}: {e}")
            return TestSuite.failed(name, original_file, f"YAML parse error: {e}")

        return self.resolve(definition, name, original_file, tag_filter)

    def _resolve_reference(self, reference: Any) -> Optional[TestCase]:
        path = normalize_reference(reference)

        try:
            case_file, text = self.read_test_case(path)
        except FileNotFoundError:
            raise DefinitionError(f"Test case file not found: {path}")
        except OSError as e:
            raise DefinitionError(f"Cannot read test case {path}: {e}")

        # Already filtered at suite level
        return self.case_resolver.resolve_text(
            text,
            name=PurePath(case_file).name,
            original_file=case_file,
            tag_filter=None,
        )
