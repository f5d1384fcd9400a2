"""Project-level processing of test cases and suites.

Project layout:

    <project>/
        .env.<environment>   KEY=VALUE environment profile
        steps/*.yml          step libraries
        test-cases/*.yml     test cases
        test-suites/*.yml    test suites

The environment profile and step libraries are loaded once, when the
processor is created.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .cases import TestCase, TestCaseResolver
from .config import (
    ProcessorConfig,
    discover_definition_files,
    find_definition_file,
    load_env_profile,
    read_text,
)
from .display import print_error
from .step_library import StepLibrary, StepLibraryExpander, load_step_libraries
from .suites import TestSuite, TestSuiteResolver


class YAMLTestProcessor:
    """Resolves a project's YAML test cases and suites into instructions.

    Attributes:
        config: Processor configuration
        env_vars: Environment profile for the selected environment
        step_libraries: Step libraries keyed by name
    """

    def __init__(self, config: ProcessorConfig) -> None:
        self.config = config
        self.env_vars: Dict[str, str] = load_env_profile(config.env_file)
        self.step_libraries: Dict[str, StepLibrary] = load_step_libraries(config.steps_dir)

        self.expander = StepLibraryExpander(
            self.step_libraries,
            self.env_vars,
            max_depth=config.max_include_depth,
        )
        self.case_resolver = TestCaseResolver(self.expander)
        self.suite_resolver = TestSuiteResolver(self.case_resolver, self._read_referenced_case)

    @property
    def environment(self) -> str:
        return self.config.environment

    @property
    def tag_filter(self) -> Optional[str]:
        return self.config.tag_filter

    def get_test_case_files(self, specific_file: Optional[str] = None) -> List[Path]:
        """List test case files, or locate a single one."""
        if specific_file:
            return find_definition_file(self.config.test_cases_dir, specific_file)
        return discover_definition_files(self.config.test_cases_dir, label="Test cases directory")

    def get_test_suite_files(self, specific_suite: Optional[str] = None) -> List[Path]:
        """List test suite files, or locate a single one."""
        if specific_suite:
            return find_definition_file(self.config.test_suites_dir, specific_suite)
        return discover_definition_files(self.config.test_suites_dir, label="Test suites directory")

    def process_test_case_file(
        self, file_path: Path, tag_filter: Optional[str] = None
    ) -> Optional[TestCase]:
        """Resolve one test case file.

        Args:
            file_path: Test case file
            tag_filter: Filter to apply instead of the configured one
        """
        try:
            text = read_text(file_path)
        except OSError as e:
            print_error(f"Error processing test case {file_path}: {e}")
            return TestCase.failed(file_path.name, str(file_path), str(e))

        return self.case_resolver.resolve_text(
            text,
            name=file_path.name,
            original_file=str(file_path),
            tag_filter=tag_filter or self.tag_filter,
        )

    def process_test_suite_file(self, file_path: Path) -> Optional[TestSuite]:
        """Resolve one test suite file using the configured tag filter."""
        try:
            text = read_text(file_path)
        except OSError as e:
            print_error(f"Error processing test suite {file_path}: {e}")
            return TestSuite.failed(file_path.name, str(file_path), str(e))

        return self.suite_resolver.resolve_text(
            text,
            name=file_path.name,
            original_file=str(file_path),
            tag_filter=self.tag_filter,
        )

    def process_all_test_cases(self, specific_file: Optional[str] = None) -> Dict[str, Any]:
        """Resolve all (or one) test cases into a report.

        Args:
            specific_file: Test case file name or path, None for all

        Returns:
            JSON-ready report with the resolved test cases and a summary
        """
        files = self.get_test_case_files(specific_file)

        test_cases: List[TestCase] = []
        for file_path in files:
            test_case = self.process_test_case_file(file_path)
            if test_case is not None:
                test_cases.append(test_case)

        return {
            **self._report_header(),
            "testCases": [case.to_dict() for case in test_cases],
            "summary": {
                "totalFound": len(files),
                "totalMatched": len(test_cases),
                "totalSteps": sum(case.step_count for case in test_cases),
            },
        }

    def process_all_test_suites(self, specific_suite: Optional[str] = None) -> Dict[str, Any]:
        """Resolve all (or one) test suites into a report.

        Args:
            specific_suite: Suite file name or path, None for all

        Returns:
            JSON-ready report with the resolved suites and a summary
        """
        files = self.get_test_suite_files(specific_suite)

        suites: List[TestSuite] = []
        for file_path in files:
            suite = self.process_test_suite_file(file_path)
            if suite is not None:
                suites.append(suite)

        return {
            **self._report_header(),
            "testSuites": [suite.to_dict() for suite in suites],
            "summary": {
                "totalSuitesFound": len(files),
                "totalSuitesMatched": len(suites),
                "totalTestCases": sum(len(suite.test_cases) for suite in suites),
                "totalSteps": sum(suite.total_steps for suite in suites),
                "totalErrors": sum(suite.total_errors for suite in suites),
            },
        }

    def _report_header(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "tagFilter": self.tag_filter,
            "envVars": dict(self.env_vars),
            "stepLibraries": list(self.step_libraries),
        }

    def _read_referenced_case(self, reference: str) -> Tuple[str, str]:
        """Read a test case referenced from a suite (relative to project root)."""
        path = Path(reference)
        if not path.is_absolute():
            path = self.config.project_root / path

        if not path.is_file():
            raise FileNotFoundError(str(path))

        return str(path), read_text(path)
