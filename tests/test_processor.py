"""End-to-end tests for YAMLTestProcessor on a project directory."""

from pathlib import Path

import pytest

from testprocessor.config import ProcessorConfig
from testprocessor.processor import YAMLTestProcessor

LOGIN_FLOW_STEPS = [
    "Open https://dev.example.com",
    "Fill username with alice",
    "Check 'Remember me'",
    "Click login",
    "Verify the dashboard is shown",
]

ORDER_STEPS = [
    "Open https://dev.example.com",
    "Fill username with guest",
    "Click login",
    "Open the cart",
    "Select payment card",
    "Confirm payment",
]


def make_processor(project: Path, **kwargs) -> YAMLTestProcessor:
    return YAMLTestProcessor(ProcessorConfig(project_root=project, **kwargs))


class TestProcessorSetup:
    """Tests for loading the environment and step libraries."""

    def test_loads_environment_profile(self, project: Path) -> None:
        processor = make_processor(project)

        assert processor.env_vars == {
            "BASE_URL": "https://dev.example.com",
            "TEST_USERNAME": "dev-user",
            "TEST_PASSWORD": "dev=secret",
        }

    def test_selects_environment(self, project: Path) -> None:
        processor = make_processor(project, environment="prod")
        assert processor.env_vars == {"BASE_URL": "https://example.com"}

    def test_loads_step_libraries(self, project: Path) -> None:
        processor = make_processor(project)
        assert sorted(processor.step_libraries) == ["checkout", "login", "open-home"]

    def test_broken_library_is_skipped(self, project: Path, printed) -> None:
        (project / "steps" / "broken.yml").write_text("steps: [unclosed")
        (project / "steps" / "empty.yml").write_text("")

        processor = make_processor(project)

        assert "broken" not in processor.step_libraries
        assert "empty" not in processor.step_libraries
        assert "Error loading step library broken.yml" in printed()

    def test_missing_directories_are_tolerated(self, tmp_path: Path, printed) -> None:
        processor = make_processor(tmp_path)

        assert processor.env_vars == {}
        assert processor.step_libraries == {}
        assert processor.process_all_test_cases()["testCases"] == []
        assert "Steps directory" in printed()


class TestProcessAllTestCases:
    """Tests for process_all_test_cases()."""

    def test_resolves_all_cases(self, project: Path) -> None:
        result = make_processor(project).process_all_test_cases()

        assert result["environment"] == "dev"
        assert result["tagFilter"] is None
        assert result["stepLibraries"] == ["checkout", "login", "open-home"]
        assert [case["name"] for case in result["testCases"]] == ["login-flow.yml", "order.yml"]
        assert result["testCases"][0]["steps"] == LOGIN_FLOW_STEPS
        assert result["testCases"][1]["steps"] == ORDER_STEPS
        assert result["summary"] == {"totalFound": 2, "totalMatched": 2, "totalSteps": 11}

    def test_tag_filter(self, project: Path) -> None:
        result = make_processor(project, tag_filter="smoke").process_all_test_cases()

        assert result["tagFilter"] == "smoke"
        assert [case["name"] for case in result["testCases"]] == ["login-flow.yml"]
        assert result["summary"] == {"totalFound": 2, "totalMatched": 1, "totalSteps": 5}

    def test_or_tag_filter(self, project: Path) -> None:
        result = make_processor(project, tag_filter="login|order").process_all_test_cases()
        assert result["summary"]["totalMatched"] == 2

    def test_specific_file(self, project: Path) -> None:
        result = make_processor(project).process_all_test_cases("order.yml")

        assert [case["name"] for case in result["testCases"]] == ["order.yml"]
        assert result["summary"]["totalFound"] == 1

    def test_specific_file_missing(self, project: Path) -> None:
        result = make_processor(project).process_all_test_cases("nope.yml")
        assert result["summary"] == {"totalFound": 0, "totalMatched": 0, "totalSteps": 0}

    def test_malformed_case_is_reported(self, project: Path) -> None:
        (project / "test-cases" / "broken.yml").write_text("steps: [unclosed")

        result = make_processor(project).process_all_test_cases()
        broken = next(case for case in result["testCases"] if case["name"] == "broken.yml")

        assert broken["error"].startswith("YAML parse error")
        assert broken["steps"] == []
        assert broken["stepCount"] == 0
        assert result["summary"]["totalMatched"] == 3

    def test_single_file_with_own_filter(self, project: Path) -> None:
        processor = make_processor(project)
        path = project / "test-cases" / "order.yml"

        assert processor.process_test_case_file(path, tag_filter="smoke") is None
        assert processor.process_test_case_file(path).step_count == 6

    def test_unreadable_file(self, project: Path) -> None:
        case = make_processor(project).process_test_case_file(project / "test-cases" / "gone.yml")

        assert case is not None
        assert case.error
        assert case.steps == []

    def test_environment_changes_output(self, project: Path) -> None:
        result = make_processor(project, environment="prod").process_all_test_cases("order.yml")
        assert result["testCases"][0]["steps"][0] == "Open https://example.com"

    def test_circular_libraries(self, project: Path) -> None:
        (project / "steps" / "ping.yml").write_text("steps:\n  - include: pong\n")
        (project / "steps" / "pong.yml").write_text("steps:\n  - include: ping\n")
        (project / "test-cases" / "loop.yml").write_text("steps:\n  - include: ping\n")

        result = make_processor(project).process_all_test_cases("loop.yml")

        assert "Circular include detected: ping → pong → ping" in result["testCases"][0]["error"]

    def test_max_depth(self, project: Path) -> None:
        (project / "steps" / "a.yml").write_text("steps:\n  - include: b\n")
        (project / "steps" / "b.yml").write_text("steps:\n  - \"deep\"\n")
        (project / "test-cases" / "deep.yml").write_text("steps:\n  - include: a\n")

        shallow = make_processor(project, max_include_depth=1).process_all_test_cases("deep.yml")
        deep = make_processor(project).process_all_test_cases("deep.yml")

        assert "Maximum include depth (1) exceeded" in shallow["testCases"][0]["error"]
        assert deep["testCases"][0]["steps"] == ["deep"]


class TestProcessAllTestSuites:
    """Tests for process_all_test_suites()."""

    def test_resolves_all_suites(self, project: Path) -> None:
        result = make_processor(project).process_all_test_suites()

        assert [suite["name"] for suite in result["testSuites"]] == ["regression.yml", "smoke.yml"]
        assert result["summary"] == {
            "totalSuitesFound": 2,
            "totalSuitesMatched": 2,
            "totalTestCases": 3,
            "totalSteps": 17,
            "totalErrors": 1,
        }

    def test_smoke_suite(self, project: Path) -> None:
        result = make_processor(project).process_all_test_suites("smoke.yml")
        suite = result["testSuites"][0]

        assert suite["suiteName"] == "Smoke suite"
        assert suite["preActions"] == ["Clear cookies"]
        assert suite["postActions"] == ["Log out"]
        assert [case["steps"] for case in suite["testCases"]] == [LOGIN_FLOW_STEPS, ORDER_STEPS]
        assert suite["errors"] == [
            {
                "testCase": "test-cases/missing.yml",
                "error": "Test case file not found: test-cases/missing.yml",
            }
        ]
        assert suite["summary"] == {"totalTestCases": 2, "totalSteps": 11, "totalErrors": 1}

    def test_suite_tag_filter(self, project: Path) -> None:
        """Only the suite's tags are filtered; its cases are all resolved."""
        result = make_processor(project, tag_filter="smoke").process_all_test_suites()

        assert [suite["name"] for suite in result["testSuites"]] == ["smoke.yml"]
        assert len(result["testSuites"][0]["testCases"]) == 2
        assert result["summary"]["totalSuitesMatched"] == 1

    def test_suite_name_falls_back(self, project: Path) -> None:
        result = make_processor(project).process_all_test_suites("regression.yml")
        assert result["testSuites"][0]["suiteName"] == "regression.yml"

    def test_malformed_suite(self, project: Path) -> None:
        (project / "test-suites" / "broken.yml").write_text("test-cases: [unclosed")

        result = make_processor(project).process_all_test_suites("broken.yml")

        assert result["testSuites"][0]["error"].startswith("YAML parse error")
        assert result["summary"]["totalErrors"] == 1

    @pytest.mark.parametrize("reference", ["test-cases/order.yml", "order-abs"])
    def test_absolute_and_relative_references(self, project: Path, reference: str) -> None:
        if reference == "order-abs":
            reference = str(project / "test-cases" / "order.yml")
        (project / "test-suites" / "one.yml").write_text(f"test-cases:\n  - '{reference}'\n")

        result = make_processor(project).process_all_test_suites("one.yml")

        assert result["testSuites"][0]["testCases"][0]["steps"] == ORDER_STEPS
