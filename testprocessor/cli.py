"""
YAML Test Processor CLI

Resolves YAML test cases and suites of a project into flat instruction
lists and prints them as a JSON document.

Usage:
    yaml-test-processor /path/to/project --env=dev --tags=smoke
    yaml-test-processor . --suites
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from testprocessor import display
from testprocessor.config import ProcessorConfig
from testprocessor.display import ICONS
from testprocessor.processor import YAMLTestProcessor


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="yaml-test-processor",
        description="Resolve YAML test cases and suites into instruction lists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
{ICONS['file']} Test cases:
    yaml-test-processor . --env=dev --tags=smoke
    yaml-test-processor . --file=order.yml --env=test
    yaml-test-processor . --tags="smoke,login|critical"

{ICONS['suite']} Test suites:
    yaml-test-processor . --suites --env=test
    yaml-test-processor . --suite=e-commerce.yml --env=prod
    yaml-test-processor . --suites --tags=smoke
        """,
    )
    parser.add_argument(
        "project_path",
        nargs="?",
        default=".",
        help="Project containing test-cases/, test-suites/ and steps/ (default: current directory)",
    )
    parser.add_argument(
        "-e",
        "--env",
        dest="environment",
        default="dev",
        help="Environment name, selects .env.<env> (default: dev)",
    )
    parser.add_argument(
        "-t",
        "--tags",
        dest="tag_filter",
        default=None,
        help="Tag filter (e.g. smoke, smoke|login, smoke,critical)",
    )
    parser.add_argument(
        "--file",
        dest="specific_file",
        default=None,
        help="Specific test case file to process",
    )
    parser.add_argument(
        "--suite",
        dest="specific_suite",
        default=None,
        help="Specific test suite file to process (implies --suites)",
    )
    parser.add_argument(
        "--suites",
        action="store_true",
        default=False,
        help="Process test suites instead of test cases",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the JSON report to a file instead of stdout",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    parser.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=10,
        help="Maximum nesting of step library includes (default: 10)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Suppress warnings (errors are still reported)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    display.quiet = args.quiet

    project_path = Path(args.project_path).resolve()
    if not project_path.is_dir():
        display.print_error(f"Project directory not found: {project_path}")
        sys.exit(1)

    config = ProcessorConfig(
        project_root=project_path,
        environment=args.environment,
        tag_filter=args.tag_filter or None,
        max_include_depth=args.max_depth,
    )

    try:
        processor = YAMLTestProcessor(config)
        if args.suites or args.specific_suite:
            result = processor.process_all_test_suites(args.specific_suite)
        else:
            result = processor.process_all_test_cases(args.specific_file)
    except KeyboardInterrupt:
        display.console.print(f"\n[yellow]{ICONS['cross']} Aborted[/yellow]")
        sys.exit(130)
    except Exception as e:
        display.print_error(f"Error: {e}")
        sys.exit(1)

    report = json.dumps(result, indent=args.indent, ensure_ascii=False, default=str)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report + "\n", encoding="utf-8")
        display.print_info(f"Report written to {output_path}")
    else:
        sys.stdout.write(report + "\n")


if __name__ == "__main__":
    main()
