"""Processor configuration, environment profiles and file discovery."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .display import print_warning

DEFINITION_SUFFIXES = (".yml", ".yaml")


@dataclass
class ProcessorConfig:
    """Configuration for a processor instance.

    Attributes:
        project_root: Root of the test project
        environment: Environment profile name (selects .env.<environment>)
        tag_filter: Tag filter applied to test cases and suites
        max_include_depth: Maximum nesting of step library includes
    """

    project_root: Path
    environment: str = "dev"
    tag_filter: Optional[str] = None
    max_include_depth: int = 10

    @property
    def test_cases_dir(self) -> Path:
        """Directory containing test case files."""
        return self.project_root / "test-cases"

    @property
    def test_suites_dir(self) -> Path:
        """Directory containing test suite files."""
        return self.project_root / "test-suites"

    @property
    def steps_dir(self) -> Path:
        """Directory containing step library files."""
        return self.project_root / "steps"

    @property
    def env_file(self) -> Path:
        """Environment profile file for the selected environment."""
        return self.project_root / f".env.{self.environment}"


def parse_env_profile(text: str) -> Dict[str, str]:
    """Parse KEY=VALUE lines into a mapping.

    Blank lines and lines starting with '#' are ignored. Values may
    contain '=' (only the first one separates key and value).

    Args:
        text: Raw environment profile text

    Returns:
        Variable name to value mapping
    """
    env_vars: Dict[str, str] = {}

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        key, sep, value = stripped.partition("=")
        key = key.strip()
        if key and sep:
            env_vars[key] = value.strip()

    return env_vars


def read_text(path: Path) -> str:
    """Read a definition file as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_env_profile(env_file: Path) -> Dict[str, str]:
    """Load an environment profile file.

    A missing file yields an empty profile and a warning.
    """
    if not env_file.is_file():
        print_warning(f"Environment file {env_file} not found")
        return {}

    return parse_env_profile(read_text(env_file))


def discover_definition_files(directory: Path, label: str = "Directory") -> List[Path]:
    """List YAML definition files in a directory, sorted by name.

    Args:
        directory: Directory to scan (not recursive)
        label: How to name the directory in the warning if it is missing

    Returns:
        Sorted list of *.yml / *.yaml files
    """
    if not directory.is_dir():
        print_warning(f"{label} {directory} not found")
        return []

    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix in DEFINITION_SUFFIXES
    )


def find_definition_file(directory: Path, name: str) -> List[Path]:
    """Locate a single definition file.

    Args:
        directory: Base directory for relative names
        name: Absolute path, or a path relative to directory

    Returns:
        A one-element list if the file exists, otherwise an empty list
    """
    path = Path(name)
    if not path.is_absolute():
        path = directory / path

    return [path] if path.is_file() else []
