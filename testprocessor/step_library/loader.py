"""Loading step library files into StepLibrary objects."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..config import discover_definition_files, read_text
from ..display import print_error
from ..errors import DefinitionError
from ..schemas import validate_document
from .types import Parameter, StepLibrary, normalize_default


def parse_step_library(name: str, text: str) -> StepLibrary:
    """Parse the text of a step library file.

    Args:
        name: Library name (the file stem)
        text: Raw YAML text

    Returns:
        Parsed StepLibrary

    Raises:
        DefinitionError: If the YAML is invalid, empty or malformed
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DefinitionError(f"YAML parse error: {e}", source=name)

    return build_step_library(name, data)


def build_step_library(name: str, data: Any) -> StepLibrary:
    """Build a StepLibrary from an already parsed YAML document.

    Raises:
        DefinitionError: If the document is empty or malformed
    """
    validate_document("step library", data, source=name)

    return StepLibrary(
        name=name,
        description=data.get("description") or "",
        parameters=_parse_parameters(data.get("parameters") or []),
        steps=list(data.get("steps") or []),
    )


def _parse_parameters(parameters_data: List[Dict[str, Any]]) -> List[Parameter]:
    return [
        Parameter(
            name=param["name"],
            description=param.get("description") or "",
            default=normalize_default(param.get("default")),
        )
        for param in parameters_data
    ]


def load_step_libraries(steps_dir: Path) -> Dict[str, StepLibrary]:
    """Load every step library found in a directory.

    Libraries are keyed by file stem. Empty files are skipped; files that
    fail to load are reported and skipped.

    Args:
        steps_dir: Directory containing *.yml / *.yaml library files

    Returns:
        Library table keyed by name
    """
    libraries: Dict[str, StepLibrary] = {}

    for file_path in discover_definition_files(steps_dir, label="Steps directory"):
        try:
            data = yaml.safe_load(read_text(file_path))
            if data is None:
                continue
            libraries[file_path.stem] = build_step_library(file_path.stem, data)
        except (DefinitionError, yaml.YAMLError, OSError) as e:
            print_error(f"Error loading step library {file_path.name}: {e}")

    return libraries
