"""YAML Test Processor package.

Resolves YAML-authored test cases and suites (with reusable step
libraries, parameters, environment profiles and tag filters) into flat
lists of natural-language instructions for an external runner.
"""

from .cases import TestCase, TestCaseResolver
from .cli import main
from .conditions import ConditionEvaluator
from .config import (
    ProcessorConfig,
    discover_definition_files,
    find_definition_file,
    load_env_profile,
    parse_env_profile,
    read_text,
)
from .context import VariableScope, substitute, substitute_variables
from .errors import ConditionError, DefinitionError, ProcessorError
from .processor import YAMLTestProcessor
from .step_library import (
    CircularIncludeError,
    ConditionalStep,
    IncludeStep,
    MaxDepthExceededError,
    OpaqueStep,
    Parameter,
    StepLibrary,
    StepLibraryError,
    StepLibraryExpander,
    TextStep,
    load_step_libraries,
    parse_step_library,
)
from .suites import SuiteError, TestSuite, TestSuiteResolver
from .tags import matches_tag_filter, parse_tag_filter

__all__ = [
    # CLI
    "main",
    # Config
    "ProcessorConfig",
    "discover_definition_files",
    "find_definition_file",
    "load_env_profile",
    "parse_env_profile",
    "read_text",
    # Tags
    "matches_tag_filter",
    "parse_tag_filter",
    # Substitution
    "VariableScope",
    "substitute",
    "substitute_variables",
    # Conditions
    "ConditionEvaluator",
    # Step libraries
    "Parameter",
    "StepLibrary",
    "TextStep",
    "ConditionalStep",
    "IncludeStep",
    "OpaqueStep",
    "StepLibraryExpander",
    "load_step_libraries",
    "parse_step_library",
    # Resolution
    "TestCase",
    "TestCaseResolver",
    "SuiteError",
    "TestSuite",
    "TestSuiteResolver",
    "YAMLTestProcessor",
    # Errors
    "ProcessorError",
    "DefinitionError",
    "ConditionError",
    "StepLibraryError",
    "CircularIncludeError",
    "MaxDepthExceededError",
]
