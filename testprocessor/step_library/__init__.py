"""Step libraries: reusable, parameterizable step sequences.

A test case (or another library) references a library with an include:

    ```yaml
    steps:
      - include: login
        parameters:
          USER: alice
      - condition: "{{CHECK_CART}} == true"
        step: "Open the cart and verify it is empty"
      - "Click the checkout button"
    ```

Libraries live in <project>/steps/<name>.yml and are keyed by file stem.
Include parameter values are used as written: a {{NAME}} inside a value
is not substituted again once it lands in a step.
"""

from .errors import (
    CircularIncludeError,
    MaxDepthExceededError,
    StepLibraryError,
)
from .expander import StepLibraryExpander, missing_library_placeholder
from .loader import build_step_library, load_step_libraries, parse_step_library
from .types import (
    ConditionalStep,
    IncludeStack,
    IncludeStep,
    OpaqueStep,
    Parameter,
    StepLibrary,
    StepNode,
    TextStep,
    parse_step_node,
)

__all__ = [
    # Types
    "Parameter",
    "StepLibrary",
    "StepNode",
    "TextStep",
    "ConditionalStep",
    "IncludeStep",
    "OpaqueStep",
    "IncludeStack",
    "parse_step_node",
    # Loader
    "build_step_library",
    "load_step_libraries",
    "parse_step_library",
    # Expander
    "StepLibraryExpander",
    "missing_library_placeholder",
    # Errors
    "StepLibraryError",
    "CircularIncludeError",
    "MaxDepthExceededError",
]
