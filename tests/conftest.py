"""Shared test fixtures and configuration."""

from pathlib import Path
from typing import Callable, Dict

import pytest
from unittest.mock import MagicMock, patch

from testprocessor import display


@pytest.fixture(autouse=True)
def mock_console():
    """Auto-mock the diagnostics console for all tests.

    This prevents terminal output during tests and lets tests assert on
    warnings and errors through the mock's print calls.
    """
    mock = MagicMock()
    with patch("testprocessor.display.console", mock):
        with patch.object(display, "quiet", False):
            yield mock


@pytest.fixture
def printed(mock_console: MagicMock) -> Callable[[], str]:
    """Return a function joining everything printed to the mocked console."""

    def _printed() -> str:
        return "\n".join(
            str(call.args[0]) for call in mock_console.print.call_args_list if call.args
        )

    return _printed


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a small test project.

    Layout:
        .env.dev, .env.prod
        steps/login.yml, steps/checkout.yml, steps/open-home.yml
        test-cases/login-flow.yml, test-cases/order.yml
        test-suites/smoke.yml, test-suites/regression.yml
    """
    files: Dict[str, str] = {
        ".env.dev": """
# dev profile
BASE_URL=https://dev.example.com
TEST_USERNAME=dev-user
TEST_PASSWORD=dev=secret
""",
        ".env.prod": "BASE_URL=https://example.com\n",
        "steps/open-home.yml": """
description: Open the home page
steps:
  - "Open {{BASE_URL}}"
""",
        "steps/login.yml": """
description: Log in
parameters:
  - name: USER
    description: User name
    default: guest
  - name: REMEMBER
    default: false
steps:
  - include: open-home
  - "Fill username with {{USER}}"
  - condition: "{{REMEMBER}} == true"
    step: "Check 'Remember me'"
  - "Click login"
""",
        "steps/checkout.yml": """
parameters:
  - name: PAYMENT
steps:
  - "Open the cart"
  - condition: "{{PAYMENT}} != ''"
    steps:
      - "Select payment {{PAYMENT}}"
      - "Confirm payment"
""",
        "test-cases/login-flow.yml": """
description: Login works
tags: [smoke, login]
steps:
  - include: login
    parameters:
      USER: alice
      REMEMBER: true
  - "Verify the dashboard is shown"
""",
        "test-cases/order.yml": """
description: Place an order
tags: [regression, order]
steps:
  - include: login
  - include: checkout
    parameters:
      PAYMENT: card
""",
        "test-suites/smoke.yml": """
name: Smoke suite
description: Quick checks
tags: [smoke]
pre-actions:
  - "Clear cookies"
post-actions:
  - "Log out"
test-cases:
  - test-cases/login-flow.yml
  - path: test-cases/order.yml
  - test-cases/missing.yml
""",
        "test-suites/regression.yml": """
tags: [regression]
test-cases:
  - test-cases/order.yml
""",
    }

    for relative, content in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    return tmp_path
