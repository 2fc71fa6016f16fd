"""Pytest configuration for the expression pipeline test suite."""

import sys
from pathlib import Path

import pytest

# Add repository root to path for package imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import RPNEvaluator, ShuntingYard  # noqa: E402


@pytest.fixture
def evaluate():
    """Parse and evaluate an infix expression with optional variable bindings."""

    def _evaluate(expression, **variables):
        return RPNEvaluator.evaluate(ShuntingYard(expression), variables)

    return _evaluate
