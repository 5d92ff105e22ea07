import sys

import pytest

from kappa.builtin.env_builtin import default_environment
from kappa.interpreter import Interpreter


@pytest.fixture
def env():
    return default_environment()


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture(autouse=True)
def _restore_recursion_limit():
    # The CLI raises the interpreter's recursion limit; keep tests independent.
    limit = sys.getrecursionlimit()
    yield
    sys.setrecursionlimit(limit)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    # Diagnostics are coloured with termcolor; compare plain text in tests.
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)
