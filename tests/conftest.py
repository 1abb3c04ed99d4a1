"""
Shared pytest fixtures for the hookshift test suite.

Usage in tests:
    def test_something(statement_factory):
        statement_factory.declare("count", "state")
        ...

    def test_counter(counter_body):
        statements, tracked = counter_body
"""

import pytest

from hookshift.config import ConfigManager
from hookshift.parsing import is_available
from tests.factories import StatementFactory

# Skip marker for tree-sitter dependent tests
requires_tree_sitter = pytest.mark.skipif(
    not is_available(),
    reason="tree-sitter-language-pack not installed"
)


@pytest.fixture
def statement_factory():
    """Empty StatementFactory."""
    return StatementFactory()


@pytest.fixture
def counter_body():
    """Counter component body and its tracked names."""
    factory = StatementFactory()
    statements = factory.counter_component()
    return statements, {"count", "increment", "resetCount"}


@pytest.fixture
def todo_body():
    """Todo component body and its tracked names."""
    factory = StatementFactory()
    statements = factory.todo_component()
    return statements, set(factory.todo_tracked)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """
    ConfigManager that never reads the real ~/.hookshift.

    Points the user config at tmp_path/home and clears HOOKSHIFT_* env vars.
    """
    user_file = tmp_path / "home" / ".hookshift" / "config.yaml"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_file.parent)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_file)
    for var in ("HOOKSHIFT_MARKER_PREFIX", "HOOKSHIFT_ANNOTATE", "HOOKSHIFT_MAX_EDIT_DISTANCE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path
