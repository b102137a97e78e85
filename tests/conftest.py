import pytest

from sublisp.builtin.env_builtin import default_module
from sublisp.types.names import NameGenerator


@pytest.fixture
def module():
    """Fresh default module for each test."""
    return default_module()


@pytest.fixture
def names():
    return NameGenerator(prefix="#:g")


@pytest.fixture(autouse=True)
def _default_config(monkeypatch):
    # tests assume the built-in configuration unless they set it themselves
    monkeypatch.delenv("SUBLISP_RECURSION_LIMIT", raising=False)
    monkeypatch.delenv("SUBLISP_FRESH_PREFIX", raising=False)
