import pytest

from fluent_rules import reset_registry, set_default_formatting


@pytest.fixture(autouse=True)
def fresh_registry():
    """Give every test an empty macro registry and default formatting."""
    reset_registry()
    set_default_formatting(None)
    yield
    reset_registry()
    set_default_formatting(None)
