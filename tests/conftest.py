import pytest

from cffindex.core import config


@pytest.fixture(autouse=True)
def _debug_off():
    """Each test starts and ends with debug diagnostics disabled."""
    config.disable_debug()
    yield
    config.disable_debug()


@pytest.fixture
def debug_on():
    config.enable_debug()
    yield
    config.disable_debug()
