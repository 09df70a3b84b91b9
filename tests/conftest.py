import pytest

from c4bitboard.debug import debug, DebugLevel


@pytest.fixture(autouse=True)
def reset_debug():
    """Keep logging configuration changes from leaking between tests."""
    yield
    debug.configure(level=DebugLevel.INFO, enabled=True, log_file="", components=[])
