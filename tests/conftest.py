import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop logging config that CLI tests bind to CliRunner's streams."""
    yield
    structlog.reset_defaults()
