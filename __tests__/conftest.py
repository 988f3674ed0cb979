import pytest

from memoryboard.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; drop the cache around every test."""
    reset_settings()
    yield
    reset_settings()
