"""Test configuration and fixtures."""

import os

# Must run before jwtauth modules build Settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-at-least-32-bytes-long!!")
os.environ.setdefault("AUTH__PASSWORD_MEMORY_COST", "8192")
os.environ.setdefault("AUTH__PASSWORD_TIME_COST", "1")

import logfire  # noqa: E402
import pytest  # noqa: E402

from jwtauth.config import AuthSettings  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)

TEST_SECRET = "test-secret-key-at-least-32-bytes-long!!"


def make_auth_settings(**overrides) -> AuthSettings:
    """Auth settings with a valid test secret and cheap hashing."""
    values = {
        "jwt_secret": TEST_SECRET,
        "password_time_cost": 1,
        "password_memory_cost": 8192,
    }
    values.update(overrides)
    return AuthSettings(**values)


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings for services built by hand."""
    return make_auth_settings()
