"""Pytest configuration and fixtures for pydanfoss_ally tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from pydanfoss_ally import Credentials, DanfossAlly

TEST_KEY = "test_key"
TEST_SECRET = "test_secret"


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(
    status: int = 200,
    json_data: Any = None,
    text: str = "",
    json_error: Exception | None = None,
) -> MagicMock:
    """Create a mock aiohttp response.

    Args:
        status: HTTP status code.
        json_data: Value returned by `response.json()`.
        text: Value returned by `response.text()`.
        json_error: Exception raised by `response.json()` instead.

    Returns:
        A mock behaving like `aiohttp.ClientResponse`.

    """
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=json_data)
    return response


def request_context(
    response: MagicMock | None = None, error: Exception | None = None
) -> MagicMock:
    """Wrap a response (or a raised error) in an async context manager."""
    context = MagicMock()
    if error is not None:
        context.__aenter__ = AsyncMock(side_effect=error)
    else:
        context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


@pytest.fixture
def credentials() -> Credentials:
    """Fixture providing test credentials."""
    return Credentials(key=TEST_KEY, secret=TEST_SECRET)


@pytest.fixture
def clock() -> FakeClock:
    """Fixture providing a hand-driven clock."""
    return FakeClock()


@pytest.fixture
def mock_session() -> MagicMock:
    """Fixture providing a mock aiohttp session."""
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    return session


@pytest.fixture
def ally(
    credentials: Credentials, mock_session: MagicMock, clock: FakeClock
) -> DanfossAlly:
    """Fixture providing a client wired to the mock session and clock."""
    return DanfossAlly(credentials=credentials, session=mock_session, clock=clock)


@pytest.fixture
def sample_token_response() -> dict:
    """Fixture providing a sample token API response."""
    return {
        "access_token": "new_access_token",
        "token_type": "Bearer",
        "expires_in": "3599",
    }


@pytest.fixture
def sample_devices_response() -> dict:
    """Fixture providing a sample device list API response.

    Returns:
        A dictionary with a thermostat and a radiator valve.

    """
    return {
        "result": [
            {
                "active_time": 1600000000,
                "create_time": 1590000000,
                "id": "device1",
                "name": "Living room",
                "online": True,
                "status": [
                    {"code": "temp_current", "value": 21.5},
                    {"code": "lock", "value": True},
                ],
                "sub": False,
                "time_zone": "+01:00",
                "update_time": 1600000100,
                "device_type": "Icon RT",
            },
            {
                "active_time": 1600000000,
                "create_time": 1590000000,
                "id": "device2",
                "name": "Bedroom",
                "online": False,
                "status": [
                    {"code": "va_temperature", "value": 19},
                    {"code": "mode", "value": "manual"},
                ],
                "sub": True,
                "time_zone": "+01:00",
                "update_time": 1600000200,
                "device_type": "Radiator Thermostat",
            },
        ],
        "t": 1600000300,
    }
