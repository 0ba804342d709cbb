"""Represents a Danfoss Ally account."""

from __future__ import annotations

from collections.abc import Callable
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import aiohttp

from .auth import TokenManager, read_json_response
from .const import BASE_URL, DEFAULT_REQUEST_TIMEOUT, DEVICES_ENDPOINT
from .credentials import Credentials, load_credentials
from .exceptions import NetworkError
from .models import Device, DevicesResponse

LOG = logging.getLogger(__name__)


class DanfossAlly:
    """Async client of a Danfoss Ally account holding the latest device snapshot."""

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the client.

        Credentials are read from the environment when not given, so a
        missing key or secret raises `ConfigurationError` before any request.
        """
        if credentials is None:
            credentials = load_credentials()
        self.token_manager = TokenManager(
            credentials, session=session, timeout=timeout, clock=clock
        )
        self._clock = clock
        self._devices: List[Device] = []
        self.server_time: Optional[int] = None
        self.last_update: Optional[float] = None

    async def __aenter__(self) -> DanfossAlly:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if the client created it."""
        await self.token_manager.close_session()

    @property
    def devices(self) -> List[Device]:
        """Return the devices of the latest successful fetch."""
        return list(self._devices)

    def get_device(self, device_id: str) -> Optional[Device]:
        """Return a device of the snapshot by ID."""
        for device in self._devices:
            if device.id == device_id:
                return device
        return None

    async def _async_get_api_request(
        self, endpoint: str, access_token: str
    ) -> Dict[str, Any]:
        """Make an authenticated async GET request."""
        url = BASE_URL + endpoint
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        session = await self.token_manager._get_session()

        LOG.debug("Making ASYNC GET request to %s", url)
        try:
            async with session.get(
                url, headers=headers, timeout=self.token_manager.timeout
            ) as response:
                LOG.debug("Response status code: %s", response.status)
                return await read_json_response(response)
        except TimeoutError as timeout_err:
            LOG.error("Request timed out: GET %s", url)
            raise NetworkError(f"Request timed out: GET {url}") from timeout_err
        except aiohttp.ClientError as req_err:
            LOG.error("Request error during API request: %s", req_err)
            raise NetworkError(f"Request error: {req_err}") from req_err

    async def async_fetch_devices(
        self, access_token: Optional[str] = None
    ) -> List[Device]:
        """Retrieve the device list without touching the snapshot.

        Args:
            access_token (Optional[str]): Bearer token to use. Defaults to the
                token currently held by the token manager.

        Raises:
            NetworkError: If the API cannot be reached in time.
            AuthError: If the bearer token is rejected.
            ProtocolError: If the response is not a device list.

        """
        return (await self._async_fetch(access_token)).result

    async def _async_fetch(self, access_token: Optional[str] = None) -> DevicesResponse:
        if access_token is None:
            access_token = self.token_manager.token.access_token
        data = await self._async_get_api_request(DEVICES_ENDPOINT, access_token)
        return DevicesResponse.from_dict(data)

    async def async_update_devices(self) -> List[Device]:
        """Replace the snapshot with a fresh device list.

        The previous snapshot is kept if the fetch raises.
        """
        response = await self._async_fetch()
        devices = response.result
        self._devices = devices
        self.server_time = response.t
        self.last_update = self._clock()
        LOG.info("Device list updated. Found %d devices.", len(devices))
        return self.devices

    def room_temperatures(self) -> List[Tuple[str, Any]]:
        """Return (device name, value) for every temperature status."""
        return [
            (device.name, status.value)
            for device in self._devices
            for status in device.temperatures
        ]

    def log_room_temperatures(self) -> None:
        """Log the current temperature of every device at debug level."""
        for name, value in self.room_temperatures():
            LOG.debug("%s: %s", name, value)
