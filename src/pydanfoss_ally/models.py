"""Data models for pydanfoss_ally."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any

from .const import INITIAL_EXPIRES_IN, TEMPERATURE_STATUS_CODES
from .exceptions import DataError, ProtocolError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """Represents a bearer token returned by the OAuth2 endpoint.

    `expires_in` is kept as the text the API sent and only interpreted when a
    renewal check needs it.
    """

    access_token: str = field(default="", repr=False)
    token_type: str = ""
    expires_in: str = INITIAL_EXPIRES_IN

    @property
    def is_valid(self) -> bool:
        """Return True if the token carries an access token."""
        return bool(self.access_token)

    def expires_in_seconds(self) -> int:
        """Return the lifetime of the token in seconds.

        Raises:
            DataError: If `expires_in` is not an integer.

        """
        try:
            return int(self.expires_in)
        except (TypeError, ValueError) as err:
            err_msg = f"Token expires_in is not a number of seconds: {self.expires_in!r}"
            raise DataError(err_msg) from err

    @classmethod
    def from_dict(cls, data: Any) -> Token:
        """Build a token from the decoded token response."""
        if not isinstance(data, dict):
            raise ProtocolError(0, f"Unexpected token response: {data!r}")
        access_token = data.get("access_token")
        if not access_token:
            raise ProtocolError(0, "Missing access token in response")
        expires_in = data.get("expires_in")
        if expires_in is None:
            raise ProtocolError(0, "Missing expires_in in response")
        return cls(
            access_token=str(access_token),
            token_type=str(data.get("token_type", "")),
            expires_in=str(expires_in),
        )


@dataclass(frozen=True)
class Status:
    """Represents one status code/value pair of a device."""

    code: str
    value: Any

    @property
    def is_temperature(self) -> bool:
        """Return True if this status reports the current room temperature."""
        return self.code in TEMPERATURE_STATUS_CODES


@dataclass(frozen=True)
class Device:
    """Represents a device of the Ally account."""

    id: str
    name: str
    device_type: str = ""
    active_time: int = 0
    create_time: int = 0
    update_time: int = 0
    online: bool = False
    sub: bool = False
    time_zone: str = ""
    status: tuple[Status, ...] = ()

    def get_status(self, code: str) -> Status | None:
        """Return the first status with the given code."""
        for status in self.status:
            if status.code == code:
                return status
        return None

    @property
    def temperatures(self) -> list[Status]:
        """Return the temperature statuses of the device in API order."""
        return [status for status in self.status if status.is_temperature]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Device:
        """Build a device from one entry of the device list.

        Raises:
            ProtocolError: If a field does not have the expected JSON type.

        """
        try:
            status_data = data.get("status")
            if status_data is None:
                status_data = []
            if not isinstance(status_data, list):
                err_msg = f"status is not a list: {status_data!r}"
                raise TypeError(err_msg)  # noqa: TRY301
            status = tuple(
                Status(code=entry["code"], value=entry.get("value"))
                for entry in status_data
                if isinstance(entry, dict) and "code" in entry
            )
            return cls(
                id=str(data["id"]),
                name=data.get("name", "Unknown Device"),
                device_type=data.get("device_type", ""),
                active_time=data.get("active_time", 0),
                create_time=data.get("create_time", 0),
                update_time=data.get("update_time", 0),
                online=bool(data.get("online", False)),
                sub=bool(data.get("sub", False)),
                time_zone=data.get("time_zone", ""),
                status=status,
            )
        except (KeyError, TypeError, ValueError) as err:
            err_msg = f"Malformed device {data.get('id')!r}: {err}"
            raise ProtocolError(0, err_msg) from err


@dataclass(frozen=True)
class DevicesResponse:
    """Represents the envelope of the device list endpoint."""

    result: list[Device]
    t: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> DevicesResponse:
        """Build the envelope, skipping device entries without an ID."""
        if not isinstance(data, dict) or not isinstance(data.get("result"), list):
            raise ProtocolError(0, f"Unexpected device list response: {data!r}")

        devices = []
        for device_data in data["result"]:
            if not isinstance(device_data, dict) or not device_data.get("id"):
                _LOGGER.warning("Skipping device with missing ID: %s", device_data)
                continue
            devices.append(Device.from_dict(device_data))

        return cls(result=devices, t=data.get("t", 0))
