"""Python library for polling the Danfoss Ally API."""

# Import main classes for easier access
from .auth import TokenManager
from .client import DanfossAlly
from .credentials import Credentials, load_credentials
from .poller import AllyPoller
from .models import Device, DevicesResponse, Status, Token

# Import exceptions for easier handling
from .exceptions import (
    AuthError,
    ConfigurationError,
    DataError,
    NetworkError,
    ProtocolError,
    PyDanfossAllyException,
    RecoverableError,
)

__version__ = "0.1.0"

# Define what gets imported with 'from pydanfoss_ally import *'
__all__ = [
    "AllyPoller",
    "AuthError",
    "ConfigurationError",
    "Credentials",
    "DanfossAlly",
    "DataError",
    "Device",
    "DevicesResponse",
    "NetworkError",
    "ProtocolError",
    "PyDanfossAllyException",
    "RecoverableError",
    "Status",
    "Token",
    "TokenManager",
    "load_credentials",
    "__version__",
]
