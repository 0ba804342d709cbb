"""Client credentials for the Danfoss API."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
import os

from .const import ENV_API_KEY, ENV_API_SECRET
from .exceptions import ConfigurationError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """API key and secret issued for a Danfoss developer application."""

    key: str
    secret: str = field(repr=False)

    def basic_auth_header(self) -> str:
        """Return the HTTP Basic Authorization header value."""
        encoded = base64.b64encode(f"{self.key}:{self.secret}".encode()).decode("ascii")
        return f"Basic {encoded}"


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Read the API key and secret from the environment.

    Args:
        environ (Mapping[str, str] | None): Variables to read from. Defaults to
            `os.environ`.

    Returns:
        Credentials: The loaded key and secret.

    Raises:
        ConfigurationError: If either variable is unset or empty. The message
            names the missing variable.

    """
    if environ is None:
        environ = os.environ

    key = environ.get(ENV_API_KEY)
    if not key:
        err_msg = f"No Danfoss API key provided, set {ENV_API_KEY}"
        raise ConfigurationError(err_msg)

    secret = environ.get(ENV_API_SECRET)
    if not secret:
        err_msg = f"No Danfoss API secret provided, set {ENV_API_SECRET}"
        raise ConfigurationError(err_msg)

    _LOGGER.debug("Loaded Danfoss API credentials for key %s...", key[:4])
    return Credentials(key=key, secret=secret)
