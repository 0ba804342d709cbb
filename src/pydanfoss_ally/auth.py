"""Async token management for pydanfoss_ally."""

from collections.abc import Callable
import logging
import time
from typing import Any, Optional

import aiohttp

from .const import BASE_URL, DEFAULT_REQUEST_TIMEOUT, GRANT_TYPE, TOKEN_ENDPOINT
from .credentials import Credentials
from .exceptions import AuthError, DataError, NetworkError, ProtocolError
from .models import Token

_LOGGER = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_MULTIPLE_CHOICES = 300
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401


async def read_json_response(response: aiohttp.ClientResponse) -> Any:
    """Return the decoded body of a response, raising on error statuses.

    Raises:
        AuthError: If the API answered 400 or 401.
        ProtocolError: For any other non-2xx status, or a body that is not JSON.

    """
    if not HTTP_OK <= response.status < HTTP_MULTIPLE_CHOICES:
        error_text = await response.text()
        _LOGGER.error("API Error Response (%s): %s", response.status, error_text)
        if response.status in (HTTP_BAD_REQUEST, HTTP_UNAUTHORIZED):
            raise AuthError(response.status, error_text)
        raise ProtocolError(response.status, error_text)

    try:
        # Decode regardless of the advertised content type
        return await response.json(content_type=None)
    except ValueError as err:
        raise ProtocolError(response.status, f"Invalid JSON response: {err}") from err


class TokenManager:
    """Acquires and renews bearer tokens using the client-credentials grant.

    The expiry is tracked as the time elapsed since the last successful
    renewal, measured with `clock`, compared to the `expires_in` of the token.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the token manager with an empty, immediately due token."""
        self._credentials = credentials
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._clock = clock
        self._token = Token()
        self._last_renewal_time = clock()
        self._renewal_forced = False
        # Use provided session or create a new one
        self._session = session
        self._managed_session = session is None

    @property
    def token(self) -> Token:
        """Return the current token."""
        return self._token

    @property
    def last_renewal_time(self) -> float:
        """Return the clock reading of the last successful renewal."""
        return self._last_renewal_time

    @property
    def timeout(self) -> aiohttp.ClientTimeout:
        """Return the timeout applied to each request."""
        return self._timeout

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            _LOGGER.debug("Creating new aiohttp ClientSession for TokenManager.")
            self._session = aiohttp.ClientSession()
            self._managed_session = True
        return self._session

    async def close_session(self) -> None:
        """Close the aiohttp session if it's managed by this instance."""
        if self._session and not self._session.closed and self._managed_session:
            await self._session.close()
            self._session = None
            _LOGGER.debug("Managed aiohttp session closed by TokenManager.")
        elif self._session and not self._managed_session:
            _LOGGER.debug("Session provided externally, not closing.")

    def is_renewal_due(
        self,
        now: Optional[float] = None,
        last_renewal_time: Optional[float] = None,
    ) -> bool:
        """Return True once the token lifetime has elapsed since the last renewal.

        An elapsed time equal to `expires_in` counts as due.

        Raises:
            DataError: If the `expires_in` of the current token is not numeric.

        """
        if self._renewal_forced:
            return True
        if now is None:
            now = self._clock()
        if last_renewal_time is None:
            last_renewal_time = self._last_renewal_time
        return now - last_renewal_time >= self._token.expires_in_seconds()

    def should_renew(self) -> bool:
        """Return True if the token must be renewed now.

        A token whose lifetime cannot be parsed is reported and treated as due.
        """
        try:
            return self.is_renewal_due()
        except DataError as err:
            _LOGGER.warning("%s, treating token as due for renewal.", err)
            return True

    def invalidate(self) -> None:
        """Force the next renewal check to report due, keeping the token."""
        _LOGGER.debug("Token invalidated, renewal forced on next check.")
        self._renewal_forced = True

    async def get_access_token(self) -> str:
        """Return the current access token, renewing it if necessary."""
        if self.should_renew():
            await self.renew()
        return self._token.access_token

    async def renew(self) -> Token:
        """Request a new token and replace the stored one.

        The previous token and renewal time are kept when the request fails.

        Raises:
            NetworkError: If the token endpoint cannot be reached in time.
            AuthError: If the credentials are rejected.
            ProtocolError: If the response is not a usable token.

        """
        url = BASE_URL + TOKEN_ENDPOINT
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
            "Authorization": self._credentials.basic_auth_header(),
        }
        payload = {"grant_type": GRANT_TYPE}
        session = await self._get_session()

        try:
            _LOGGER.debug("Requesting token from %s", url)
            async with session.post(
                url,
                data=payload,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                token_data = await read_json_response(response)
        except TimeoutError as timeout_err:
            _LOGGER.error("Timeout during token request")
            err_msg = "Token request timed out"
            raise NetworkError(err_msg) from timeout_err
        except aiohttp.ClientError as req_err:
            _LOGGER.error("Request error during token request: %s", req_err)
            err_msg = f"Token request failed: {req_err}"
            raise NetworkError(err_msg) from req_err

        token = Token.from_dict(token_data)
        self._token = token
        self._last_renewal_time = self._clock()
        self._renewal_forced = False
        _LOGGER.info("Access token obtained, expires in %s seconds.", token.expires_in)
        return token
