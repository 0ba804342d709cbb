"""Polling loop keeping a Danfoss Ally snapshot up to date."""

import asyncio
from contextlib import suppress
import logging

from .client import DanfossAlly
from .const import DEFAULT_POLLING_INTERVAL
from .exceptions import AuthError, RecoverableError

_LOGGER = logging.getLogger(__name__)


class AllyPoller:
    """Periodically renews the token and refreshes the device snapshot.

    Each cycle sleeps for `polling_interval` seconds, renews the token when
    it is due, fetches the device list and logs the room temperatures. Call
    errors are logged and never end the loop; only `stop()` does.

    Attributes:
        client (DanfossAlly): Client owning the token and the snapshot.
        _polling_interval (float): Fixed delay before every cycle, in seconds.
        _poll_task (Optional[asyncio.Task]): Task running `run_forever`.
        _stop_event (asyncio.Event): Set to interrupt the sleep and exit.
        _cycle_lock (asyncio.Lock): Serialises cycles.

    """

    def __init__(
        self,
        client: DanfossAlly,
        polling_interval: float = DEFAULT_POLLING_INTERVAL,
    ) -> None:
        """Initialize the poller.

        Raises:
            TypeError: If `client` is not a `DanfossAlly` instance.
            ValueError: If `polling_interval` is not positive.

        """
        if not isinstance(client, DanfossAlly):
            err_msg = "client must be an instance of DanfossAlly"
            raise TypeError(err_msg)
        self.client = client
        self._polling_interval = self._validate_interval(polling_interval)
        self._poll_task: asyncio.Task | None = None
        self._is_running = False
        self._stop_event = asyncio.Event()
        self._cycle_lock = asyncio.Lock()

    @staticmethod
    def _validate_interval(polling_interval: float) -> float:
        if polling_interval <= 0:
            err_msg = f"polling_interval must be positive, got {polling_interval}"
            raise ValueError(err_msg)
        return polling_interval

    @property
    def polling_interval(self) -> float:
        """Return the delay between two cycles in seconds."""
        return self._polling_interval

    @polling_interval.setter
    def polling_interval(self, value: float) -> None:
        if self._is_running:
            err_msg = "polling_interval cannot be changed while the poller runs"
            raise RuntimeError(err_msg)
        self._polling_interval = self._validate_interval(value)

    @property
    def is_running(self) -> bool:
        """Return True while the polling loop is active."""
        return self._is_running

    async def async_poll_once(self) -> None:
        """Run one cycle: check the token, fetch the devices, log temperatures."""
        async with self._cycle_lock:
            token_manager = self.client.token_manager

            if token_manager.should_renew():
                try:
                    await token_manager.renew()
                except RecoverableError as err:
                    _LOGGER.error("Could not fetch token. %s", err)

            try:
                await self.client.async_update_devices()
            except AuthError as err:
                _LOGGER.error("Could not get devices, token rejected. %s", err)
                token_manager.invalidate()
            except RecoverableError as err:
                _LOGGER.error("Could not get devices. %s", err)

            self.client.log_room_temperatures()

    async def run_forever(self) -> None:
        """Poll until `stop()` is called.

        The interval is fixed: time spent in a cycle is not deducted from the
        next sleep.
        """
        self._is_running = True
        _LOGGER.info(
            "Starting polling loop, interval %s seconds.", self._polling_interval
        )
        try:
            while not self._stop_event.is_set():
                with suppress(TimeoutError):
                    await asyncio.wait_for(
                        self._stop_event.wait(), timeout=self._polling_interval
                    )
                if self._stop_event.is_set():
                    break
                await self.async_poll_once()
        finally:
            self._is_running = False
            self._stop_event.clear()
            _LOGGER.info("Polling loop finished.")

    def start(self) -> asyncio.Task:
        """Run `run_forever` in a background task and return it."""
        if self._poll_task and not self._poll_task.done():
            _LOGGER.warning("Poller is already running.")
            return self._poll_task
        self._is_running = True
        self._poll_task = asyncio.create_task(self.run_forever())
        _LOGGER.debug("Polling task started.")
        return self._poll_task

    async def stop(self) -> None:
        """Stop the loop, letting a cycle in progress finish."""
        task = self._poll_task
        self._poll_task = None
        if not self._is_running and (task is None or task.done()):
            _LOGGER.debug("Poller is not running.")
            return
        _LOGGER.info("Stopping poller...")
        self._stop_event.set()
        if task and not task.done():
            await task
