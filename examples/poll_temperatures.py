#!/usr/bin/env python3

"""Example script polling room temperatures with pydanfoss_ally."""

import asyncio
import logging
import os

from pydanfoss_ally import AllyPoller, ConfigurationError, DanfossAlly

# --- Configuration ---
logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s"
)
# Keep aiohttp internals out of the debug output
logging.getLogger("aiohttp").setLevel(logging.WARNING)

# Optional polling interval override in seconds
POLLING_INTERVAL = float(os.getenv("DANFOSS_POLLING_INTERVAL", "30"))


# --- Main Async Function ---
async def main():
    """Poll the Danfoss Ally API until interrupted."""
    logging.info("Starting pydanfoss_ally example script...")
    try:
        # DANFOSS_API_KEY and DANFOSS_API_SECRET are read here
        ally = DanfossAlly()
    except ConfigurationError as e:
        logging.error("%s", e)
        return

    async with ally:
        poller = AllyPoller(ally, polling_interval=POLLING_INTERVAL)

        # Run one cycle immediately so the first readings show up right away
        await poller.async_poll_once()
        for device in ally.devices:
            logging.info(
                "  %s (%s), online: %s", device.name, device.device_type, device.online
            )

        # Runs until the script is interrupted
        await poller.run_forever()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("Script interrupted by user.")
