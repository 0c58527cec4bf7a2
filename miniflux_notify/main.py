"""
Main entry point for Miniflux Notify.

Runs the async poll loop that fetches unread entries and raises desktop
notifications for the ones that are new since the previous poll.
"""

import argparse
import asyncio
import logging
import signal
import sys
from urllib.parse import urlparse

import coloredlogs
from pydantic import ValidationError

from miniflux_notify.client import FetchError, MinifluxClient
from miniflux_notify.config import API_KEY_ENV_VAR, AppConfig, load_config
from miniflux_notify.desktop import DesktopEntryNotifier
from miniflux_notify.notifier import Notifier
from miniflux_notify.tracker import SnapshotTracker

logger = logging.getLogger(__name__)


def redact_proxy_url(proxy_url: str) -> str:
    """
    Redact credentials from a proxy URL for safe logging.

    Parameters
    ----------
    proxy_url : str
        The proxy URL potentially containing credentials.

    Returns
    -------
    str
        The proxy URL with password redacted.
    """
    try:
        parsed = urlparse(proxy_url)
        if parsed.password:
            netloc = parsed.hostname or ""
            if parsed.port:
                netloc = f"{netloc}:{parsed.port}"
            if parsed.username:
                netloc = f"{parsed.username}:****@{netloc}"
            return f"{parsed.scheme}://{netloc}{parsed.path}"
        return proxy_url
    except ValueError:
        return "<proxy url>"


class MinifluxWatcher:
    """
    Main poll loop.

    Fetches unread entries on a fixed interval, hands each snapshot to the
    tracker and forwards the new entries to the notifier.
    """

    def __init__(self, config: AppConfig):
        """
        Initialize the watcher.

        Parameters
        ----------
        config : AppConfig
            Validated application configuration.
        """
        self.config = config
        self.tracker = SnapshotTracker()
        self.client: MinifluxClient | None = None
        self.notifier: Notifier | None = None
        self._running = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the watcher and poll until stopped."""
        logger.info("Starting Miniflux Notify")

        server = self.config.server
        if server.proxy:
            logger.info("Using proxy: %s", redact_proxy_url(server.proxy))

        self.client = MinifluxClient(
            server.url,
            server.api_key,
            timeout=server.request_timeout,
            user_agent=server.user_agent,
            proxy_url=server.proxy,
        )
        self.notifier = DesktopEntryNotifier(self.config.notifications)

        try:
            await self.client.healthcheck()
        except FetchError as e:
            logger.warning(
                "Server was not found! Make sure it is running and the specified URL "
                "is correct. (%s)",
                e,
            )

        self._running = True
        self._task = asyncio.create_task(self._poll_forever())

        try:
            await self._task
        except asyncio.CancelledError:
            logger.info("Poll loop cancelled")

    async def stop(self) -> None:
        """Stop the watcher gracefully."""
        logger.info("Stopping Miniflux Notify")
        self._running = False

        if self._task and not self._task.done():
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)

        if self.client:
            await self.client.close()
        if self.notifier:
            await self.notifier.close()

        logger.info("Miniflux Notify stopped")

    async def _poll_forever(self) -> None:
        """Poll, then sleep for the configured interval, until stopped."""
        interval = self.config.poll.interval

        while self._running:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Error during poll: %s", e)

            await asyncio.sleep(interval)

    async def poll_once(self) -> int:
        """
        Run a single poll cycle.

        A failed fetch is logged and leaves the tracked snapshot unchanged.

        Returns
        -------
        int
            Number of notifications shown in this cycle.
        """
        if not self.client or not self.notifier:
            raise RuntimeError("Components not initialized")

        try:
            snapshot = await self.client.fetch_unread()
        except FetchError as e:
            logger.error("Failed to get unread entries: %s", e)
            return 0

        new_entries = self.tracker.advance(snapshot)
        if not new_entries:
            logger.debug("No new entries")
            return 0

        logger.info(
            "Found %d new entr%s",
            len(new_entries),
            "y" if len(new_entries) == 1 else "ies",
        )
        return await self.notifier.notify_batch(new_entries)


def setup_logging(verbose: bool = False) -> None:
    """
    Configure application logging.

    Parameters
    ----------
    verbose : bool
        If True, set log level to DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO

    coloredlogs.install(
        level=level,
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("desktop_notifier").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="miniflux-notify",
        description="Desktop notifications for new Miniflux entries",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "server",
        nargs="?",
        help="Fully qualified URL of the Miniflux server",
    )
    parser.add_argument(
        "--api-key",
        help=f"Miniflux API key (or set {API_KEY_ENV_VAR})",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Optional path to a YAML configuration file",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        help="Seconds between polls (default: 10)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main() -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        config = load_config(
            args.config,
            server_url=args.server,
            api_key=args.api_key,
            interval=args.interval,
        )
    except FileNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)
    except ValidationError as e:
        missing = {
            error["loc"][-1]
            for error in e.errors()
            if error["type"] == "missing" and error["loc"][:1] == ("server",)
        }
        if "url" in missing:
            parser.error("the server URL is required")
        if "api_key" in missing:
            parser.error(f"an API key is required (--api-key or {API_KEY_ENV_VAR})")
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    watcher = MinifluxWatcher(config)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    def signal_handler():
        logger.info("Received shutdown signal")
        asyncio.create_task(watcher.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        loop.run_until_complete(watcher.start())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        loop.run_until_complete(watcher.stop())
        loop.close()


if __name__ == "__main__":
    main()
