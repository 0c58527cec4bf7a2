"""
Desktop notification backend.

Shows one system notification per new entry, with a button that opens
the entry in the default web browser.
"""

import asyncio
import logging
import webbrowser

from desktop_notifier import Button, DesktopNotifier, Notification

from miniflux_notify.config import NotificationConfig
from miniflux_notify.models import Entry

logger = logging.getLogger(__name__)

OPEN_ACTION_LABEL = "Open in web browser"


class NotificationError(Exception):
    """Raised when a notification could not be displayed."""

    pass


def _open_url(url: str) -> None:
    """Open a URL in the default web browser, logging any failure."""
    try:
        if not webbrowser.open(url):
            logger.error("No web browser available to open %s", url)
    except Exception as e:
        logger.error("Failed to open %s: %s", url, e)


def open_in_browser(url: str) -> asyncio.Future:
    """
    Open a URL in the default web browser without blocking the event loop.

    Runs from a button callback on the event loop, so the browser launch
    is handed to the default executor. Failures are logged, never raised.

    Returns
    -------
    asyncio.Future
        Completes once the browser launch has been attempted.
    """
    loop = asyncio.get_running_loop()
    return loop.run_in_executor(None, _open_url, url)


class DesktopEntryNotifier:
    """
    Desktop notification client.

    Wraps desktop-notifier. Button callbacks are dispatched by the library
    on the running event loop, so the wait for a click outlives the poll
    cycle that showed the notification.
    """

    def __init__(self, config: NotificationConfig | None = None):
        """
        Initialize the desktop notifier.

        Parameters
        ----------
        config : NotificationConfig | None
            Notification settings. Defaults are used when omitted.
        """
        self.config = config or NotificationConfig()
        self._notifier = DesktopNotifier(app_name=self.config.app_name)

    @staticmethod
    def format_title(entry: Entry) -> str:
        """Build the notification title for an entry."""
        return f"New RSS Entry from {entry.source}"

    async def notify(self, entry: Entry) -> Notification:
        """
        Show a notification for a single entry.

        Parameters
        ----------
        entry : Entry
            The entry to announce.

        Returns
        -------
        Notification
            Handle of the displayed notification.

        Raises
        ------
        NotificationError
            If the notification server rejected or failed to show it.
        """
        buttons = []
        if self.config.open_action:
            url = entry.url
            buttons.append(Button(title=OPEN_ACTION_LABEL, on_pressed=lambda: open_in_browser(url)))

        try:
            handle = await self._notifier.send(
                title=self.format_title(entry),
                message=entry.title,
                buttons=buttons,
            )
        except Exception as e:
            raise NotificationError(f"Failed to show notification for entry {entry.id}: {e}") from e

        logger.debug("Notification shown for: %s", entry.title[:50])
        return handle

    async def notify_batch(self, entries: list[Entry]) -> int:
        """
        Show notifications for several entries concurrently.

        Parameters
        ----------
        entries : list[Entry]
            Entries to announce, newest first.

        Returns
        -------
        int
            Number of notifications successfully displayed.
        """
        logger.debug("Dispatching %d notification(s)", len(entries))
        results = await asyncio.gather(
            *(self.notify(entry) for entry in entries),
            return_exceptions=True,
        )

        shown = 0
        for entry, result in zip(entries, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.error("Failed to notify for entry '%s': %s", entry.title[:50], result)
            else:
                shown += 1

        return shown

    async def close(self) -> None:
        """Nothing to release; present for the Notifier protocol."""
        logger.debug("Desktop notifier closed")
