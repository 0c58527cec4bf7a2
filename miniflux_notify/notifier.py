"""
Protocol definition for notification backends.

Defines the common interface the poll loop uses to announce new entries.
"""

from typing import Any, Protocol, runtime_checkable

from miniflux_notify.models import Entry


@runtime_checkable
class Notifier(Protocol):
    """
    Protocol defining the interface for notification backends.

    The @runtime_checkable decorator allows using isinstance() checks
    against this protocol for structural typing validation.
    """

    async def notify(self, entry: Entry) -> Any:
        """
        Show a notification for a single entry.

        Returns once the notification is displayed. Waiting for the user
        to act on it happens in the background.

        Parameters
        ----------
        entry : Entry
            The entry to announce.

        Returns
        -------
        Any
            Backend-specific handle for the displayed notification.
        """
        ...

    async def notify_batch(self, entries: list[Entry]) -> int:
        """
        Show notifications for several entries concurrently.

        Failures are logged per entry and never abort the batch.

        Parameters
        ----------
        entries : list[Entry]
            Entries to announce, newest first.

        Returns
        -------
        int
            Number of notifications successfully displayed.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the backend."""
        ...
