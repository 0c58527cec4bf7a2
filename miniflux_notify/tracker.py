"""
In-memory tracking of the last unread snapshot.

The tracker is a two-state machine: it starts UNINITIALIZED and moves to
PRIMED on the first snapshot it is given, staying there for the rest of
the process lifetime. Nothing is persisted.
"""

import logging
from enum import Enum

from miniflux_notify.diff import InvalidInputError, find_new_entries_boundary
from miniflux_notify.models import Entry, Snapshot

logger = logging.getLogger(__name__)


class TrackerState(Enum):
    """Lifecycle state of a SnapshotTracker."""

    UNINITIALIZED = "uninitialized"
    PRIMED = "primed"


class SnapshotTracker:
    """
    Holds the previous snapshot and extracts new entries from each fresh one.

    Only successfully fetched snapshots may be passed to ``advance``; a
    failed fetch must simply not call it, which leaves the stored
    snapshot untouched.
    """

    def __init__(self) -> None:
        self.state = TrackerState.UNINITIALIZED
        self._snapshot: Snapshot | None = None

    @property
    def snapshot(self) -> Snapshot | None:
        """The last snapshot given to ``advance``, if any."""
        return self._snapshot

    def advance(self, current: Snapshot) -> list[Entry]:
        """
        Compare ``current`` with the stored snapshot, then store it.

        Parameters
        ----------
        current : Snapshot
            Freshly fetched snapshot.

        Returns
        -------
        list[Entry]
            Entries new since the stored snapshot, newest first. Always
            empty on the first call.
        """
        if self.state is TrackerState.UNINITIALIZED:
            logger.info(
                "First snapshot with %d unread entr%s, not notifying",
                len(current.entries),
                "y" if len(current.entries) == 1 else "ies",
            )
            new_entries: list[Entry] = []
        else:
            new_entries = self._new_entries(current)

        self._snapshot = current
        self.state = TrackerState.PRIMED
        return new_entries

    def _new_entries(self, current: Snapshot) -> list[Entry]:
        if self._snapshot is None:
            raise RuntimeError("Tracker is primed without a snapshot")

        # An empty unread list means everything was read, not a diff failure
        if not current.entries:
            logger.debug("No unread entries")
            return []

        try:
            boundary = find_new_entries_boundary(self._snapshot.entries, current.entries)
        except InvalidInputError as e:
            logger.error("Failed to compare snapshots: %s", e)
            return []

        return list(current.entries[:boundary])
