"""
New-entry detection between two unread snapshots.

Entries are compared by content hash and list order only. The result is
a boundary index into the current list: everything before it is new,
everything at or after it was already known.
"""

import logging
from collections.abc import Sequence

from miniflux_notify.models import Entry

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when there is no current entry to compare against."""

    pass


def find_new_entries_boundary(previous: Sequence[Entry], current: Sequence[Entry]) -> int:
    """
    Find the index of the first already-known entry in ``current``.

    ``previous`` is scanned in order; for each of its entries ``current``
    is scanned for the same hash. The first match ends the search and its
    position in ``current`` is the boundary, so ``current[:boundary]`` are
    the new entries.

    When no hash of ``previous`` appears in ``current`` (full turnover, or
    an empty ``previous``) the boundary is 0 and nothing is reported as new.

    Parameters
    ----------
    previous : Sequence[Entry]
        Entries from the last snapshot, newest first. May be empty.
    current : Sequence[Entry]
        Entries from the fresh snapshot, newest first.

    Returns
    -------
    int
        Number of leading entries in ``current`` that are new.

    Raises
    ------
    InvalidInputError
        If ``current`` is empty.
    """
    if not current:
        raise InvalidInputError("No entries provided when searching for new entries")

    for known in previous:
        for index, entry in enumerate(current):
            if known.hash == entry.hash:
                return index

    # TODO: full turnover suppresses every notification; revisit once
    # product decides whether a non-empty previous snapshot with no overlap
    # should report the whole current list instead.
    logger.debug(
        "No overlap between %d previous and %d current entries",
        len(previous),
        len(current),
    )
    return 0
