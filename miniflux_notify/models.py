"""
Data model for entries returned by the Miniflux REST API.

Only the fields needed to detect new entries and render a
notification are decoded; everything else in the payload is ignored.
"""

from pydantic import BaseModel


class Feed(BaseModel):
    """
    Feed an entry belongs to.

    Attributes
    ----------
    title : str
        Feed title, used when the entry has no author.
    """

    title: str


class Entry(BaseModel):
    """
    One unread feed entry.

    Attributes
    ----------
    id : int
        Server-side identifier. Not used for comparison.
    title : str
        Entry title.
    author : str
        Entry author, may be empty.
    hash : str
        Content fingerprint, stable across polls for the same entry.
    feed : Feed
        Feed the entry belongs to.
    url : str
        Link to the original article.
    """

    id: int
    title: str
    author: str
    hash: str
    feed: Feed
    url: str

    @property
    def source(self) -> str:
        """Name shown as the notification sender: author, else feed title."""
        return self.author or self.feed.title


class Snapshot(BaseModel):
    """
    All unread entries as of one successful fetch.

    Mirrors the body of ``GET /v1/entries``. Entries are kept in the
    order the server returned them (newest first).

    Attributes
    ----------
    total : int
        Number of unread entries reported by the server.
    entries : list[Entry]
        Unread entries, newest first.
    """

    total: int
    entries: list[Entry]
