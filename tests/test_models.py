"""
Unit tests for the entry data model.

Tests cover decoding of API payloads and the notification source name.
"""

import pytest
from pydantic import ValidationError

from miniflux_notify.models import Entry, Feed, Snapshot


class TestEntry:
    """Tests for the Entry model."""

    def test_source_prefers_author(self) -> None:
        """Test that a non-empty author is used as source."""
        entry = Entry(
            id=1, title="t", author="Jane", hash="h", feed=Feed(title="Blog"), url="u"
        )

        assert entry.source == "Jane"

    def test_source_falls_back_to_feed_title(self) -> None:
        """Test that the feed title is used when the author is empty."""
        entry = Entry(
            id=1, title="t", author="", hash="h", feed=Feed(title="Blog"), url="u"
        )

        assert entry.source == "Blog"

    def test_hash_required(self) -> None:
        """Test that an entry without hash is rejected."""
        with pytest.raises(ValidationError):
            Entry.model_validate({"id": 1, "title": "No hash"})


class TestSnapshot:
    """Tests for the Snapshot model."""

    def test_decodes_api_payload(self, unread_payload) -> None:
        """Test decoding a full /v1/entries body, ignoring unknown fields."""
        snapshot = Snapshot.model_validate(unread_payload)

        assert snapshot.total == 3
        assert [e.id for e in snapshot.entries] == [303, 302, 301]
        first = snapshot.entries[0]
        assert first.title == "Release notes for 2.2"
        assert first.author == "Jane Doe"
        assert first.url == "https://blog.example.com/posts/2-2"
        assert first.feed.title == "Example Blog"

    def test_total_required(self) -> None:
        """Test that the total count is required."""
        with pytest.raises(ValidationError):
            Snapshot.model_validate({"entries": []})

    def test_entries_required(self) -> None:
        """Test that a payload without entries is rejected."""
        with pytest.raises(ValidationError):
            Snapshot.model_validate({"total": 3})

    def test_empty_entries_accepted(self) -> None:
        """Test that an explicit empty list decodes as zero unread."""
        assert Snapshot.model_validate({"total": 0, "entries": []}).entries == []

    @pytest.mark.parametrize("missing", ["title", "author", "url", "feed"])
    def test_entry_field_required(self, unread_payload, missing: str) -> None:
        """Test that an entry missing a displayed field is rejected."""
        del unread_payload["entries"][0][missing]

        with pytest.raises(ValidationError):
            Snapshot.model_validate(unread_payload)

    def test_feed_title_required(self, unread_payload) -> None:
        """Test that an entry whose feed has no title is rejected."""
        del unread_payload["entries"][0]["feed"]["title"]

        with pytest.raises(ValidationError):
            Snapshot.model_validate(unread_payload)
