"""
Miniflux Notify - Desktop notifications for new Miniflux entries.

Polls a Miniflux server for unread entries and raises a desktop
notification for every entry that appeared since the previous poll.
"""

__version__ = "1.0.0"
