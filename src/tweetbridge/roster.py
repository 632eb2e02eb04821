"""Keep the local buddy list in line with remotely observed users."""

from __future__ import annotations

import logging

from tweetbridge.host import Host
from tweetbridge.models import User

logger = logging.getLogger(__name__)


def ensure_buddy(host: Host, handle: str) -> bool:
    """Add *handle* and mark it online unless it is already a buddy.

    Returns True if the buddy was added.
    """
    if not handle or host.has_buddy(handle):
        return False
    host.add_buddy(handle)
    host.set_buddy_online(handle)
    logger.debug("Added buddy %s", handle)
    return True


def reconcile(host: Host, users: list[User]) -> int:
    """Ensure every user of a listing page is a buddy; return how many were new."""
    added = sum(1 for user in users if ensure_buddy(host, user.handle))
    if added:
        logger.info("Roster: %d new buddies from %d listed users", added, len(users))
    return added
