"""Per-session timeline high-water mark.

The ``since_id`` filter sent to the server is only an optimisation; the
watermark itself is recomputed from every page, so duplicate or out-of-order
ids can never move it backwards.
"""

from __future__ import annotations

import logging

from tweetbridge.models import SessionState, Status

logger = logging.getLogger(__name__)


def since_params(session: SessionState) -> dict[str, str]:
    """Extra timeline request parameters; empty before the first delivery."""
    if session.timeline_watermark:
        return {"since_id": str(session.timeline_watermark)}
    return {}


def observe(session: SessionState, status_id: int) -> int | None:
    """Raise the watermark to *status_id* if it is higher; return the watermark."""
    current = session.timeline_watermark or 0
    if status_id > current:
        session.timeline_watermark = status_id
    return session.timeline_watermark


def advance(session: SessionState, statuses: list[Status]) -> int | None:
    """Fold a whole page into the watermark; an empty page changes nothing."""
    if statuses:
        before = session.timeline_watermark
        observe(session, max(s.id for s in statuses))
        if session.timeline_watermark != before:
            logger.debug(
                "Watermark for %s: %s → %s",
                session.handle,
                before,
                session.timeline_watermark,
            )
    return session.timeline_watermark
