"""Route decoded timeline statuses to the user, grouped or as private messages."""

from __future__ import annotations

import logging

from tweetbridge import watermark
from tweetbridge.formatting import format_message
from tweetbridge.host import Host
from tweetbridge.models import ResponseList, SessionState, Status
from tweetbridge.roster import ensure_buddy

logger = logging.getLogger(__name__)

GROUP_CONVERSATION_NAME = "home/timeline"


class DeliveryRouter:
    """Deliver statuses for one session according to its account settings."""

    def __init__(self, session: SessionState, host: Host) -> None:
        self.session = session
        self.host = host

    # ── public ──────────────────────────────────────────────────────────

    def deliver_page(self, page: ResponseList) -> int:
        """Deliver every status of *page* in list order; return how many were sent.

        Items are taken as decoded, which for a newest-first timeline
        document means oldest first.
        """
        statuses = [item for item in page.items if isinstance(item, Status)]
        deliver = (
            self.grouped_deliver
            if self.session.settings.use_groupchat
            else self.direct_deliver
        )
        sent = 0
        for status in statuses:
            if deliver(status):
                sent += 1
        logger.info(
            "Delivered %d/%d statuses for %s (%s); watermark=%s",
            sent,
            len(statuses),
            self.session.handle,
            "grouped" if self.session.settings.use_groupchat else "direct",
            self.session.timeline_watermark,
        )
        return sent

    def grouped_deliver(self, status: Status) -> bool:
        """Post *status* into the session's shared timeline conversation."""
        conversation = self._group_conversation()
        author = status.author.handle
        watermark.observe(self.session, status.id)
        if not author:
            self.host.log(
                f"Message from unknown user in {conversation}: {self._render(status)}"
            )
            return False
        ensure_buddy(self.host, author)
        if not self.host.has_participant(conversation, author):
            self.host.add_participant(conversation, author)
        self.host.post_group_message(conversation, author, self._render(status))
        return True

    def direct_deliver(self, status: Status) -> bool:
        """Post *status* as a private message from its author."""
        author = status.author.handle
        watermark.observe(self.session, status.id)
        if not author:
            self.host.log(f"Message from unknown user: {self._render(status)}")
            return False
        self.host.post_direct_message(author, self._render(status))
        return True

    # ── private ─────────────────────────────────────────────────────────

    def _group_conversation(self) -> str:
        if self.session.group_conversation is None:
            ref = self.host.create_conversation(GROUP_CONVERSATION_NAME)
            self.host.add_participant(ref, self.session.handle)
            self.session.group_conversation = ref
            logger.info("Created %s for %s", ref, self.session.handle)
        return self.session.group_conversation

    def _render(self, status: Status) -> str:
        settings = self.session.settings
        return format_message(
            status.text,
            policy=settings.strip_html,
            host_renders_html=settings.host_renders_html,
        )
