"""Per-session API client: binds each endpoint to its completion handling."""

from __future__ import annotations

import functools
import logging
from typing import Any

from tweetbridge import config
from tweetbridge.delivery import DeliveryRouter
from tweetbridge.host import Host
from tweetbridge.models import HttpResponse, ListKind, ResponseList, SessionState, User
from tweetbridge.pagination import CursorChain, PageHandler
from tweetbridge.roster import reconcile
from tweetbridge.session import SessionRegistry, guarded
from tweetbridge.transport import HttpRequest, Transport
from tweetbridge.watermark import since_params

logger = logging.getLogger(__name__)


class TwitterClient:
    """Friend listings, home timeline polling and posting for one session."""

    def __init__(
        self,
        session: SessionState,
        registry: SessionRegistry,
        transport: Transport,
        host: Host,
        api_base: str = config.API_BASE,
    ) -> None:
        self.session = session
        self.registry = registry
        self._transport = transport
        self._host = host
        self._api_base = api_base.rstrip("/")
        self.router = DeliveryRouter(session, host)
        self.friend_ids_seen = 0

    # ── listings ────────────────────────────────────────────────────────

    @guarded
    def get_friends_ids(self, cursor: int = 0) -> CursorChain:
        """Walk the opaque friend-id listing."""
        chain = self._chain(
            config.FRIENDS_IDS_PATH,
            ListKind.OPAQUE_ID,
            self._on_friend_ids,
            failure_message="Could not retrieve friends",
        )
        chain.issue(cursor)
        return chain

    @guarded
    def get_statuses_friends(self, cursor: int = 0) -> CursorChain:
        """Walk the full friend listing and add every friend as a buddy."""
        chain = self._chain(
            config.SHOW_FRIENDS_PATH,
            ListKind.USER,
            self._on_friends,
            failure_message="Could not retrieve friends",
        )
        chain.issue(cursor)
        return chain

    @guarded
    def get_home_timeline(self, cursor: int = 0) -> CursorChain:
        """Fetch new timeline statuses and deliver them.

        The ``since_id`` filter is taken from the watermark once, here, so
        later pages of the same walk are not cut off by ids delivered from
        earlier ones.
        """
        chain = self._chain(
            config.HOME_TIMELINE_PATH,
            ListKind.STATUS,
            self.router.deliver_page,
            extra_params=since_params(self.session),
            failure_message="Could not retrieve home/timeline",
        )
        chain.issue(cursor)
        return chain

    # ── posting ─────────────────────────────────────────────────────────

    @guarded
    def post_status(self, text: str) -> None:
        self._post(
            config.STATUS_UPDATE_PATH,
            {"status": text},
            failure_message="Could not post tweet",
        )

    @guarded
    def direct_messages_new(self, who: str, text: str) -> None:
        self._post(
            config.DIRECT_MESSAGES_NEW_PATH,
            {"screen_name": who, "text": text},
            failure_message="Could not send direct message",
        )

    # ── private ─────────────────────────────────────────────────────────

    def _chain(
        self, path: str, kind: ListKind, on_page: PageHandler, **kwargs: Any
    ) -> CursorChain:
        return CursorChain(
            session=self.session,
            registry=self.registry,
            transport=self._transport,
            host=self._host,
            url=self._api_base + path,
            kind=kind,
            on_page=on_page,
            **kwargs,
        )

    def _post(self, path: str, params: dict[str, str], failure_message: str) -> None:
        request = HttpRequest(
            url=self._api_base + path,
            method="POST",
            user=self.session.handle,
            secret=self.session.secret,
            params=params,
        )
        self._transport.issue(
            request,
            functools.partial(self._on_post_complete, failure_message=failure_message),
        )

    @guarded
    def _on_post_complete(self, response: HttpResponse, failure_message: str) -> None:
        if response.status_code != 200:
            self._host.error(f"{failure_message}. HTTP STATUS: {response.status_code}")
            self._host.error(response.body.decode("utf-8", errors="replace"))
            return
        logger.info("%s: post accepted", self.session.handle)

    def _on_friend_ids(self, page: ResponseList) -> None:
        self.friend_ids_seen += len(page.items)
        logger.debug("%s: %d friend ids so far", self.session.handle, self.friend_ids_seen)

    def _on_friends(self, page: ResponseList) -> None:
        reconcile(self._host, [u for u in page.items if isinstance(u, User)])
