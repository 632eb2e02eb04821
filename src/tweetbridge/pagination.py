"""Cursor-driven listing: fetch a page, hand it off, follow ``next_cursor``."""

from __future__ import annotations

import logging
from typing import Callable

from tweetbridge.host import Host
from tweetbridge.materialize import decode_list
from tweetbridge.models import HttpResponse, ListKind, ResponseList, SessionState
from tweetbridge.session import SessionRegistry, guarded
from tweetbridge.transport import HttpRequest, Transport
from tweetbridge.xmltree import parse

logger = logging.getLogger(__name__)

PageHandler = Callable[[ResponseList], None]


class CursorChain:
    """One paginated walk over a listing endpoint.

    Every page is passed to *on_page* as soon as it is decoded and then
    dropped; nothing is accumulated across pages.  A non-200 response ends
    the chain with a user-visible error, leaving earlier pages' effects in
    place.  Chains keep their own cursor, so several can run side by side.

    *extra_params* are fixed when the chain is built and sent with every
    page, so a ``since_id`` filter stays the same for the whole walk.
    """

    def __init__(
        self,
        *,
        session: SessionState,
        registry: SessionRegistry,
        transport: Transport,
        host: Host,
        url: str,
        kind: ListKind,
        on_page: PageHandler,
        extra_params: dict[str, str] | None = None,
        failure_message: str = "Could not retrieve list",
    ) -> None:
        self.session = session
        self.registry = registry
        self._transport = transport
        self._host = host
        self._url = url
        self._kind = kind
        self._on_page = on_page
        self._extra_params = dict(extra_params or {})
        self._failure_message = failure_message
        self.pages_fetched = 0
        self.done = False
        self.failed = False

    # ── public ──────────────────────────────────────────────────────────

    @guarded
    def issue(self, cursor: int = 0) -> None:
        """Request the page at *cursor* (0 for the first page)."""
        params = {"cursor": str(cursor)}
        params.update(self._extra_params)
        request = HttpRequest(
            url=self._url,
            method="GET",
            user=self.session.handle,
            secret=self.session.secret,
            params=params,
        )
        logger.debug("GET %s %s", self._url, params)
        self._transport.issue(request, self._on_complete)

    # ── private ─────────────────────────────────────────────────────────

    @guarded
    def _on_complete(self, response: HttpResponse) -> None:
        self.pages_fetched += 1
        if response.status_code != 200:
            self.failed = True
            self.done = True
            logger.warning(
                "%s: HTTP %d on page %d of %s",
                self.session.handle,
                response.status_code,
                self.pages_fetched,
                self._url,
            )
            self._host.error(
                f"{self._failure_message}. HTTP STATUS: {response.status_code}"
            )
            return

        page = decode_list(parse(response.body), self._kind)
        logger.info(
            "%s: page %d of %s → %d %s items (next_cursor=%s)",
            self.session.handle,
            self.pages_fetched,
            self._url,
            len(page.items),
            self._kind.value,
            page.next_cursor,
        )
        self._on_page(page)

        if page.has_more:
            self.issue(page.next_cursor)
        else:
            self.done = True
