"""HTTP collaborator: dispatch requests, hand completions back one at a time."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable

import requests
from pydantic import BaseModel, Field

from tweetbridge.models import HttpResponse

logger = logging.getLogger(__name__)

Completion = Callable[[HttpResponse], None]


class HttpRequest(BaseModel):
    url: str
    method: str = "GET"
    user: str = ""
    secret: str = ""
    params: dict[str, str] = Field(default_factory=dict)


class Transport(ABC):
    """Asynchronous request dispatch.

    ``issue`` must return without running *callback*; the callback runs
    later, on the same control loop, once the response is in.
    """

    @abstractmethod
    def issue(self, request: HttpRequest, callback: Completion) -> None: ...


class RequestsTransport(Transport):
    """Queue-backed transport on top of a ``requests.Session``.

    Requests are queued by :meth:`issue` and performed by
    :meth:`run_pending`, which also performs anything the callbacks queue
    (the next page of a listing, for example).
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout
        self._session = requests.Session()
        self._pending: deque[tuple[HttpRequest, Completion]] = deque()

    # ── public ──────────────────────────────────────────────────────────
    def issue(self, request: HttpRequest, callback: Completion) -> None:
        self._pending.append((request, callback))

    def run_pending(self) -> int:
        """Perform queued requests until the queue is empty; return how many ran."""
        done = 0
        while self._pending:
            request, callback = self._pending.popleft()
            callback(self._perform(request))
            done += 1
        return done

    @property
    def pending(self) -> int:
        return len(self._pending)

    # ── private ─────────────────────────────────────────────────────────
    def _perform(self, request: HttpRequest) -> HttpResponse:
        auth = (request.user, request.secret) if request.user else None
        method = request.method.upper()
        try:
            if method == "POST":
                resp = self._session.post(
                    request.url, data=request.params, auth=auth, timeout=self._timeout
                )
            else:
                resp = self._session.get(
                    request.url, params=request.params, auth=auth, timeout=self._timeout
                )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, request.url, exc)
            return HttpResponse(status_code=0, body=str(exc).encode("utf-8"))
        logger.debug("%s %s -> %d (%d bytes)", method, request.url, resp.status_code, len(resp.content))
        return HttpResponse(status_code=resp.status_code, body=resp.content)
