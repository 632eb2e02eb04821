"""Shared fixtures: a hand-driven transport, a live session, an in-memory host."""

from __future__ import annotations

from collections import deque

import pytest

from tweetbridge.host import MemoryHost
from tweetbridge.models import AccountSettings, HttpResponse, SessionState
from tweetbridge.session import SessionRegistry
from tweetbridge.transport import Completion, HttpRequest, Transport


class FakeTransport(Transport):
    """Records requests; tests decide when and how each one completes."""

    def __init__(self) -> None:
        self.requests: list[HttpRequest] = []
        self._pending: deque[tuple[HttpRequest, Completion]] = deque()

    def issue(self, request: HttpRequest, callback: Completion) -> None:
        self.requests.append(request)
        self._pending.append((request, callback))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def complete(self, body: bytes | str = b"", status_code: int = 200) -> HttpRequest:
        """Complete the oldest outstanding request."""
        request, callback = self._pending.popleft()
        if isinstance(body, str):
            body = body.encode("utf-8")
        callback(HttpResponse(status_code=status_code, body=body))
        return request

    def serve(self, bodies: list[str]) -> int:
        """Answer outstanding requests with *bodies* in order; return how many ran."""
        served = 0
        for body in bodies:
            if not self._pending:
                break
            self.complete(body)
            served += 1
        return served


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def session(registry: SessionRegistry) -> SessionState:
    return registry.connect("me", secret="s3cret", settings=AccountSettings())


@pytest.fixture
def host() -> MemoryHost:
    return MemoryHost()
