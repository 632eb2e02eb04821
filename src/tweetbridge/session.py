"""Live-session registry and the liveness guard for completion handlers.

The registry is owned by whatever manages connection lifecycles; the
ingestion code only checks membership.  A completion that arrives after its
session was disconnected is dropped without touching any state.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from tweetbridge.models import AccountSettings, SessionState

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class SessionRegistry:
    """The set of currently connected sessions, compared by identity."""

    def __init__(self) -> None:
        self._live: list[SessionState] = []

    def connect(
        self,
        handle: str,
        secret: str = "",
        settings: AccountSettings | None = None,
    ) -> SessionState:
        session = SessionState(
            handle=handle,
            secret=secret,
            settings=settings or AccountSettings(),
        )
        self._live.append(session)
        logger.info("Session connected: %s", handle)
        return session

    def disconnect(self, session: SessionState) -> None:
        before = len(self._live)
        self._live = [s for s in self._live if s is not session]
        if len(self._live) != before:
            logger.info("Session disconnected: %s", session.handle)

    def is_live(self, session: SessionState) -> bool:
        return any(s is session for s in self._live)


def guarded(method: F) -> F:
    """Skip *method* entirely when ``self.session`` is no longer live.

    The owning object must expose ``session`` and ``registry`` attributes.
    """

    @functools.wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if not self.registry.is_live(self.session):
            logger.debug(
                "Session %s is gone; discarding %s",
                self.session.handle,
                method.__qualname__,
            )
            return None
        return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
