"""Roster / conversation host the delivery layer talks to."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import TextIO

logger = logging.getLogger(__name__)


class Host(ABC):
    """Buddy list, conversations and user-visible output for one client."""

    @abstractmethod
    def has_buddy(self, handle: str) -> bool: ...

    @abstractmethod
    def add_buddy(self, handle: str) -> None: ...

    @abstractmethod
    def set_buddy_online(self, handle: str) -> None: ...

    @abstractmethod
    def create_conversation(self, name: str) -> str: ...

    @abstractmethod
    def has_participant(self, conversation: str, handle: str) -> bool: ...

    @abstractmethod
    def add_participant(self, conversation: str, handle: str) -> None: ...

    @abstractmethod
    def post_group_message(self, conversation: str, author: str, text: str) -> None: ...

    @abstractmethod
    def post_direct_message(self, author: str, text: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...

    @abstractmethod
    def log(self, message: str) -> None: ...


class MemoryHost(Host):
    """Keeps everything in memory; used for dry runs and tests."""

    def __init__(self) -> None:
        self.buddies: dict[str, str] = {}  # lower-cased handle → handle
        self.online: set[str] = set()
        self.conversations: dict[str, list[str]] = {}
        self.group_messages: list[tuple[str, str, str]] = []
        self.direct_messages: list[tuple[str, str]] = []
        self.errors: list[str] = []
        self.logs: list[str] = []

    def has_buddy(self, handle: str) -> bool:
        return handle.lower() in self.buddies

    def add_buddy(self, handle: str) -> None:
        self.buddies[handle.lower()] = handle

    def set_buddy_online(self, handle: str) -> None:
        self.online.add(handle.lower())

    def create_conversation(self, name: str) -> str:
        ref = name
        n = 1
        while ref in self.conversations:
            n += 1
            ref = f"{name}#{n}"
        self.conversations[ref] = []
        return ref

    def has_participant(self, conversation: str, handle: str) -> bool:
        wanted = handle.lower()
        return any(p.lower() == wanted for p in self.conversations.get(conversation, []))

    def add_participant(self, conversation: str, handle: str) -> None:
        self.conversations.setdefault(conversation, []).append(handle)

    def post_group_message(self, conversation: str, author: str, text: str) -> None:
        self.group_messages.append((conversation, author, text))

    def post_direct_message(self, author: str, text: str) -> None:
        self.direct_messages.append((author, text))

    def error(self, message: str) -> None:
        self.errors.append(message)

    def log(self, message: str) -> None:
        self.logs.append(message)


class ConsoleHost(MemoryHost):
    """Prints deliveries to a stream; errors and notices go to the log."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self._stream = stream or sys.stdout

    def post_group_message(self, conversation: str, author: str, text: str) -> None:
        super().post_group_message(conversation, author, text)
        print(f"[{conversation}] <{author}> {text}", file=self._stream)

    def post_direct_message(self, author: str, text: str) -> None:
        super().post_direct_message(author, text)
        print(f"<{author}> {text}", file=self._stream)

    def error(self, message: str) -> None:
        super().error(message)
        logger.error("%s", message)

    def log(self, message: str) -> None:
        super().log(message)
        logger.info("%s", message)
