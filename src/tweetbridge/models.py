"""Domain models shared by the materializer, pagination and delivery layers."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class ListKind(str, Enum):
    STATUS = "status"
    USER = "user"
    OPAQUE_ID = "id"


class StripPolicy(str, Enum):
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


class User(BaseModel):
    display_name: str = ""
    handle: str = ""


class Status(BaseModel):
    id: int = 0  # unsigned 64-bit; 0 when the document had no usable id
    created_at: str = ""
    text: str = ""
    author: User = Field(default_factory=User)


class ResponseList(BaseModel):
    """One decoded response page.

    ``items`` holds :class:`Status` for ``STATUS`` lists, :class:`User` for
    ``USER`` lists and the raw id text for ``OPAQUE_ID`` lists.
    """

    kind: ListKind
    items: list[Union[Status, User, str]] = Field(default_factory=list)
    next_cursor: int | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None and self.next_cursor > 0


class AccountSettings(BaseModel):
    strip_html: StripPolicy = StripPolicy.AUTO
    use_groupchat: bool = False
    host_renders_html: bool = False


class SessionState(BaseModel):
    handle: str
    secret: str = ""
    timeline_watermark: int | None = None
    group_conversation: str | None = None
    settings: AccountSettings = Field(default_factory=AccountSettings)


class HttpResponse(BaseModel):
    status_code: int
    body: bytes = b""
