"""Turn parsed response trees into typed records.

Decoding is permissive: unknown elements are skipped and missing or
malformed fields fall back to empty strings / zero.  Nothing in this module
raises on bad input, so new fields added by the API never break ingestion.

Each decoder is a small table mapping a lower-cased element name to the
action that stores it.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Callable

from tweetbridge.models import ListKind, ResponseList, Status, User
from tweetbridge.xmltree import tag_name, text_of

logger = logging.getLogger(__name__)

_UINT64_MAX = 2**64 - 1
_LEADING_DIGITS = re.compile(r"\s*([0-9]+)")


def _parse_uint(text: str) -> int:
    """Parse the leading base-10 digit run of *text*; 0 if there is none."""
    m = _LEADING_DIGITS.match(text)
    if m is None:
        return 0
    return min(int(m.group(1)), _UINT64_MAX)


# ── single records ─────────────────────────────────────────────────────────

def _user_name(user: User, node: ET.Element) -> None:
    user.display_name = text_of(node)


def _user_screen_name(user: User, node: ET.Element) -> None:
    user.handle = text_of(node)


_USER_FIELDS: dict[str, Callable[[User, ET.Element], None]] = {
    "name": _user_name,
    "screen_name": _user_screen_name,
}


def decode_user(node: ET.Element) -> User:
    """Decode a ``<user>`` element."""
    user = User()
    for child in node:
        action = _USER_FIELDS.get(tag_name(child))
        if action is not None:
            action(user, child)
    return user


def _status_text(status: Status, node: ET.Element) -> None:
    status.text = text_of(node)


def _status_created_at(status: Status, node: ET.Element) -> None:
    status.created_at = text_of(node)


def _status_user(status: Status, node: ET.Element) -> None:
    status.author = decode_user(node)


def _status_id(status: Status, node: ET.Element) -> None:
    status.id = _parse_uint(text_of(node))


_STATUS_FIELDS: dict[str, Callable[[Status, ET.Element], None]] = {
    "text": _status_text,
    "created_at": _status_created_at,
    "user": _status_user,
    "id": _status_id,
}


def decode_status(node: ET.Element) -> Status:
    """Decode a ``<status>`` element, including its nested ``<user>``."""
    status = Status()
    for child in node:
        action = _STATUS_FIELDS.get(tag_name(child))
        if action is not None:
            action(status, child)
    return status


def decode_cursor(node: ET.Element) -> int:
    """Decode a ``<next_cursor>`` element; non-numeric text gives 0."""
    return _parse_uint(text_of(node))


# ── lists ──────────────────────────────────────────────────────────────────
# Statuses and users are put at the front of ``items``, so the resulting
# order is the reverse of the document order.  Ids keep document order.

def _list_cursor(page: ResponseList, node: ET.Element) -> None:
    page.next_cursor = decode_cursor(node)


def _list_status(page: ResponseList, node: ET.Element) -> None:
    page.items.insert(0, decode_status(node))


def _list_user(page: ResponseList, node: ET.Element) -> None:
    page.items.insert(0, decode_user(node))


def _list_users_wrapper(page: ResponseList, node: ET.Element) -> None:
    _fill(page, node, _USER_LIST_FIELDS)


def _list_id(page: ResponseList, node: ET.Element) -> None:
    page.items.append(text_of(node))


def _list_ids_wrapper(page: ResponseList, node: ET.Element) -> None:
    _fill(page, node, _ID_LIST_FIELDS)


_ListAction = Callable[[ResponseList, ET.Element], None]

_STATUS_LIST_FIELDS: dict[str, _ListAction] = {
    "status": _list_status,
    "next_cursor": _list_cursor,
}

# <users><user/>...</users>, or <user_list><users>...</users><next_cursor/></user_list>
_USER_LIST_FIELDS: dict[str, _ListAction] = {
    "user": _list_user,
    "users": _list_users_wrapper,
    "next_cursor": _list_cursor,
}

_ID_LIST_FIELDS: dict[str, _ListAction] = {
    "id": _list_id,
    "ids": _list_ids_wrapper,
    "next_cursor": _list_cursor,
}

_LIST_FIELDS: dict[ListKind, dict[str, _ListAction]] = {
    ListKind.STATUS: _STATUS_LIST_FIELDS,
    ListKind.USER: _USER_LIST_FIELDS,
    ListKind.OPAQUE_ID: _ID_LIST_FIELDS,
}


def _fill(page: ResponseList, node: ET.Element, fields: dict[str, _ListAction]) -> None:
    for child in node:
        name = tag_name(child)
        action = fields.get(name)
        if action is None:
            logger.debug("Skipping <%s> inside <%s>", name, tag_name(node))
            continue
        action(page, child)


def decode_list(node: ET.Element | None, kind: ListKind) -> ResponseList:
    """Decode a list response of the given *kind*.

    A ``None`` node (body that did not parse) yields an empty list.
    """
    page = ResponseList(kind=kind)
    if node is None:
        return page
    _fill(page, node, _LIST_FIELDS[kind])
    return page
