"""Unit tests for XML materialization."""

import xml.etree.ElementTree as ET

from tweetbridge.materialize import decode_cursor, decode_list, decode_status, decode_user
from tweetbridge.models import ListKind, Status, User
from tweetbridge.xmltree import parse


def _node(xml: str) -> ET.Element:
    return ET.fromstring(xml)


class TestDecodeUser:
    def test_name_and_screen_name(self) -> None:
        user = decode_user(_node("<user><name>Alice A</name><screen_name>alice</screen_name></user>"))
        assert user == User(display_name="Alice A", handle="alice")

    def test_tags_are_case_insensitive(self) -> None:
        user = decode_user(_node("<user><NAME>Bob</NAME><Screen_Name>bob</Screen_Name></user>"))
        assert user.display_name == "Bob"
        assert user.handle == "bob"

    def test_missing_fields_are_empty(self) -> None:
        user = decode_user(_node("<user><location>nowhere</location></user>"))
        assert user == User()


class TestDecodeStatus:
    def test_full_status(self) -> None:
        status = decode_status(
            _node(
                "<status>"
                "<created_at>Tue Apr 07 22:52:51 +0000 2009</created_at>"
                "<id>1472669360</id>"
                "<text>hello world</text>"
                "<source>web</source>"
                "<user><name>Carol</name><screen_name>carol</screen_name></user>"
                "</status>"
            )
        )
        assert status.id == 1472669360
        assert status.text == "hello world"
        assert status.created_at == "Tue Apr 07 22:52:51 +0000 2009"
        assert status.author.handle == "carol"

    def test_non_numeric_id_is_zero(self) -> None:
        status = decode_status(_node("<status><id>abc</id><text>x</text></status>"))
        assert status.id == 0
        assert status.text == "x"

    def test_leading_digits_are_parsed(self) -> None:
        assert decode_status(_node("<status><id>42abc</id></status>")).id == 42

    def test_id_beyond_32_bits(self) -> None:
        status = decode_status(_node("<status><id>18446744073709551615</id></status>"))
        assert status.id == 2**64 - 1

    def test_overflowing_id_saturates(self) -> None:
        status = decode_status(_node("<status><id>99999999999999999999999</id></status>"))
        assert status.id == 2**64 - 1

    def test_missing_user_gives_empty_author(self) -> None:
        status = decode_status(_node("<status><id>1</id></status>"))
        assert status.author == User()


class TestDecodeCursor:
    def test_numeric(self) -> None:
        assert decode_cursor(_node("<next_cursor>1288887566</next_cursor>")) == 1288887566

    def test_non_numeric_and_empty(self) -> None:
        assert decode_cursor(_node("<next_cursor>soon</next_cursor>")) == 0
        assert decode_cursor(_node("<next_cursor/>")) == 0

    def test_negative_is_zero(self) -> None:
        assert decode_cursor(_node("<next_cursor>-1</next_cursor>")) == 0


class TestDecodeList:
    def test_statuses_are_prepended(self) -> None:
        page = decode_list(
            _node(
                "<statuses>"
                "<status><id>9</id></status>"
                "<status><id>5</id></status>"
                "<status><id>3</id></status>"
                "</statuses>"
            ),
            ListKind.STATUS,
        )
        assert page.kind is ListKind.STATUS
        assert [s.id for s in page.items] == [3, 5, 9]
        assert page.next_cursor is None
        assert not page.has_more

    def test_status_list_cursor(self) -> None:
        page = decode_list(
            _node("<statuses><status><id>1</id></status><next_cursor>7</next_cursor></statuses>"),
            ListKind.STATUS,
        )
        assert page.next_cursor == 7
        assert page.has_more

    def test_unknown_children_skipped(self) -> None:
        page = decode_list(
            _node("<statuses><promo>buy</promo><status><id>2</id></status></statuses>"),
            ListKind.STATUS,
        )
        assert len(page.items) == 1
        assert isinstance(page.items[0], Status)

    def test_users_wrapper(self) -> None:
        page = decode_list(
            _node(
                "<users>"
                "<user><screen_name>a</screen_name></user>"
                "<user><screen_name>b</screen_name></user>"
                "</users>"
            ),
            ListKind.USER,
        )
        assert [u.handle for u in page.items] == ["b", "a"]

    def test_user_list_wrapper(self) -> None:
        page = decode_list(
            _node(
                "<user_list>"
                "<users><user><screen_name>a</screen_name></user></users>"
                "<next_cursor>1300794057949944903</next_cursor>"
                "<previous_cursor>0</previous_cursor>"
                "</user_list>"
            ),
            ListKind.USER,
        )
        assert [u.handle for u in page.items] == ["a"]
        assert page.next_cursor == 1300794057949944903

    def test_ids_keep_raw_text(self) -> None:
        page = decode_list(
            _node(
                "<id_list><ids><id>0042</id><id>17</id></ids>"
                "<next_cursor>0</next_cursor></id_list>"
            ),
            ListKind.OPAQUE_ID,
        )
        assert page.items == ["0042", "17"]
        assert all(isinstance(i, str) for i in page.items)
        assert page.next_cursor == 0
        assert not page.has_more

    def test_flat_ids(self) -> None:
        page = decode_list(_node("<ids><id>1</id><id>x</id></ids>"), ListKind.OPAQUE_ID)
        assert page.items == ["1", "x"]

    def test_none_node_gives_empty_list(self) -> None:
        page = decode_list(None, ListKind.USER)
        assert page.kind is ListKind.USER
        assert page.items == []

    def test_garbage_body_gives_empty_list(self) -> None:
        page = decode_list(parse(b"<statuses><status>"), ListKind.STATUS)
        assert page.items == []

    def test_namespaced_tags(self) -> None:
        page = decode_list(
            _node('<s:statuses xmlns:s="urn:x"><s:status><s:id>4</s:id></s:status></s:statuses>'),
            ListKind.STATUS,
        )
        assert [s.id for s in page.items] == [4]
