import io

import pytest

from smpp_pdu.decoding import DecodeError, FieldList
from smpp_pdu.fields import (
    SM,
    DestSme,
    DestSmeList,
    Fixed,
    Name,
    UDHList,
    UnSme,
    UnSmeList,
    Variable,
)


def test_decode_fixed():
    m = FieldList([Name.DATA_CODING]).decode(b"\x02")
    field = m[Name.DATA_CODING]
    assert isinstance(field, Fixed)
    assert bytes(field) == b"\x02"


def test_decode_variable():
    want = b"hello\x00"
    m = FieldList([Name.SYSTEM_ID]).decode(want)
    field = m[Name.SYSTEM_ID]
    assert isinstance(field, Variable)
    assert bytes(field) == want
    assert str(field) == "hello"


def test_decode_short_message():
    data = b"\x05hello\x0a\x0b"
    m = FieldList([Name.SM_LENGTH, Name.SHORT_MESSAGE]).decode(data)
    field = m[Name.SHORT_MESSAGE]
    assert isinstance(field, SM)
    assert bytes(field) == b"hello"


def test_decode_destination_list():
    data = b"\x02\x01\x01\x01123\x00\x01\x01\x01567\x00"
    m = FieldList([Name.NUMBER_DESTS, Name.DESTINATION_LIST]).decode(data)
    field = m[Name.DESTINATION_LIST]
    assert isinstance(field, DestSmeList)
    one = Fixed(1)
    expected = DestSmeList(
        [
            DestSme(one, one, one, Variable(b"123")),
            DestSme(one, one, one, Variable(b"567")),
        ]
    )
    assert bytes(field) == bytes(expected)
    assert len(field.data) == 2


def test_decode_unsuccess_list():
    data = b"\x01\x01\x01123\x00\x00\x00\x00\x11\x00"
    m = FieldList([Name.NO_UNSUCCESS, Name.UNSUCCESS_SME]).decode(data)
    field = m[Name.UNSUCCESS_SME]
    assert isinstance(field, UnSmeList)
    one = Fixed(1)
    expected = UnSmeList(
        [UnSme(one, one, Variable(b"123"), Variable(b"\x00\x00\x00\x11"))]
    )
    assert bytes(field) == bytes(expected)
    assert str(field) == "1,1,123,17;"


def test_decode_user_data_header():
    data = b"\x40\x0a\x05\x00\x03\x01\x02\x01abcd"
    names = [
        Name.ESM_CLASS,
        Name.SM_LENGTH,
        Name.UDH_LENGTH,
        Name.GSM_USER_DATA,
        Name.SHORT_MESSAGE,
    ]
    m = FieldList(names).decode(data)
    assert m[Name.UDH_LENGTH].data == 5
    udh = m[Name.GSM_USER_DATA]
    assert isinstance(udh, UDHList)
    assert len(udh.data) == 1
    assert udh.data[0].iei.data == 0
    assert udh.data[0].ie_length.data == 3
    assert udh.data[0].ie_data.data == b"\x01\x02\x01"
    assert m[Name.SM_LENGTH].data == 4
    assert bytes(m[Name.SHORT_MESSAGE]) == b"abcd"


def test_udh_fields_skipped_without_indicator():
    data = b"\x00\x04abcd"
    names = [
        Name.ESM_CLASS,
        Name.SM_LENGTH,
        Name.UDH_LENGTH,
        Name.GSM_USER_DATA,
        Name.SHORT_MESSAGE,
    ]
    m = FieldList(names).decode(data)
    assert Name.UDH_LENGTH not in m
    assert Name.GSM_USER_DATA not in m
    assert bytes(m[Name.SHORT_MESSAGE]) == b"abcd"


def test_udh_longer_than_message_is_an_error():
    data = b"\x40\x03\x05\x00\x03\x01\x02\x01"
    names = [
        Name.ESM_CLASS,
        Name.SM_LENGTH,
        Name.UDH_LENGTH,
        Name.GSM_USER_DATA,
        Name.SHORT_MESSAGE,
    ]
    with pytest.raises(DecodeError):
        FieldList(names).decode(data)


def test_short_read_for_message_is_an_error():
    with pytest.raises(DecodeError, match="short read"):
        FieldList([Name.SM_LENGTH, Name.SHORT_MESSAGE]).decode(b"\x05hi")


def test_truncated_data_stops_quietly():
    m = FieldList([Name.DATA_CODING, Name.SYSTEM_ID]).decode(b"\x03abc")
    assert m[Name.DATA_CODING].data == 3
    assert Name.SYSTEM_ID not in m


def test_empty_data_gives_empty_map():
    m = FieldList([Name.SYSTEM_ID, Name.DATA_CODING]).decode(b"")
    assert dict(m) == {}


def test_decode_from_stream_leaves_rest_unread():
    stream = io.BytesIO(b"\x02\x03")
    m = FieldList([Name.DATA_CODING]).decode(stream)
    assert m[Name.DATA_CODING].data == 2
    assert stream.read() == b"\x03"


def test_names_given_as_strings():
    m = FieldList(["system_id", "foobar", "data_coding"]).decode(b"id\x00\x08")
    assert str(m[Name.SYSTEM_ID]) == "id"
    assert m[Name.DATA_CODING].data == 8