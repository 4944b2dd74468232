import pytest

from smpp_pdu.fieldmap import FieldMap
from smpp_pdu.fields import SM, DeliverySetting, Fixed, Name, Variable, new_field
from smpp_pdu.text import DataCoding, Latin1


@pytest.mark.parametrize(
    "name, value, expected",
    [
        (Name.SYSTEM_ID, None, b"\x00"),
        (Name.SYSTEM_ID, "hello", b"hello\x00"),
        (Name.SYSTEM_ID, b"hello", b"hello\x00"),
        (Name.DATA_CODING, None, b"\x00"),
        (Name.DATA_CODING, 1, b"\x01"),
        (Name.DATA_CODING, 257, b"\x01"),
        (Name.DATA_CODING, new_field(Name.DATA_CODING, b"\x03"), b"\x03"),
        (Name.REGISTERED_DELIVERY, DeliverySetting.FINAL_DELIVERY_RECEIPT, b"\x01"),
    ],
)
def test_set_supported(name, value, expected):
    m = FieldMap()
    m.set(name, value)
    assert bytes(m[name]) == expected


def test_set_unsupported_value():
    m = FieldMap()
    with pytest.raises(TypeError):
        m.set(Name.DATA_CODING, object())
    assert Name.DATA_CODING not in m


def test_set_unknown_name():
    m = FieldMap()
    with pytest.raises(ValueError):
        m.set("foobar", b"x")


def test_set_by_string_name():
    m = FieldMap()
    m.set("system_id", "hello")
    assert isinstance(m[Name.SYSTEM_ID], Variable)
    assert str(m[Name.SYSTEM_ID]) == "hello"


def test_set_text_codec():
    m = FieldMap()
    text = Latin1("Olá mundo")
    m.set(Name.SHORT_MESSAGE, text)
    coding = m[Name.DATA_CODING]
    assert isinstance(coding, Fixed)
    assert coding.data == DataCoding.LATIN1
    sm = m[Name.SHORT_MESSAGE]
    assert bytes(sm) == b"Ol\xe1 mundo"
    assert Latin1(bytes(sm)).decode() == text.data
    assert m[Name.SM_LENGTH].data == 9


def test_short_message_sets_length():
    m = FieldMap()
    m.set(Name.SHORT_MESSAGE, "hello")
    assert isinstance(m[Name.SHORT_MESSAGE], SM)
    assert m[Name.SM_LENGTH].data == 5
    assert Name.DATA_CODING not in m


def test_codec_on_other_field_leaves_data_coding():
    m = FieldMap()
    m.set(Name.SYSTEM_ID, Latin1("abc"))
    assert bytes(m[Name.SYSTEM_ID]) == b"abc\x00"
    assert Name.DATA_CODING not in m