"""Tag-Length-Value optional parameters of SMPP PDUs."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, BinaryIO, Union

__all__ = [
    "Tag",
    "String",
    "CString",
    "TLVError",
    "Field",
    "TLVMap",
    "tag_hex",
    "new_tlv",
    "decode_tlv",
]

_HEADER = struct.Struct(">HH")


class TLVError(ValueError):
    """Raised for malformed or unsupported TLV data."""


class Tag(IntEnum):
    """Common TLV tags."""

    DEST_ADDR_SUBUNIT = 0x0005
    DEST_NETWORK_TYPE = 0x0006
    DEST_BEARER_TYPE = 0x0007
    DEST_TELEMATICS_ID = 0x0008
    SOURCE_ADDR_SUBUNIT = 0x000D
    SOURCE_NETWORK_TYPE = 0x000E
    SOURCE_BEARER_TYPE = 0x000F
    SOURCE_TELEMATICS_ID = 0x0010
    QOS_TIME_TO_LIVE = 0x0017
    PAYLOAD_TYPE = 0x0019
    ADDITIONAL_STATUS_INFO_TEXT = 0x001D
    RECEIPTED_MESSAGE_ID = 0x001E
    MS_MSG_WAIT_FACILITIES = 0x0030
    PRIVACY_INDICATOR = 0x0201
    SOURCE_SUBADDRESS = 0x0202
    DEST_SUBADDRESS = 0x0203
    USER_MESSAGE_REFERENCE = 0x0204
    USER_RESPONSE_CODE = 0x0205
    SOURCE_PORT = 0x020A
    DESTINATION_PORT = 0x020B
    SAR_MSG_REF_NUM = 0x020C
    LANGUAGE_INDICATOR = 0x020D
    SAR_TOTAL_SEGMENTS = 0x020E
    SAR_SEGMENT_SEQNUM = 0x020F
    CALLBACK_NUM_PRES_IND = 0x0302
    CALLBACK_NUM_ATAG = 0x0303
    NUMBER_OF_MESSAGES = 0x0304
    CALLBACK_NUM = 0x0381
    DPF_RESULT = 0x0420
    SET_DPF = 0x0421
    MS_AVAILABILITY_STATUS = 0x0422
    NETWORK_ERROR_CODE = 0x0423
    MESSAGE_PAYLOAD = 0x0424
    DELIVERY_FAILURE_REASON = 0x0425
    MORE_MESSAGES_TO_SEND = 0x0426
    MESSAGE_STATE_OPTION = 0x0427
    USSD_SERVICE_OP = 0x0501
    DISPLAY_TIME = 0x1201
    SMS_SIGNAL = 0x1203
    MS_VALIDITY = 0x1204
    ALERT_ON_MESSAGE_DELIVERY = 0x130C
    ITS_REPLY_TYPE = 0x1380
    ITS_SESSION_INFO = 0x1383

    def hex(self) -> str:
        """Four-digit lower-case hex form of the tag."""
        return tag_hex(self)


class String(str):
    """Text stored without a trailing null byte."""


class CString(str):
    """Text stored with a trailing null byte, added when missing."""


def _check_tag(tag: int) -> int:
    tag = int(tag)
    if not 0 <= tag <= 0xFFFF:
        raise TLVError(f"tag out of range: {tag}")
    return tag


def tag_hex(tag: int) -> str:
    """Return the tag as four lower-case hex digits, big endian."""
    return f"{_check_tag(tag):04x}"


@dataclass
class Field:
    """A single TLV field."""

    tag: int
    data: bytes = b""

    def __post_init__(self) -> None:
        self.tag = _check_tag(self.tag)
        self.data = bytes(self.data)

    def __len__(self) -> int:
        return len(self.data) + 4

    def raw(self) -> bytes:
        """The field value."""
        return bytes(self)

    def __str__(self) -> str:
        data = self.data[:-1] if self.data.endswith(b"\x00") else self.data
        return data.decode("utf-8", "replace")

    def __bytes__(self) -> bytes:
        return self.data

    def serialize_to(self, stream: BinaryIO) -> None:
        """Write tag, length and value to a binary stream."""
        if len(self.data) > 0xFFFF:
            raise TLVError(
                f"value too long for tag {tag_hex(self.tag)}: {len(self.data)} bytes"
            )
        stream.write(_HEADER.pack(self.tag, len(self.data)) + self.data)


def new_tlv(tag: int, value: bytes | None) -> Field:
    """Build a field from a tag and its raw value; None means empty."""
    return Field(tag, value if value is not None else b"")


class TLVMap(dict):
    """TLV fields indexed by tag."""

    def set(self, tag: int, value: Any) -> None:
        """Store value under tag, converting it to a field.

        Raises TLVError when the value's type is not supported.
        """
        if value is None:
            field = new_tlv(tag, None)
        elif isinstance(value, bool):
            raise TLVError(f"unsupported Tag-Length-Value field data: {value!r}")
        elif isinstance(value, int):
            field = new_tlv(tag, bytes([value & 0xFF]))
        elif isinstance(value, CString):
            data = value.encode("utf-8")
            if not data.endswith(b"\x00"):
                data += b"\x00"
            field = new_tlv(tag, data)
        elif isinstance(value, str):
            field = new_tlv(tag, value.encode("utf-8"))
        elif isinstance(value, (bytes, bytearray, memoryview)):
            field = new_tlv(tag, bytes(value))
        elif callable(getattr(value, "serialize_to", None)):
            field = value
        else:
            raise TLVError(f"unsupported Tag-Length-Value field data: {value!r}")
        self[tag] = field


def decode_tlv(stream: Union[BinaryIO, bytes, bytearray, memoryview]) -> TLVMap:
    """Read TLV fields from a binary stream or bytes until fewer than four bytes remain."""
    if isinstance(stream, (bytes, bytearray, memoryview)):
        stream = io.BytesIO(bytes(stream))
    fields = TLVMap()
    while True:
        header = stream.read(4)
        if len(header) < 4:
            break
        tag, length = _HEADER.unpack(header)
        data = stream.read(length)
        if len(data) < length:
            raise TLVError(
                f"not enough data for tag {tag_hex(tag)}: "
                f"want {length}, have {len(data)}"
            )
        fields[tag] = Field(tag, data)
    return fields