"""Decoding of SMPP PDU bodies from a list of field names."""

from __future__ import annotations

import io
from typing import BinaryIO, Iterable, Optional, Union

from .fieldmap import FieldMap
from .fields import (
    SM,
    UDH,
    DestSme,
    DestSmeList,
    Fixed,
    Name,
    UDHList,
    UnSme,
    UnSmeList,
    Variable,
)

__all__ = ["DecodeError", "FieldList"]


class DecodeError(ValueError):
    """Raised when PDU body data is inconsistent or too short."""


class _EndOfData(Exception):
    """Internal signal: the data ran out in the middle of a field."""


_NULL_TERMINATED = frozenset(
    {
        Name.ADDRESS_RANGE,
        Name.DESTINATION_ADDR,
        Name.ERROR_CODE,
        Name.FINAL_DATE,
        Name.MESSAGE_ID,
        Name.MESSAGE_STATE,
        Name.PASSWORD,
        Name.SCHEDULE_DELIVERY_TIME,
        Name.SERVICE_TYPE,
        Name.SOURCE_ADDR,
        Name.SYSTEM_ID,
        Name.SYSTEM_TYPE,
        Name.VALIDITY_PERIOD,
    }
)

_SINGLE_BYTE = frozenset(
    {
        Name.ADDR_NPI,
        Name.ADDR_TON,
        Name.DATA_CODING,
        Name.DEST_ADDR_NPI,
        Name.DEST_ADDR_TON,
        Name.ESM_CLASS,
        Name.INTERFACE_VERSION,
        Name.NUMBER_DESTS,
        Name.NO_UNSUCCESS,
        Name.PRIORITY_FLAG,
        Name.PROTOCOL_ID,
        Name.REGISTERED_DELIVERY,
        Name.REPLACE_IF_PRESENT_FLAG,
        Name.SM_DEFAULT_MSG_ID,
        Name.SOURCE_ADDR_NPI,
        Name.SOURCE_ADDR_TON,
        Name.SM_LENGTH,
    }
)

_UDHI_MASK = 1 << 6


class _Reader:
    """Reads PDU primitives from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def byte(self) -> int:
        chunk = self._stream.read(1)
        if not chunk:
            raise _EndOfData
        return chunk[0]

    def until_null(self) -> bytes:
        """Read up to and including the next null byte."""
        buf = bytearray()
        while True:
            chunk = self._stream.read(1)
            if not chunk:
                raise _EndOfData
            buf += chunk
            if chunk == b"\x00":
                return bytes(buf)

    def take(self, count: int) -> bytes:
        """Read at most count bytes."""
        if count <= 0:
            return b""
        return self._stream.read(count)


def _as_name(name: Union[Name, str]) -> Optional[Name]:
    try:
        return Name(name)
    except ValueError:
        return None


class FieldList(list):
    """An ordered list of PDU field names describing a PDU body."""

    def __init__(self, names: Iterable[Union[Name, str]] = ()) -> None:
        super().__init__(names)

    def decode(self, stream: Union[BinaryIO, bytes, bytearray, memoryview]) -> FieldMap:
        """Decode the fields in order from a binary stream or bytes.

        Decoding stops quietly when the data runs out in the middle of a
        field; the fields read so far are returned. Raises DecodeError
        when the short message lengths are inconsistent or the data is
        too short for the short message.
        """
        if isinstance(stream, (bytes, bytearray, memoryview)):
            stream = io.BytesIO(bytes(stream))
        reader = _Reader(stream)
        fields = FieldMap()
        state = {"unsuccess": 0, "dests": 0, "udh_length": 0, "sm_length": 0, "udhi": False}
        try:
            for item in self:
                name = _as_name(item)
                if name is not None:
                    self._decode_one(name, reader, fields, state)
        except _EndOfData:
            pass
        return fields

    @staticmethod
    def _decode_one(name: Name, reader: _Reader, fields: FieldMap, state: dict) -> None:
        if name in _NULL_TERMINATED:
            fields[name] = Variable(reader.until_null())
        elif name in _SINGLE_BYTE:
            value = reader.byte()
            fields[name] = Fixed(value)
            if name is Name.NO_UNSUCCESS:
                state["unsuccess"] = value
            elif name is Name.NUMBER_DESTS:
                state["dests"] = value
            elif name is Name.SM_LENGTH:
                state["sm_length"] = value
            elif name is Name.ESM_CLASS:
                state["udhi"] = value & _UDHI_MASK == _UDHI_MASK
        elif name is Name.UDH_LENGTH:
            if state["udhi"]:
                value = reader.byte()
                state["udh_length"] = value
                fields[name] = Fixed(value)
        elif name is Name.GSM_USER_DATA:
            if state["udhi"]:
                elements: list[UDH] = []
                remaining = state["udh_length"]
                while remaining > 0:
                    iei = reader.byte()
                    length = reader.byte()
                    data = reader.take(length)
                    elements.append(UDH(Fixed(iei), Fixed(length), Variable(data)))
                    if len(data) != length:
                        raise _EndOfData
                    remaining -= length + 2
                fields[name] = UDHList(elements)
        elif name is Name.DESTINATION_LIST:
            dests = []
            for _ in range(state["dests"]):
                flag = Fixed(reader.byte())
                ton = Fixed(reader.byte())
                npi = Fixed(reader.byte())
                addr = Variable(reader.until_null())
                dests.append(DestSme(flag, ton, npi, addr))
            fields[name] = DestSmeList(dests)
        elif name is Name.UNSUCCESS_SME:
            failures = []
            for _ in range(state["unsuccess"]):
                ton = Fixed(reader.byte())
                npi = Fixed(reader.byte())
                addr = Variable(reader.until_null())
                err_code = Variable(reader.take(4))
                failures.append(UnSme(ton, npi, addr, err_code))
            fields[name] = UnSmeList(failures)
        elif name is Name.SHORT_MESSAGE:
            sm_length = state["sm_length"]
            udh_length = state["udh_length"]
            if udh_length > 0:
                if sm_length - udh_length - 1 < 0:
                    raise DecodeError(
                        "smLength is lesser than udhLength+1: "
                        f"have {sm_length} and {udh_length}"
                    )
                sm_length -= udh_length + 1
                state["sm_length"] = sm_length
                fields[Name.SM_LENGTH] = Fixed(sm_length)
            data = reader.take(sm_length)
            if len(data) < sm_length:
                raise DecodeError(
                    f"short read for smlength: want {sm_length}, have {len(data)}"
                )
            fields[name] = SM(data)