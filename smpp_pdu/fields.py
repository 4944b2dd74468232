"""PDU field codecs: fixed, variable and composite SMPP body fields."""

from __future__ import annotations

import abc
import struct
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import BinaryIO, Optional, Union

__all__ = [
    "Name",
    "DeliverySetting",
    "Body",
    "Fixed",
    "Variable",
    "SM",
    "DestSme",
    "DestSmeList",
    "UnSme",
    "UnSmeList",
    "UDH",
    "UDHList",
    "new_field",
]

BytesLike = Union[bytes, bytearray, memoryview, str]


class Name(str, Enum):
    """Names of the supported PDU fields."""

    ADDR_NPI = "addr_npi"
    ADDR_TON = "addr_ton"
    ADDRESS_RANGE = "address_range"
    DATA_CODING = "data_coding"
    DEST_ADDR_NPI = "dest_addr_npi"
    DEST_ADDR_TON = "dest_addr_ton"
    DESTINATION_ADDR = "destination_addr"
    DESTINATION_LIST = "dest_addresses"
    ESM_CLASS = "esm_class"
    ERROR_CODE = "error_code"
    FINAL_DATE = "final_date"
    INTERFACE_VERSION = "interface_version"
    MESSAGE_ID = "message_id"
    MESSAGE_STATE = "message_state"
    NUMBER_DESTS = "number_of_dests"
    NO_UNSUCCESS = "no_unsuccess"
    PASSWORD = "password"
    PRIORITY_FLAG = "priority_flag"
    PROTOCOL_ID = "protocol_id"
    REGISTERED_DELIVERY = "registered_delivery"
    REPLACE_IF_PRESENT_FLAG = "replace_if_present_flag"
    SM_DEFAULT_MSG_ID = "sm_default_msg_id"
    SM_LENGTH = "sm_length"
    SCHEDULE_DELIVERY_TIME = "schedule_delivery_time"
    SERVICE_TYPE = "service_type"
    SHORT_MESSAGE = "short_message"
    SOURCE_ADDR = "source_addr"
    SOURCE_ADDR_NPI = "source_addr_npi"
    SOURCE_ADDR_TON = "source_addr_ton"
    SYSTEM_ID = "system_id"
    SYSTEM_TYPE = "system_type"
    UDH_LENGTH = "gsm_sms_ud.udh.len"
    GSM_USER_DATA = "gsm_sms_ud.udh"
    UNSUCCESS_SME = "unsuccess_sme"
    VALIDITY_PERIOD = "validity_period"

    def __str__(self) -> str:
        return self.value


class DeliverySetting(IntEnum):
    """Registered delivery settings for short messages."""

    NO_DELIVERY_RECEIPT = 0x00
    FINAL_DELIVERY_RECEIPT = 0x01
    FAILURE_DELIVERY_RECEIPT = 0x02


def _to_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _text(data: bytes) -> str:
    return data.decode("utf-8", "replace")


class Body(abc.ABC):
    """Binary PDU field data."""

    def __len__(self) -> int:
        return len(bytes(self))

    def raw(self) -> object:
        """The field's underlying value."""
        return bytes(self)

    @abc.abstractmethod
    def __bytes__(self) -> bytes:
        """The field's wire form."""

    def serialize_to(self, stream: BinaryIO) -> None:
        """Write the field's wire form to a binary stream."""
        stream.write(bytes(self))


@dataclass
class Fixed(Body):
    """A one-byte field."""

    data: int = 0

    def __post_init__(self) -> None:
        self.data = int(self.data)
        if not 0 <= self.data <= 0xFF:
            raise ValueError(f"fixed field value out of range: {self.data}")

    def __len__(self) -> int:
        return 1

    def raw(self) -> int:
        return self.data

    def __str__(self) -> str:
        return str(self.data)

    def __bytes__(self) -> bytes:
        return bytes([self.data])


@dataclass
class Variable(Body):
    """A null-terminated field of variable length."""

    data: bytes = b""

    def __post_init__(self) -> None:
        self.data = _to_bytes(self.data)

    def raw(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        data = self.data[:-1] if self.data.endswith(b"\x00") else self.data
        return _text(data)

    def __bytes__(self) -> bytes:
        if self.data.endswith(b"\x00"):
            return self.data
        return self.data + b"\x00"


@dataclass
class SM(Body):
    """The short message field: raw bytes with no terminator."""

    data: bytes = b""

    def __post_init__(self) -> None:
        self.data = _to_bytes(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def raw(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return _text(self.data)

    def __bytes__(self) -> bytes:
        return self.data


@dataclass
class DestSme(Body):
    """One destination SME address."""

    flag: Fixed = field(default_factory=Fixed)
    ton: Fixed = field(default_factory=Fixed)
    npi: Fixed = field(default_factory=Fixed)
    dest_addr: Variable = field(default_factory=Variable)

    def __str__(self) -> str:
        return ",".join(str(part) for part in (self.flag, self.ton, self.npi, self.dest_addr))

    def __bytes__(self) -> bytes:
        return b"".join(bytes(part) for part in (self.flag, self.ton, self.npi, self.dest_addr))


@dataclass
class DestSmeList(Body):
    """A list of destination SME addresses."""

    data: list[DestSme] = field(default_factory=list)

    def __len__(self) -> int:
        return sum(len(item) for item in self.data)

    def __str__(self) -> str:
        return "".join(f"{item};" for item in self.data)

    def __bytes__(self) -> bytes:
        return b"".join(bytes(item) for item in self.data)


@dataclass
class UnSme(Body):
    """An SME address a message could not be delivered to, with its error."""

    ton: Fixed = field(default_factory=Fixed)
    npi: Fixed = field(default_factory=Fixed)
    dest_addr: Variable = field(default_factory=Variable)
    err_code: Variable = field(default_factory=Variable)

    def error_code(self) -> int:
        """The error code as a big-endian 32-bit integer."""
        if len(self.err_code.data) < 4:
            raise ValueError(
                f"error code needs 4 bytes, have {len(self.err_code.data)}"
            )
        return struct.unpack(">I", self.err_code.data[:4])[0]

    def __len__(self) -> int:
        return len(self.ton) + len(self.npi) + len(self.dest_addr) + len(self.err_code)

    def __str__(self) -> str:
        return f"{self.ton},{self.npi},{self.dest_addr},{self.error_code()}"

    def __bytes__(self) -> bytes:
        return b"".join(bytes(part) for part in (self.ton, self.npi, self.dest_addr, self.err_code))


@dataclass
class UnSmeList(Body):
    """A list of unsuccessful SME addresses."""

    data: list[UnSme] = field(default_factory=list)

    def __len__(self) -> int:
        return sum(len(item) for item in self.data)

    def __str__(self) -> str:
        return "".join(f"{item};" for item in self.data)

    def __bytes__(self) -> bytes:
        return b"".join(bytes(item) for item in self.data)


@dataclass
class UDH(Body):
    """One information element of a user data header."""

    iei: Fixed = field(default_factory=Fixed)
    ie_length: Fixed = field(default_factory=Fixed)
    ie_data: Variable = field(default_factory=Variable)

    def __len__(self) -> int:
        return len(self.iei) + len(self.ie_length) + len(self.ie_data)

    def __str__(self) -> str:
        return f"{self.iei},{self.ie_length},{self.ie_data}"

    def __bytes__(self) -> bytes:
        return bytes(self.iei) + bytes(self.ie_length) + bytes(self.ie_data)


@dataclass
class UDHList(Body):
    """A list of user data header elements."""

    data: list[UDH] = field(default_factory=list)

    def __len__(self) -> int:
        return sum(len(item) for item in self.data)

    def __str__(self) -> str:
        return "".join(f"{item};" for item in self.data)

    def __bytes__(self) -> bytes:
        return b"".join(bytes(item) for item in self.data)


_FIXED_NAMES = frozenset(
    {
        Name.ADDR_NPI,
        Name.ADDR_TON,
        Name.DATA_CODING,
        Name.DEST_ADDR_NPI,
        Name.DEST_ADDR_TON,
        Name.ESM_CLASS,
        Name.ERROR_CODE,
        Name.INTERFACE_VERSION,
        Name.MESSAGE_STATE,
        Name.NUMBER_DESTS,
        Name.NO_UNSUCCESS,
        Name.PRIORITY_FLAG,
        Name.PROTOCOL_ID,
        Name.REGISTERED_DELIVERY,
        Name.REPLACE_IF_PRESENT_FLAG,
        Name.SM_DEFAULT_MSG_ID,
        Name.SM_LENGTH,
        Name.SOURCE_ADDR_NPI,
        Name.SOURCE_ADDR_TON,
        Name.UDH_LENGTH,
    }
)

_VARIABLE_NAMES = frozenset(
    {
        Name.ADDRESS_RANGE,
        Name.DESTINATION_ADDR,
        Name.DESTINATION_LIST,
        Name.FINAL_DATE,
        Name.MESSAGE_ID,
        Name.PASSWORD,
        Name.SCHEDULE_DELIVERY_TIME,
        Name.SERVICE_TYPE,
        Name.SOURCE_ADDR,
        Name.SYSTEM_ID,
        Name.SYSTEM_TYPE,
        Name.UNSUCCESS_SME,
        Name.VALIDITY_PERIOD,
    }
)


def _parse_udh(data: bytes) -> list[UDH]:
    elements: list[UDH] = []
    if len(data) <= 2:
        return elements
    pos = 0
    while pos < len(data):
        if pos + 2 > len(data):
            raise ValueError(f"truncated user data header at offset {pos}")
        length = data[pos + 1]
        end = pos + 2 + length
        if end > len(data):
            raise ValueError(
                f"user data header element at offset {pos} wants {length} bytes"
            )
        elements.append(
            UDH(
                iei=Fixed(data[pos]),
                ie_length=Fixed(length),
                ie_data=Variable(data[pos + 2 : end]),
            )
        )
        # One separator byte follows each element's data.
        pos = end + 1
    return elements


def _as_name(name: Union[Name, str]) -> Optional[Name]:
    try:
        return Name(name)
    except ValueError:
        return None


def new_field(name: Union[Name, str], data: Optional[BytesLike]) -> Optional[Body]:
    """Build the field named by name from binary data.

    None as data gives the field's default value. Returns None when the
    name is unknown.
    """
    key = _as_name(name)
    if key is None:
        return None
    raw = None if data is None else _to_bytes(data)
    if key in _FIXED_NAMES:
        if raw is None:
            return Fixed(0)
        if not raw:
            raise ValueError(f"no data for fixed field {key.value}")
        return Fixed(raw[0])
    if key in _VARIABLE_NAMES:
        return Variable(raw if raw is not None else b"")
    if key is Name.SHORT_MESSAGE:
        return SM(raw if raw is not None else b"")
    if key is Name.GSM_USER_DATA:
        return UDHList(_parse_udh(raw) if raw is not None else [])
    return None