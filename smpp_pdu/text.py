"""Text codecs for the short_message field of SMPP PDUs.

Latin1 (data_coding 0x03) is handled as Windows-1252, and UCS2 (0x08)
as UTF-16 big endian without a byte order mark. Encoding takes UTF-8
text and returns bytes in the target charset; decoding does the
opposite. When a conversion fails, the original bytes come back
unchanged.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union

__all__ = ["DataCoding", "Codec", "Latin1", "ISO88595", "Raw", "UCS2"]


class DataCoding(IntEnum):
    """Values of the data_coding PDU field."""

    DEFAULT = 0x00  # SMSC default alphabet
    LATIN1 = 0x03  # Latin 1 (ISO-8859-1)
    ISO88595 = 0x06  # Cyrillic (ISO-8859-5)
    UCS2 = 0x08  # UCS2 (ISO/IEC-10646)


TextLike = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class Codec(abc.ABC):
    """Text held as bytes, together with the charset it converts to and from."""

    data: bytes
    data_coding: ClassVar[DataCoding] = DataCoding.DEFAULT

    def __post_init__(self) -> None:
        value = self.data
        if isinstance(value, str):
            value = value.encode("utf-8")
        object.__setattr__(self, "data", bytes(value))

    @abc.abstractmethod
    def encode(self) -> bytes:
        """Convert UTF-8 text to the codec's charset."""

    @abc.abstractmethod
    def decode(self) -> bytes:
        """Convert bytes in the codec's charset to UTF-8 text."""


# Windows-1252 with the five unassigned bytes mapped to C1 controls.
_CP1252_UNASSIGNED = frozenset({0x81, 0x8D, 0x8F, 0x90, 0x9D})
_CP1252_TABLE = tuple(
    chr(b) if b in _CP1252_UNASSIGNED else bytes([b]).decode("cp1252")
    for b in range(256)
)
_CP1252_REVERSE = {ch: b for b, ch in enumerate(_CP1252_TABLE)}


@dataclass(frozen=True)
class Latin1(Codec):
    """Latin1 text codec, using the Windows-1252 character set."""

    data_coding: ClassVar[DataCoding] = DataCoding.LATIN1

    def encode(self) -> bytes:
        try:
            text = self.data.decode("utf-8")
            return bytes(_CP1252_REVERSE[ch] for ch in text)
        except (UnicodeDecodeError, KeyError):
            return self.data

    def decode(self) -> bytes:
        return "".join(_CP1252_TABLE[b] for b in self.data).encode("utf-8")


@dataclass(frozen=True)
class ISO88595(Codec):
    """Cyrillic text codec (ISO-8859-5)."""

    data_coding: ClassVar[DataCoding] = DataCoding.ISO88595

    def encode(self) -> bytes:
        try:
            return self.data.decode("utf-8").encode("iso8859_5")
        except UnicodeError:
            return self.data

    def decode(self) -> bytes:
        try:
            return self.data.decode("iso8859_5").encode("utf-8")
        except UnicodeError:
            return self.data


@dataclass(frozen=True)
class Raw(Codec):
    """Bytes passed through untouched."""

    data_coding: ClassVar[DataCoding] = DataCoding.DEFAULT

    def encode(self) -> bytes:
        return self.data

    def decode(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class UCS2(Codec):
    """UCS2 text codec: UTF-16 big endian, no byte order mark."""

    data_coding: ClassVar[DataCoding] = DataCoding.UCS2

    def encode(self) -> bytes:
        try:
            return self.data.decode("utf-8", "replace").encode("utf-16-be")
        except UnicodeError:
            return self.data

    def decode(self) -> bytes:
        try:
            return self.data.decode("utf-16-be", "replace").encode("utf-8")
        except UnicodeError:
            return self.data