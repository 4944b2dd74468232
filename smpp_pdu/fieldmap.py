"""A mapping of PDU field names to field data."""

from __future__ import annotations

from typing import Any, Union

from .fields import Body, Fixed, Name, new_field
from .text import Codec

__all__ = ["FieldMap"]


class FieldMap(dict):
    """PDU field data indexed by field name."""

    def set(self, name: Union[Name, str], value: Any) -> None:
        """Store value under name, converting it to the right field type.

        None stores the field's default value. Integers are truncated to
        one byte. A text codec is encoded; for the short message it also
        sets data_coding. Setting the short message always updates
        sm_length. Raises ValueError for an unknown name and TypeError
        for an unsupported value.
        """
        key = Name(name)
        if value is None:
            field = new_field(key, None)
        elif isinstance(value, bool):
            raise TypeError(f"unsupported field data: {value!r}")
        elif isinstance(value, int):
            field = new_field(key, bytes([value & 0xFF]))
        elif isinstance(value, (str, bytes, bytearray, memoryview)):
            field = new_field(key, value)
        elif isinstance(value, Body):
            field = value
        elif isinstance(value, Codec):
            field = new_field(key, value.encode())
            if key is Name.SHORT_MESSAGE:
                self[Name.DATA_CODING] = Fixed(int(value.data_coding))
        else:
            raise TypeError(f"unsupported field data: {value!r}")
        self[key] = field
        if key is Name.SHORT_MESSAGE:
            self[Name.SM_LENGTH] = Fixed(len(field) & 0xFF)