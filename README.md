# smpp_pdu

Building blocks for reading and writing the bodies of SMPP protocol data
units (PDUs): mandatory body fields, optional Tag-Length-Value (TLV)
parameters and the text encodings used for `short_message`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `smpp_pdu.text`

Text codecs for the `data_coding` field. Each codec holds bytes (a `str`
given to it is stored as UTF-8), has a `data_coding` class attribute of
type `DataCoding`, and offers `encode()` and `decode()`, both returning
bytes.

- `Latin1` (`DataCoding.LATIN1`, 0x03): UTF-8 to Windows-1252 and back.
- `ISO88595` (`DataCoding.ISO88595`, 0x06): UTF-8 to Cyrillic ISO-8859-5
  and back.
- `UCS2` (`DataCoding.UCS2`, 0x08): UTF-8 to UTF-16 big endian, no byte
  order mark, and back.
- `Raw` (`DataCoding.DEFAULT`, 0x00): bytes passed through untouched.

When a conversion cannot be done, the original bytes are returned
unchanged.

### `smpp_pdu.tlv`

- `Tag`: an `IntEnum` of the common TLV tags, with a `hex()` method.
- `tag_hex(tag)`: the tag as four lower-case hex digits, e.g. `"0005"`.
- `Field(tag, data)`: one TLV field. `bytes(field)` is the value,
  `len(field)` is the value length plus the four header bytes, `str(field)`
  is the value as text without a trailing NUL, and
  `serialize_to(stream)` writes tag, length and value (big endian).
- `new_tlv(tag, value)`: build a `Field`; `None` gives an empty value.
- `TLVMap`: a `dict` of fields by tag. `set(tag, value)` accepts `None`,
  `int` (stored as one byte), `str`, `String`, `CString` (a trailing NUL is
  added when missing), bytes-like values or a ready field. Other values
  raise `TLVError`.
- `decode_tlv(stream)`: read fields from a binary stream or bytes until
  fewer than four bytes remain. Raises `TLVError` when a value is shorter
  than its declared length.

### `smpp_pdu.fields`

Field bodies, all subclasses of `Body`, with `len()`, `bytes()`, `str()`,
`raw()` and `serialize_to(stream)`:

- `Fixed`: one byte (0 to 255).
- `Variable`: a NUL-terminated value; `bytes()` adds the NUL when missing.
- `SM`: the short message, raw bytes without a terminator.
- `DestSme` / `DestSmeList`: destination addresses.
- `UnSme` / `UnSmeList`: addresses a message could not be delivered to,
  each with a four-byte error code (`UnSme.error_code()`).
- `UDH` / `UDHList`: user data header information elements.

Also `Name` (the field names, e.g. `Name.SHORT_MESSAGE`),
`DeliverySetting`, and `new_field(name, data)`, which builds the right body
for a field name from raw bytes and returns `None` for an unknown name.

### `smpp_pdu.decoding`

`FieldList` is a list of field names. `decode(stream)` reads them in order
from a binary stream or bytes and returns a `FieldMap`. When the data runs
out in the middle of a field, decoding stops and the fields read so far
are returned. `DecodeError` is raised when `sm_length` is smaller than the
user data header length plus one, or when too few bytes remain for the
short message. The user data header fields are only read when the UDHI bit
of `esm_class` is set.

### `smpp_pdu.fieldmap`

`FieldMap` is a `dict` of bodies by field name. `set(name, value)` accepts
`None` (the field's default), `int` (stored as one byte), `str`,
bytes-like values, a `Body`, or a text codec, which is encoded. Setting
`short_message` always updates `sm_length`, and with a codec also sets
`data_coding`. An unknown name raises `ValueError`; an unsupported value
raises `TypeError`.

## Example

```python
import io

from smpp_pdu.decoding import FieldList
from smpp_pdu.fieldmap import FieldMap
from smpp_pdu.fields import Name
from smpp_pdu.text import Latin1
from smpp_pdu.tlv import Tag, decode_tlv, new_tlv

fields = FieldMap()
fields.set(Name.SOURCE_ADDR, "1000")
fields.set(Name.SHORT_MESSAGE, Latin1("Olá mundo"))
print(bytes(fields[Name.SHORT_MESSAGE]))   # b'Ol\xe1 mundo'
print(fields[Name.SM_LENGTH])              # 9
print(fields[Name.DATA_CODING])            # 3

decoded = FieldList([Name.SM_LENGTH, Name.SHORT_MESSAGE]).decode(b"\x05hello")
print(bytes(decoded[Name.SHORT_MESSAGE]))  # b'hello'

stream = io.BytesIO()
new_tlv(Tag.DEST_ADDR_SUBUNIT, b"hello").serialize_to(stream)
stream.seek(0)
tlvs = decode_tlv(stream)
print(bytes(tlvs[Tag.DEST_ADDR_SUBUNIT]))  # b'hello'
```

## What this package does not do

It handles PDU bodies only. It has no PDU header or command handling, no
SMPP session, client or server, and no network code. There is no GSM 7-bit
text codec; only Latin1, ISO-8859-5, UCS2 and raw text are supported.