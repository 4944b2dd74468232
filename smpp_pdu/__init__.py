"""SMPP PDU body fields, Tag-Length-Value parameters and text codecs."""

__version__ = "0.1.0"
__all__ = ["decoding", "fieldmap", "fields", "text", "tlv"]