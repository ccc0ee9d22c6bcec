# packages/b32kcodec/src/b32kcodec/__init__.py
from __future__ import annotations

"""base32768 - codec binaire -> texte (surface publique).

15 bits de payload par caractère BMP ; tables construites une seule fois à la
première utilisation.
"""

__version__ = "1.0.0"

# API publique (stable)
from .config import CodecConfig
from .codec import Base32768Codec, encode, decode, decode_into
from .bits import ResizedGroup, resize_groups, resize_groups_array
from .tables import DEFAULT_TABLE_ID, LookupTables, get_lookup_tables, available_tables
from .errors import (
    Base32768Error,
    EncodingError, PartialGroupMidStream, UnrecognizedTier, UnencodableValue,
    DecodingError, InvalidCharacterWidth, MisplacedPadding, InvalidCharacter,
    RepertoireError,
)

__all__ = [
    "__version__",
    "CodecConfig", "Base32768Codec",
    "encode", "decode", "decode_into",
    "ResizedGroup", "resize_groups", "resize_groups_array",
    "DEFAULT_TABLE_ID", "LookupTables", "get_lookup_tables", "available_tables",
    "Base32768Error",
    "EncodingError", "PartialGroupMidStream", "UnrecognizedTier", "UnencodableValue",
    "DecodingError", "InvalidCharacterWidth", "MisplacedPadding", "InvalidCharacter",
    "RepertoireError",
]
