# packages/b32kcodec/src/b32kcodec/codec.py
from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from .bits import resize_groups_array
from .config import CodecConfig
from .errors import (
    InvalidCharacter,
    InvalidCharacterWidth,
    MisplacedPadding,
    PartialGroupMidStream,
    UnencodableValue,
    UnrecognizedTier,
)
from .tables import LookupTables, get_lookup_tables

__all__ = ["Base32768Codec", "encode", "decode", "decode_into"]

log = logging.getLogger(__name__)

BYTE_BITS = 8
_BMP_MAX = 0xFFFF

BytesLike = Union[bytes, bytearray, memoryview]


# ---------------------------------------------------------------------------
# ENCODE — octets -> groupes de 15 bits -> caractères
# ---------------------------------------------------------------------------

def _encode(data: BytesLike, tables: LookupTables) -> str:
    """
    1. Regroupe les octets en groupes de `bits_per_char` bits (MSB-first).
    2. Tous les groupes sauf le dernier doivent être complets (sinon
       `PartialGroupMidStream`, invariant interne).
    3. Dernier groupe court : padding par des 1, `pad = (bpc - bits) % 8`,
       puis palier `tier = (bpc - bits') // 8`.
    4. Lookup `repertoires[tier].forward` ; rien n'est émis en cas d'erreur.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("encode: `data` must be bytes-like")

    bpc = tables.bits_per_char
    values, widths = resize_groups_array(data, BYTE_BITS, bpc)
    if values.size == 0:
        return ""

    short = np.flatnonzero(widths[:-1] != bpc)
    if short.size:
        i = int(short[0])
        raise PartialGroupMidStream(i, int(widths[i]))

    forward0 = tables.repertoires[0].forward
    body = values[:-1].tolist()
    try:
        chars = [chr(forward0[v]) for v in body]
    except KeyError as e:
        raise UnencodableValue(int(e.args[0]), 0) from None

    value, bits = int(values[-1]), int(widths[-1])
    if bits != bpc:
        pad = (bpc - bits) % BYTE_BITS
        value = (value << pad) | ((1 << pad) - 1)
        bits += pad

    tier = (bpc - bits) // BYTE_BITS
    if tier >= tables.n_tiers:
        raise UnrecognizedTier(tier)
    cp = tables.repertoires[tier].forward.get(value)
    if cp is None:
        raise UnencodableValue(value, tier)
    chars.append(chr(cp))

    return "".join(chars)


# ---------------------------------------------------------------------------
# DECODE — caractères -> valeurs 15 bits -> octets
# ---------------------------------------------------------------------------

def _decode_into(text: str, out: bytearray, tables: LookupTables) -> None:
    """
    Passe unique sur les caractères :
      - point de code hors BMP           → InvalidCharacterWidth
      - absent de tous les paliers       → InvalidCharacter
      - palier >= 1 ailleurs qu'en fin   → MisplacedPadding
      - palier t >= 1 en fin             → dernier groupe sur bpc - 8t bits utiles
    Puis regroupement bpc → 8 ; seuls les groupes de 8 bits sont conservés
    (le reliquat de padding est jeté). `out` n'est étendu qu'en cas de succès.
    """
    if not isinstance(text, str):
        raise TypeError("decode: `text` must be str")
    if not isinstance(out, bytearray):
        raise TypeError("decode_into: `out` must be a bytearray")

    bpc = tables.bits_per_char
    index = tables.index
    last_pos = len(text) - 1
    last_bits = bpc
    values = []

    for pos, c in enumerate(text):
        cp = ord(c)
        if cp > _BMP_MAX:
            raise InvalidCharacterWidth(pos, c)
        hit = index.get(cp)
        if hit is None:
            raise InvalidCharacter(pos, c)
        tier, value = hit
        if tier:
            if pos != last_pos:
                raise MisplacedPadding(pos, c)
            last_bits = bpc - BYTE_BITS * tier
        values.append(value)

    if not values:
        return

    groups, widths = resize_groups_array(np.asarray(values, dtype=np.uint16), bpc, BYTE_BITS, last_bits)
    out += groups[widths == BYTE_BITS].astype(np.uint8).tobytes()


# ---------------------------------------------------------------------------
# Façade
# ---------------------------------------------------------------------------

class Base32768Codec:
    """
    Codec lié à une config et à ses tables (contexte explicite, lecture seule).

    Les tables sont partagées par défaut (`get_lookup_tables`) ; on peut en
    injecter d'autres (tests, répertoires custom).
    """

    def __init__(self, cfg: Optional[CodecConfig] = None, tables: Optional[LookupTables] = None):
        self.cfg = cfg or CodecConfig()
        self.tables = tables if tables is not None else get_lookup_tables(self.cfg.table_id)
        if self.tables.bits_per_char != self.cfg.bits_per_char:
            raise ValueError(
                f"repertoire '{self.tables.table_id}' packs {self.tables.bits_per_char} bits/char, "
                f"config expects {self.cfg.bits_per_char}"
            )
        log.debug("codec ready: table=%s tiers=%d", self.tables.table_id, self.tables.n_tiers)

    def encode(self, data: BytesLike) -> str:
        return _encode(data, self.tables)

    def decode_into(self, text: str, out: bytearray) -> None:
        _decode_into(text, out, self.tables)

    def decode(self, text: str) -> bytes:
        out = bytearray()
        _decode_into(text, out, self.tables)
        return bytes(out)


def encode(data: BytesLike, tables: Optional[LookupTables] = None) -> str:
    """
    Encode des octets en texte base32768.

    Exemple
    -------
    >>> encode(b"Hello")
    '䩲腻㐿'

    Exceptions
    ----------
    TypeError si `data` n'est pas bytes-like ; `EncodingError` (sous-classes)
    en cas d'invariant interne violé.
    """
    return _encode(data, tables if tables is not None else get_lookup_tables())


def decode_into(text: str, out: bytearray, tables: Optional[LookupTables] = None) -> None:
    """Décode `text` et **ajoute** les octets à `out` (réutilisation de buffer)."""
    _decode_into(text, out, tables if tables is not None else get_lookup_tables())


def decode(text: str, tables: Optional[LookupTables] = None) -> bytes:
    """
    Décode un texte base32768 en octets.

    >>> decode("䩲腻㐿")
    b'Hello'

    Exceptions
    ----------
    TypeError si `text` n'est pas une str ; `DecodingError` (sous-classes) si
    le texte est invalide (aucune sortie partielle).
    """
    out = bytearray()
    decode_into(text, out, tables)
    return bytes(out)
