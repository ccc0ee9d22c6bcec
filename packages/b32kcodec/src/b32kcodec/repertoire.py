# packages/b32kcodec/src/b32kcodec/repertoire.py
# -----------------------------------------------------------------------------
# Répertoires (valeur N bits <-> point de code BMP), construits par blocs.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from .errors import RepertoireError

__all__ = ["Repertoire", "build_repertoire", "expand_ranges"]

_BMP_MAX = 0xFFFF
_SURROGATES = range(0xD800, 0xE000)


@dataclass(frozen=True)
class Repertoire:
    """
    Répertoire d'un palier (tier).

    - tier 0 : groupes complets (toutes les valeurs 0..2^15-1)
    - tier t>=1 : dernier groupe, paddé ; `t` encode le nombre de bits de padding

    `forward[value] -> codepoint` et `reverse[codepoint] -> value` sont des
    inverses exacts (construits dans la même passe). Ne jamais muter.
    """
    tier: int
    block_size: int
    forward: Dict[int, int] = field(repr=False)
    reverse: Dict[int, int] = field(repr=False)

    def __len__(self) -> int:
        return len(self.forward)


def expand_ranges(ranges: str, block_size: int) -> str:
    """
    Convertit une chaîne de paires (premier, dernier) en chaîne de débuts de blocs.

    Ex. avec block_size=32 : "\\u0180\\u019f\\u0240\\u029f" -> "\\u0180\\u0240\\u0260\\u0280".
    Chaque paire doit couvrir un multiple de `block_size` points de code.
    """
    if block_size <= 0:
        raise RepertoireError(f"block_size must be > 0, got {block_size}")
    if len(ranges) % 2:
        raise RepertoireError("ranges must contain (first, last) character pairs")
    starts = []
    for i in range(0, len(ranges), 2):
        lo, hi = ord(ranges[i]), ord(ranges[i + 1])
        span = hi - lo + 1
        if span <= 0 or span % block_size:
            raise RepertoireError(
                f"range U+{lo:04X}..U+{hi:04X} is not a positive multiple of {block_size}"
            )
        starts.extend(chr(cp) for cp in range(lo, hi + 1, block_size))
    return "".join(starts)


def build_repertoire(block_starts: str, block_size: int, tier: int = 0) -> Repertoire:
    """
    Construit les tables forward/reverse d'un palier.

    Paramètres
    ----------
    block_starts : str
        Un caractère par bloc ; le bloc i couvre les valeurs
        [i*block_size, (i+1)*block_size) et les points de code
        [ord(block_starts[i]), ord(block_starts[i]) + block_size).
    block_size : int
        Nombre de valeurs par bloc (32 pour base32768).
    tier : int
        Palier du répertoire (0 = complet).

    Exceptions
    ----------
    RepertoireError (fatal) si un caractère de début de bloc n'est pas une
    unité UTF-16 unique, si un bloc déborde du BMP / touche les surrogates, ou
    si deux blocs se chevauchent.
    """
    if block_size <= 0:
        raise RepertoireError(f"block_size must be > 0, got {block_size}")

    forward: Dict[int, int] = {}
    reverse: Dict[int, int] = {}
    for i, c in enumerate(block_starts):
        start = ord(c)
        end = start + block_size - 1
        if start > _BMP_MAX:
            raise RepertoireError(
                f"got unexpected unicode len for block start character U+{start:04X} (tier {tier})"
            )
        if end > _BMP_MAX or (start <= _SURROGATES[-1] and end >= _SURROGATES[0]):
            raise RepertoireError(
                f"block U+{start:04X}..U+{end:04X} leaves the single-code-unit range (tier {tier})"
            )
        base = i * block_size
        for offset in range(block_size):
            cp = start + offset
            if cp in reverse:
                raise RepertoireError(f"codepoint U+{cp:04X} assigned twice (tier {tier})")
            forward[base + offset] = cp
            reverse[cp] = base + offset

    return Repertoire(tier=tier, block_size=block_size, forward=forward, reverse=reverse)
