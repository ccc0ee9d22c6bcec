# packages/b32kcodec/src/b32kcodec/errors.py
from __future__ import annotations

"""Erreurs du codec base32768.

Toutes les erreurs d'encodage/décodage dérivent de `ValueError` (convention
historique du codec : flux mal formé ⇒ ValueError). Les erreurs de construction
des tables (`RepertoireError`) sont à part : elles signalent des données
statiques corrompues, pas une entrée utilisateur invalide.
"""

from typing import Optional

__all__ = [
    "Base32768Error",
    "EncodingError", "PartialGroupMidStream", "UnrecognizedTier", "UnencodableValue",
    "DecodingError", "InvalidCharacterWidth", "MisplacedPadding", "InvalidCharacter",
    "RepertoireError",
]


class Base32768Error(ValueError):
    """Racine commune des erreurs d'encodage/décodage (non rejouables)."""


# -----------------------------------------------------------------------------
# Encodage (violations d'invariants internes)
# -----------------------------------------------------------------------------
class EncodingError(Base32768Error):
    pass


class PartialGroupMidStream(EncodingError):
    """Groupe de moins de 15 bits rencontré ailleurs qu'en fin de flux."""

    def __init__(self, index: int, bits: int):
        self.index = index
        self.bits = bits
        super().__init__(f"found partial group ({bits} bits) midway through stream at index {index}")


class UnrecognizedTier(EncodingError):
    def __init__(self, tier: int):
        self.tier = tier
        super().__init__(f"unrecognized repertoire tier {tier}")


class UnencodableValue(EncodingError):
    def __init__(self, value: int, tier: int):
        self.value = value
        self.tier = tier
        super().__init__(f"can't encode value {value} with repertoire tier {tier}")


# -----------------------------------------------------------------------------
# Décodage (entrée invalide)
# -----------------------------------------------------------------------------
class DecodingError(Base32768Error):
    """Erreur de décodage ; `position` = index du caractère fautif dans le texte."""

    def __init__(self, msg: str, position: Optional[int] = None, char: Optional[str] = None):
        self.position = position
        self.char = char
        super().__init__(msg)


class InvalidCharacterWidth(DecodingError):
    def __init__(self, position: int, char: str):
        super().__init__(
            f"got invalid length for encoded character U+{ord(char):04X} at position {position}",
            position, char,
        )


class MisplacedPadding(DecodingError):
    def __init__(self, position: int, char: str):
        super().__init__(
            f"got padding character U+{ord(char):04X} in the middle of the stream (position {position})",
            position, char,
        )


class InvalidCharacter(DecodingError):
    def __init__(self, position: int, char: str):
        super().__init__(
            f"unrecognized character U+{ord(char):04X} at position {position}",
            position, char,
        )


# -----------------------------------------------------------------------------
# Construction des tables (fatal)
# -----------------------------------------------------------------------------
class RepertoireError(RuntimeError):
    """Données de répertoire invalides (build corrompu) : erreur fatale."""
