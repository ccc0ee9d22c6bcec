# packages/b32kcodec/src/b32kcodec/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

__all__ = ["CodecConfig"]


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration **publique et stable** du codec base32768.

    Consommée par `b32kcodec.codec.Base32768Codec`.

    Champs
    ------
    table_id : str, default="base32768_v1"
        Identifiant du répertoire gelé (JSON chargeable via
        `b32kcodec.tables.load_table_data(...)`). Le dossier de recherche peut
        être surchargé via l'ENV `B32K_REPERTOIRES`.
    bits_per_char : int, default=15
        Bits de payload par caractère. Doit correspondre au `bits_per_char`
        du répertoire chargé.

    Notes
    -----
    - Avec des octets en entrée, le padding final vaut toujours < 8 bits : seuls
      les paliers 0 et 1 existent. `bits_per_char` est donc borné à [9..16].
    - Les validations lèvent une `ValueError` si les bornes sont violées.
    """

    table_id: str = "base32768_v1"
    bits_per_char: int = 15

    def __post_init__(self) -> None:
        if not isinstance(self.table_id, str) or not self.table_id:
            raise ValueError("CodecConfig.table_id must be a non-empty string")
        if not (9 <= int(self.bits_per_char) <= 16):
            raise ValueError("CodecConfig.bits_per_char must be in [9..16] (u16 groups, two tiers)")

    @staticmethod
    def from_env() -> "CodecConfig":
        """Config par défaut, `table_id` surchargeable via l'ENV `B32K_TABLE_ID`."""
        table_id = os.getenv("B32K_TABLE_ID", "").strip()
        return CodecConfig(table_id=table_id) if table_id else CodecConfig()
