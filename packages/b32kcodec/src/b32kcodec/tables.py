# packages/b32kcodec/src/b32kcodec/tables.py
from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .errors import RepertoireError
from .repertoire import Repertoire, build_repertoire, expand_ranges

__all__ = [
    "DEFAULT_TABLE_ID",
    "LookupTables",
    "load_table_data",
    "available_tables",
    "build_lookup_tables",
    "get_lookup_tables",
]

log = logging.getLogger(__name__)

# Espace-ressource packagé (répertoires gelés inclus dans la wheel)
_PKG_NS = "b32kcodec.data.repertoires"

# Répertoire par défaut (base32768 v1 : 1024 + 4 blocs de 32)
DEFAULT_TABLE_ID = "base32768_v1"

# Caches (clé = (env_root, table_id))
_DATA_CACHE: Dict[Tuple[str, str], Dict[str, Any]] = {}
_TABLES_CACHE: Dict[Tuple[str, str], "LookupTables"] = {}
_LOCK = threading.Lock()


def _env_custom_root() -> Optional[Path]:
    """
    Retourne la racine explicite des répertoires si l'ENV `B32K_REPERTOIRES`
    est défini, sinon None. Si défini, ce dossier est consulté en premier.
    """
    v = os.getenv("B32K_REPERTOIRES")
    return Path(v) if v else None


def _load_json_file(p: Path) -> Dict[str, Any]:
    with p.open("rb") as f:
        return json.load(f)


# ---------- Coercion vers le format canonique (block_starts par palier) ----------

def _coerce_table_data(raw: Dict[str, Any], table_id: str) -> Dict[str, Any]:
    """
    Convertit un JSON de répertoire vers le format canonique :
        {"id", "bits_per_char": int, "block_size": int, "block_starts": [str, ...]}

    Schémas acceptés :
      - canonique : "block_starts" (un caractère par bloc, une chaîne par palier)
      - compact   : "ranges" (paires premier/dernier caractère, une chaîne par palier)
    """
    try:
        bits_per_char = int(raw.get("bits_per_char", 15))
        block_size = int(raw["block_size"])
    except (KeyError, TypeError, ValueError) as e:
        raise RepertoireError(f"repertoire '{table_id}': missing/invalid block_size ({e})") from e

    if "block_starts" in raw:
        starts = raw["block_starts"]
    elif "ranges" in raw:
        starts = [expand_ranges(r, block_size) for r in raw["ranges"]]
    else:
        raise RepertoireError(
            f"unknown repertoire schema for '{table_id}' (expected block_starts or ranges)"
        )

    if not isinstance(starts, list) or not starts or not all(isinstance(s, str) for s in starts):
        raise RepertoireError(f"repertoire '{table_id}': tiers must be a non-empty list of strings")

    return {
        "id": str(raw.get("id", table_id)),
        "bits_per_char": bits_per_char,
        "block_size": block_size,
        "block_starts": list(starts),
    }


# ------------------------------- Tables -----------------------------------------

@dataclass(frozen=True)
class LookupTables:
    """
    Contexte immuable partagé par l'encodeur et le décodeur.

    `repertoires[t]` est le répertoire du palier t ; `index` fusionne tous les
    `reverse` en `codepoint -> (tier, value)` (paliers disjoints ⇒ une seule
    sonde par caractère au décodage).
    """
    table_id: str
    bits_per_char: int
    repertoires: Tuple[Repertoire, ...]
    index: Dict[int, Tuple[int, int]] = field(repr=False)

    @classmethod
    def from_repertoires(cls, table_id: str, bits_per_char: int,
                         repertoires: List[Repertoire]) -> "LookupTables":
        index: Dict[int, Tuple[int, int]] = {}
        for rep in repertoires:
            if bits_per_char - 8 * rep.tier < 0:
                raise RepertoireError(f"repertoire '{table_id}': tier {rep.tier} cannot be reached")
            expected = 1 << (bits_per_char - 8 * rep.tier)
            if len(rep) != expected:
                raise RepertoireError(
                    f"repertoire '{table_id}' tier {rep.tier}: {len(rep)} values, expected {expected}"
                )
            for cp, value in rep.reverse.items():
                if cp in index:
                    raise RepertoireError(
                        f"repertoire '{table_id}': U+{cp:04X} in tiers {index[cp][0]} and {rep.tier}"
                    )
                index[cp] = (rep.tier, value)
        return cls(table_id, bits_per_char, tuple(repertoires), index)

    @property
    def n_tiers(self) -> int:
        return len(self.repertoires)


# ------------------------------- API publique -----------------------------------

def load_table_data(table_id: str = DEFAULT_TABLE_ID) -> Dict[str, Any]:
    """
    Charge les données statiques d'un répertoire par identifiant (format canonique).

    Ordre de résolution :
      0) ENV `B32K_REPERTOIRES` → <root>/<table_id>.json
      1) Ressource packagée `b32kcodec/data/repertoires/<table_id>.json`

    Exceptions
    ----------
    FileNotFoundError si aucune source ne fournit `table_id`.
    RepertoireError si le contenu est invalide.
    """
    env_root = _env_custom_root()
    key = (str(env_root) if env_root else "", table_id)
    if key in _DATA_CACHE:
        return _DATA_CACHE[key]

    raw: Optional[Dict[str, Any]] = None
    if env_root:
        p = env_root / f"{table_id}.json"
        if p.is_file():
            log.debug("repertoire %s: loading %s", table_id, p)
            raw = _load_json_file(p)

    if raw is None:
        try:
            with resources.files(_PKG_NS).joinpath(f"{table_id}.json").open("rb") as f:
                raw = json.load(f)
            log.debug("repertoire %s: loaded from package %s", table_id, _PKG_NS)
        except FileNotFoundError:
            raise FileNotFoundError(
                f"repertoire '{table_id}' not found in "
                f"B32K_REPERTOIRES={env_root!s} nor package '{_PKG_NS}'."
            ) from None

    data = _coerce_table_data(raw, table_id)
    _DATA_CACHE[key] = data
    return data


def available_tables() -> List[str]:
    """Identifiants disponibles (ENV + package), triés et dédupliqués."""
    out: set[str] = set()

    env_root = _env_custom_root()
    if env_root and env_root.exists():
        out.update(p.stem for p in env_root.glob("*.json") if p.is_file())

    for entry in resources.files(_PKG_NS).iterdir():
        if entry.name.endswith(".json"):
            out.add(Path(entry.name).stem)

    return sorted(out)


def build_lookup_tables(table_id: str = DEFAULT_TABLE_ID) -> LookupTables:
    """Construit (sans cache) les tables de tous les paliers d'un répertoire."""
    data = load_table_data(table_id)
    reps = [
        build_repertoire(starts, data["block_size"], tier)
        for tier, starts in enumerate(data["block_starts"])
    ]
    tables = LookupTables.from_repertoires(data["id"], data["bits_per_char"], reps)
    log.debug("repertoire %s: built %d tiers (%s values)",
              table_id, tables.n_tiers, "/".join(str(len(r)) for r in reps))
    return tables


def get_lookup_tables(table_id: str = DEFAULT_TABLE_ID) -> LookupTables:
    """
    Instance partagée (construite une seule fois par clé, sous verrou), puis
    lue sans synchronisation. Changer `B32K_REPERTOIRES` change la clé.
    """
    env_root = _env_custom_root()
    key = (str(env_root) if env_root else "", table_id)
    tables = _TABLES_CACHE.get(key)
    if tables is not None:
        return tables
    with _LOCK:
        tables = _TABLES_CACHE.get(key)
        if tables is None:
            tables = build_lookup_tables(table_id)
            _TABLES_CACHE[key] = tables
    return tables
