# packages/b32kcodec/src/b32kcodec/bits.py
# -----------------------------------------------------------------------------
# Regroupement de bits (N bits -> M bits), MSB-first, vectorisé numpy.

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

__all__ = ["ResizedGroup", "resize_groups", "resize_groups_array", "MAX_GROUP_BITS"]

#: Largeur max d'un groupe (accumulateur u16)
MAX_GROUP_BITS = 16

BitsInput = Union[bytes, bytearray, memoryview, np.ndarray, Iterable[int]]


@dataclass(frozen=True, slots=True)
class ResizedGroup:
    """Groupe de sortie : `value` sur `bits` bits (bits < largeur cible ⇒ dernier groupe)."""
    value: int
    bits: int


def _as_array(values: BitsInput) -> np.ndarray:
    if isinstance(values, memoryview) and not values.c_contiguous:
        values = values.tobytes()  # vue à pas (ex. mv[::2]) : frombuffer refuse
    if isinstance(values, (bytes, bytearray, memoryview)):
        return np.frombuffer(values, dtype=np.uint8)
    return np.asarray(values, dtype=np.uint32).ravel()


def _bit_matrix(arr: np.ndarray, in_width: int) -> np.ndarray:
    """Bits MSB-first de chaque élément, aplatis, 1 octet par bit (uint8)."""
    if in_width == 8 and arr.dtype == np.uint8:
        return np.unpackbits(arr)
    shifts = np.arange(in_width - 1, -1, -1, dtype=np.uint32)
    return ((arr[:, None] >> shifts) & 1).astype(np.uint8).ravel()


def _check_widths(in_width: int, out_width: int, last_in_width: int) -> None:
    if not (1 <= in_width <= MAX_GROUP_BITS):
        raise ValueError(f"in_width must be in [1..{MAX_GROUP_BITS}], got {in_width}")
    if not (1 <= out_width <= MAX_GROUP_BITS):
        raise ValueError(f"out_width must be in [1..{MAX_GROUP_BITS}], got {out_width}")
    if not (1 <= last_in_width <= in_width):
        raise ValueError(f"last_in_width must be in [1..in_width={in_width}], got {last_in_width}")


def resize_groups_array(
    values: BitsInput,
    in_width: int,
    out_width: int,
    last_in_width: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Redécoupe une suite de groupes de `in_width` bits en groupes de `out_width` bits.

    Paramètres
    ----------
    values : bytes | array-like d'entiers
        Groupes d'entrée ; seuls les `in_width` bits de poids faible sont lus.
    in_width : int
        Bits par élément d'entrée (sauf éventuellement le dernier).
    out_width : int
        Bits par groupe de sortie, <= 16.
    last_in_width : int | None
        Bits valides du **dernier** élément (ses bits de poids faible).
        Par défaut `in_width`.

    Retour
    ------
    (values, widths) : (np.ndarray[uint16], np.ndarray[uint8])
        Tous les groupes font `out_width` bits sauf éventuellement le dernier,
        qui porte exactement le reliquat (1..out_width-1 bits). Entrée vide ⇒
        deux tableaux vides.

    Détails
    -------
    1. Matrice de bits (n, in_width) en uint8, lue MSB-first (`unpackbits` pour
       les octets, décalages sinon) ; les poids 2^k n'interviennent qu'au produit.
    2. Les `in_width - last_in_width` bits de tête de la dernière ligne sont retirés.
    3. Les groupes pleins = produit matriciel avec les poids 2^k ; le reliquat
       éventuel forme un groupe court distinct.

    Exceptions
    ----------
    ValueError si les largeurs sortent des bornes (erreur de programmation).
    """
    if last_in_width is None:
        last_in_width = in_width
    _check_widths(in_width, out_width, last_in_width)

    arr = _as_array(values)
    n = int(arr.size)
    if n == 0:
        return np.zeros(0, dtype=np.uint16), np.zeros(0, dtype=np.uint8)

    flat = _bit_matrix(arr, in_width)

    drop = in_width - last_in_width
    if drop:
        head = (n - 1) * in_width
        flat = np.concatenate([flat[:head], flat[head + drop:]])

    n_full, rem = divmod(int(flat.size), out_width)
    weights = np.left_shift(np.uint32(1), np.arange(out_width - 1, -1, -1, dtype=np.uint32))

    full = flat[: n_full * out_width].reshape(n_full, out_width) @ weights
    out_values = full.astype(np.uint16)
    out_widths = np.full(n_full, out_width, dtype=np.uint8)

    if rem:
        tail = int(flat[n_full * out_width:] @ weights[out_width - rem:])
        out_values = np.append(out_values, np.uint16(tail))
        out_widths = np.append(out_widths, np.uint8(rem))

    return out_values, out_widths


def resize_groups(
    values: BitsInput,
    in_width: int,
    out_width: int,
    last_in_width: Optional[int] = None,
) -> List[ResizedGroup]:
    """Variante "objet" de `resize_groups_array` : liste de `ResizedGroup`."""
    vals, widths = resize_groups_array(values, in_width, out_width, last_in_width)
    return [ResizedGroup(int(v), int(w)) for v, w in zip(vals.tolist(), widths.tolist())]
