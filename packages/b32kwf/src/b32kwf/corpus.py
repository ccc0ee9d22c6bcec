# packages/b32kwf/src/b32kwf/corpus.py
# -----------------------------------------------------------------------------
# Corpus de fixtures (<nom>.bin, <nom>.txt) : vérification encode/decode.

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from b32kcodec import Base32768Codec, Base32768Error

__all__ = ["PairResult", "iter_fixture_pairs", "check_pair", "run_corpus"]

log = logging.getLogger(__name__)


@dataclass
class PairResult:
    bin_path: Path
    txt_path: Path
    encode_ok: bool = False
    decode_ok: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.encode_ok and self.decode_ok and self.error is None

    def to_json(self) -> dict:
        return {
            "bin": str(self.bin_path),
            "txt": str(self.txt_path),
            "encode_ok": self.encode_ok,
            "decode_ok": self.decode_ok,
            "error": self.error,
        }


def iter_fixture_pairs(root: Path | str) -> Iterator[Tuple[Path, Path]]:
    """
    Énumère (récursivement, ordre trié) les paires `x.bin` / `x.txt` sous `root`.
    Un `.bin` sans `.txt` voisin est ignoré (warning).
    """
    for bin_path in sorted(Path(root).rglob("*.bin")):
        txt_path = bin_path.with_suffix(".txt")
        if not txt_path.is_file():
            log.warning("fixture sans .txt: %s", bin_path)
            continue
        yield bin_path, txt_path


def check_pair(bin_path: Path, txt_path: Path, codec: Optional[Base32768Codec] = None) -> PairResult:
    """
    encode(bin) doit valoir exactement txt, et decode(encode(bin)) == bin.
    Les erreurs codec / I/O sont capturées dans `PairResult.error`.
    """
    codec = codec or Base32768Codec()
    res = PairResult(bin_path, txt_path)
    try:
        data = bin_path.read_bytes()
        expected = txt_path.read_text(encoding="utf-8")
        out = codec.encode(data)
        res.encode_ok = out == expected
        res.decode_ok = codec.decode(out) == data
    except (Base32768Error, OSError, UnicodeDecodeError) as e:
        res.error = f"{type(e).__name__}: {e}"
    return res


def run_corpus(root: Path | str, codec: Optional[Base32768Codec] = None) -> List[PairResult]:
    codec = codec or Base32768Codec()
    results = [check_pair(b, t, codec) for b, t in iter_fixture_pairs(root)]
    n_ok = sum(r.ok for r in results)
    log.info("corpus %s: %d/%d OK", root, n_ok, len(results))
    return results
