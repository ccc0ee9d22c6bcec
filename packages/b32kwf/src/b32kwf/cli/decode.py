from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, ensure_dir, add_common_args, make_codec
from ..api import atomic_write
from b32kcodec import Base32768Error

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="base32768 — Decode .txt (UTF-8) -> fichiers binaires")
    p.add_argument("inputs", nargs="+", help="Fichiers texte base32768")
    p.add_argument("--out", required=True, help="Dossier de sortie")
    add_common_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    codec = make_codec(args.table_id)

    out_dir = Path(args.out); ensure_dir(out_dir)
    ok = 0
    buf = bytearray()
    for i, p in enumerate(args.inputs, 1):
        p = Path(p)
        try:
            logging.info("[%d/%d] decode: %s", i, len(args.inputs), p)
            buf.clear()
            codec.decode_into(p.read_text(encoding="utf-8"), buf)
            atomic_write(out_dir / f"{p.stem}.bin", bytes(buf))
            logging.info("→ OK %s", out_dir / f"{p.stem}.bin")
            ok += 1
        except (Base32768Error, OSError, UnicodeDecodeError) as e:
            logging.exception("Échec decode %s: %s", p, e)
    return 0 if ok == len(args.inputs) else 1

if __name__ == "__main__":
    sys.exit(main())
