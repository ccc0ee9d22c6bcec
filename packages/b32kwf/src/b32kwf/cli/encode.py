from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, ensure_dir, add_common_args, make_codec
from ..api import atomic_write_text, jsonl_append
from b32kcodec import Base32768Error

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="base32768 — Encode fichiers binaires -> .txt (UTF-8)")
    p.add_argument("inputs", nargs="+", help="Fichiers à encoder")
    p.add_argument("--out", required=True, help="Dossier de sortie")
    p.add_argument("--resume", action="store_true", help="Skip si la sortie existe déjà")
    p.add_argument("--stats-jsonl", default=None, help="(Optionnel) JSONL stats par fichier")
    add_common_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    codec = make_codec(args.table_id)

    out_dir = Path(args.out); ensure_dir(out_dir)
    ok = 0
    for i, p in enumerate(args.inputs, 1):
        p = Path(p)
        dst = out_dir / f"{p.stem}.txt"
        if args.resume and dst.exists():
            logging.info("[%d/%d] skip: %s", i, len(args.inputs), dst)
            ok += 1; continue
        try:
            logging.info("[%d/%d] encode: %s", i, len(args.inputs), p)
            data = p.read_bytes()
            text = codec.encode(data)
            atomic_write_text(dst, text)
            if args.stats_jsonl:
                jsonl_append(args.stats_jsonl, {"event": "encode_done", "in": str(p), "out": str(dst),
                                                "bytes": len(data), "chars": len(text)})
            logging.info("→ OK %d octets → %d caractères → %s", len(data), len(text), dst)
            ok += 1
        except (Base32768Error, OSError) as e:
            logging.exception("Échec encodage %s: %s", p, e)

    logging.info("Terminé: %d/%d encodés", ok, len(args.inputs))
    return 0 if ok == len(args.inputs) else 1

if __name__ == "__main__":
    sys.exit(main())
