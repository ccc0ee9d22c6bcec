from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, make_codec
from ..api import jsonl_append
from ..corpus import run_corpus

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="base32768 — Vérifie un corpus de paires .bin/.txt")
    p.add_argument("root", help="Dossier racine du corpus (recherche récursive *.bin)")
    p.add_argument("--stats-jsonl", default=None, help="(Optionnel) JSONL résultat par paire")
    add_common_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    results = run_corpus(args.root, make_codec(args.table_id))
    if not results:
        logging.error("Aucune paire .bin/.txt trouvée dans %s", args.root); return 2

    for r in results:
        if not r.ok:
            logging.error("KO %s (encode_ok=%s decode_ok=%s) %s",
                          r.bin_path, r.encode_ok, r.decode_ok, r.error or "")
        if args.stats_jsonl:
            jsonl_append(args.stats_jsonl, {"event": "corpus_pair", **r.to_json()})

    n_ok = sum(r.ok for r in results)
    logging.info("Terminé: %d/%d paires OK", n_ok, len(results))
    return 0 if n_ok == len(results) else 1

if __name__ == "__main__":
    sys.exit(main())
