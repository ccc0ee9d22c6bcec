from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_common_args, make_codec
from ..bench import TEST_STRING, bench_encode, bench_decode, random_payload

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="base32768 — Micro-benchmark encode/decode")
    p.add_argument("--size", type=int, default=None,
                   help="Taille d'un payload aléatoire (défaut: phrase 'quick brown fox')")
    p.add_argument("--seed", type=int, default=1234)
    p.add_argument("--repeat", type=int, default=5)
    p.add_argument("--number", type=int, default=1000)
    add_common_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    if args.repeat < 1 or args.number < 1:
        logging.error("--repeat et --number doivent être >= 1"); return 2

    codec = make_codec(args.table_id)
    data = random_payload(args.size, args.seed) if args.size is not None else TEST_STRING
    enc = bench_encode(data, args.repeat, args.number, codec)
    dec = bench_decode(data, args.repeat, args.number, codec)
    logging.info("[BENCH] encode %6d B  best=%.2f µs  median=%.2f µs", len(data), enc["best_us"], enc["median_us"])
    logging.info("[BENCH] decode %6d B  best=%.2f µs  median=%.2f µs", len(data), dec["best_us"], dec["median_us"])
    return 0

if __name__ == "__main__":
    sys.exit(main())
