# packages/b32kwf/src/b32kwf/__init__.py
from __future__ import annotations

from .api import atomic_write, atomic_write_text, jsonl_append
from .corpus import PairResult, iter_fixture_pairs, check_pair, run_corpus
from .bench import bench_encode, bench_decode

__all__ = [
    "atomic_write",
    "atomic_write_text",
    "jsonl_append",
    "PairResult",
    "iter_fixture_pairs",
    "check_pair",
    "run_corpus",
    "bench_encode",
    "bench_decode",
    # on n’importe PAS le sous-module cli ici (argparse/logging au top-level inutiles)
]

__version__ = "1.0.0"
