from __future__ import annotations
import time
from typing import Dict, Optional

import numpy as np

from b32kcodec import Base32768Codec

TEST_STRING = b"The quick brown fox jumps over the lazy dog"

def random_payload(size: int, seed: int = 1234) -> bytes:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()

def _timeit(fn, repeat: int, number: int) -> Dict[str, float]:
    runs = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        for _ in range(number):
            fn()
        runs.append((time.perf_counter() - t0) / number)
    arr = np.asarray(runs) * 1e6
    return {"best_us": float(arr.min()), "median_us": float(np.median(arr)), "mean_us": float(arr.mean())}

def bench_encode(data: bytes = TEST_STRING, repeat: int = 5, number: int = 1000,
                 codec: Optional[Base32768Codec] = None) -> Dict[str, float]:
    """Temps par appel (µs) de `encode(data)` ; tables construites avant la mesure."""
    codec = codec or Base32768Codec()
    stats = _timeit(lambda: codec.encode(data), repeat, number)
    stats["bytes"] = float(len(data))
    return stats

def bench_decode(data: bytes = TEST_STRING, repeat: int = 5, number: int = 1000,
                 codec: Optional[Base32768Codec] = None) -> Dict[str, float]:
    codec = codec or Base32768Codec()
    text = codec.encode(data)
    stats = _timeit(lambda: codec.decode(text), repeat, number)
    stats["bytes"] = float(len(data))
    stats["chars"] = float(len(text))
    return stats
