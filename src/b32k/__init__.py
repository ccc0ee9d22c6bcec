"""base32768 — unified API
Install once, import one namespace:

    pip install -e .

Usage:

    import b32k as bk
    text = bk.encode(b"Hello")      # '䩲腻㐿'
    data = bk.decode(text)          # b'Hello'

Or detailed modules:

    from b32k import codec, wf
"""

__version__ = "1.0.0"

# Bring subpackages into a single namespace
import b32kcodec as codec
import b32kwf as wf

# High-level convenience re-exports (top-level functions)
from b32kcodec import (
    encode, decode, decode_into,
    CodecConfig, Base32768Codec,
    Base32768Error, EncodingError, DecodingError,
    get_lookup_tables, available_tables,
)
from b32kwf import run_corpus, bench_encode, bench_decode, atomic_write

__all__ = [
    # sub-namespaces
    "codec", "wf",
    # convenience
    "encode", "decode", "decode_into",
    "CodecConfig", "Base32768Codec",
    "Base32768Error", "EncodingError", "DecodingError",
    "get_lookup_tables", "available_tables",
    "run_corpus", "bench_encode", "bench_decode", "atomic_write",
    "__version__",
]
