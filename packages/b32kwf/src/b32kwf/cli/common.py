from __future__ import annotations
import logging, sys
from pathlib import Path
from typing import Optional

def setup_logging(log_file: Optional[Path], verbose: bool = True) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=log_fmt, datefmt=datefmt, handlers=handlers, force=True)

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def add_common_args(p) -> None:
    p.add_argument("--table-id", default=None, help="Répertoire (défaut: ENV B32K_TABLE_ID ou base32768_v1)")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")

def make_codec(table_id: Optional[str]):
    from b32kcodec import Base32768Codec, CodecConfig
    cfg = CodecConfig(table_id=table_id) if table_id else CodecConfig.from_env()
    return Base32768Codec(cfg)
