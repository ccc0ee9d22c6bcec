# tests/flows/test_corpus_fixtures.py
from pathlib import Path

import pytest

from b32kcodec import encode, decode
from b32kwf.corpus import iter_fixture_pairs, check_pair, run_corpus

CORPUS = Path(__file__).resolve().parents[1] / "data" / "corpus"


def test_corpus_has_fixtures():
    pairs = list(iter_fixture_pairs(CORPUS))
    assert len(pairs) >= 6
    assert all(t.suffix == ".txt" and t.stem == b.stem for b, t in pairs)


@pytest.mark.parametrize("bin_path,txt_path", list(iter_fixture_pairs(CORPUS)), ids=lambda p: p.stem)
def test_run_encode_decode_test_suite(bin_path, txt_path):
    """Chaque .bin doit s'encoder exactement en son .txt, et revenir."""
    data = bin_path.read_bytes()
    expected = txt_path.read_text(encoding="utf-8")
    out = encode(data)
    assert out == expected, f"encode mismatch for {bin_path}"
    assert decode(out) == data


def test_run_corpus_all_ok():
    results = run_corpus(CORPUS)
    assert results and all(r.ok for r in results)


def test_check_pair_reports_mismatch(tmp_path):
    b = tmp_path / "x.bin"; b.write_bytes(b"Hello")
    t = tmp_path / "x.txt"; t.write_text("wrong", encoding="utf-8")
    r = check_pair(b, t)
    assert not r.ok
    assert r.decode_ok and not r.encode_ok and r.error is None


def test_bin_without_txt_is_skipped(tmp_path):
    (tmp_path / "lonely.bin").write_bytes(b"\x01")
    assert list(iter_fixture_pairs(tmp_path)) == []
