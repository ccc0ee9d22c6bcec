from __future__ import annotations
import json
import threading

import pytest

from b32kcodec import encode, decode
from b32kcodec.errors import RepertoireError
from b32kcodec.tables import (
    DEFAULT_TABLE_ID,
    available_tables,
    build_lookup_tables,
    get_lookup_tables,
    load_table_data,
)


def test_packaged_repertoire_shapes():
    """Le répertoire packagé : 1024 blocs (tier 0) + 4 blocs (tier 1) de 32."""
    data = load_table_data(DEFAULT_TABLE_ID)
    assert data["bits_per_char"] == 15
    assert data["block_size"] == 32
    assert [len(s) for s in data["block_starts"]] == [1024, 4]


def test_tier_sizes_and_inverse_tables():
    t = get_lookup_tables()
    assert t.n_tiers == 2
    assert len(t.repertoires[0]) == 1 << 15
    assert len(t.repertoires[1]) == 1 << 7
    for rep in t.repertoires:
        assert sorted(rep.forward) == list(range(len(rep)))
        for cp, value in rep.reverse.items():
            assert rep.forward[value] == cp
            assert cp <= 0xFFFF


def test_tiers_are_disjoint():
    t = get_lookup_tables()
    reps = t.repertoires
    for i in range(len(reps)):
        for j in range(i + 1, len(reps)):
            assert not set(reps[i].reverse) & set(reps[j].reverse)
    assert len(t.index) == sum(len(r) for r in reps)


def test_known_block_starts():
    t = get_lookup_tables()
    fwd0, fwd1 = t.repertoires[0].forward, t.repertoires[1].forward
    assert fwd0[0] == 0x04A0
    assert fwd0[32767] == 0xA85F
    assert fwd1[0] == 0x0180
    assert fwd1[127] == 0x029F


def test_lookup_tables_built_once():
    first = get_lookup_tables()
    seen = []
    threads = [threading.Thread(target=lambda: seen.append(get_lookup_tables())) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert all(s is first for s in seen)


def test_available_tables_lists_packaged_default():
    assert DEFAULT_TABLE_ID in available_tables()


def test_unknown_table_id_raises():
    with pytest.raises(FileNotFoundError):
        load_table_data("does_not_exist")


def _write_rotated(root, table_id):
    """Répertoire custom : mêmes blocs tier 0, décalés d'un cran."""
    data = load_table_data(DEFAULT_TABLE_ID)
    tier0, tier1 = data["block_starts"]
    custom = {
        "id": table_id,
        "bits_per_char": 15,
        "block_size": 32,
        "block_starts": [tier0[1:] + tier0[:1], tier1],
    }
    (root / f"{table_id}.json").write_text(json.dumps(custom), encoding="utf-8")


def test_env_override_directory(monkeypatch, tmp_path):
    """L'ENV B32K_REPERTOIRES ajoute des répertoires custom (schéma block_starts)."""
    _write_rotated(tmp_path, "rotated")
    monkeypatch.setenv("B32K_REPERTOIRES", str(tmp_path))

    assert "rotated" in available_tables()
    t = get_lookup_tables("rotated")
    assert t.table_id == "rotated"
    assert t.repertoires[0].forward[0] == get_lookup_tables().repertoires[0].forward[32]

    payload = b"custom repertoire"
    text = encode(payload, t)
    assert text != encode(payload)
    assert decode(text, t) == payload


def test_env_override_rejects_overlapping_tiers(monkeypatch, tmp_path):
    data = load_table_data(DEFAULT_TABLE_ID)
    tier0 = data["block_starts"][0]
    bad = {"block_size": 32, "block_starts": [tier0, tier0[:4]]}
    (tmp_path / "overlap.json").write_text(json.dumps(bad), encoding="utf-8")
    monkeypatch.setenv("B32K_REPERTOIRES", str(tmp_path))
    with pytest.raises(RepertoireError):
        build_lookup_tables("overlap")


def test_env_override_rejects_unknown_schema(monkeypatch, tmp_path):
    (tmp_path / "weird.json").write_text(json.dumps({"block_size": 32, "chars": "x"}), encoding="utf-8")
    monkeypatch.setenv("B32K_REPERTOIRES", str(tmp_path))
    with pytest.raises(RepertoireError):
        load_table_data("weird")


def test_env_override_rejects_wrong_tier_size(monkeypatch, tmp_path):
    data = load_table_data(DEFAULT_TABLE_ID)
    tier0, tier1 = data["block_starts"]
    bad = {"block_size": 32, "block_starts": [tier0[:-1], tier1]}
    (tmp_path / "short.json").write_text(json.dumps(bad), encoding="utf-8")
    monkeypatch.setenv("B32K_REPERTOIRES", str(tmp_path))
    with pytest.raises(RepertoireError):
        build_lookup_tables("short")
