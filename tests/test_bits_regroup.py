# tests/test_bits_regroup.py
import numpy as np
import pytest

from b32kcodec.bits import ResizedGroup, resize_groups, resize_groups_array


def test_resize_odd_bytes_correctly():
    groups = resize_groups([4, 244, 13, 12, 92], 8, 15, 8)
    assert groups == [
        ResizedGroup(634, 15),
        ResizedGroup(835, 15),
        ResizedGroup(92, 10),
    ]


def test_resize_even_bytes_correctly():
    groups = resize_groups(bytes([242, 67, 167, 208, 253, 91, 156, 21]), 8, 15)
    assert [(g.value, g.bits) for g in groups] == [
        (31009, 15), (27124, 15), (8107, 15), (14785, 15), (5, 4),
    ]


def test_resize_empty_input():
    assert resize_groups(b"", 8, 15) == []
    vals, widths = resize_groups_array([], 15, 8)
    assert vals.size == 0 and widths.size == 0


def test_exact_multiple_has_no_short_group():
    # 15 octets = 120 bits = 8 groupes pleins
    groups = resize_groups(bytes(range(15)), 8, 15)
    assert len(groups) == 8
    assert all(g.bits == 15 for g in groups)


def test_last_in_width_reads_only_low_bits():
    # dernier élément : seuls ses 7 bits de poids faible comptent
    groups = resize_groups([0b000000000000001, 0b1111111], 15, 8, last_in_width=7)
    # 15 + 7 = 22 bits -> 8 + 8 + 6
    assert [(g.value, g.bits) for g in groups] == [(0, 8), (0b00000011, 8), (0b111111, 6)]


def test_group_size_invariant_random():
    rng = np.random.default_rng(1234)
    for n in range(0, 64):
        data = rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()
        vals, widths = resize_groups_array(data, 8, 15)
        total = 8 * n
        assert int(widths.sum()) == total
        assert all(int(w) == 15 for w in widths[:-1])
        if total % 15:
            assert int(widths[-1]) == total % 15
        elif n:
            assert int(widths[-1]) == 15
        assert all(int(v) < (1 << int(w)) for v, w in zip(vals, widths))


def test_regroup_back_to_bytes_recovers_input():
    data = bytes([72, 101, 108, 108, 111])
    vals, widths = resize_groups_array(data, 8, 15)
    back, bw = resize_groups_array(vals, 15, 8, last_in_width=int(widths[-1]))
    assert bytes(back[bw == 8].astype(np.uint8)) == data


@pytest.mark.parametrize("in_w,out_w,last_w", [(8, 17, 8), (0, 8, 0), (8, 0, 8), (8, 15, 9), (8, 15, 0)])
def test_width_preconditions(in_w, out_w, last_w):
    with pytest.raises(ValueError):
        resize_groups_array(b"\x01", in_w, out_w, last_w)


def test_byte_path_matches_integer_path():
    # octets (unpackbits) et liste d'entiers (décalages) : même découpage
    rng = np.random.default_rng(77)
    data = rng.integers(0, 256, size=37, dtype=np.uint8).tobytes()
    v_bytes, w_bytes = resize_groups_array(data, 8, 15)
    v_list, w_list = resize_groups_array(list(data), 8, 15)
    assert np.array_equal(v_bytes, v_list) and np.array_equal(w_bytes, w_list)
    assert v_bytes.dtype == np.uint16 and w_bytes.dtype == np.uint8


def test_bytes_with_narrow_in_width():
    # octets lus sur 4 bits : seuls les quartets de poids faible comptent
    groups = resize_groups(b"\xf1\x02\x03", 4, 6)
    assert [(g.value, g.bits) for g in groups] == [(0b000100, 6), (0b100011, 6)]


def test_strided_memoryview_input():
    data = bytes(range(20))
    vals, widths = resize_groups_array(memoryview(data)[1::3], 8, 15)
    ref_vals, ref_widths = resize_groups_array(data[1::3], 8, 15)
    assert np.array_equal(vals, ref_vals) and np.array_equal(widths, ref_widths)
