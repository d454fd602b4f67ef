import numpy as np
import pytest

from codec_errors import DataError
from freq_model import build_cumulative, build_frequency_table, entropy_bits, find_symbol


def test_frequency_table_counts_bytes():
    freqs = build_frequency_table(b"aab\x00")
    assert len(freqs) == 256
    assert freqs[ord("a")] == 2
    assert freqs[ord("b")] == 1
    assert freqs[0] == 1
    assert sum(freqs) == 4


def test_frequency_table_accepts_numpy():
    arr = np.array([7, 7, 7, 255], dtype=np.uint8)
    freqs = build_frequency_table(arr)
    assert freqs[7] == 3
    assert freqs[255] == 1


def test_empty_input_rejected():
    with pytest.raises(DataError):
        build_frequency_table(b"")


def test_cumulative_prefix_sums():
    data = b"hello world"
    cum, total = build_cumulative(build_frequency_table(data))
    assert len(cum) == 257
    assert cum[0] == 0
    assert total == cum[256] == len(data)
    assert all(a <= b for a, b in zip(cum, cum[1:]))


def test_cumulative_zero_total_rejected():
    with pytest.raises(DataError):
        build_cumulative([0] * 256)


def test_cumulative_wrong_length_rejected():
    with pytest.raises(DataError):
        build_cumulative([1, 2, 3])


def test_find_symbol_total_over_domain():
    rng = np.random.default_rng(3)
    freqs = rng.integers(0, 5, size=256).tolist()
    freqs[0] = 0
    freqs[255] = 0
    freqs[17] = 9
    cum, total = build_cumulative(freqs)
    for scaled in range(total):
        s = find_symbol(cum, scaled)
        assert cum[s] <= scaled < cum[s + 1]
    for s, f in enumerate(freqs):
        if f > 0:
            assert find_symbol(cum, cum[s]) == s


def test_find_symbol_clamps_out_of_range():
    freqs = [0] * 256
    freqs[3] = 4
    cum, total = build_cumulative(freqs)
    assert find_symbol(cum, total) == 255
    assert find_symbol(cum, total + 100) == 255


def test_entropy_bits():
    assert entropy_bits([1] * 256) == pytest.approx(2048.0)
    single = [0] * 256
    single[65] = 1000
    assert entropy_bits(single) == 0.0
