from bit_io import BitReader, BitWriter


def test_writer_packs_msb_first_and_pads():
    w = BitWriter()
    for b in (1, 0, 1):
        w.write_bit(b)
    assert w.total_bits == 3
    assert w.finish() == b"\xa0"
    # padding is not counted as written bits
    assert w.total_bits == 3


def test_writer_full_byte_has_no_padding():
    w = BitWriter()
    for b in (0, 1, 0, 0, 0, 0, 0, 1):
        w.write_bit(b)
    w.write_repeat(1, 4)
    assert w.total_bits == 12
    assert w.finish() == b"\x41\xf0"


def test_reader_yields_bits_then_end_marker():
    r = BitReader(b"\x81")
    bits = [r.read_bit() for _ in range(8)]
    assert bits == [1, 0, 0, 0, 0, 0, 0, 1]
    assert r.read_bit() == -1
    assert r.read_bit() == -1


def test_reader_starts_at_offset():
    r = BitReader(b"\x00\x00\xc0", offset=2)
    assert [r.read_bit() for _ in range(8)] == [1, 1, 0, 0, 0, 0, 0, 0]
    assert r.read_bit() == -1


def test_writer_reader_agree():
    pattern = [1, 1, 0, 1, 0, 0, 1, 0, 1, 1, 1]
    w = BitWriter()
    for b in pattern:
        w.write_bit(b)
    r = BitReader(w.finish())
    assert [r.read_bit() for _ in pattern] == pattern
    # tail padding reads as zero bits, then the end marker
    assert [r.read_bit() for _ in range(5)] == [0] * 5
    assert r.read_bit() == -1
