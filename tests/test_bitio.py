import io

import pytest

from huffproc.bitio import END, BitInputStream, BitOutputStream


def test_read_bits_msb_first():
    stream = BitInputStream(bytes([0b10110010, 0xFF]))
    assert stream.read_bits(1) == 1
    assert stream.read_bits(3) == 0b011
    assert stream.read_bits(4) == 0b0010
    assert stream.read_byte() == 0xFF
    assert stream.bits_read == 16


def test_read_past_end_returns_end():
    stream = BitInputStream(b"\x01")
    assert stream.read_bits(9) == END
    # a failed read does not consume anything
    assert stream.read_byte() == 1
    assert stream.read_bit() == END
    assert stream.read_byte() == END


def test_reset_rewinds():
    stream = BitInputStream(b"ab")
    assert stream.read_byte() == ord("a")
    assert stream.read_byte() == ord("b")
    stream.reset()
    assert stream.read_byte() == ord("a")


def test_input_rejects_non_bytes():
    with pytest.raises(TypeError):
        BitInputStream("text")


def test_write_bits_keeps_leading_zeros():
    out = BitOutputStream()
    out.write_bits(3, 0b001)
    out.write_bits(5, 0b10101)
    assert out.getvalue() == bytes([0b00110101])
    assert out.bits_written == 8


def test_write_bits_masks_high_bits():
    out = BitOutputStream()
    out.write_bits(4, 0x1F5)
    out.close()
    assert out.getvalue() == bytes([0x50])


def test_close_pads_and_flushes_to_sink():
    sink = io.BytesIO()
    with BitOutputStream(sink) as out:
        out.write_bits(9, 0x1FF)
    assert sink.getvalue() == b"\xff\x80"
    assert out.closed


def test_close_is_idempotent_and_blocks_writes():
    sink = io.BytesIO()
    out = BitOutputStream(sink)
    out.write_bits(8, 7)
    out.close()
    out.close()
    assert sink.getvalue() == b"\x07"
    with pytest.raises(ValueError):
        out.write_bits(1, 1)


def test_zero_width_is_rejected():
    with pytest.raises(ValueError):
        BitOutputStream().write_bits(0, 0)
    with pytest.raises(ValueError):
        BitInputStream(b"\x00").read_bits(0)


def test_file_streams(tmp_path):
    path = tmp_path / "bits.bin"
    with open(path, "wb") as f:
        with BitOutputStream(f) as out:
            out.write_bits(16, 0xBEEF)
    with BitInputStream.from_file(path) as stream:
        assert stream.read_bits(16) == 0xBEEF
        assert stream.read_bit() == END


def test_input_close_releases_data():
    with BitInputStream(b"\xff") as stream:
        assert stream.read_bit() == 1
    assert stream.read_bit() == END
    stream.reset()
    assert stream.read_byte() == END
