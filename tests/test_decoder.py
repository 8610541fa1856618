import struct
import wave

import pytest

from lutro.decoder import DecoderError, MixBuffer, WavDecoder, WavHeader


def write_wav(path, channels, width, frames_bytes, rate=44100):
    with wave.open(str(path), "wb") as w:
        w.setnchannels(channels)
        w.setsampwidth(width)
        w.setframerate(rate)
        w.writeframes(frames_bytes)
    return path


def pcm16(*values):
    return struct.pack(f"<{len(values)}h", *values)


def raw_wav(fmt_extra=b"", extra_chunks=b"", data=b"\x00\x00", fmt_size=None):
    size = 16 + len(fmt_extra) if fmt_size is None else fmt_size
    fmt = struct.pack("<HHIIHH", 1, 1, 44100, 88200, 2, 16)
    body = b"WAVE" + b"fmt " + struct.pack("<I", size) + fmt + fmt_extra
    body += extra_chunks + b"data" + struct.pack("<I", len(data)) + data
    return b"RIFF" + struct.pack("<I", len(body)) + body


def test_header_fields(tmp_path):
    path = write_wav(tmp_path / "a.wav", 2, 2, pcm16(1, 2, 3, 4), rate=22050)
    with WavDecoder(path) as dec:
        assert dec.header.num_channels == 2
        assert dec.header.bits_per_sample == 16
        assert dec.header.sample_rate == 22050
        assert dec.header.bytes_per_frame == 4
        assert dec.sample_count() == 2


def test_header_unpack_ids():
    header = WavHeader.unpack(raw_wav())
    assert header.chunk_id == b"RIFF"
    assert header.format == b"WAVE"
    assert header.subchunk1_id == b"fmt "


def test_decode_stereo_16bit(tmp_path):
    path = write_wav(tmp_path / "a.wav", 2, 2, pcm16(32767, -32767, 0, 32767))
    buf = MixBuffer(2, 2)
    with WavDecoder(path) as dec:
        finished = dec.decode(buf, 1.0, False)
    assert finished is False
    assert buf.data == pytest.approx([1.0, -1.0, 0.0, 1.0])


def test_decode_volume_scales(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, pcm16(32767, -32767))
    buf = MixBuffer(2, 1)
    with WavDecoder(path) as dec:
        dec.decode(buf, 0.5, False)
    assert buf.data == pytest.approx([0.5, -0.5])


def test_decode_adds_into_buffer(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, pcm16(32767))
    buf = MixBuffer(1, 1, [1.0])
    with WavDecoder(path) as dec:
        dec.decode(buf, 1.0, False)
    assert buf.data == pytest.approx([2.0])


def test_decode_mono_8bit_to_stereo(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 1, bytes([128, 0]))
    buf = MixBuffer(2, 2)
    with WavDecoder(path) as dec:
        dec.decode(buf, 1.0, False)
    assert buf.data[0] == buf.data[1] == 0.0
    assert buf.data[2] == buf.data[3]
    assert buf.data[2] == pytest.approx(-16384 / 32767)


def test_decode_stereo_to_mono_sums(tmp_path):
    path = write_wav(tmp_path / "a.wav", 2, 2, pcm16(32767, 32767))
    buf = MixBuffer(1, 1)
    with WavDecoder(path) as dec:
        dec.decode(buf, 1.0, False)
    assert buf.data == pytest.approx([2.0])


def test_decode_finishes_without_loop(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, pcm16(32767, 32767))
    buf = MixBuffer(4, 1)
    with WavDecoder(path) as dec:
        assert dec.decode(buf, 1.0, False) is True
        assert dec.tell() == dec.sample_count()
    assert buf.data == pytest.approx([1.0, 1.0, 0.0, 0.0])


def test_decode_loops(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, pcm16(32767, -32767))
    buf = MixBuffer(5, 1)
    with WavDecoder(path) as dec:
        assert dec.decode(buf, 1.0, True) is False
        assert dec.tell() == 1
    assert buf.data == pytest.approx([1.0, -1.0, 1.0, -1.0, 1.0])


def test_loop_with_empty_data_ends(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, b"")
    buf = MixBuffer(3, 1)
    with WavDecoder(path) as dec:
        assert dec.decode(buf, 1.0, True) is True
    assert buf.data == [0.0, 0.0, 0.0]


def test_seek_and_tell(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, pcm16(0, 0, 32767, 0))
    buf = MixBuffer(1, 1)
    with WavDecoder(path) as dec:
        dec.seek(2)
        assert dec.tell() == 2
        dec.decode(buf, 1.0, False)
        assert dec.tell() == 3
    assert buf.data == pytest.approx([1.0])


def test_seek_clamps_to_end(tmp_path):
    path = write_wav(tmp_path / "a.wav", 2, 2, pcm16(1, 2, 3, 4, 5, 6))
    with WavDecoder(path) as dec:
        dec.seek(1000)
        assert dec.tell() == dec.sample_count()
        assert dec.decode(MixBuffer(1, 2), 1.0, False) is True


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        WavDecoder(tmp_path / "missing.wav")


def test_not_a_wav(tmp_path):
    path = tmp_path / "bad.wav"
    path.write_bytes(b"OggS" + b"\x00" * 60)
    with pytest.raises(DecoderError):
        WavDecoder(path)


def test_truncated_header(tmp_path):
    path = tmp_path / "short.wav"
    path.write_bytes(b"RIFF\x00\x00")
    with pytest.raises(DecoderError):
        WavDecoder(path)


def test_small_fmt_chunk_rejected(tmp_path):
    path = tmp_path / "small.wav"
    path.write_bytes(raw_wav(fmt_size=14))
    with pytest.raises(DecoderError, match="subchunk size"):
        WavDecoder(path)


def test_missing_data_chunk(tmp_path):
    raw = raw_wav()
    path = tmp_path / "nodata.wav"
    path.write_bytes(raw[: raw.index(b"data")])
    with pytest.raises(DecoderError, match="No data subchunk"):
        WavDecoder(path)


def test_extended_fmt_and_extra_chunks_skipped(tmp_path):
    extra = b"LIST" + struct.pack("<I", 4) + b"INFO"
    path = tmp_path / "ext.wav"
    path.write_bytes(raw_wav(fmt_extra=b"\x00\x00", extra_chunks=extra, data=pcm16(32767)))
    buf = MixBuffer(1, 1)
    with WavDecoder(path) as dec:
        assert dec.sample_count() == 1
        dec.decode(buf, 1.0, False)
    assert buf.data == pytest.approx([1.0])


def test_unsupported_bit_depth(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 3, b"\x01\x02\x03")
    buf = MixBuffer(1, 1)
    with WavDecoder(path) as dec:
        assert dec.decode(buf, 1.0, False) is True
    assert buf.data == [0.0]


def test_mix_buffer_clear():
    buf = MixBuffer(2, 2, [1.0, 2.0, 3.0, 4.0])
    buf.clear()
    assert buf.data == [0.0] * 4


def test_mix_buffer_rejects_channels():
    with pytest.raises(ValueError):
        MixBuffer(4, 3)


def test_close(tmp_path):
    path = write_wav(tmp_path / "a.wav", 1, 2, pcm16(1))
    with WavDecoder(path) as dec:
        assert dec.closed is False
    assert dec.closed is True
    with pytest.raises(DecoderError):
        dec.tell()