"""Streaming WAV decoding into a floating-point mix buffer."""

from __future__ import annotations

import logging
import struct
import sys
from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

log = logging.getLogger(__name__)

WAV_HEADER_CHUNK1_SIZE = 36
WAV_HEADER_CHUNK2_SIZE = 8

_CHUNK1 = struct.Struct("<4sI4s4sIHHIIHH")
_CHUNK2 = struct.Struct("<4sI")


class DecoderError(Exception):
    """Raised when an audio file cannot be decoded."""


@dataclass
class MixBuffer:
    """Interleaved pre-saturation sample buffer that decoders add into."""

    frames: int
    channels: int = 2
    data: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.channels not in (1, 2):
            raise ValueError(f"unsupported channel count: {self.channels}")
        size = self.frames * self.channels
        if len(self.data) != size:
            self.data = [0.0] * size

    def clear(self) -> None:
        """Reset every sample to silence."""
        self.data[:] = [0.0] * (self.frames * self.channels)


@dataclass(frozen=True)
class WavHeader:
    """The RIFF header and the format chunk of a WAV file."""

    chunk_id: bytes
    chunk_size: int
    format: bytes
    subchunk1_id: bytes
    subchunk1_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int

    @classmethod
    def unpack(cls, raw: bytes) -> WavHeader:
        return cls(*_CHUNK1.unpack(raw[:WAV_HEADER_CHUNK1_SIZE]))

    @property
    def bytes_per_sample(self) -> int:
        return (self.bits_per_sample + 7) // 8

    @property
    def bytes_per_frame(self) -> int:
        return self.bytes_per_sample * self.num_channels


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class WavDecoder:
    """Reads PCM frames from the data chunk of a WAV file."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        fp: BinaryIO = open(self.path, "rb")
        try:
            self._parse(fp)
        except BaseException:
            fp.close()
            raise
        self._fp: BinaryIO | None = fp
        self._pos = 0

    def _parse(self, fp: BinaryIO) -> None:
        raw = fp.read(WAV_HEADER_CHUNK1_SIZE)
        if len(raw) < WAV_HEADER_CHUNK1_SIZE:
            raise DecoderError(f"{self.path} is not a valid wav file or is truncated.")
        header = WavHeader.unpack(raw)
        if (
            header.chunk_id != b"RIFF"
            or header.format != b"WAVE"
            or header.subchunk1_id != b"fmt "
        ):
            raise DecoderError(f"{self.path} is not a valid wav file or is truncated.")
        if header.subchunk1_size < 16:
            raise DecoderError(
                f"{self.path} has invalid subchunk size={header.subchunk1_size}. "
                "Expected size >= 16."
            )
        if header.subchunk1_size != 16:
            fp.seek(header.subchunk1_size - 16, 1)

        while True:
            chunk = fp.read(WAV_HEADER_CHUNK2_SIZE)
            if len(chunk) < WAV_HEADER_CHUNK2_SIZE:
                raise DecoderError(
                    f"{self.path} is not a supported wav file. No data subchunk was found."
                )
            chunk_id, chunk_size = _CHUNK2.unpack(chunk)
            if chunk_id == b"data":
                self.header = header
                self.data_size = chunk_size
                self.data_offset = fp.tell()
                return
            fp.seek(chunk_size, 1)

    def __enter__(self) -> WavDecoder:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._fp is None

    def _file(self) -> BinaryIO:
        if self._fp is None:
            raise DecoderError(f"{self.path} is closed")
        return self._fp

    def sample_count(self) -> int:
        """Number of whole frames in the data chunk."""
        return self.data_size // self.header.bytes_per_frame

    def seek(self, sample_pos: int) -> None:
        """Move to a frame position; positions past the end clamp to the end."""
        fp = self._file()
        bpf = self.header.bytes_per_frame
        sample_pos = min(int(sample_pos), self.sample_count())
        byte_pos = sample_pos * bpf
        if self._pos == byte_pos:
            return
        target = self.data_offset + byte_pos
        if target < 0:
            raise DecoderError(f"cannot seek {self.path} to sample {sample_pos}")
        fp.seek(target)
        self._pos = byte_pos

    def tell(self) -> int:
        """Current read position in frames."""
        fp = self._file()
        bpf = self.header.bytes_per_frame
        ret = fp.tell() - self.data_offset
        if ret >= 0 and ret % bpf:
            log.warning(
                "Unaligned read position in wav decoder stream. size=%d bps=%d channels=%d pos=%d",
                self.data_size,
                self.header.bits_per_sample,
                self.header.num_channels,
                ret,
            )
        return _trunc_div(ret, bpf)

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def _samples(self, raw: bytes) -> list[int]:
        if self.header.bytes_per_sample == 1:
            return [(b - 128) * 128 for b in raw]
        values = array("h")
        values.frombytes(raw)
        if sys.byteorder == "big":
            values.byteswap()
        return values.tolist()

    def _read_frames(self, count: int) -> list[int]:
        """Read up to count frames, staying aligned to whole frames."""
        fp = self._file()
        bpf = self.header.bytes_per_frame
        remaining = self.data_size - self._pos
        available = max(0, -(-remaining // bpf))
        want = min(count, available)
        if want <= 0:
            return []
        raw = fp.read(want * bpf)
        got = len(raw) // bpf
        if len(raw) != got * bpf:
            raw = raw[: got * bpf]
            fp.seek(self.data_offset + self._pos + len(raw))
        self._pos += len(raw)
        return self._samples(raw)

    def decode(self, buffer: MixBuffer, volume: float, loop: bool) -> bool:
        """Add the next buffer.frames frames into buffer; True once the sound ended."""
        header = self.header
        src = header.num_channels
        dst = buffer.channels
        if header.bits_per_sample not in (8, 16) or src not in (1, 2) or dst not in (1, 2):
            return True

        fp = self._file()
        scale = volume / 32767
        out = buffer.data
        frame = 0
        rewound = False
        while frame < buffer.frames:
            samples = self._read_frames(buffer.frames - frame)
            if not samples:
                if not loop or rewound:
                    return True
                self._pos = 0
                fp.seek(self.data_offset)
                rewound = True
                continue
            rewound = False

            if src == 2:
                pairs = zip(samples[0::2], samples[1::2])
                if dst == 1:
                    for k, (left, right) in enumerate(pairs, start=frame):
                        out[k] += left * scale
                        out[k] += right * scale
                else:
                    for k, (left, right) in enumerate(pairs, start=frame):
                        out[2 * k] += left * scale
                        out[2 * k + 1] += right * scale
                frame += len(samples) // 2
            else:
                if dst == 1:
                    for k, value in enumerate(samples, start=frame):
                        out[k] += value * scale
                else:
                    for k, value in enumerate(samples, start=frame):
                        out[2 * k] += value * scale
                        out[2 * k + 1] += value * scale
                frame += len(samples)
        return False