"""Audio sources: streamed WAV files or pre-decoded sound data."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

from lutro.decoder import DecoderError, WavDecoder

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100


class SourceState(IntEnum):
    STOPPED = 0
    PAUSED = 1
    PLAYING = 2


@dataclass
class SoundData:
    """Pre-decoded interleaved float samples, mono or stereo."""

    samples: list[float] = field(default_factory=list)
    channels: int = 1

    def __post_init__(self) -> None:
        if self.channels not in (1, 2):
            raise ValueError(f"unsupported channel count: {self.channels}")
        if len(self.samples) % self.channels:
            raise ValueError("sample count is not a multiple of the channel count")

    @property
    def num_samples(self) -> int:
        """Number of frames (samples per channel)."""
        return len(self.samples) // self.channels

    def frame(self, index: int) -> tuple[float, float]:
        """Return the frame at index as a (left, right) pair."""
        if self.channels == 1:
            value = self.samples[index]
            return value, value
        return self.samples[2 * index], self.samples[2 * index + 1]


def _samples_for(position: float, unit: str | None) -> int:
    if unit == "seconds":
        return int(float(position) * SAMPLE_RATE)
    if unit is None or unit == "samples":
        return int(position)
    raise ValueError(
        f"Source:seek '{unit}' given for unit. Expected either 'seconds' or 'samples'"
    )


class Source:
    """A playable sound: a streamed WAV file or a reference to SoundData."""

    def __init__(
        self,
        *,
        wav: WavDecoder | None = None,
        sound_data: SoundData | None = None,
    ) -> None:
        self.wav = wav
        self.sound_data = sound_data
        self.position = 0
        self.looping = False
        self.volume = 1.0
        self.pitch = 1.0
        self.state = SourceState.STOPPED

    @classmethod
    def from_file(cls, path: str | Path) -> Source:
        """Open a sound file; a file that cannot be decoded gives an unplayable source."""
        if not isinstance(path, (str, Path)):
            raise TypeError(f"expected a path string, got {type(path).__name__}")
        ext = Path(path).suffix.lstrip(".")
        wav = None
        if "ogg" in ext:
            log.error("vorbis: cannot decode %s: ogg streams are not supported", path)
        if "wav" in ext:
            try:
                wav = WavDecoder(path)
            except FileNotFoundError:
                log.warning("wavfile not found: %s", path)
            except (OSError, DecoderError) as exc:
                log.error("Failed to open wavfile '%s': %s", path, exc)
        return cls(wav=wav)

    @classmethod
    def from_sound_data(cls, sound_data: SoundData) -> Source:
        """Create a source that plays pre-decoded sound data."""
        if not isinstance(sound_data, SoundData):
            raise TypeError(f"expected SoundData, got {type(sound_data).__name__}")
        return cls(sound_data=sound_data)

    def __enter__(self) -> Source:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def is_playable(self) -> bool:
        return self.wav is not None or self.sound_data is not None

    def is_stopped(self) -> bool:
        return self.state is SourceState.STOPPED

    def is_paused(self) -> bool:
        return self.state is SourceState.PAUSED

    def is_playing(self) -> bool:
        return self.state is SourceState.PLAYING

    def seek(self, position: float, unit: str | None = None) -> None:
        """Move the play position, in 'samples' (default) or 'seconds'."""
        wanted = _samples_for(position, unit)

        if self.wav is not None:
            try:
                self.wav.seek(wanted)
            except (OSError, DecoderError) as exc:
                log.error("WAV decoder seek failed: %s", exc)
            self.position = self.wav.tell()

        if self.sound_data is not None:
            self.position = min(wanted, self.sound_data.num_samples)

        if wanted != self.position:
            log.warning(
                "seek asked for sample pos %d, got pos %d", wanted, self.position
            )

    def tell(self, unit: str | None = None) -> int | float:
        """Current play position, in 'samples' (default) or 'seconds'."""
        if unit == "seconds":
            return self.position / float(SAMPLE_RATE)
        if unit is None or unit == "samples":
            return self.position
        raise ValueError(
            f"Source:tell '{unit}' given for unit. Expected either 'seconds' or 'samples'"
        )

    def close(self) -> None:
        """Release the underlying file and sound data."""
        if self.wav is not None:
            self.wav.close()
            self.wav = None
        self.sound_data = None