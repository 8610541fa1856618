"""Mixing of playing audio sources into signed 16-bit stereo frames."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from lutro.decoder import DecoderError, MixBuffer
from lutro.source import Source, SourceState

log = logging.getLogger(__name__)

AUDIO_FRAMES = 44100 // 60
CHANNELS = 2

INT16_MAX = 32767
INT16_MIN = -32768


def _saturate(value: float) -> int:
    if value >= INT16_MAX:
        return INT16_MAX
    if value <= INT16_MIN:
        return INT16_MIN
    return int(value)


class Mixer:
    """Keeps track of playing sources and renders them into one output buffer."""

    def __init__(self, frames: int = AUDIO_FRAMES, volume: float = 1.0) -> None:
        if frames <= 0:
            raise ValueError(f"frame count must be positive, got {frames}")
        self.frames = frames
        self.volume = float(volume)
        self._slots: list[Source | None] = []

    def _sources(self) -> Iterator[Source]:
        return (source for source in self._slots if source is not None)

    def play(self, source: Source) -> bool | None:
        """Start or resume a source; True when it was newly started."""
        if source.state is SourceState.PLAYING:
            return None

        if not source.is_playable():
            log.error("Audio source is not playable.")
            source.state = SourceState.STOPPED
            return None

        if source.state is SourceState.PAUSED:
            source.state = SourceState.PLAYING
            return None

        source.state = SourceState.PLAYING

        if not any(existing is source for existing in self._sources()):
            try:
                slot = self._slots.index(None)
            except ValueError:
                self._slots.append(source)
            else:
                self._slots[slot] = source
        return True

    def stop(self, source: Source) -> None:
        """Stop a source and rewind it; its slot is released by unref_stopped."""
        if source.state is SourceState.STOPPED:
            return
        source.position = 0
        source.state = SourceState.STOPPED

    def pause_source(self, source: Source) -> None:
        """Pause a source unless it is stopped."""
        if source.state is not SourceState.STOPPED:
            source.state = SourceState.PAUSED

    def pause(self, *args: Source | Iterable[Source]) -> list[Source]:
        """Pause every playing source, or just the given ones; return those paused."""
        if not args:
            playing = [s for s in self._sources() if s.state is SourceState.PLAYING]
            for source in playing:
                source.state = SourceState.PAUSED
            return playing

        paused: list[Source] = []

        def pause_one(item: object) -> None:
            if not isinstance(item, Source):
                raise TypeError(f"expected Source, got {type(item).__name__}")
            if item.state is not SourceState.STOPPED:
                item.state = SourceState.PAUSED
                paused.append(item)

        for arg in args:
            if isinstance(arg, Source):
                pause_one(arg)
            elif isinstance(arg, Iterable) and not isinstance(arg, (str, bytes)):
                for item in arg:
                    pause_one(item)
            else:
                raise TypeError(f"expected Source or a list of them, got {type(arg).__name__}")
        return paused

    def stop_all(self) -> None:
        """Mark every tracked source as stopped."""
        for source in self._sources():
            source.state = SourceState.STOPPED

    def unref_stopped(self) -> None:
        """Free the slots held by stopped sources."""
        self._slots = [
            None if source is None or source.state is SourceState.STOPPED else source
            for source in self._slots
        ]

    def active_sources(self) -> list[Source]:
        """Sources that are playing or paused, in slot order."""
        return [
            source
            for source in self._sources()
            if source.state in (SourceState.PLAYING, SourceState.PAUSED)
        ]

    def active_source_count(self) -> int:
        return len(self.active_sources())

    def _mix_sound_data(self, source: Source, buffer: MixBuffer) -> None:
        data = source.sound_data
        assert data is not None
        total = data.num_samples
        if total == 0:
            source.position = 0
            source.state = SourceState.STOPPED
            return

        out = buffer.data
        vol = source.volume
        mixed = 0
        while mixed < buffer.frames:
            chunk = min(buffer.frames - mixed, total - source.position)
            for _ in range(chunk):
                left, right = data.frame(source.position)
                out[2 * mixed] += left * vol
                out[2 * mixed + 1] += right * vol
                mixed += 1
                source.position += 1
            if source.position >= total:
                source.position = 0
                if not source.looping:
                    source.state = SourceState.STOPPED
                    break

    def render(self) -> list[int]:
        """Mix one block of interleaved stereo frames as signed 16-bit values."""
        buffer = MixBuffer(self.frames, CHANNELS)

        for source in list(self._sources()):
            if source.state is not SourceState.PLAYING:
                continue

            if source.wav is not None:
                wav = source.wav
                try:
                    wav.seek(source.position)
                    if wav.decode(buffer, source.volume, source.looping):
                        wav.seek(0)
                        source.state = SourceState.STOPPED
                    source.position = wav.tell()
                except (OSError, DecoderError) as exc:
                    log.error("WAV decoding failed: %s", exc)
                    source.state = SourceState.STOPPED
                continue

            if source.sound_data is not None:
                self._mix_sound_data(source, buffer)
                continue

            source.state = SourceState.STOPPED

        scale = self.volume * 32767
        return [_saturate(value * scale) for value in buffer.data]