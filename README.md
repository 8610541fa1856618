# lutro

Building blocks for a small 2D game runtime, written in plain Python: WAV streaming, audio
sources and a mixer, keyboard and joypad maps with state tracking, editable image data, and file
access under a game directory.

## Modules

- `lutro.decoder`
  - `WavDecoder(path)` opens an 8-bit or 16-bit, mono or stereo RIFF/WAVE file and finds its data chunk.
    It raises `DecoderError` for a file that is not valid or has no data chunk.
  - `seek(sample_pos)` moves the read position. A position past the end is clamped to the end.
  - `tell()` returns the current position, and `sample_count()` returns the number of frames.
  - `decode(buffer, volume, loop)` adds the next `buffer.frames` frames into a `MixBuffer`. It returns
    `True` once the sound has ended; with `loop` it rewinds instead.
  - `WavDecoder` is a context manager, and `close()` releases the file.
  - `MixBuffer(frames, channels)` is an interleaved float buffer, and `clear()` silences it.
- `lutro.source`
  - `Source.from_file(path)` opens a `.wav` file. A file that cannot be opened or decoded gives a
    source that is not playable (`is_playable()` is `False`).
  - `Source.from_sound_data(SoundData(samples, channels))` plays decoded float samples.
  - A source has `volume`, `looping`, `pitch`, `position` and a `state` (`SourceState.STOPPED`,
    `PAUSED` or `PLAYING`).
  - `seek(position, unit)` and `tell(unit)` work in `"samples"` (the default) or in `"seconds"`, at
    44100 Hz. Any other unit raises `ValueError`.
- `lutro.mixer`
  - `Mixer(frames=735, volume=1.0)` tracks the sources that are playing.
  - `play` starts or resumes a source and returns `True` when it newly starts one.
  - `stop`, `pause_source`, `pause(*sources_or_lists)`, `stop_all` and `unref_stopped` control playback
    and release slots.
  - `active_sources()` and `active_source_count()` list the sources that are playing or paused.
  - `render()` mixes one block of `frames` stereo frames. It returns a list of saturated signed 16-bit
    values, interleaved left/right.
- `lutro.input`
  - `JoypadButton`, `find_value(name)` and `find_name(value)` map joypad button names such as `"a"`
    and `"l1"` to button ids, and back.
  - `joypad(poll, name, port=1, index=1)` asks a poll callback `poll(port, device, index, id)` whether
    a button is held.
- `lutro.joystick`
  - `Joysticks` caches the state of 8 joysticks with 16 buttons each.
  - `update(poll, handler)` calls `handler(event, joystick, button)` with `"joystickpressed"` or
    `"joystickreleased"` when a state changes.
  - `is_down(joystick, button)` counts joysticks and buttons from 1.
  - `retro_to_joystick` and `joystick_to_retro` convert between button ids and names.
- `lutro.keyboard`
  - `find_value`, `find_name`, `scancode_from_key` and `key_from_scancode` map key names to scancodes
    and back.
  - `Keyboard.update(poll, handler)` calls `handler(event, key, scancode, False)` with `"keypressed"` or
    `"keyreleased"` when a state changes.
  - `Keyboard.is_down(*keys)` checks the cached state, and `reset()` clears it.
- `lutro.event`: `EventSystem(on_quit)`. Its `quit()` sets `quit_requested` and calls `on_quit`.
- `lutro.image`
  - `ImageData(width, height)` holds 32-bit ARGB pixels, and `ImageData.from_file` loads an image
    with Pillow.
  - `get_pixel` and `set_pixel` read and write single pixels, and `dimensions()` returns the size.
  - `pack_color` and `unpack_color` convert between a colour and its channels.
- `lutro.filesystem`
  - `FileSystem(gamedir, system_directory)` prefixes paths with `gamedir` (by plain string concatenation).
  - It has `read` (returns text and byte count), `write`, `exists`, `is_file`, `is_directory`,
    `create_directory`, `get_directory_items` and `appdata_directory`.
  - `user_directory()` returns the home directory with a trailing slash.
- `lutro.retro_math`: `next_pow2`, `prev_pow2`, `clamp_value`, `saturate_value`, `dot_product`,
  `convert_rgb_to_yxy` and `convert_yxy_to_rgb`.

## Example

```python
from lutro.source import Source
from lutro.mixer import Mixer

mixer = Mixer()
music = Source.from_file("assets/theme.wav")
music.looping = True
mixer.play(music)

block = mixer.render()   # interleaved stereo int16 values
```

## What it does not do

- It has no Ogg Vorbis decoding. `Source.from_file` on an `.ogg` file logs an error and returns a
  source that cannot be played.
- It has no scripting runtime, no window, no drawing or fonts, and no audio output device.
  `Mixer.render` returns sample values, and sending them to a device is up to the caller.
- It reads no input hardware. Key and button states come from the poll callback you pass in.
- It has no command-line program.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```