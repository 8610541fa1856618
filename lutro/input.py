"""Polling of joypad buttons by name."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

RETRO_DEVICE_JOYPAD = 1


class JoypadButton(IntEnum):
    B = 0
    Y = 1
    SELECT = 2
    START = 3
    UP = 4
    DOWN = 5
    LEFT = 6
    RIGHT = 7
    A = 8
    X = 9
    L = 10
    R = 11
    L2 = 12
    R2 = 13
    L3 = 14
    R3 = 15


_NAMES: dict[str, JoypadButton] = {
    "b": JoypadButton.B,
    "y": JoypadButton.Y,
    "select": JoypadButton.SELECT,
    "start": JoypadButton.START,
    "up": JoypadButton.UP,
    "down": JoypadButton.DOWN,
    "left": JoypadButton.LEFT,
    "right": JoypadButton.RIGHT,
    "a": JoypadButton.A,
    "x": JoypadButton.X,
    "l1": JoypadButton.L,
    "r1": JoypadButton.R,
    "l2": JoypadButton.L2,
    "r2": JoypadButton.R2,
    "l3": JoypadButton.L3,
    "r3": JoypadButton.R3,
}

_BY_VALUE: dict[int, str] = {int(button): name for name, button in _NAMES.items()}

PollFn = Callable[[int, int, int, int], int]


def find_value(name: str) -> JoypadButton | None:
    """The button for a name such as 'a' or 'l1', or None if unknown."""
    return _NAMES.get(name)


def find_name(value: int) -> str:
    """The name of a button id, or an empty string if unknown."""
    return _BY_VALUE.get(int(value), "")


def joypad(poll: PollFn, name: str, port: int = 1, index: int = 1) -> bool:
    """Whether the named button is held; port and index count from 1."""
    button = find_value(name)
    if button is None:
        raise ValueError("invalid button")
    if port < 1 or index < 1:
        raise ValueError("port and index count from 1")
    return bool(poll(port - 1, RETRO_DEVICE_JOYPAD, index - 1, int(button)))