"""Keyboard key names, scancodes, state tracking and key events."""

from __future__ import annotations

import logging
import string
from collections.abc import Callable

log = logging.getLogger(__name__)

RETRO_DEVICE_KEYBOARD = 3
KEY_COUNT = 324

PollFn = Callable[[int, int, int, int], int]
KeyHandler = Callable[[str, str, int, bool], object]

_KEY_TABLE: list[tuple[int, str]] = [
    (8, "backspace"),
    (9, "tab"),
    (12, "clear"),
    (13, "return"),
    (19, "pause"),
    (27, "escape"),
    (32, "space"),
    (33, "!"),
    (34, '"'),
    (35, "#"),
    (36, "$"),
    (38, "&"),
    (39, "'"),
    (40, "("),
    (41, ")"),
    (42, "*"),
    (43, "+"),
    (44, ","),
    (45, "-"),
    (46, "."),
    (47, "/"),
    *((48 + d, str(d)) for d in range(10)),
    (58, ":"),
    (59, ";"),
    (60, "<"),
    (61, "="),
    (62, ">"),
    (63, "?"),
    (64, "@"),
    (91, "["),
    (92, "\\"),
    (93, "]"),
    (94, "^"),
    (95, "_"),
    (96, '"'),
    *((ord(c), c) for c in string.ascii_lowercase),
    (127, "kpdelete"),
    *((256 + d, f"kp{d}") for d in range(10)),
    (266, "kp."),
    (267, "kp/"),
    (268, "kp*"),
    (269, "kp-"),
    (270, "kp+"),
    (271, "kpenter"),
    (272, "kp="),
    (273, "up"),
    (274, "down"),
    (275, "right"),
    (276, "left"),
    (277, "insert"),
    (278, "home"),
    (279, "end"),
    (280, "pageup"),
    (281, "pagedown"),
    *((281 + n, f"f{n}") for n in range(1, 16)),
    (300, "numlock"),
    (301, "capslock"),
    (302, "scrolllock"),
    (303, "rshift"),
    (304, "lshift"),
    (305, "rctrl"),
    (306, "lctrl"),
    (307, "ralt"),
    (308, "lalt"),
    (309, "rmeta"),
    (310, "lmeta"),
    (311, "lgui"),
    (312, "rgui"),
    (313, "mode"),
    (314, "application"),
    (315, "help"),
    (316, "printscreen"),
    (317, "sysreq"),
    (318, "pause"),
    (319, "menu"),
    (320, "power"),
    (321, "currencyunit"),
    (322, "undo"),
]

_BY_NAME: dict[str, int] = {}
_BY_VALUE: dict[int, str] = {}
for _value, _name in _KEY_TABLE:
    _BY_NAME.setdefault(_name, _value)
    _BY_VALUE.setdefault(_value, _name)


def find_value(name: str) -> int | None:
    """The scancode of a key name, or None if unknown (first match wins)."""
    return _BY_NAME.get(name)


def find_name(value: int) -> str:
    """The key name of a scancode, or an empty string if unknown."""
    return _BY_VALUE.get(int(value), "")


def scancode_from_key(key: str) -> int:
    """The scancode of a key name; raises ValueError for an unknown key."""
    value = find_value(key)
    if value is None:
        raise ValueError("invalid button")
    return value


def key_from_scancode(scancode: int) -> str:
    """The key name of a scancode, or an empty string if unknown."""
    return find_name(scancode)


class Keyboard:
    """Cached key states, refreshed once per frame."""

    def __init__(self) -> None:
        self._cache = [0] * KEY_COUNT

    def reset(self) -> None:
        """Forget every key state."""
        self._cache = [0] * KEY_COUNT

    def update(self, poll: PollFn, handler: KeyHandler | None = None) -> None:
        """Poll every key and report changes as keypressed/keyreleased."""
        for scancode in range(KEY_COUNT):
            state = int(poll(0, RETRO_DEVICE_KEYBOARD, 0, scancode))
            if state == self._cache[scancode]:
                continue
            event = "keypressed" if state else "keyreleased"
            if handler is not None:
                try:
                    handler(event, find_name(scancode), scancode, False)
                except Exception:
                    log.exception("error in %s handler", event)
            self._cache[scancode] = state

    def is_down(self, *args: str) -> bool:
        """Whether any of the named keys is held."""
        if not args:
            raise TypeError(
                "lutro.keyboard.isDown requires 1 or more arguments, 0 given."
            )
        for name in args:
            if not isinstance(name, str):
                raise TypeError(f"expected a key name, got {type(name).__name__}")
            value = find_value(name)
            if value is None:
                raise ValueError("invalid button")
            if self._cache[value]:
                return True
        return False