"""Joystick button state tracking and press/release events."""

from __future__ import annotations

import logging
from collections.abc import Callable

from lutro.input import RETRO_DEVICE_JOYPAD, find_name, find_value

log = logging.getLogger(__name__)

NB_JOYSTICKS = 8
NB_BUTTONS = 16

PollFn = Callable[[int, int, int, int], int]
JoystickHandler = Callable[[str, int, int], object]


def retro_to_joystick(key: int) -> str:
    """The button name for a joypad id, or an empty string if unknown."""
    return find_name(key)


def joystick_to_retro(name: str) -> int:
    """The joypad id for a button name, or 0 if unknown."""
    button = find_value(name)
    return 0 if button is None else int(button)


class Joysticks:
    """Cached button states of every joystick, refreshed once per frame."""

    def __init__(self) -> None:
        self._cache = [[0] * NB_BUTTONS for _ in range(NB_JOYSTICKS)]

    def update(self, poll: PollFn, handler: JoystickHandler | None = None) -> None:
        """Poll every button and report changes as joystickpressed/joystickreleased."""
        for joystick, states in enumerate(self._cache):
            for button in range(NB_BUTTONS):
                state = int(poll(joystick, RETRO_DEVICE_JOYPAD, 0, button))
                if states[button] == state:
                    continue
                states[button] = state
                event = "joystickpressed" if state > 0 else "joystickreleased"
                if handler is None:
                    continue
                try:
                    handler(event, joystick, button)
                except Exception:
                    log.exception("error in %s handler", event)

    def joystick_count(self) -> int:
        """Number of joysticks reported to the game."""
        return 6

    def is_down(self, joystick: int, button: int) -> bool:
        """Whether a button is held; joystick and button count from 1."""
        joystick = int(joystick)
        button = int(button)
        if joystick > NB_JOYSTICKS or joystick <= 0:
            raise ValueError(
                f"lutro.joystick.isDown invalid joystick number {joystick} "
                f"must be between 1 and {NB_JOYSTICKS} included."
            )
        if button > NB_BUTTONS or button <= 0:
            raise ValueError(
                f"lutro.joystick.isDown invalid joystick button {button} "
                f"must be between 1 and {NB_BUTTONS} included."
            )
        return bool(self._cache[joystick - 1][button - 1])