"""Game events such as a request to quit."""

from __future__ import annotations

from collections.abc import Callable


class EventSystem:
    """Dispatches event requests from the game to the runtime."""

    def __init__(self, on_quit: Callable[[], None] | None = None) -> None:
        self.on_quit = on_quit
        self.quit_requested = False

    def quit(self, *args: object) -> None:
        """Ask the runtime to shut the game down; an exit status is ignored."""
        if len(args) > 1:
            raise TypeError(
                f"lutro.event.quit requires 0 or 1 arguments, {len(args)} given."
            )
        self.quit_requested = True
        if self.on_quit is not None:
            self.on_quit()