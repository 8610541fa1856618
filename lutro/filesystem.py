"""Access to files under the game directory."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path


def user_directory() -> str:
    """The user's home directory, always ending with a slash."""
    home = os.environ.get("HOME")
    if home is None:
        home = os.environ.get("HOMEDRIVE")
        if home is None:
            home = "."
    if not home.endswith("/"):
        home += "/"
    return home


class FileSystem:
    """Resolves game paths against the game directory and performs file operations."""

    def __init__(
        self,
        gamedir: str | Path = "",
        system_directory: str | Callable[[], str | None] | None = None,
        identity: str = "",
    ) -> None:
        self.gamedir = str(gamedir)
        self.system_directory = system_directory
        self.identity = identity

    def full_path(self, path: str) -> str:
        """The game directory prefixed to path."""
        if not isinstance(path, str):
            raise TypeError(f"expected a path string, got {type(path).__name__}")
        return self.gamedir + path

    def read(self, path: str) -> tuple[str, int]:
        """Return the file's text (up to the first NUL byte) and the bytes read."""
        with open(self.full_path(path), "rb") as fp:
            raw = fp.read()
        text = raw.split(b"\0", 1)[0].decode("utf-8", errors="surrogateescape")
        return text, len(raw)

    def write(self, path: str, data: str) -> bool:
        """Replace the file's contents with data."""
        if not isinstance(data, str):
            raise TypeError(f"expected a string, got {type(data).__name__}")
        with open(self.full_path(path), "w", encoding="utf-8") as fp:
            fp.write(data)
        return True

    def exists(self, path: str) -> bool:
        return os.path.exists(self.full_path(path))

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(self.full_path(path))

    def is_file(self, path: str) -> bool:
        full = self.full_path(path)
        return os.path.exists(full) and not os.path.isdir(full)

    def create_directory(self, path: str) -> bool:
        """Create a directory and its parents; False if that fails."""
        try:
            os.makedirs(self.full_path(path), exist_ok=True)
        except OSError:
            return False
        return True

    def get_directory_items(self, path: str) -> list[str]:
        """Names of the entries in a directory, without '.' and '..'."""
        full = self.full_path(path)
        if not os.path.isdir(full):
            raise NotADirectoryError(f"The given directory of '{path}' is not a directory.")
        try:
            names = os.listdir(full)
        except OSError as exc:
            raise OSError(f"Failed to open the '{path}' directory.") from exc
        return [name for name in names if name not in (".", "..")]

    def appdata_directory(self) -> str:
        """The frontend's system directory, or an empty string if it has none."""
        directory = self.system_directory
        if callable(directory):
            directory = directory()
        return "" if directory is None else str(directory)