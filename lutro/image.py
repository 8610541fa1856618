"""Image data: a grid of 32-bit ARGB pixels that can be read and edited."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0

ALPHA_MASK = 0xFF000000
RED_MASK = 0x00FF0000
GREEN_MASK = 0x0000FF00
BLUE_MASK = 0x000000FF


def pack_color(r: int, g: int, b: int, a: int = 255) -> int:
    """Pack colour components into one 32-bit ARGB pixel value."""
    value = (int(a) << ALPHA_SHIFT) | (int(r) << RED_SHIFT) | (int(g) << GREEN_SHIFT) | (
        int(b) << BLUE_SHIFT
    )
    return value & 0xFFFFFFFF


def unpack_color(color: int) -> tuple[int, int, int, int]:
    """Split a 32-bit ARGB pixel value into (r, g, b, a)."""
    color = int(color)
    return (
        (color & RED_MASK) >> RED_SHIFT,
        (color & GREEN_MASK) >> GREEN_SHIFT,
        (color & BLUE_MASK) >> BLUE_SHIFT,
        (color & ALPHA_MASK) >> ALPHA_SHIFT,
    )


class ImageData:
    """A width x height grid of ARGB pixels, initially fully transparent black."""

    def __init__(self, width: int, height: int, pixels: list[int] | None = None) -> None:
        width = int(width)
        height = int(height)
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        size = width * height
        if pixels is None:
            pixels = [0] * size
        elif len(pixels) != size:
            raise ValueError(
                f"expected {size} pixels for a {width}x{height} image, got {len(pixels)}"
            )
        self.width = width
        self.height = height
        self.pixels = list(pixels)

    @classmethod
    def from_file(cls, path: str | Path) -> ImageData:
        """Load an image file and convert it to ARGB pixels."""
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            width, height = rgba.size
            raw = rgba.tobytes()
        pixels = [
            pack_color(raw[i], raw[i + 1], raw[i + 2], raw[i + 3])
            for i in range(0, len(raw), 4)
        ]
        return cls(width, height, pixels)

    @property
    def pitch(self) -> int:
        """Bytes per row of pixels."""
        return self.width << 2

    def _index(self, x: int, y: int) -> int:
        x = int(x)
        y = int(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) is outside the {self.width}x{self.height} image"
            )
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """The (r, g, b, a) colour of the pixel at (x, y)."""
        return unpack_color(self.pixels[self._index(x, y)])

    def set_pixel(self, x: int, y: int, r: int, g: int, b: int, a: int = 255) -> None:
        """Set the pixel at (x, y); alpha defaults to opaque."""
        self.pixels[self._index(x, y)] = pack_color(r, g, b, a)

    def dimensions(self) -> tuple[int, int]:
        """The (width, height) of the image."""
        return self.width, self.height

    def type(self) -> str:
        return "ImageData"