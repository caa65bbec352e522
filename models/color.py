from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Color:
    """
    8-bit RGBA value object. Derived colors are fully opaque.
    """
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} outside 0-255")

    @classmethod
    def from_pixel(cls, pixel) -> "Color":
        """Build a Color from an RGB or RGBA numpy pixel."""
        channels = [int(c) for c in pixel]
        if len(channels) == 3:
            channels.append(255)
        return cls(*channels)

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def as_rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def as_rgba(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a
