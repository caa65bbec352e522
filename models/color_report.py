from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
from models.color import Color


@dataclass(frozen=True)
class ColorReport:
    """
    What the rendering layer shows: a status line and, on success, the swatch color.
    """
    message: str
    color: Color | None = None
    pixel: Tuple[int, int] | None = None

    @property
    def ok(self) -> bool:
        return self.color is not None
