from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
from models.color import Color


@dataclass(frozen=True)
class PickResult:
    """
    Source pixel hit by a click and the color found there.
    """
    x: int
    y: int
    color: Color

    @property
    def pixel(self) -> Tuple[int, int]:
        return self.x, self.y
