from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayGeometry:
    width: float   # rendered width on screen
    height: float  # rendered height on screen

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class ClickPoint:
    x: float  # display units, relative to the rendered image's top-left
    y: float
