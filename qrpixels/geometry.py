"""
Geometry value types: rounded rectangle output primitives and the
inset / corner rounding parameters shared by pixel shape generators.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Tuple

from .config import DEFAULT_INSET, DEFAULT_CORNER_RADIUS_FRACTION


@dataclass(frozen=True)
class RoundedRect:
    """A rectangle with equal x/y corner radius, in output space"""
    x: float
    y: float
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def intersects(self, other: Tuple[float, float, float, float]) -> bool:
        """True if the open interiors of this rect and (x, y, w, h) overlap"""
        ox, oy, ow, oh = other
        return (self.x < ox + ow and ox < self.max_x and
                self.y < oy + oh and oy < self.max_y)

    def inset_by(self, amount: float) -> "RoundedRect":
        """
        Shrink by `amount` on every side, keeping the centre.

        Width and height stop at zero instead of going negative.
        """
        width = max(0.0, self.width - 2 * amount)
        height = max(0.0, self.height - 2 * amount)
        return RoundedRect(
            x=self.x + (self.width - width) / 2,
            y=self.y + (self.height - height) / 2,
            width=width,
            height=height,
            corner_radius=self.corner_radius,
        )

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class GeometryParameters:
    """
    Inset and corner rounding applied when closing a run.

    The constructor validates both values and clamps the corner fraction
    into [0, 1]. Assigning the attributes directly skips that step.
    """
    inset: float = DEFAULT_INSET
    corner_radius_fraction: float = DEFAULT_CORNER_RADIUS_FRACTION

    def __post_init__(self):
        self.inset = float(self.inset)
        self.corner_radius_fraction = float(self.corner_radius_fraction)

        if not math.isfinite(self.inset):
            raise ValueError("inset must be a finite number")
        if self.inset < 0:
            raise ValueError("inset must be >= 0")
        if not math.isfinite(self.corner_radius_fraction):
            raise ValueError("corner_radius_fraction must be a finite number")

        self.corner_radius_fraction = min(1.0, max(0.0, self.corner_radius_fraction))

    def copy(self) -> "GeometryParameters":
        params = GeometryParameters()
        params.inset = self.inset
        params.corner_radius_fraction = self.corner_radius_fraction
        return params
