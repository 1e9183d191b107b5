#!/usr/bin/env python3
"""
Pixel shape generators.

A pixel shape turns the ordinary (non-eye) modules of a ModuleGrid into a
sequence of RoundedRect primitives sized to a target canvas. Shapes are
looked up by name so they can be rebuilt from stored settings.
"""

import abc
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from .config import DEFAULT_INSET, DEFAULT_CORNER_RADIUS_FRACTION
from .geometry import GeometryParameters, RoundedRect
from .grid import ModuleGrid
from .settings import SettingsKey, SettingsStore, double_value

logger = logging.getLogger(__name__)

Size = Tuple[float, float]


class UnknownShapeError(KeyError):
    """Raised when no pixel shape is registered under a name"""


class PixelShape(SettingsStore, abc.ABC):
    """Base class for named pixel shape strategies"""

    name: str = ""

    def __init__(self, parameters: Optional[GeometryParameters] = None):
        self.parameters = parameters.copy() if parameters is not None else GeometryParameters()

    @classmethod
    def create(cls, settings: Optional[Mapping[str, Any]] = None) -> "PixelShape":
        """
        Build an instance from a settings mapping.

        Missing or non-numeric values fall back to the defaults and a negative
        inset becomes 0, so anything the setter can store rebuilds cleanly.
        """
        settings = settings or {}
        inset = double_value(settings.get(SettingsKey.INSET, DEFAULT_INSET))
        fraction = double_value(settings.get(SettingsKey.CORNER_RADIUS_FRACTION))
        return cls(GeometryParameters(
            inset=DEFAULT_INSET if inset is None else max(0.0, inset),
            corner_radius_fraction=DEFAULT_CORNER_RADIUS_FRACTION if fraction is None else fraction,
        ))

    @property
    def inset(self) -> float:
        return self.parameters.inset

    @property
    def corner_radius_fraction(self) -> float:
        return self.parameters.corner_radius_fraction

    def copy(self) -> "PixelShape":
        """Independent copy; later parameter changes do not affect this instance"""
        return type(self)(self.parameters)

    def on_path(self, size: Size, grid: ModuleGrid, is_template: bool = False) -> List[RoundedRect]:
        """Primitives covering the dark modules"""
        return self.generate(size, grid, select_on=True, is_template=is_template)

    def off_path(self, size: Size, grid: ModuleGrid, is_template: bool = False) -> List[RoundedRect]:
        """Primitives covering the light modules"""
        return self.generate(size, grid, select_on=False, is_template=is_template)

    @abc.abstractmethod
    def generate(self, size: Size, grid: ModuleGrid,
                 select_on: bool, is_template: bool) -> List[RoundedRect]:
        ...

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.name, "settings": self.settings()}

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelShape):
            return NotImplemented
        return type(self) is type(other) and self.parameters == other.parameters

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(inset={self.inset}, "
                f"corner_radius_fraction={self.corner_radius_fraction})")


_REGISTRY: Dict[str, Type[PixelShape]] = {}


def register_shape(cls: Type[PixelShape]) -> Type[PixelShape]:
    """Class decorator to register a PixelShape subclass under its `name`"""
    if not cls.name:
        raise ValueError(f"{cls.__name__} must define name")
    _REGISTRY[cls.name] = cls
    return cls


@register_shape
class VerticalPixelShape(PixelShape):
    """
    Merges vertically adjacent modules into tall rounded rectangles.

    Each column is scanned top to bottom; a run of selected modules becomes
    one primitive. The outer ring of the grid (quiet zone) is never drawn.
    """

    name = "vertical"

    def generate(self, size: Size, grid: ModuleGrid,
                 select_on: bool, is_template: bool) -> List[RoundedRect]:
        """
        Generate the primitives for one pass.

        Args:
            size: Canvas (width, height)
            grid: Module grid including the quiet zone
            select_on: True to draw dark modules, False to draw light ones
            is_template: Use the raw grid without masking the finder eyes

        Returns:
            Primitives in column-major order, top to bottom within a column
        """
        width, height = size
        n = grid.size
        if width <= 0 or height <= 0:
            logger.warning(f"Degenerate canvas {width}x{height}; nothing to draw")
            return []
        if n < 3:
            logger.debug(f"Grid of size {n} has no inner modules; nothing to draw")
            return []

        dm = min(width / n, height / n)
        xoff = (width - n * dm) / 2.0
        yoff = (height - n * dm) / 2.0

        # Eyes take the unselected value so no pass ever draws inside them
        source = grid if is_template else grid.masked_view(invert=not select_on)
        modules = source.to_array()

        primitives = []
        for col in range(1, n - 1):
            active = None  # (x, y, height) of the open run

            for row in range(1, n - 1):
                if modules[row, col] != select_on:
                    if active is not None:
                        primitives.append(self._close_run(*active, dm))
                    active = None
                elif active is not None:
                    x, y, h = active
                    active = (x, y, h + dm)
                else:
                    active = (xoff + col * dm, yoff + row * dm, dm)

            if active is not None:
                primitives.append(self._close_run(*active, dm))

        logger.debug(f"{self.name}: {len(primitives)} primitives for {n}x{n} grid "
                     f"(select_on={select_on}, template={is_template})")
        return primitives

    def _close_run(self, x: float, y: float, run_height: float, dm: float) -> RoundedRect:
        rect = RoundedRect(x, y, dm, run_height).inset_by(self.parameters.inset)
        radius = (rect.width / 2.0) * self.parameters.corner_radius_fraction
        # Settings may store a fraction outside [0, 1]
        radius = min(max(0.0, radius), min(rect.width, rect.height) / 2.0)
        return RoundedRect(rect.x, rect.y, rect.width, rect.height, radius)


def available_shapes() -> List[str]:
    return sorted(_REGISTRY)


def create_shape(name: str, settings: Optional[Mapping[str, Any]] = None) -> PixelShape:
    """
    Factory function to create a pixel shape from its name and settings

    Raises:
        UnknownShapeError: if nothing is registered under `name`
    """
    try:
        cls = _REGISTRY[name]
    except KeyError:
        raise UnknownShapeError(f"Unknown pixel shape '{name}'. Available: {available_shapes()}") from None
    return cls.create(settings)


def shape_from_dict(data: Mapping[str, Any]) -> PixelShape:
    """Inverse of PixelShape.to_dict()"""
    return create_shape(data["type"], data.get("settings"))
