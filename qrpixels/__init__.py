"""
qrpixels - vector pixel shapes for QR code module grids
"""

from .geometry import GeometryParameters, RoundedRect
from .grid import ModuleGrid
from .settings import SettingsKey
from .shapes import (
    PixelShape,
    VerticalPixelShape,
    UnknownShapeError,
    available_shapes,
    create_shape,
    register_shape,
    shape_from_dict,
)
from .raster import rasterize
from .batch import generate_batch
from .config import get_default_config

__version__ = "0.1.0"

__all__ = [
    "GeometryParameters",
    "RoundedRect",
    "ModuleGrid",
    "SettingsKey",
    "PixelShape",
    "VerticalPixelShape",
    "UnknownShapeError",
    "available_shapes",
    "create_shape",
    "register_shape",
    "shape_from_dict",
    "rasterize",
    "generate_batch",
    "get_default_config",
]
