"""
Rasterize pixel shape primitives into a boolean coverage mask with OpenCV.

Used for hit-testing template output and for checking which canvas areas a
pass covers. Pixel (row, col) is set when its area is filled.
"""

import logging
from typing import Iterable, Tuple

import cv2
import numpy as np

from .geometry import RoundedRect

logger = logging.getLogger(__name__)


def _draw_rounded_rect(canvas: np.ndarray, rect: RoundedRect) -> None:
    x0 = int(round(rect.x))
    y0 = int(round(rect.y))
    x1 = int(round(rect.max_x)) - 1
    y1 = int(round(rect.max_y)) - 1
    if x1 < x0 or y1 < y0:
        return

    r = int(round(min(rect.corner_radius, (x1 - x0 + 1) / 2, (y1 - y0 + 1) / 2)))
    if r <= 0:
        cv2.rectangle(canvas, (x0, y0), (x1, y1), 255, thickness=-1)
        return

    # Cross of two rectangles plus a filled circle at each corner
    cv2.rectangle(canvas, (x0 + r, y0), (x1 - r, y1), 255, thickness=-1)
    cv2.rectangle(canvas, (x0, y0 + r), (x1, y1 - r), 255, thickness=-1)
    for cx, cy in ((x0 + r, y0 + r), (x1 - r, y0 + r), (x0 + r, y1 - r), (x1 - r, y1 - r)):
        cv2.circle(canvas, (cx, cy), r, 255, thickness=-1)


def rasterize(primitives: Iterable[RoundedRect], size: Tuple[int, int]) -> np.ndarray:
    """
    Fill primitives onto a blank canvas.

    Args:
        primitives: Output of a pixel shape pass
        size: Canvas (width, height) in pixels

    Returns:
        Bool array of shape (height, width)
    """
    width, height = int(size[0]), int(size[1])
    if width <= 0 or height <= 0:
        return np.zeros((max(height, 0), max(width, 0)), dtype=bool)

    canvas = np.zeros((height, width), dtype=np.uint8)
    count = 0
    for rect in primitives:
        _draw_rounded_rect(canvas, rect)
        count += 1

    logger.debug(f"Rasterized {count} primitives onto {width}x{height} canvas")
    return canvas > 0
