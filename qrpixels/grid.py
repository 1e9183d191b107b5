#!/usr/bin/env python3
"""
Module grid for QR symbols.

Wraps a square boolean matrix of modules (True = dark) and provides the
finder-eye masked view used by pixel shape generators.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
import qrcode

from .config import EYE_REGION_SIZE, QR_BORDER, QR_ERROR_CORRECTION, QR_VERSION

logger = logging.getLogger(__name__)

_ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

# (row_start, row_stop, col_start, col_stop), stop exclusive
EyeBox = Tuple[int, int, int, int]


class ModuleGrid:
    """
    Immutable n x n grid of QR modules.

    The grid includes the quiet zone border, so row/column 0 and n-1 are
    border modules and the finder eyes sit one module in from each corner.
    """

    def __init__(self, modules, eye_region_size: int = EYE_REGION_SIZE):
        """
        Initialize a module grid.

        Args:
            modules: 2D array-like of truthy values, must be square
            eye_region_size: Side length of each masked finder eye region
        """
        data = np.array(modules, dtype=bool)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Module grid must be square, got shape {data.shape}")
        if eye_region_size < 0:
            raise ValueError("eye_region_size must be >= 0")

        data.flags.writeable = False
        self._modules = data
        self.eye_region_size = eye_region_size

    @classmethod
    def from_matrix(cls, rows: Sequence[Sequence[bool]], **kwargs) -> "ModuleGrid":
        return cls(rows, **kwargs)

    @classmethod
    def from_text(cls,
                  text: str,
                  error_correction: str = QR_ERROR_CORRECTION,
                  version: Optional[int] = QR_VERSION,
                  border: int = QR_BORDER) -> "ModuleGrid":
        """
        Encode text into a QR symbol and wrap its module matrix.

        Args:
            text: Payload to encode
            error_correction: One of L, M, Q, H
            version: QR version (1-40), None to fit automatically
            border: Quiet zone width in modules

        Returns:
            ModuleGrid including the quiet zone
        """
        level = error_correction.upper()
        if level not in _ERROR_CORRECTION_LEVELS:
            raise ValueError(f"Unsupported error correction level: {error_correction}")

        qr = qrcode.QRCode(
            version=version,
            error_correction=_ERROR_CORRECTION_LEVELS[level],
            box_size=1,
            border=border,
        )
        qr.add_data(text)
        qr.make(fit=version is None)

        matrix = qr.get_matrix()
        logger.debug(f"Encoded {len(text)} characters into {len(matrix)}x{len(matrix)} grid "
                     f"(version {qr.version}, level {level})")
        return cls(matrix)

    @property
    def size(self) -> int:
        """Number of modules along each side"""
        return self._modules.shape[0]

    def value_at(self, row: int, col: int) -> bool:
        n = self.size
        if not (0 <= row < n and 0 <= col < n):
            raise IndexError(f"Module ({row}, {col}) out of range for {n}x{n} grid")
        return bool(self._modules[row, col])

    def __getitem__(self, index: Tuple[int, int]) -> bool:
        row, col = index
        return self.value_at(row, col)

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the underlying bool array"""
        return self._modules.copy()

    def eye_regions(self) -> List[EyeBox]:
        """Bounding boxes of the top-left, top-right and bottom-left finder eyes"""
        n = self.size
        e = min(self.eye_region_size, n)
        return [
            (0, e, 0, e),
            (0, e, n - e, n),
            (n - e, n, 0, e),
        ]

    def masked_view(self, invert: bool) -> "ModuleGrid":
        """
        Return a new grid with the three finder eye regions forced to `invert`.

        All other modules are copied unchanged; this grid is not modified.
        """
        data = self._modules.copy()
        for r0, r1, c0, c1 in self.eye_regions():
            data[r0:r1, c0:c1] = invert
        return ModuleGrid(data, eye_region_size=self.eye_region_size)

    def inverted(self) -> "ModuleGrid":
        return ModuleGrid(~self._modules, eye_region_size=self.eye_region_size)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ModuleGrid):
            return NotImplemented
        return np.array_equal(self._modules, other._modules)

    def __repr__(self) -> str:
        return f"ModuleGrid(size={self.size}, on={int(self._modules.sum())})"
