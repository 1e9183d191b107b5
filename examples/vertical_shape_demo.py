#!/usr/bin/env python3
"""
Generate vertical pixel shapes for a QR code and show a coverage preview
"""

import sys
from pathlib import Path

# Add parent directory to path for qrpixels imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from qrpixels import ModuleGrid, create_shape, rasterize
from qrpixels.config import get_default_config


def main():
    text = sys.argv[1] if len(sys.argv) > 1 else "https://example.com"
    config = get_default_config()

    grid = ModuleGrid.from_text(text, error_correction=config["qr"]["error_correction"])
    shape = create_shape("vertical", {"inset": 0.5, "cornerRadiusFraction": 1.0})

    size = (grid.size * 10, grid.size * 10)
    on_rects = shape.on_path(size, grid)
    off_rects = shape.off_path(size, grid)
    template_rects = shape.on_path(size, grid, is_template=True)

    print(f"📋 Grid: {grid.size}x{grid.size} modules for {len(text)} characters")
    print(f"  On pass:       {len(on_rects)} primitives")
    print(f"  Off pass:      {len(off_rects)} primitives")
    print(f"  Template pass: {len(template_rects)} primitives")
    print(f"  Settings:      {shape.to_dict()}")

    # One character per module, sampled at module centres
    mask = rasterize(on_rects, size)
    for row in range(grid.size):
        print("".join("█" if mask[row * 10 + 5, col * 10 + 5] else " " for col in range(grid.size)))


if __name__ == "__main__":
    main()
