"""
Default configuration for qrpixels
"""

from typing import Dict, Any

# Pixel shape geometry
DEFAULT_SHAPE = "vertical"
DEFAULT_INSET = 0.0
DEFAULT_CORNER_RADIUS_FRACTION = 0.0

# Finder pattern ("eye") regions: 1 quiet zone module + 7 finder modules + 1 separator
EYE_REGION_SIZE = 9

# QR encoder settings (qrcode library)
QR_BORDER = 1
QR_ERROR_CORRECTION = "M"  # L, M, Q, H
QR_VERSION = None  # None lets qrcode fit the smallest version

# Batch generation
BATCH_MAX_WORKERS = 4
BATCH_SERIAL_THRESHOLD = 8  # below this many grids, generate on the calling thread


def get_default_config() -> Dict[str, Any]:
    """Get default configuration dictionary"""
    return {
        "qr": {
            "border": QR_BORDER,
            "error_correction": QR_ERROR_CORRECTION,
            "version": QR_VERSION,
        },
        "shape": {
            "type": DEFAULT_SHAPE,
            "settings": {
                "inset": DEFAULT_INSET,
                "cornerRadiusFraction": DEFAULT_CORNER_RADIUS_FRACTION,
            },
        },
        "batch": {
            "max_workers": BATCH_MAX_WORKERS,
            "serial_threshold": BATCH_SERIAL_THRESHOLD,
        },
        "eye_region_size": EYE_REGION_SIZE,
    }
