"""
String-keyed settings surface for pixel shape generators.

Generators keep a typed GeometryParameters internally; this module converts
to and from the plain mapping used for storage and serialization.
"""

import logging
import math
import numbers
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SettingsKey:
    """Keys recognised in a shape's settings mapping"""
    INSET = "inset"
    CORNER_RADIUS_FRACTION = "cornerRadiusFraction"


# settings key -> GeometryParameters attribute
_PARAMETER_FIELDS = {
    SettingsKey.INSET: "inset",
    SettingsKey.CORNER_RADIUS_FRACTION: "corner_radius_fraction",
}


def double_value(value: Any) -> Optional[float]:
    """
    Coerce a stored setting to float.

    Accepts finite real numbers (bool excluded) and numeric strings. Returns
    None for anything else, including NaN and infinity.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, (str, bytes)):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class SettingsStore:
    """
    Mixin giving a shape the get/set/describe settings surface.

    Expects the host class to hold a GeometryParameters in `self.parameters`.
    """

    def supports_setting_value(self, key: str) -> bool:
        return key in _PARAMETER_FIELDS

    def settings(self) -> Dict[str, float]:
        """Snapshot of the current parameters keyed by settings name"""
        return {key: getattr(self.parameters, attr) for key, attr in _PARAMETER_FIELDS.items()}

    def set_setting_value(self, value: Any, key: str) -> bool:
        """
        Set a single parameter from a serialized value.

        None resets the parameter to 0. Values are stored as given, without
        the range clamp the constructor applies.

        Returns:
            True if the parameter was updated, False if the key is unknown or
            the value is not a finite number (nothing is changed in that case)
        """
        attr = _PARAMETER_FIELDS.get(key)
        if attr is None:
            return False

        if value is None:
            setattr(self.parameters, attr, 0.0)
            return True

        number = double_value(value)
        if number is None:
            logger.debug(f"Rejected non-numeric value {value!r} for setting '{key}'")
            return False

        if key == SettingsKey.CORNER_RADIUS_FRACTION and not (0.0 <= number <= 1.0):
            logger.warning(f"Storing {key}={number} outside [0, 1]; "
                           f"radius is still limited to half the run width when generating")

        setattr(self.parameters, attr, number)
        return True
