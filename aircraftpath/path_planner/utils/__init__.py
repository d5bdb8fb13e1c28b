# Geometry helpers used by the path builder.

from .bezier import cubic_bezier, curve_between, quadratic_bezier
from .classifier import classify_attack_position
from .roll_smoothing import complete_rolls

__all__ = [
    "cubic_bezier",
    "curve_between",
    "quadratic_bezier",
    "classify_attack_position",
    "complete_rolls"
]
