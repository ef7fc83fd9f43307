from .curve import CurveModel
from .models import (
    Curve,
    CurvePoint,
    CurveSide,
    OrderTab,
    RangeOrderCurves,
    ZoomWindow,
)
from .presets import builtin_presets, load_presets, preset_curve, build_order_curves
from range_config import CurveBounds

__version__ = "1.0.0"

__all__ = [
    "CurveModel",
    "Curve",
    "CurvePoint",
    "CurveSide",
    "OrderTab",
    "RangeOrderCurves",
    "ZoomWindow",
    "CurveBounds",
    "builtin_presets",
    "load_presets",
    "preset_curve",
    "build_order_curves",
    "__version__",
]
