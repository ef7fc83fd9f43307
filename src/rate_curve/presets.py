"""
Strategy presets for range order curves

Built-in presets cover the classic, aggressive and caution strategies for each
side. Additional preset sets can be loaded from a YAML file of the form:

    lend:
      classic:
        - {amount: 0, apr: 45}
        - {amount: 900000, apr: 19}
    borrow:
      ...
"""
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from range_config import AppLogger
from .models import Curve, CurvePoint, CurveSide, OrderTab, RangeOrderCurves

app_logger = AppLogger(__name__)

PresetTable = Dict[str, Dict[str, Curve]]

# (amount, apr) knots per side and strategy
_BUILTIN_KNOTS: Dict[str, Dict[str, List[Tuple[float, float]]]] = {
    'lend': {
        'classic': [(0, 45), (900000, 19), (3400000, 35), (3900000, 45)],
        'aggressive': [(0, 60), (850000, 28), (3100000, 42), (3900000, 55)],
        'caution': [(0, 35), (1200000, 15), (3500000, 22), (3900000, 30)],
    },
    'borrow': {
        'classic': [(0, 40), (400000, 17), (2900000, 15), (3900000, 10)],
        'aggressive': [(0, 35), (450000, 15), (2800000, 12), (3900000, 8)],
        'caution': [(0, 45), (350000, 20), (3000000, 18), (3900000, 15)],
    },
}


def _curve_from_knots(side: str, knots: List[Tuple[float, float]]) -> Curve:
    return Curve(side=side, points=[CurvePoint(amount=amount, apr=apr) for amount, apr in knots])


def builtin_presets() -> PresetTable:
    return {
        side: {name: _curve_from_knots(side, knots) for name, knots in strategies.items()}
        for side, strategies in _BUILTIN_KNOTS.items()
    }


def load_presets(presets_path: str | Path) -> PresetTable:
    """
    Load preset curves from a YAML file

    Args:
        presets_path: Path to the presets YAML file

    Returns:
        Curves keyed by side, then by strategy name

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a side or knot is malformed
        yaml.YAMLError: If YAML parsing fails
    """
    presets_path = Path(presets_path)
    if not presets_path.exists():
        raise FileNotFoundError(f"Presets file not found: {presets_path}")

    with open(presets_path, 'r') as f:
        raw_presets = yaml.safe_load(f)

    if not raw_presets:
        app_logger.log_info(f"{presets_path} is empty")
        return {}

    presets: PresetTable = {}
    for side, strategies in raw_presets.items():
        if side not in ('lend', 'borrow'):
            raise ValueError(f"Unknown curve side '{side}' in {presets_path}")

        presets[side] = {}
        for name, knots_data in (strategies or {}).items():
            try:
                knots = [(float(k['amount']), float(k['apr'])) for k in knots_data]
                presets[side][name] = _curve_from_knots(side, knots)
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid knots for {side} preset '{name}': {e}") from e
            app_logger.log_info(f"Loaded {side} preset '{name}' with {len(knots)} points")

    return presets


def preset_curve(side: CurveSide, strategy: str, presets: Optional[PresetTable] = None) -> Curve:
    """Fresh copy of a preset curve so callers can edit it freely"""
    presets = presets if presets is not None else builtin_presets()

    if side not in presets:
        raise ValueError(f"No presets for side '{side}'")
    if strategy not in presets[side]:
        available = ', '.join(sorted(presets[side]))
        raise ValueError(f"Unknown {side} strategy '{strategy}'. Available: {available}")

    app_logger.log_debug(f"Using {side} preset '{strategy}'")
    return presets[side][strategy].model_copy(deep=True)


def build_order_curves(tab: OrderTab, strategy: str, presets: Optional[PresetTable] = None) -> RangeOrderCurves:
    """Curves for a new range order; 'both' builds a two-way order"""
    lend = preset_curve('lend', strategy, presets) if tab in ('lend', 'both') else None
    borrow = preset_curve('borrow', strategy, presets) if tab in ('borrow', 'both') else None
    return RangeOrderCurves(tab=tab, lend=lend, borrow=borrow)
