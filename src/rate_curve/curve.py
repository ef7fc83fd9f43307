"""Piecewise-linear rate curve model with constraint-preserving point edits"""

from bisect import bisect_right
from typing import List, Optional, Sequence, Tuple
import logging
import math
from range_config import CurveBounds, CurveConfig, get_config
from .models import Curve, CurvePoint


class CurveModel:
    """Interpolate, edit and sample rate curves.

    Every operation returns a new Curve; inputs are never mutated. Out-of-range
    edits are clamped or ignored rather than rejected, so the result is always
    drawable.
    """

    def __init__(self, config: Optional[CurveConfig] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or get_config().curve

    def interpolate(self, curve: Curve, amount: float) -> float:
        """APR at a cumulative amount, flat outside the first and last knots"""
        points = curve.points
        if math.isnan(amount) or amount <= points[0].amount:
            return points[0].apr
        if amount >= points[-1].amount:
            return points[-1].apr

        # points[idx - 1].amount <= amount < points[idx].amount
        idx = bisect_right(curve.amounts, amount)
        lo, hi = points[idx - 1], points[idx]
        ratio = (amount - lo.amount) / (hi.amount - lo.amount)
        return lo.apr + ratio * (hi.apr - lo.apr)

    def move_point(self, curve: Curve, index: int, new_amount: Optional[float] = None,
                   new_apr: Optional[float] = None, bounds: Optional[CurveBounds] = None) -> Curve:
        """
        Move one knot, keeping min_gap from its neighbours and the APR inside its domain.
        Percentages of every knot are recomputed afterwards.
        """
        bounds = self._resolve_bounds(curve, bounds)
        points = [p.model_copy() for p in curve.points]

        if not 0 <= index < len(points):
            self.logger.warning(f"Ignoring move of point {index} on {curve.side} curve with {len(points)} points")
            return curve.model_copy(deep=True)

        point = points[index]

        if new_amount is not None and math.isfinite(new_amount):
            point.amount = self._bound_amount(points, index, new_amount, bounds.min_gap)

        if new_apr is not None and math.isfinite(new_apr):
            point.apr = max(bounds.min_apr, min(bounds.max_apr, new_apr))

        self.logger.debug(
            f"Moved {curve.side} point {index} to amount={point.amount:,.0f} apr={point.apr:.2f}"
        )
        return self._rebuild(curve, points)

    def scale_curve(self, curve: Curve, factor: float) -> Curve:
        """Multiply every APR by factor, e.g. to derive a leveraged curve"""
        points = [p.model_copy(update={'apr': p.apr * factor}) for p in curve.points]
        return curve.model_copy(update={'points': points})

    def recalculate_percentages(self, curve: Curve) -> Curve:
        return self._rebuild(curve, [p.model_copy() for p in curve.points])

    def insert_point(self, curve: Curve, index: int, bounds: Optional[CurveBounds] = None) -> Curve:
        """Insert a knot halfway between points[index] and its successor"""
        bounds = self._resolve_bounds(curve, bounds)
        points = [p.model_copy() for p in curve.points]

        if not 0 <= index < len(points):
            self.logger.warning(f"Ignoring insert after point {index} on {curve.side} curve with {len(points)} points")
            return curve.model_copy(deep=True)

        current = points[index]
        if index + 1 < len(points):
            next_amount, next_apr = points[index + 1].amount, points[index + 1].apr
        else:
            # Appending past the last knot extends the domain
            next_amount, next_apr = current.amount + self.config.insert_offset, current.apr

        new_amount = (current.amount + next_amount) / 2
        if new_amount - current.amount < bounds.min_gap:
            self.logger.warning(
                f"Cannot insert {curve.side} point after index {index}: "
                f"segment {current.amount:,.0f}-{next_amount:,.0f} is narrower than 2x min gap {bounds.min_gap:,.0f}"
            )
            return curve.model_copy(deep=True)

        points.insert(index + 1, CurvePoint(amount=new_amount, apr=(current.apr + next_apr) / 2))
        return self._rebuild(curve, points)

    def remove_point(self, curve: Curve, index: int) -> Curve:
        """Remove an interior knot; the first and last knots anchor the domain"""
        if index <= 0 or index >= len(curve.points) - 1:
            self.logger.warning(f"Cannot remove anchor or missing point {index} from {curve.side} curve")
            return curve.model_copy(deep=True)

        points = [p.model_copy() for i, p in enumerate(curve.points) if i != index]
        return self._rebuild(curve, points)

    def chart_max_amount(self, curves: Sequence[Curve], zoom_level: Optional[float] = None) -> float:
        """Upper edge of the displayed amount domain for the given curves"""
        if not curves:
            return 0.0
        zoom = self.config.default_zoom if zoom_level is None else zoom_level
        zoom = max(self.config.min_zoom, zoom)
        return max(c.max_amount for c in curves) * zoom

    def sample(self, curve: Curve, zoom_level: Optional[float] = None,
               steps: Optional[int] = None) -> List[Tuple[float, float]]:
        """Evenly spaced (amount, apr) pairs over [0, chart max] for drawing"""
        steps = self.config.sample_steps if steps is None else max(1, steps)
        max_x = self.chart_max_amount([curve], zoom_level)
        step = max_x / steps
        return [(i * step, self.interpolate(curve, i * step)) for i in range(steps + 1)]

    def _resolve_bounds(self, curve: Curve, bounds: Optional[CurveBounds]) -> CurveBounds:
        return bounds or curve.bounds or self.config.bounds

    def _bound_amount(self, points: List[CurvePoint], index: int, amount: float, min_gap: float) -> float:
        """Clamp amount between its neighbours, min_gap away from each"""
        lower = 0.0
        upper = math.inf
        if index > 0:
            lower = max(lower, points[index - 1].amount + min_gap)
        if index < len(points) - 1:
            upper = points[index + 1].amount - min_gap

        if lower > upper:
            self.logger.warning(
                f"No room to move point {index}: neighbours leave [{lower:,.0f}, {upper:,.0f}]"
            )
            return points[index].amount

        return max(lower, min(upper, amount))

    @staticmethod
    def _rebuild(curve: Curve, points: List[CurvePoint]) -> Curve:
        # Curve validation re-sorts and derives every percentage
        return Curve(side=curve.side, points=points, bounds=curve.bounds)
