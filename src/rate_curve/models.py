from typing import List, Optional, Literal
from pydantic import BaseModel, Field, field_validator, model_validator
from range_config import CurveBounds, get_config

CurveSide = Literal['lend', 'borrow']
OrderTab = Literal['lend', 'borrow', 'both']


class CurvePoint(BaseModel):
    """One knot of a piecewise-linear rate curve"""
    amount: float = Field(ge=0)
    apr: float
    percentage: float = 0.0  # amount as a share of the curve's largest amount


class Curve(BaseModel):
    """Ordered knots mapping cumulative amount to APR for one side of a market"""
    side: CurveSide
    points: List[CurvePoint] = Field(min_length=1)
    bounds: Optional[CurveBounds] = None  # falls back to the configured defaults

    @field_validator('points')
    @classmethod
    def sort_points(cls, points: List[CurvePoint]) -> List[CurvePoint]:
        """Keep knots in ascending amount order, reject shared amounts and derive percentages."""
        ordered = sorted(points, key=lambda p: p.amount)
        for lo, hi in zip(ordered, ordered[1:]):
            if lo.amount == hi.amount:
                raise ValueError(f"Duplicate curve point at amount {lo.amount}")

        max_amount = ordered[-1].amount
        return [
            p.model_copy(update={'percentage': p.amount / max_amount * 100 if max_amount > 0 else 0.0})
            for p in ordered
        ]

    @property
    def max_amount(self) -> float:
        return self.points[-1].amount

    @property
    def amounts(self) -> List[float]:
        return [p.amount for p in self.points]


class RangeOrderCurves(BaseModel):
    """Curves owned by one range order; a two-way order carries both sides"""
    tab: OrderTab
    lend: Optional[Curve] = None
    borrow: Optional[Curve] = None

    @model_validator(mode='after')
    def validate_sides(self) -> 'RangeOrderCurves':
        needs_lend = self.tab in ('lend', 'both')
        needs_borrow = self.tab in ('borrow', 'both')
        if needs_lend != (self.lend is not None):
            raise ValueError(f"Order tab '{self.tab}' {'requires' if needs_lend else 'does not take'} a lend curve")
        if needs_borrow != (self.borrow is not None):
            raise ValueError(f"Order tab '{self.tab}' {'requires' if needs_borrow else 'does not take'} a borrow curve")
        if self.lend is not None and self.lend.side != 'lend':
            raise ValueError("Lend slot holds a borrow curve")
        if self.borrow is not None and self.borrow.side != 'borrow':
            raise ValueError("Borrow slot holds a lend curve")
        return self

    @property
    def curves(self) -> List[Curve]:
        return [c for c in (self.lend, self.borrow) if c is not None]


class ZoomWindow(BaseModel):
    """Display window multiplier applied to a chart's amount domain"""
    level: float = Field(default_factory=lambda: get_config().curve.default_zoom, gt=0)
    min_level: float = Field(default_factory=lambda: get_config().curve.min_zoom, gt=0)
    default_level: float = Field(default_factory=lambda: get_config().curve.default_zoom, gt=0)

    def zoom_in(self) -> 'ZoomWindow':
        return self.model_copy(update={'level': self.level * 2})

    def zoom_out(self) -> 'ZoomWindow':
        return self.model_copy(update={'level': max(self.min_level, self.level / 2)})

    def reset(self) -> 'ZoomWindow':
        return self.model_copy(update={'level': self.default_level})
