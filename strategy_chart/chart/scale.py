#!/usr/bin/env python3
"""Chart Scale - Maps sequence indices and values to canvas pixel coordinates."""

import logging
import math
from typing import Iterable, Tuple

from ..models import CanvasFrame, ValueRange

logger = logging.getLogger(__name__)


def value_range_with_margin(values: Iterable[float], margin: float = 0.02) -> ValueRange:
    """
    Visible value range: min lowered and max raised by ``margin``.

    For positive prices this is ``(min * (1 - margin), max * (1 + margin))``.
    The margin is applied to the magnitude so negative values widen the range too.
    Returns an empty (0, 0) range when there are no finite values.
    """
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return ValueRange(0.0, 0.0)
    low = min(finite)
    high = max(finite)
    return ValueRange(low - abs(low) * margin, high + abs(high) * margin)


class ChartScale:
    """Linear index/value to pixel mapping for one canvas frame."""

    def __init__(self, frame: CanvasFrame, value_range: ValueRange, length: int,
                 clamp_to_canvas: bool = True):
        self.frame = frame
        self.value_range = value_range
        self.length = length
        self.clamp_to_canvas = clamp_to_canvas

    @classmethod
    def from_values(cls, values, frame: CanvasFrame, value_margin: float = 0.02,
                    clamp_to_canvas: bool = True) -> 'ChartScale':
        values = list(values)
        return cls(frame, value_range_with_margin(values, value_margin), len(values),
                   clamp_to_canvas=clamp_to_canvas)

    @property
    def is_degenerate(self) -> bool:
        return self.length == 0 or self.value_range.is_degenerate

    def x(self, index: float) -> float:
        frame = self.frame
        if math.isnan(index):
            logger.debug("NaN index pinned to left edge")
            index = 0
        x = frame.padding + (index / max(self.length - 1, 1)) * frame.inner_width
        return self._clamp(x, frame.width)

    def y(self, value: float) -> float:
        frame = self.frame
        if self.is_degenerate or not math.isfinite(value):
            # Centre of the inner rectangle
            return frame.padding + frame.inner_height / 2
        vr = self.value_range
        y = frame.padding + ((vr.max_value - value) / vr.span) * frame.inner_height
        return self._clamp(y, frame.height)

    def point(self, index: float, value: float) -> Tuple[float, float]:
        return self.x(index), self.y(value)

    def _clamp(self, coordinate: float, upper: float) -> float:
        if not math.isfinite(coordinate):
            # Overflow from absurd inputs; keep the drawing finite
            coordinate = upper if coordinate > 0 else 0.0
        if self.clamp_to_canvas:
            return min(max(coordinate, 0.0), upper)
        return coordinate
