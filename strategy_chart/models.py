#!/usr/bin/env python3
"""
Strategy Chart Data Types

Defines the input entities (samples, overlays, trade markers, canvas frame)
and the drawing instructions produced by the chart renderer.
"""

import json
import math
import numbers
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Any, Mapping, Optional, Tuple


class TradeKind(Enum):
    """Kinds of trade markers that are drawn on the chart"""
    BUY = "buy"
    SELL = "sell"


@dataclass
class Sample:
    """One point of the price series"""
    sequence_index: int
    value: float
    timestamp: str = ''
    volume: float = 0.0


@dataclass
class OverlayPoint:
    """One point of a derived indicator series (e.g. a moving average)"""
    sequence_index: int
    value: float


@dataclass
class TradeMarker:
    """A discrete buy or sell event drawn as a point"""
    sequence_index: int
    value: float
    kind: str
    timestamp: str = ''
    price: float = 0.0
    annotation: str = ''

    @property
    def trade_kind(self) -> Optional[TradeKind]:
        """Recognised kind, or None for anything other than buy/sell"""
        try:
            return TradeKind(str(self.kind).lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CanvasFrame:
    """
    Fixed canvas with a padded inner drawing rectangle.

    Raises ValueError when the padding leaves no drawable area.
    """
    width: float
    height: float
    padding: float

    def __post_init__(self):
        for name in ('width', 'height', 'padding'):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise ValueError(f"Canvas {name} must be a finite number, got {value!r}")
        if self.padding < 0:
            raise ValueError(f"Canvas padding must not be negative, got {self.padding}")
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Canvas {self.width}x{self.height} with padding {self.padding} "
                f"has no drawable area"
            )

    @property
    def inner_width(self) -> float:
        return self.width - 2 * self.padding

    @property
    def inner_height(self) -> float:
        return self.height - 2 * self.padding


@dataclass(frozen=True)
class ValueRange:
    """Visible value range of the price axis"""
    min_value: float
    max_value: float

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    @property
    def mid(self) -> float:
        return (self.max_value + self.min_value) / 2

    @property
    def is_degenerate(self) -> bool:
        return not math.isfinite(self.span) or self.span <= 0


@dataclass
class StrategyPerformance:
    """Headline statistics shown above the chart"""
    total_return: float = 0.0
    win_rate: float = 0.0
    total_trades: int = 0


@dataclass
class StrategyInfo:
    name: str
    performance: StrategyPerformance = field(default_factory=StrategyPerformance)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'StrategyInfo':
        """
        Build from the payload shape. Missing or unusable statistics become zero.

        Raises ValueError when data or its performance block is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Strategy must be a mapping, got {type(data).__name__}")
        perf = data.get('performance') or {}
        if not isinstance(perf, Mapping):
            raise ValueError(f"Strategy performance must be a mapping, got {type(perf).__name__}")
        return cls(
            name=str(data.get('name') or ''),
            performance=StrategyPerformance(
                total_return=_finite_or_zero(perf.get('totalReturn', perf.get('total_return'))),
                win_rate=_finite_or_zero(perf.get('winRate', perf.get('win_rate'))),
                total_trades=int(_finite_or_zero(perf.get('totalTrades', perf.get('total_trades')))),
            )
        )


# ===========================================
# DRAWING INSTRUCTIONS
# ===========================================

@dataclass
class GuideLine:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0


@dataclass
class LinePath:
    """Connected polyline in absolute pixel coordinates"""
    name: str
    points: List[Tuple[float, float]]
    stroke: str
    stroke_width: float = 1.0
    dash: Optional[str] = None

    def to_svg_path(self) -> str:
        """Path data string, e.g. 'M40,208.4 L300,44.9'"""
        commands = []
        for i, (x, y) in enumerate(self.points):
            prefix = 'M' if i == 0 else 'L'
            commands.append(f"{prefix}{format_coordinate(x)},{format_coordinate(y)}")
        return ' '.join(commands)


@dataclass
class PointMarker:
    group: str
    cx: float
    cy: float
    radius: float
    fill: str
    stroke: str
    stroke_width: float = 1.0
    annotation: str = ''


@dataclass
class TextLabel:
    x: float
    y: float
    text: str
    font_size: float
    fill: str
    anchor: str = 'end'


@dataclass
class DrawInstructions:
    """Complete drawing for one render pass"""
    width: float
    height: float
    content_width: float
    guides: List[GuideLine] = field(default_factory=list)
    paths: List[LinePath] = field(default_factory=list)
    buy_markers: List[PointMarker] = field(default_factory=list)
    sell_markers: List[PointMarker] = field(default_factory=list)
    labels: List[TextLabel] = field(default_factory=list)
    value_range: Optional[ValueRange] = None

    @property
    def price_path(self) -> Optional[LinePath]:
        for path in self.paths:
            if path.name == 'price':
                return path
        return None

    def path(self, name: str) -> Optional[LinePath]:
        for path in self.paths:
            if path.name == name:
                return path
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert drawing to a plain dictionary"""
        return {
            'width': self.width,
            'height': self.height,
            'content_width': self.content_width,
            'value_range': None if self.value_range is None else {
                'min': self.value_range.min_value,
                'max': self.value_range.max_value,
            },
            'guides': [vars(g).copy() for g in self.guides],
            'paths': [
                {
                    'name': p.name,
                    'd': p.to_svg_path(),
                    'points': [list(pt) for pt in p.points],
                    'stroke': p.stroke,
                    'stroke_width': p.stroke_width,
                    'dash': p.dash,
                }
                for p in self.paths
            ],
            'buy_markers': [vars(m).copy() for m in self.buy_markers],
            'sell_markers': [vars(m).copy() for m in self.sell_markers],
            'labels': [vars(t).copy() for t in self.labels],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(',', ':'))


def format_coordinate(value: float) -> str:
    """Compact number formatting for path data"""
    text = f"{value:.3f}".rstrip('0').rstrip('.')
    return '0' if text in ('-0', '') else text


def _finite_or_zero(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0
