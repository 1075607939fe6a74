"""
Strategy Chart - Core Components

This package turns price series, moving-average overlays and trade markers
into drawing instructions for a fixed chart canvas.
"""

from .models import (
    Sample,
    OverlayPoint,
    TradeMarker,
    TradeKind,
    CanvasFrame,
    ValueRange,
    DrawInstructions,
    StrategyInfo,
    StrategyPerformance,
)
from .chart_config import ChartConfig, DarkChartTheme, DEFAULT_CHART_CONFIG
from .indicators import Indicators
from .chart import ChartRenderer, StrategyChartGenerator


def render(price_series, overlay_series=None, trade_markers=None, frame=None, chart_config=None):
    """Render chart geometry with the default (or given) configuration."""
    renderer = ChartRenderer(chart_config or DEFAULT_CHART_CONFIG)
    return renderer.render(price_series, overlay_series, trade_markers, frame)


__all__ = [
    'Sample',
    'OverlayPoint',
    'TradeMarker',
    'TradeKind',
    'CanvasFrame',
    'ValueRange',
    'DrawInstructions',
    'StrategyInfo',
    'StrategyPerformance',
    'ChartConfig',
    'DarkChartTheme',
    'DEFAULT_CHART_CONFIG',
    'Indicators',
    'ChartRenderer',
    'StrategyChartGenerator',
    'render',
]
