"""
Chart Geometry Components

This package contains modular components for building strategy charts:
- ChartDataPreparer: Input normalization into samples, overlays and markers
- ChartScale: Index/value to pixel mapping
- IndicatorRenderer: Rendering pre-calculated overlay series
- ChartRenderer: Pure geometry rendering into drawing instructions
- SvgExporter / ImageExporter: SVG markup and PNG output
- StrategyChartGenerator: Facade wiring the components together
"""

from .data_preparer import ChartDataPreparer
from .scale import ChartScale
from .indicator_renderer import IndicatorRenderer
from .chart_renderer import ChartRenderer
from .svg_exporter import SvgExporter
from .image_exporter import ImageExporter
from .strategy_chart import StrategyChartGenerator

__all__ = [
    'ChartDataPreparer',
    'ChartScale',
    'IndicatorRenderer',
    'ChartRenderer',
    'SvgExporter',
    'ImageExporter',
    'StrategyChartGenerator',
]
