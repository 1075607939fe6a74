#!/usr/bin/env python3
"""
Strategy Chart Generator

This module wires data preparation, geometry rendering and export together.
Charts are built in memory and returned as drawing instructions, SVG markup
or PNG bytes.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..chart_config import DEFAULT_CHART_CONFIG
from ..models import CanvasFrame, DrawInstructions, StrategyInfo
from .chart_renderer import ChartRenderer
from .data_preparer import ChartDataPreparer
from .image_exporter import ImageExporter
from .indicator_renderer import IndicatorRenderer
from .summary import format_strategy_header, format_trades_summary, legend_entries, summarize_trades
from .svg_exporter import SvgExporter

logger = logging.getLogger(__name__)


class StrategyChartGenerator:
    """Generate strategy charts with overlays and trade markers"""

    def __init__(self,
                 chart_config=None,
                 data_preparer: Optional[ChartDataPreparer] = None,
                 frame: Optional[CanvasFrame] = None,
                 value_margin: Optional[float] = None):
        """
        Initialize the chart generator

        Args:
            chart_config: ChartConfig (or DarkChartTheme); light theme by default
            data_preparer: Input normalizer, default keeps the full series
            frame: Default canvas frame for render calls without one
            value_margin: Override for the configured visual margin
        """
        self.chart_config = chart_config or DEFAULT_CHART_CONFIG
        self.data_preparer = data_preparer or ChartDataPreparer()
        self.frame = frame or self.chart_config.get_frame()

        self.indicator_renderer = IndicatorRenderer(self.chart_config)
        self.chart_renderer = ChartRenderer(self.chart_config, self.indicator_renderer,
                                            value_margin=value_margin)
        self.svg_exporter = SvgExporter()
        self.image_exporter = ImageExporter(self.chart_config)

        logger.debug(f"Strategy chart generator initialized with {self.chart_config.THEME['mode']} theme")

    def build(self,
              price_data: Any,
              trades: Any = None,
              indicators: Optional[Mapping[str, Any]] = None,
              frame: Optional[CanvasFrame] = None) -> DrawInstructions:
        """
        Build drawing instructions for a chart

        Args:
            price_data: DataFrame, Series, Samples or 'x'/'y' mappings
            trades: TradeMarkers or 'x'/'y'/'type' mappings
            indicators: Overlay name to points or Series
            frame: Canvas frame, generator default when omitted

        Returns:
            DrawInstructions for the chart
        """
        price_series = self.data_preparer.prepare_price_series(price_data)
        overlays = self.data_preparer.prepare_overlays(indicators)
        markers = self.data_preparer.prepare_trades(trades)
        return self.chart_renderer.render(price_series, overlays, markers, frame or self.frame)

    def render_svg(self, price_data: Any, trades: Any = None,
                   indicators: Optional[Mapping[str, Any]] = None,
                   frame: Optional[CanvasFrame] = None) -> str:
        instructions = self.build(price_data, trades, indicators, frame)
        return self.svg_exporter.export(instructions)

    def render_png(self, price_data: Any, trades: Any = None,
                   indicators: Optional[Mapping[str, Any]] = None,
                   frame: Optional[CanvasFrame] = None) -> Optional[bytes]:
        instructions = self.build(price_data, trades, indicators, frame)
        return self.image_exporter.export_png(instructions)

    def build_view(self,
                   strategy: Any,
                   price_data: Any,
                   trades: Any = None,
                   indicators: Optional[Mapping[str, Any]] = None,
                   frame: Optional[CanvasFrame] = None) -> Dict[str, Any]:
        """
        Build the full strategy card: header, drawing, legend and trade summary

        Args:
            strategy: StrategyInfo or mapping with 'name' and 'performance'
            price_data, trades, indicators, frame: As for build()

        Returns:
            Dictionary with 'header', 'chart', 'legend', 'trades' and 'trades_text'
        """
        if not isinstance(strategy, StrategyInfo):
            strategy = StrategyInfo.from_dict(strategy or {})

        markers = self.data_preparer.prepare_trades(trades)
        overlays = self.data_preparer.prepare_overlays(indicators)
        price_series = self.data_preparer.prepare_price_series(price_data)
        instructions = self.chart_renderer.render(price_series, overlays, markers, frame or self.frame)

        drawn_overlays = [p.name for p in instructions.paths if p.name != 'price']
        return {
            'header': format_strategy_header(strategy, self.chart_config),
            'chart': instructions,
            'legend': legend_entries(self.chart_config, drawn_overlays),
            'trades': summarize_trades(markers),
            'trades_text': format_trades_summary(markers),
        }
