#!/usr/bin/env python3
"""
Chart Renderer

This module turns a price series, overlay series and trade markers into
absolute-pixel drawing instructions for a fixed canvas.
Responsible for the price path, guide lines, trade markers and y-axis labels.
"""

import logging
import math
from typing import Dict, List, Mapping, Optional

from ..models import (
    CanvasFrame,
    DrawInstructions,
    GuideLine,
    LinePath,
    OverlayPoint,
    PointMarker,
    Sample,
    TextLabel,
    TradeKind,
    TradeMarker,
)
from .indicator_renderer import IndicatorRenderer
from .scale import ChartScale

logger = logging.getLogger(__name__)


class ChartRenderer:
    """Pure geometry rendering of strategy charts"""

    def __init__(self, chart_config,
                 indicator_renderer: Optional[IndicatorRenderer] = None,
                 value_margin: Optional[float] = None):
        """
        Initialize the chart renderer

        Args:
            chart_config: ChartConfig class or instance with theme and size settings
            indicator_renderer: Overlay renderer, built from chart_config when omitted
            value_margin: Override for the configured visual margin (fraction)
        """
        self.chart_config = chart_config
        self.indicator_renderer = indicator_renderer or IndicatorRenderer(chart_config)

        scaling = self.chart_config.get_scaling()
        self.value_margin = scaling['value_margin'] if value_margin is None else value_margin
        self.clamp_to_canvas = scaling['clamp_to_canvas']
        self.label_format = scaling['label_format']

    def render(self,
               price_series: List[Sample],
               overlay_series: Optional[Mapping[str, List[OverlayPoint]]] = None,
               trade_markers: Optional[List[TradeMarker]] = None,
               frame: Optional[CanvasFrame] = None) -> DrawInstructions:
        """
        Render the complete chart geometry

        Args:
            price_series: Ordered price samples (may be empty)
            overlay_series: Overlay name to points, drawn with the price mappings
            trade_markers: Buy/sell events drawn as circles
            frame: Canvas frame, defaults to the configured chart size

        Returns:
            DrawInstructions with guides, paths, markers and labels. Never raises
            for empty or degenerate input.
        """
        frame = frame or self.chart_config.get_frame()
        price_series = price_series or []
        theme = self.chart_config.get_theme_colors()

        scale = ChartScale.from_values(
            (s.value for s in price_series), frame,
            value_margin=self.value_margin,
            clamp_to_canvas=self.clamp_to_canvas
        )

        if scale.is_degenerate and price_series:
            logger.debug(f"Degenerate value range {scale.value_range}, price drawn at vertical centre")

        size = self.chart_config.get_chart_size()
        instructions = DrawInstructions(
            width=frame.width,
            height=frame.height,
            content_width=max(frame.width, len(price_series) * size['min_point_spacing']),
            value_range=None if not price_series else scale.value_range,
        )

        instructions.guides = self._guide_lines(frame, theme)

        price_path = self._price_path(price_series, scale, theme)
        if price_path is not None:
            instructions.paths.append(price_path)

        instructions.paths.extend(self.indicator_renderer.render_overlays(overlay_series, scale))

        buy_markers, sell_markers = self._trade_markers(trade_markers or [], scale)
        instructions.buy_markers = buy_markers
        instructions.sell_markers = sell_markers

        if not scale.is_degenerate:
            instructions.labels = self._axis_labels(frame, scale, theme)

        logger.debug(
            f"Rendered {len(price_series)} samples, {len(instructions.paths)} paths, "
            f"{len(buy_markers)} buy / {len(sell_markers)} sell markers"
        )
        return instructions

    def _price_path(self, price_series: List[Sample], scale: ChartScale, theme: Dict) -> Optional[LinePath]:
        """Polyline over every sample in order; non-finite samples are skipped"""
        points = []
        for i, sample in enumerate(price_series):
            if not math.isfinite(sample.value):
                logger.debug(f"Skipping non-finite price at index {i}")
                continue
            points.append(scale.point(i, sample.value))

        if not points:
            return None

        return LinePath(
            name='price',
            points=points,
            stroke=theme['price_line'],
            stroke_width=theme['price_linewidth']
        )

    def _trade_markers(self, trade_markers: List[TradeMarker], scale: ChartScale):
        """Partition markers into independently styled buy and sell groups"""
        style = self.chart_config.get_marker_style()
        buy_markers = []
        sell_markers = []

        for trade in trade_markers:
            kind = trade.trade_kind
            if kind is None:
                logger.debug(f"Ignoring trade marker with unknown kind '{trade.kind}'")
                continue

            cx, cy = scale.point(trade.sequence_index, trade.value)
            is_buy = kind is TradeKind.BUY
            marker = PointMarker(
                group=kind.value,
                cx=cx,
                cy=cy,
                radius=style['radius'],
                fill=style['buy_fill'] if is_buy else style['sell_fill'],
                stroke=style['stroke'],
                stroke_width=style['stroke_width'],
                annotation=trade.annotation
            )
            (buy_markers if is_buy else sell_markers).append(marker)

        return buy_markers, sell_markers

    @staticmethod
    def _guide_lines(frame: CanvasFrame, theme: Dict) -> List[GuideLine]:
        """Top, middle and bottom horizontal guides across the inner rectangle"""
        x1 = frame.padding
        x2 = frame.width - frame.padding
        return [
            GuideLine(x1, y, x2, y, stroke=theme['grid_color'], stroke_width=theme['grid_linewidth'])
            for y in (frame.padding, frame.height / 2, frame.height - frame.padding)
        ]

    def _axis_labels(self, frame: CanvasFrame, scale: ChartScale, theme: Dict) -> List[TextLabel]:
        """Max/mid/min price labels right-aligned against the inner rectangle"""
        value_range = scale.value_range
        x = max(frame.padding - 10, 0.0)
        positions = (
            (frame.padding + 5, value_range.max_value),
            (frame.height / 2 + 3, value_range.mid),
            (frame.height - frame.padding + 3, value_range.min_value),
        )
        return [
            TextLabel(
                x=x,
                y=min(y, frame.height),
                text=self.label_format.format(value),
                font_size=theme['label_font_size'],
                fill=theme['label_color'],
                anchor='end'
            )
            for y, value in positions
        ]
