#!/usr/bin/env python3
"""Indicator Renderer - Renders pre-calculated overlay series on the price panel."""

import logging
import math
from typing import List, Mapping, Optional

from ..models import LinePath, OverlayPoint
from .scale import ChartScale

logger = logging.getLogger(__name__)


class IndicatorRenderer:
    """Renders pre-calculated overlays as paths (no calculation logic)."""

    def __init__(self, chart_config):
        self.chart_config = chart_config

    def render_overlays(self,
                        overlay_series: Optional[Mapping[str, List[OverlayPoint]]],
                        scale: ChartScale) -> List[LinePath]:
        """Create one path per visible, non-empty overlay, in input order."""
        if not overlay_series:
            return []

        paths = []
        for name, points in overlay_series.items():
            if not points:
                continue
            if not self.chart_config.is_overlay_visible(name):
                logger.debug(f"Overlay '{name}' is not drawn on the price panel")
                continue
            path = self._build_path(name, points, scale)
            if path is not None:
                paths.append(path)

        return paths

    def _build_path(self, name: str, points: List[OverlayPoint], scale: ChartScale) -> Optional[LinePath]:
        """Overlays share the price series' x/y mappings."""
        style = self.chart_config.get_overlay_style(name)
        out_of_range = 0
        coords = []
        for point in points:
            if not math.isfinite(point.value):
                logger.debug(f"Skipping non-finite value in overlay '{name}' at index {point.sequence_index}")
                continue
            if point.sequence_index < 0 or point.sequence_index > scale.length - 1:
                out_of_range += 1
            coords.append(scale.point(point.sequence_index, point.value))

        if not coords:
            return None
        if out_of_range:
            logger.debug(f"Overlay '{name}' has {out_of_range} points outside the price index range")

        return LinePath(
            name=name,
            points=coords,
            stroke=style['color'],
            stroke_width=style['width'],
            dash=style.get('dash')
        )
