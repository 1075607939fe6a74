#!/usr/bin/env python3
"""
Image Exporter

This module rasterizes drawing instructions with matplotlib.
Responsible for drawing paths, markers, guides and labels in pixel
coordinates and exporting to PNG bytes.
"""

import io
import logging
from typing import Dict, Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from ..models import DrawInstructions

logger = logging.getLogger(__name__)

_HALIGN = {'start': 'left', 'middle': 'center', 'end': 'right'}


class ImageExporter:
    """Matplotlib rendering of chart geometry and PNG export"""

    def __init__(self, chart_config):
        """
        Initialize the image exporter

        Args:
            chart_config: ChartConfig with theme and dpi settings
        """
        self.chart_config = chart_config
        self.dpi = self.chart_config.get_chart_size()['dpi']

    def export_png(self, instructions: DrawInstructions) -> Optional[bytes]:
        """
        Render the drawing and return it as PNG bytes

        Args:
            instructions: Output of ChartRenderer.render

        Returns:
            PNG image as bytes or None if rendering fails
        """
        fig = None
        try:
            theme = self.chart_config.get_theme_colors()
            width = instructions.content_width
            height = instructions.height

            fig = plt.figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
            ax = fig.add_axes([0, 0, 1, 1])
            ax.set_xlim(0, width)
            ax.set_ylim(height, 0)  # Canvas y grows downward
            ax.axis('off')
            fig.patch.set_facecolor(theme['background'])

            for guide in instructions.guides:
                ax.plot([guide.x1, guide.x2], [guide.y1, guide.y2],
                        color=guide.stroke, linewidth=_px_to_pt(guide.stroke_width, self.dpi))

            for path in instructions.paths:
                if not path.points:
                    continue
                xs, ys = zip(*path.points)
                line_kwargs = {
                    'color': path.stroke,
                    'linewidth': _px_to_pt(path.stroke_width, self.dpi),
                }
                dashes = _parse_dash(path.dash)
                if dashes:
                    line_kwargs['dashes'] = dashes
                ax.plot(xs, ys, **line_kwargs)

            for marker in instructions.buy_markers + instructions.sell_markers:
                ax.add_patch(plt.Circle(
                    (marker.cx, marker.cy), marker.radius,
                    facecolor=marker.fill, edgecolor=marker.stroke,
                    linewidth=_px_to_pt(marker.stroke_width, self.dpi), zorder=3
                ))

            for label in instructions.labels:
                ax.text(label.x, label.y, label.text,
                        fontsize=_px_to_pt(label.font_size, self.dpi),
                        color=label.fill,
                        horizontalalignment=_HALIGN.get(label.anchor, 'left'),
                        verticalalignment='baseline')

            png_bytes = self._save_to_buffer(fig, theme)
            logger.info(f"Chart image exported ({len(png_bytes)} bytes)")
            return png_bytes

        except Exception as e:
            logger.error(f"Failed to export chart image: {e}")
            return None

        finally:
            if fig is not None:
                plt.close(fig)

    def _save_to_buffer(self, fig, theme: Dict) -> bytes:
        """
        Save chart figure to bytes buffer

        Args:
            fig: Matplotlib figure
            theme: Theme colors dictionary

        Returns:
            PNG image as bytes
        """
        buffer = io.BytesIO()
        fig.savefig(
            buffer,
            format='png',
            dpi=self.dpi,
            facecolor=theme['background'],
            edgecolor='none'
        )
        buffer.seek(0)
        return buffer.getvalue()


def _px_to_pt(pixels: float, dpi: float) -> float:
    return pixels * 72.0 / dpi


def _parse_dash(dash: Optional[str]):
    """'5,5' -> (5.0, 5.0); None for solid or unparsable patterns"""
    if not dash:
        return None
    try:
        parts = tuple(float(p) for p in dash.replace(' ', ',').split(',') if p)
    except ValueError:
        return None
    return parts if parts and all(p > 0 for p in parts) else None
