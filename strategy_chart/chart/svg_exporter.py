#!/usr/bin/env python3
"""SVG Exporter - Writes drawing instructions as standalone SVG markup."""

import logging
from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

from ..models import DrawInstructions, format_coordinate as fmt

logger = logging.getLogger(__name__)

_ANCHORS = {'start': 'start', 'middle': 'middle', 'end': 'end'}


class SvgExporter:
    """Deterministic SVG serialization of a rendered chart."""

    def __init__(self, background: Optional[str] = None):
        self.background = background

    def export(self, instructions: DrawInstructions) -> str:
        """
        Build SVG markup for the drawing.

        Args:
            instructions: Output of ChartRenderer.render

        Returns:
            SVG document as a string (identical for identical input)
        """
        width = fmt(instructions.content_width)
        height = fmt(instructions.height)
        lines: List[str] = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">'
        ]

        if self.background:
            lines.append(f'  <rect width="100%" height="100%" fill={quoteattr(self.background)}/>')

        for guide in instructions.guides:
            lines.append(
                f'  <line x1="{fmt(guide.x1)}" y1="{fmt(guide.y1)}" '
                f'x2="{fmt(guide.x2)}" y2="{fmt(guide.y2)}" '
                f'stroke={quoteattr(guide.stroke)} stroke-width="{fmt(guide.stroke_width)}"/>'
            )

        for path in instructions.paths:
            if not path.points:
                continue
            dash = f' stroke-dasharray={quoteattr(path.dash)}' if path.dash else ''
            lines.append(
                f'  <path class={quoteattr(path.name)} d="{path.to_svg_path()}" '
                f'stroke={quoteattr(path.stroke)} stroke-width="{fmt(path.stroke_width)}" '
                f'fill="none"{dash}/>'
            )

        for marker in instructions.buy_markers + instructions.sell_markers:
            title = f'<title>{escape(marker.annotation)}</title>' if marker.annotation else ''
            lines.append(
                f'  <circle class="{marker.group}" cx="{fmt(marker.cx)}" cy="{fmt(marker.cy)}" '
                f'r="{fmt(marker.radius)}" fill={quoteattr(marker.fill)} '
                f'stroke={quoteattr(marker.stroke)} stroke-width="{fmt(marker.stroke_width)}">'
                f'{title}</circle>'
            )

        for label in instructions.labels:
            anchor = _ANCHORS.get(label.anchor, 'start')
            lines.append(
                f'  <text x="{fmt(label.x)}" y="{fmt(label.y)}" font-size="{fmt(label.font_size)}" '
                f'fill={quoteattr(label.fill)} text-anchor="{anchor}">{escape(label.text)}</text>'
            )

        lines.append('</svg>')
        logger.debug(f"SVG exported with {len(lines) - 2} elements")
        return '\n'.join(lines) + '\n'
