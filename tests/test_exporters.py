#!/usr/bin/env python3
"""
Tests for SVG and PNG export of rendered charts.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strategy_chart import render
from strategy_chart.chart import ImageExporter, SvgExporter
from strategy_chart.chart_config import ChartConfig
from strategy_chart.models import CanvasFrame, OverlayPoint, Sample, TradeMarker

FRAME = CanvasFrame(340, 250, 40)
PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def create_chart():
    series = [Sample(i, v) for i, v in enumerate([10.0, 20.0, 30.0])]
    overlays = {'sma20': [OverlayPoint(1, 15.0), OverlayPoint(2, 25.0)]}
    trades = [
        TradeMarker(0, 10.0, 'buy', annotation='Entry <RSI & BB>'),
        TradeMarker(2, 30.0, 'sell'),
    ]
    return render(series, overlays, trades, FRAME)


def test_svg_path_data():
    path = create_chart().price_path
    assert path.to_svg_path() == 'M40,208.365 L170,126.635 L300,44.904'


def test_svg_contains_all_elements():
    svg = SvgExporter().export(create_chart())

    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="340" height="250"')
    assert svg.count('<line ') == 3
    assert svg.count('<path ') == 2
    assert svg.count('<circle ') == 2
    assert svg.count('<text ') == 3
    assert 'stroke-dasharray="5,5"' in svg
    assert '>$30.60</text>' in svg
    assert 'Entry &lt;RSI &amp; BB&gt;' in svg
    assert svg.rstrip().endswith('</svg>')


def test_svg_is_identical_across_calls():
    assert SvgExporter().export(create_chart()) == SvgExporter().export(create_chart())


def test_svg_for_empty_chart():
    svg = SvgExporter(background='#ffffff').export(render([], frame=FRAME))

    assert '<path ' not in svg
    assert '<text ' not in svg
    assert svg.count('<line ') == 3
    assert 'fill="#ffffff"' in svg


def test_png_export():
    png_bytes = ImageExporter(ChartConfig).export_png(create_chart())

    assert png_bytes is not None
    assert png_bytes.startswith(PNG_SIGNATURE)


def test_png_export_failure_returns_none(monkeypatch):
    exporter = ImageExporter(ChartConfig)

    def broken_save(fig, theme):
        raise RuntimeError('disk full')

    monkeypatch.setattr(exporter, '_save_to_buffer', broken_save)
    assert exporter.export_png(create_chart()) is None
