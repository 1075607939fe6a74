#!/usr/bin/env python3
"""
Render a strategy chart from a JSON payload.

The payload mirrors the mobile strategy chart props:
    {
        "priceData": [{"x": 0, "y": 101.2, "date": "...", "volume": 1200}, ...],
        "trades": [{"x": 4, "y": 99.8, "type": "buy", "date": "...", "price": 99.8, "reason": "..."}],
        "indicators": {"sma20": [{"x": 19, "y": 100.4}, ...]},
        "strategy": {"name": "Mean Reversion", "performance": {"totalReturn": 12.3, ...}}
    }

Usage:
    python render_chart.py payload.json -o chart.svg
    python render_chart.py payload.json -o chart.png --format png --sma 20 50
"""

import argparse
import json
import logging
import sys

import pandas as pd
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from strategy_chart.chart import ChartDataPreparer, StrategyChartGenerator
from strategy_chart.chart_config import ChartConfig, DarkChartTheme
from strategy_chart.indicators import Indicators
from strategy_chart.models import CanvasFrame

logger = logging.getLogger('render_chart')


def load_payload(path: str) -> dict:
    """Read and validate the chart payload."""
    with open(path, 'r') as f:
        payload = json.load(f)

    if not isinstance(payload, dict):
        raise ValueError("Payload must be a JSON object")
    if not isinstance(payload.get('priceData', []), list):
        raise ValueError("'priceData' must be a list")
    return payload


def resolve_frame(args, env_settings) -> CanvasFrame:
    """Command-line size beats environment, environment beats defaults."""
    frame = env_settings['frame']
    if args.width is None and args.height is None and args.padding is None:
        return frame
    return CanvasFrame(
        width=args.width if args.width is not None else frame.width,
        height=args.height if args.height is not None else frame.height,
        padding=args.padding if args.padding is not None else frame.padding,
    )


def compute_overlays(price_data: list, windows) -> dict:
    samples = ChartDataPreparer().prepare_price_series(price_data)
    closes = pd.DataFrame({'close': [s.value for s in samples]}, dtype=float)
    return Indicators.moving_average_overlays(closes, windows=windows)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Render a strategy chart to SVG, PNG or JSON')
    parser.add_argument('input', help='Path to the JSON chart payload')
    parser.add_argument('-o', '--output', help='Output file (stdout for svg/json when omitted)')
    parser.add_argument('--format', choices=['svg', 'png', 'json'], default='svg',
                        help='Output format (default: svg)')
    parser.add_argument('--width', type=float, help='Canvas width in pixels')
    parser.add_argument('--height', type=float, help='Canvas height in pixels')
    parser.add_argument('--padding', type=float, help='Canvas padding in pixels')
    parser.add_argument('--sma', type=int, nargs='+', metavar='WINDOW',
                        help='Compute SMA overlays when the payload has no indicators')
    parser.add_argument('--theme', choices=['light', 'dark'], default='light')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    chart_config = DarkChartTheme if args.theme == 'dark' else ChartConfig

    try:
        payload = load_payload(args.input)
        env_settings = chart_config.from_env()
        frame = resolve_frame(args, env_settings)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read chart input: {e}")
        return 1

    price_data = payload.get('priceData', [])
    indicators = payload.get('indicators') or {}

    generator = StrategyChartGenerator(chart_config=chart_config, frame=frame,
                                       value_margin=env_settings['value_margin'])
    try:
        if args.sma and not indicators:
            indicators = compute_overlays(price_data, args.sma)
            logger.info(f"Computed overlays: {', '.join(indicators)}")
        view = generator.build_view(payload.get('strategy') or {}, price_data,
                                    payload.get('trades'), indicators)
    except ValueError as e:
        logger.error(f"Invalid chart payload: {e}")
        return 1

    instructions = view['chart']
    if args.format == 'png':
        if not args.output:
            logger.error("PNG output requires --output")
            return 1
        png_bytes = generator.image_exporter.export_png(instructions)
        if png_bytes is None:
            return 1
        with open(args.output, 'wb') as f:
            f.write(png_bytes)
    else:
        if args.format == 'svg':
            content = generator.svg_exporter.export(instructions)
        else:
            content = json.dumps({
                'header': view['header'],
                'legend': view['legend'],
                'trades': view['trades'],
                'chart': instructions.to_dict(),
            }, indent=2, sort_keys=True)
        if args.output:
            with open(args.output, 'w') as f:
                f.write(content)
        else:
            sys.stdout.write(content)

    header = view['header']
    logger.info(f"{header['title']} - Return {header['return']}, {view['trades_text']}")
    if args.output:
        logger.info(f"Chart written to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
