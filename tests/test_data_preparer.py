#!/usr/bin/env python3
"""
Tests for normalizing DataFrames and chart payloads into samples,
overlays and trade markers.
"""

import math
import os
import sys

import numpy as np
import pandas as pd
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strategy_chart.chart import ChartDataPreparer
from strategy_chart.models import OverlayPoint, Sample, TradeMarker


def create_sample_data(n_points=30):
    """Create sample OHLCV data for testing."""
    dates = pd.date_range('2025-01-01', periods=n_points, freq='D')
    close = np.linspace(100, 130, n_points)
    return pd.DataFrame({
        'open': close - 0.5,
        'high': close + 1,
        'low': close - 1,
        'close': close,
        'volume': np.arange(n_points) * 1000,
    }, index=dates)


def test_price_series_from_dataframe():
    df = create_sample_data(5)
    samples = ChartDataPreparer().prepare_price_series(df)

    assert [s.sequence_index for s in samples] == [0, 1, 2, 3, 4]
    assert samples[0].value == 100
    assert samples[-1].value == 130
    assert samples[2].volume == 2000
    assert samples[0].timestamp.startswith('2025-01-01')


def test_price_series_from_payload():
    payload = [
        {'x': 0, 'y': 101.2, 'date': '2025-01-01', 'volume': 1500},
        {'x': 1, 'y': '102.5', 'date': '2025-01-02'},
        {'x': 2, 'y': None, 'date': '2025-01-03'},
    ]
    samples = ChartDataPreparer().prepare_price_series(payload)

    assert len(samples) == 3
    assert samples[1].value == 102.5
    assert math.isnan(samples[2].value)
    assert samples[0].volume == 1500


def test_price_series_trimming_reindexes():
    samples = ChartDataPreparer(candles_to_show=10).prepare_price_series(create_sample_data(30))

    assert len(samples) == 10
    assert samples[0].sequence_index == 0
    assert samples[-1].value == 130


def test_missing_value_column_raises():
    df = create_sample_data(5).drop(columns=['close'])
    with pytest.raises(ValueError):
        ChartDataPreparer().prepare_price_series(df)

    samples = ChartDataPreparer(value_column='high').prepare_price_series(df)
    assert samples[0].value == 101


def test_unsupported_price_type_raises():
    with pytest.raises(ValueError):
        ChartDataPreparer().prepare_price_series('not a series')


def test_empty_inputs():
    preparer = ChartDataPreparer()
    assert preparer.prepare_price_series(None) == []
    assert preparer.prepare_price_series([]) == []
    assert preparer.prepare_overlays(None) == {}
    assert preparer.prepare_trades(None) == []


def test_overlay_from_series_drops_warm_up():
    series = pd.Series([np.nan, np.nan, 10.0, 11.0])
    overlay = ChartDataPreparer().prepare_overlay(series)

    assert overlay == [OverlayPoint(2, 10.0), OverlayPoint(3, 11.0)]


def test_overlay_from_payload():
    overlay = ChartDataPreparer().prepare_overlay([
        {'x': 19, 'y': 100.4},
        {'x': 20, 'y': None},
        OverlayPoint(21, 100.9),
    ])

    assert [p.sequence_index for p in overlay] == [19, 21]


def test_trades_from_payload():
    trades = ChartDataPreparer().prepare_trades([
        {'x': 4, 'y': 99.8, 'type': 'buy', 'date': '2025-01-05', 'price': 99.8, 'reason': 'RSI < 30'},
        TradeMarker(7, 104.0, 'sell'),
    ])

    assert trades[0].kind == 'buy'
    assert trades[0].annotation == 'RSI < 30'
    assert trades[0].timestamp == '2025-01-05'
    assert trades[1].sequence_index == 7


def test_validate_and_value_range():
    samples = [Sample(0, 10.0), Sample(1, 30.0)]
    assert ChartDataPreparer.validate_series(samples)
    assert not ChartDataPreparer.validate_series([])
    assert not ChartDataPreparer.validate_series([Sample(0, float('inf'))])

    value_range = ChartDataPreparer.calculate_value_range(samples)
    assert math.isclose(value_range.min_value, 9.8)
    assert math.isclose(value_range.max_value, 30.6)
