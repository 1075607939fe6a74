#!/usr/bin/env python3
"""
Tests for moving average and Bollinger Band overlays.
"""

import math
import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strategy_chart.indicators import Indicators


def create_price_frame(n_points=60):
    return pd.DataFrame({'close': [float(i) for i in range(1, n_points + 1)]})


def test_moving_average_overlays_skip_warm_up():
    df = create_price_frame(60)
    overlays = Indicators.moving_average_overlays(df)

    assert list(overlays) == ['sma20', 'sma50']
    assert len(overlays['sma20']) == 60 - 19
    assert len(overlays['sma50']) == 60 - 49

    first = overlays['sma20'][0]
    assert first.sequence_index == 19
    assert math.isclose(first.value, 10.5)
    assert math.isclose(overlays['sma50'][0].value, 25.5)


def test_short_series_gives_empty_overlay():
    overlays = Indicators.moving_average_overlays(create_price_frame(10), windows=(20,))
    assert overlays == {'sma20': []}


def test_invalid_input_raises():
    with pytest.raises(ValueError):
        Indicators.moving_average_overlays(pd.DataFrame({'open': [1.0, 2.0]}))
    with pytest.raises(ValueError):
        Indicators.moving_average_overlays(create_price_frame(), windows=(0,))


def test_ema_shares_sma_warm_up():
    df = create_price_frame(30)
    ema = Indicators.ema(df, window=5)

    assert ema.iloc[:4].isna().all()
    assert not ema.iloc[4:].isna().any()


def test_bollinger_overlays():
    df = create_price_frame(40)
    overlays = Indicators.bollinger_overlays(df, window=20, num_std=2)

    assert len(overlays['bb_upper']) == 21
    upper = overlays['bb_upper'][0]
    lower = overlays['bb_lower'][0]
    assert upper.sequence_index == lower.sequence_index == 19
    assert upper.value > 10.5 > lower.value
