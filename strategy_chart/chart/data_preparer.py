#!/usr/bin/env python3
"""Chart Data Preparer - Normalizes caller input into chart model objects."""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from ..models import OverlayPoint, Sample, TradeMarker, ValueRange
from .scale import value_range_with_margin

logger = logging.getLogger(__name__)


class ChartDataPreparer:
    """Prepares price series, overlays and trade markers for rendering."""

    def __init__(self, candles_to_show: Optional[int] = None, value_column: str = 'close'):
        self.candles_to_show = candles_to_show
        self.value_column = value_column

    def prepare_price_series(self, data: Any) -> List[Sample]:
        """
        Build the ordered price series.

        Accepts a DataFrame (value column, optional 'volume'), a Series, a list
        of Sample, or a list of mappings with 'x'/'y'/'date'/'volume' keys.
        Sequence indices are positions in the (trimmed) input.
        """
        if data is None:
            return []

        if isinstance(data, pd.DataFrame):
            samples = self._samples_from_dataframe(data)
        elif isinstance(data, pd.Series):
            samples = self._samples_from_dataframe(data.to_frame(name=self.value_column))
        elif isinstance(data, (list, tuple)):
            samples = [self._sample_from_item(i, item) for i, item in enumerate(data)]
        else:
            raise ValueError(f"Unsupported price data type: {type(data).__name__}")

        if self.candles_to_show and len(samples) > self.candles_to_show:
            samples = samples[-self.candles_to_show:]
            # Re-index so the visible window starts at the left edge
            samples = [
                Sample(i, s.value, s.timestamp, s.volume) for i, s in enumerate(samples)
            ]

        self.validate_series(samples)
        return samples

    def prepare_overlay(self, points: Any) -> List[OverlayPoint]:
        """Build one overlay series, dropping warm-up and non-finite values."""
        if points is None:
            return []

        if isinstance(points, pd.Series):
            values = points.to_numpy(dtype=float)
            overlay = [OverlayPoint(i, float(v)) for i, v in enumerate(values)]
        elif isinstance(points, (list, tuple)):
            overlay = []
            for position, item in enumerate(points):
                if isinstance(item, OverlayPoint):
                    overlay.append(item)
                elif isinstance(item, Mapping):
                    overlay.append(OverlayPoint(
                        sequence_index=_to_float(item.get('x', item.get('sequence_index', position))),
                        value=_to_float(item.get('y', item.get('value')))
                    ))
                else:
                    overlay.append(OverlayPoint(position, _to_float(item)))
        else:
            raise ValueError(f"Unsupported overlay type: {type(points).__name__}")

        cleaned = [
            p for p in overlay
            if math.isfinite(p.value) and math.isfinite(p.sequence_index)
        ]
        if len(cleaned) < len(overlay):
            logger.debug(f"Dropped {len(overlay) - len(cleaned)} undefined overlay points")
        return cleaned

    def prepare_overlays(self, indicators: Optional[Mapping[str, Any]]) -> Dict[str, List[OverlayPoint]]:
        if not indicators:
            return {}
        return {name: self.prepare_overlay(points) for name, points in indicators.items()}

    def prepare_trades(self, trades: Any) -> List[TradeMarker]:
        """Build trade markers from TradeMarker objects or 'x'/'y'/'type' mappings."""
        if not trades:
            return []

        markers = []
        for item in trades:
            if isinstance(item, TradeMarker):
                markers.append(item)
            elif isinstance(item, Mapping):
                value = _to_float(item.get('y', item.get('value', item.get('price'))))
                markers.append(TradeMarker(
                    sequence_index=_to_float(item.get('x', item.get('sequence_index'))),
                    value=value,
                    kind=str(item.get('type', item.get('kind', ''))),
                    timestamp=str(item.get('date', item.get('timestamp', ''))),
                    price=_to_float(item.get('price', value)),
                    annotation=str(item.get('reason', item.get('annotation', ''))),
                ))
            else:
                raise ValueError(f"Unsupported trade marker type: {type(item).__name__}")
        return markers

    @staticmethod
    def calculate_value_range(samples: List[Sample], margin: float = 0.02) -> ValueRange:
        """Value range of the price series with the visual margin applied."""
        return value_range_with_margin((s.value for s in samples), margin)

    @staticmethod
    def validate_series(samples: List[Sample]) -> bool:
        """Validate a price series for charting. Problems are logged, not raised."""
        if not samples:
            logger.debug("Price series is empty")
            return False

        bad = [s.sequence_index for s in samples if not math.isfinite(s.value)]
        if bad:
            logger.warning(f"Price series has {len(bad)} non-finite values (first at index {bad[0]})")
            return False

        return True

    def _samples_from_dataframe(self, df: pd.DataFrame) -> List[Sample]:
        if self.value_column not in df.columns:
            raise ValueError(f"Missing column: {self.value_column}")

        values = df[self.value_column].to_numpy(dtype=float)
        volumes = df['volume'].to_numpy(dtype=float) if 'volume' in df.columns else None
        timestamps = [_format_timestamp(ts) for ts in df.index]

        return [
            Sample(
                sequence_index=i,
                value=float(values[i]),
                timestamp=timestamps[i],
                volume=float(volumes[i]) if volumes is not None else 0.0
            )
            for i in range(len(values))
        ]

    @staticmethod
    def _sample_from_item(position: int, item: Any) -> Sample:
        if isinstance(item, Sample):
            return Sample(position, item.value, item.timestamp, item.volume)
        if isinstance(item, Mapping):
            return Sample(
                sequence_index=position,
                value=_to_float(item.get('y', item.get('value', item.get('close')))),
                timestamp=str(item.get('date', item.get('timestamp', ''))),
                volume=_to_float(item.get('volume', 0.0)),
            )
        return Sample(position, _to_float(item))


def _to_float(value: Any) -> float:
    """Lenient numeric conversion; unusable values become NaN."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _format_timestamp(ts: Any) -> str:
    if isinstance(ts, pd.Timestamp):
        return ts.isoformat()
    return str(ts)
