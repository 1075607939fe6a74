import pandas as pd
import numpy as np
from typing import Dict, List, Sequence

from .models import OverlayPoint


class Indicators:
    @staticmethod
    def sma(df, window=20, column='close'):
        return df[column].rolling(window).mean()

    @staticmethod
    def ema(df, window=20, column='close'):
        # Same warm-up as the SMA so overlays start at the same index
        ema = df[column].ewm(span=window, adjust=False).mean()
        ema.iloc[:window - 1] = np.nan
        return ema

    @staticmethod
    def bollinger_bands(df, window=20, num_std=2, column='close'):
        close = df[column]
        ma = close.rolling(window).mean()
        std = close.rolling(window).std()
        upper = ma + num_std * std
        lower = ma - num_std * std
        return ma, upper, lower

    @staticmethod
    def to_overlay(series: pd.Series) -> List[OverlayPoint]:
        """
        Convert an indicator series into overlay points.

        Positions in the series become sequence indices, so the overlay shares
        the price series' coordinate system. Warm-up NaN values are dropped.
        """
        values = series.to_numpy(dtype=float)
        return [
            OverlayPoint(sequence_index=i, value=float(v))
            for i, v in enumerate(values)
            if np.isfinite(v)
        ]

    @staticmethod
    def moving_average_overlays(df: pd.DataFrame,
                                windows: Sequence[int] = (20, 50),
                                column: str = 'close') -> Dict[str, List[OverlayPoint]]:
        """
        Calculate simple moving average overlays keyed 'sma<window>'.

        Args:
            df: DataFrame with the price column
            windows: Moving average periods
            column: Price column name

        Returns:
            Dictionary of overlay name to overlay points (warm-up period excluded)

        Raises:
            ValueError: If the price column is missing or a window is not positive
        """
        if column not in df.columns:
            raise ValueError(f"Missing required column: {column}")

        overlays = {}
        for window in windows:
            if int(window) < 1:
                raise ValueError(f"Invalid moving average window: {window}")
            overlays[f'sma{int(window)}'] = Indicators.to_overlay(
                Indicators.sma(df, window=int(window), column=column)
            )
        return overlays

    @staticmethod
    def bollinger_overlays(df: pd.DataFrame, window=20, num_std=2,
                           column='close') -> Dict[str, List[OverlayPoint]]:
        _, upper, lower = Indicators.bollinger_bands(df, window=window, num_std=num_std, column=column)
        return {
            'bb_upper': Indicators.to_overlay(upper),
            'bb_lower': Indicators.to_overlay(lower),
        }
