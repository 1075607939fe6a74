"""
Chart Configuration Module

This module contains all configurable settings for strategy chart rendering including:
- Color themes (light/dark)
- Overlay styles and indicator visibility on the price panel
- Canvas size and value-axis scaling settings
"""

import logging
import os
from typing import Dict, Any, Optional, Iterable

from dotenv import load_dotenv

from .models import CanvasFrame

logger = logging.getLogger(__name__)


class ChartConfig:
    """
    Configuration class for strategy chart settings.
    Provides the light theme color palette and overlay visibility rules.
    """

    # Color Theme - Light Mode
    THEME = {
        'mode': 'light',

        # Background colors
        'background': '#ffffff',       # Card background
        'grid_color': '#e0e0e0',       # Horizontal guide lines
        'grid_linewidth': 1,

        # Text colors
        'label_color': '#666',         # Y-axis labels
        'title_color': '#333',
        'label_font_size': 10,

        # Price line
        'price_line': '#2196F3',       # Blue
        'price_linewidth': 2,

        # Performance colors
        'positive': '#4CAF50',
        'negative': '#F44336',
    }

    # Trade marker styling (circles)
    MARKER_STYLE = {
        'radius': 4,
        'buy_fill': '#4CAF50',         # Green
        'sell_fill': '#F44336',        # Red
        'stroke': '#fff',
        'stroke_width': 2,
    }

    # Overlay styles by overlay name
    OVERLAY_STYLES = {
        'sma20': {'color': '#FF9800', 'width': 1.5, 'dash': '5,5', 'label': 'SMA20'},
        'sma50': {'color': '#9C27B0', 'width': 1.5, 'dash': '5,5', 'label': 'SMA50'},
        'bb_upper': {'color': '#808080', 'width': 1.2, 'dash': '4,2', 'label': 'BB Upper'},
        'bb_lower': {'color': '#808080', 'width': 1.2, 'dash': '4,2', 'label': 'BB Lower'},
    }

    DEFAULT_OVERLAY_STYLE = {'color': '#607D8B', 'width': 1.5, 'dash': '5,5'}

    # Indicator Visibility on the price panel. Prefix rules apply to names
    # such as 'ema12' or 'sma200'.
    INDICATOR_VISIBILITY = {
        'price_panel_prefixes': ('sma', 'ema', 'bb_'),
        'hidden': ('rsi', 'macd'),  # Oscillators live on their own scale
        'show_unknown': True,
    }

    # Canvas Size
    CHART_SIZE = {
        'width': 340,                   # Screen width minus card margins
        'height': 250,
        'padding': 40,
        'dpi': 100,                     # Resolution for PNG export
        'min_point_spacing': 3,         # Content widens for long series
    }

    # Value-axis scaling
    SCALING = {
        'value_margin': 0.02,           # 2% below min and above max
        'clamp_to_canvas': True,
        'label_format': '${:.2f}',
    }

    @classmethod
    def get_theme_colors(cls) -> Dict[str, Any]:
        """
        Get current theme colors.

        Returns:
            Dictionary containing all theme color settings
        """
        return cls.THEME.copy()

    @classmethod
    def update_theme(cls, **kwargs):
        """
        Update specific theme colors dynamically.

        Example:
            >>> ChartConfig.update_theme(price_line='#000000')
        """
        cls.THEME.update(kwargs)

    @classmethod
    def get_marker_style(cls) -> Dict[str, Any]:
        return cls.MARKER_STYLE.copy()

    @classmethod
    def get_overlay_style(cls, name: str) -> Dict[str, Any]:
        """Style for a named overlay, falling back to the default style"""
        style = cls.DEFAULT_OVERLAY_STYLE.copy()
        style['label'] = name.upper()
        style.update(cls.OVERLAY_STYLES.get(name, {}))
        return style

    @classmethod
    def get_chart_size(cls) -> Dict[str, Any]:
        """
        Get canvas size configuration.

        Returns:
            Dictionary with width, height, padding, dpi and min_point_spacing
        """
        return cls.CHART_SIZE.copy()

    @classmethod
    def get_scaling(cls) -> Dict[str, Any]:
        return cls.SCALING.copy()

    @classmethod
    def get_frame(cls) -> CanvasFrame:
        size = cls.CHART_SIZE
        return CanvasFrame(width=size['width'], height=size['height'], padding=size['padding'])

    @classmethod
    def is_overlay_visible(cls, name: str) -> bool:
        """
        Whether an overlay is drawn on the price panel.

        Examples:
            >>> ChartConfig.is_overlay_visible('sma20')
            True
            >>> ChartConfig.is_overlay_visible('rsi')
            False
        """
        key = name.lower()
        rules = cls.INDICATOR_VISIBILITY
        if key in rules['hidden']:
            return False
        if key in cls.OVERLAY_STYLES or key.startswith(rules['price_panel_prefixes']):
            return True
        return rules['show_unknown']

    @classmethod
    def visible_overlays(cls, names: Iterable[str]) -> list:
        return [name for name in names if cls.is_overlay_visible(name)]

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Read canvas and scaling overrides from the environment.

        Recognised variables: CHART_WIDTH, CHART_HEIGHT, CHART_PADDING,
        CHART_VALUE_MARGIN. Invalid values are logged and ignored.

        Returns:
            Dictionary with 'frame' (CanvasFrame) and 'value_margin' (float)
        """
        load_dotenv(dotenv_path=dotenv_path)

        size = cls.get_chart_size()
        for key, env_name in (('width', 'CHART_WIDTH'),
                              ('height', 'CHART_HEIGHT'),
                              ('padding', 'CHART_PADDING')):
            raw = os.getenv(env_name)
            if raw is None:
                continue
            try:
                size[key] = float(raw)
            except ValueError:
                logger.warning(f"Ignoring invalid {env_name}={raw!r}")

        value_margin = cls.SCALING['value_margin']
        raw_margin = os.getenv('CHART_VALUE_MARGIN')
        if raw_margin is not None:
            try:
                parsed = float(raw_margin)
                if 0 <= parsed < 1:
                    value_margin = parsed
                else:
                    logger.warning(f"CHART_VALUE_MARGIN out of range [0, 1): {parsed}")
            except ValueError:
                logger.warning(f"Ignoring invalid CHART_VALUE_MARGIN={raw_margin!r}")

        try:
            frame = CanvasFrame(width=size['width'], height=size['height'], padding=size['padding'])
        except ValueError as e:
            logger.warning(f"Environment canvas rejected ({e}), using defaults")
            frame = cls.get_frame()

        return {'frame': frame, 'value_margin': value_margin}


class DarkChartTheme(ChartConfig):
    """
    Dark theme color palette.
    Can be used as alternative by passing to StrategyChartGenerator.
    """

    THEME = {
        'mode': 'dark',

        'background': '#1a1a1a',       # Dark charcoal background
        'grid_color': '#2d2d2d',       # Subtle grid lines
        'grid_linewidth': 1,

        'label_color': '#e0e0e0',
        'title_color': '#ffffff',
        'label_font_size': 10,

        'price_line': '#64b5f6',       # Light blue visible on dark background
        'price_linewidth': 2,

        'positive': '#00e676',
        'negative': '#ff5252',
    }

    MARKER_STYLE = {
        'radius': 4,
        'buy_fill': '#00e676',
        'sell_fill': '#ff5252',
        'stroke': '#1a1a1a',
        'stroke_width': 2,
    }

    OVERLAY_STYLES = {
        'sma20': {'color': '#ffd54f', 'width': 1.5, 'dash': '5,5', 'label': 'SMA20'},
        'sma50': {'color': '#ba68c8', 'width': 1.5, 'dash': '5,5', 'label': 'SMA50'},
        'bb_upper': {'color': '#90a4ae', 'width': 1.2, 'dash': '4,2', 'label': 'BB Upper'},
        'bb_lower': {'color': '#90a4ae', 'width': 1.2, 'dash': '4,2', 'label': 'BB Lower'},
    }


# Default configuration to use (light theme)
DEFAULT_CHART_CONFIG = ChartConfig
