"""
Text blocks shown around the chart canvas: strategy header, legend and trade summary.
"""
from typing import Any, Dict, Iterable, List, Tuple

from ..models import StrategyInfo, TradeKind, TradeMarker


def format_return(total_return):
    """Signed percentage, e.g. '+12.34%' or '-3.10%'."""
    sign = '+' if total_return > 0 else ''
    return f"{sign}{total_return:.2f}%"


def format_strategy_header(strategy: StrategyInfo, chart_config) -> Dict[str, Any]:
    """Title and performance row for a strategy."""
    theme = chart_config.get_theme_colors()
    perf = strategy.performance
    return {
        'title': f"{strategy.name} Strategy",
        'return': format_return(perf.total_return),
        'return_color': theme['positive'] if perf.total_return > 0 else theme['negative'],
        'win_rate': f"{perf.win_rate:.1f}%",
        'trades': perf.total_trades,
    }


def summarize_trades(markers: Iterable[TradeMarker]) -> Dict[str, int]:
    markers = list(markers)
    kinds = [m.trade_kind for m in markers]
    return {
        'total': len(markers),
        'buy': sum(1 for k in kinds if k is TradeKind.BUY),
        'sell': sum(1 for k in kinds if k is TradeKind.SELL),
    }


def legend_entries(chart_config, overlay_names: Iterable[str] = ()) -> List[Tuple[str, str]]:
    """(label, color) pairs: Price, each visible overlay, then Buy and Sell."""
    theme = chart_config.get_theme_colors()
    markers = chart_config.get_marker_style()

    entries = [('Price', theme['price_line'])]
    for name in chart_config.visible_overlays(overlay_names):
        style = chart_config.get_overlay_style(name)
        entries.append((style['label'], style['color']))
    entries.append(('Buy', markers['buy_fill']))
    entries.append(('Sell', markers['sell_fill']))
    return entries


def format_trades_summary(markers: Iterable[TradeMarker]) -> str:
    counts = summarize_trades(markers)
    return (
        f"Total Signals: {counts['total']}  "
        f"Buy: {counts['buy']}  "
        f"Sell: {counts['sell']}"
    )
