"""Order execution and analyzer-mode endpoints."""

from .analyzer import AnalyzerAPI
from .orders import BasketOrderItem, OptionsLeg, OrderAPI

__all__ = [
    "AnalyzerAPI",
    "BasketOrderItem",
    "OptionsLeg",
    "OrderAPI",
]
