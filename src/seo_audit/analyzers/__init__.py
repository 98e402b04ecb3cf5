"""Analyzers module for heuristic passes over a parsed page."""

from .base import BaseAnalyzer
from .accessibility_analyzer import AccessibilityAnalyzer
from .performance_estimator import PerformanceEstimator, PerformanceProvider
from .security_analyzer import SecurityAnalyzer

__all__ = [
    "BaseAnalyzer",
    "AccessibilityAnalyzer",
    "PerformanceEstimator",
    "PerformanceProvider",
    "SecurityAnalyzer",
]
