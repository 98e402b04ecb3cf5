"""AI-powered narrative insights."""

from .client import OpenRouterClient
from .insights import InsightGenerator, fallback_insights, generate_insights

__all__ = ["OpenRouterClient", "InsightGenerator", "fallback_insights", "generate_insights"]
