"""SEO audit engine: turns a fetched page into scores, issues and facts."""

from .engine import SEOAnalyzer, analyze
from .models import AnalysisResult, SEOAuditResult

__version__ = "0.1.0"

__all__ = ["SEOAnalyzer", "analyze", "AnalysisResult", "SEOAuditResult", "__version__"]
