"""Data models for the SEO audit engine."""

import math
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum


class IssueCategory(str, Enum):
    """Scoring bucket an issue counts against."""

    TECHNICAL = "technical"
    ON_PAGE = "on-page"
    CONTENT = "content"
    PERFORMANCE = "performance"
    ACCESSIBILITY = "accessibility"
    SECURITY = "security"


class Severity(str, Enum):
    """Severity of a rule-engine issue."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class LinkType(str, Enum):
    """Classification of an anchor relative to the audited page."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    ANCHOR = "anchor"


@dataclass(frozen=True)
class MetaData:
    """Head-level metadata. ``None`` means absent, ``""`` means present but empty."""

    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    og_type: str | None = None
    og_url: str | None = None
    twitter_card: str | None = None
    twitter_site: str | None = None
    twitter_creator: str | None = None
    canonical: str | None = None
    robots: str | None = None
    viewport: str | None = None
    charset: str | None = None
    language: str | None = None
    author: str | None = None
    generator: str | None = None


@dataclass(frozen=True)
class HeadingStructure:
    level: int  # 1..6
    text: str
    is_empty: bool


@dataclass(frozen=True)
class ImageAnalysis:
    src: str
    alt: str | None = None
    title: str | None = None
    width: int | None = None
    height: int | None = None
    loading: str | None = None  # lazy, eager
    has_alt: bool = False
    is_decorative: bool = False


@dataclass(frozen=True)
class LinkAnalysis:
    href: str
    text: str
    type: LinkType
    rel: str | None = None
    target: str | None = None
    is_nofollow: bool = False


@dataclass(frozen=True)
class ScriptAnalysis:
    src: str | None = None
    type: str | None = None
    is_async: bool = False
    defer: bool = False
    inline: bool = True
    size: int = 0


@dataclass(frozen=True)
class StylesheetAnalysis:
    href: str | None = None
    media: str | None = None
    inline: bool = False
    size: int = 0


@dataclass(frozen=True)
class StructuredDataItem:
    """One JSON-LD block found on the page."""

    type: str
    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class TechnicalDetails:
    """Structural facts collected from the parsed document."""

    doctype: str | None = None
    html_lang: str | None = None
    headings: tuple[HeadingStructure, ...] = ()
    images: tuple[ImageAnalysis, ...] = ()
    links: tuple[LinkAnalysis, ...] = ()
    scripts: tuple[ScriptAnalysis, ...] = ()
    stylesheets: tuple[StylesheetAnalysis, ...] = ()
    structured_data: tuple[StructuredDataItem, ...] = ()


@dataclass(frozen=True)
class SEOIssue:
    """Represents a single finding of the issue rule engine."""

    id: str
    category: IssueCategory
    severity: Severity
    title: str
    description: str
    recommendation: str
    impact: Impact
    difficulty: Difficulty
    priority: int | None = None
    resources: tuple[str, ...] = ()


def clamp_score(value: float) -> int:
    """Clamp a running score into the 0-100 range."""
    return int(max(0, min(100, value)))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class SEOScore:
    """Six category scores and their rounded mean."""

    overall: int
    technical: int
    on_page: int
    content: int
    performance: int
    accessibility: int
    security: int

    @classmethod
    def from_categories(
        cls,
        technical: int = 100,
        on_page: int = 100,
        content: int = 100,
        performance: int = 100,
        accessibility: int = 100,
        security: int = 100,
    ) -> "SEOScore":
        categories = [
            clamp_score(score)
            for score in (technical, on_page, content, performance, accessibility, security)
        ]
        return cls(round_half_up(sum(categories) / len(categories)), *categories)

    def categories(self) -> dict[str, int]:
        """Return the six category scores keyed by category value."""
        return {
            IssueCategory.TECHNICAL.value: self.technical,
            IssueCategory.ON_PAGE.value: self.on_page,
            IssueCategory.CONTENT.value: self.content,
            IssueCategory.PERFORMANCE.value: self.performance,
            IssueCategory.ACCESSIBILITY.value: self.accessibility,
            IssueCategory.SECURITY.value: self.security,
        }


@dataclass(frozen=True)
class AccessibilityIssue:
    type: str
    severity: str  # critical, serious, moderate, minor
    description: str
    recommendation: str
    element: str | None = None


@dataclass(frozen=True)
class AccessibilityMetrics:
    score: int
    issues: tuple[AccessibilityIssue, ...] = ()
    wcag_level: str = "A"  # A, AA, AAA


@dataclass(frozen=True)
class SecurityVulnerability:
    type: str
    severity: str  # critical, high, medium, low
    description: str
    recommendation: str


@dataclass(frozen=True)
class SecurityMetrics:
    """Security heuristics derived from the URL and the markup.

    Header-based flags stay ``None``: response headers are never observed.
    """

    score: int
    https: bool
    csp: bool
    vulnerabilities: tuple[SecurityVulnerability, ...] = ()
    hsts: bool | None = None
    xss_protection: bool | None = None
    frame_options: bool | None = None
    content_type_options: bool | None = None


@dataclass(frozen=True)
class PerformanceMetrics:
    """Synthetic performance snapshot; only the first three fields are deterministic."""

    load_time: int
    page_size: int
    requests: int
    first_contentful_paint: int | None = None
    largest_contentful_paint: int | None = None
    cumulative_layout_shift: float | None = None
    first_input_delay: int | None = None
    time_to_interactive: int | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the engine derives from one (html, url) pair."""

    url: str
    timestamp: datetime
    score: SEOScore
    issues: tuple[SEOIssue, ...]
    metadata: MetaData
    performance: PerformanceMetrics
    technical_details: TechnicalDetails
    accessibility: AccessibilityMetrics | None = None
    security: SecurityMetrics | None = None

    def to_audit_result(
        self,
        insights: list[str] | tuple[str, ...] = (),
        screenshot: str | None = None,
    ) -> "SEOAuditResult":
        """Merge externally produced insights and screenshot into the envelope."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return SEOAuditResult(**values, insights=tuple(insights), screenshot=screenshot)


@dataclass(frozen=True)
class SEOAuditResult(AnalysisResult):
    """The complete audit envelope returned for one page."""

    insights: tuple[str, ...] = ()
    screenshot: str | None = None  # data:image/png;base64,...


@dataclass
class FetchedPage:
    """Raw material supplied by the page fetcher."""

    url: str
    html: str
    screenshot: bytes | None = None
    links: list[str] = field(default_factory=list)
