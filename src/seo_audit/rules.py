"""Issue rule engine.

The rule set is a fixed, ordered table. Every rule is evaluated against the
same ``RuleContext`` and fires at most one ``SEOIssue``; the resulting list
is ordered by priority with rule order breaking ties.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Iterable

import structlog

from .analyzers.security_analyzer import is_https
from .models import (
    Difficulty,
    Impact,
    IssueCategory,
    MetaData,
    SEOIssue,
    Severity,
    TechnicalDetails,
)

logger = structlog.get_logger()

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160

UNPRIORITIZED = 999


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


@dataclass(frozen=True)
class RuleContext:
    """Facts the rules are evaluated against."""

    metadata: MetaData
    technical_details: TechnicalDetails
    page_url: str

    @property
    def has_title(self) -> bool:
        return _present(self.metadata.title)

    @property
    def title_length(self) -> int:
        return len(self.metadata.title or "")

    @property
    def has_description(self) -> bool:
        return _present(self.metadata.description)

    @property
    def description_length(self) -> int:
        return len(self.metadata.description or "")

    @cached_property
    def h1_count(self) -> int:
        return sum(1 for heading in self.technical_details.headings if heading.level == 1)

    @property
    def image_count(self) -> int:
        return len(self.technical_details.images)

    @cached_property
    def images_missing_alt(self) -> int:
        return sum(1 for image in self.technical_details.images if not image.has_alt)


@dataclass(frozen=True)
class Rule:
    """One row of the rule table.

    ``description`` is a ``str.format`` template receiving the context as ``ctx``.
    """

    id: str
    category: IssueCategory
    severity: Severity
    priority: int | None
    impact: Impact
    difficulty: Difficulty
    title: str
    description: str
    recommendation: str
    condition: Callable[[RuleContext], bool]

    def evaluate(self, context: RuleContext) -> SEOIssue | None:
        if not self.condition(context):
            return None

        return SEOIssue(
            id=self.id,
            category=self.category,
            severity=self.severity,
            title=self.title,
            description=self.description.format(ctx=context),
            recommendation=self.recommendation,
            impact=self.impact,
            difficulty=self.difficulty,
            priority=self.priority,
        )


RULES: tuple[Rule, ...] = (
    Rule(
        id="missing-title",
        category=IssueCategory.ON_PAGE,
        severity=Severity.CRITICAL,
        priority=1,
        impact=Impact.HIGH,
        difficulty=Difficulty.EASY,
        title="Missing Title Tag",
        description="The page is missing a title tag, which is crucial for SEO.",
        recommendation="Add a descriptive title tag between 30-60 characters.",
        condition=lambda ctx: not ctx.has_title,
    ),
    Rule(
        id="title-too-short",
        category=IssueCategory.ON_PAGE,
        severity=Severity.WARNING,
        priority=3,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Title Tag Too Short",
        description="Title tag is {ctx.title_length} characters. Optimal length is 30-60 characters.",
        recommendation="Expand the title to include more descriptive keywords.",
        condition=lambda ctx: ctx.has_title and ctx.title_length < TITLE_MIN_LENGTH,
    ),
    Rule(
        id="title-too-long",
        category=IssueCategory.ON_PAGE,
        severity=Severity.WARNING,
        priority=3,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Title Tag Too Long",
        description="Title tag is {ctx.title_length} characters. It may be truncated in search results.",
        recommendation="Shorten the title to 30-60 characters while keeping key information.",
        condition=lambda ctx: ctx.has_title and ctx.title_length > TITLE_MAX_LENGTH,
    ),
    Rule(
        id="missing-meta-description",
        category=IssueCategory.ON_PAGE,
        severity=Severity.CRITICAL,
        priority=2,
        impact=Impact.HIGH,
        difficulty=Difficulty.EASY,
        title="Missing Meta Description",
        description="The page is missing a meta description tag.",
        recommendation="Add a compelling meta description between 120-160 characters.",
        condition=lambda ctx: not ctx.has_description,
    ),
    Rule(
        id="meta-description-too-short",
        category=IssueCategory.ON_PAGE,
        severity=Severity.WARNING,
        priority=4,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Meta Description Too Short",
        description=(
            "Meta description is {ctx.description_length} characters. "
            "Optimal length is 120-160 characters."
        ),
        recommendation="Expand the meta description to provide more context.",
        condition=lambda ctx: ctx.has_description and ctx.description_length < DESCRIPTION_MIN_LENGTH,
    ),
    Rule(
        id="meta-description-too-long",
        category=IssueCategory.ON_PAGE,
        severity=Severity.WARNING,
        priority=4,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Meta Description Too Long",
        description=(
            "Meta description is {ctx.description_length} characters. "
            "It may be truncated in search results."
        ),
        recommendation="Shorten the meta description to 120-160 characters.",
        condition=lambda ctx: ctx.has_description and ctx.description_length > DESCRIPTION_MAX_LENGTH,
    ),
    Rule(
        id="missing-h1",
        category=IssueCategory.ON_PAGE,
        severity=Severity.CRITICAL,
        priority=2,
        impact=Impact.HIGH,
        difficulty=Difficulty.EASY,
        title="Missing H1 Tag",
        description="The page is missing an H1 tag, which is important for content hierarchy.",
        recommendation="Add a single, descriptive H1 tag that summarizes the page content.",
        condition=lambda ctx: ctx.h1_count == 0,
    ),
    Rule(
        id="multiple-h1",
        category=IssueCategory.ON_PAGE,
        severity=Severity.WARNING,
        priority=5,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Multiple H1 Tags",
        description="Found {ctx.h1_count} H1 tags. Best practice is to use only one H1 per page.",
        recommendation="Use only one H1 tag and convert others to H2 or lower-level headings.",
        condition=lambda ctx: ctx.h1_count > 1,
    ),
    Rule(
        id="images-missing-alt",
        category=IssueCategory.ACCESSIBILITY,
        severity=Severity.WARNING,
        priority=6,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Images Missing Alt Text",
        description="{ctx.images_missing_alt} out of {ctx.image_count} images are missing alt text.",
        recommendation="Add descriptive alt text to all images for accessibility and SEO.",
        condition=lambda ctx: ctx.images_missing_alt > 0,
    ),
    Rule(
        id="not-https",
        category=IssueCategory.SECURITY,
        severity=Severity.CRITICAL,
        priority=1,
        impact=Impact.HIGH,
        difficulty=Difficulty.MEDIUM,
        title="Not Using HTTPS",
        description="The website is not using HTTPS, which affects security and SEO rankings.",
        recommendation="Implement SSL certificate and redirect all HTTP traffic to HTTPS.",
        condition=lambda ctx: not is_https(ctx.page_url),
    ),
    Rule(
        id="missing-viewport",
        category=IssueCategory.TECHNICAL,
        severity=Severity.WARNING,
        priority=7,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Missing Viewport Meta Tag",
        description="The page is missing a viewport meta tag for mobile responsiveness.",
        recommendation=(
            'Add <meta name="viewport" content="width=device-width, initial-scale=1"> to the head.'
        ),
        condition=lambda ctx: not ctx.metadata.viewport,
    ),
    Rule(
        id="missing-open-graph",
        category=IssueCategory.ON_PAGE,
        severity=Severity.INFO,
        priority=8,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.EASY,
        title="Missing Open Graph Tags",
        description="Missing Open Graph tags for better social media sharing.",
        recommendation="Add og:title, og:description, and og:image meta tags.",
        condition=lambda ctx: not ctx.metadata.og_title or not ctx.metadata.og_description,
    ),
    Rule(
        id="missing-structured-data",
        category=IssueCategory.TECHNICAL,
        severity=Severity.INFO,
        priority=9,
        impact=Impact.MEDIUM,
        difficulty=Difficulty.MEDIUM,
        title="Missing Structured Data",
        description="No structured data (JSON-LD) found on the page.",
        recommendation=(
            "Add relevant structured data markup to help search engines understand your content."
        ),
        condition=lambda ctx: len(ctx.technical_details.structured_data) == 0,
    ),
    Rule(
        id="missing-canonical",
        category=IssueCategory.TECHNICAL,
        severity=Severity.INFO,
        priority=10,
        impact=Impact.LOW,
        difficulty=Difficulty.EASY,
        title="Missing Canonical URL",
        description="The page is missing a canonical URL tag.",
        recommendation="Add a canonical URL to prevent duplicate content issues.",
        condition=lambda ctx: not ctx.metadata.canonical,
    ),
)


def sort_issues(issues: Iterable[SEOIssue]) -> list[SEOIssue]:
    """Order issues by ascending priority; unprioritized issues go last, ties keep their order."""
    return sorted(
        issues,
        key=lambda issue: issue.priority if issue.priority is not None else UNPRIORITIZED,
    )


def evaluate_rules(
    metadata: MetaData,
    technical_details: TechnicalDetails,
    page_url: str,
    rules: Iterable[Rule] = RULES,
) -> list[SEOIssue]:
    """Run every rule and return the sorted issue list."""
    context = RuleContext(metadata=metadata, technical_details=technical_details, page_url=page_url)

    issues = []
    for rule in rules:
        issue = rule.evaluate(context)
        if issue is not None:
            issues.append(issue)

    logger.debug("Rules evaluated", url=page_url, fired=[issue.id for issue in issues])
    return sort_issues(issues)
