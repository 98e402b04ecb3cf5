"""Score aggregation over rule-engine issues."""

from typing import Iterable

from .models import IssueCategory, SEOIssue, SEOScore, Severity

SEVERITY_PENALTIES = {
    Severity.CRITICAL: 20,
    Severity.WARNING: 10,
    Severity.INFO: 5,
}

# IssueCategory -> SEOScore.from_categories keyword
CATEGORY_FIELDS = {
    IssueCategory.TECHNICAL: "technical",
    IssueCategory.ON_PAGE: "on_page",
    IssueCategory.CONTENT: "content",
    IssueCategory.PERFORMANCE: "performance",
    IssueCategory.ACCESSIBILITY: "accessibility",
    IssueCategory.SECURITY: "security",
}


def calculate_score(issues: Iterable[SEOIssue]) -> SEOScore:
    """Fold issue penalties into the six category scores.

    Each category starts at 100 and never drops below 0. The accessibility
    and security categories only see issues from the rule table, not the
    heuristic sub-scores.
    """
    scores = {name: 100 for name in CATEGORY_FIELDS.values()}

    for issue in issues:
        name = CATEGORY_FIELDS[IssueCategory(issue.category)]
        scores[name] = max(0, scores[name] - SEVERITY_PENALTIES[Severity(issue.severity)])

    return SEOScore.from_categories(**scores)
