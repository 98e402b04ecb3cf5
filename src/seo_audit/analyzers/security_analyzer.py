"""Transport and policy heuristics for the audited page."""

from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup

from ..models import SecurityMetrics, SecurityVulnerability, clamp_score
from .base import BaseAnalyzer

logger = structlog.get_logger()

INSECURE_PROTOCOL_PENALTY = 30
MISSING_CSP_PENALTY = 15


def is_https(url: str) -> bool:
    """Whether the URL uses the https scheme."""
    return urlparse(url).scheme.lower() == "https"


class SecurityAnalyzer(BaseAnalyzer):
    """Scores protocol security and the presence of a CSP meta tag.

    Only the markup is visible here, so CSP delivered as a response header
    is not observed and the CSP flag is a meta-tag heuristic.
    """

    def __init__(self, page_url: str):
        self.page_url = page_url

    def analyze(self, document: BeautifulSoup) -> SecurityMetrics:
        score = 100
        vulnerabilities: list[SecurityVulnerability] = []

        https = is_https(self.page_url)
        if not https:
            vulnerabilities.append(
                SecurityVulnerability(
                    type="insecure-protocol",
                    severity="critical",
                    description="Website not using HTTPS",
                    recommendation="Implement SSL/TLS certificate and redirect HTTP to HTTPS",
                )
            )
            score -= INSECURE_PROTOCOL_PENALTY

        csp = self.has_csp_meta(document)
        if not csp:
            vulnerabilities.append(
                SecurityVulnerability(
                    type="missing-csp",
                    severity="medium",
                    description="Missing Content Security Policy",
                    recommendation="Implement CSP headers to prevent XSS attacks",
                )
            )
            score -= MISSING_CSP_PENALTY

        score = clamp_score(score)
        logger.debug("Security analysis complete", score=score, https=https, csp=csp)

        return SecurityMetrics(
            score=score,
            https=https,
            csp=csp,
            vulnerabilities=tuple(vulnerabilities),
        )

    def has_csp_meta(self, document: BeautifulSoup) -> bool:
        tag = document.find(
            "meta",
            attrs={
                "http-equiv": lambda v: v is not None and v.lower() == "content-security-policy"
            },
        )
        return tag is not None
