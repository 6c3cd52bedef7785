"""Audit aggregator: HTML -> RawData -> seven sections -> AuditResult."""

import logging
import time
from datetime import datetime, timezone

from extractor import parse_raw_data
from models import AuditResult, RawData, Section
from scoring import SECTION_SCORERS, round_half_up
from scraper import fetch_page

logger = logging.getLogger(__name__)


def score_sections(raw: RawData) -> list[Section]:
    return [scorer(raw) for scorer in SECTION_SCORERS]


def analyze(html: str, page_url: str) -> AuditResult:
    """
    Score one page. Pure apart from the capture timestamp: the same
    (html, page_url) always yields the same sections and overall score.
    """
    raw = parse_raw_data(html, page_url)
    sections = score_sections(raw)
    overall = round_half_up(sum(s.score for s in sections))
    return AuditResult(
        url=page_url,
        analyzed_at=datetime.now(timezone.utc),
        overall_score=overall,
        sections=tuple(sections),
        raw_data=raw,
    )


def audit_url(url: str) -> AuditResult:
    """
    Pipeline: normalize + fetch the page -> analyze.
    Raises InvalidUrlError / FetchError before the engine runs.
    """
    page = fetch_page(url)
    started = time.perf_counter()
    result = analyze(page.html, page.final_url)
    logger.info(
        "Audited %s: score=%s in %.1fms",
        result.url,
        result.overall_score,
        (time.perf_counter() - started) * 1000,
    )
    return result
