"""Read-only views over a finished audit for the dashboard.

Score labels, colour tones, per-section summaries and the social share
preview card. Nothing here changes the stored result.
"""

from urllib.parse import urlparse

from models import AuditResult, RawData, Section
from scoring import round_half_up

SCORE_LABELS = (
    (90, "Excellent"),
    (80, "Good"),
    (60, "Needs Work"),
    (40, "Poor"),
)


def score_label(score: float) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return "Critical"


def score_tone(score: float, max_score: float = 100) -> str:
    """success / warning / destructive by percentage of the maximum."""
    pct = score / max_score * 100 if max_score else 0
    if pct >= 80:
        return "success"
    if pct >= 50:
        return "warning"
    return "destructive"


def section_percent(section: Section) -> int:
    if not section.max_score:
        return 0
    return round_half_up(section.score / section.max_score * 100)


def _domain(url: str | None) -> str:
    if not url:
        return ""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def social_preview(raw: RawData, url: str) -> dict:
    """The card a social platform would render, with the usual fallbacks."""
    return {
        "title": raw.og_title or raw.title or "",
        "description": raw.og_description or raw.meta_description or "",
        "image": raw.og_image,
        "domain": _domain(raw.og_url) or _domain(url),
    }


def summarize_section(section: Section) -> dict:
    counts = {"pass": 0, "warning": 0, "fail": 0}
    for c in section.checks:
        counts[c.status] += 1
    return {
        "name": section.name,
        "score": section.score,
        "max_score": section.max_score,
        "percent": section_percent(section),
        "tone": score_tone(section.score, section.max_score),
        "passed": counts["pass"],
        "warnings": counts["warning"],
        "failed": counts["fail"],
    }


def build_report(result: AuditResult) -> dict:
    return {
        "url": result.url,
        "analyzed_at": result.analyzed_at.isoformat(),
        "overall_score": result.overall_score,
        "label": score_label(result.overall_score),
        "tone": score_tone(result.overall_score),
        "sections": [summarize_section(s) for s in result.sections],
        "social_preview": social_preview(result.raw_data, result.url),
    }
