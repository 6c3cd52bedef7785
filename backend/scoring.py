"""Section scorers for the on-page SEO audit.

Seven independent rule sections, each a pure function of RawData. Section
maximums add up to 100 (see SECTION_MAX_SCORES). Every check's points come
from band_points() except the proportional alt-text coverage check.
"""

import math

from models import Check, CheckStatus, RawData, Section

SECTION_MAX_SCORES = {
    "Meta Tags": 25,
    "Open Graph": 15,
    "Twitter Card": 10,
    "Headings": 15,
    "Images": 15,
    "Links": 10,
    "Technical": 10,
}

TITLE_LENGTH_RANGE = (30, 60)
DESCRIPTION_LENGTH_RANGE = (120, 160)
H1_LENGTH_RANGE = (20, 70)
INLINE_STYLE_LIMITS = (5, 20)
SCRIPT_LIMITS = (5, 15)
PREVIEW_CHARS = 80
H1_PREVIEW_CHARS = 60


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative scores used here."""
    return math.floor(value + 0.5)


def band_points(max_points: float, status: CheckStatus) -> float:
    """Default status -> points rule shared by every banded check."""
    if status == "pass":
        return max_points
    if status == "warning":
        return round_half_up(max_points * 0.5)
    return 0


def check(
    label: str,
    max_points: float,
    value: str,
    status: CheckStatus,
    recommendation: str = "",
    points: float | None = None,
) -> Check:
    if points is None:
        points = band_points(max_points, status)
    return Check(
        label=label,
        status=status,
        value=value,
        recommendation=recommendation,
        points=points,
        max_points=max_points,
    )


def section(name: str, checks: list[Check]) -> Section:
    return Section(
        name=name,
        score=sum(c.points for c in checks),
        max_score=SECTION_MAX_SCORES[name],
        checks=tuple(checks),
    )


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _length_check(
    label: str,
    max_points: float,
    text: str | None,
    bounds: tuple[int, int],
    noun: str,
    missing_hint: str,
) -> Check:
    low, high = bounds
    if text is None:
        return check(label, max_points, "N/A", "fail", missing_hint)
    length = len(text)
    if low <= length <= high:
        return check(label, max_points, f"{length} chars", "pass")
    if length > 0:
        return check(
            label, max_points, f"{length} chars", "warning", f"Keep {noun} between {low}-{high} characters"
        )
    return check(label, max_points, "Empty", "fail", f"Add meaningful text to your {noun}")


def _presence_check(
    label: str,
    max_points: float,
    value: str | None,
    missing_status: CheckStatus,
    recommendation: str,
    truncate: bool = False,
) -> Check:
    if value is None:
        return check(label, max_points, "Missing", missing_status, recommendation)
    return check(label, max_points, preview(value) if truncate else value, "pass")


def score_meta_tags(raw: RawData) -> Section:
    checks = [
        _presence_check("Title tag", 8, raw.title, "fail", "Add a <title> tag to your page"),
        _length_check("Title length", 4, raw.title, TITLE_LENGTH_RANGE, "title", "Add a title tag first"),
        _presence_check(
            "Meta description", 8, raw.meta_description, "fail", "Add a meta description tag", truncate=True
        ),
        _length_check(
            "Description length",
            3,
            raw.meta_description,
            DESCRIPTION_LENGTH_RANGE,
            "description",
            "Add a meta description first",
        ),
        _presence_check(
            "Canonical URL",
            2,
            raw.canonical,
            "warning",
            "Add a canonical link to avoid duplicate content issues",
        ),
    ]
    return section("Meta Tags", checks)


def score_open_graph(raw: RawData) -> Section:
    checks = [
        _presence_check("og:title", 4, raw.og_title, "fail", "Add og:title meta tag for social sharing"),
        _presence_check("og:description", 4, raw.og_description, "fail", "Add og:description meta tag", truncate=True),
        _presence_check("og:image", 5, raw.og_image, "fail", "Add og:image meta tag for social previews"),
        _presence_check("og:url", 2, raw.og_url, "warning", "Add og:url meta tag"),
    ]
    return section("Open Graph", checks)


def score_twitter_card(raw: RawData) -> Section:
    # Platforms fall back to the og:* values, so title/description only warn.
    checks = [
        _presence_check("twitter:card", 4, raw.twitter_card, "fail", "Add twitter:card meta tag"),
        _presence_check(
            "twitter:title", 3, raw.twitter_title, "warning", "Add twitter:title (falls back to og:title)"
        ),
        _presence_check(
            "twitter:description",
            3,
            raw.twitter_description,
            "warning",
            "Add twitter:description (falls back to og:description)",
            truncate=True,
        ),
    ]
    return section("Twitter Card", checks)


def has_skipped_level(levels: list[int]) -> bool:
    """True when a heading goes more than one level deeper than the previous one."""
    return any(current > previous + 1 for previous, current in zip(levels, levels[1:]))


def score_headings(raw: RawData) -> Section:
    h1s = [h for h in raw.headings if h.tag == "H1"]
    h2_count = sum(1 for h in raw.headings if h.tag == "H2")
    checks: list[Check] = []

    if len(h1s) == 1:
        checks.append(check("Single H1", 6, h1s[0].text[:H1_PREVIEW_CHARS], "pass"))
    elif not h1s:
        checks.append(check("Single H1", 6, "No H1 found", "fail", "Add exactly one H1 heading to your page"))
    else:
        checks.append(check("Single H1", 6, f"{len(h1s)} H1 tags found", "warning", "Use only one H1 per page"))

    if h1s:
        length = len(h1s[0].text)
        low, high = H1_LENGTH_RANGE
        if low <= length <= high:
            checks.append(check("H1 length", 3, f"{length} chars", "pass"))
        else:
            checks.append(
                check("H1 length", 3, f"{length} chars", "warning", f"Keep H1 between {low}-{high} characters")
            )
    else:
        checks.append(check("H1 length", 3, "N/A", "fail", "Add an H1 first"))

    if not raw.headings:
        checks.append(check("Heading hierarchy", 4, "No headings", "fail", "Add structured headings to your page"))
    elif has_skipped_level([h.level for h in raw.headings]):
        checks.append(
            check("Heading hierarchy", 4, "Levels skipped", "warning", "Don't skip heading levels (e.g., H1 -> H3)")
        )
    else:
        checks.append(check("Heading hierarchy", 4, "Proper sequence", "pass"))

    if h2_count:
        checks.append(check("Has H2 subheadings", 2, f"{h2_count} found", "pass"))
    else:
        checks.append(
            check("Has H2 subheadings", 2, "None", "warning", "Add H2 subheadings to structure your content")
        )

    return section("Headings", checks)


def score_images(raw: RawData) -> Section:
    total = len(raw.images)
    if total == 0:
        return section(
            "Images",
            [
                check("Images with alt text", 10, "No images found", "pass"),
                check("No empty alt attributes", 5, "No images found", "pass"),
            ],
        )

    with_alt = sum(1 for img in raw.images if img.alt)
    pct = round_half_up(with_alt / total * 100)
    if pct == 100:
        status = "pass"
    elif pct >= 50:
        status = "warning"
    else:
        status = "fail"
    # Points follow coverage, not the status band.
    coverage = check(
        "Images with alt text",
        10,
        f"{with_alt}/{total} ({pct}%)",
        status,
        "Add descriptive alt text to all images" if pct < 100 else "",
        points=round_half_up(with_alt / total * 10),
    )

    empty_alt = sum(1 for img in raw.images if img.alt == "")
    if empty_alt == 0:
        empty_check = check("No empty alt attributes", 5, "All good", "pass")
    else:
        empty_check = check(
            "No empty alt attributes",
            5,
            f"{empty_alt} empty",
            "warning",
            'Replace empty alt="" with descriptive text (unless decorative)',
        )
    return section("Images", [coverage, empty_check])


def score_links(raw: RawData) -> Section:
    placeholders = sum(1 for link in raw.links if link.href == "#")
    # A placeholder points nowhere, so it is not counted as an internal link.
    internal = sum(1 for link in raw.links if not link.is_external and link.href != "#")
    external = sum(1 for link in raw.links if link.is_external)

    checks = [
        check("Internal links", 4, f"{internal} found", "pass")
        if internal
        else check("Internal links", 4, "None", "fail", "Add internal links to improve navigation and SEO"),
        check("External links", 2, f"{external} found", "pass")
        if external
        else check("External links", 2, "None", "warning", "Consider adding relevant external links"),
        check("No placeholder links", 4, "All good", "pass")
        if placeholders == 0
        else check(
            "No placeholder links",
            4,
            f'{placeholders} href="#"',
            "warning",
            'Replace href="#" with actual URLs or use buttons',
        ),
    ]
    return section("Links", checks)


def _count_check(
    label: str,
    count: int,
    limits: tuple[int, int],
    warning_hint: str,
    fail_hint: str,
) -> Check:
    warn_above, fail_above = limits
    value = f"{count} found"
    if count <= warn_above:
        return check(label, 1.5, value, "pass")
    if count <= fail_above:
        return check(label, 1.5, value, "warning", warning_hint)
    return check(label, 1.5, value, "fail", fail_hint)


def score_technical(raw: RawData) -> Section:
    checks = [
        _presence_check(
            "Viewport meta",
            3,
            raw.viewport,
            "fail",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1">',
        ),
        _presence_check("Charset", 2, raw.charset, "warning", 'Add <meta charset="utf-8">'),
        _presence_check("HTML lang attribute", 2, raw.lang, "warning", "Add lang attribute to <html> tag"),
        _count_check(
            "Inline styles",
            raw.inline_style_count,
            INLINE_STYLE_LIMITS,
            "Reduce inline styles, use external CSS",
            "Too many inline styles, move to CSS files",
        ),
        _count_check(
            "Script count",
            raw.script_count,
            SCRIPT_LIMITS,
            "Consider reducing number of scripts",
            "Too many scripts, consider bundling",
        ),
    ]
    return section("Technical", checks)


# Display order of the report.
SECTION_SCORERS = (
    score_meta_tags,
    score_open_graph,
    score_twitter_card,
    score_headings,
    score_images,
    score_links,
    score_technical,
)
