"""
Tests for the audit aggregator.

Covers the whole HTML -> AuditResult pipeline and the properties that must
hold for any input: fixed section order, maxima summing to 100, bounded
scores and repeatable results.
"""
import pytest

import auditor
from auditor import analyze, audit_url
from scoring import round_half_up
from scraper import FetchedPage, FetchError

PAGE_URL = "https://example.com/"

SECTION_ORDER = ["Meta Tags", "Open Graph", "Twitter Card", "Headings", "Images", "Links", "Technical"]

ODD_PAGES = [
    "",
    "<html>",
    "<h1></h1><h1></h1><h4>x</h4>",
    '<img src=""><img src="a" alt=""><a href="#">#</a><a href="mailto:me@example.com">mail</a>',
    "<title>" + "x" * 500 + "</title>" + '<div style="a">' * 40 + "<script>" * 40,
    '<meta name="description" content="">' + "<h1>" + "long " * 40 + "</h1>",
]


class TestAnalyze:
    """End-to-end scoring of a page."""

    def test_well_formed_page_scores_100(self, good_page):
        """A page that satisfies every rule gets the maximum."""
        result = analyze(good_page, PAGE_URL)
        assert result.overall_score == 100
        assert all(s.score == s.max_score for s in result.sections)

    def test_bare_page(self, bare_page):
        """Bare markup keeps only the lenient points."""
        result = analyze(bare_page, PAGE_URL)
        scores = {s.name: s.score for s in result.sections}
        assert scores == {
            "Meta Tags": 1,
            "Open Graph": 1,
            "Twitter Card": 4,
            "Headings": 1,
            "Images": 15,
            "Links": 5,
            "Technical": 5,
        }
        assert result.overall_score == 32

    def test_section_order(self, bare_page):
        """Sections come back in display order."""
        assert [s.name for s in analyze(bare_page, PAGE_URL).sections] == SECTION_ORDER

    def test_result_carries_raw_data_and_url(self, good_page):
        result = analyze(good_page, PAGE_URL)
        assert result.url == PAGE_URL
        assert result.raw_data.og_title == "Acme Widgets"
        assert result.analyzed_at.tzinfo is not None

    def test_overall_rounds_half_up(self):
        """Fractional section sums round to the nearest integer, .5 up."""
        html = '<html lang="en">' + "<script>" * 10
        result = analyze(html, PAGE_URL)
        total = sum(s.score for s in result.sections)
        assert total == 32.5
        assert result.overall_score == 33

    def test_two_h1_costs_three_points(self, good_page):
        """A second H1 only lowers the Single H1 check."""
        html = good_page.replace("<h2>Our catalogue</h2>", "<h1>Another Heading For The Page</h1><h2>Our catalogue</h2>")
        headings = analyze(html, PAGE_URL).sections[3]
        assert headings.name == "Headings"
        assert headings.score == 12

    def test_serializes_with_camel_case_keys(self, good_page):
        """The stored/returned shape uses camelCase field names."""
        data = analyze(good_page, PAGE_URL).to_json_dict()
        assert set(data) == {"url", "analyzedAt", "overallScore", "sections", "rawData"}
        assert data["sections"][0]["maxScore"] == 25
        assert data["sections"][0]["checks"][0]["maxPoints"] == 8
        assert data["rawData"]["metaDescription"].startswith("Acme Widgets builds")
        assert data["rawData"]["links"][1] == {"href": "https://partner.example.org/", "isExternal": True}
        assert data["rawData"]["inlineStyleCount"] == 0


class TestInvariants:
    """Properties that hold for any input."""

    @pytest.mark.parametrize("html", ODD_PAGES)
    def test_max_scores_sum_to_100(self, html):
        assert sum(s.max_score for s in analyze(html, PAGE_URL).sections) == 100

    @pytest.mark.parametrize("html", ODD_PAGES)
    def test_scores_are_bounded(self, html):
        result = analyze(html, PAGE_URL)
        assert 0 <= result.overall_score <= 100
        for section in result.sections:
            assert 0 <= section.score <= section.max_score
            for c in section.checks:
                assert 0 <= c.points <= c.max_points

    @pytest.mark.parametrize("html", ODD_PAGES)
    def test_overall_is_rounded_sum(self, html):
        result = analyze(html, PAGE_URL)
        total = sum(s.score for s in result.sections)
        assert result.overall_score == round_half_up(total)

    @pytest.mark.parametrize("html", ODD_PAGES)
    def test_idempotent(self, html):
        """Same input, same sections and score; only the timestamp may move."""
        first = analyze(html, PAGE_URL)
        second = analyze(html, PAGE_URL)
        assert first.sections == second.sections
        assert first.overall_score == second.overall_score
        assert first.raw_data == second.raw_data

    def test_page_without_images_gets_full_image_score(self, good_page):
        html = good_page.replace('<img src="/a.png" alt="Brass widget">', "").replace(
            '<img src="/b.png" alt="Steel widget">', ""
        )
        images = analyze(html, PAGE_URL).sections[4]
        assert images.name == "Images"
        assert images.score == 15

    def test_empty_alt_uses_default_warning_band(self):
        """One described image and one alt="" image: 5 for coverage plus 3 of 5."""
        images = analyze('<img src="a" alt="A"><img src="b" alt="">', PAGE_URL).sections[4]
        empty = next(c for c in images.checks if c.label == "No empty alt attributes")
        assert empty.status == "warning"
        assert empty.points == 3
        assert images.score == 8

    def test_results_are_immutable(self, bare_page):
        result = analyze(bare_page, PAGE_URL)
        with pytest.raises(Exception):
            result.overall_score = 99


class TestAuditUrl:
    """Fetch + analyze pipeline."""

    def test_uses_final_url(self, monkeypatch, good_page):
        """Links are classified against the page the fetch ended on."""
        monkeypatch.setattr(
            auditor,
            "fetch_page",
            lambda url: FetchedPage(
                requested_url="https://example.com",
                final_url="https://partner.example.org/",
                status_code=200,
                html=good_page,
            ),
        )
        result = audit_url("example.com")
        assert result.url == "https://partner.example.org/"
        assert [link.is_external for link in result.raw_data.links] == [False, False]

    def test_fetch_failure_propagates(self, monkeypatch):
        """The engine never runs when the fetch fails."""

        def failing(url):
            raise FetchError("404 Not Found", status_code=404)

        monkeypatch.setattr(auditor, "fetch_page", failing)
        monkeypatch.setattr(auditor, "analyze", lambda *a: pytest.fail("analyze must not run"))
        with pytest.raises(FetchError):
            audit_url("https://example.com/missing")
