"""Tests for the problem page scraper"""
from coach.models import PageSnapshot
from coach.scraper import PageScraper, first_match, is_constraint, is_example, selector_probe


class BrokenPage(PageSnapshot):
    @property
    def soup(self):
        raise RuntimeError("DOM unavailable")


class TestPageScraper:
    """Selector cascades and harvesting heuristics"""

    def test_extracts_two_sum(self, two_sum_page):
        context = PageScraper().extract(two_sum_page)

        assert context.title == "1. Two Sum"
        assert context.description.startswith("Given an array of integers nums")
        assert context.source_url == two_sum_page.url

    def test_examples_capped_to_three(self, two_sum_page):
        context = PageScraper().extract(two_sum_page)

        assert len(context.examples) == 3
        assert context.examples[0].startswith("Example 1:")
        assert all("Input:" in e for e in context.examples)

    def test_constraints_are_sanitized(self, two_sum_page):
        context = PageScraper().extract(two_sum_page)

        assert context.constraints == [
            "2 &lt;= nums.length &lt;= 10^4",
            "-10^9 &lt;= nums[i] &lt;= 10^9",
        ]

    def test_no_matching_selectors(self):
        page = PageSnapshot("<html><body><div>nothing to see</div></body></html>", url="about:blank")
        context = PageScraper().extract(page)

        assert context.title == "Unknown Problem"
        assert context.description == ""
        assert context.examples == []
        assert context.constraints == []

    def test_falls_through_empty_title_candidates(self):
        html = '<div data-cy="question-title">   </div><h1>Valid Parentheses</h1>'
        context = PageScraper().extract(PageSnapshot(html))
        assert context.title == "Valid Parentheses"

    def test_title_is_escaped(self):
        html = "<h1>&lt;script&gt;alert('x')&lt;/script&gt;</h1>"
        context = PageScraper().extract(PageSnapshot(html))
        assert "<" not in context.title
        assert "&lt;script&gt;" in context.title
        assert "&#x27;" in context.title

    def test_extraction_failure_yields_placeholder(self):
        context = PageScraper().extract(BrokenPage("", url="https://example.com/p"))

        assert context.title == "Error extracting problem"
        assert context.description == "Could not extract problem details"
        assert context.examples == []
        assert context.source_url == "https://example.com/p"

    def test_extraction_is_idempotent(self, two_sum_page):
        scraper = PageScraper()
        first = scraper.extract(two_sum_page)
        second = scraper.extract(two_sum_page)

        assert first.model_dump(exclude={"captured_at"}) == second.model_dump(exclude={"captured_at"})


class TestHeuristics:
    """Individual probes and filters"""

    def test_first_match_order(self, two_sum_page):
        probes = [selector_probe(".missing"), selector_probe("h1"), selector_probe('[data-cy="question-title"]')]
        assert first_match(probes, two_sum_page.soup) == "1. Two Sum"

    def test_first_match_none(self, two_sum_page):
        assert first_match([selector_probe(".missing")], two_sum_page.soup) is None

    def test_is_example(self):
        assert is_example("Input: s = \"()\"")
        assert not is_example("Input:")
        assert not is_example("Output: " + "1" * 500)
        assert not is_example("just some preformatted text")

    def test_is_constraint(self):
        assert is_constraint("1 ≤ n ≤ 100")
        assert is_constraint("s consists of parentheses only, length at most a few")
        assert is_constraint("0 and 9")
        assert not is_constraint("Example 1: 2 <= 3")
        assert not is_constraint("1 <= n" + " " * 200)
        assert not is_constraint("Only one valid answer exists.")
