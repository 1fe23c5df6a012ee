"""Tests for aggregate run statistics."""

from gigscraper.core.schemas import Listing, ScrapeResult
from gigscraper.pipeline.stats import get_statistics, top_skills


def _result(platform: str, skill_sets: list[tuple[str, ...]], *, success: bool = True) -> ScrapeResult:
    jobs = [Listing(title=f"{platform} gig {i}", skills=s) for i, s in enumerate(skill_sets)]
    return ScrapeResult(jobs=jobs, platform=platform, success=success)


class TestTopSkills:
    def test_descending_counts(self) -> None:
        results = [
            _result("a", [("Python", "AWS"), ("Python",)]),
            _result("b", [("AWS", "Python")]),
        ]
        top = top_skills(results)
        assert [(s.skill, s.count) for s in top] == [("Python", 3), ("AWS", 2)]

    def test_ties_keep_first_seen_order(self) -> None:
        results = [_result("a", [("Figma", "SEO", "Excel")])]
        assert [s.skill for s in top_skills(results)] == ["Figma", "SEO", "Excel"]

    def test_limit(self) -> None:
        skills = tuple(f"skill{i}" for i in range(15))
        assert len(top_skills([_result("a", [skills])])) == 10
        assert len(top_skills([_result("a", [skills])], limit=3)) == 3

    def test_empty(self) -> None:
        assert top_skills([]) == []


class TestGetStatistics:
    def test_counts(self) -> None:
        results = [
            _result("a", [("Python",), ("Django",)]),
            ScrapeResult(platform="b", success=False, errors=["x", "y"]),
        ]
        stats = get_statistics(results)
        assert stats.total_jobs == 2
        assert stats.total_platforms == 2
        assert stats.successful_platforms == 1
        assert stats.failed_platforms == 1
        assert [(p.platform, p.jobs, p.success, p.errors) for p in stats.platform_stats] == [
            ("a", 2, True, 0),
            ("b", 0, False, 2),
        ]
        assert [s.skill for s in stats.top_skills] == ["Python", "Django"]

    def test_empty_batch(self) -> None:
        stats = get_statistics([])
        assert stats.total_jobs == 0
        assert stats.platform_stats == []
