"""Aggregate statistics over a batch of scrape results. Pure, no I/O."""

from collections import Counter

from gigscraper.core.schemas import (
    PlatformStats,
    ScrapeResult,
    ScrapeStatistics,
    SkillCount,
)

TOP_SKILLS_LIMIT = 10


def top_skills(results: list[ScrapeResult], limit: int = TOP_SKILLS_LIMIT) -> list[SkillCount]:
    """Most frequent skills, descending; ties keep first-encountered order."""
    counts: Counter[str] = Counter()
    for result in results:
        for job in result.jobs:
            counts.update(job.skills)
    # sorted() is stable and Counter preserves insertion order
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [SkillCount(skill=skill, count=count) for skill, count in ranked[:limit]]


def get_statistics(results: list[ScrapeResult]) -> ScrapeStatistics:
    successful = sum(1 for r in results if r.success)
    return ScrapeStatistics(
        total_jobs=sum(len(r.jobs) for r in results),
        total_platforms=len(results),
        successful_platforms=successful,
        failed_platforms=len(results) - successful,
        platform_stats=[
            PlatformStats(
                platform=r.platform,
                jobs=len(r.jobs),
                success=r.success,
                errors=len(r.errors),
            )
            for r in results
        ],
        top_skills=top_skills(results),
    )
