"""Core data models for the gig scraper.

Everything here is frozen. Attribute names are snake_case; serialized names
(CSV header, JSON keys) are camelCase via the alias generator.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from gigscraper.core.config import SearchFilters

UNTITLED = "Untitled Job"
NO_DESCRIPTION = "No description available"
RECENTLY_POSTED = "Recently posted"
NO_CLIENT_INFO = "Client information not available"
NOT_SPECIFIED = "Not specified"

DESCRIPTION_MAX_CHARS = 500


class JobType(str, Enum):
    FIXED_PRICE = "Fixed Price"
    HOURLY = "Hourly"
    NOT_SPECIFIED = "Not specified"


class ExperienceLevel(str, Enum):
    ENTRY_LEVEL = "Entry Level"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"
    NOT_SPECIFIED = "Not specified"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Listing(_Record):
    """One scraped job/project posting.

    Frozen. The extractor never sets ``platform``; the adapter stamps it with
    ``model_copy`` once extraction has succeeded.
    """

    title: str = UNTITLED
    description: str = NO_DESCRIPTION
    budget: str = ""
    hourly_rate: str = ""
    skills: tuple[str, ...] = ()
    posted_time: str = RECENTLY_POSTED
    client_info: str = NO_CLIENT_INFO
    job_url: str = ""
    job_type: JobType = JobType.NOT_SPECIFIED
    duration: str = NOT_SPECIFIED
    experience_level: ExperienceLevel = ExperienceLevel.NOT_SPECIFIED
    platform: str = ""

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        return v.strip() or UNTITLED

    @field_validator("description")
    @classmethod
    def truncate_description(cls, v: str) -> str:
        return v[:DESCRIPTION_MAX_CHARS] if v else NO_DESCRIPTION

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        # dict keeps first-seen order
        return tuple(dict.fromkeys(s for s in v if s))


class ScrapeResult(_Record):
    """Outcome of one platform run."""

    jobs: list[Listing] = Field(default_factory=list)
    platform: str
    search_query: str = "no filters"
    timestamp: datetime = Field(default_factory=datetime.now)
    success: bool
    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_found(self) -> int:
        return len(self.jobs)


class PlatformSummary(_Record):
    platform: str
    jobs: int
    success: bool


class CombinedSummary(_Record):
    total_jobs: int
    platforms: list[PlatformSummary]
    search_filters: SearchFilters
    timestamp: datetime = Field(default_factory=datetime.now)


class CombinedResults(_Record):
    """Envelope written for multi-platform runs: summary plus every result."""

    summary: CombinedSummary
    results: list[ScrapeResult]

    @classmethod
    def from_results(
        cls, results: list[ScrapeResult], filters: SearchFilters,
    ) -> "CombinedResults":
        summary = CombinedSummary(
            total_jobs=sum(len(r.jobs) for r in results),
            platforms=[
                PlatformSummary(platform=r.platform, jobs=len(r.jobs), success=r.success)
                for r in results
            ],
            search_filters=filters,
        )
        return cls(summary=summary, results=results)


class PlatformStats(_Record):
    platform: str
    jobs: int
    success: bool
    errors: int


class SkillCount(_Record):
    skill: str
    count: int


class ScrapeStatistics(_Record):
    """Aggregate view over a batch of results."""

    total_jobs: int
    total_platforms: int
    successful_platforms: int
    failed_platforms: int
    platform_stats: list[PlatformStats]
    top_skills: list[SkillCount]
    timestamp: datetime = Field(default_factory=datetime.now)
