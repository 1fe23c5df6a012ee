"""Configuration models and YAML loader for the gig scraper."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

JobTypeFilter = Literal["fixed", "hourly", "all"]
ExperienceFilter = Literal["entry", "intermediate", "expert", "all"]
SortOrder = Literal["relevance", "newest", "budget", "proposals"]
OutputFormat = Literal["csv", "json", "both"]


class SearchFilters(BaseModel):
    """Optional search criteria shared by every platform adapter.

    Frozen: adapters read it, nobody mutates it after construction. Serialized
    with camelCase keys like the result records; snake_case names still load.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    keyword: str | None = None
    category: str | None = None
    tags: tuple[str, ...] = ()
    min_budget: int | None = Field(default=None, ge=0)
    max_budget: int | None = Field(default=None, ge=0)
    job_type: JobTypeFilter = "all"
    experience_level: ExperienceFilter = "all"
    location: str | None = None
    sort_by: SortOrder = "relevance"

    @field_validator("keyword", "category", "location")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip() for t in v if t.strip())

    @model_validator(mode="after")
    def budget_range_ordered(self) -> "SearchFilters":
        if (
            self.min_budget is not None
            and self.max_budget is not None
            and self.min_budget > self.max_budget
        ):
            msg = "min_budget must not exceed max_budget"
            raise ValueError(msg)
        return self


class AdapterConfig(BaseModel):
    """Per-adapter settings. Changing them means building a new adapter."""

    model_config = ConfigDict(frozen=True)

    timeout_ms: int = Field(default=60000, ge=1000)
    max_jobs: int = Field(default=20, ge=1)
    delay_between_requests: float = Field(default=2.0, ge=0.0)
    retry_attempts: int = Field(default=3, ge=1)
    headless: bool = True
    screenshot_dir: str = "debug"


class ScraperSettings(BaseModel):
    """Top-level run settings loaded from YAML."""

    headless: bool = True
    timeout_ms: int = Field(default=60000, ge=1000)
    max_jobs: int = Field(default=20, ge=1)
    delay_between_requests: float = Field(default=2.0, ge=0.0)
    retry_attempts: int = Field(default=3, ge=1)
    screenshot_dir: str = "debug"
    output_format: OutputFormat = "csv"
    output_dir: str = "output"
    platforms: list[str] = Field(default_factory=list)
    search_filters: SearchFilters = Field(default_factory=SearchFilters)

    @field_validator("platforms")
    @classmethod
    def normalize_platforms(cls, v: list[str]) -> list[str]:
        return [p.lower().strip() for p in v if p.strip()]

    def to_adapter_config(self) -> AdapterConfig:
        """Project the subset of settings every adapter is built from."""
        return AdapterConfig(
            timeout_ms=self.timeout_ms,
            max_jobs=self.max_jobs,
            delay_between_requests=self.delay_between_requests,
            retry_attempts=self.retry_attempts,
            headless=self.headless,
            screenshot_dir=self.screenshot_dir,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ScraperSettings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
