"""Tests for CSV/JSON serialization and the result store."""

import csv
import io
import json
from datetime import date
from pathlib import Path

import pytest

from gigscraper.core.config import SearchFilters
from gigscraper.core.schemas import JobType, Listing, ScrapeResult
from gigscraper.core.storage import (
    CSV_COLUMNS,
    ResultStore,
    generate_filename,
    listing_to_row,
    listings_to_csv,
    listings_to_json,
)

TODAY = date.today().isoformat()


def _listing(**overrides: object) -> Listing:
    defaults: dict[str, object] = {
        "title": "Build a Django REST API",
        "description": "Need an API for a mobile app.",
        "budget": "₹600 - ₹1,500 INR",
        "skills": ("Python", "Django"),
        "job_url": "https://www.freelancer.in/projects/api-1",
        "job_type": JobType.FIXED_PRICE,
        "platform": "freelancer",
    }
    defaults.update(overrides)
    return Listing(**defaults)  # type: ignore[arg-type]


def _result(platform: str = "freelancer", jobs: list[Listing] | None = None) -> ScrapeResult:
    jobs = [_listing(platform=platform)] if jobs is None else jobs
    return ScrapeResult(jobs=jobs, platform=platform, success=True)


# ---------------------------------------------------------------------------
# TestFilenames
# ---------------------------------------------------------------------------


class TestGenerateFilename:
    def test_pattern(self) -> None:
        name = generate_filename("freelancer", "csv", day=date(2024, 1, 15))
        assert name == "jobs_freelancer_2024-01-15.csv"

    def test_prefix(self) -> None:
        name = generate_filename("freelancer_other", "json", prefix="results_combined", day=date(2024, 1, 15))
        assert name == "results_combined_freelancer_other_2024-01-15.json"

    def test_defaults_to_today(self) -> None:
        assert generate_filename("freelancer", "json") == f"jobs_freelancer_{TODAY}.json"


# ---------------------------------------------------------------------------
# TestCsv
# ---------------------------------------------------------------------------


class TestCsv:
    def test_header_row(self) -> None:
        text = listings_to_csv([])
        assert text == ",".join(CSV_COLUMNS) + "\n"

    def test_row_values(self) -> None:
        row = listing_to_row(_listing())
        assert row["skills"] == "Python; Django"
        assert row["jobType"] == "Fixed Price"
        assert row["experienceLevel"] == "Not specified"
        assert row["hourlyRate"] == ""
        assert list(row) == list(CSV_COLUMNS)

    def test_special_characters_round_trip(self) -> None:
        tricky = 'Logo, "modern" style\nsecond line'
        text = listings_to_csv([_listing(description=tricky)])

        rows = list(csv.DictReader(io.StringIO(text)))

        assert len(rows) == 1
        assert rows[0]["description"] == tricky
        assert rows[0]["title"] == "Build a Django REST API"
        assert rows[0]["budget"] == "₹600 - ₹1,500 INR"

    def test_plain_fields_unquoted(self) -> None:
        text = listings_to_csv([_listing(description="plain")])
        data_line = text.splitlines()[1]
        assert data_line.startswith("Build a Django REST API,plain,")


# ---------------------------------------------------------------------------
# TestJson
# ---------------------------------------------------------------------------


class TestJson:
    def test_listing_keys_camel_case(self) -> None:
        data = json.loads(listings_to_json([_listing()]))
        assert data[0]["jobUrl"] == "https://www.freelancer.in/projects/api-1"
        assert data[0]["skills"] == ["Python", "Django"]
        assert data[0]["jobType"] == "Fixed Price"

    def test_non_ascii_kept(self) -> None:
        assert "₹600" in listings_to_json([_listing()])


# ---------------------------------------------------------------------------
# TestResultStore
# ---------------------------------------------------------------------------


class TestResultStore:
    def test_csv_only(self, tmp_path: Path) -> None:
        store = ResultStore(tmp_path / "out", "csv")
        paths = store.save_result(_result())
        assert [p.name for p in paths] == [f"jobs_freelancer_{TODAY}.csv"]
        assert paths[0].read_text(encoding="utf-8").startswith("title,description,")

    def test_json_writes_listings_and_result(self, tmp_path: Path) -> None:
        store = ResultStore(tmp_path, "json")
        paths = store.save_result(_result())

        assert [p.name for p in paths] == [
            f"jobs_freelancer_{TODAY}.json",
            f"result_freelancer_{TODAY}.json",
        ]
        result = json.loads(paths[1].read_text(encoding="utf-8"))
        assert result["platform"] == "freelancer"
        assert result["totalFound"] == 1
        assert result["success"] is True

    def test_both(self, tmp_path: Path) -> None:
        paths = ResultStore(tmp_path, "both").save_result(_result())
        assert len(paths) == 3

    def test_creates_output_dir(self, tmp_path: Path) -> None:
        out = tmp_path / "nested" / "output"
        ResultStore(out, "csv").save_result(_result())
        assert out.is_dir()

    def test_combined(self, tmp_path: Path) -> None:
        results = [
            _result("freelancer"),
            ScrapeResult(platform="other", success=False, errors=["timeout"]),
        ]
        filters = SearchFilters(category="software-development")

        paths = ResultStore(tmp_path, "both").save_combined(results, filters)

        assert [p.name for p in paths] == [
            f"jobs_combined_freelancer_other_{TODAY}.csv",
            f"jobs_combined_freelancer_other_{TODAY}.json",
            f"results_combined_freelancer_other_{TODAY}.json",
        ]
        envelope = json.loads(paths[2].read_text(encoding="utf-8"))
        assert envelope["summary"]["totalJobs"] == 1
        assert envelope["summary"]["searchFilters"]["category"] == "software-development"
        assert [p["success"] for p in envelope["summary"]["platforms"]] == [True, False]
        assert envelope["results"][1]["errors"] == ["timeout"]

    @pytest.mark.parametrize("fmt", ["csv", "json", "both"])
    def test_combined_listings_concatenated(self, tmp_path: Path, fmt: str) -> None:
        results = [
            _result("a", [_listing(title="First gig title", platform="a")]),
            _result("b", [_listing(title="Second gig title", platform="b")]),
        ]
        paths = ResultStore(tmp_path, fmt).save_combined(results, SearchFilters())  # type: ignore[arg-type]
        assert all("_a_b_" in p.name for p in paths)
        if fmt != "json":
            rows = list(csv.DictReader(io.StringIO(paths[0].read_text(encoding="utf-8"))))
            assert [r["platform"] for r in rows] == ["a", "b"]
