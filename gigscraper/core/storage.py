"""CSV / JSON artifacts for scrape results.

Filenames: <prefix>_<platform>_<YYYY-MM-DD>.<ext>. Combined artifacts use the
underscore-joined platform ids in place of a single platform.
"""

import csv
import io
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from gigscraper.core.config import OutputFormat, SearchFilters
from gigscraper.core.schemas import CombinedResults, Listing, ScrapeResult

logger = logging.getLogger(__name__)

CSV_COLUMNS: tuple[str, ...] = (
    "title",
    "description",
    "budget",
    "hourlyRate",
    "skills",
    "postedTime",
    "clientInfo",
    "jobUrl",
    "jobType",
    "duration",
    "experienceLevel",
    "platform",
)

SKILLS_SEPARATOR = "; "


def generate_filename(
    platform: str,
    ext: str,
    prefix: str = "jobs",
    day: date | None = None,
) -> str:
    day = day or date.today()
    return f"{prefix}_{platform}_{day.isoformat()}.{ext}"


def listing_to_row(listing: Listing) -> dict[str, str]:
    """Flatten a listing into CSV column → string."""
    data = listing.model_dump(mode="json", by_alias=True)
    data["skills"] = SKILLS_SEPARATOR.join(listing.skills)
    return {col: str(data.get(col) or "") for col in CSV_COLUMNS}


def listings_to_csv(listings: list[Listing]) -> str:
    """Render listings as CSV text; fields with , " or newline get quoted."""
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=CSV_COLUMNS,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writeheader()
    for listing in listings:
        writer.writerow(listing_to_row(listing))
    return buffer.getvalue()


def listings_to_json(listings: list[Listing]) -> str:
    return _dumps([job.model_dump(mode="json", by_alias=True) for job in listings])


class ResultStore:
    """Writes scrape artifacts into one output directory.

    Usage::

        store = ResultStore("output", "both")
        paths = store.save_result(result)
    """

    def __init__(self, output_dir: str | Path, output_format: OutputFormat = "csv") -> None:
        self._output_dir = Path(output_dir)
        self._format = output_format

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save_result(self, result: ScrapeResult) -> list[Path]:
        """Write one platform's listings (and, for JSON, the full result)."""
        paths: list[Path] = []
        if self._wants("csv"):
            name = generate_filename(result.platform, "csv")
            paths.append(self._write(name, listings_to_csv(result.jobs)))
        if self._wants("json"):
            name = generate_filename(result.platform, "json")
            paths.append(self._write(name, listings_to_json(result.jobs)))
            name = generate_filename(result.platform, "json", prefix="result")
            paths.append(self._write(name, _dumps(result.model_dump(mode="json", by_alias=True))))
        logger.info("Saved %d jobs for %s", len(result.jobs), result.platform)
        return paths

    def save_combined(
        self, results: list[ScrapeResult], filters: SearchFilters,
    ) -> list[Path]:
        """Write every platform's listings together plus the summary envelope."""
        combined_jobs = [job for r in results for job in r.jobs]
        platforms = "_".join(r.platform for r in results)
        paths: list[Path] = []
        if self._wants("csv"):
            name = generate_filename(platforms, "csv", prefix="jobs_combined")
            paths.append(self._write(name, listings_to_csv(combined_jobs)))
        if self._wants("json"):
            name = generate_filename(platforms, "json", prefix="jobs_combined")
            paths.append(self._write(name, listings_to_json(combined_jobs)))
            envelope = CombinedResults.from_results(results, filters)
            name = generate_filename(platforms, "json", prefix="results_combined")
            paths.append(self._write(name, _dumps(envelope.model_dump(mode="json", by_alias=True))))
        logger.info(
            "Combined results saved: %d total jobs from %d platforms",
            len(combined_jobs), len(results),
        )
        return paths

    def _wants(self, fmt: str) -> bool:
        return self._format in (fmt, "both")

    def _write(self, filename: str, content: str) -> Path:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / filename
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        return path


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
