"""CSV loader — reads registry seed files and job responsibility import files."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from jobweights.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_code,
    normalize_column_name,
    parse_date,
    parse_weighting,
)
from jobweights.domain.policies.admission import MIN_WEIGHT, WEIGHT_BUDGET

logger = logging.getLogger(__name__)

JOB_RESPONSIBILITY_HEADERS = [
    "job_code",
    "responsibility_code",
    "weighting",
    "notes",
    "start_date",
    "end_date",
]


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [",", ";", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def read_csv_text(text: str, source: str = "<upload>") -> list[dict[str, str | None]]:
    """Parse CSV text with column normalization; blank lines are skipped.

    Every returned row carries a ``line`` key with its 1-based line number in
    the file (the header is line 1).
    """
    text = text.lstrip("\ufeff")
    dialect = _sniff_dialect(text[:4096])
    reader = csv.DictReader(io.StringIO(text, newline=""), dialect=dialect)
    if reader.fieldnames is None:
        raise ValueError(f"CSV {source} has no header row")

    col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
    rows = []
    for raw_row in reader:
        row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
        if not any(row.values()):
            continue
        row["line"] = reader.line_num
        rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), source, list(col_map.values()))
    return rows


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    return read_csv_text(file_path.read_text(encoding=encoding), source=file_path.name)


def load_jobs(file_path: Path) -> list[dict]:
    """Load the jobs CSV (columns: code, name, is_active)."""
    jobs = []
    for row in _read_csv(file_path):
        code = normalize_code(row.get("code") or row.get("job_code"))
        if not code:
            logger.warning("Line %d: job without code skipped", row["line"])
            continue
        jobs.append({
            "code": code,
            "name": row.get("name") or row.get("job_name") or code,
            "is_active": _parse_bool(row.get("is_active"), default=True),
        })
    logger.info("Parsed %d jobs", len(jobs))
    return jobs


def load_responsibilities(file_path: Path) -> list[dict]:
    """Load the responsibilities CSV (columns: code, name, description)."""
    responsibilities = []
    for row in _read_csv(file_path):
        code = normalize_code(row.get("code") or row.get("responsibility_code"))
        if not code:
            logger.warning("Line %d: responsibility without code skipped", row["line"])
            continue
        responsibilities.append({
            "code": code,
            "name": row.get("name") or code,
            "description": row.get("description"),
            "is_active": _parse_bool(row.get("is_active"), default=True),
        })
    logger.info("Parsed %d responsibilities", len(responsibilities))
    return responsibilities


def parse_job_responsibility_rows(rows: list[dict[str, str | None]]) -> list[dict]:
    """Validate and type raw job responsibility rows.

    Invalid rows are kept, with their problems listed under ``errors``.
    """
    parsed = []
    for row in rows:
        errors: list[str] = []
        job_code = normalize_code(row.get("job_code"))
        responsibility_code = normalize_code(row.get("responsibility_code"))
        if not job_code:
            errors.append("job_code is required")
        if not responsibility_code:
            errors.append("responsibility_code is required")

        weighting = None
        try:
            weighting = parse_weighting(row.get("weighting"))
        except ValueError:
            errors.append(f"weighting must be {MIN_WEIGHT}-{WEIGHT_BUDGET}")
        else:
            if weighting is not None and not MIN_WEIGHT <= weighting <= WEIGHT_BUDGET:
                errors.append(f"weighting must be {MIN_WEIGHT}-{WEIGHT_BUDGET}")

        start_date = end_date = None
        try:
            start_date = parse_date(row.get("start_date"))
        except ValueError:
            errors.append("Invalid start_date")
        try:
            end_date = parse_date(row.get("end_date"))
        except ValueError:
            errors.append("Invalid end_date")
        if start_date and end_date and end_date < start_date:
            errors.append("end_date must not be before start_date")

        parsed.append({
            "line": row["line"],
            "job_code": job_code,
            "responsibility_code": responsibility_code,
            "weighting": weighting,
            "notes": row.get("notes"),
            "start_date": start_date,
            "end_date": end_date,
            "errors": errors,
        })

    invalid = sum(1 for r in parsed if r["errors"])
    logger.info("Parsed %d job responsibility rows (%d invalid)", len(parsed), invalid)
    return parsed


def load_job_responsibility_rows(file_path: Path) -> list[dict]:
    return parse_job_responsibility_rows(_read_csv(file_path))


def _parse_bool(value: str | None, default: bool) -> bool:
    if not value:
        return default
    return value.strip().lower() in ("true", "1", "yes", "y")
