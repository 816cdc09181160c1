"""Seed database from CSV files.

Usage:
    python -m jobweights.tools.seed_db
    python -m jobweights.tools.seed_db --data-dir data
    python -m jobweights.tools.seed_db --drop  # drop existing data first

Looks for ``jobs*.csv``, ``responsibilities*.csv`` and, optionally,
``job_responsibilities*.csv`` in the data directory. Job responsibility rows
go through the same admission check as API writes.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.csv_loader.loader import (
    load_job_responsibility_rows,
    load_jobs,
    load_responsibilities,
)
from jobweights.adapters.persistence.database import async_session_factory
from jobweights.adapters.persistence.models import (
    JobModel,
    JobResponsibilityModel,
    ResponsibilityModel,
)
from jobweights.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlJobRepository,
    SqlResponsibilityRepository,
)
from jobweights.application.use_cases.assign_responsibility import AssignResponsibilityUseCase
from jobweights.application.use_cases.import_responsibilities import (
    ImportJobResponsibilitiesUseCase,
)
from jobweights.config import settings
from jobweights.domain.entities.job import Job
from jobweights.domain.entities.responsibility import Responsibility

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [JobResponsibilityModel, ResponsibilityModel, JobModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"jobs": 0, "responsibilities": 0, "job_responsibilities": 0}

    job_csv = _find_csv(data_dir, ["jobs"], exclude=["responsibilit"])
    responsibility_csv = _find_csv(data_dir, ["responsibilities"], exclude=["job"])
    assignment_csv = _find_csv(data_dir, ["job_responsibilities", "job_resp"])

    if not job_csv:
        raise FileNotFoundError(f"No jobs CSV found in {data_dir}. Expected jobs.csv")
    if not responsibility_csv:
        raise FileNotFoundError(
            f"No responsibilities CSV found in {data_dir}. Expected responsibilities.csv"
        )

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        jobs = SqlJobRepository(session)
        responsibilities = SqlResponsibilityRepository(session)

        # 1. Jobs
        for jd in load_jobs(job_csv):
            if await jobs.get_by_code(jd["code"]):
                logger.debug("Job '%s' already exists, skipping", jd["code"])
                continue
            await jobs.save(Job(id=None, **jd))
            counts["jobs"] += 1
        await session.commit()

        # 2. Responsibilities registry
        for rd in load_responsibilities(responsibility_csv):
            if await responsibilities.get_by_code(rd["code"]):
                logger.debug("Responsibility '%s' already exists, skipping", rd["code"])
                continue
            await responsibilities.save(Responsibility(id=None, **rd))
            counts["responsibilities"] += 1
        await session.commit()

        # 3. Job responsibility assignments (if CSV exists)
        if assignment_csv:
            importer = ImportJobResponsibilitiesUseCase(
                job_repo=jobs,
                responsibility_repo=responsibilities,
                assign=AssignResponsibilityUseCase(
                    assignment_repo=SqlAssignmentRepository(session),
                    job_repo=jobs,
                    responsibility_repo=responsibilities,
                ),
                default_weight=settings.default_weighting,
            )
            report = await importer.execute(load_job_responsibility_rows(assignment_csv))
            await session.commit()
            counts["job_responsibilities"] = report.imported
            for r in report.results:
                if r.error:
                    logger.warning("%s line %d: %s", assignment_csv.name, r.line, r.error)
        else:
            logger.info("No job responsibilities CSV found — skipping assignment import")

    logger.info(
        "Seed complete: %d jobs, %d responsibilities, %d job responsibilities",
        counts["jobs"], counts["responsibilities"], counts["job_responsibilities"],
    )
    return counts


def _find_csv(
    data_dir: Path, name_hints: list[str], exclude: list[str] | None = None
) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        if exclude and any(x in fname_lower for x in exclude):
            continue
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        n_jobs = (await session.execute(select(func.count(JobModel.id)))).scalar_one()
        n_resp = (
            await session.execute(select(func.count(ResponsibilityModel.id)))
        ).scalar_one()
        n_links = (
            await session.execute(select(func.count(JobResponsibilityModel.id)))
        ).scalar_one()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Jobs:                 {n_jobs}")
        print(f"Responsibilities:     {n_resp}")
        print(f"Job responsibilities: {n_links}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed jobweights database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory containing CSV files (default: CSV_DATA_PATH or data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
