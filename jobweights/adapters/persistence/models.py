"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobweights.adapters.persistence.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class JobModel(Base):
    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    responsibilities: Mapped[list["JobResponsibilityModel"]] = relationship(
        back_populates="job", cascade="all, delete-orphan"
    )


class ResponsibilityModel(Base):
    __tablename__ = "responsibilities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    jobs: Mapped[list["JobResponsibilityModel"]] = relationship(back_populates="responsibility")


class JobResponsibilityModel(Base):
    __tablename__ = "job_responsibilities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    responsibility_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("responsibilities.id"), nullable=False
    )
    weighting: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, server_default=func.current_date())
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    job: Mapped["JobModel"] = relationship(back_populates="responsibilities")
    responsibility: Mapped["ResponsibilityModel"] = relationship(back_populates="jobs")

    __table_args__ = (
        CheckConstraint("weighting BETWEEN 1 AND 100", name="ck_job_responsibilities_weighting"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_job_responsibilities_dates",
        ),
        Index("idx_job_responsibilities_job", "job_id"),
        Index("idx_job_responsibilities_responsibility", "responsibility_id"),
    )
