from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, utcnow

# Pending jobs due within this window are reported as urgent
URGENT_WINDOW = timedelta(days=7)


class JobStatus(str, Enum):
    PENDING = "pending"
    OVERDUE = "overdue"


class PrintingJob(BaseModel, Base):
    """
    A book printed by a company: copy count plus delivery date.

    Status is never stored; it is derived from the delivery date and the
    current time on every read.
    """
    __tablename__ = "printing_jobs"

    isbn = Column(String(20), ForeignKey("books.isbn", ondelete="RESTRICT"), primary_key=True)
    company_id = Column(Integer, ForeignKey("printing_companies.id", ondelete="RESTRICT"), primary_key=True)
    copies = Column(Integer, nullable=False)
    delivery_date = Column(DateTime, nullable=False)  # naive UTC

    book = relationship("Book")
    company = relationship("PrintingCompany")

    __table_args__ = (
        CheckConstraint("copies > 0", name="ck_printing_jobs_copies_positive"),
        Index("ix_printing_jobs_company_id", "company_id"),
        Index("ix_printing_jobs_delivery_date", "delivery_date"),
    )

    def is_overdue(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) > self.delivery_date

    def status(self, now: datetime | None = None) -> JobStatus:
        return JobStatus.OVERDUE if self.is_overdue(now) else JobStatus.PENDING

    def days_until_delivery(self, now: datetime | None = None) -> int:
        """Whole days left before delivery; negative once overdue."""
        remaining = self.delivery_date - (now or utcnow())
        return int(remaining.total_seconds() / 86400)

    def is_urgent(self, now: datetime | None = None) -> bool:
        now = now or utcnow()
        return not self.is_overdue(now) and self.delivery_date - now <= URGENT_WINDOW

    def label(self, now: datetime | None = None) -> str:
        """Reporting label: overdue, urgent or pending."""
        now = now or utcnow()
        if self.is_overdue(now):
            return JobStatus.OVERDUE.value
        if self.is_urgent(now):
            return "urgent"
        return JobStatus.PENDING.value
