"""SQLAlchemy models for companies, departments, employees and timecards."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base


class Company(Base):
    """A company; every department belongs to exactly one."""

    __tablename__ = "company"

    company: Mapped[str] = mapped_column(String(100), primary_key=True)

    departments: Mapped[List["Department"]] = relationship(
        "Department", back_populates="owner", cascade="all, delete-orphan"
    )


class Department(Base):
    """
    Department within a company.

    dept_id is unique within its company; dept_no is the business-facing
    code shown to users.
    """

    __tablename__ = "department"
    __table_args__ = (
        UniqueConstraint("company", "dept_id", name="uq_department_company_dept_id"),
        Index("ix_department_company_dept_no", "company", "dept_no"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dept_id: Mapped[int] = mapped_column(Integer, nullable=False)
    company: Mapped[str] = mapped_column(
        String(100), ForeignKey("company.company", ondelete="CASCADE"), nullable=False
    )
    dept_no: Mapped[str] = mapped_column(String(20), nullable=False)
    dept_name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)

    owner: Mapped["Company"] = relationship("Company", back_populates="departments")


class Employee(Base):
    """Employee record; mng_id of 0 marks the first employee of a company."""

    __tablename__ = "employee"

    emp_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emp_name: Mapped[str] = mapped_column(String(100), nullable=False)
    emp_no: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    job: Mapped[str] = mapped_column(String(100), nullable=False)
    salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    dept_id: Mapped[int] = mapped_column(Integer, nullable=False)
    mng_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    timecards: Mapped[List["Timecard"]] = relationship(
        "Timecard", back_populates="employee", cascade="all, delete-orphan"
    )


class Timecard(Base):
    """A single worked interval for an employee."""

    __tablename__ = "timecard"

    timecard_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emp_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employee.emp_id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="timecards")
