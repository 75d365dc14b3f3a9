"""Models package for the organization records system."""

from src.models.base import Base
from src.models.organization import Company, Department, Employee, Timecard

__all__ = [
    "Base",
    "Company",
    "Department",
    "Employee",
    "Timecard",
]
