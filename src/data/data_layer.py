"""Data-access port used by the business rules."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from src.schemas.organization import DepartmentRecord, EmployeeRecord, TimecardRecord


class DataLayer(ABC):
    """
    Abstract base class for organization record storage.

    Business rules only read through this interface and persist department
    changes through update_department; they never construct or delete
    records themselves.
    """

    @abstractmethod
    async def get_department(self, company: str, dept_id: int) -> Optional[DepartmentRecord]:
        """
        Look up one department.

        Args:
            company: Owning company name
            dept_id: Department ID within the company

        Returns:
            The department, or None if the company has no such department
        """
        pass

    @abstractmethod
    async def get_all_departments(self, company: str) -> Sequence[DepartmentRecord]:
        """Return every department of a company."""
        pass

    @abstractmethod
    async def update_department(self, department: DepartmentRecord) -> DepartmentRecord:
        """
        Persist a department.

        Args:
            department: Full record to store under (company, dept_id)

        Returns:
            The record as stored
        """
        pass

    @abstractmethod
    async def get_employee(self, emp_id: int) -> Optional[EmployeeRecord]:
        """Look up an employee by ID."""
        pass

    @abstractmethod
    async def get_employee_by_number(self, emp_no: str) -> Optional[EmployeeRecord]:
        """Look up an employee by employee number."""
        pass

    @abstractmethod
    async def get_all_timecards(self, emp_id: int) -> Sequence[TimecardRecord]:
        """Return every timecard of an employee."""
        pass
