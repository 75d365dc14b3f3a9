"""SQLAlchemy implementation of the organization data layer."""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.data.data_layer import DataLayer
from src.models.organization import Department, Employee, Timecard
from src.schemas.organization import DepartmentRecord, EmployeeRecord, TimecardRecord
from src.utils.errors import DatabaseError, create_not_found_error

logger = logging.getLogger(__name__)


class SqlAlchemyDataLayer(DataLayer):
    """
    Data layer backed by a SQLAlchemy session.

    Queries run on the session passed in; committing is left to whoever
    owns the session (see get_db).
    """

    def __init__(self, session: Session):
        """Initialize data layer with database session."""
        self.session = session

    # =========================================================================
    # Departments
    # =========================================================================

    async def get_department(self, company: str, dept_id: int) -> Optional[DepartmentRecord]:
        department = self._find_department(company, dept_id)
        if department is None:
            return None
        return DepartmentRecord.model_validate(department)

    async def get_all_departments(self, company: str) -> Sequence[DepartmentRecord]:
        stmt = (
            select(Department)
            .where(Department.company == company)
            .order_by(Department.dept_id)
        )
        departments = self.session.execute(stmt).scalars().all()
        return [DepartmentRecord.model_validate(d) for d in departments]

    async def update_department(self, department: DepartmentRecord) -> DepartmentRecord:
        row = self._find_department(department.company, department.dept_id)
        if row is None:
            raise create_not_found_error(
                "Department", f"{department.company}/{department.dept_id}"
            )

        row.dept_no = department.dept_no
        row.dept_name = department.dept_name
        row.location = department.location

        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"Failed to update department {department.dept_id}: {e}")
            raise DatabaseError(
                message="Failed to update department",
                details={"error": str(e.orig)},
            )

        return DepartmentRecord.model_validate(row)

    def _find_department(self, company: str, dept_id: int) -> Optional[Department]:
        stmt = select(Department).where(
            Department.company == company,
            Department.dept_id == dept_id,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    # =========================================================================
    # Employees
    # =========================================================================

    async def get_employee(self, emp_id: int) -> Optional[EmployeeRecord]:
        return self._find_employee(Employee.emp_id == emp_id)

    async def get_employee_by_number(self, emp_no: str) -> Optional[EmployeeRecord]:
        return self._find_employee(Employee.emp_no == emp_no)

    def _find_employee(self, condition) -> Optional[EmployeeRecord]:
        employee = self.session.execute(select(Employee).where(condition)).scalar_one_or_none()
        if employee is None:
            return None
        return EmployeeRecord.model_validate(employee)

    # =========================================================================
    # Timecards
    # =========================================================================

    async def get_all_timecards(self, emp_id: int) -> Sequence[TimecardRecord]:
        stmt = (
            select(Timecard)
            .where(Timecard.emp_id == emp_id)
            .order_by(Timecard.start_time)
        )
        timecards: List[Timecard] = list(self.session.execute(stmt).scalars().all())
        return [TimecardRecord.model_validate(t) for t in timecards]

