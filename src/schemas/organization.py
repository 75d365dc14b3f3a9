"""Pydantic models for organization records and the payloads that change them."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Stored Records
# =============================================================================

class DepartmentRecord(BaseModel):
    """Department as returned by the data layer."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    dept_id: int
    company: str
    dept_no: str
    dept_name: str
    location: str


class EmployeeRecord(BaseModel):
    """Employee as returned by the data layer."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    emp_id: int
    emp_name: str
    emp_no: str
    hire_date: date
    job: str
    salary: Decimal
    dept_id: int
    mng_id: int = 0


class TimecardRecord(BaseModel):
    """Timecard as returned by the data layer."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    timecard_id: int
    emp_id: int
    start_time: datetime
    end_time: Optional[datetime] = None


# =============================================================================
# Change Payloads
# =============================================================================

class DepartmentPatch(BaseModel):
    """
    Partial department update.

    dept_id and company identify the department and are required by the
    update rules; they are optional here so that a missing key is reported
    as a rule violation instead of a parsing failure. Only the truthy
    optional fields are merged onto the stored record.
    """

    dept_id: Optional[int] = Field(None, description="Department ID within the company")
    company: Optional[str] = Field(None, description="Owning company name")
    dept_no: Optional[str] = Field(None, max_length=20, description="New department number")
    dept_name: Optional[str] = Field(None, max_length=100, description="New department name")
    location: Optional[str] = Field(None, max_length=100, description="New location")

    def apply_to(self, department: DepartmentRecord) -> DepartmentRecord:
        """Return a copy of department carrying the supplied fields."""
        changes = {
            name: value
            for name, value in (
                ("dept_name", self.dept_name),
                ("dept_no", self.dept_no),
                ("location", self.location),
            )
            if value
        }
        return department.model_copy(update=changes)


class DepartmentPatchBody(BaseModel):
    """Request body for a department update; the key comes from the path."""

    dept_no: Optional[str] = Field(None, max_length=20)
    dept_name: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=100)


class EmployeeDraft(BaseModel):
    """Employee about to be inserted."""

    company: str = Field(..., min_length=1, description="Company the employee joins")
    emp_name: str = Field(..., min_length=1)
    emp_no: str = Field(..., min_length=1, description="Employee number, must be unique")
    hire_date: str = Field(..., description="Hire date as YYYY-MM-DD")
    job: str = Field(..., min_length=1)
    salary: Decimal = Field(..., ge=0)
    dept_id: int = Field(..., description="Department the employee joins")
    mng_id: int = Field(0, description="Manager employee ID, 0 when there is none")


class TimecardDraft(BaseModel):
    """Timecard about to be inserted."""

    emp_id: int
    start_time: str = Field(..., description="Start as 'YYYY-MM-DD HH:MM:SS'")
    end_time: str = Field(..., description="End as 'YYYY-MM-DD HH:MM:SS'")


# =============================================================================
# Responses
# =============================================================================

class DepartmentResponse(BaseModel):
    """Department data for API responses."""

    data: DepartmentRecord
    message: Optional[str] = None
