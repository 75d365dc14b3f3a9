"""Pydantic schemas for organization records and API payloads."""

from src.schemas.organization import (
    DepartmentPatch,
    DepartmentPatchBody,
    DepartmentRecord,
    DepartmentResponse,
    EmployeeDraft,
    EmployeeRecord,
    TimecardDraft,
    TimecardRecord,
)

__all__ = [
    # Stored records
    "DepartmentRecord",
    "EmployeeRecord",
    "TimecardRecord",
    # Change payloads
    "DepartmentPatch",
    "DepartmentPatchBody",
    "EmployeeDraft",
    "TimecardDraft",
    # Responses
    "DepartmentResponse",
]
