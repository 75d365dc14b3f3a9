"""API route definitions for department updates and record validation."""

from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.data.data_layer import DataLayer
from src.data.sql_data_layer import SqlAlchemyDataLayer
from src.database.database import get_db
from src.schemas.organization import (
    DepartmentPatch,
    DepartmentPatchBody,
    DepartmentResponse,
    EmployeeDraft,
    TimecardDraft,
)
from src.services.business_rules_service import ValidationService
from src.utils.errors import APIError


# =============================================================================
# Dependency Injection
# =============================================================================

def get_data_layer(
    session: Annotated[Session, Depends(get_db)],
) -> DataLayer:
    """Get data layer bound to the request session."""
    return SqlAlchemyDataLayer(session)


def get_validation_service(
    data_layer: Annotated[DataLayer, Depends(get_data_layer)],
) -> ValidationService:
    """Get validation service instance."""
    return ValidationService(data_layer)


# =============================================================================
# Router Setup
# =============================================================================

department_router = APIRouter(prefix="/companies/{company}/departments", tags=["Departments"])
validation_router = APIRouter(prefix="/validation", tags=["Validation"])
api_router = APIRouter(prefix="/api")


# =============================================================================
# Department Endpoints
# =============================================================================

@department_router.patch(
    "/{dept_id}",
    response_model=DepartmentResponse,
    summary="Update Department",
    description="Partially update a department after checking the update rules.",
)
async def update_department(
    company: str,
    dept_id: int,
    body: DepartmentPatchBody,
    service: Annotated[ValidationService, Depends(get_validation_service)],
) -> DepartmentResponse:
    """
    Update a department.

    - Only fields present in the body change
    - dept_no must stay unique within the company
    - Returns 422 listing every broken rule
    """
    patch = DepartmentPatch(company=company, dept_id=dept_id, **body.model_dump())
    department = await service.update_department(patch)
    return DepartmentResponse(data=department, message="Department updated successfully")


@department_router.post(
    "/{dept_id}/validate",
    summary="Validate Department Update",
    description="Dry-run the update rules and report every problem found.",
)
async def validate_department_update(
    company: str,
    dept_id: int,
    body: DepartmentPatchBody,
    service: Annotated[ValidationService, Depends(get_validation_service)],
) -> Dict[str, Any]:
    patch = DepartmentPatch(company=company, dept_id=dept_id, **body.model_dump())
    result = await service.validate_department_update(patch)
    return {"data": result.to_dict()}


# =============================================================================
# Pre-insert Validation Endpoints
# =============================================================================

@validation_router.post(
    "/employees",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Validate New Employee",
)
async def validate_new_employee(
    draft: EmployeeDraft,
    service: Annotated[ValidationService, Depends(get_validation_service)],
) -> Response:
    """Check department, manager, hire date and employee number."""
    await service.validate_new_employee(draft)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@validation_router.post(
    "/timecards",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Validate New Timecard",
)
async def validate_new_timecard(
    draft: TimecardDraft,
    service: Annotated[ValidationService, Depends(get_validation_service)],
) -> Response:
    """Check employee, start and end times, and one timecard per day."""
    await service.validate_new_timecard(draft)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Register Routes
# =============================================================================

api_router.include_router(department_router)
api_router.include_router(validation_router)


# =============================================================================
# Exception Handlers (to be registered with FastAPI app)
# =============================================================================

async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle API errors and return structured responses."""
    response = exc.to_response()
    return JSONResponse(
        status_code=response.status_code,
        content=response.to_dict(),
    )
