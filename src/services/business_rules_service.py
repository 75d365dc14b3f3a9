"""Business rule validation for organization records.

Gatekeeps every write of departments, employees and timecards: uniqueness,
referential integrity and working-time rules are checked against the data
layer before a record reaches storage.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from src.config.settings import BusinessRuleSettings, get_settings
from src.data.data_layer import DataLayer
from src.schemas.organization import (
    DepartmentPatch,
    DepartmentRecord,
    EmployeeDraft,
    TimecardDraft,
)
from src.utils.errors import (
    AggregateViolation,
    SingleViolation,
    ViolationCode,
    ViolationDetail,
)

logger = logging.getLogger(__name__)

HIRE_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

Timestamp = Union[str, datetime]
PatchInput = Union[DepartmentPatch, Mapping[str, Any]]


# =============================================================================
# Result Types
# =============================================================================

@dataclass
class DepartmentValidationResult:
    """Collected outcome of the department update rules."""

    is_valid: bool = True
    errors: List[ViolationDetail] = field(default_factory=list)
    existing_department: Optional[DepartmentRecord] = None

    def add_error(
        self,
        code: ViolationCode,
        message: str,
        field: Optional[str] = None,
    ) -> None:
        """Add an error to the result."""
        self.errors.append(ViolationDetail(code, message, field))
        self.is_valid = False

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]

    def raise_for_violations(self) -> None:
        """Raise AggregateViolation if any rule failed."""
        if not self.is_valid:
            raise AggregateViolation(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "existing_department": (
                self.existing_department.model_dump(mode="json")
                if self.existing_department
                else None
            ),
        }


# =============================================================================
# Time Helpers
# =============================================================================

def parse_timestamp(value: Optional[Timestamp]) -> Optional[datetime]:
    """
    Parse a 'YYYY-MM-DD HH:MM:SS' style value into naive local time.

    Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace(" ", "T", 1))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _as_patch(patch: PatchInput) -> DepartmentPatch:
    if isinstance(patch, DepartmentPatch):
        return patch
    if isinstance(patch, Mapping):
        patch = dict(patch)
    return DepartmentPatch.model_validate(patch)


def previous_monday(now: datetime) -> datetime:
    """Midnight of the most recent Monday, today included."""
    day = now.date()
    while day.weekday() != 0:
        day -= timedelta(days=1)
    return datetime.combine(day, time.min)


# =============================================================================
# Validation Service
# =============================================================================

class ValidationService:
    """
    Business rules applied before organization records are written.

    Single-purpose validators return None when the rule holds and raise
    SingleViolation on the first broken rule. validate_department_update
    collects every broken rule into a DepartmentValidationResult instead.
    """

    def __init__(
        self,
        data_layer: DataLayer,
        rules: Optional[BusinessRuleSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize service.

        Args:
            data_layer: Storage port used for every lookup and update
            rules: Working-time rules, defaults to the application settings
            clock: Returns the current local time when a validator gets no now
        """
        self.data_layer = data_layer
        self.rules = rules or get_settings().business_rules
        self.clock = clock

    # =========================================================================
    # Departments
    # =========================================================================

    async def validate_department_update(
        self,
        patch: PatchInput,
    ) -> DepartmentValidationResult:
        """
        Check a department patch against the update rules.

        Never raises: malformed patches and lookup failures are recorded as
        errors. Stops after "Department not found" since the remaining rules
        need the stored department.
        """
        result = DepartmentValidationResult()

        try:
            patch = _as_patch(patch)
        except PydanticValidationError as e:
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                result.add_error(
                    ViolationCode.INVALID_PATCH,
                    f"Invalid {loc or 'department patch'}: {error['msg']}",
                    loc or None,
                )
            return result

        if patch.dept_id is None or not patch.company:
            result.add_error(
                ViolationCode.DEPARTMENT_FIELDS_REQUIRED,
                "Department ID and company name are required",
            )
            return result

        try:
            existing = await self.data_layer.get_department(patch.company, patch.dept_id)
            if existing is None:
                result.add_error(
                    ViolationCode.DEPARTMENT_NOT_FOUND,
                    "Department not found",
                    "dept_id",
                )
                return result

            if patch.dept_no and patch.dept_no != existing.dept_no:
                # Scoped to the patch's company
                departments = await self.data_layer.get_all_departments(patch.company)
                taken = any(
                    dept.dept_no == patch.dept_no and dept.dept_id != patch.dept_id
                    for dept in departments
                )
                if taken:
                    result.add_error(
                        ViolationCode.DEPT_NO_NOT_UNIQUE,
                        "Department number must be unique across all companies",
                        "dept_no",
                    )

            result.existing_department = existing
        except Exception as e:
            logger.warning(
                f"Lookup failed while validating department {patch.dept_id}: {e}",
                exc_info=True,
            )
            result.add_error(ViolationCode.LOOKUP_FAILED, f"Validation error: {e}")
            result.existing_department = None

        return result

    async def update_department(self, patch: PatchInput) -> DepartmentRecord:
        """
        Validate a patch and persist the merged department.

        Only dept_name, dept_no and location given in the patch are changed.

        Raises:
            AggregateViolation: listing every broken rule
        """
        result = await self.validate_department_update(patch)
        if not result.is_valid:
            logger.info(f"Rejected department update: {result.messages}")
            result.raise_for_violations()

        updated = _as_patch(patch).apply_to(result.existing_department)
        stored = await self.data_layer.update_department(updated)
        logger.info(f"Updated department {stored.dept_id} in '{stored.company}'")
        return stored

    async def validate_department(self, company: str, dept_id: int) -> None:
        department = await self.data_layer.get_department(company, dept_id)
        if department is None:
            raise self._violation(
                ViolationCode.INVALID_DEPARTMENT,
                f"Invalid department ID: {dept_id} does not exist in company '{company}'.",
                "dept_id",
            )

    # =========================================================================
    # Employees
    # =========================================================================

    async def validate_manager(self, mng_id: int) -> None:
        """Manager must exist; 0 means the employee has no manager."""
        if mng_id == 0:
            return

        manager = await self.data_layer.get_employee(mng_id)
        if manager is None:
            raise self._violation(
                ViolationCode.INVALID_MANAGER,
                f"Invalid manager ID: {mng_id}.",
                "mng_id",
            )

    def validate_hire_date(
        self,
        hire_date: Union[str, date],
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Hire date must be a real YYYY-MM-DD date, not in the future, and
        fall on a weekday.
        """
        now = self._now(now)
        parsed = self._parse_hire_date(hire_date)

        if parsed is None or datetime.combine(parsed, time.min) > now:
            raise self._violation(
                ViolationCode.INVALID_HIRE_DATE,
                "Hire date must be a valid date and cannot be in the future.",
                "hire_date",
            )

        if parsed.weekday() in self.rules.weekend_days:
            raise self._violation(
                ViolationCode.WEEKEND_HIRE_DATE,
                "Hire date must be a Monday through Friday. Weekends are not allowed.",
                "hire_date",
            )

    async def validate_employee_number(self, emp_no: str) -> None:
        existing = await self.data_layer.get_employee_by_number(emp_no)
        if existing is not None:
            raise self._violation(
                ViolationCode.DUPLICATE_EMPLOYEE_NUMBER,
                f"Employee number '{emp_no}' must be unique.",
                "emp_no",
            )

    async def validate_employee(self, emp_id: int) -> None:
        employee = await self.data_layer.get_employee(emp_id)
        if employee is None:
            raise self._violation(
                ViolationCode.EMPLOYEE_NOT_FOUND,
                "Employee ID does not exist.",
                "emp_id",
            )

    async def validate_new_employee(
        self,
        draft: EmployeeDraft,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """Run the employee insert rules in order, raising on the first failure."""
        await self.validate_department(draft.company, draft.dept_id)
        await self.validate_manager(draft.mng_id)
        self.validate_hire_date(draft.hire_date, now=now)
        await self.validate_employee_number(draft.emp_no)

    # =========================================================================
    # Timecards
    # =========================================================================

    async def validate_start_time(
        self,
        start_time: Timestamp,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Start must be a weekday within business hours, between midnight of
        the previous Monday and now.
        """
        now = self._now(now)
        start = parse_timestamp(start_time)

        if start is None:
            raise self._violation(
                ViolationCode.INVALID_START_TIME,
                "Invalid start time format.",
                "start_time",
            )

        if start.weekday() in self.rules.weekend_days:
            raise self._violation(
                ViolationCode.WEEKEND_START_TIME,
                "Start time cannot be on weekend.",
                "start_time",
            )

        if not self._within_business_hours(start):
            raise self._violation(
                ViolationCode.START_OUTSIDE_BUSINESS_HOURS,
                f"Start time must be between {self._window_label()}.",
                "start_time",
            )

        week_start = previous_monday(now)
        logger.debug(f"Start: {start}, now: {now}, previous Monday: {week_start}")

        if start < week_start or start > now:
            raise self._violation(
                ViolationCode.START_OUTSIDE_CURRENT_WEEK,
                "Start time must be between current date and previous Monday.",
                "start_time",
            )

    async def validate_end_time(self, start_time: Timestamp, end_time: Timestamp) -> None:
        """
        End must be at least the minimum duration after start, on the same
        day, within business hours. An end before the start is reported as
        too short.
        """
        end = parse_timestamp(end_time)
        if end is None:
            raise self._violation(
                ViolationCode.INVALID_END_TIME,
                "Invalid end time format.",
                "end_time",
            )

        start = parse_timestamp(start_time)
        if start is None:
            raise self._violation(
                ViolationCode.INVALID_START_TIME,
                "Invalid start time format.",
                "start_time",
            )

        min_duration = timedelta(minutes=self.rules.min_timecard_minutes)
        if end - start < min_duration:
            raise self._violation(
                ViolationCode.TIMECARD_TOO_SHORT,
                f"End time must be at least {self._duration_label()} after start time.",
                "end_time",
            )

        if end.date() != start.date():
            raise self._violation(
                ViolationCode.END_NOT_SAME_DAY,
                "End time must be on the same day as start time.",
                "end_time",
            )

        if not self._within_business_hours(end):
            raise self._violation(
                ViolationCode.END_OUTSIDE_BUSINESS_HOURS,
                f"End time must be between {self._window_label()}.",
                "end_time",
            )

    async def validate_no_duplicate_timecard(self, emp_id: int, start_time: Timestamp) -> None:
        """One timecard per employee per calendar day."""
        start = parse_timestamp(start_time)
        if start is None:
            raise self._violation(
                ViolationCode.INVALID_START_TIME,
                "Invalid start time format.",
                "start_time",
            )

        timecards = await self.data_layer.get_all_timecards(emp_id)
        for timecard in timecards:
            existing = parse_timestamp(timecard.start_time)
            if existing is not None and existing.date() == start.date():
                raise self._violation(
                    ViolationCode.DUPLICATE_TIMECARD,
                    "Employee already has a timecard for this date.",
                    "start_time",
                )

    async def validate_new_timecard(
        self,
        draft: TimecardDraft,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """Run the timecard insert rules in order, raising on the first failure."""
        await self.validate_employee(draft.emp_id)
        await self.validate_start_time(draft.start_time, now=now)
        await self.validate_end_time(draft.start_time, draft.end_time)
        await self.validate_no_duplicate_timecard(draft.emp_id, draft.start_time)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _now(self, now: Optional[datetime]) -> datetime:
        return parse_timestamp(now if now is not None else self.clock())

    @staticmethod
    def _parse_hire_date(hire_date: Union[str, date]) -> Optional[date]:
        if isinstance(hire_date, datetime):
            return hire_date.date()
        if isinstance(hire_date, date):
            return hire_date
        if not isinstance(hire_date, str) or not HIRE_DATE_PATTERN.fullmatch(hire_date):
            return None
        try:
            return date.fromisoformat(hire_date)
        except ValueError:
            return None

    def _within_business_hours(self, moment: datetime) -> bool:
        return self.rules.workday_start <= moment.time() <= self.rules.workday_end

    def _window_label(self) -> str:
        return (
            f"{self.rules.workday_start.strftime('%H:%M')} and "
            f"{self.rules.workday_end.strftime('%H:%M')}"
        )

    def _duration_label(self) -> str:
        minutes = self.rules.min_timecard_minutes
        if minutes % 60 == 0:
            hours = minutes // 60
            return f"{hours} hour" if hours == 1 else f"{hours} hours"
        return f"{minutes} minutes"

    @staticmethod
    def _violation(
        code: ViolationCode,
        message: str,
        field: Optional[str] = None,
    ) -> SingleViolation:
        logger.info(f"Business rule {code.value} rejected record: {message}")
        return SingleViolation(code, message, field)
