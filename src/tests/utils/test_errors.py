"""Tests for business rule exception types."""

from http import HTTPStatus

from src.utils.errors import (
    AggregateViolation,
    RuleViolation,
    SingleViolation,
    ViolationCode,
    ViolationDetail,
)


class TestSingleViolation:
    """Tests for SingleViolation."""

    def test_message_and_code(self):
        error = SingleViolation(ViolationCode.INVALID_MANAGER, "Invalid manager ID: 3.", "mng_id")

        assert str(error) == "Invalid manager ID: 3."
        assert error.code == ViolationCode.INVALID_MANAGER
        assert error.codes == [ViolationCode.INVALID_MANAGER]
        assert isinstance(error, RuleViolation)

    def test_to_response(self):
        error = SingleViolation(ViolationCode.INVALID_MANAGER, "Invalid manager ID: 3.", "mng_id")

        response = error.to_response()

        assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
        assert response.to_dict() == {
            "error": {
                "message": "Invalid manager ID: 3.",
                "code": "rule_violation",
                "details": {
                    "violations": [
                        {
                            "code": "INVALID_MANAGER",
                            "message": "Invalid manager ID: 3.",
                            "field": "mng_id",
                        }
                    ]
                },
                "field_errors": [
                    {
                        "field": "mng_id",
                        "message": "Invalid manager ID: 3.",
                        "code": "INVALID_MANAGER",
                    }
                ],
            }
        }


class TestAggregateViolation:
    """Tests for AggregateViolation."""

    def test_joins_messages(self):
        error = AggregateViolation([
            ViolationDetail(ViolationCode.DEPARTMENT_FIELDS_REQUIRED, "Department ID and company name are required"),
            ViolationDetail(ViolationCode.DEPARTMENT_NOT_FOUND, "Department not found", "dept_id"),
        ])

        assert error.message == (
            "Validation failed: Department ID and company name are required, "
            "Department not found"
        )
        assert error.codes == [
            ViolationCode.DEPARTMENT_FIELDS_REQUIRED,
            ViolationCode.DEPARTMENT_NOT_FOUND,
        ]
        assert [fe.field for fe in error.field_errors] == ["dept_id"]
