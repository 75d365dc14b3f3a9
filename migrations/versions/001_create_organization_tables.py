"""Create company, department, employee and timecard tables.

Revision ID: 001
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create organization tables with their keys and indexes."""

    op.create_table(
        "company",
        sa.Column("company", sa.String(100), primary_key=True),
    )

    op.create_table(
        "department",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("dept_id", sa.Integer, nullable=False),
        sa.Column(
            "company",
            sa.String(100),
            sa.ForeignKey("company.company", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("dept_no", sa.String(20), nullable=False),
        sa.Column("dept_name", sa.String(100), nullable=False),
        sa.Column("location", sa.String(100), nullable=False),
        sa.UniqueConstraint("company", "dept_id", name="uq_department_company_dept_id"),
    )
    op.create_index("ix_department_company_dept_no", "department", ["company", "dept_no"])

    op.create_table(
        "employee",
        sa.Column("emp_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("emp_name", sa.String(100), nullable=False),
        sa.Column("emp_no", sa.String(20), nullable=False, unique=True),
        sa.Column("hire_date", sa.Date, nullable=False),
        sa.Column("job", sa.String(100), nullable=False),
        sa.Column("salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("dept_id", sa.Integer, nullable=False),
        sa.Column("mng_id", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "timecard",
        sa.Column("timecard_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "emp_id",
            sa.Integer,
            sa.ForeignKey("employee.emp_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_time", sa.DateTime, nullable=False),
        sa.Column("end_time", sa.DateTime, nullable=True),
    )
    op.create_index("ix_timecard_emp_id", "timecard", ["emp_id"])


def downgrade() -> None:
    """Drop organization tables."""
    op.drop_index("ix_timecard_emp_id", table_name="timecard")
    op.drop_table("timecard")
    op.drop_table("employee")
    op.drop_index("ix_department_company_dept_no", table_name="department")
    op.drop_table("department")
    op.drop_table("company")
