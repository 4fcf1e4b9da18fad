"""dealership schema: companies, users, inventory, customers, contracts, documents, uploads

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None

CAR_TYPES = ("COMPACT", "MIDSIZE", "FULLSIZE", "SPORTS", "SUV")
CAR_STATUSES = ("AVAILABLE", "IN_NEGOTIATION", "SOLD")
CONTRACT_STATUSES = (
    "CAR_INSPECTION",
    "PRICE_NEGOTIATION",
    "CONTRACT_DRAFT",
    "CONTRACT_SUCCESSFUL",
    "CONTRACT_FAILED",
)
GENDERS = ("MALE", "FEMALE")
AGE_GROUPS = ("TEENAGER", "TWENTIES", "THIRTIES", "FORTIES", "FIFTIES", "SIXTIES", "SEVENTIES", "EIGHTIES")
REGIONS = (
    "SEOUL", "GYEONGGI", "INCHEON", "GANGWON", "CHUNGBUK", "CHUNGNAM", "SEJONG", "DAEJEON", "JEONBUK",
    "JEONNAM", "GWANGJU", "GYEONGBUK", "GYEONGNAM", "DAEGU", "ULSAN", "BUSAN", "JEJU",
)
UPLOAD_TYPES = ("CUSTOMER", "CAR")
UPLOAD_STATUSES = ("PROCESSING", "COMPLETED", "FAILED")


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _company_fk() -> sa.Column:
    return sa.Column(
        "company_id",
        sa.Integer(),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("user_count", sa.Integer(), nullable=False, server_default="0"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_fk(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("employee_number", sa.String(length=64), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("image_url", sa.String(length=512), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_company_id", "users", ["company_id"])

    op.create_table(
        "cars",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_fk(),
        sa.Column("car_number", sa.String(length=32), nullable=False),
        sa.Column("manufacturer", sa.String(length=64), nullable=False),
        sa.Column("model", sa.String(length=64), nullable=False),
        sa.Column("type", sa.Enum(*CAR_TYPES, name="car_type"), nullable=False),
        sa.Column("manufacturing_year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("accident_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("accident_details", sa.Text(), nullable=True),
        sa.Column("status", sa.Enum(*CAR_STATUSES, name="car_status"), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "car_number", name="uq_cars_company_car_number"),
    )
    op.create_index("ix_cars_company_id", "cars", ["company_id"])
    op.create_index("idx_cars_company_status", "cars", ["company_id", "status"])

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_fk(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("gender", sa.Enum(*GENDERS, name="gender"), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=False),
        sa.Column("age_group", sa.Enum(*AGE_GROUPS, name="age_group"), nullable=True),
        sa.Column("region", sa.Enum(*REGIONS, name="region"), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("memo", sa.Text(), nullable=True),
        sa.Column("contract_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_company_id", "customers", ["company_id"])
    active = sa.text("deleted_at IS NULL")
    op.create_index(
        "uq_customers_company_email_active",
        "customers",
        ["company_id", "email"],
        unique=True,
        postgresql_where=active,
        sqlite_where=active,
    )
    op.create_index(
        "uq_customers_company_phone_active",
        "customers",
        ["company_id", "phone_number"],
        unique=True,
        postgresql_where=active,
        sqlite_where=active,
    )

    op.create_table(
        "contracts",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_fk(),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("car_id", sa.Integer(), sa.ForeignKey("cars.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("status", sa.Enum(*CONTRACT_STATUSES, name="contract_status"), nullable=False),
        sa.Column("contract_price", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("contract_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("resolution_date", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contracts_company_id", "contracts", ["company_id"])
    op.create_index("idx_contracts_company_status", "contracts", ["company_id", "status"])
    op.create_index("idx_contracts_car", "contracts", ["car_id"])
    op.create_index("idx_contracts_customer", "contracts", ["customer_id"])

    op.create_table(
        "meetings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("contract_id", sa.Integer(), sa.ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_meetings_contract_id", "meetings", ["contract_id"])

    op.create_table(
        "meeting_alarms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("meeting_id", sa.Integer(), sa.ForeignKey("meetings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_meeting_alarms_meeting_id", "meeting_alarms", ["meeting_id"])

    op.create_table(
        "contract_documents",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_fk(),
        sa.Column("contract_id", sa.Integer(), sa.ForeignKey("contracts.id", ondelete="SET NULL"), nullable=True),
        sa.Column("uploaded_by_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("mime_type", sa.String(length=128), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contract_documents_company_id", "contract_documents", ["company_id"])
    op.create_index("ix_contract_documents_contract_id", "contract_documents", ["contract_id"])

    op.create_table(
        "uploads",
        sa.Column("id", sa.Integer(), nullable=False),
        _company_fk(),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_type", sa.Enum(*UPLOAD_TYPES, name="upload_type"), nullable=False),
        sa.Column("status", sa.Enum(*UPLOAD_STATUSES, name="upload_status"), nullable=False),
        sa.Column("total_records", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("processed_records", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("success_records", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("failed_records", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("error_details", sa.JSON(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_uploads_company_id", "uploads", ["company_id"])
    op.create_index("idx_uploads_company_type", "uploads", ["company_id", "file_type"])


def downgrade() -> None:
    op.drop_index("idx_uploads_company_type", table_name="uploads")
    op.drop_index("ix_uploads_company_id", table_name="uploads")
    op.drop_table("uploads")

    op.drop_index("ix_contract_documents_contract_id", table_name="contract_documents")
    op.drop_index("ix_contract_documents_company_id", table_name="contract_documents")
    op.drop_table("contract_documents")

    op.drop_index("ix_meeting_alarms_meeting_id", table_name="meeting_alarms")
    op.drop_table("meeting_alarms")
    op.drop_index("ix_meetings_contract_id", table_name="meetings")
    op.drop_table("meetings")

    op.drop_index("idx_contracts_customer", table_name="contracts")
    op.drop_index("idx_contracts_car", table_name="contracts")
    op.drop_index("idx_contracts_company_status", table_name="contracts")
    op.drop_index("ix_contracts_company_id", table_name="contracts")
    op.drop_table("contracts")

    op.drop_index("uq_customers_company_phone_active", table_name="customers")
    op.drop_index("uq_customers_company_email_active", table_name="customers")
    op.drop_index("ix_customers_company_id", table_name="customers")
    op.drop_table("customers")

    op.drop_index("idx_cars_company_status", table_name="cars")
    op.drop_index("ix_cars_company_id", table_name="cars")
    op.drop_table("cars")

    op.drop_index("ix_users_company_id", table_name="users")
    op.drop_table("users")
    op.drop_table("companies")

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for enum_name in (
            "upload_status", "upload_type", "contract_status", "region", "age_group", "gender",
            "car_status", "car_type",
        ):
            sa.Enum(name=enum_name).drop(bind, checkfirst=True)
