"""initial campus schema: students, cafeteria and sports reservations, balances"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "a1c3e5f70001"
down_revision = None
branch_labels = None
depends_on = None

NOT_CANCELLED = sa.text("status != 'cancelled'")


def upgrade():
    op.create_table(
        "students",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("student_id_no", sa.String(32), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "meal_types",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(64), nullable=False, unique=True),
    )

    op.create_table(
        "cafeteria_reservations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("student_id", sa.String(36), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("reservation_date", sa.Date, nullable=False),
        sa.Column("meal_type_id", sa.Integer, sa.ForeignKey("meal_types.id"), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_cafeteria_reservations_student_id",
        "cafeteria_reservations",
        ["student_id"],
    )
    # partial: a cancelled row does not block re-booking
    op.create_index(
        "uq_cafeteria_reservations_live",
        "cafeteria_reservations",
        ["student_id", "reservation_date", "meal_type_id"],
        unique=True,
        sqlite_where=NOT_CANCELLED,
        postgresql_where=NOT_CANCELLED,
    )

    op.create_table(
        "sports_facility_types",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("opening_time", sa.Time, nullable=False),
        sa.Column("closing_time", sa.Time, nullable=False),
        sa.Column("slot_duration_minutes", sa.Integer, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="1"),
        sa.CheckConstraint(
            "slot_duration_minutes > 0",
            name="ck_sports_facility_types_slot_duration",
        ),
    )

    op.create_table(
        "sports_facilities",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="available"),
        sa.Column("location_details", sa.String(255), nullable=True),
        sa.Column(
            "facility_type_id",
            sa.Integer,
            sa.ForeignKey("sports_facility_types.id"),
            nullable=False,
        ),
    )

    op.create_table(
        "sports_reservations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("student_id", sa.String(36), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("facility_id", sa.Integer, sa.ForeignKey("sports_facilities.id"), nullable=False),
        sa.Column("reservation_start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reservation_end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="confirmed"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "reservation_start_time < reservation_end_time",
            name="ck_sports_reservations_interval",
        ),
    )
    op.create_index(
        "ix_sports_reservations_student_id",
        "sports_reservations",
        ["student_id"],
    )
    op.create_index(
        "uq_sports_reservations_live",
        "sports_reservations",
        ["facility_id", "reservation_start_time"],
        unique=True,
        sqlite_where=NOT_CANCELLED,
        postgresql_where=NOT_CANCELLED,
    )

    for name in ("cafeteria_balances", "sports_balances"):
        op.create_table(
            name,
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column(
                "student_id",
                sa.String(36),
                sa.ForeignKey("students.id"),
                nullable=False,
                unique=True,
            ),
            sa.Column("balance", sa.Numeric(10, 2), nullable=False, server_default="0"),
        )


def downgrade():
    op.drop_table("sports_balances")
    op.drop_table("cafeteria_balances")

    op.drop_index("uq_sports_reservations_live", table_name="sports_reservations")
    op.drop_index("ix_sports_reservations_student_id", table_name="sports_reservations")
    op.drop_table("sports_reservations")
    op.drop_table("sports_facilities")
    op.drop_table("sports_facility_types")

    op.drop_index("uq_cafeteria_reservations_live", table_name="cafeteria_reservations")
    op.drop_index("ix_cafeteria_reservations_student_id", table_name="cafeteria_reservations")
    op.drop_table("cafeteria_reservations")
    op.drop_table("meal_types")
    op.drop_table("students")
