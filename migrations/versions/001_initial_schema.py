"""Create equipment, sensor_readings, maintenance_logs and predictions tables.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "equipment",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_equipment_name", "equipment", ["name"], unique=False)

    op.create_table(
        "sensor_readings",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("equipment_id", sa.String(36), sa.ForeignKey("equipment.id"), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sensor_readings_equipment_id", "sensor_readings", ["equipment_id"], unique=False)

    op.create_table(
        "maintenance_logs",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("equipment_id", sa.String(36), sa.ForeignKey("equipment.id"), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("description", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_maintenance_logs_equipment_id", "maintenance_logs", ["equipment_id"], unique=False)

    op.create_table(
        "predictions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("equipment_id", sa.String(36), sa.ForeignKey("equipment.id"), nullable=False),
        sa.Column("predicted_failure_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("failure_probability", sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "failure_probability >= 0 AND failure_probability <= 1",
            name="ck_predictions_probability_range",
        ),
    )
    op.create_index("ix_predictions_equipment_id", "predictions", ["equipment_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_predictions_equipment_id", table_name="predictions")
    op.drop_table("predictions")
    op.drop_index("ix_maintenance_logs_equipment_id", table_name="maintenance_logs")
    op.drop_table("maintenance_logs")
    op.drop_index("ix_sensor_readings_equipment_id", table_name="sensor_readings")
    op.drop_table("sensor_readings")
    op.drop_index("ix_equipment_name", table_name="equipment")
    op.drop_table("equipment")
