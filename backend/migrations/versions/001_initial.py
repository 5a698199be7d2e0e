"""Initial database schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Creates the coldcheck tables:
- sections: Named groups of units, ordered
- units: Refrigeration units within a section
- contacts: People to call about a section
- temperature_reports: One compliance check per date and time slot
- report_entries: Per-unit in-range flags of a report
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    ]


def upgrade() -> None:
    # =========================
    # Hierarchy
    # =========================
    op.create_table(
        "sections",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_sections"),
    )

    op.create_table(
        "units",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("section_id", sa.Uuid, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_units"),
        sa.ForeignKeyConstraint(
            ["section_id"],
            ["sections.id"],
            name="fk_units_section_id_sections",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_units_section_id", "units", ["section_id"])

    op.create_table(
        "contacts",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("section_id", sa.Uuid, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_contacts"),
        sa.ForeignKeyConstraint(
            ["section_id"],
            ["sections.id"],
            name="fk_contacts_section_id_sections",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_contacts_section_id", "contacts", ["section_id"])

    # =========================
    # Reports
    # =========================
    op.create_table(
        "temperature_reports",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("report_date", sa.Date, nullable=False),
        sa.Column("time_slot", sa.String(5), nullable=False),
        sa.Column("submitter_name", sa.String(200), nullable=False),
        sa.Column("remarks", sa.Text, nullable=True),
        sa.Column("submitted_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_temperature_reports"),
    )
    op.create_index(
        "ix_temperature_reports_date_created",
        "temperature_reports",
        ["report_date", "created_at"],
    )

    # unit_id has no foreign key; entries outlive their unit
    op.create_table(
        "report_entries",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("report_id", sa.Uuid, nullable=False),
        sa.Column("unit_id", sa.Uuid, nullable=False),
        sa.Column("in_range", sa.Boolean, nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_report_entries"),
        sa.ForeignKeyConstraint(
            ["report_id"],
            ["temperature_reports.id"],
            name="fk_report_entries_report_id_temperature_reports",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("report_id", "unit_id", name="uq_report_entries_report_unit"),
    )
    op.create_index("ix_report_entries_report_id", "report_entries", ["report_id"])
    op.create_index("ix_report_entries_unit_id", "report_entries", ["unit_id"])


def downgrade() -> None:
    op.drop_table("report_entries")
    op.drop_table("temperature_reports")
    op.drop_table("contacts")
    op.drop_table("units")
    op.drop_table("sections")
