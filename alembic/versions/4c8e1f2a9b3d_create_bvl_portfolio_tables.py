"""create bvl portfolio tables

Revision ID: 4c8e1f2a9b3d
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c8e1f2a9b3d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "acciones",
        sa.Column("nemonico", sa.String(), nullable=False),
        sa.Column("nombre_completo", sa.String(), nullable=True),
        sa.Column("moneda", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("nemonico"),
    )

    op.create_table(
        "acciones_historial",
        sa.Column("id_historial", sa.Integer(), nullable=False),
        sa.Column("nemonico", sa.String(), nullable=False),
        sa.Column("fecha_hora", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("valor", sa.Numeric(14, 4), nullable=False),
        sa.PrimaryKeyConstraint("id_historial"),
    )
    op.create_index(
        "ix_acciones_historial_nemonico_fecha_hora",
        "acciones_historial",
        ["nemonico", "fecha_hora"],
        unique=False,
    )

    op.create_table(
        "acciones_operaciones",
        sa.Column("id_operacion", sa.Integer(), nullable=False),
        sa.Column("nemonico", sa.String(), nullable=False),
        sa.Column("fecha_hora", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("tipo", sa.String(length=6), nullable=False),
        sa.Column("precio", sa.Numeric(14, 4), nullable=False),
        sa.Column("cantidad", sa.Numeric(14, 4), nullable=False),
        sa.Column("monto_total", sa.Numeric(14, 2), nullable=True),
        sa.PrimaryKeyConstraint("id_operacion"),
    )
    op.create_index(
        "ix_acciones_operaciones_nemonico",
        "acciones_operaciones",
        ["nemonico"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_acciones_operaciones_nemonico", table_name="acciones_operaciones")
    op.drop_table("acciones_operaciones")
    op.drop_index(
        "ix_acciones_historial_nemonico_fecha_hora",
        table_name="acciones_historial",
    )
    op.drop_table("acciones_historial")
    op.drop_table("acciones")
