"""init: users y expenses

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 09:12:31.204118
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql

# revision identifiers
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")
# El email distingue mayúsculas también en MySQL
_EMAIL = sa.String(255).with_variant(mysql.VARCHAR(255, collation="utf8mb4_bin"), "mysql")


def upgrade() -> None:
    # === users ===
    op.create_table(
        'users',
        sa.Column('id', _ID, primary_key=True, autoincrement=True),
        sa.Column('email', _EMAIL, nullable=False),
        sa.Column('name', sa.String(150)),
        sa.Column('role', sa.Enum('funcionario', 'socio', 'financeiro', name='rol_usuario'), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        mysql_engine='InnoDB',
        mysql_charset='utf8mb4',
        mysql_collate='utf8mb4_unicode_ci'
    )
    # Email único a nivel de base de datos (registro concurrente)
    op.create_index('ux_users_email', 'users', ['email'], unique=True)

    # === expenses ===
    op.create_table(
        'expenses',
        sa.Column('id', _ID, primary_key=True, autoincrement=True),
        sa.Column('owner_id', sa.BigInteger(), nullable=True),
        sa.Column('amount_requested', sa.Numeric(15, 2), nullable=True),
        sa.Column(
            'status',
            sa.Enum('pendente', 'aprovado', 'reprovado', 'parcial', name='estado_despesa'),
            nullable=False,
            server_default='pendente',
        ),
        sa.Column('valor_aprovado', sa.Numeric(15, 2), nullable=True),
        sa.Column('rejection_reason', sa.String(1000), nullable=True),
        sa.Column('approval_notes', sa.String(1000), nullable=True),
        sa.Column('receipt_data', sa.LargeBinary().with_variant(mysql.LONGBLOB(), "mysql"), nullable=True),
        sa.Column('receipt_filename', sa.String(255), nullable=True),
        sa.Column('receipt_content_type', sa.String(100), nullable=True),
        sa.Column('dados', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        mysql_engine='InnoDB',
        mysql_charset='utf8mb4',
        mysql_collate='utf8mb4_unicode_ci'
    )
    op.create_index('ix_expenses_owner_id', 'expenses', ['owner_id'])
    op.create_index('idx_expenses_status_owner', 'expenses', ['status', 'owner_id'])


def downgrade() -> None:
    op.drop_index('idx_expenses_status_owner', table_name='expenses')
    op.drop_index('ix_expenses_owner_id', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('ux_users_email', table_name='users')
    op.drop_table('users')
