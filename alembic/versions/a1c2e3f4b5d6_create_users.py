"""create_users

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19 10:00:00.000000

사용자 테이블 생성: users.
Create the users table queried by every repository style.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c2e3f4b5d6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 이름, 상태(1=활성, 0=비활성), 이메일
    # Users with name, status flag (1 active, 0 inactive) and optional email
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('status', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.Column('email', sa.String(255), nullable=True),
    )

    # 조회 조건 인덱스 — Indexes for the status/name/email lookups
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('ix_users_name', 'users', ['name'])
    op.create_index('ix_users_email', 'users', ['email'])


def downgrade() -> None:
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_name', table_name='users')
    op.drop_index('ix_users_status', table_name='users')
    op.drop_table('users')
