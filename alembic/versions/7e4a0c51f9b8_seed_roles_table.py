"""seed roles table

Revision ID: 7e4a0c51f9b8
Revises: 3b1c9e07a2d4
Create Date: 2025-11-03 10:31:09.551870

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '7e4a0c51f9b8'
down_revision: Union[str, Sequence[str], None] = '3b1c9e07a2d4'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute(
        """
        INSERT INTO roles (name)
        VALUES ('ADMIN'), ('USER')
        ON CONFLICT (name) DO NOTHING
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DELETE FROM roles WHERE name IN ('ADMIN', 'USER')")
