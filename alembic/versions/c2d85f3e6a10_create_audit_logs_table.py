"""create audit_logs table with partitioning

Revision ID: c2d85f3e6a10
Revises: 7e4a0c51f9b8
Create Date: 2025-11-04 09:02:17.873402
"""
from typing import Sequence, Union
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "c2d85f3e6a10"
down_revision: Union[str, Sequence[str], None] = "7e4a0c51f9b8"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS audit")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS audit.audit_logs(
            id BIGINT GENERATED ALWAYS AS IDENTITY,
            ts_utc timestamptz NOT NULL DEFAULT now(),
            request_id text,
            scope text NOT NULL,
            action text NOT NULL,
            actor_user_id bigint,
            actor_roles text[] NOT NULL DEFAULT '{}',
            actor_ip inet,
            route text,
            object_type text,
            object_id text,
            status text NOT NULL,
            reason text,
            meta jsonb NOT NULL DEFAULT '{}'::jsonb,
            CONSTRAINT chk_audit_status CHECK (status IN ('SUCCESS','FAIL')),
            PRIMARY KEY (ts_utc, id)
        ) PARTITION BY RANGE (ts_utc)
        """
    )

    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_ts ON audit.audit_logs (ts_utc DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_actor_ts ON audit.audit_logs (actor_user_id, ts_utc DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_scope_action_ts ON audit.audit_logs (scope, action, ts_utc DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_obj ON audit.audit_logs (object_type, object_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_audit_logs_meta_gin ON audit.audit_logs USING gin (meta jsonb_path_ops)")

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS audit.audit_logs_default
          PARTITION OF audit.audit_logs DEFAULT
        """
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS audit.audit_logs CASCADE")
    op.execute("DROP SCHEMA IF EXISTS audit")
