"""initial schema

Revision ID: 3b1c9e07a2d4
Revises:
Create Date: 2025-11-03 10:12:44.102311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3b1c9e07a2d4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UTC_NOW = sa.text("timezone('utc', now())")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('contact', sa.Text(), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_table(
        'user_roles',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'role_id'),
    )
    op.create_table(
        'auth_refresh_sessions',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('token_hash', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.Column('last_used_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('expires_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('ip', postgresql.INET(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_auth_refresh_sessions_user_id', 'auth_refresh_sessions', ['user_id'])
    op.create_index('ix_auth_refresh_sessions_token_hash', 'auth_refresh_sessions', ['token_hash'])
    op.create_index('ix_auth_refresh_sessions_expires_at', 'auth_refresh_sessions', ['expires_at'])
    op.create_index(
        'ix_auth_refresh_sessions_active',
        'auth_refresh_sessions',
        ['expires_at'],
        postgresql_where=sa.text('revoked_at IS NULL'),
    )

    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('company_name', sa.Text(), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('gst_number', sa.String(length=15), nullable=True),
        sa.Column('industries', sa.Text(), nullable=True),
        sa.Column('website', sa.Text(), nullable=True),
        sa.Column('industries_type', sa.Text(), nullable=True),
        sa.Column('flag', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_companies_company_name', 'companies', ['company_name'])

    op.create_table(
        'contact_persons',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('middle_name', sa.Text(), nullable=True),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('contact_no', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('designation', sa.Text(), nullable=True),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contact_persons_company_id', 'contact_persons', ['company_id'])

    op.create_table(
        'certificates',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('certificate_no', sa.Text(), nullable=False),
        sa.Column('customer_name', sa.Text(), nullable=False),
        sa.Column('site_location', sa.Text(), nullable=True),
        sa.Column('make_model', sa.Text(), nullable=True),
        sa.Column('range', sa.Text(), nullable=True),
        sa.Column('serial_no', sa.Text(), nullable=True),
        sa.Column('calibration_gas', sa.Text(), nullable=True),
        sa.Column('gas_canister_details', sa.Text(), nullable=True),
        sa.Column('date_of_calibration', sa.Date(), nullable=False),
        sa.Column('calibration_due_date', sa.Date(), nullable=True),
        sa.Column('observations', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('engineer_name', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('certificate_no'),
    )
    op.create_index('ix_certificates_customer_name', 'certificates', ['customer_name'])
    op.create_index('ix_certificates_date_of_calibration', 'certificates', ['date_of_calibration'])

    op.create_table(
        'certificate_counters',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('last_number', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('generated_label', sa.Text(), nullable=True),
        sa.CheckConstraint('last_number >= 0', name='chk_certificate_counter_ge0'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'service_reports',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('name_and_location', sa.Text(), nullable=False),
        sa.Column('contact_person', sa.Text(), nullable=True),
        sa.Column('contact_number', sa.Text(), nullable=True),
        sa.Column('service_engineer', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('place', sa.Text(), nullable=True),
        sa.Column('place_options', sa.Text(), nullable=True),
        sa.Column('nature_of_job', sa.Text(), nullable=True),
        sa.Column('report_no', sa.Text(), nullable=True),
        sa.Column('make_model_quantity', sa.Text(), nullable=True),
        sa.Column('serials_calibrated_ok', sa.Text(), nullable=True),
        sa.Column('serials_faulty', sa.Text(), nullable=True),
        sa.Column('engineer_name', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('report_no'),
    )
    op.create_index('ix_service_reports_date', 'service_reports', ['date'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('model_name', sa.Text(), nullable=False),
        sa.Column('range', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('model_name'),
    )
    op.create_table(
        'engineers',
        sa.Column('id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('engineers')
    op.drop_table('categories')
    op.drop_index('ix_service_reports_date', table_name='service_reports')
    op.drop_table('service_reports')
    op.drop_table('certificate_counters')
    op.drop_index('ix_certificates_date_of_calibration', table_name='certificates')
    op.drop_index('ix_certificates_customer_name', table_name='certificates')
    op.drop_table('certificates')
    op.drop_index('ix_contact_persons_company_id', table_name='contact_persons')
    op.drop_table('contact_persons')
    op.drop_index('ix_companies_company_name', table_name='companies')
    op.drop_table('companies')
    op.drop_index('ix_auth_refresh_sessions_active', table_name='auth_refresh_sessions')
    op.drop_index('ix_auth_refresh_sessions_expires_at', table_name='auth_refresh_sessions')
    op.drop_index('ix_auth_refresh_sessions_token_hash', table_name='auth_refresh_sessions')
    op.drop_index('ix_auth_refresh_sessions_user_id', table_name='auth_refresh_sessions')
    op.drop_table('auth_refresh_sessions')
    op.drop_table('user_roles')
    op.drop_table('users')
    op.drop_table('roles')
