"""initial_schema

Revision ID: 0b6f3c2a91d4
Revises:
Create Date: 2026-10-17 09:12:44.301527

Creates the tenant schema:
- organizations and organization_settings (one-to-one)
- locations and resources
- users (members and staff)
- services and bookings
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0b6f3c2a91d4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _soft_delete() -> list:
    return [
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _organization_fk(table: str) -> sa.Column:
    return sa.Column(
        'organization_id',
        sa.String(36),
        sa.ForeignKey('organizations.id', name=f'fk_{table}_organization_id_organizations', ondelete='CASCADE'),
        nullable=False,
    )


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('country', sa.String(2), nullable=False),
        sa.Column('timezone', sa.String(64), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('business_type', sa.String(50), nullable=False),
        sa.Column('subscription_tier', sa.String(50), nullable=False),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id', name='pk_organizations'),
        sa.UniqueConstraint('slug', name='uq_organizations_slug'),
    )
    op.create_index('ix_organizations_is_active', 'organizations', ['is_active'])

    op.create_table(
        'organization_settings',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column(
            'organization_id',
            sa.String(36),
            sa.ForeignKey('organizations.id', name='fk_organization_settings_organization_id_organizations', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('booking_window_days', sa.Integer(), nullable=False),
        sa.Column('cancellation_window_hours', sa.Integer(), nullable=False),
        sa.Column('late_cancel_penalty', sa.Boolean(), nullable=False),
        sa.Column('no_show_penalty', sa.Boolean(), nullable=False),
        sa.Column('waitlist_enabled', sa.Boolean(), nullable=False),
        sa.Column('max_waitlist_size', sa.Integer(), nullable=True),
        sa.Column('default_class_duration', sa.Integer(), nullable=False),
        sa.Column('allow_recurring_bookings', sa.Boolean(), nullable=False),
        sa.Column('max_bookings_per_member', sa.Integer(), nullable=True),
        sa.Column('require_membership_for_booking', sa.Boolean(), nullable=False),
        sa.Column('allow_guest_bookings', sa.Boolean(), nullable=False),
        sa.Column('minimum_advance_booking', sa.Integer(), nullable=False),
        sa.Column('maximum_advance_booking', sa.Integer(), nullable=False),
        sa.Column('send_confirmation_emails', sa.Boolean(), nullable=False),
        sa.Column('send_reminder_emails', sa.Boolean(), nullable=False),
        sa.Column('reminder_hours', sa.Integer(), nullable=False),
        sa.Column('primary_color', sa.String(20), nullable=True),
        sa.Column('secondary_color', sa.String(20), nullable=True),
        sa.Column('logo_url', sa.String(500), nullable=True),
        sa.Column('favicon_url', sa.String(500), nullable=True),
        sa.Column('custom_domain', sa.String(255), nullable=True),
        sa.Column('default_time_zone', sa.String(64), nullable=True),
        sa.Column('first_day_of_week', sa.Integer(), nullable=False),
        sa.Column('date_format', sa.String(20), nullable=False),
        sa.Column('time_format', sa.String(3), nullable=False),
        sa.Column('enable_check_in', sa.Boolean(), nullable=False),
        sa.Column('enable_payments', sa.Boolean(), nullable=False),
        sa.Column('enable_analytics', sa.Boolean(), nullable=False),
        sa.Column('enable_reviews', sa.Boolean(), nullable=False),
        sa.Column('business_hours', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_organization_settings'),
        sa.UniqueConstraint('organization_id', name='uq_organization_settings_organization_id'),
    )

    op.create_table(
        'locations',
        sa.Column('id', sa.String(36), nullable=False),
        _organization_fk('locations'),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(100), nullable=False),
        sa.Column('zip_code', sa.String(20), nullable=False),
        sa.Column('country', sa.String(2), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id', name='pk_locations'),
    )
    op.create_index('ix_locations_organization_id', 'locations', ['organization_id'])
    op.create_index('ix_locations_is_active', 'locations', ['is_active'])

    op.create_table(
        'resources',
        sa.Column('id', sa.String(36), nullable=False),
        _organization_fk('resources'),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('is_bookable', sa.Boolean(), nullable=False),
        sa.Column(
            'location_id',
            sa.String(36),
            sa.ForeignKey('locations.id', name='fk_resources_location_id_locations', ondelete='SET NULL'),
            nullable=True,
        ),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id', name='pk_resources'),
    )
    op.create_index('ix_resources_organization_id', 'resources', ['organization_id'])
    op.create_index('ix_resources_type', 'resources', ['type'])
    op.create_index('ix_resources_location_id', 'resources', ['location_id'])
    op.create_index('ix_resources_is_active', 'resources', ['is_active'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        _organization_fk('users'),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('role', sa.String(10), nullable=False),
        sa.Column('specialty', sa.String(200), nullable=True),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])
    op.create_index('ix_users_is_active', 'users', ['is_active'])
    op.create_index('ix_users_organization_email', 'users', ['organization_id', 'email'], unique=True)

    op.create_table(
        'services',
        sa.Column('id', sa.String(36), nullable=False),
        _organization_fk('services'),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('bookable', sa.Boolean(), nullable=False),
        sa.Column('requires_approval', sa.Boolean(), nullable=False),
        sa.Column('allow_waitlist', sa.Boolean(), nullable=False),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('resource_ids', sa.JSON(), nullable=False),
        sa.Column(
            'location_id',
            sa.String(36),
            sa.ForeignKey('locations.id', name='fk_services_location_id_locations', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column(
            'primary_instructor_id',
            sa.String(36),
            sa.ForeignKey('users.id', name='fk_services_primary_instructor_id_users', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column(
            'assistant_instructor_id',
            sa.String(36),
            sa.ForeignKey('users.id', name='fk_services_assistant_instructor_id_users', ondelete='SET NULL'),
            nullable=True,
        ),
        *_timestamps(),
        *_soft_delete(),
        sa.PrimaryKeyConstraint('id', name='pk_services'),
    )
    op.create_index('ix_services_organization_id', 'services', ['organization_id'])
    op.create_index('ix_services_type', 'services', ['type'])
    op.create_index('ix_services_location_id', 'services', ['location_id'])
    op.create_index('ix_services_is_active', 'services', ['is_active'])
    op.create_index('ix_services_organization_name', 'services', ['organization_id', 'name'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.String(36), nullable=False),
        _organization_fk('bookings'),
        sa.Column(
            'service_id',
            sa.String(36),
            sa.ForeignKey('services.id', name='fk_bookings_service_id_services'),
            nullable=False,
        ),
        sa.Column(
            'user_id',
            sa.String(36),
            sa.ForeignKey('users.id', name='fk_bookings_user_id_users', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column(
            'resource_id',
            sa.String(36),
            sa.ForeignKey('resources.id', name='fk_bookings_resource_id_resources', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_bookings'),
    )
    op.create_index('ix_bookings_organization_id', 'bookings', ['organization_id'])
    op.create_index('ix_bookings_service_id', 'bookings', ['service_id'])
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('bookings')
    op.drop_table('services')
    op.drop_table('users')
    op.drop_table('resources')
    op.drop_table('locations')
    op.drop_table('organization_settings')
    op.drop_table('organizations')
