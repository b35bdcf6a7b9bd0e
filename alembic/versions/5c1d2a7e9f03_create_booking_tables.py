"""create booking tables

Revision ID: 5c1d2a7e9f03
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5c1d2a7e9f03'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Barbers
    op.create_table(
        'barbers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('barbershop_name', sa.String(200), nullable=True),
        sa.Column('slug', sa.String(120), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_barbers_slug', 'barbers', ['slug'], unique=True)

    # 2. Services
    op.create_table(
        'services',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('barber_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('barbers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_services_barber_id', 'services', ['barber_id'])
    op.create_index('ix_services_active', 'services', ['active'])

    # 3. Weekly working hours
    op.create_table(
        'working_hours',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('barber_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('barbers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.UniqueConstraint('barber_id', 'day_of_week', name='uq_working_hours_barber_day'),
        sa.CheckConstraint('start_time < end_time', name='ck_working_hours_window'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_working_hours_weekday')
    )

    # 4. Recurring breaks
    op.create_table(
        'schedule_breaks',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('barber_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('barbers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('label', sa.String(100), nullable=True),
        sa.CheckConstraint('start_time < end_time', name='ck_schedule_breaks_window'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_schedule_breaks_weekday')
    )
    op.create_index('ix_schedule_breaks_barber_day', 'schedule_breaks', ['barber_id', 'day_of_week'])

    # 5. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('barber_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('barbers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('services.id', ondelete='SET NULL'), nullable=True),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.Time(), nullable=False),
        sa.Column('services_data', postgresql.JSON(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('client_name', sa.String(200), nullable=False),
        sa.Column('client_whatsapp', sa.String(30), nullable=True),
        sa.Column('client_email', sa.String(200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('booking_source', sa.String(20), server_default='online'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True)
    )
    op.create_index('ix_appointments_barber_date', 'appointments', ['barber_id', 'appointment_date'])

    # Two live appointments of one barber can never share a start minute
    op.create_index(
        'uq_appointments_barber_slot_active',
        'appointments',
        ['barber_id', 'appointment_date', 'appointment_time'],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'")
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_appointments_barber_slot_active', table_name='appointments')
    op.drop_index('ix_appointments_barber_date', table_name='appointments')
    op.drop_table('appointments')

    op.drop_index('ix_schedule_breaks_barber_day', table_name='schedule_breaks')
    op.drop_table('schedule_breaks')

    op.drop_table('working_hours')

    op.drop_index('ix_services_active', table_name='services')
    op.drop_index('ix_services_barber_id', table_name='services')
    op.drop_table('services')

    op.drop_index('ix_barbers_slug', table_name='barbers')
    op.drop_table('barbers')
