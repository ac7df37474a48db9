"""Initial assignment schema

Revision ID: 3c0f9a1d2b7e
Revises:
Create Date: 2026-10-17 09:12:40.118204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c0f9a1d2b7e'
down_revision = None
branch_labels = None
depends_on = None

event_status = sa.Enum(
    'SCHEDULED', 'CONFIRMED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED',
    name='eventstatus',
)
assignment_status = sa.Enum(
    'PENDING', 'CONFIRMED', 'DECLINED', 'NO_SHOW', 'COMPLETED',
    name='assignmentstatus',
)


def upgrade():
    op.create_table('events',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=500), nullable=True),
        sa.Column('venue', sa.String(length=255), nullable=True),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('load_in_time', sa.Time(), nullable=True),
        sa.Column('load_out_time', sa.Time(), nullable=True),
        sa.Column('cost_center', sa.String(length=100), nullable=True),
        sa.Column('status', event_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('events', schema=None) as batch_op:
        batch_op.create_index('ix_events_event_date', ['event_date'], unique=False)
        batch_op.create_index('ix_events_cost_center', ['cost_center'], unique=False)
        batch_op.create_index('ix_events_status', ['status'], unique=False)

    op.create_table('positions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('default_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('crew_members',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('default_position_id', sa.String(length=36), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['default_position_id'], ['positions.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('equipment_categories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('equipment',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('serial_number', sa.String(length=255), nullable=True),
        sa.Column('daily_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('replacement_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('quantity_available', sa.Integer(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['category_id'], ['equipment_categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('equipment', schema=None) as batch_op:
        batch_op.create_index('ix_equipment_category_id', ['category_id'], unique=False)

    op.create_table('crew_assignments',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('crew_member_id', sa.String(length=36), nullable=False),
        sa.Column('position_id', sa.String(length=36), nullable=True),
        sa.Column('call_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('rate_override', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('status', assignment_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('notification_sent_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['crew_member_id'], ['crew_members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['position_id'], ['positions.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'crew_member_id', name='uq_crew_assignment_event_member')
    )
    with op.batch_alter_table('crew_assignments', schema=None) as batch_op:
        batch_op.create_index('ix_crew_assignments_event', ['event_id'], unique=False)
        batch_op.create_index('ix_crew_assignments_crew', ['crew_member_id'], unique=False)

    op.create_table('equipment_assignments',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('equipment_id', sa.String(length=36), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('rate_override', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('quantity >= 1', name='ck_equipment_assignment_quantity'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['equipment_id'], ['equipment.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'equipment_id', name='uq_equipment_assignment_event_item')
    )
    with op.batch_alter_table('equipment_assignments', schema=None) as batch_op:
        batch_op.create_index('ix_equipment_assignments_event', ['event_id'], unique=False)


def downgrade():
    with op.batch_alter_table('equipment_assignments', schema=None) as batch_op:
        batch_op.drop_index('ix_equipment_assignments_event')
    op.drop_table('equipment_assignments')

    with op.batch_alter_table('crew_assignments', schema=None) as batch_op:
        batch_op.drop_index('ix_crew_assignments_crew')
        batch_op.drop_index('ix_crew_assignments_event')
    op.drop_table('crew_assignments')

    with op.batch_alter_table('equipment', schema=None) as batch_op:
        batch_op.drop_index('ix_equipment_category_id')
    op.drop_table('equipment')

    op.drop_table('equipment_categories')
    op.drop_table('crew_members')
    op.drop_table('positions')

    with op.batch_alter_table('events', schema=None) as batch_op:
        batch_op.drop_index('ix_events_status')
        batch_op.drop_index('ix_events_cost_center')
        batch_op.drop_index('ix_events_event_date')
    op.drop_table('events')

    # PostgreSQL keeps enum types after their tables are dropped
    assignment_status.drop(op.get_bind(), checkfirst=True)
    event_status.drop(op.get_bind(), checkfirst=True)
