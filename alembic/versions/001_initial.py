"""Initial schema

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create permissions table
    op.create_table('permissions',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('name', sa.String(length=50), nullable=False),
    sa.Column('description', sa.String(length=255), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_permissions_name', 'permissions', ['name'], unique=True)

    # Create pilots table
    op.create_table('pilots',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('email', sa.String(length=100), nullable=False),
    sa.Column('hashed_password', sa.String(length=255), nullable=False),
    sa.Column('first_name', sa.String(length=50), nullable=False),
    sa.Column('last_name', sa.String(length=50), nullable=False),
    sa.Column('callsign', sa.String(length=20), nullable=True),
    sa.Column('ivao_id', sa.String(length=20), nullable=True),
    sa.Column('vatsim_id', sa.String(length=20), nullable=True),
    sa.Column('location_icao', sa.String(length=4), nullable=True),
    sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_pilots_email', 'pilots', ['email'], unique=True)
    op.create_index('ix_pilots_callsign', 'pilots', ['callsign'], unique=True)

    # Create pilot_permissions association table
    op.create_table('pilot_permissions',
    sa.Column('pilot_id', sa.Integer(), nullable=False),
    sa.Column('permission_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['pilot_id'], ['pilots.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['permission_id'], ['permissions.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('pilot_id', 'permission_id')
    )

    # Create fleet table
    op.create_table('fleet',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('aircraft_id', sa.String(length=10), nullable=False),
    sa.Column('name', sa.String(length=50), nullable=False),
    sa.Column('state', sa.Integer(), server_default='0', nullable=False),
    sa.Column('life', sa.Integer(), server_default='100', nullable=False),
    sa.Column('location_icao', sa.String(length=4), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_fleet_state', 'fleet', ['state'])
    op.create_index('ix_fleet_location_icao', 'fleet', ['location_icao'])

    # Create flights table
    op.create_table('flights',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('callsign', sa.String(length=20), nullable=False),
    sa.Column('aircraft', sa.String(length=40), nullable=False),
    sa.Column('flight_type', sa.Integer(), nullable=False),
    sa.Column('status', sa.Integer(), server_default='1', nullable=False),
    sa.Column('network', sa.String(length=10), nullable=True),
    sa.Column('departure_icao', sa.String(length=4), nullable=False),
    sa.Column('arrival_icao', sa.String(length=4), nullable=False),
    sa.Column('route_id', sa.Integer(), nullable=True),
    sa.Column('fleet_id', sa.Integer(), nullable=True),
    sa.Column('pilot_id', sa.Integer(), nullable=False),
    sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('pirep', sa.Text(), nullable=True),
    sa.Column('comment', sa.Text(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.ForeignKeyConstraint(['fleet_id'], ['fleet.id'], ondelete='SET NULL'),
    sa.ForeignKeyConstraint(['pilot_id'], ['pilots.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_flights_callsign', 'flights', ['callsign'])
    op.create_index('ix_flights_status', 'flights', ['status'])
    op.create_index('ix_flights_network', 'flights', ['network'])
    op.create_index('ix_flights_fleet_id', 'flights', ['fleet_id'])
    op.create_index('ix_flights_pilot_id', 'flights', ['pilot_id'])
    op.create_index('idx_flight_network_status', 'flights', ['network', 'status'])


def downgrade() -> None:
    op.drop_table('flights')
    op.drop_table('fleet')
    op.drop_table('pilot_permissions')
    op.drop_table('pilots')
    op.drop_table('permissions')
