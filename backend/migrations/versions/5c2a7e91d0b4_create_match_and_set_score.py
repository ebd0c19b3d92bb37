"""create match and set_score tables

Revision ID: 5c2a7e91d0b4
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a7e91d0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'match',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('team1_name', sa.String(length=64), nullable=False),
        sa.Column('team2_name', sa.String(length=64), nullable=False),
        sa.Column('team1_score', sa.Integer(), nullable=False),
        sa.Column('team2_score', sa.Integer(), nullable=False),
        sa.Column('team1_sets', sa.Integer(), nullable=False),
        sa.Column('team2_sets', sa.Integer(), nullable=False),
        sa.Column('current_set', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_scoring_team', sa.String(length=8), nullable=True),
        sa.Column('last_score_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('undo_used', sa.Boolean(), nullable=False),
        sa.Column('previous_team1_score', sa.Integer(), nullable=True),
        sa.Column('previous_team2_score', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('match') as batch_op:
        batch_op.create_index(batch_op.f('ix_match_status'), ['status'], unique=False)

    op.create_table(
        'set_score',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('match_id', sa.Integer(), nullable=False),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('team1_points', sa.Integer(), nullable=False),
        sa.Column('team2_points', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['match_id'], ['match.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('match_id', 'set_number', name='uq_set_score_match_set_number'),
    )
    with op.batch_alter_table('set_score') as batch_op:
        batch_op.create_index(batch_op.f('ix_set_score_match_id'), ['match_id'], unique=False)


def downgrade():
    with op.batch_alter_table('set_score') as batch_op:
        batch_op.drop_index(batch_op.f('ix_set_score_match_id'))
    op.drop_table('set_score')

    with op.batch_alter_table('match') as batch_op:
        batch_op.drop_index(batch_op.f('ix_match_status'))
    op.drop_table('match')
