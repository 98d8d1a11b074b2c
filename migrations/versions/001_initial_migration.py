# migrations/versions/001_initial_migration.py

"""Initial migration with all tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _create(name, *columns, constraints=(), indexes=()):
    op.create_table(name, *_base_columns(), *columns, sa.PrimaryKeyConstraint('id'), *constraints)
    for column in ('created_at',) + tuple(indexes):
        op.create_index(op.f(f'ix_{name}_{column}'), name, [column])


def upgrade() -> None:
    # Users and sign-in
    _create('users',
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('email_verified_at', sa.DateTime(), nullable=True),
            sa.Column('name', sa.String(), nullable=True),
            sa.Column('image', sa.String(), nullable=True),
            sa.Column('role', sa.String(), server_default='user', nullable=False),
            sa.Column('bio', sa.Text(), nullable=True),
            sa.Column('interests', sa.JSON(), nullable=False),
            sa.Column('skills', sa.JSON(), nullable=False),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('connections', sa.JSON(), nullable=False),
            sa.Column('blocked_users', sa.JSON(), nullable=False),
            sa.Column('is_banned', sa.Boolean(), server_default='false', nullable=False),
            sa.Column('last_active', sa.DateTime(), nullable=True),
            sa.Column('year_of_study', sa.String(), nullable=True),
            sa.Column('department', sa.String(), nullable=True),
            sa.Column('major', sa.String(), nullable=True),
            sa.Column('looking_for', sa.JSON(), nullable=False),
            sa.Column('availability', sa.String(), nullable=True),
            sa.Column('study_spot', sa.String(), nullable=True),
            sa.Column('favorite_subject', sa.String(), nullable=True),
            sa.Column('weekend_activity', sa.String(), nullable=True),
            sa.Column('superpower', sa.String(), nullable=True),
            constraints=(sa.UniqueConstraint('email'),),
            indexes=('email',))

    _create('verification_codes',
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('code_hash', sa.String(), nullable=False),
            sa.Column('expires_at', sa.DateTime(), nullable=False),
            constraints=(sa.UniqueConstraint('email'),),
            indexes=('email',))

    # Social graph
    _create('connection_requests',
            sa.Column('sender_id', sa.String(), nullable=False),
            sa.Column('receiver_id', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            constraints=(sa.UniqueConstraint('sender_id', 'receiver_id', name='uq_connection_requests_pair'),),
            indexes=('sender_id', 'receiver_id'))

    _create('messages',
            sa.Column('sender_id', sa.String(), nullable=False),
            sa.Column('receiver_id', sa.String(), nullable=False),
            sa.Column('body', sa.Text(), nullable=False),
            sa.Column('read', sa.Boolean(), server_default='false', nullable=False),
            indexes=('sender_id', 'receiver_id'))

    _create('user_reports',
            sa.Column('reporter_id', sa.String(), nullable=False),
            sa.Column('reported_user_id', sa.String(), nullable=False),
            sa.Column('reason', sa.Text(), nullable=True),
            constraints=(sa.UniqueConstraint('reporter_id', 'reported_user_id', name='uq_user_reports_pair'),),
            indexes=('reporter_id', 'reported_user_id'))

    _create('notifications',
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('related_user_id', sa.String(), nullable=True),
            sa.Column('read', sa.Boolean(), server_default='false', nullable=False),
            indexes=('user_id',))

    # Games
    _create('game_sessions',
            sa.Column('game_type', sa.String(), nullable=False),
            sa.Column('player_id', sa.String(), nullable=False),
            sa.Column('opponent_id', sa.String(), nullable=True),
            sa.Column('status', sa.String(), server_default='in_progress', nullable=False),
            sa.Column('current_turn', sa.String(), nullable=True),
            sa.Column('state', sa.JSON(), nullable=False),
            sa.Column('result', sa.String(), nullable=True),
            sa.Column('winner_id', sa.String(), nullable=True),
            sa.Column('difficulty', sa.String(), nullable=True),
            indexes=('game_type', 'player_id', 'opponent_id'))

    _create('game_invitations',
            sa.Column('sender_id', sa.String(), nullable=False),
            sa.Column('receiver_id', sa.String(), nullable=False),
            sa.Column('game_type', sa.String(), nullable=False),
            sa.Column('status', sa.String(), server_default='pending', nullable=False),
            sa.Column('session_id', sa.String(), nullable=True),
            indexes=('sender_id', 'receiver_id'))

    _create('game_stats',
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('game_type', sa.String(), nullable=False),
            sa.Column('wins', sa.Integer(), server_default='0', nullable=False),
            sa.Column('losses', sa.Integer(), server_default='0', nullable=False),
            sa.Column('draws', sa.Integer(), server_default='0', nullable=False),
            sa.Column('total_games', sa.Integer(), server_default='0', nullable=False),
            constraints=(sa.UniqueConstraint('user_id', 'game_type', name='uq_game_stats_user_game'),),
            indexes=('user_id', 'game_type'))

    _create('truth_dare_sessions',
            sa.Column('player1_id', sa.String(), nullable=False),
            sa.Column('player2_id', sa.String(), nullable=False),
            sa.Column('status', sa.String(), server_default='active', nullable=False),
            sa.Column('current_turn', sa.String(), nullable=False),
            sa.Column('rounds', sa.JSON(), nullable=False),
            indexes=('player1_id', 'player2_id'))

    # Feed
    _create('spill_posts',
            sa.Column('author_id', sa.String(), nullable=False),
            sa.Column('content', sa.Text(), nullable=True),
            sa.Column('media_url', sa.String(), nullable=True),
            sa.Column('media_type', sa.String(), nullable=True),
            sa.Column('reactions', sa.JSON(), nullable=False),
            indexes=('author_id',))

    _create('collaboration_posts',
            sa.Column('author_id', sa.String(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('tags', sa.JSON(), nullable=False),
            sa.Column('volunteers', sa.JSON(), nullable=False),
            indexes=('author_id',))

    _create('events',
            sa.Column('creator_id', sa.String(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('tags', sa.JSON(), nullable=False),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('event_date', sa.DateTime(), nullable=True),
            sa.Column('interested_users', sa.JSON(), nullable=False),
            indexes=('creator_id',))

    _create('gossip_messages',
            sa.Column('sender_id', sa.String(), nullable=False),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('reactions', sa.JSON(), nullable=False),
            indexes=('sender_id',))


def downgrade() -> None:
    op.drop_table('gossip_messages')
    op.drop_table('events')
    op.drop_table('collaboration_posts')
    op.drop_table('spill_posts')
    op.drop_table('truth_dare_sessions')
    op.drop_table('game_stats')
    op.drop_table('game_invitations')
    op.drop_table('game_sessions')
    op.drop_table('notifications')
    op.drop_table('user_reports')
    op.drop_table('messages')
    op.drop_table('connection_requests')
    op.drop_table('verification_codes')
    op.drop_table('users')
