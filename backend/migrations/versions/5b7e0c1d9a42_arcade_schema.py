"""arcade schema: users, games/roster, matches, teams, results

Revision ID: 5b7e0c1d9a42
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b7e0c1d9a42'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('email', sa.String(length=120), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)
        op.create_index('ix_user_email', 'user', ['email'], unique=True)

    if 'game' not in existing_tables:
        op.create_table(
            'game',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=120), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
        )

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('game_id', sa.Integer(), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('xp', sa.Integer(), nullable=False, server_default='0'),
        )
        op.create_index('ix_player_game_id', 'player', ['game_id'])

    if 'match' not in existing_tables:
        # result_id FK is added once the result table exists
        op.create_table(
            'match',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=120), nullable=False),
            sa.Column('host_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('game_id', sa.Integer(), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('secret_hash', sa.String(length=128), nullable=False),
            sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('result_id', sa.Integer(), nullable=True),
            sa.Column('date', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_match_host_id', 'match', ['host_id'])

    if 'match_player' not in existing_tables:
        op.create_table(
            'match_player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('match_id', sa.Integer(), sa.ForeignKey('match.id'), nullable=False),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('xp', sa.Integer(), nullable=False, server_default='0'),
        )
        op.create_index('ix_match_player_match_id', 'match_player', ['match_id'])

    if 'team' not in existing_tables:
        op.create_table(
            'team',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=120), nullable=False),
            sa.Column('match_id', sa.Integer(), sa.ForeignKey('match.id'), nullable=False),
            sa.Column('owner_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('game_id', sa.Integer(), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('secret_hash', sa.String(length=128), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_team_match_id', 'team', ['match_id'])
        op.create_index('ix_team_owner_id', 'team', ['owner_id'])

    if 'team_member' not in existing_tables:
        op.create_table(
            'team_member',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('team_id', sa.Integer(), sa.ForeignKey('team.id'), nullable=False),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        )
        op.create_index('ix_team_member_team_id', 'team_member', ['team_id'])

    if 'result' not in existing_tables:
        op.create_table(
            'result',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('match_id', sa.Integer(), sa.ForeignKey('match.id'), nullable=False),
            sa.Column('game_id', sa.Integer(), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_result_match_id', 'result', ['match_id'])

    if 'result_entry' not in existing_tables:
        op.create_table(
            'result_entry',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('result_id', sa.Integer(), sa.ForeignKey('result.id'), nullable=False),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('xp', sa.Integer(), nullable=False, server_default='0'),
        )
        op.create_index('ix_result_entry_result_id', 'result_entry', ['result_id'])

    with op.batch_alter_table('match') as batch_op:
        batch_op.create_foreign_key('fk_match_result_id', 'result', ['result_id'], ['id'])


def downgrade():
    with op.batch_alter_table('match') as batch_op:
        batch_op.drop_constraint('fk_match_result_id', type_='foreignkey')
    for table in ('result_entry', 'result', 'team_member', 'team', 'match_player', 'match', 'player', 'game', 'user'):
        op.drop_table(table)
