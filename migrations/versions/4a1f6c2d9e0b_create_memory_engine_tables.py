"""create memory engine tables

Revision ID: 4a1f6c2d9e0b
Revises:
Create Date: 2026-10-19 09:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel.sql.sqltypes

# revision identifiers, used by Alembic.
revision: str = '4a1f6c2d9e0b'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('words',
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('word_text', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('word_length', sa.Integer(), nullable=False),
        sa.Column('difficulty_level', sa.Enum('EASY', 'MEDIUM', 'HARD', 'VERY_HARD', name='difficultylevel'), nullable=False),
        sa.Column('part_of_speech', sa.Enum('NOUN', 'VERB', 'ADJECTIVE', 'ADVERB', 'PHRASE', 'OTHER', name='partofspeech'), nullable=True),
        sa.Column('definition', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('phonetic', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('language', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_words_word_text'), 'words', ['word_text'], unique=False)
    op.create_index(op.f('ix_words_difficulty_level'), 'words', ['difficulty_level'], unique=False)
    op.create_index(op.f('ix_words_part_of_speech'), 'words', ['part_of_speech'], unique=False)

    op.create_table('user_words',
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('word_id', sa.Uuid(), nullable=False),
        sa.Column('memory_level', sa.Float(), nullable=False),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('last_reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('last_memory_update_at', sa.DateTime(), nullable=True),
        sa.Column('last_decayed_at', sa.DateTime(), nullable=True),
        sa.Column('times_reviewed', sa.Integer(), nullable=False),
        sa.Column('times_marked_known', sa.Integer(), nullable=False),
        sa.Column('times_marked_review', sa.Integer(), nullable=False),
        sa.Column('is_quick_learner', sa.Boolean(), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['word_id'], ['words.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'word_id', name='uq_user_words_user_word')
    )
    op.create_index(op.f('ix_user_words_user_id'), 'user_words', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_words_word_id'), 'user_words', ['word_id'], unique=False)
    op.create_index(op.f('ix_user_words_memory_level'), 'user_words', ['memory_level'], unique=False)
    op.create_index(op.f('ix_user_words_last_reviewed_at'), 'user_words', ['last_reviewed_at'], unique=False)

    op.create_table('review_history',
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('word_id', sa.Uuid(), nullable=False),
        sa.Column('user_word_id', sa.Uuid(), nullable=False),
        sa.Column('action_type', sa.Enum('MARKED_KNOWN', 'MARKED_REVIEW', 'SKIPPED', 'SYSTEM_DECAY', name='reviewactiontype'), nullable=False),
        sa.Column('memory_before', sa.Float(), nullable=False),
        sa.Column('memory_after', sa.Float(), nullable=False),
        sa.Column('memory_change', sa.Float(), nullable=False),
        sa.Column('session_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['user_word_id'], ['user_words.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_review_history_user_id'), 'review_history', ['user_id'], unique=False)
    op.create_index(op.f('ix_review_history_word_id'), 'review_history', ['word_id'], unique=False)
    op.create_index(op.f('ix_review_history_user_word_id'), 'review_history', ['user_word_id'], unique=False)
    op.create_index(op.f('ix_review_history_action_type'), 'review_history', ['action_type'], unique=False)
    # Quick-learner window lookups
    op.create_index('ix_review_history_user_word_created', 'review_history', ['user_id', 'word_id', 'created_at'], unique=False)

    op.create_table('daily_stats',
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('stat_date', sa.Date(), nullable=False),
        sa.Column('words_reviewed', sa.Integer(), nullable=False),
        sa.Column('words_marked_known', sa.Integer(), nullable=False),
        sa.Column('words_marked_review', sa.Integer(), nullable=False),
        sa.Column('words_decayed', sa.Integer(), nullable=False),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'stat_date', name='uq_daily_stats_user_date')
    )
    op.create_index(op.f('ix_daily_stats_user_id'), 'daily_stats', ['user_id'], unique=False)
    op.create_index(op.f('ix_daily_stats_stat_date'), 'daily_stats', ['stat_date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_daily_stats_stat_date'), table_name='daily_stats')
    op.drop_index(op.f('ix_daily_stats_user_id'), table_name='daily_stats')
    op.drop_table('daily_stats')
    op.drop_index('ix_review_history_user_word_created', table_name='review_history')
    op.drop_index(op.f('ix_review_history_action_type'), table_name='review_history')
    op.drop_index(op.f('ix_review_history_user_word_id'), table_name='review_history')
    op.drop_index(op.f('ix_review_history_word_id'), table_name='review_history')
    op.drop_index(op.f('ix_review_history_user_id'), table_name='review_history')
    op.drop_table('review_history')
    op.drop_index(op.f('ix_user_words_last_reviewed_at'), table_name='user_words')
    op.drop_index(op.f('ix_user_words_memory_level'), table_name='user_words')
    op.drop_index(op.f('ix_user_words_word_id'), table_name='user_words')
    op.drop_index(op.f('ix_user_words_user_id'), table_name='user_words')
    op.drop_table('user_words')
    op.drop_table('words')
    sa.Enum(name='reviewactiontype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='partofspeech').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='difficultylevel').drop(op.get_bind(), checkfirst=True)
