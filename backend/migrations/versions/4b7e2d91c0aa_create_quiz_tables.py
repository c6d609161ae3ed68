"""create quiz, question, answer and bank tables

Revision ID: 4b7e2d91c0aa
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7e2d91c0aa'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'quiz',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('language', sa.String(length=16), nullable=False),
        sa.Column('creator_name', sa.String(length=120), nullable=False),
        sa.Column('partner_name', sa.String(length=120), nullable=False),
        sa.Column('question_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('share_token', sa.String(length=64), nullable=True),
        sa.Column('creator_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('creator_completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('creator_score', sa.Integer(), nullable=True),
        sa.Column('partner_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('partner_completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('partner_score', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('quiz') as batch_op:
        batch_op.create_index(batch_op.f('ix_quiz_share_token'), ['share_token'], unique=True)

    op.create_table(
        'quiz_question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quiz_id', sa.String(length=32), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('options', sa.Text(), nullable=False),
        sa.Column('correct_answer_index', sa.Integer(), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['quiz_id'], ['quiz.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('quiz_id', 'order_index', name='uq_quiz_question_order'),
    )
    with op.batch_alter_table('quiz_question') as batch_op:
        batch_op.create_index(batch_op.f('ix_quiz_question_quiz_id'), ['quiz_id'], unique=False)

    op.create_table(
        'answer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quiz_id', sa.String(length=32), nullable=False),
        sa.Column('player_type', sa.String(length=16), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('selected_option_index', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['question_id'], ['quiz_question.id']),
        sa.ForeignKeyConstraint(['quiz_id'], ['quiz.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('quiz_id', 'player_type', 'question_id', name='uq_answer_player_question'),
    )
    with op.batch_alter_table('answer') as batch_op:
        batch_op.create_index(batch_op.f('ix_answer_quiz_id'), ['quiz_id'], unique=False)

    op.create_table(
        'bank_question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('language', sa.String(length=16), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('options', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('bank_question') as batch_op:
        batch_op.create_index(batch_op.f('ix_bank_question_language'), ['language'], unique=False)


def downgrade():
    with op.batch_alter_table('bank_question') as batch_op:
        batch_op.drop_index(batch_op.f('ix_bank_question_language'))
    op.drop_table('bank_question')
    with op.batch_alter_table('answer') as batch_op:
        batch_op.drop_index(batch_op.f('ix_answer_quiz_id'))
    op.drop_table('answer')
    with op.batch_alter_table('quiz_question') as batch_op:
        batch_op.drop_index(batch_op.f('ix_quiz_question_quiz_id'))
    op.drop_table('quiz_question')
    with op.batch_alter_table('quiz') as batch_op:
        batch_op.drop_index(batch_op.f('ix_quiz_share_token'))
    op.drop_table('quiz')
