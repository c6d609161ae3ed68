"""Persistence boundary for quiz, question and answer rows."""

from contextlib import contextmanager
from typing import Iterable, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from duoquiz.errors import DuplicateAnswerError, ValidationError
from duoquiz.models import Answer, PLAYER_TYPES, Question, Quiz


class SqlQuizRepository:
    """Quiz aggregate storage on top of a Flask-SQLAlchemy session.

    Built once by the application factory and passed to every service.
    Writes stay pending until the enclosing ``unit_of_work`` commits.
    """

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    @contextmanager
    def unit_of_work(self):
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # Quiz header

    def add_quiz(self, quiz: Quiz, questions: Iterable[Question] = ()) -> Quiz:
        self.session.add(quiz)
        for question in questions:
            question.quiz_id = quiz.id
            self.session.add(question)
        self.session.flush()
        return quiz

    def get_quiz(self, quiz_id, for_update=False) -> Optional[Quiz]:
        """Load a quiz header; ``for_update`` row-locks it until commit."""
        if not quiz_id:
            return None
        if for_update:
            return self.session.execute(
                select(Quiz).where(Quiz.id == quiz_id).with_for_update()
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
        return self.session.get(Quiz, quiz_id)

    def get_quiz_by_token(self, token) -> Optional[Quiz]:
        if not token:
            return None
        return self.session.execute(
            select(Quiz).where(Quiz.share_token == token)
        ).scalar_one_or_none()

    def token_exists(self, token) -> bool:
        return self.session.execute(
            select(Quiz.id).where(Quiz.share_token == token)
        ).first() is not None

    def set_share_token(self, quiz_id, token) -> bool:
        result = self.session.execute(
            update(Quiz).where(Quiz.id == quiz_id).values(share_token=token)
        )
        return result.rowcount == 1

    # Questions and answers

    def list_questions(self, quiz_id) -> List[Question]:
        return list(self.session.execute(
            select(Question).where(Question.quiz_id == quiz_id).order_by(Question.order_index)
        ).scalars())

    def list_answers(self, quiz_id, player_type=None) -> List[Answer]:
        stmt = select(Answer).where(Answer.quiz_id == quiz_id)
        if player_type:
            stmt = stmt.where(Answer.player_type == player_type)
        return list(self.session.execute(stmt.order_by(Answer.id)).scalars())

    def append_answers(self, quiz_id, player_type, rows) -> List[Answer]:
        """Insert a whole batch in one flush.

        The (quiz, player, question) unique constraint is the authority on
        duplicates; a violation discards every row of the batch.
        """
        answers = [
            Answer(
                quiz_id=quiz_id,
                player_type=player_type,
                question_id=row['question_id'],
                selected_option_index=row['selected_option_index'],
            )
            for row in rows
        ]
        self.session.add_all(answers)
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateAnswerError()
        return answers

    def mark_completed(self, quiz_id, player_type, score, completed_at) -> bool:
        """Flip ``<player>_completed`` and store the score only if still false.

        Returns True for the single caller whose conditional update matched.
        """
        if player_type not in PLAYER_TYPES:
            raise ValidationError(f'Unknown player type {player_type!r}')
        completed_col = getattr(Quiz, f'{player_type}_completed')
        result = self.session.execute(
            update(Quiz)
            .where(Quiz.id == quiz_id, completed_col.is_(False))
            .values({
                f'{player_type}_completed': True,
                f'{player_type}_completed_at': completed_at,
                f'{player_type}_score': score,
            })
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # Stats

    def completion_stats(self) -> dict:
        total_quizzes = self.session.execute(select(func.count(Quiz.id))).scalar_one()
        total_questions = self.session.execute(select(func.count(Question.id))).scalar_one()
        completed, average = self.session.execute(
            select(func.count(Quiz.id), func.avg(Quiz.partner_score)).where(Quiz.partner_completed.is_(True))
        ).one()
        return {
            'total_quizzes': total_quizzes,
            'total_questions_generated': total_questions,
            'total_completed_quizzes': completed,
            'average_score': int(float(average) + 0.5) if average is not None else 0,
        }
