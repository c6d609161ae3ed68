"""Batch answer submission with guarded completion."""

from flask import current_app

from duoquiz.errors import (
    AlreadyCompletedError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from duoquiz.models import PLAYER_TYPES, utcnow
from .scoring import score


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def parse_batch(batch):
    """Validate ``[{questionId, selectedOptionIndex}]`` into repository rows."""
    if not isinstance(batch, list) or not batch:
        raise ValidationError()
    rows = []
    for item in batch:
        if not isinstance(item, dict):
            raise ValidationError()
        question_id = item.get('questionId', item.get('question_id'))
        selected = item.get('selectedOptionIndex', item.get('selected_option_index'))
        if not _is_int(question_id) or not _is_int(selected) or selected < 0:
            raise ValidationError()
        rows.append({'question_id': question_id, 'selected_option_index': selected})
    return rows


class AnswerSubmissionService:
    def __init__(self, repository):
        self.repository = repository

    def submit(self, quiz_id, player_type, batch) -> dict:
        """Append one player's batch and complete the quiz when it is covered.

        Runs as a single unit of work: the quiz row is locked, the batch is
        inserted, the player's canonical answer set is re-read and scored,
        and the completion flag flips through a conditional update. Any
        failure, including losing the completion race, rolls back the batch.
        """
        if not quiz_id or player_type not in PLAYER_TYPES:
            raise ValidationError()
        rows = parse_batch(batch)

        with self.repository.unit_of_work() as repo:
            quiz = repo.get_quiz(quiz_id, for_update=True)
            if not quiz:
                raise NotFoundError()
            if quiz.is_completed_by(player_type):
                raise AlreadyCompletedError()

            questions = repo.list_questions(quiz_id)
            if not questions:
                raise InternalError(f'Quiz {quiz_id} has no questions')
            known_ids = {q.id for q in questions}
            if any(row['question_id'] not in known_ids for row in rows):
                raise ValidationError('Answer references a question outside this quiz')

            repo.append_answers(quiz_id, player_type, rows)

            answers = repo.list_answers(quiz_id, player_type)
            answered = {a.question_id for a in answers} & known_ids
            remaining = len(known_ids) - len(answered)
            if remaining:
                current_app.logger.info(
                    f"[answers-partial] quiz={quiz_id} player={player_type} answered={len(answered)} remaining={remaining}"
                )
                return {'completed': False, 'score': None, 'answered': len(answered), 'remaining': remaining}

            percentage = score(questions, answers)
            if not repo.mark_completed(quiz_id, player_type, percentage, utcnow()):
                current_app.logger.warning(f"[answers-race] quiz={quiz_id} player={player_type} lost completion race")
                raise AlreadyCompletedError()

        current_app.logger.info(f"[answers-complete] quiz={quiz_id} player={player_type} score={percentage}")
        return {'completed': True, 'score': percentage, 'answered': len(answered), 'remaining': 0}
