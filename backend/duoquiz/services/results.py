from duoquiz.errors import NotFoundError
from duoquiz.models import PLAYER_TYPES


class ResultsAggregator:
    """Read-only recap view; scores come from the stored completion values."""

    def __init__(self, repository):
        self.repository = repository

    def get_results(self, quiz_id) -> dict:
        quiz = self.repository.get_quiz(quiz_id)
        if not quiz:
            raise NotFoundError()
        questions = self.repository.list_questions(quiz.id)
        answers = self.repository.list_answers(quiz.id)
        header = quiz.to_dict()
        header.pop('share_token', None)
        header.pop('expires_at', None)
        header['questions'] = [
            {
                'id': q.id,
                'question_text': q.question_text,
                'correct_answer_index': q.correct_answer_index,
            }
            for q in questions
        ]
        header['answers'] = [a.to_dict() for a in answers]
        header['total_questions'] = len(questions)
        header['players'] = {
            player_type: {
                'answered': sum(1 for a in answers if a.player_type == player_type),
                'completed': quiz.is_completed_by(player_type),
                'score': getattr(quiz, f'{player_type}_score'),
            }
            for player_type in PLAYER_TYPES
        }
        return header
