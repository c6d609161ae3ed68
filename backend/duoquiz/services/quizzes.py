"""Creation, lookup and duplication of quiz aggregates."""

import json

from flask import current_app

from duoquiz.errors import ExpiredError, NotFoundError, ValidationError
from duoquiz.models import QUESTION_TYPES, Question, Quiz


def _pick(data, *keys):
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _required_text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    return value.strip()


def normalize_options(raw):
    """Accept ``[{text, index}]`` or bare strings; re-index by position."""
    if not isinstance(raw, list) or not raw:
        raise ValidationError('options must be a non-empty list')
    options = []
    for position, opt in enumerate(raw):
        if isinstance(opt, str):
            text = opt
        elif isinstance(opt, dict):
            text = opt.get('text')
        else:
            text = None
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f'option {position} has no text')
        options.append({'text': text, 'index': position})
    return options


def build_question(data, order_index) -> Question:
    if not isinstance(data, dict):
        raise ValidationError(f'question {order_index} must be an object')
    text = _required_text(_pick(data, 'question_text', 'questionText'), f'question {order_index} text')
    qtype = _pick(data, 'type')
    if qtype not in QUESTION_TYPES:
        raise ValidationError(f'question {order_index} type must be one of {", ".join(QUESTION_TYPES)}')
    options = normalize_options(_pick(data, 'options'))
    correct = _pick(data, 'correct_answer_index', 'correctAnswerIndex')
    if not _is_int(correct) or not 0 <= correct < len(options):
        raise ValidationError(f'question {order_index} correct answer index is out of range')
    return Question(
        question_text=text,
        type=qtype,
        options=json.dumps(options),
        correct_answer_index=correct,
        is_custom=bool(_pick(data, 'is_custom', 'isCustom') or False),
        order_index=order_index,
    )


class QuizService:
    def __init__(self, repository, sharing, ttl_days=30):
        self.repository = repository
        self.sharing = sharing
        self.ttl_days = ttl_days

    def create(self, language, creator_name, partner_name, question_count, questions) -> Quiz:
        """Persist a quiz header with its ordered questions and a share token.

        Header, questions and token are committed together; a failure at any
        step leaves nothing behind.
        """
        language = _required_text(language, 'language')
        creator_name = _required_text(creator_name, 'creatorName')
        partner_name = _required_text(partner_name, 'partnerName')
        if not _is_int(question_count) or question_count <= 0:
            raise ValidationError('questionCount must be a positive integer')
        if not isinstance(questions, list) or not questions:
            raise ValidationError('questions must be a non-empty list')
        if len(questions) != question_count:
            raise ValidationError('questionCount does not match the number of questions')

        question_rows = [build_question(q, idx) for idx, q in enumerate(questions)]
        quiz = Quiz(
            ttl_days=self.ttl_days,
            language=language,
            creator_name=creator_name,
            partner_name=partner_name,
            question_count=question_count,
        )
        with self.repository.unit_of_work() as repo:
            quiz.share_token = self.sharing.mint()
            repo.add_quiz(quiz, question_rows)
        current_app.logger.info(
            f"[quiz-create] quiz={quiz.id} language={language} questions={len(question_rows)}"
        )
        return quiz

    def get(self, quiz_id) -> Quiz:
        """Return a playable quiz; expired quizzes raise ``ExpiredError``."""
        quiz = self.repository.get_quiz(quiz_id)
        if not quiz:
            raise NotFoundError()
        if quiz.is_expired():
            raise ExpiredError()
        return quiz

    def duplicate(self, quiz_id, new_creator_name=None, new_partner_name=None) -> Quiz:
        source = self.repository.get_quiz(quiz_id)
        if not source:
            raise NotFoundError()
        clone = Quiz(
            ttl_days=self.ttl_days,
            language=source.language,
            creator_name=new_creator_name or source.creator_name,
            partner_name=new_partner_name or source.partner_name,
            question_count=source.question_count,
        )
        copies = [
            Question(
                question_text=q.question_text,
                type=q.type,
                options=q.options,
                correct_answer_index=q.correct_answer_index,
                is_custom=q.is_custom,
                order_index=q.order_index,
            )
            for q in self.repository.list_questions(source.id)
        ]
        with self.repository.unit_of_work() as repo:
            repo.add_quiz(clone, copies)
        current_app.logger.info(f"[quiz-duplicate] source={source.id} clone={clone.id} questions={len(copies)}")
        return clone
