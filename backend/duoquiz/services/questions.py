"""Predefined question bank used by creators to fill a quiz."""

import json

from sqlalchemy import func, select

from duoquiz.errors import ValidationError
from duoquiz.models import QUESTION_TYPES, BankQuestion
from .quizzes import normalize_options


class QuestionBankSupplier:
    def __init__(self, db):
        self.db = db

    def random_questions(self, language, count):
        stmt = (
            select(BankQuestion)
            .where(BankQuestion.language == language)
            .order_by(func.random())
            .limit(count)
        )
        return list(self.db.session.execute(stmt).scalars())

    def add_bank_questions(self, entries) -> int:
        if not isinstance(entries, list):
            raise ValidationError('Question file must contain a list')
        rows = []
        for position, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValidationError(f'Bank entry {position} is incomplete')
            if entry.get('type') not in QUESTION_TYPES or not entry.get('language') or not entry.get('question_text'):
                raise ValidationError(f'Bank entry {position} is incomplete')
            rows.append(BankQuestion(
                language=entry['language'],
                type=entry['type'],
                question_text=entry['question_text'],
                options=json.dumps(normalize_options(entry.get('options'))),
            ))
        self.db.session.add_all(rows)
        self.db.session.commit()
        return len(rows)
