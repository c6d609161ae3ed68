from duoquiz import db
from datetime import datetime, timedelta, timezone
import json
import secrets

PLAYER_TYPES = ('creator', 'partner')
QUESTION_TYPES = ('yesno', 'multiple')


def utcnow():
    return datetime.now(timezone.utc)


def as_utc(value):
    """SQLite drops tzinfo on the way back; treat naive values as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def isoformat(value):
    value = as_utc(value)
    return value.isoformat() if value else None


def generate_quiz_id():
    """Short URL-safe quiz id (12 characters)."""
    return secrets.token_urlsafe(9)


class Quiz(db.Model):
    __tablename__ = 'quiz'
    id = db.Column(db.String(32), primary_key=True, default=generate_quiz_id)
    language = db.Column(db.String(16), nullable=False)
    creator_name = db.Column(db.String(120), nullable=False)
    partner_name = db.Column(db.String(120), nullable=False)
    question_count = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)
    share_token = db.Column(db.String(64), unique=True, index=True, nullable=True)
    creator_completed = db.Column(db.Boolean, default=False, nullable=False)
    creator_completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    creator_score = db.Column(db.Integer, nullable=True)
    partner_completed = db.Column(db.Boolean, default=False, nullable=False)
    partner_completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    partner_score = db.Column(db.Integer, nullable=True)

    questions = db.relationship(
        'Question', back_populates='quiz', order_by='Question.order_index', lazy='select'
    )

    def __init__(self, ttl_days=30, **kwargs):
        super(Quiz, self).__init__(**kwargs)
        if not self.id:
            self.id = generate_quiz_id()
        if not self.created_at:
            self.created_at = utcnow()
        if not self.expires_at:
            self.expires_at = self.created_at + timedelta(days=ttl_days)
        if self.creator_completed is None:
            self.creator_completed = False
        if self.partner_completed is None:
            self.partner_completed = False

    def is_expired(self, now=None):
        now = now or utcnow()
        return as_utc(self.expires_at) < now

    def is_completed_by(self, player_type):
        return bool(getattr(self, f'{player_type}_completed'))

    def to_dict(self, include_questions=False):
        payload = {
            'id': self.id,
            'language': self.language,
            'creator_name': self.creator_name,
            'partner_name': self.partner_name,
            'question_count': self.question_count,
            'created_at': isoformat(self.created_at),
            'expires_at': isoformat(self.expires_at),
            'share_token': self.share_token,
            'creator_completed': self.creator_completed,
            'creator_completed_at': isoformat(self.creator_completed_at),
            'creator_score': self.creator_score,
            'partner_completed': self.partner_completed,
            'partner_completed_at': isoformat(self.partner_completed_at),
            'partner_score': self.partner_score,
        }
        if include_questions:
            payload['questions'] = [q.to_dict() for q in self.questions]
        return payload


class Question(db.Model):
    __tablename__ = 'quiz_question'
    __table_args__ = (
        db.UniqueConstraint('quiz_id', 'order_index', name='uq_quiz_question_order'),
    )
    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.String(32), db.ForeignKey('quiz.id'), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(16), nullable=False)
    options = db.Column(db.Text, nullable=False)  # JSON-encoded list of {text, index}
    correct_answer_index = db.Column(db.Integer, nullable=False)
    is_custom = db.Column(db.Boolean, default=False, nullable=False)
    order_index = db.Column(db.Integer, nullable=False)

    quiz = db.relationship('Quiz', back_populates='questions')

    @property
    def option_list(self):
        return json.loads(self.options) if self.options else []

    def to_dict(self):
        return {
            'id': self.id,
            'quiz_id': self.quiz_id,
            'question_text': self.question_text,
            'type': self.type,
            'options': self.option_list,
            'correct_answer_index': self.correct_answer_index,
            'is_custom': self.is_custom,
            'order_index': self.order_index,
        }


class Answer(db.Model):
    __tablename__ = 'answer'
    __table_args__ = (
        db.UniqueConstraint('quiz_id', 'player_type', 'question_id', name='uq_answer_player_question'),
    )
    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.String(32), db.ForeignKey('quiz.id'), nullable=False, index=True)
    player_type = db.Column(db.String(16), nullable=False)
    question_id = db.Column(db.Integer, db.ForeignKey('quiz_question.id'), nullable=False)
    selected_option_index = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'question_id': self.question_id,
            'selected_option_index': self.selected_option_index,
            'player_type': self.player_type,
        }


class BankQuestion(db.Model):
    """Predefined question offered to creators when they build a quiz."""
    __tablename__ = 'bank_question'
    id = db.Column(db.Integer, primary_key=True)
    language = db.Column(db.String(16), nullable=False, index=True)
    type = db.Column(db.String(16), nullable=False)
    question_text = db.Column(db.Text, nullable=False)
    options = db.Column(db.Text, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'question_text': self.question_text,
            'options': json.loads(self.options) if self.options else [],
        }
