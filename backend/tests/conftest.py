import os
import sys
import pytest

# Ensure the backend root (containing the `duoquiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from duoquiz import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    APP_ENV = 'test'
    QUIZ_TTL_DAYS = 30
    FRONTEND_DOMAIN = 'https://duoquiz.test'
    SHARE_TOKEN_BYTES = 24
    ALLOWED_QUESTION_COUNTS = (8, 15, 20)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import duoquiz.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def services(flask_app):
    return flask_app.extensions['duoquiz']


def yesno_questions(correct_indices):
    return [
        {
            'question_text': f'Question {i + 1}?',
            'type': 'yesno',
            'options': [{'text': 'Yes', 'index': 0}, {'text': 'No', 'index': 1}],
            'correct_answer_index': correct,
            'is_custom': False,
        }
        for i, correct in enumerate(correct_indices)
    ]


@pytest.fixture()
def make_quiz(client):
    """Create a quiz over HTTP and return its JSON payload with questions."""
    def _make(correct_indices=(0, 1, 0, 1), **overrides):
        body = {
            'language': 'en',
            'creatorName': 'Alice',
            'partnerName': 'Sam',
            'questionCount': len(correct_indices),
            'questions': yesno_questions(correct_indices),
        }
        body.update(overrides)
        res = client.post('/api/quizzes', json=body)
        assert res.status_code == 201, res.get_json()
        created = res.get_json()
        quiz = client.get(f"/api/quizzes/{created['quizId']}").get_json()
        quiz['shareToken'] = created['shareToken']
        return quiz
    return _make


def batch_for(quiz, selections):
    return [
        {'questionId': q['id'], 'selectedOptionIndex': sel}
        for q, sel in zip(quiz['questions'], selections)
    ]
