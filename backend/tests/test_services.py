import pytest

from duoquiz import db
from duoquiz.errors import AlreadyCompletedError, DuplicateAnswerError, NotFoundError, ValidationError
from duoquiz.models import Answer, Question, Quiz, utcnow

from conftest import yesno_questions


def _create(services, correct_indices=(0, 1, 0, 1)):
    return services.quizzes.create('en', 'Alice', 'Sam', len(correct_indices), yesno_questions(correct_indices))


def _rows(quiz_id, selections):
    questions = Question.query.filter_by(quiz_id=quiz_id).order_by(Question.order_index).all()
    return [{'questionId': q.id, 'selectedOptionIndex': s} for q, s in zip(questions, selections)]


def test_create_persists_header_questions_and_token(services):
    quiz = _create(services, [1, 0])
    stored = db.session.get(Quiz, quiz.id)
    assert stored.share_token
    assert stored.expires_at > stored.created_at
    assert [q.order_index for q in stored.questions] == [0, 1]


def test_create_rolls_back_when_question_insert_fails(services, monkeypatch):
    repo = services.repository
    original = repo.add_quiz

    def failing_add(quiz, questions=()):
        original(quiz, questions)
        raise RuntimeError('storage unavailable')

    monkeypatch.setattr(repo, 'add_quiz', failing_add)
    with pytest.raises(RuntimeError):
        _create(services)
    assert Quiz.query.count() == 0
    assert Question.query.count() == 0


def test_accepts_camel_case_and_string_options(services):
    quiz = services.quizzes.create('en', 'A', 'B', 1, [{
        'questionText': 'Cats or dogs?',
        'type': 'multiple',
        'options': ['Cats', 'Dogs', 'Both'],
        'correctAnswerIndex': 2,
        'isCustom': True,
    }])
    question = quiz.questions[0]
    assert question.is_custom is True
    assert question.option_list == [
        {'text': 'Cats', 'index': 0}, {'text': 'Dogs', 'index': 1}, {'text': 'Both', 'index': 2},
    ]


def test_question_count_must_match(services):
    with pytest.raises(ValidationError):
        services.quizzes.create('en', 'A', 'B', 3, yesno_questions([0, 1]))


def test_mark_completed_is_conditional(services):
    quiz = _create(services)
    repo = services.repository
    with repo.unit_of_work():
        assert repo.mark_completed(quiz.id, 'partner', 50, utcnow()) is True
    with repo.unit_of_work():
        assert repo.mark_completed(quiz.id, 'partner', 100, utcnow()) is False
    stored = db.session.get(Quiz, quiz.id)
    assert stored.partner_completed is True
    assert stored.partner_score == 50


def test_losing_completion_race_rolls_back_batch(services, monkeypatch):
    quiz = _create(services)
    monkeypatch.setattr(services.repository, 'mark_completed', lambda *args, **kwargs: False)
    with pytest.raises(AlreadyCompletedError):
        services.answers.submit(quiz.id, 'partner', _rows(quiz.id, [0, 1, 0, 1]))
    assert Answer.query.count() == 0


def test_duplicate_batch_leaves_no_rows(services):
    quiz = _create(services)
    services.answers.submit(quiz.id, 'partner', _rows(quiz.id, [0]))
    with pytest.raises(DuplicateAnswerError):
        services.answers.submit(quiz.id, 'partner', _rows(quiz.id, [0, 1, 0]))
    assert Answer.query.filter_by(quiz_id=quiz.id).count() == 1


@pytest.mark.parametrize('correct', range(0, 6))
def test_partner_score_matches_correct_count(services, correct):
    quiz = _create(services, [0, 0, 0, 0, 0])
    selections = [0] * correct + [1] * (5 - correct)
    outcome = services.answers.submit(quiz.id, 'partner', _rows(quiz.id, selections))
    assert outcome['completed'] is True
    assert outcome['score'] == (200 * correct + 5) // 10
    assert db.session.get(Quiz, quiz.id).partner_score == outcome['score']


def test_issue_and_resolve(services):
    quiz = _create(services)
    token = services.sharing.issue(quiz.id)
    assert services.sharing.resolve(token).id == quiz.id
    with pytest.raises(NotFoundError):
        services.sharing.resolve('unknown-token')


def test_results_read_stored_scores(services):
    quiz = _create(services, [0, 1])
    services.answers.submit(quiz.id, 'partner', _rows(quiz.id, [0, 0]))
    # Stored value is the single source of truth
    stored = db.session.get(Quiz, quiz.id)
    stored.partner_score = 42
    db.session.commit()
    assert services.results.get_results(quiz.id)['partner_score'] == 42


def test_question_bank_supplier(services):
    inserted = services.questions.add_bank_questions([
        {'language': 'en', 'type': 'yesno', 'question_text': 'Morning person?', 'options': ['Yes', 'No']},
        {'language': 'en', 'type': 'yesno', 'question_text': 'Likes rain?', 'options': ['Yes', 'No']},
        {'language': 'fr', 'type': 'yesno', 'question_text': 'Du matin ?', 'options': ['Oui', 'Non']},
    ])
    assert inserted == 3
    picked = services.questions.random_questions('en', 5)
    assert {q.question_text for q in picked} == {'Morning person?', 'Likes rain?'}


def test_questions_endpoint_validates_count(client, services):
    assert client.get('/api/questions?language=en').status_code == 400
    assert client.get('/api/questions?language=en&count=3').status_code == 400
    res = client.get('/api/questions?language=en&count=8')
    assert res.status_code == 200
    assert res.get_json() == []


def test_completion_stats(services):
    quiz = _create(services, [0, 1])
    _create(services, [0])
    services.answers.submit(quiz.id, 'partner', _rows(quiz.id, [0, 0]))
    stats = services.repository.completion_stats()
    assert stats == {
        'total_quizzes': 2,
        'total_questions_generated': 3,
        'total_completed_quizzes': 1,
        'average_score': 50,
    }


def test_question_bank_rejects_non_object_entries(services):
    with pytest.raises(ValidationError):
        services.questions.add_bank_questions([
            {'language': 'en', 'type': 'yesno', 'question_text': 'Tea?', 'options': ['Yes', 'No']},
            'Coffee?',
        ])
    assert services.questions.random_questions('en', 8) == []
